"""Unit tests for core/pipeline.py"""

import json

import pytest

from semmark.core.pipeline import discover_files, run_render, run_validate


@pytest.fixture(name="docs_dir")
def docs_dir_fixture(tmp_path):
    root = tmp_path / "docs"
    (root / "sub").mkdir(parents=True)
    (root / "a.md").write_text(
        "# A\n\n[!consensus:60%]Settled.[!end-consensus]\n[!thread-only]chatter[!end-thread-only]\n",
        encoding="utf-8",
    )
    (root / "sub" / "b.mdx").write_text("# B\n\n[!thread-only]only chat\n", encoding="utf-8")
    (root / "notes.txt").write_text("ignored", encoding="utf-8")
    return root


@pytest.fixture(name="out_dir")
def out_dir_fixture(tmp_path):
    return tmp_path / "dist"


# --- discover_files ---

def test_discover_files_dir(docs_dir):
    """discover_files finds .md and .mdx files recursively, sorted."""
    assert [p.name for p in discover_files(docs_dir)] == ["a.md", "b.mdx"]


def test_discover_files_single(docs_dir):
    """A single markdown file is returned as-is; other files are skipped."""
    assert discover_files(docs_dir / "a.md") == [docs_dir / "a.md"]
    assert discover_files(docs_dir / "notes.txt") == []


# --- run_render ---

def test_run_render_md(docs_dir, out_dir):
    """md output writes one rendered file per document for the chosen view."""
    results = run_render(str(docs_dir), "wiki", out_dir)
    assert [out.name for _, out in results] == ["a.wiki.md", "b.wiki.md"]
    text = (out_dir / "a.wiki.md").read_text(encoding="utf-8")
    assert "**[Consensus: 60%]**" in text
    assert "chatter" not in text


def test_run_render_thread_keeps_thread_only(docs_dir, out_dir):
    """Thread view keeps thread-only content."""
    run_render(str(docs_dir / "a.md"), "thread", out_dir)
    assert "chatter" in (out_dir / "a.thread.md").read_text(encoding="utf-8")


def test_run_render_json(docs_dir, out_dir):
    """json output dumps the parsed document."""
    run_render(str(docs_dir / "a.md"), "thread", out_dir, output_format="json")
    data = json.loads((out_dir / "a.json").read_text(encoding="utf-8"))
    assert data["slug"] == "a"
    kinds = [b["kind"] for b in data["sections"][0]["parsed"]["blocks"]]
    assert kinds == ["consensus", "thread-only"]


def test_run_render_wraps_failures(tmp_path, out_dir):
    """Per-file failures surface as RuntimeError naming the file."""
    bad = tmp_path / "bad.md"
    bad.write_text("---\nkey: [unclosed\n---\nBody\n", encoding="utf-8")
    with pytest.raises(RuntimeError, match="Failed to render"):
        run_render(str(bad), "thread", out_dir)


def test_run_render_rejects_duplicate_slugs(tmp_path, out_dir):
    """Same-named files in different folders fail instead of overwriting each other."""
    root = tmp_path / "dup"
    for sub, body in (("one", "first"), ("two", "second")):
        (root / sub).mkdir(parents=True)
        (root / sub / "x.md").write_text(body, encoding="utf-8")
    with pytest.raises(RuntimeError, match="duplicate slug 'x'"):
        run_render(str(root), "thread", out_dir)
    assert (out_dir / "x.thread.md").read_text(encoding="utf-8") == "first\n"


# --- run_validate ---

def test_run_validate(docs_dir):
    """run_validate reports per-file results."""
    results = dict((p.name, r) for p, r in run_validate(str(docs_dir)))
    assert results["a.md"].is_valid
    assert not results["b.mdx"].is_valid


def test_run_validate_wraps_undecodable_files(tmp_path):
    """Non-UTF-8 files surface as RuntimeError naming the file."""
    bad = tmp_path / "bad.md"
    bad.write_bytes(b"\xff\xfe")
    with pytest.raises(RuntimeError, match="Failed to validate .*bad.md"):
        run_validate(str(bad))
