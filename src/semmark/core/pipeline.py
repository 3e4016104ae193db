"""Pipeline step functions: discover, render, and validate markup documents"""

from pathlib import Path

import structlog

from semmark.core.document import MD_EXTENSIONS, parse_document, render_document
from semmark.core.models import ValidationResult, ViewMode
from semmark.core.validate import validate_markup


log = structlog.get_logger()


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


def run_render(
    path: str,
    mode: ViewMode | str,
    output_dir: Path,
    output_format: str = 'md',
    max_nesting: int = 2,
    decorate: bool = True,
    ) -> list[tuple[Path, Path]]:
    """Render each document under path into output_dir. Returns (source, output) pairs.

    md writes `<slug>.<mode>.md` with the view rendering; json writes
    `<slug>.json` with the full parsed document. Two sources with the same
    slug raise instead of overwriting each other.
    """
    mode = ViewMode(mode)
    output_dir.mkdir(parents=True, exist_ok=True)
    results = []
    written: dict[Path, Path] = {}
    for p in discover_files(Path(path)):
        try:
            doc = parse_document(p, max_nesting)
            if output_format == 'json':
                out_file = output_dir / f"{doc.slug}.json"
                text = doc.model_dump_json(indent=2)
            else:
                out_file = output_dir / f"{doc.slug}.{mode.value}.md"
                text = render_document(doc, mode, decorate)
            # Slugs ignore directories, so two sources may claim one output file.
            if out_file in written:
                raise ValueError(f"duplicate slug '{doc.slug}', {written[out_file]} already renders to {out_file}")
            out_file.write_text(text, encoding='utf-8')
        except Exception as e:
            raise RuntimeError(f"Failed to render {p}: {e}") from e
        log.info("render_written", source=str(p), output=str(out_file), view=mode.value)
        written[out_file] = p
        results.append((p, out_file))
    return results


def run_validate(path: str) -> list[tuple[Path, ValidationResult]]:
    """Validate the raw markup of each document under path (frontmatter included)."""
    results = []
    for p in discover_files(Path(path)):
        try:
            result = validate_markup(p.read_text(encoding='utf-8'))
        except Exception as e:
            raise RuntimeError(f"Failed to validate {p}: {e}") from e
        if not result.is_valid:
            log.warning("markup_invalid", source=str(p), errors=len(result.errors))
        results.append((p, result))
    return results
