"""Markdown documents: frontmatter, heading-delimited sections, and per-section markup"""

import hashlib
import re
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml
from markdown_it import MarkdownIt

from semmark.core.metadata import extract_metadata
from semmark.core.models import DocumentSection, ParsedDocument, ViewMode
from semmark.core.parse import parse_content
from semmark.core.tags import markup_tags
from semmark.core.validate import validate_markup
from semmark.core.view import is_wiki_visible, render_text


log = structlog.get_logger()

FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
MD_EXTENSIONS = {'.md', '.mdx'}
# Line breaks as markdown-it counts them: \n, \r\n, or a lone \r.
LINE_RE = re.compile(r'(?<=\n)|(?<=\r)(?!\n)')


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = re.sub(r'[^\w\s-]', '', text.lower())
    return re.sub(r'[\s_-]+', '-', text).strip('-') or 'doc'


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML frontmatter: {e}") from e
    if not isinstance(fm, dict):
        raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
    return fm, text[m.end():]


def _heading_level(token) -> int | None:
    """Heading level (1-6) of a top-level heading_open token, else None."""
    if token.type == 'heading_open' and token.level == 0 and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def split_sections(markdown: str, max_nesting: int = 2) -> list[tuple[Optional[str], str]]:
    """Split markdown into (heading, body) pairs at headings of level <= max_nesting.

    Uses markdown-it line maps, so heading-like lines inside code fences do
    not split. Text before the first heading gets a None heading.
    """
    tokens = MarkdownIt('gfm-like', options_update={'linkify': False}).parse(markdown)
    lines = LINE_RE.split(markdown)
    breaks = [
        tok.map for tok in tokens
        if tok.map and (level := _heading_level(tok)) is not None and level <= max_nesting
    ]
    if not breaks:
        return [(None, markdown)]

    sections: list[tuple[Optional[str], str]] = []
    preamble = ''.join(lines[:breaks[0][0]])
    if preamble.strip():
        sections.append((None, preamble))
    for i, (start, end) in enumerate(breaks):
        stop = breaks[i + 1][0] if i + 1 < len(breaks) else len(lines)
        sections.append((''.join(lines[start:end]).strip(), ''.join(lines[end:stop])))
    return sections


def parse_section(position: int, heading: Optional[str], body: str) -> DocumentSection:
    """Parse one section body and attach its view metadata and validation."""
    parsed = parse_content(body)
    return DocumentSection(
        position=position,
        heading=heading,
        body=body,
        hash=hashlib.sha256(body.encode('utf-8')).hexdigest(),
        parsed=parsed,
        view=extract_metadata(parsed.blocks),
        markup_tags=markup_tags(body),
        validation=validate_markup(body),
    )


def parse_document_text(text: str, slug: str, path: Optional[str] = None, max_nesting: int = 2) -> ParsedDocument:
    """Parse document text into sections. A frontmatter slug overrides `slug`."""
    frontmatter, body = _strip_frontmatter(text)
    sections = [
        parse_section(position, heading, section_body)
        for position, (heading, section_body) in enumerate(split_sections(body, max_nesting))
    ]
    doc = ParsedDocument(
        slug=frontmatter.get('slug') or slug,
        path=path,
        frontmatter=frontmatter,
        sections=sections,
    )
    log.debug("document_parsed", slug=doc.slug, sections=len(sections))
    return doc


def parse_document(path: Path, max_nesting: int = 2) -> ParsedDocument:
    """Read and parse a single markdown file."""
    text = path.read_text(encoding='utf-8')
    return parse_document_text(text, slugify(path.stem), str(path), max_nesting)


def render_document(doc: ParsedDocument, mode: ViewMode | str, decorate: bool = True) -> str:
    """Render every section for the given view.

    In wiki view a section with no wiki-visible block is omitted entirely.
    Sections with neither heading nor body text are always omitted.
    """
    mode = ViewMode(mode)
    parts = []
    for section in doc.sections:
        blocks = section.parsed.blocks
        if mode == ViewMode.wiki and not is_wiki_visible(blocks):
            log.debug("section_hidden", slug=doc.slug, position=section.position)
            continue
        text = render_text(blocks, mode, decorate)
        chunk = [s for s in (section.heading, text) if s and s.strip()]
        if chunk:
            parts.append("\n\n".join(chunk))
    return "\n\n".join(parts) + "\n" if parts else ""
