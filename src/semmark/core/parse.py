"""Tokenize raw text into typed markup blocks, plain text, and aggregate metadata"""

import re
from typing import Callable

from semmark.core.models import (
    BlockKind,
    ConsensusAttributes,
    ContentMetadata,
    DebateAttributes,
    MarkupBlock,
    ParsedContent,
    SynthesisAttributes,
    ThreadOnlyAttributes,
    WikiPrimaryAttributes,
)
from semmark.core.tags import MARKER_RE, PARSE_ORDER, to_float


Span = tuple[int, int]


def _sources(param: str) -> list[str]:
    """Split a synthesis source list on commas, dropping empty entries."""
    return [s.strip() for s in param.split(',') if s.strip()]


ATTRIBUTE_BUILDERS: dict[BlockKind, Callable[[re.Match], object]] = {
    BlockKind.consensus:    lambda m: ConsensusAttributes(consensus_level=to_float(m.group('param')) / 100),
    BlockKind.debate:       lambda m: DebateAttributes(topic=m.group('param').strip()),
    BlockKind.synthesis:    lambda m: SynthesisAttributes(sources=_sources(m.group('param'))),
    BlockKind.wiki_primary: lambda m: WikiPrimaryAttributes(),
    BlockKind.thread_only:  lambda m: ThreadOnlyAttributes(),
}


def _inner_span(m: re.Match) -> Span:
    """Return the body span of a match with surrounding whitespace excluded."""
    body = m.group('body')
    start, end = m.span('body')
    if not body.strip():
        return start, start
    return start + len(body) - len(body.lstrip()), end - (len(body) - len(body.rstrip()))


def splice(text: str, lo: int, hi: int, cuts: list[Span]) -> str:
    """Copy text[lo:hi], skipping every cut span (cuts sorted by start; may overlap)."""
    out = []
    pos = lo
    for a, b in cuts:
        if b <= pos:
            continue
        if a >= hi:
            break
        if a > pos:
            out.append(text[pos:a])
        pos = max(pos, b)
    if pos < hi:
        out.append(text[pos:hi])
    return ''.join(out)


def aggregate_metadata(blocks: list[MarkupBlock]) -> ContentMetadata:
    """Fold a tokenizer block list into ContentMetadata."""
    meta = ContentMetadata()
    kinds = {b.kind for b in blocks}
    for b in blocks:
        attrs = b.attributes
        if b.kind == BlockKind.consensus:
            if meta.consensus_level is None or attrs.consensus_level > meta.consensus_level:
                meta.consensus_level = attrs.consensus_level
        elif b.kind == BlockKind.debate:
            meta.debate_status = 'active'
        elif b.kind == BlockKind.synthesis:
            meta.synthesis_source = list(attrs.sources)
    # Thread-only content hides a section unless primary or consensus content offsets it.
    if BlockKind.thread_only in kinds:
        meta.wiki_visibility = bool(kinds & {BlockKind.wiki_primary, BlockKind.consensus})
    return meta


def parse_content(content: str) -> ParsedContent:
    """Extract typed blocks, a delimiter-free plain text copy, and metadata.

    Families are scanned independently in PARSE_ORDER, so blocks are grouped
    by family rather than sorted by position. Text with no recognized tags
    yields a single wiki-primary block holding the whole trimmed input.
    Malformed markup never raises. Unmatched markers stay in plain_text but
    are removed from the content of matched blocks.
    """
    found: list[tuple[BlockKind, re.Match, Span]] = []
    cuts: list[Span] = []
    for family in PARSE_ORDER:
        for m in family.pattern.finditer(content):
            inner = _inner_span(m)
            found.append((family.kind, m, inner))
            cuts.append((m.start(), inner[0]))
            cuts.append((inner[1], m.end()))
    cuts.sort()
    # Block content also drops logic-error delimiters and markers left unpaired.
    content_cuts = sorted(cuts + [m.span() for m in MARKER_RE.finditer(content)])

    blocks = [
        MarkupBlock(
            kind=kind,
            content=splice(content, inner[0], inner[1], content_cuts).strip(),
            attributes=ATTRIBUTE_BUILDERS[kind](m),
            start_position=m.start(),
            end_position=m.end(),
        )
        for kind, m, inner in found
    ]

    if not blocks:
        blocks.append(MarkupBlock(
            kind=BlockKind.wiki_primary,
            content=content.strip(),
            attributes=WikiPrimaryAttributes(priority='default'),
            start_position=0,
            end_position=len(content),
        ))

    return ParsedContent(
        blocks=blocks,
        plain_text=splice(content, 0, len(content), cuts).strip(),
        metadata=aggregate_metadata(blocks),
    )
