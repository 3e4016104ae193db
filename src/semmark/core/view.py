"""Thread and wiki projections of a block list"""

import math

from semmark.core.models import BlockKind, MarkupBlock, ViewMode


WIKI_PRIORITY: dict[BlockKind, int] = {
    BlockKind.consensus:    4,
    BlockKind.synthesis:    3,
    BlockKind.wiki_primary: 2,
    BlockKind.debate:       1,
    BlockKind.thread_only:  0,
}

WIKI_VISIBLE_KINDS = frozenset({BlockKind.wiki_primary, BlockKind.consensus, BlockKind.synthesis})


def render_for_view(blocks: list[MarkupBlock], mode: ViewMode | str) -> list[MarkupBlock]:
    """Return blocks for display: all of them for thread view; for wiki view,
    thread-only blocks dropped and the rest ordered by descending priority.
    The sort is stable, so ties keep tokenizer order."""
    if ViewMode(mode) == ViewMode.thread:
        return list(blocks)
    kept = [b for b in blocks if b.kind != BlockKind.thread_only]
    return sorted(kept, key=lambda b: -WIKI_PRIORITY[b.kind])


def is_wiki_visible(blocks: list[MarkupBlock]) -> bool:
    """True if any block would justify showing the section in wiki view."""
    return any(b.kind in WIKI_VISIBLE_KINDS for b in blocks)


def _percent(level: float) -> int:
    """Round a consensus fraction to a whole percentage, halves rounding up."""
    return math.floor(level * 100 + 0.5)


def _annotation(block: MarkupBlock) -> str | None:
    """Bold inline label shown above decorated blocks in flat wiki text."""
    attrs = block.attributes
    if block.kind == BlockKind.consensus:
        return f"**[Consensus: {_percent(attrs.consensus_level)}%]**"
    if block.kind == BlockKind.synthesis:
        return f"**[Synthesized from: {', '.join(attrs.sources)}]**"
    if block.kind == BlockKind.debate:
        return f"**[Active Debate: {attrs.topic}]**"
    return None


def render_text(blocks: list[MarkupBlock], mode: ViewMode | str, decorate: bool = True) -> str:
    """Render the view projection as flat text, blocks separated by a blank line.

    In wiki view (with decorate on) consensus, synthesis and debate blocks are
    prefixed with an annotation line; thread view is never decorated.
    """
    mode = ViewMode(mode)
    parts = []
    for block in render_for_view(blocks, mode):
        label = _annotation(block) if decorate and mode == ViewMode.wiki else None
        parts.append(f"{label}\n\n{block.content}" if label else block.content)
    return "\n\n".join(parts)
