"""Presentation metadata derived from a bare block list"""

from semmark.core.models import BlockKind, MarkupBlock, ViewMetadata


def extract_metadata(blocks: list[MarkupBlock]) -> ViewMetadata:
    """Recompute view flags from blocks, independent of parse-time metadata.

    Consensus level and synthesis sources are last-seen; debate topics
    accumulate in block order.
    """
    meta = ViewMetadata()
    for b in blocks:
        if b.kind == BlockKind.consensus:
            meta.has_consensus = True
            meta.consensus_level = b.attributes.consensus_level
        elif b.kind == BlockKind.debate:
            meta.has_active_debate = True
            meta.debate_topics = (meta.debate_topics or []) + [b.attributes.topic]
        elif b.kind == BlockKind.synthesis:
            meta.has_synthesis = True
            meta.synthesis_source = list(b.attributes.sources)
        elif b.kind == BlockKind.wiki_primary:
            meta.wiki_ready = True
    return meta
