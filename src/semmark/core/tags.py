"""Semantic tag families: delimiters, compiled patterns, and block kind mapping"""

import re
from dataclasses import dataclass
from typing import Optional

from semmark.core.models import BlockKind


@dataclass(frozen=True)
class TagFamily:
    """A pair of open/close markers recognized in raw text.

    `pattern` captures the optional inline parameter as group `param` and the
    enclosed text as group `body`. Compiled patterns carry no match state, so
    every caller gets a fresh iterator from `finditer`.
    """
    name:        str
    open_marker: str                 # literal prefix counted by validation
    close_marker: str
    pattern:     re.Pattern[str]
    kind:        Optional[BlockKind]  # None: recognized but never emitted as a block


def _family(name: str, open_marker: str, close_marker: str, head: str, kind: Optional[BlockKind]) -> TagFamily:
    body = rf"(?P<body>.*?){re.escape(close_marker)}"
    return TagFamily(
        name=name,
        open_marker=open_marker,
        close_marker=close_marker,
        pattern=re.compile(head + body, re.DOTALL),
        kind=kind,
    )


CONSENSUS = _family(
    "consensus", "[!consensus:", "[!end-consensus]",
    r"\[!consensus:\s*(?P<param>\d+(?:\.\d+)?)%?\]", BlockKind.consensus,
)
DEBATE = _family(
    "debate", "[!debate-active:", "[!end-debate]",
    r"\[!debate-active:\s*(?P<param>[^\]]+)\]", BlockKind.debate,
)
SYNTHESIS = _family(
    "synthesis", "[!synthesis", "[!end-synthesis]",
    r"\[!synthesis\s+from:\s*(?P<param>[^\]]+)\]", BlockKind.synthesis,
)
WIKI_PRIMARY = _family(
    "wiki-primary", "[!wiki-primary]", "[!end-wiki-primary]",
    r"\[!wiki-primary\]", BlockKind.wiki_primary,
)
THREAD_ONLY = _family(
    "thread-only", "[!thread-only]", "[!end-thread-only]",
    r"\[!thread-only\]", BlockKind.thread_only,
)
# TODO: emit a block once a logic-error block kind and its view semantics exist.
LOGIC_ERROR = _family(
    "logic-error", "[!logic-error:", "[!end-logic-error]",
    r"\[!logic-error:\s*(?P<param>[^\]]+)\]", None,
)

# Validation and stripping order.
TAG_FAMILIES: tuple[TagFamily, ...] = (CONSENSUS, DEBATE, SYNTHESIS, WIKI_PRIMARY, THREAD_ONLY, LOGIC_ERROR)

# Tokenizer pass order; determines block order in ParsedContent.
PARSE_ORDER: tuple[TagFamily, ...] = tuple(f for f in TAG_FAMILIES if f.kind is not None)

# Every open or close marker, paired or not, keyed on the same prefixes validation counts.
MARKER_RE = re.compile('|'.join(
    [re.escape(f.open_marker) + ('' if f.open_marker.endswith(']') else r'[^\[\]]*\]') for f in TAG_FAMILIES]
    + [re.escape(f.close_marker) for f in TAG_FAMILIES]
))

# Consensus open markers as counted by validation, including out-of-range signs.
CONSENSUS_OPEN_RE = re.compile(r"\[!consensus:\s*(?P<param>-?\d+(?:\.\d+)?)%?\]")


def to_float(value: Optional[str]) -> float:
    """Parse a numeric tag parameter; anything unparseable counts as 0."""
    try:
        return float(value) if value is not None else 0.0
    except ValueError:
        return 0.0


def markup_tags(content: str) -> list[str]:
    """Return family names whose open marker appears in content, in family order."""
    return [f.name for f in TAG_FAMILIES if f.open_marker in content]
