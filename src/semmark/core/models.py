"""Data models for parsed markup blocks, metadata, and documents"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, computed_field, model_validator


class BlockKind(str, Enum):
    """Block kinds emitted by the tokenizer"""
    consensus = "consensus"
    debate = "debate"
    synthesis = "synthesis"
    wiki_primary = "wiki-primary"
    thread_only = "thread-only"


class ViewMode(str, Enum):
    thread = "thread"
    wiki = "wiki"


class ConsensusAttributes(BaseModel):
    kind: Literal["consensus"] = "consensus"
    consensus_level: float          # normalized fraction; not clamped to [0, 1]


class DebateAttributes(BaseModel):
    kind: Literal["debate"] = "debate"
    topic: str
    status: Literal["active"] = "active"


class SynthesisAttributes(BaseModel):
    kind: Literal["synthesis"] = "synthesis"
    sources: list[str] = []


class WikiPrimaryAttributes(BaseModel):
    kind: Literal["wiki-primary"] = "wiki-primary"
    priority: Literal["high", "default"] = "high"   # "default" marks the untagged fallback block


class ThreadOnlyAttributes(BaseModel):
    kind: Literal["thread-only"] = "thread-only"
    visibility: Literal["thread"] = "thread"


BlockAttributes = Annotated[
    Union[
        ConsensusAttributes,
        DebateAttributes,
        SynthesisAttributes,
        WikiPrimaryAttributes,
        ThreadOnlyAttributes,
    ],
    Field(discriminator="kind"),
]


class MarkupBlock(BaseModel):
    """A typed span of content extracted from a matched tag pair."""
    kind: BlockKind
    content: str
    attributes: BlockAttributes
    start_position: int             # offset of the opening delimiter in the source
    end_position: int               # offset just past the closing delimiter

    @model_validator(mode="after")
    def _attributes_match_kind(self) -> "MarkupBlock":
        if self.attributes.kind != self.kind.value:
            raise ValueError(
                f"{self.attributes.kind} attributes attached to a {self.kind.value} block"
            )
        return self


class ContentMetadata(BaseModel):
    """Document-level metadata aggregated while tokenizing."""
    wiki_visibility: bool = True
    consensus_level: Optional[float] = None         # max seen
    debate_status: Optional[Literal["active"]] = None
    synthesis_source: Optional[list[str]] = None    # last synthesis block wins


class ParsedContent(BaseModel):
    blocks: list[MarkupBlock]       # grouped by tag family in pass order
    plain_text: str
    metadata: ContentMetadata


class ViewMetadata(BaseModel):
    """Presentation flags recomputed from a bare block list."""
    has_consensus: bool = False
    has_active_debate: bool = False
    has_synthesis: bool = False
    wiki_ready: bool = False
    consensus_level: Optional[float] = None         # last seen
    debate_topics: Optional[list[str]] = None
    synthesis_source: Optional[list[str]] = None    # last seen


class ValidationResult(BaseModel):
    errors: list[str] = []

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.errors


class DocumentSection(BaseModel):
    """One heading-delimited section of a document and its parsed markup."""
    position: int
    heading: Optional[str] = None   # raw heading line; None for text before the first heading
    body: str
    hash: str
    parsed: ParsedContent
    view: ViewMetadata
    markup_tags: list[str] = []
    validation: ValidationResult


class ParsedDocument(BaseModel):
    slug: str
    path: Optional[str] = None
    frontmatter: dict[str, Any] = {}
    sections: list[DocumentSection]
