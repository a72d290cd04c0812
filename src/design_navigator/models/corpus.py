"""Pydantic models for the semantic index and the brand corpus it is built from."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from design_navigator.models.components import ComponentRecord

IndexCategory = Literal[
    "philosophy",
    "platform_identity",
    "anchor",
    "pattern",
    "reference",
    "component",
    "fingerprint",
]


class SemanticIndexRecord(BaseModel):
    """A single embedded document in the semantic index."""

    category: IndexCategory
    """Kind of document."""

    source_id: str
    """Identifier unique within the category."""

    source_path: str | None = None
    """Corpus-relative path the content was read from."""

    title: str
    """Short human-readable title."""

    content: str
    """Text that was embedded."""

    embedding: list[float] = Field(default_factory=list)
    """Document-intent embedding of content. Empty when no provider ran."""

    metadata: dict[str, Any] = Field(default_factory=dict)
    """Category-specific extras (keywords, anchor weights, ...)."""

    platforms: list[str] = Field(default_factory=lambda: ["shared"])
    """Platforms the record applies to."""

    @property
    def key(self) -> str:
        """Unique key of the record within the index."""
        return f"{self.category}:{self.source_id}"


class SemanticIndexFile(BaseModel):
    """On-disk layout of the semantic index."""

    version: str = "1.0.0"
    model: str = ""
    dimensions: int = 0
    count: int = 0
    updated_at: str | None = None
    records: list[SemanticIndexRecord] = Field(default_factory=list)


class ComponentIndexFile(BaseModel):
    """On-disk layout of the extraction output."""

    version: str = "2.0.0"
    extracted_at: str | None = None
    count: int = 0
    components: list[ComponentRecord] = Field(default_factory=list)


class ComponentEmbeddingsFile(BaseModel):
    """On-disk layout of the embedded component records."""

    version: str = "2.0.0"
    model: str = ""
    dimensions: int = 0
    count: int = 0
    embedded_at: str | None = None
    embeddings: list[ComponentRecord] = Field(default_factory=list)


class PlatformFingerprint(BaseModel):
    """Identity embedding and metadata for one platform."""

    platform: str
    version: str | None = None
    identity_short: str = ""
    identity_extended: str = ""
    anchor_weights: dict[str, float] = Field(default_factory=dict)
    keywords: list[str] = Field(default_factory=list)
    embedding: list[float] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: SemanticIndexRecord) -> "PlatformFingerprint":
        """Build a fingerprint from a 'fingerprint' index record."""
        metadata = record.metadata
        identity = metadata.get("identity") or {}
        return cls(
            platform=record.source_id,
            version=metadata.get("version"),
            identity_short=identity.get("short") or "",
            identity_extended=identity.get("extended") or "",
            anchor_weights=metadata.get("anchor_weights") or {},
            keywords=metadata.get("keywords") or [],
            embedding=record.embedding,
        )


class PhysicalPattern(BaseModel):
    """A concrete UI pattern that expresses an anchor."""

    model_config = ConfigDict(extra="allow")

    component: str | None = None
    elements: list[str] = Field(default_factory=list)
    dialects: list[str] = Field(default_factory=list)


class AnchorTranslation(BaseModel):
    """How one anchor translates into design language and UI patterns."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    translations: list[str] = Field(default_factory=list)
    physical_patterns: dict[str, PhysicalPattern] = Field(
        default_factory=dict, alias="physicalPatterns"
    )


class TranslationTable(BaseModel):
    """Anchor name to translation lookup used for validation suggestions."""

    model_config = ConfigDict(extra="allow")

    anchors: dict[str, AnchorTranslation] = Field(default_factory=dict)
