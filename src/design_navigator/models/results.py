"""Response models returned by the navigator and validation engines."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from design_navigator.models.components import SemanticPosition

ScoringMode = Literal["semantic", "local"]
ValidationStatus = Literal["approved", "expansion", "edge_case", "violation"]


class ComponentMatch(BaseModel):
    """A component scored against a query, another component or a position."""

    id: str
    name: str
    repo: str
    platform: str
    path: str
    similarity: float
    """Cosine, keyword or position similarity depending on the operation."""

    tokens: list[str] = Field(default_factory=list)
    patterns: list[str] = Field(default_factory=list)
    semantic_position: SemanticPosition = Field(default_factory=SemanticPosition)


class MatchResult(BaseModel):
    """Components similar to a free-text reference."""

    query: str
    mode: ScoringMode
    platform: str | None = None
    matches: list[ComponentMatch] = Field(default_factory=list)
    suggested_tokens: list[str] = Field(default_factory=list)
    """Tokens of the matches ranked by summed similarity."""

    suggested_patterns: list[str] = Field(default_factory=list)
    """Patterns of the matches ranked by summed similarity."""

    implementation_path: list[str] = Field(default_factory=list)
    """Ordered, human-readable build steps."""

    processing_time_ms: int | None = None


class PositionSearchResult(BaseModel):
    """Components nearest to an explicit design-space position."""

    position: SemanticPosition
    matches: list[ComponentMatch] = Field(default_factory=list)
    processing_time_ms: int | None = None


class PlatformProjection(BaseModel):
    """How a reference could be expressed on one platform."""

    platform: str
    description: str
    tokens: list[str] = Field(default_factory=list)
    patterns: list[str] = Field(default_factory=list)
    similar_components: list[str] = Field(default_factory=list)
    position_adjustments: SemanticPosition = Field(default_factory=SemanticPosition)


class ProjectionResult(BaseModel):
    """A reference projected onto several platforms."""

    reference: str
    mode: ScoringMode
    base_matches: list[ComponentMatch] = Field(default_factory=list)
    projections: list[PlatformProjection] = Field(default_factory=list)
    processing_time_ms: int | None = None


class InterpolationStep(BaseModel):
    """One point on the path between two components."""

    ratio: float
    position: SemanticPosition
    tokens: list[str] = Field(default_factory=list)
    patterns: list[str] = Field(default_factory=list)
    description: str


class InterpolationResult(BaseModel):
    """Evenly spaced blends between two components."""

    component_a: str
    component_b: str
    steps: list[InterpolationStep] = Field(default_factory=list)
    processing_time_ms: int | None = None


class ExplorationResult(BaseModel):
    """What lives near a coordinate chosen with the axis sliders."""

    position: SemanticPosition
    nearest_platform: str | None = None
    platform_distance: float | None = None
    components: list[ComponentMatch] = Field(default_factory=list)
    suggested_tokens: list[str] = Field(default_factory=list)
    suggested_patterns: list[str] = Field(default_factory=list)
    processing_time_ms: int | None = None


class AnchorActivation(BaseModel):
    """Activation strength of one anchor."""

    anchor: str
    score: float


class AnchorActivationResult(BaseModel):
    """Anchors ranked by how strongly a request activates them."""

    request: str
    mode: ScoringMode
    activations: list[AnchorActivation] = Field(default_factory=list)
    processing_time_ms: int | None = None


class PlatformScore(BaseModel):
    """Similarity of a request to one platform fingerprint."""

    platform: str
    score: float


class PlatformDetection(BaseModel):
    """Best-fitting platform for a request."""

    request: str
    mode: ScoringMode
    platform: str
    score: float
    runner_up: PlatformScore | None = None
    all_scores: list[PlatformScore] = Field(default_factory=list)
    processing_time_ms: int | None = None


class DriftResult(BaseModel):
    """Distance of a request from a platform's identity."""

    request: str
    platform: str
    mode: ScoringMode
    drift_score: float
    alignment_score: float
    status: ValidationStatus
    interpretation: str
    processing_time_ms: int | None = None


class ValidationReport(BaseModel):
    """Full validation of a design request."""

    request: str
    mode: ScoringMode
    platform: str
    platform_confidence: float
    drift_score: float
    status: ValidationStatus
    interpretation: str
    activated_anchors: list[AnchorActivation] = Field(default_factory=list)
    suggested_patterns: list[str] = Field(default_factory=list)
    suggested_components: list[str] = Field(default_factory=list)
    violated_antipatterns: list[str] = Field(default_factory=list)
    processing_time_ms: int | None = None


class CorpusHit(BaseModel):
    """A semantic index record returned by corpus search."""

    category: str
    source_id: str
    title: str
    content: str
    similarity: float
    metadata: dict[str, Any] = Field(default_factory=dict)


class CorpusSearchResult(BaseModel):
    """Index records similar to a query."""

    query: str
    mode: ScoringMode
    category: str | None = None
    results: list[CorpusHit] = Field(default_factory=list)
    processing_time_ms: int | None = None


class IndexStats(BaseModel):
    """Summary of what the loaded index contains."""

    mode: ScoringMode
    record_count: int
    categories: dict[str, int] = Field(default_factory=dict)
    component_count: int
    fingerprint_count: int
    platforms: dict[str, int] = Field(default_factory=dict)
    """Component count per platform."""
