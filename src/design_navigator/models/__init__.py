"""Data models for design_navigator."""

from design_navigator.models.components import (
    AXES,
    ComponentGraph,
    ComponentRecord,
    GraphEdge,
    GraphNode,
    SemanticPosition,
)
from design_navigator.models.corpus import (
    AnchorTranslation,
    ComponentEmbeddingsFile,
    ComponentIndexFile,
    PhysicalPattern,
    PlatformFingerprint,
    SemanticIndexFile,
    SemanticIndexRecord,
    TranslationTable,
)
from design_navigator.models.design_space import (
    AxisPole,
    DesignSpace,
    DesignSpaceAxis,
    PlatformDefinition,
)
from design_navigator.models.results import (
    AnchorActivation,
    AnchorActivationResult,
    ComponentMatch,
    CorpusHit,
    CorpusSearchResult,
    DriftResult,
    ExplorationResult,
    IndexStats,
    InterpolationResult,
    InterpolationStep,
    MatchResult,
    PlatformDetection,
    PlatformProjection,
    PlatformScore,
    PositionSearchResult,
    ProjectionResult,
    ValidationReport,
)

__all__ = [
    "AXES",
    "AnchorActivation",
    "AnchorActivationResult",
    "AnchorTranslation",
    "AxisPole",
    "ComponentEmbeddingsFile",
    "ComponentGraph",
    "ComponentIndexFile",
    "ComponentMatch",
    "ComponentRecord",
    "CorpusHit",
    "CorpusSearchResult",
    "DesignSpace",
    "DesignSpaceAxis",
    "DriftResult",
    "ExplorationResult",
    "GraphEdge",
    "GraphNode",
    "IndexStats",
    "InterpolationResult",
    "InterpolationStep",
    "MatchResult",
    "PhysicalPattern",
    "PlatformDefinition",
    "PlatformDetection",
    "PlatformFingerprint",
    "PlatformProjection",
    "PlatformScore",
    "PositionSearchResult",
    "ProjectionResult",
    "SemanticIndexFile",
    "SemanticIndexRecord",
    "SemanticPosition",
    "TranslationTable",
    "ValidationReport",
]
