"""Pydantic models for extracted components and their relationship graph."""

from typing import Literal

import networkx as nx
from pydantic import BaseModel, Field, field_validator

Platform = Literal["atlas", "ledger", "astrolabe", "marketing", "shared"]
FileType = Literal["tsx", "html", "md", "css"]

AXES: tuple[str, ...] = (
    "terminal_organic",
    "minimal_dense",
    "cool_warm",
    "static_animated",
)
"""Design axes in their canonical order."""


def clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    """Clamp a value to the closed interval [low, high]."""
    return max(low, min(high, value))


class SemanticPosition(BaseModel):
    """Coordinates of a component on the four design axes."""

    terminal_organic: float = 0.0
    """Terminal (-1) to organic (+1)."""

    minimal_dense: float = 0.0
    """Minimal (-1) to dense (+1)."""

    cool_warm: float = 0.0
    """Cool (-1) to warm (+1)."""

    static_animated: float = 0.0
    """Static (-1) to animated (+1)."""

    @field_validator(*AXES)
    @classmethod
    def _clamp_axis(cls, value: float) -> float:
        return clamp(value)

    def as_vector(self) -> list[float]:
        """Return the axis values in canonical order."""
        return [getattr(self, axis) for axis in AXES]

    @classmethod
    def from_vector(cls, values: list[float]) -> "SemanticPosition":
        """Build a position from values in canonical axis order."""
        return cls(**dict(zip(AXES, values)))


class ComponentRecord(BaseModel):
    """A design component extracted from a source repository."""

    id: str
    """Unique identifier in the form '<repo>:<name>'."""

    name: str
    """Display name, the file stem (e.g. 'EntityCard')."""

    path: str
    """Path of the source file relative to the repository root."""

    repo: str
    """Name of the repository the component came from."""

    platform: Platform
    """Platform the component belongs to."""

    description: str
    """Description from the header comment or a generated default."""

    visual_characteristics: list[str] = Field(default_factory=list)
    """Human-readable phrases for every detected visual pattern."""

    implementation: str = ""
    """Design rules from the header comment, joined with '; '."""

    imports: list[str] = Field(default_factory=list)
    """Module paths imported by the source file."""

    tokens: list[str] = Field(default_factory=list)
    """Design tokens referenced by the component."""

    patterns: list[str] = Field(default_factory=list)
    """Visual pattern identifiers detected in the component."""

    anchors: list[str] = Field(default_factory=list)
    """Semantic anchors declared in the header comment."""

    related_components: list[str] = Field(default_factory=list)
    """Ids of components connected to this one in the graph."""

    semantic_position: SemanticPosition = Field(default_factory=SemanticPosition)
    """Heuristic position in the design space."""

    embedding_text: str = ""
    """Natural-language summary sent to the embedding provider."""

    file_type: FileType
    """Source file extension."""

    line_count: int = 0
    """Number of lines in the source file."""

    last_modified: str | None = None
    """ISO-8601 modification time of the source file."""

    embedding: list[float] = Field(default_factory=list)
    """Embedding of embedding_text. Empty until ingestion embeds it."""


class GraphNode(BaseModel):
    """A node in the component graph."""

    id: str
    platform: Platform
    type: str = "component"


class GraphEdge(BaseModel):
    """An edge in the component graph."""

    source: str
    target: str
    relationship: str
    """'imports', 'sibling' or 'shares-<pattern>'."""


class ComponentGraph(BaseModel):
    """Relationships between extracted components."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)

    def to_networkx(self) -> nx.Graph:
        """Build an undirected adjacency view of the graph.

        Edge direction is dropped; parallel relationships between the same pair
        are merged into one edge whose 'relationships' attribute lists them all.
        """
        graph = nx.Graph()
        for node in self.nodes:
            graph.add_node(node.id, platform=node.platform, type=node.type)
        for edge in self.edges:
            if graph.has_edge(edge.source, edge.target):
                graph.edges[edge.source, edge.target]["relationships"].append(
                    edge.relationship
                )
            else:
                graph.add_edge(
                    edge.source, edge.target, relationships=[edge.relationship]
                )
        return graph
