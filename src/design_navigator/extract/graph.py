"""Build the component relationship graph.

Compares every pair of extracted components and records three kinds of edges:
directed ``imports`` edges, and undirected ``shares-<pattern>`` and ``sibling``
edges that appear at most once per pair. The pairwise scan is quadratic in the
number of components.
"""

import logging
from pathlib import PurePosixPath

from design_navigator.models import (
    ComponentGraph,
    ComponentRecord,
    GraphEdge,
    GraphNode,
)

logger = logging.getLogger(__name__)


def _import_target_name(import_path: str) -> str:
    """Return the module name an import path points at (last segment, no suffix)."""
    last_segment = import_path.rstrip("/").rsplit("/", 1)[-1]
    if "." not in last_segment:
        return last_segment
    return PurePosixPath(last_segment).stem


def imports_component(import_path: str, other: ComponentRecord) -> bool:
    """Return True if an import path refers to the given component."""
    return _import_target_name(import_path) == other.name


def build_component_graph(components: list[ComponentRecord]) -> ComponentGraph:
    """Build the graph and backfill each record's related components.

    Args:
        components: Extracted records. Their related_components are replaced.

    Returns:
        The component graph.
    """
    graph = ComponentGraph(
        nodes=[
            GraphNode(id=c.id, platform=c.platform, type=c.file_type)
            for c in components
        ]
    )
    seen_imports: set[tuple[str, str]] = set()
    seen_shares: set[frozenset[str]] = set()
    seen_siblings: set[frozenset[str]] = set()

    for component in components:
        directory = PurePosixPath(component.path).parent

        for import_path in component.imports:
            for other in components:
                if other.id == component.id:
                    continue
                edge_key = (component.id, other.id)
                if edge_key in seen_imports:
                    continue
                if not imports_component(import_path, other):
                    continue
                seen_imports.add(edge_key)
                graph.edges.append(
                    GraphEdge(
                        source=component.id,
                        target=other.id,
                        relationship="imports",
                    )
                )

        for other in components:
            if other.id == component.id:
                continue
            pair = frozenset((component.id, other.id))

            if pair not in seen_shares:
                shared = [p for p in component.patterns if p in other.patterns]
                if shared:
                    seen_shares.add(pair)
                    graph.edges.append(
                        GraphEdge(
                            source=component.id,
                            target=other.id,
                            relationship=f"shares-{shared[0]}",
                        )
                    )

            if (
                pair not in seen_siblings
                and other.platform == component.platform
                and PurePosixPath(other.path).parent == directory
                and other.repo == component.repo
            ):
                seen_siblings.add(pair)
                graph.edges.append(
                    GraphEdge(
                        source=component.id,
                        target=other.id,
                        relationship="sibling",
                    )
                )

    adjacency = graph.to_networkx()
    for component in components:
        component.related_components = list(adjacency.neighbors(component.id))

    logger.info(
        f"Built graph with {len(graph.nodes)} nodes and {len(graph.edges)} edges"
    )
    return graph
