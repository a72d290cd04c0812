"""Tests for the component relationship graph builder."""

import pytest

from design_navigator.extract.graph import build_component_graph, imports_component


@pytest.fixture
def xyz_components(component_factory):
    """X imports Y, Y and Z share breathing, X and Z are siblings."""
    x = component_factory(
        "X", path="components/panels/X.tsx", imports=["./Y"], tokens=["--void"]
    )
    y = component_factory(
        "Y", path="components/cards/Y.tsx", patterns=["breathing", "scanlines"]
    )
    z = component_factory("Z", path="components/panels/Z.tsx", patterns=["breathing"])
    return [x, y, z]


class TestImportsComponent:
    """Tests for import path resolution."""

    def test_last_segment_matches_name(self, component_factory):
        """Test relative and aliased imports resolve by last segment."""
        card = component_factory("Card")
        assert imports_component("./Card", card)
        assert imports_component("@/components/ui/Card", card)

    def test_extension_is_stripped(self, component_factory):
        """Test that a file extension on the import is ignored."""
        assert imports_component("../Card.tsx", component_factory("Card"))

    def test_substring_does_not_match(self, component_factory):
        """Test that a longer name containing the component name does not match."""
        assert not imports_component("./CardGrid", component_factory("Card"))


class TestBuildComponentGraph:
    """Tests for build_component_graph."""

    def test_xyz_edges(self, xyz_components):
        """Test the imports, shares and sibling edges of the X/Y/Z scenario."""
        graph = build_component_graph(xyz_components)
        edges = [(e.source, e.target, e.relationship) for e in graph.edges]

        assert edges == [
            ("atlas:X", "atlas:Y", "imports"),
            ("atlas:X", "atlas:Z", "sibling"),
            ("atlas:Y", "atlas:Z", "shares-breathing"),
        ]

    def test_xyz_related_components(self, xyz_components):
        """Test that related components are backfilled from the graph."""
        build_component_graph(xyz_components)
        x, y, z = xyz_components
        assert set(x.related_components) == {"atlas:Y", "atlas:Z"}
        assert set(y.related_components) == {"atlas:X", "atlas:Z"}
        assert set(z.related_components) == {"atlas:X", "atlas:Y"}

    def test_nodes_carry_platform_and_type(self, xyz_components):
        """Test one node per component."""
        graph = build_component_graph(xyz_components)
        assert [n.id for n in graph.nodes] == ["atlas:X", "atlas:Y", "atlas:Z"]
        assert all(n.platform == "atlas" and n.type == "tsx" for n in graph.nodes)

    def test_siblings_need_same_repository(self, component_factory):
        """Test that the same relative directory in two repos is not a sibling."""
        a = component_factory("A", repo="one")
        b = component_factory("B", repo="two")
        graph = build_component_graph([a, b])
        assert graph.edges == []

    def test_siblings_need_same_platform(self, component_factory):
        """Test that components of different platforms are not siblings."""
        a = component_factory("A")
        b = component_factory("B", platform="ledger")
        assert build_component_graph([a, b]).edges == []

    def test_shares_edge_is_deduplicated(self, component_factory):
        """Test one shares edge per pair, named after the first shared pattern."""
        a = component_factory(
            "A", path="one/A.tsx", patterns=["scanlines", "breathing"]
        )
        b = component_factory(
            "B", path="two/B.tsx", patterns=["breathing", "scanlines"]
        )
        graph = build_component_graph([a, b])
        assert [e.relationship for e in graph.edges] == ["shares-scanlines"]

    def test_mutual_imports_are_both_kept(self, component_factory):
        """Test that import edges are directed."""
        a = component_factory("A", path="one/A.tsx", imports=["./B"])
        b = component_factory("B", path="two/B.tsx", imports=["./A"])
        graph = build_component_graph([a, b])
        assert [(e.source, e.target) for e in graph.edges] == [
            ("atlas:A", "atlas:B"),
            ("atlas:B", "atlas:A"),
        ]

    def test_networkx_view_merges_relationships(self, xyz_components):
        """Test the undirected adjacency view."""
        graph = build_component_graph(xyz_components).to_networkx()
        assert graph.number_of_nodes() == 3
        assert graph.edges["atlas:X", "atlas:Y"]["relationships"] == ["imports"]

    def test_empty_input(self):
        """Test that no components give an empty graph."""
        graph = build_component_graph([])
        assert graph.nodes == []
        assert graph.edges == []
