"""Tests for the design space navigator engine."""

import math

import pytest

from design_navigator.exceptions import ComponentNotFoundError
from design_navigator.models import SemanticPosition
from design_navigator.search.index import SemanticIndex
from design_navigator.search.navigator import (
    NavigatorEngine,
    component_similarity,
    platform_description,
    rank_by_weight,
)
from design_navigator.search.scoring import KeywordScorer, SemanticScorer


@pytest.fixture
def navigator(sample_index, mock_provider) -> NavigatorEngine:
    """Navigator whose queries embed to [1, 0, 0]."""
    return NavigatorEngine(sample_index, SemanticScorer(mock_provider))


class TestHelpers:
    """Tests for the module-level helpers."""

    def test_rank_by_weight_keeps_first_seen_on_ties(self):
        """Test descending weight with stable ties."""
        weights = {"a": 1.0, "b": 2.0, "c": 1.0}
        assert rank_by_weight(weights, 5) == ["b", "a", "c"]
        assert rank_by_weight(weights, 1) == ["b"]

    def test_component_similarity_falls_back_to_jaccard(self, component_factory):
        """Test feature overlap when a component has no embedding."""
        a = component_factory("A", tokens=["--void", "--dawn"], patterns=["breathing"])
        b = component_factory("B", tokens=["--void"], patterns=["breathing"])
        assert component_similarity(a, b) == pytest.approx(2 / 3)
        assert component_similarity(component_factory("C"), component_factory("D")) == 0

    def test_platform_description(self):
        """Test the pattern-dependent platform descriptions."""
        assert "Corner brackets" in platform_description("atlas", ["cornerBrackets"])
        assert "Corner brackets" not in platform_description("atlas", [])
        assert platform_description("other", []) == (
            "As other: Adapted to platform conventions."
        )


class TestMatch:
    """Tests for NavigatorEngine.match."""

    async def test_semantic_match(self, navigator):
        """Test matches, suggestions and the implementation path."""
        result = await navigator.match("organic card")

        assert result.mode == "semantic"
        assert [(m.name, m.similarity) for m in result.matches] == [
            ("EntityCard", 1.0),
            ("Button", pytest.approx(0.6)),
        ]
        assert result.suggested_tokens == ["--void", "--dawn"]
        assert result.suggested_patterns == ["breathing", "cornerBrackets"]
        assert result.implementation_path == [
            "Start from EntityCard (atlas)",
            "Use tokens: --void, --dawn",
            "Apply patterns: breathing, cornerBrackets",
        ]

    async def test_nothing_above_threshold(self, navigator):
        """Test that an unreachable threshold gives an empty result."""
        result = await navigator.match("organic card", threshold=1.01)
        assert result.matches == []
        assert result.suggested_tokens == []
        assert result.implementation_path == []

    async def test_platform_filter_keeps_shared(self, navigator):
        """Test that a platform filter admits shared components."""
        result = await navigator.match("organic card", platform="ledger")
        assert [m.name for m in result.matches] == ["Button"]
        assert result.platform == "ledger"

    async def test_related_components_in_path(self, sample_index, mock_provider):
        """Test that related components of the best match are suggested."""
        sample_index.get_component("EntityCard").related_components = [
            "ledger:StatPanel"
        ]
        navigator = NavigatorEngine(sample_index, SemanticScorer(mock_provider))
        result = await navigator.match("organic card")
        assert result.implementation_path[-1] == "Related components: ledger:StatPanel"

    async def test_keyword_mode(self, sample_index):
        """Test matching without an embedding provider."""
        navigator = NavigatorEngine(sample_index, KeywordScorer())
        result = await navigator.match("navigation compass")
        assert result.mode == "local"
        assert [(m.name, m.similarity) for m in result.matches] == [
            ("CompassRose", 1.0)
        ]


class TestProject:
    """Tests for NavigatorEngine.project."""

    async def test_requested_platform_order(self, navigator, sample_index):
        """Test one projection per known platform, in request order."""
        result = await navigator.project("organic card", ["ledger", "nowhere", "atlas"])

        assert [p.platform for p in result.projections] == ["ledger", "atlas"]
        assert [m.name for m in result.base_matches] == ["EntityCard", "Button"]

        ledger, atlas = result.projections
        assert ledger.similar_components == ["StatPanel"]
        assert ledger.tokens == ["--verde", "--void", "--ink"]
        assert ledger.patterns == ["scanlines"]
        assert ledger.position_adjustments == (
            sample_index.design_space.get_platform("ledger").position
        )
        assert ledger.description.startswith("As Ledger:")

        assert atlas.tokens == ["--dawn", "--void", "--gold"]
        assert atlas.patterns == ["breathing", "cornerBrackets"]
        assert "Corner brackets framing the element." in atlas.description

    async def test_defaults_to_every_platform(self, navigator):
        """Test that omitted platforms mean the design space order."""
        result = await navigator.project("organic card")
        assert [p.platform for p in result.projections] == [
            "atlas",
            "ledger",
            "astrolabe",
            "marketing",
        ]
        assert result.projections[3].similar_components == []

    async def test_empty_platform_list(self, navigator):
        """Test that an explicit empty list projects onto no platform."""
        result = await navigator.project("organic card", [])
        assert result.projections == []
        assert result.base_matches


class TestInterpolate:
    """Tests for NavigatorEngine.interpolate."""

    def test_endpoints_and_midpoint(self, navigator, sample_index):
        """Test that the ends reproduce the components and the middle blends."""
        result = navigator.interpolate("EntityCard", "StatPanel", steps=4)
        entity_card = sample_index.get_component("EntityCard")
        stat_panel = sample_index.get_component("StatPanel")

        assert result.component_a == "atlas:EntityCard"
        assert result.component_b == "ledger:StatPanel"
        assert [s.ratio for s in result.steps] == [0.0, 0.25, 0.5, 0.75, 1.0]

        first, _, middle, _, last = result.steps
        assert first.position == entity_card.semantic_position
        assert first.tokens == entity_card.tokens
        assert first.patterns == entity_card.patterns
        assert last.position == stat_panel.semantic_position
        assert last.tokens == stat_panel.tokens
        assert last.patterns == stat_panel.patterns
        assert middle.tokens == ["--void"]
        assert middle.patterns == []

    def test_descriptions(self, navigator):
        """Test the blend descriptions with their aesthetic suffixes."""
        steps = navigator.interpolate("EntityCard", "StatPanel", steps=4).steps
        assert steps[0].description == (
            "Pure EntityCard. Organic aesthetic. Warm tones."
        )
        assert steps[1].description.startswith(
            "Mostly EntityCard with hints of StatPanel"
        )
        assert steps[2].description == "Balanced blend of EntityCard and StatPanel"
        assert steps[4].description == "Pure StatPanel. Terminal aesthetic. Cool tones."

    def test_single_step(self, navigator):
        """Test that one step yields only the two endpoints."""
        result = navigator.interpolate("atlas:EntityCard", "Button", steps=1)
        assert [s.ratio for s in result.steps] == [0.0, 1.0]

    def test_invalid_steps(self, navigator):
        """Test that fewer than one step is rejected."""
        with pytest.raises(ValueError):
            navigator.interpolate("EntityCard", "StatPanel", steps=0)

    def test_missing_components(self, navigator):
        """Test that unresolved identifiers are all reported."""
        with pytest.raises(ComponentNotFoundError) as exc_info:
            navigator.interpolate("Nope", "AlsoNope")
        assert exc_info.value.identifiers == ["Nope", "AlsoNope"]


class TestExplore:
    """Tests for NavigatorEngine.explore."""

    def test_warm_position(self, navigator):
        """Test the nearest platform and suggestions for a warm position."""
        result = navigator.explore(SemanticPosition(cool_warm=0.5))

        assert result.nearest_platform == "astrolabe"
        assert result.platform_distance == pytest.approx(math.sqrt(0.34))
        assert result.suggested_tokens == ["--gold", "--void", "--dawn", "--signal"]
        for token in ("--verde", "--teal", "monospace", "space-large"):
            assert token not in result.suggested_tokens
        assert result.suggested_patterns == []
        assert [c.name for c in result.components] == [
            "CompassRose",
            "Button",
            "EntityCard",
            "StatPanel",
        ]

    def test_pole_patterns(self, navigator):
        """Test that axes beyond the neutral band contribute their patterns."""
        result = navigator.explore(
            SemanticPosition(terminal_organic=-0.8, static_animated=0.9)
        )
        assert result.suggested_patterns == [
            "scanlines",
            "gridSnapping",
            "particleSystem",
            "breathing",
        ]

    def test_empty_design_space(self, sample_components):
        """Test exploration without platforms."""
        navigator = NavigatorEngine(
            SemanticIndex(components=sample_components), KeywordScorer()
        )
        result = navigator.explore(SemanticPosition(), limit=2)
        assert result.nearest_platform is None
        assert result.platform_distance is None
        assert result.suggested_tokens == []
        assert len(result.components) == 2


class TestSearchByPosition:
    """Tests for NavigatorEngine.search_by_position."""

    def test_ties_keep_index_order(self, component_factory):
        """Test that equally distant components keep their index order."""
        components = [
            component_factory("First", position={"cool_warm": 0.5}),
            component_factory("Second", position={"cool_warm": -0.5}),
            component_factory("Near", position={"cool_warm": 0.1}),
        ]
        navigator = NavigatorEngine(
            SemanticIndex(components=components), KeywordScorer()
        )
        result = navigator.search_by_position(SemanticPosition())

        assert [m.name for m in result.matches] == ["Near", "First", "Second"]
        assert result.matches[1].similarity == pytest.approx(1 - 0.5 / 4)
