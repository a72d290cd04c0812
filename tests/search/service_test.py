"""Tests for the search service module.

These tests verify the Service wrapper that exposes navigation, validation and
lookup operations over one shared index.
"""

from unittest.mock import MagicMock, patch

import pytest

from design_navigator.exceptions import ComponentNotFoundError
from design_navigator.models import (
    ComponentEmbeddingsFile,
    SemanticIndexFile,
    SemanticPosition,
)
from design_navigator.search.index import IndexPaths
from design_navigator.search.scoring import KeywordScorer, SemanticScorer
from design_navigator.search.service import Service


class TestService:
    """Tests for Service operations."""

    @pytest.fixture
    def service(self, sample_index, mock_provider):
        """Create a Service with a semantic scorer."""
        return Service(sample_index, SemanticScorer(mock_provider))

    async def test_match_sets_processing_time(self, service):
        """Test that match responses are timed."""
        result = await service.match("organic card")
        assert result.processing_time_ms is not None
        assert result.matches[0].name == "EntityCard"

    async def test_async_operations_are_timed(self, service):
        """Test every async operation stamps a processing time."""
        results = [
            await service.project("organic card", ["atlas"]),
            await service.search_corpus("navigation"),
            await service.activate_anchors("navigate"),
            await service.detect_platform("instrument"),
            await service.drift("instrument", "astrolabe"),
            await service.validate("instrument"),
        ]
        assert all(r.processing_time_ms is not None for r in results)

    def test_sync_operations_are_timed(self, service):
        """Test the geometry operations stamp a processing time."""
        position = SemanticPosition(cool_warm=0.5)
        results = [
            service.interpolate("EntityCard", "StatPanel", steps=2),
            service.explore(position),
            service.search_by_position(position),
        ]
        assert all(r.processing_time_ms is not None for r in results)

    def test_mode(self, service, sample_index):
        """Test that the mode follows the scorer."""
        assert service.mode == "semantic"
        assert Service(sample_index, KeywordScorer()).mode == "local"

    def test_get_component(self, service):
        """Test lookup by display name."""
        assert service.get_component("StatPanel").id == "ledger:StatPanel"

    def test_get_component_not_found(self, service):
        """Test that an unknown component raises."""
        with pytest.raises(ComponentNotFoundError) as exc_info:
            service.get_component("Nope")
        assert exc_info.value.identifiers == ["Nope"]

    def test_lookups(self, service, sample_index):
        """Test the passthrough lookups."""
        assert [c.name for c in service.list_components("astrolabe")] == [
            "CompassRose"
        ]
        assert service.get_design_space() is sample_index.design_space
        assert service.get_component_graph() is sample_index.graph

    def test_get_stats(self, service):
        """Test the index summary."""
        stats = service.get_stats()
        assert stats.mode == "semantic"
        assert stats.record_count == 5
        assert stats.categories == {"fingerprint": 2, "anchor": 2, "philosophy": 1}
        assert stats.component_count == 4
        assert stats.fingerprint_count == 2
        assert stats.platforms == {
            "atlas": 1,
            "ledger": 1,
            "astrolabe": 1,
            "shared": 1,
        }


class TestServiceFromConfig:
    """Tests for Service.from_config."""

    def test_keyword_scoring_without_provider(self, tmp_path, sample_components):
        """Test that no configured provider selects the keyword scorer."""
        paths = IndexPaths.under(tmp_path)
        paths.components.parent.mkdir(parents=True)
        paths.component_embeddings.write_text(
            ComponentEmbeddingsFile(embeddings=sample_components).model_dump_json()
        )

        with patch(
            "design_navigator.search.service.create_embedding_provider",
            return_value=None,
        ):
            service = Service.from_config(paths)

        assert service.mode == "local"
        assert len(service.list_components()) == 4
        assert service.validator.translation_table.anchors == {}

    def test_semantic_scoring_with_provider(self, tmp_path):
        """Test that a provider selects the semantic scorer."""
        paths = IndexPaths.under(tmp_path)
        paths.index.parent.mkdir(parents=True)
        paths.index.write_text(SemanticIndexFile(model="m").model_dump_json())
        paths.translation_table.parent.mkdir(parents=True)
        paths.translation_table.write_text(
            '{"anchors": {"SIGNAL": {"translations": ["clarity"]}}}'
        )

        with patch(
            "design_navigator.search.service.create_embedding_provider",
            return_value=MagicMock(),
        ):
            service = Service.from_config(paths)

        assert service.mode == "semantic"
        assert service.index.model == "m"
        assert service.validator.translation_table.anchors["SIGNAL"].translations == [
            "clarity"
        ]
