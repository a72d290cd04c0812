"""Tests for the query scoring strategies and provider selection."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from design_navigator.config import Config
from design_navigator.exceptions import EmbeddingProviderError
from design_navigator.models import PlatformFingerprint
from design_navigator.search.scoring import (
    KeywordScorer,
    SemanticScorer,
    create_embedding_provider,
    query_terms,
)
from design_navigator.util.embedding_client import EmbeddingResponse
from design_navigator.util.remote_embedding_client import RemoteEmbeddingClient


class TestQueryTerms:
    """Tests for query_terms."""

    def test_short_words_and_duplicates_are_dropped(self):
        """Test that terms are lowercase, unique and at least three characters."""
        assert query_terms("A Gold gold UI compass-rose of it") == [
            "gold",
            "compass-rose",
        ]

    def test_empty(self):
        """Test that empty text has no terms."""
        assert query_terms("") == []


class TestKeywordScorer:
    """Tests for the keyword fallback."""

    async def test_mode_and_prepare(self):
        """Test that preparing never needs a provider."""
        scorer = KeywordScorer()
        query = await scorer.prepare("Organic creature card")
        assert scorer.mode == "local"
        assert query.embedding == []
        assert query.terms == ["organic", "creature", "card"]

    async def test_component_similarity(self, sample_components):
        """Test term coverage over the component summary."""
        scorer = KeywordScorer()
        query = await scorer.prepare("organic creature table")
        entity_card = sample_components[0]
        assert scorer.component_similarity(query, entity_card) == pytest.approx(2 / 3)
        assert scorer.component_similarity(query, sample_components[1]) == 0.0

    async def test_no_terms_scores_zero(self, sample_components):
        """Test that a query of short words matches nothing."""
        scorer = KeywordScorer()
        query = await scorer.prepare("a ui")
        assert scorer.component_similarity(query, sample_components[0]) == 0.0

    async def test_record_similarity_uses_keywords(self, anchor_records):
        """Test that metadata keywords count as record text."""
        scorer = KeywordScorer()
        query = await scorer.prepare("compass")
        assert scorer.record_similarity(query, anchor_records[0]) == 1.0

    async def test_anchor_activation(self, anchor_records):
        """Test activation of one third per keyword hit, capped at one."""
        scorer = KeywordScorer()
        one_hit = await scorer.prepare("a compass")
        four_hits = await scorer.prepare("navigate by compass, route and chart")
        assert scorer.anchor_activation(one_hit, anchor_records[0]) == pytest.approx(
            1 / 3
        )
        assert scorer.anchor_activation(four_hits, anchor_records[0]) == 1.0

    async def test_fingerprint_similarity(self):
        """Test the fraction of fingerprint keywords present in the request."""
        fingerprint = PlatformFingerprint(
            platform="astrolabe", keywords=["navigation", "instrument", "gold", "brass"]
        )
        scorer = KeywordScorer()
        query = await scorer.prepare("Gold navigation panel")
        assert scorer.matched_keywords(query, fingerprint) == ["navigation", "gold"]
        assert scorer.fingerprint_similarity(query, fingerprint) == 0.5

    async def test_fingerprint_without_keywords(self):
        """Test that a fingerprint without keywords scores zero."""
        scorer = KeywordScorer()
        query = await scorer.prepare("anything")
        assert scorer.fingerprint_similarity(
            query, PlatformFingerprint(platform="atlas")
        ) == 0.0


class TestSemanticScorer:
    """Tests for the embedding-based scorer."""

    async def test_prepare_embeds_with_query_intent(self, mock_provider):
        """Test that the request is embedded once as a query."""
        scorer = SemanticScorer(mock_provider)
        query = await scorer.prepare("organic card")

        assert scorer.mode == "semantic"
        assert query.embedding == [1.0, 0.0, 0.0]
        mock_provider.embed.assert_awaited_once_with(["organic card"], is_query=True)

    async def test_cosine_scores(self, mock_provider, sample_components):
        """Test that components are scored by cosine similarity."""
        scorer = SemanticScorer(mock_provider)
        query = await scorer.prepare("organic card")
        assert scorer.component_similarity(query, sample_components[0]) == 1.0
        assert scorer.component_similarity(
            query, sample_components[3]
        ) == pytest.approx(0.6)

    async def test_provider_failure_is_wrapped(self):
        """Test that provider errors surface as EmbeddingProviderError."""
        provider = MagicMock()
        provider.embed = AsyncMock(side_effect=RuntimeError("timeout"))
        with pytest.raises(EmbeddingProviderError, match="timeout"):
            await SemanticScorer(provider).prepare("x")

    async def test_empty_response(self):
        """Test that a response without embeddings is an error."""
        provider = MagicMock()
        provider.embed = AsyncMock(
            return_value=EmbeddingResponse(texts=["x"], embeddings=[], model="m")
        )
        with pytest.raises(EmbeddingProviderError):
            await SemanticScorer(provider).prepare("x")


class TestCreateEmbeddingProvider:
    """Tests for provider selection from configuration."""

    def test_none(self):
        """Test that 'none' never builds a provider."""
        with patch.object(Config, "VOYAGE_API_KEY", "key"):
            assert create_embedding_provider("none") is None

    def test_auto_prefers_remote(self):
        """Test that an API key selects the remote provider."""
        with (
            patch.object(Config, "VOYAGE_API_KEY", "key"),
            patch.object(Config, "EMBEDDING_MODEL", "local-model"),
        ):
            provider = create_embedding_provider()
        assert isinstance(provider, RemoteEmbeddingClient)
        assert provider.api_key == "key"
        assert provider.model_name == Config.VOYAGE_MODEL

    def test_auto_falls_back_to_local(self):
        """Test that a configured local model is used without an API key."""
        with (
            patch.object(Config, "VOYAGE_API_KEY", None),
            patch.object(Config, "EMBEDDING_MODEL", "local-model"),
            patch("design_navigator.search.scoring.EmbeddingClient") as mock_client,
        ):
            provider = create_embedding_provider()
        mock_client.assert_called_once_with(model_name="local-model")
        assert provider is mock_client.return_value

    def test_auto_without_configuration(self):
        """Test that nothing configured means keyword scoring."""
        with (
            patch.object(Config, "VOYAGE_API_KEY", None),
            patch.object(Config, "EMBEDDING_MODEL", None),
        ):
            assert create_embedding_provider() is None

    def test_model_name_override(self):
        """Test that an explicit model name overrides configuration."""
        with patch.object(Config, "VOYAGE_API_KEY", "key"):
            provider = create_embedding_provider("remote", model_name="voyage-3")
        assert provider.model_name == "voyage-3"

    def test_explicit_remote_without_key(self):
        """Test that requesting the remote provider without a key fails."""
        with patch.object(Config, "VOYAGE_API_KEY", None):
            with pytest.raises(EmbeddingProviderError):
                create_embedding_provider("remote")

    def test_explicit_local_without_model(self):
        """Test that requesting a local provider without a model fails."""
        with (
            patch.object(Config, "VOYAGE_API_KEY", None),
            patch.object(Config, "EMBEDDING_MODEL", None),
        ):
            with pytest.raises(EmbeddingProviderError):
                create_embedding_provider("local")
