"""Query scoring strategies shared by the navigator and validation engines.

A QueryScorer turns a request into a PreparedQuery once, then scores components,
index records, anchors and fingerprints against it. SemanticScorer compares
provider embeddings; KeywordScorer is the fallback used when no embedding
provider is configured. The two produce scores on different scales, so every
response is labelled with the scorer's mode.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Literal

from design_navigator.config import Config
from design_navigator.exceptions import EmbeddingProviderError
from design_navigator.models import (
    ComponentRecord,
    PlatformFingerprint,
    SemanticIndexRecord,
)
from design_navigator.models.results import ScoringMode
from design_navigator.search.geometry import cosine_similarity
from design_navigator.util.embedding_client import EmbeddingClient
from design_navigator.util.remote_embedding_client import RemoteEmbeddingClient

logger = logging.getLogger(__name__)

MIN_TERM_LENGTH = 3
ANCHOR_HITS_FOR_FULL_ACTIVATION = 3


EmbeddingProvider = EmbeddingClient | RemoteEmbeddingClient
"""Clients that embed texts with document or query intent."""

ProviderKind = Literal["auto", "remote", "local", "none"]


def create_embedding_provider(
    kind: ProviderKind = "auto", model_name: str | None = None
) -> EmbeddingProvider | None:
    """Build the embedding provider selected by configuration.

    With kind "auto" the remote provider is used when an API key is set,
    otherwise a local model when one is configured, otherwise none.

    Args:
        kind: Provider to build.
        model_name: Overrides the configured model of the selected provider.

    Returns:
        The provider, or None when embeddings are unavailable.
    """
    if kind == "none":
        return None
    if kind in ("auto", "remote") and Config.VOYAGE_API_KEY:
        return RemoteEmbeddingClient(
            api_key=Config.VOYAGE_API_KEY,
            model_name=model_name or Config.VOYAGE_MODEL,
            endpoint=Config.VOYAGE_API_URL,
        )
    if kind == "remote":
        raise EmbeddingProviderError("VOYAGE_API_KEY is not set")
    local_model = model_name or Config.EMBEDDING_MODEL
    if local_model:
        return EmbeddingClient(model_name=local_model)
    if kind == "local":
        raise EmbeddingProviderError("No local embedding model configured")
    return None


@dataclass
class PreparedQuery:
    """A request prepared for scoring."""

    text: str
    embedding: list[float] = field(default_factory=list)
    terms: list[str] = field(default_factory=list)

    @property
    def lowered(self) -> str:
        return self.text.lower()


def query_terms(text: str) -> list[str]:
    """Distinct lowercase words of at least three characters, in order."""
    words = re.findall(r"[a-z0-9][a-z0-9-]*", text.lower())
    return list(dict.fromkeys(w for w in words if len(w) >= MIN_TERM_LENGTH))


class QueryScorer(ABC):
    """Scores prepared queries against index content."""

    mode: ScoringMode

    @abstractmethod
    async def prepare(self, text: str) -> PreparedQuery:
        """Prepare a request. Embedding scorers call the provider here."""

    @abstractmethod
    def component_similarity(
        self, query: PreparedQuery, component: ComponentRecord
    ) -> float:
        """Similarity of a query to a component."""

    @abstractmethod
    def record_similarity(
        self, query: PreparedQuery, record: SemanticIndexRecord
    ) -> float:
        """Similarity of a query to an index record."""

    @abstractmethod
    def anchor_activation(
        self, query: PreparedQuery, anchor: SemanticIndexRecord
    ) -> float:
        """Activation strength of an anchor record for a query."""

    @abstractmethod
    def fingerprint_similarity(
        self, query: PreparedQuery, fingerprint: PlatformFingerprint
    ) -> float:
        """Similarity of a query to a platform fingerprint."""


class SemanticScorer(QueryScorer):
    """Cosine similarity between provider embeddings."""

    mode: ScoringMode = "semantic"

    def __init__(self, provider: EmbeddingProvider):
        self.provider = provider

    async def prepare(self, text: str) -> PreparedQuery:
        """Embed the request with query intent.

        Raises:
            EmbeddingProviderError: If the provider call fails or returns nothing.
        """
        try:
            response = await self.provider.embed([text], is_query=True)
        except Exception as e:
            logger.error(f"Embedding provider failed: {e}")
            raise EmbeddingProviderError(f"Embedding provider failed: {e}") from e
        if not response.embeddings:
            raise EmbeddingProviderError("Embedding provider returned no embedding")
        return PreparedQuery(
            text=text, embedding=response.embeddings[0], terms=query_terms(text)
        )

    def component_similarity(self, query, component):
        return cosine_similarity(query.embedding, component.embedding)

    def record_similarity(self, query, record):
        return cosine_similarity(query.embedding, record.embedding)

    def anchor_activation(self, query, anchor):
        return cosine_similarity(query.embedding, anchor.embedding)

    def fingerprint_similarity(self, query, fingerprint):
        return cosine_similarity(query.embedding, fingerprint.embedding)


class KeywordScorer(QueryScorer):
    """Keyword matching used when no embedding provider is configured."""

    mode: ScoringMode = "local"

    async def prepare(self, text: str) -> PreparedQuery:
        return PreparedQuery(text=text, terms=query_terms(text))

    @staticmethod
    def _term_coverage(query: PreparedQuery, haystack: str) -> float:
        if not query.terms:
            return 0.0
        haystack = haystack.lower()
        hits = sum(1 for term in query.terms if term in haystack)
        return hits / len(query.terms)

    def component_similarity(self, query, component):
        """Fraction of query terms found in the component's summary."""
        return self._term_coverage(
            query, f"{component.name} {component.embedding_text}"
        )

    def record_similarity(self, query, record):
        """Fraction of query terms found in the record's text and keywords."""
        keywords = " ".join(record.metadata.get("keywords") or [])
        return self._term_coverage(
            query, f"{record.title} {record.content} {keywords}"
        )

    def anchor_activation(self, query, anchor):
        """Keyword hits divided by three, capped at 1."""
        hits = sum(
            1
            for keyword in anchor.metadata.get("keywords") or []
            if keyword.lower() in query.lowered
        )
        return min(hits / ANCHOR_HITS_FOR_FULL_ACTIVATION, 1.0)

    def matched_keywords(
        self, query: PreparedQuery, fingerprint: PlatformFingerprint
    ) -> list[str]:
        return [k for k in fingerprint.keywords if k.lower() in query.lowered]

    def fingerprint_similarity(self, query, fingerprint):
        """Fraction of the fingerprint's keywords present in the request."""
        matched = self.matched_keywords(query, fingerprint)
        return len(matched) / max(len(fingerprint.keywords), 1)
