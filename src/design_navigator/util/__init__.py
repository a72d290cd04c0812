"""Shared utilities for design_navigator."""

from design_navigator.util.embedding_client import EmbeddingClient, EmbeddingResponse
from design_navigator.util.logging import setup_logging
from design_navigator.util.remote_embedding_client import RemoteEmbeddingClient

__all__ = [
    "EmbeddingClient",
    "EmbeddingResponse",
    "RemoteEmbeddingClient",
    "setup_logging",
]
