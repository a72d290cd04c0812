"""Local embedding provider backed by a sentence-transformers model.

Used when no remote provider key is configured but a local model name is. The
model is loaded once per client and encoding runs in the default executor so
queries do not block the event loop.
"""

import asyncio
import logging

import torch
from pydantic import BaseModel
from sentence_transformers import SentenceTransformer

logger = logging.getLogger(__name__)


class EmbeddingResponse(BaseModel):
    """Vectors returned by an embedding provider for one request."""

    texts: list[str]
    """Texts that were embedded, in request order."""

    embeddings: list[list[float]]
    """One vector per text, aligned with texts."""

    model: str
    """Provider model that produced the vectors."""


def select_device() -> str:
    """Return the fastest torch device available on this machine."""
    if torch.cuda.is_available():
        return "cuda"
    if hasattr(torch.backends, "mps") and torch.backends.mps.is_available():
        return "mps"
    return "cpu"


class EmbeddingClient:
    """Embeds component descriptions and requests with a local model."""

    def __init__(self, model_name: str, device: str | None = None):
        """Load the model.

        Args:
            model_name: Sentence transformer model name or local path.
            device: Torch device. Detected with select_device when None.
        """
        self.model_name = model_name
        self.device = device or select_device()
        logger.info(f"Loading local embedding model {model_name} ({self.device})")
        self.model = SentenceTransformer(model_name, device=self.device)

    def prompt_for(self, is_query: bool) -> str | None:
        """Name of the model prompt for query or document intent, if defined."""
        intent = "query" if is_query else "document"
        prompts = getattr(self.model, "prompts", None) or {}
        return intent if intent in prompts else None

    async def embed(
        self, texts: list[str], is_query: bool = False
    ) -> EmbeddingResponse:
        """Embed texts with document intent, or query intent for live requests."""
        prompt_name = self.prompt_for(is_query)

        def _encode():
            return self.model.encode(
                texts,
                prompt_name=prompt_name,
                normalize_embeddings=True,
                show_progress_bar=False,
                convert_to_numpy=True,
            )

        vectors = await asyncio.get_running_loop().run_in_executor(None, _encode)
        return EmbeddingResponse(
            texts=texts,
            embeddings=[vector.tolist() for vector in vectors],
            model=self.model_name,
        )
