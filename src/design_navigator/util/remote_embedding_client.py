"""Remote embedding client for a Voyage-compatible HTTP API."""

import logging

import httpx

from design_navigator.util.embedding_client import EmbeddingResponse

logger = logging.getLogger(__name__)


class RemoteEmbeddingClient:
    """Client that generates embeddings through a hosted embedding API.

    Provides the same interface as EmbeddingClient but sends texts to the
    remote endpoint, tagging each request with document or query intent.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str,
        endpoint: str,
        timeout: float = 60.0,
    ):
        """Initialize the remote embedding client.

        Args:
            api_key: Bearer token for the provider.
            model_name: Provider model identifier (e.g. voyage-3-lite).
            endpoint: Full URL of the embeddings endpoint.
            timeout: Request timeout in seconds.
        """
        self.api_key = api_key
        self.model_name = model_name
        self.endpoint = endpoint
        self.timeout = timeout
        logger.info("Using remote embedding provider at %s", self.endpoint)

    async def embed(
        self, texts: list[str], is_query: bool = False
    ) -> EmbeddingResponse:
        """Generate embeddings by calling the remote provider.

        Args:
            texts: List of text strings to embed.
            is_query: Send query intent instead of document intent.

        Returns:
            EmbeddingResponse with texts, embeddings, and model info.

        Raises:
            httpx.HTTPStatusError: If the provider returns an error status.
        """
        payload = {
            "model": self.model_name,
            "input": texts,
            "input_type": "query" if is_query else "document",
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(self.endpoint, json=payload, headers=headers)
            response.raise_for_status()
            data = response.json()

        items = sorted(data["data"], key=lambda item: item.get("index", 0))
        return EmbeddingResponse(
            texts=texts,
            embeddings=[item["embedding"] for item in items],
            model=data.get("model", self.model_name),
        )
