"""Generate embeddings for semantic index records and components.

Texts are sent to the configured provider in fixed-size batches with a short
pause between requests. Every vector must share one dimensionality; a mismatch
or any provider error aborts the run.
"""

import asyncio
import logging

from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

from design_navigator.config import Config
from design_navigator.exceptions import EmbeddingDimensionError
from design_navigator.models import ComponentRecord, SemanticIndexRecord
from design_navigator.search.scoring import EmbeddingProvider

logger = logging.getLogger(__name__)


class EmbeddingGenerator:
    """Batches document texts through an embedding provider."""

    def __init__(
        self,
        client: EmbeddingProvider,
        batch_size: int = Config.EMBEDDING_BATCH_SIZE,
        delay_seconds: float = Config.EMBEDDING_BATCH_DELAY,
    ):
        """Initialize the generator.

        Args:
            client: Provider used for every batch.
            batch_size: Number of texts per provider request.
            delay_seconds: Pause between consecutive requests.
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.client = client
        self.batch_size = batch_size
        self.delay_seconds = delay_seconds
        self.dimensions: int | None = None

    @property
    def model_name(self) -> str:
        return self.client.model_name

    def _check_dimensions(self, embeddings: list[list[float]]) -> None:
        for embedding in embeddings:
            if self.dimensions is None:
                self.dimensions = len(embedding)
            elif len(embedding) != self.dimensions:
                raise EmbeddingDimensionError(self.dimensions, len(embedding))

    async def embed_texts(
        self, texts: list[str], description: str = "Generating embeddings"
    ) -> list[list[float]]:
        """Embed texts with document intent.

        Args:
            texts: Texts to embed.
            description: Progress bar label.

        Returns:
            One embedding per text, in input order.

        Raises:
            EmbeddingDimensionError: If the provider returns vectors of
                differing lengths.
        """
        if not texts:
            return []

        embeddings: list[list[float]] = []
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
        ) as progress:
            task = progress.add_task(description, total=len(texts))

            for start in range(0, len(texts), self.batch_size):
                if start > 0 and self.delay_seconds > 0:
                    await asyncio.sleep(self.delay_seconds)
                batch = texts[start : start + self.batch_size]
                response = await self.client.embed(batch, is_query=False)
                if len(response.embeddings) != len(batch):
                    raise ValueError(
                        f"Provider returned {len(response.embeddings)} embeddings "
                        f"for {len(batch)} texts"
                    )
                self._check_dimensions(response.embeddings)
                embeddings.extend(response.embeddings)
                progress.update(task, advance=len(batch))

        logger.info(f"Generated {len(embeddings)} embeddings ({description})")
        return embeddings

    async def embed_records(
        self, records: list[SemanticIndexRecord]
    ) -> list[SemanticIndexRecord]:
        """Return copies of the records with their content embedded."""
        embeddings = await self.embed_texts(
            [record.content for record in records], "Embedding corpus records"
        )
        return [
            record.model_copy(update={"embedding": embedding})
            for record, embedding in zip(records, embeddings)
        ]

    async def embed_components(
        self, components: list[ComponentRecord]
    ) -> list[ComponentRecord]:
        """Return copies of the components with their embedding text embedded."""
        embeddings = await self.embed_texts(
            [component.embedding_text for component in components],
            "Embedding components",
        )
        return [
            component.model_copy(update={"embedding": embedding})
            for component, embedding in zip(components, embeddings)
        ]
