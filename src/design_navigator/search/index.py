"""In-memory semantic index loaded from the ingestion output.

The index is built once and shared by reference with the engines. Every search
is a linear scan over the loaded records.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TypeVar

from pydantic import BaseModel, ValidationError

from design_navigator.config import Config
from design_navigator.models import (
    ComponentEmbeddingsFile,
    ComponentGraph,
    ComponentIndexFile,
    ComponentRecord,
    DesignSpace,
    PlatformFingerprint,
    SemanticIndexFile,
    SemanticIndexRecord,
)
from design_navigator.search.geometry import cosine_similarity

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class IndexPaths:
    """Locations of the persisted index files."""

    index: Path
    components: Path
    component_embeddings: Path
    design_space: Path
    graph: Path
    translation_table: Path

    @classmethod
    def from_config(cls) -> "IndexPaths":
        return cls(
            index=Config.INDEX_PATH,
            components=Config.COMPONENT_INDEX_PATH,
            component_embeddings=Config.COMPONENT_EMBEDDINGS_PATH,
            design_space=Config.DESIGN_SPACE_PATH,
            graph=Config.GRAPH_PATH,
            translation_table=Config.TRANSLATION_TABLE_PATH,
        )

    @classmethod
    def under(cls, semantic_directory: Path) -> "IndexPaths":
        """Standard layout below a semantic output directory."""
        return cls(
            index=semantic_directory / "embeddings" / "index.json",
            components=semantic_directory / "components" / "index.json",
            component_embeddings=semantic_directory / "components" / "embeddings.json",
            design_space=semantic_directory / "design-space.json",
            graph=semantic_directory / "component-graph.json",
            translation_table=(
                semantic_directory / "translations" / "translation-table.json"
            ),
        )


def load_model_file(path: Path, model: type[ModelT]) -> ModelT | None:
    """Load and validate a JSON file, returning None if it is missing or invalid."""
    if not path.exists():
        logger.warning(f"{path} not found. Run the ingestion pipeline to generate it.")
        return None
    try:
        return model.model_validate_json(path.read_bytes())
    except (OSError, ValidationError) as e:
        logger.warning(f"Could not load {path}: {e}")
        return None


class SemanticIndex:
    """Records, components, fingerprints, design space and graph in memory."""

    def __init__(
        self,
        records: list[SemanticIndexRecord] | None = None,
        components: list[ComponentRecord] | None = None,
        design_space: DesignSpace | None = None,
        graph: ComponentGraph | None = None,
        model: str = "",
    ):
        """Initialize the index.

        Args:
            records: Semantic index records. Later duplicates replace earlier ones.
            components: Component records, with or without embeddings.
            design_space: Design space definition. Defaults to an empty one.
            graph: Component graph. Defaults to an empty one.
            model: Name of the model that produced the stored embeddings.
        """
        self._records: dict[str, SemanticIndexRecord] = {}
        self._fingerprints: dict[str, PlatformFingerprint] = {}
        self._components = list(components or [])
        self.design_space = design_space or DesignSpace()
        self.graph = graph or ComponentGraph()
        self.model = model
        for record in records or []:
            self.upsert(record)

    @classmethod
    def load(cls, paths: IndexPaths | None = None) -> "SemanticIndex":
        """Load the index from disk, degrading to empty collections on failure.

        Args:
            paths: File locations. Defaults to the configured locations.

        Returns:
            The loaded index.
        """
        paths = paths or IndexPaths.from_config()

        index_file = load_model_file(paths.index, SemanticIndexFile)
        embeddings_file = load_model_file(
            paths.component_embeddings, ComponentEmbeddingsFile
        )
        if embeddings_file is not None:
            components = embeddings_file.embeddings
        else:
            extraction_file = load_model_file(paths.components, ComponentIndexFile)
            components = extraction_file.components if extraction_file else []

        index = cls(
            records=index_file.records if index_file else [],
            components=components,
            design_space=load_model_file(paths.design_space, DesignSpace),
            graph=load_model_file(paths.graph, ComponentGraph),
            model=index_file.model if index_file else "",
        )
        logger.info(
            f"Loaded {len(index.records)} index records and "
            f"{len(index.components)} components"
        )
        return index

    # --- Records ---

    @property
    def records(self) -> list[SemanticIndexRecord]:
        return list(self._records.values())

    def upsert(self, record: SemanticIndexRecord) -> None:
        """Insert a record, replacing any record with the same key."""
        self._records[record.key] = record
        if record.category != "fingerprint":
            return
        try:
            fingerprint = PlatformFingerprint.from_record(record)
        except (AttributeError, TypeError, ValidationError) as e:
            logger.warning(f"Skipping malformed fingerprint {record.source_id}: {e}")
            self._fingerprints.pop(record.source_id, None)
            return
        self._fingerprints[record.source_id] = fingerprint

    def get(self, category: str, source_id: str) -> SemanticIndexRecord | None:
        """Return the record with the given category and source id."""
        return self._records.get(f"{category}:{source_id}")

    def records_in(self, category: str | None = None) -> list[SemanticIndexRecord]:
        """Return the records of one category, or all records."""
        return [
            record
            for record in self._records.values()
            if category is None or record.category == category
        ]

    def category_counts(self) -> dict[str, int]:
        return dict(Counter(record.category for record in self._records.values()))

    def search(
        self,
        query_embedding: list[float],
        category: str | None = None,
        platforms: list[str] | None = None,
        limit: int = 10,
        threshold: float = 0.5,
    ) -> list[tuple[SemanticIndexRecord, float]]:
        """Rank records by cosine similarity to a query embedding.

        Args:
            query_embedding: Query-intent embedding.
            category: Only consider records of this category.
            platforms: Only consider records tagged with one of these platforms
                or with 'shared'.
            limit: Maximum number of results.
            threshold: Minimum similarity for a record to be returned.

        Returns:
            (record, similarity) pairs, best first. Ties keep insertion order.
        """
        return self.rank(
            lambda record: cosine_similarity(query_embedding, record.embedding),
            category=category,
            platforms=platforms,
            limit=limit,
            threshold=threshold,
        )

    def rank(
        self,
        score: Callable[[SemanticIndexRecord], float],
        category: str | None = None,
        platforms: list[str] | None = None,
        limit: int = 10,
        threshold: float = 0.5,
    ) -> list[tuple[SemanticIndexRecord, float]]:
        """Rank records with an arbitrary scoring function.

        Takes the same filters as search.
        """
        candidates = self.records_in(category)
        if platforms:
            candidates = [
                record
                for record in candidates
                if "shared" in record.platforms
                or any(platform in record.platforms for platform in platforms)
            ]

        scored = [(record, score(record)) for record in candidates]
        scored = [(record, value) for record, value in scored if value >= threshold]
        scored.sort(key=lambda item: item[1], reverse=True)
        return scored[:limit]

    # --- Fingerprints ---

    @property
    def fingerprints(self) -> dict[str, PlatformFingerprint]:
        """Platform fingerprints keyed by platform id."""
        return dict(self._fingerprints)

    def get_fingerprint(self, platform: str) -> PlatformFingerprint | None:
        return self._fingerprints.get(platform)

    # --- Components ---

    @property
    def components(self) -> list[ComponentRecord]:
        return list(self._components)

    def get_component(self, identifier: str) -> ComponentRecord | None:
        """Resolve a component by exact id, then by display name."""
        for component in self._components:
            if component.id == identifier:
                return component
        for component in self._components:
            if component.name == identifier:
                return component
        return None

    def list_components(self, platform: str | None = None) -> list[ComponentRecord]:
        """Return all components, optionally only those of one platform."""
        return [
            component
            for component in self._components
            if platform is None or component.platform == platform
        ]
