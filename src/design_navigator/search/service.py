"""Service layer for navigation and validation operations."""

import logging
import time
from collections import Counter

from design_navigator.exceptions import ComponentNotFoundError
from design_navigator.models import (
    AnchorActivationResult,
    ComponentGraph,
    ComponentRecord,
    CorpusSearchResult,
    DesignSpace,
    DriftResult,
    ExplorationResult,
    IndexStats,
    InterpolationResult,
    MatchResult,
    PlatformDetection,
    PositionSearchResult,
    ProjectionResult,
    SemanticPosition,
    TranslationTable,
    ValidationReport,
)
from design_navigator.search.index import IndexPaths, SemanticIndex, load_model_file
from design_navigator.search.navigator import NavigatorEngine
from design_navigator.search.scoring import (
    KeywordScorer,
    QueryScorer,
    SemanticScorer,
    create_embedding_provider,
)
from design_navigator.search.validation import ValidationEngine

logger = logging.getLogger(__name__)


def _elapsed_ms(start_time: float) -> int:
    return int((time.time() - start_time) * 1000)


class Service:
    """Service wrapper for navigation and validation operations.

    Provides one entry point over a shared SemanticIndex and stamps every
    response with its processing time.
    """

    def __init__(
        self,
        index: SemanticIndex,
        scorer: QueryScorer,
        translation_table: TranslationTable | None = None,
    ):
        """Initialize the service.

        Args:
            index: Loaded semantic index shared by both engines.
            scorer: Scoring strategy injected into both engines.
            translation_table: Anchor translations for validation suggestions.
        """
        self.index = index
        self.scorer = scorer
        self.navigator = NavigatorEngine(index, scorer)
        self.validator = ValidationEngine(index, scorer, translation_table)

    @classmethod
    def from_config(cls, paths: IndexPaths | None = None) -> "Service":
        """Load the index and pick the scorer from configuration.

        The semantic scorer is used when an embedding provider is configured,
        otherwise the keyword scorer.

        Args:
            paths: File locations. Defaults to the configured locations.

        Returns:
            A ready service.
        """
        paths = paths or IndexPaths.from_config()
        index = SemanticIndex.load(paths)
        provider = create_embedding_provider()
        if provider is None:
            logger.info("No embedding provider configured, using keyword scoring")
            scorer: QueryScorer = KeywordScorer()
        else:
            scorer = SemanticScorer(provider)
        translation_table = load_model_file(paths.translation_table, TranslationTable)
        return cls(index, scorer, translation_table)

    @property
    def mode(self) -> str:
        return self.scorer.mode

    # --- Navigation ---

    async def match(
        self,
        query: str,
        platform: str | None = None,
        limit: int = 5,
        threshold: float = 0.3,
    ) -> MatchResult:
        """Find components similar to a free-text reference."""
        start_time = time.time()
        result = await self.navigator.match(query, platform, limit, threshold)
        result.processing_time_ms = _elapsed_ms(start_time)
        return result

    async def project(
        self, reference: str, platforms: list[str] | None = None
    ) -> ProjectionResult:
        """Project a reference onto several platforms."""
        start_time = time.time()
        result = await self.navigator.project(reference, platforms)
        result.processing_time_ms = _elapsed_ms(start_time)
        return result

    def interpolate(
        self, component_a: str, component_b: str, steps: int = 5
    ) -> InterpolationResult:
        """Blend two components.

        Raises:
            ComponentNotFoundError: If either component cannot be resolved.
        """
        start_time = time.time()
        result = self.navigator.interpolate(component_a, component_b, steps)
        result.processing_time_ms = _elapsed_ms(start_time)
        return result

    def explore(self, position: SemanticPosition, limit: int = 5) -> ExplorationResult:
        start_time = time.time()
        result = self.navigator.explore(position, limit)
        result.processing_time_ms = _elapsed_ms(start_time)
        return result

    def search_by_position(
        self, position: SemanticPosition, limit: int = 5
    ) -> PositionSearchResult:
        start_time = time.time()
        result = self.navigator.search_by_position(position, limit)
        result.processing_time_ms = _elapsed_ms(start_time)
        return result

    async def search_corpus(
        self,
        query: str,
        category: str | None = None,
        limit: int = 5,
        threshold: float = 0.5,
    ) -> CorpusSearchResult:
        """Search philosophy, anchors, patterns and other corpus records."""
        start_time = time.time()
        result = await self.validator.search_corpus(query, category, limit, threshold)
        result.processing_time_ms = _elapsed_ms(start_time)
        return result

    # --- Validation ---

    async def activate_anchors(self, request: str) -> AnchorActivationResult:
        start_time = time.time()
        result = await self.validator.activate_anchors(request)
        result.processing_time_ms = _elapsed_ms(start_time)
        return result

    async def detect_platform(self, request: str) -> PlatformDetection:
        start_time = time.time()
        result = await self.validator.detect_platform(request)
        result.processing_time_ms = _elapsed_ms(start_time)
        return result

    async def drift(self, request: str, platform: str) -> DriftResult:
        """Measure drift of a request from a platform identity."""
        start_time = time.time()
        result = await self.validator.drift(request, platform)
        result.processing_time_ms = _elapsed_ms(start_time)
        return result

    async def validate(
        self, request: str, platform: str | None = None
    ) -> ValidationReport:
        """Run the full validation of a request."""
        start_time = time.time()
        result = await self.validator.validate(request, platform)
        result.processing_time_ms = _elapsed_ms(start_time)
        return result

    # --- Lookups ---

    def get_component(self, identifier: str) -> ComponentRecord:
        """Retrieve a component by id or display name.

        Raises:
            ComponentNotFoundError: If no component matches.
        """
        component = self.index.get_component(identifier)
        if component is None:
            raise ComponentNotFoundError([identifier])
        return component

    def list_components(self, platform: str | None = None) -> list[ComponentRecord]:
        return self.index.list_components(platform)

    def get_design_space(self) -> DesignSpace:
        return self.index.design_space

    def get_component_graph(self) -> ComponentGraph:
        return self.index.graph

    def get_stats(self) -> IndexStats:
        """Summarize the loaded index."""
        components = self.index.components
        return IndexStats(
            mode=self.scorer.mode,
            record_count=len(self.index.records),
            categories=self.index.category_counts(),
            component_count=len(components),
            fingerprint_count=len(self.index.fingerprints),
            platforms=dict(Counter(component.platform for component in components)),
        )
