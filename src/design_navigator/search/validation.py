"""Validation of design requests against platform identities.

Scores a free-text design request for anchor activation, best-fitting platform
and drift from a platform's fingerprint, and composes these into a full
validation report with antipattern checks and pattern suggestions.
"""

import logging
import re

from design_navigator.config import Config
from design_navigator.models import (
    AnchorActivation,
    AnchorActivationResult,
    CorpusHit,
    CorpusSearchResult,
    DriftResult,
    PlatformDetection,
    PlatformScore,
    TranslationTable,
    ValidationReport,
)
from design_navigator.models.results import ValidationStatus
from design_navigator.search.index import SemanticIndex
from design_navigator.search.scoring import PreparedQuery, QueryScorer

logger = logging.getLogger(__name__)

NEUTRAL_DRIFT = 0.5
NEUTRAL_DETECTION_SCORE = 0.5
TOP_ANCHORS = 3
MAX_SUGGESTIONS = 5

DRIFT_INTERPRETATIONS: dict[ValidationStatus, str] = {
    "approved": "Strong alignment with platform identity. Proceed with confidence.",
    "expansion": "Valid expansion of the design system. Document if new pattern.",
    "edge_case": "Edge case - may be valid but review recommended.",
    "violation": "Potential violation - significant drift from platform character.",
}

ANTIPATTERNS = {
    "no-border-radius": lambda text: "border-radius" in text
    and "border-radius: 0" not in text
    and "border-radius:0" not in text,
    "no-purple-gradients": lambda text: "purple gradient" in text
    or "purple-gradient" in text,
    "no-system-fonts": lambda text: re.search(r"\b(inter|arial|helvetica)\b", text)
    is not None,
}


def validation_status(drift_score: float) -> ValidationStatus:
    """Map a drift score to a validation status."""
    if drift_score < 0.2:
        return "approved"
    if drift_score < 0.4:
        return "expansion"
    if drift_score < 0.6:
        return "edge_case"
    return "violation"


def drift_interpretation(drift_score: float) -> str:
    """Human-readable meaning of a drift score."""
    return DRIFT_INTERPRETATIONS[validation_status(drift_score)]


def find_antipatterns(request: str) -> list[str]:
    """Names of the antipatterns a request mentions."""
    text = request.lower()
    return [name for name, violated in ANTIPATTERNS.items() if violated(text)]


class ValidationEngine:
    """Anchor activation, platform detection, drift and full validation."""

    def __init__(
        self,
        index: SemanticIndex,
        scorer: QueryScorer,
        translation_table: TranslationTable | None = None,
        default_platform: str = Config.DEFAULT_PLATFORM,
    ):
        """Initialize the validation engine.

        Args:
            index: Loaded semantic index, shared with other engines.
            scorer: Scoring strategy for requests.
            translation_table: Anchor translations used for suggestions.
            default_platform: Platform reported when no fingerprints exist.
        """
        self.index = index
        self.scorer = scorer
        self.translation_table = translation_table or TranslationTable()
        self.default_platform = default_platform

    # --- Scoring on a prepared query ---

    def _activations(self, query: PreparedQuery) -> list[AnchorActivation]:
        activations = [
            AnchorActivation(
                anchor=anchor.source_id,
                score=round(self.scorer.anchor_activation(query, anchor), 3),
            )
            for anchor in self.index.records_in("anchor")
        ]
        activations.sort(key=lambda activation: activation.score, reverse=True)
        return activations

    def _platform_scores(self, query: PreparedQuery) -> list[PlatformScore]:
        scores = [
            PlatformScore(
                platform=platform,
                score=round(self.scorer.fingerprint_similarity(query, fingerprint), 3),
            )
            for platform, fingerprint in self.index.fingerprints.items()
        ]
        scores.sort(key=lambda score: score.score, reverse=True)
        return scores

    def _drift(self, query: PreparedQuery, platform: str) -> float:
        fingerprint = self.index.get_fingerprint(platform)
        if fingerprint is None:
            logger.debug(f"No fingerprint for {platform}, using neutral drift")
            return NEUTRAL_DRIFT
        return 1.0 - self.scorer.fingerprint_similarity(query, fingerprint)

    def _suggestions(
        self, activations: list[AnchorActivation]
    ) -> tuple[list[str], list[str]]:
        patterns: list[str] = []
        components: list[str] = []
        for activation in activations[:TOP_ANCHORS]:
            translation = self.translation_table.anchors.get(activation.anchor)
            if translation is None:
                continue
            patterns.extend(translation.translations[:2])
            for physical in list(translation.physical_patterns.values())[:2]:
                if physical.component:
                    components.append(physical.component)
        patterns = list(dict.fromkeys(patterns))[:MAX_SUGGESTIONS]
        components = list(dict.fromkeys(components))[:MAX_SUGGESTIONS]
        return patterns, components

    # --- Operations ---

    async def activate_anchors(self, request: str) -> AnchorActivationResult:
        """Rank anchors by activation strength for a request."""
        query = await self.scorer.prepare(request)
        return AnchorActivationResult(
            request=request, mode=self.scorer.mode, activations=self._activations(query)
        )

    async def detect_platform(self, request: str) -> PlatformDetection:
        """Find the platform whose fingerprint best fits a request.

        Returns the configured default platform with a neutral score when no
        fingerprints are loaded.
        """
        query = await self.scorer.prepare(request)
        scores = self._platform_scores(query)
        if not scores:
            return PlatformDetection(
                request=request,
                mode=self.scorer.mode,
                platform=self.default_platform,
                score=NEUTRAL_DETECTION_SCORE,
            )
        return PlatformDetection(
            request=request,
            mode=self.scorer.mode,
            platform=scores[0].platform,
            score=scores[0].score,
            runner_up=scores[1] if len(scores) > 1 else None,
            all_scores=scores,
        )

    async def drift(self, request: str, platform: str) -> DriftResult:
        """Measure how far a request drifts from a platform's identity.

        Args:
            request: Design request text.
            platform: Platform id whose fingerprint is compared.

        Returns:
            Drift of 1 - similarity, or 0.5 when the platform has no fingerprint.
        """
        query = await self.scorer.prepare(request)
        drift_score = self._drift(query, platform)
        return DriftResult(
            request=request,
            platform=platform,
            mode=self.scorer.mode,
            drift_score=round(drift_score, 3),
            alignment_score=round(1.0 - drift_score, 3),
            status=validation_status(drift_score),
            interpretation=drift_interpretation(drift_score),
        )

    async def validate(
        self, request: str, platform: str | None = None
    ) -> ValidationReport:
        """Run detection, activation, drift and antipattern checks together.

        The request is prepared once and reused for every score.

        Args:
            request: Design request text.
            platform: Target platform. Detected from the request when omitted.

        Returns:
            The full validation report.
        """
        query = await self.scorer.prepare(request)

        if platform is not None:
            confidence = 1.0
        else:
            scores = self._platform_scores(query)
            if scores:
                platform, confidence = scores[0].platform, scores[0].score
            else:
                platform, confidence = self.default_platform, NEUTRAL_DETECTION_SCORE

        activations = self._activations(query)
        drift_score = self._drift(query, platform)
        suggested_patterns, suggested_components = self._suggestions(activations)

        return ValidationReport(
            request=request,
            mode=self.scorer.mode,
            platform=platform,
            platform_confidence=round(confidence, 3),
            drift_score=round(drift_score, 3),
            status=validation_status(drift_score),
            interpretation=drift_interpretation(drift_score),
            activated_anchors=activations,
            suggested_patterns=suggested_patterns,
            suggested_components=suggested_components,
            violated_antipatterns=find_antipatterns(request),
        )

    async def search_corpus(
        self,
        query: str,
        category: str | None = None,
        limit: int = 5,
        threshold: float = 0.5,
    ) -> CorpusSearchResult:
        """Search the brand corpus records of the index.

        Args:
            query: Search text.
            category: Only search records of this category.
            limit: Maximum number of results.
            threshold: Minimum similarity for a result.

        Returns:
            Matching records, best first.
        """
        prepared = await self.scorer.prepare(query)
        scored = self.index.rank(
            lambda record: self.scorer.record_similarity(prepared, record),
            category=category,
            limit=limit,
            threshold=threshold,
        )
        return CorpusSearchResult(
            query=query,
            mode=self.scorer.mode,
            category=category,
            results=[
                CorpusHit(
                    category=record.category,
                    source_id=record.source_id,
                    title=record.title,
                    content=record.content,
                    similarity=round(score, 3),
                    metadata=record.metadata,
                )
                for record, score in scored
            ],
        )
