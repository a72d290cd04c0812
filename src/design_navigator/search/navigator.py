"""Navigation through the component design space.

Five operations over a loaded SemanticIndex:

- match: components similar to a free-text reference
- search_by_position: components nearest to an explicit design-space position
- project: a reference re-expressed for each platform
- interpolate: evenly spaced blends between two components
- explore: what lives near a coordinate chosen with the axis sliders

Only match and project call the embedding provider; the rest is geometry.
"""

import logging
import math
from collections import defaultdict

from design_navigator.exceptions import ComponentNotFoundError
from design_navigator.models import (
    ComponentMatch,
    ComponentRecord,
    ExplorationResult,
    InterpolationResult,
    InterpolationStep,
    MatchResult,
    PlatformProjection,
    PositionSearchResult,
    ProjectionResult,
    SemanticPosition,
)
from design_navigator.search.geometry import (
    cosine_similarity,
    interpolate_positions,
    position_distance,
    position_similarity,
)
from design_navigator.search.index import SemanticIndex
from design_navigator.search.scoring import PreparedQuery, QueryScorer

logger = logging.getLogger(__name__)

MAX_SUGGESTED_TOKENS = 8
MAX_SUGGESTED_PATTERNS = 5
PROJECTION_BASE_LIMIT = 3
PROJECTION_SIMILAR_LIMIT = 3
AXIS_BAND = 0.3


def to_component_match(component: ComponentRecord, similarity: float) -> ComponentMatch:
    """Summarize a scored component."""
    return ComponentMatch(
        id=component.id,
        name=component.name,
        repo=component.repo,
        platform=component.platform,
        path=component.path,
        similarity=similarity,
        tokens=component.tokens,
        patterns=component.patterns,
        semantic_position=component.semantic_position,
    )


def rank_by_weight(weights: dict[str, float], limit: int) -> list[str]:
    """Keys ordered by descending weight, first-seen order breaking ties."""
    return [key for key, _ in sorted(weights.items(), key=lambda kv: -kv[1])][:limit]


def component_similarity(a: ComponentRecord, b: ComponentRecord) -> float:
    """Similarity of two components.

    Cosine of the stored embeddings when both have one, otherwise the Jaccard
    index of their combined token and pattern sets.
    """
    if a.embedding and b.embedding:
        return cosine_similarity(a.embedding, b.embedding)
    features_a = set(a.tokens) | set(a.patterns)
    features_b = set(b.tokens) | set(b.patterns)
    union = features_a | features_b
    if not union:
        return 0.0
    return len(features_a & features_b) / len(union)


def platform_description(platform_id: str, base_patterns: list[str]) -> str:
    """Fixed description of how a platform treats a projected reference."""
    if platform_id == "atlas":
        brackets = (
            "Corner brackets framing the element. "
            if "cornerBrackets" in base_patterns
            else ""
        )
        return (
            f"As Atlas: Organic, specimen-like treatment. {brackets}"
            "Dawn glow accents on void background. Breathing animation if interactive."
        )
    if platform_id == "ledger":
        drift = (
            " Horizontal particle drift in background."
            if "particleSystem" in base_patterns
            else ""
        )
        return (
            "As Ledger: Terminal aesthetic with scanline overlay. Verde accent on key "
            f"data points. Monospace typography, horizontal flow.{drift}"
        )
    if platform_id == "astrolabe":
        return (
            "As Astrolabe: Navigation instrument aesthetic. Gold traces on void, "
            "brass-tinted overlays. Integrated into cockpit/HUD context. Axis-flow "
            "particles if animated."
        )
    if platform_id == "marketing":
        return (
            "As Marketing: Hero-scale treatment with particle gateway. Gold and dawn "
            "accents, dramatic void background. Portal frame aesthetic for key "
            "elements."
        )
    return f"As {platform_id}: Adapted to platform conventions."


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


class NavigatorEngine:
    """Match, project, interpolate and explore components of a SemanticIndex."""

    def __init__(self, index: SemanticIndex, scorer: QueryScorer):
        """Initialize the navigator.

        Args:
            index: Loaded semantic index, shared with other engines.
            scorer: Scoring strategy for free-text queries.
        """
        self.index = index
        self.scorer = scorer

    # --- Match ---

    async def match(
        self,
        query: str,
        platform: str | None = None,
        limit: int = 5,
        threshold: float = 0.3,
    ) -> MatchResult:
        """Find components similar to a free-text reference.

        Args:
            query: Description of the desired component.
            platform: Restrict candidates to this platform plus 'shared'.
            limit: Maximum number of matches.
            threshold: Minimum similarity for a match.

        Returns:
            Matches with aggregated token and pattern suggestions and an
            implementation path. Empty when nothing clears the threshold.
        """
        prepared = await self.scorer.prepare(query)
        return self._match_prepared(prepared, platform, limit, threshold)

    def _match_prepared(
        self,
        query: PreparedQuery,
        platform: str | None,
        limit: int,
        threshold: float,
    ) -> MatchResult:
        candidates = [
            component
            for component in self.index.components
            if platform is None or component.platform in (platform, "shared")
        ]
        scored = [
            (component, self.scorer.component_similarity(query, component))
            for component in candidates
        ]
        scored = [(c, score) for c, score in scored if score >= threshold]
        scored.sort(key=lambda item: item[1], reverse=True)
        scored = scored[:limit]

        token_weights: dict[str, float] = defaultdict(float)
        pattern_weights: dict[str, float] = defaultdict(float)
        for component, similarity in scored:
            for token in component.tokens:
                token_weights[token] += similarity
            for pattern in component.patterns:
                pattern_weights[pattern] += similarity
        suggested_tokens = rank_by_weight(token_weights, MAX_SUGGESTED_TOKENS)
        suggested_patterns = rank_by_weight(pattern_weights, MAX_SUGGESTED_PATTERNS)

        implementation_path = []
        if scored:
            best = scored[0][0]
            implementation_path.append(f"Start from {best.name} ({best.repo})")
            if suggested_tokens:
                implementation_path.append(
                    f"Use tokens: {', '.join(suggested_tokens[:4])}"
                )
            if suggested_patterns:
                implementation_path.append(
                    f"Apply patterns: {', '.join(suggested_patterns)}"
                )
            if best.related_components:
                implementation_path.append(
                    f"Related components: {', '.join(best.related_components[:3])}"
                )

        return MatchResult(
            query=query.text,
            mode=self.scorer.mode,
            platform=platform,
            matches=[to_component_match(c, score) for c, score in scored],
            suggested_tokens=suggested_tokens,
            suggested_patterns=suggested_patterns,
            implementation_path=implementation_path,
        )

    # --- Position search ---

    def search_by_position(
        self, position: SemanticPosition, limit: int = 5
    ) -> PositionSearchResult:
        """Rank components by closeness to a design-space position.

        Similarity is 1 - euclidean distance / 4. Ties keep index order.
        """
        scored = [
            (component, position_similarity(position, component.semantic_position))
            for component in self.index.components
        ]
        scored.sort(key=lambda item: item[1], reverse=True)
        return PositionSearchResult(
            position=position,
            matches=[to_component_match(c, score) for c, score in scored[:limit]],
        )

    # --- Projection ---

    async def project(
        self, reference: str, platforms: list[str] | None = None
    ) -> ProjectionResult:
        """Project a reference onto several platforms.

        Args:
            reference: Description of the reference design.
            platforms: Platform ids in the desired order. Defaults to every
                platform of the design space. Unknown ids are skipped.

        Returns:
            One projection per known requested platform, in request order.
        """
        prepared = await self.scorer.prepare(reference)
        base = self._match_prepared(
            prepared, platform=None, limit=PROJECTION_BASE_LIMIT, threshold=0.3
        )
        top_component = (
            self.index.get_component(base.matches[0].id) if base.matches else None
        )

        platform_ids = platforms
        if platform_ids is None:
            platform_ids = [p.id for p in self.index.design_space.platforms]
        projections = []
        for platform_id in platform_ids:
            definition = self.index.design_space.get_platform(platform_id)
            if definition is None:
                logger.debug(f"Skipping unknown platform {platform_id}")
                continue

            similar: list[ComponentRecord] = []
            if top_component is not None:
                ranked = sorted(
                    self.index.list_components(platform_id),
                    key=lambda c: component_similarity(top_component, c),
                    reverse=True,
                )
                similar = ranked[:PROJECTION_SIMILAR_LIMIT]

            tokens = list(definition.primary_tokens)
            patterns: list[str] = []
            for component in similar:
                tokens.extend(component.tokens)
                patterns.extend(component.patterns)

            projections.append(
                PlatformProjection(
                    platform=platform_id,
                    description=platform_description(
                        platform_id, base.suggested_patterns
                    ),
                    tokens=_unique(tokens)[:MAX_SUGGESTED_TOKENS],
                    patterns=_unique(patterns)[:MAX_SUGGESTED_PATTERNS],
                    similar_components=[c.name for c in similar],
                    position_adjustments=definition.position,
                )
            )

        return ProjectionResult(
            reference=reference,
            mode=self.scorer.mode,
            base_matches=base.matches,
            projections=projections,
        )

    # --- Interpolation ---

    def interpolate(
        self, component_a: str, component_b: str, steps: int = 5
    ) -> InterpolationResult:
        """Blend two components in steps + 1 evenly spaced points.

        Args:
            component_a: Id or display name of the start component.
            component_b: Id or display name of the end component.
            steps: Number of intervals; must be at least 1.

        Returns:
            Points from ratio 0 (pure A) to ratio 1 (pure B).

        Raises:
            ValueError: If steps is less than 1.
            ComponentNotFoundError: If either component cannot be resolved.
        """
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")

        start = self.index.get_component(component_a)
        end = self.index.get_component(component_b)
        missing = [
            identifier
            for identifier, found in ((component_a, start), (component_b, end))
            if found is None
        ]
        if missing:
            raise ComponentNotFoundError(missing)

        only_a_tokens = [t for t in start.tokens if t not in end.tokens]
        only_b_tokens = [t for t in end.tokens if t not in start.tokens]

        result = InterpolationResult(component_a=start.id, component_b=end.id)
        for i in range(steps + 1):
            ratio = i / steps
            position = interpolate_positions(
                start.semantic_position, end.semantic_position, ratio
            )

            # Exclusive tokens fade out linearly; exclusive patterns switch at 0.5
            if ratio < 0.5:
                kept = only_a_tokens[: math.ceil((1 - ratio) * len(only_a_tokens))]
                tokens = [t for t in start.tokens if t in end.tokens or t in kept]
                patterns = list(start.patterns)
            elif ratio > 0.5:
                kept = only_b_tokens[: math.ceil(ratio * len(only_b_tokens))]
                tokens = [t for t in end.tokens if t in start.tokens or t in kept]
                patterns = list(end.patterns)
            else:
                tokens = [t for t in start.tokens if t in end.tokens]
                patterns = [p for p in start.patterns if p in end.patterns]

            result.steps.append(
                InterpolationStep(
                    ratio=ratio,
                    position=position,
                    tokens=_unique(tokens),
                    patterns=_unique(patterns),
                    description=self._blend_description(
                        start.name, end.name, ratio, position
                    ),
                )
            )
        return result

    @staticmethod
    def _blend_description(
        name_a: str, name_b: str, ratio: float, position: SemanticPosition
    ) -> str:
        if ratio == 0:
            description = f"Pure {name_a}"
        elif ratio == 1:
            description = f"Pure {name_b}"
        elif ratio < 0.3:
            description = f"Mostly {name_a} with hints of {name_b}"
        elif ratio > 0.7:
            description = f"Mostly {name_b} with hints of {name_a}"
        else:
            description = f"Balanced blend of {name_a} and {name_b}"

        if position.terminal_organic < -AXIS_BAND:
            description += ". Terminal aesthetic."
        elif position.terminal_organic > AXIS_BAND:
            description += ". Organic aesthetic."
        if position.cool_warm < -AXIS_BAND:
            description += " Cool tones."
        elif position.cool_warm > AXIS_BAND:
            description += " Warm tones."
        return description

    # --- Exploration ---

    def explore(self, position: SemanticPosition, limit: int = 5) -> ExplorationResult:
        """Describe the neighbourhood of a design-space position.

        Args:
            position: Target position; unspecified axes are 0.
            limit: Maximum number of nearby components.

        Returns:
            Nearest platform, nearby components, and token/pattern suggestions
            from the nearest platform and from every axis beyond the neutral band.
        """
        space = self.index.design_space

        nearest = None
        nearest_distance = math.inf
        for platform in space.platforms:
            distance = position_distance(position, platform.position)
            if distance < nearest_distance:
                nearest, nearest_distance = platform, distance

        tokens = list(nearest.primary_tokens) if nearest else []
        patterns: list[str] = []
        for axis in space.axes:
            value = getattr(position, axis.id, 0.0)
            if value < -AXIS_BAND:
                pole = axis.negative
            elif value > AXIS_BAND:
                pole = axis.positive
            else:
                continue
            tokens.extend(pole.tokens)
            patterns.extend(pole.patterns)

        return ExplorationResult(
            position=position,
            nearest_platform=nearest.id if nearest else None,
            platform_distance=nearest_distance if nearest else None,
            components=self.search_by_position(position, limit).matches,
            suggested_tokens=_unique(tokens),
            suggested_patterns=_unique(patterns),
        )
