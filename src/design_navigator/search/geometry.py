"""Vector and design-space geometry."""

import numpy as np

from design_navigator.exceptions import EmbeddingDimensionError
from design_navigator.models import SemanticPosition

MAX_POSITION_DISTANCE = 4.0
"""Upper bound used to normalize distances in the [-1, 1]^4 design space."""


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Cosine similarity of two embeddings.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        Similarity in [-1, 1]; 0.0 if either vector is empty or has zero norm.

    Raises:
        EmbeddingDimensionError: If both vectors are non-empty and differ in length.
    """
    if not a or not b:
        return 0.0
    if len(a) != len(b):
        raise EmbeddingDimensionError(len(a), len(b))

    vector_a = np.asarray(a, dtype=np.float64)
    vector_b = np.asarray(b, dtype=np.float64)
    norm = np.linalg.norm(vector_a) * np.linalg.norm(vector_b)
    if norm == 0:
        return 0.0
    return float(np.dot(vector_a, vector_b) / norm)


def position_distance(a: SemanticPosition, b: SemanticPosition) -> float:
    """Euclidean distance between two design-space positions."""
    return float(np.linalg.norm(np.subtract(a.as_vector(), b.as_vector())))


def position_similarity(a: SemanticPosition, b: SemanticPosition) -> float:
    """Similarity of two positions: 1 - distance / 4."""
    return 1.0 - position_distance(a, b) / MAX_POSITION_DISTANCE


def interpolate_positions(
    a: SemanticPosition, b: SemanticPosition, ratio: float
) -> SemanticPosition:
    """Linear interpolation between two positions."""
    start = np.asarray(a.as_vector())
    end = np.asarray(b.as_vector())
    return SemanticPosition.from_vector((start * (1 - ratio) + end * ratio).tolist())
