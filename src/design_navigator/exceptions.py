"""Exception hierarchy for design_navigator."""


class DesignNavigatorError(Exception):
    """Base class for every error raised by design_navigator."""


class ComponentNotFoundError(DesignNavigatorError):
    """Raised when one or more component identifiers cannot be resolved."""

    def __init__(self, identifiers: list[str]):
        self.identifiers = identifiers
        names = ", ".join(repr(identifier) for identifier in identifiers)
        super().__init__(f"Component not found: {names}")


class EmbeddingProviderError(DesignNavigatorError):
    """Raised when the configured embedding provider fails."""


class EmbeddingDimensionError(DesignNavigatorError):
    """Raised when two vectors that must be compared differ in length."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Vector length mismatch: {expected} vs {actual}")


class IngestionError(DesignNavigatorError):
    """Raised when the ingestion pipeline cannot complete."""
