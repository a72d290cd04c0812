"""Shared test fixtures and configuration for the design navigator test suite."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from design_navigator.extract.design_space import default_design_space
from design_navigator.models import (
    ComponentRecord,
    SemanticIndexRecord,
    SemanticPosition,
)
from design_navigator.search.index import SemanticIndex
from design_navigator.util.embedding_client import EmbeddingResponse


@pytest.fixture
def component_factory():
    """Return a function that builds ComponentRecords with sensible defaults.

    Returns:
        Callable taking a name plus any ComponentRecord field overrides.
    """

    def _make(
        name: str,
        repo: str = "atlas",
        platform: str = "atlas",
        position: dict[str, float] | None = None,
        **overrides,
    ) -> ComponentRecord:
        fields = {
            "id": f"{repo}:{name}",
            "name": name,
            "path": f"components/{name}.tsx",
            "repo": repo,
            "platform": platform,
            "description": f"{name} component for {platform}",
            "file_type": "tsx",
            "semantic_position": SemanticPosition(**(position or {})),
            "embedding_text": f"Component: {name}. Platform: {platform}",
        }
        fields.update(overrides)
        return ComponentRecord(**fields)

    return _make


@pytest.fixture
def sample_components(component_factory) -> list[ComponentRecord]:
    """Create one component per platform with orthogonal embeddings.

    Returns:
        Components for atlas, ledger, astrolabe and shared.
    """
    return [
        component_factory(
            "EntityCard",
            position={
                "terminal_organic": 0.6,
                "minimal_dense": -0.3,
                "cool_warm": 0.5,
                "static_animated": 0.5,
            },
            tokens=["--dawn", "--void"],
            patterns=["breathing", "cornerBrackets"],
            embedding=[1.0, 0.0, 0.0],
            embedding_text="Component: EntityCard. Organic creature specimen card",
        ),
        component_factory(
            "StatPanel",
            repo="ledger",
            platform="ledger",
            position={
                "terminal_organic": -0.6,
                "minimal_dense": 0.3,
                "cool_warm": -0.5,
                "static_animated": -0.3,
            },
            tokens=["--verde", "--void"],
            patterns=["scanlines"],
            embedding=[0.0, 1.0, 0.0],
            embedding_text="Component: StatPanel. Terminal dashboard metric panel",
        ),
        component_factory(
            "CompassRose",
            repo="astrolabe",
            platform="astrolabe",
            position={"cool_warm": 0.3, "static_animated": 0.2},
            tokens=["--gold"],
            patterns=["particleSystem"],
            embedding=[0.0, 0.0, 1.0],
            embedding_text="Component: CompassRose. Navigation compass instrument",
        ),
        component_factory(
            "Button",
            repo="shared",
            platform="shared",
            position={"minimal_dense": -0.5},
            tokens=["--void"],
            embedding=[0.6, 0.8, 0.0],
            embedding_text="Component: Button. Simple clickable button",
        ),
    ]


@pytest.fixture
def fingerprint_records() -> list[SemanticIndexRecord]:
    """Create fingerprint records for astrolabe and atlas."""
    return [
        SemanticIndexRecord(
            category="fingerprint",
            source_id="astrolabe",
            title="Astrolabe Fingerprint",
            content="Navigation instrument with gold traces",
            embedding=[0.0, 0.0, 1.0],
            platforms=["astrolabe"],
            metadata={
                "version": "1.0",
                "identity": {"short": "Navigation instrument"},
                "keywords": ["navigation", "instrument", "gold"],
            },
        ),
        SemanticIndexRecord(
            category="fingerprint",
            source_id="atlas",
            title="Atlas Fingerprint",
            content="Organic specimen catalogue of creatures",
            embedding=[1.0, 0.0, 0.0],
            platforms=["atlas"],
            metadata={
                "identity": {"short": "Specimen catalogue"},
                "keywords": ["creature", "specimen", "organic"],
            },
        ),
    ]


@pytest.fixture
def anchor_records() -> list[SemanticIndexRecord]:
    """Create two anchor records with activation keywords."""
    return [
        SemanticIndexRecord(
            category="anchor",
            source_id="NAVIGATION",
            title="NAVIGATION Anchor",
            content="Finding a route through meaning",
            embedding=[0.0, 0.0, 1.0],
            metadata={"keywords": ["navigate", "compass", "route", "chart"]},
        ),
        SemanticIndexRecord(
            category="anchor",
            source_id="EMERGENCE",
            title="EMERGENCE Anchor",
            content="Form arising from noise",
            embedding=[1.0, 0.0, 0.0],
            metadata={"keywords": ["emerge", "organic", "grow"]},
        ),
    ]


@pytest.fixture
def philosophy_record() -> SemanticIndexRecord:
    """Create a philosophy record."""
    return SemanticIndexRecord(
        category="philosophy",
        source_id="principles",
        title="Design Principles",
        content="Navigation is the literal operation inside the models",
        embedding=[0.0, 0.6, 0.8],
    )


@pytest.fixture
def sample_index(
    sample_components, fingerprint_records, anchor_records, philosophy_record
) -> SemanticIndex:
    """Create a populated in-memory index with the default design space."""
    return SemanticIndex(
        records=[*fingerprint_records, *anchor_records, philosophy_record],
        components=sample_components,
        design_space=default_design_space(),
        model="test-model",
    )


@pytest.fixture
def mock_provider():
    """Create a mock embedding provider returning one fixed query vector.

    Returns:
        MagicMock whose embed coroutine returns [[1.0, 0.0, 0.0]].
    """
    provider = MagicMock()
    provider.model_name = "test-model"
    provider.embed = AsyncMock(
        return_value=EmbeddingResponse(
            texts=["query"], embeddings=[[1.0, 0.0, 0.0]], model="test-model"
        )
    )
    return provider
