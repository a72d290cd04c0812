# src/design_navigator/config.py

"""Centralized configuration for design_navigator.

This module provides all configuration settings including paths, provider
settings, and other constants used throughout the application.
"""

import os
import pathlib


class Config:
    """Application-wide configuration settings."""

    DATA_DIRECTORY: pathlib.Path = pathlib.Path(
        os.getenv(
            "DESIGN_NAVIGATOR_DATA_DIR",
            pathlib.Path(__file__).parent.parent.parent / "data",
        )
    )
    """Root directory holding the brand corpus and the generated semantic files.

    Can be overridden with DESIGN_NAVIGATOR_DATA_DIR environment variable.
    Default: <repo-root>/data
    """

    BRAND_DIRECTORY: pathlib.Path = pathlib.Path(
        os.getenv("DESIGN_NAVIGATOR_BRAND_DIR", DATA_DIRECTORY)
    )
    """Root of the brand corpus (philosophy, tokens, fingerprints, references).

    Can be overridden with DESIGN_NAVIGATOR_BRAND_DIR environment variable.
    Default: the data directory
    """

    SEMANTIC_DIRECTORY: pathlib.Path = DATA_DIRECTORY / "semantic"
    """Directory for every file written by the ingestion pipeline."""

    INDEX_PATH: pathlib.Path = SEMANTIC_DIRECTORY / "embeddings" / "index.json"
    """Semantic index records (philosophy, anchors, fingerprints, ...)."""

    COMPONENT_INDEX_PATH: pathlib.Path = (
        SEMANTIC_DIRECTORY / "components" / "index.json"
    )
    """Extracted component records without embeddings."""

    COMPONENT_EMBEDDINGS_PATH: pathlib.Path = (
        SEMANTIC_DIRECTORY / "components" / "embeddings.json"
    )
    """Component records with their embeddings."""

    DESIGN_SPACE_PATH: pathlib.Path = SEMANTIC_DIRECTORY / "design-space.json"
    """Design space axes and canonical platform positions."""

    GRAPH_PATH: pathlib.Path = SEMANTIC_DIRECTORY / "component-graph.json"
    """Component relationship graph."""

    TRANSLATION_TABLE_PATH: pathlib.Path = (
        SEMANTIC_DIRECTORY / "translations" / "translation-table.json"
    )
    """Anchor translation table used for validation suggestions. Optional."""

    VOYAGE_API_KEY: str | None = os.getenv("VOYAGE_API_KEY")
    """API key for the remote embedding provider. Unset means local mode."""

    VOYAGE_API_URL: str = "https://api.voyageai.com/v1/embeddings"
    """Endpoint of the remote embedding provider."""

    VOYAGE_MODEL: str = os.getenv("DESIGN_NAVIGATOR_VOYAGE_MODEL", "voyage-3-lite")
    """Remote embedding model name."""

    EMBEDDING_MODEL: str | None = os.getenv("DESIGN_NAVIGATOR_EMBEDDING_MODEL")
    """Sentence transformer model used when no remote provider is configured.

    Unset means no local model is loaded and keyword scoring is used instead.
    """

    EMBEDDING_BATCH_SIZE: int = 32
    """Number of texts sent to the provider per request during ingestion."""

    EMBEDDING_BATCH_DELAY: float = 0.1
    """Pause in seconds between provider batches during ingestion."""

    DEFAULT_PLATFORM: str = os.getenv("DESIGN_NAVIGATOR_DEFAULT_PLATFORM", "astrolabe")
    """Platform reported by detection when no fingerprints are loaded."""

    FINGERPRINT_PLATFORMS: list[str] = [
        "astrolabe",
        "atlas",
        "ledger-dark",
        "ledger-light",
        "marketing",
    ]
    """Platform fingerprint and identity files collected by ingestion."""

    DEFAULT_COMPONENT_DIRECTORIES: list[str] = [
        "components",
        "src/components",
        "app/components",
    ]
    """Directories scanned inside each repository when none are given."""
