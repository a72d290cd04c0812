"""Pipeline orchestration for design component and brand corpus ingestion.

This module coordinates the complete offline ingestion pass:
1. Extract components from the configured repositories
2. Build the component relationship graph
3. Build the design space definition
4. Collect the brand corpus into semantic index records
5. Generate embeddings for records and components
6. Write every output file

Nothing is written until every step has succeeded.
"""

import asyncio
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import click
from pydantic import BaseModel

from design_navigator.config import Config
from design_navigator.exceptions import IngestionError
from design_navigator.extract.components import RepositorySource, extract_components
from design_navigator.extract.corpus import collect_corpus, component_index_records
from design_navigator.extract.design_space import default_design_space
from design_navigator.extract.embeddings import EmbeddingGenerator
from design_navigator.extract.graph import build_component_graph
from design_navigator.models import (
    ComponentEmbeddingsFile,
    ComponentIndexFile,
    SemanticIndexFile,
    TranslationTable,
)
from design_navigator.search.index import IndexPaths, load_model_file
from design_navigator.search.scoring import ProviderKind, create_embedding_provider
from design_navigator.util import setup_logging

logger = logging.getLogger(__name__)

TRANSLATION_TABLE_SOURCE = Path("semantic") / "translations" / "translation-table.json"


def _stage_model(path: Path, model: BaseModel) -> Path:
    """Serialize a model to a temp file next to its destination."""
    path.parent.mkdir(parents=True, exist_ok=True)
    file_descriptor, temp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(file_descriptor, "w", encoding="utf-8") as handle:
            handle.write(model.model_dump_json(indent=2, by_alias=True))
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise
    return Path(temp_name)


def write_models_atomic(outputs: list[tuple[Path, BaseModel]]) -> None:
    """Write several models as JSON, replacing targets only once all are written.

    Every model is serialized to a temp file first. Targets are replaced only
    after all temp files exist, so a failed serialization leaves every target
    untouched.

    Args:
        outputs: Destination file and model pairs. Parent directories are
            created. Models are serialized with their field aliases.
    """
    staged: list[tuple[Path, Path]] = []
    try:
        for path, model in outputs:
            staged.append((_stage_model(path, model), path))
        for temp_path, path in staged:
            os.replace(temp_path, path)
    finally:
        for temp_path, _ in staged:
            temp_path.unlink(missing_ok=True)


def parse_repository(value: str, component_dirs: list[str]) -> RepositorySource:
    """Parse a NAME=PATH repository option."""
    name, separator, path = value.partition("=")
    if not separator or not name or not path:
        raise click.BadParameter(f"Expected NAME=PATH, got {value!r}")
    return RepositorySource(
        name=name,
        root=Path(path).expanduser(),
        component_dirs=component_dirs or list(Config.DEFAULT_COMPONENT_DIRECTORIES),
    )


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


async def run_pipeline(
    repositories: list[RepositorySource],
    brand_directory: Path = Config.BRAND_DIRECTORY,
    output_directory: Path = Config.SEMANTIC_DIRECTORY,
    embeddings: bool = True,
    provider: ProviderKind = "auto",
    embedding_model: str | None = None,
    batch_size: int = Config.EMBEDDING_BATCH_SIZE,
    verbose: bool = False,
) -> IndexPaths:
    """Run the design component and brand corpus ingestion pipeline.

    Args:
        repositories: Repositories to extract components from.
        brand_directory: Root of the brand corpus.
        output_directory: Directory receiving the semantic files.
        embeddings: Run the embedding generation step.
        provider: Embedding provider to use when embeddings are enabled.
        embedding_model: Overrides the configured embedding model.
        batch_size: Texts per provider request.
        verbose: Enable verbose logging.

    Returns:
        Locations of the written files.

    Raises:
        IngestionError: If any step fails. No output file is touched then.
    """
    setup_logging(verbose)
    paths = IndexPaths.under(output_directory)

    logger.info("Starting design navigator ingestion pipeline")
    logger.info(f"Brand directory: {brand_directory}")
    logger.info(f"Output directory: {output_directory}")

    try:
        logger.info("Step 1: Extracting components...")
        if not repositories:
            logger.warning("No repositories configured, skipping component extraction")
        components = extract_components(repositories)

        logger.info("Step 2: Building component graph...")
        graph = build_component_graph(components)

        logger.info("Step 3: Building design space...")
        design_space = default_design_space()

        logger.info("Step 4: Collecting brand corpus...")
        records = collect_corpus(brand_directory)
        translation_table = load_model_file(
            brand_directory / TRANSLATION_TABLE_SOURCE, TranslationTable
        )

        model_name = ""
        dimensions = 0
        embedded_components = components
        client = None
        if embeddings:
            client = create_embedding_provider(provider, embedding_model)
        if client is not None:
            logger.info("Step 5: Generating embeddings...")
            generator = EmbeddingGenerator(client, batch_size=batch_size)
            records = await generator.embed_records(records)
            embedded_components = await generator.embed_components(components)
            model_name = generator.model_name
            dimensions = generator.dimensions or 0
        elif embeddings:
            logger.warning(
                "No embedding provider configured. Records are written without "
                "embeddings and queries will use keyword scoring."
            )

        records = records + component_index_records(embedded_components)
    except IngestionError:
        raise
    except Exception as e:
        logger.error(f"Ingestion failed: {e}")
        raise IngestionError(f"Ingestion failed: {e}") from e

    logger.info("Step 6: Writing output files...")
    now = _timestamp()
    outputs: list[tuple[Path, BaseModel]] = [
        (
            paths.components,
            ComponentIndexFile(
                extracted_at=now, count=len(components), components=components
            ),
        ),
        (
            paths.component_embeddings,
            ComponentEmbeddingsFile(
                model=model_name,
                dimensions=dimensions,
                count=len(embedded_components),
                embedded_at=now,
                embeddings=embedded_components,
            ),
        ),
        (paths.design_space, design_space),
        (paths.graph, graph),
        (
            paths.index,
            SemanticIndexFile(
                model=model_name,
                dimensions=dimensions,
                count=len(records),
                updated_at=now,
                records=records,
            ),
        ),
    ]
    source_table = (brand_directory / TRANSLATION_TABLE_SOURCE).resolve()
    target_table = paths.translation_table.resolve()
    if translation_table is not None and source_table != target_table:
        outputs.append((paths.translation_table, translation_table))
    try:
        write_models_atomic(outputs)
    except OSError as e:
        logger.error(f"Could not write output files: {e}")
        raise IngestionError(f"Could not write output files: {e}") from e

    logger.info(
        f"Pipeline completed: {len(components)} components, "
        f"{len(records)} index records"
    )
    return paths


@click.command()
@click.option(
    "--repo",
    "repos",
    multiple=True,
    metavar="NAME=PATH",
    help="Repository to extract components from (repeatable)",
)
@click.option(
    "--component-dir",
    "component_dirs",
    multiple=True,
    help="Component directory inside each repository (repeatable)",
)
@click.option(
    "--brand-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Config.BRAND_DIRECTORY,
    show_default=True,
    help="Root of the brand corpus",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Config.SEMANTIC_DIRECTORY,
    show_default=True,
    help="Directory receiving the generated semantic files",
)
@click.option(
    "--embeddings/--no-embeddings",
    default=True,
    help="Run embeddings generation step",
)
@click.option(
    "--provider",
    type=click.Choice(["auto", "remote", "local", "none"]),
    default="auto",
    show_default=True,
    help="Embedding provider",
)
@click.option(
    "--embedding-model",
    default=None,
    help="Embedding model name (overrides configuration)",
)
@click.option(
    "--batch-size",
    type=int,
    default=Config.EMBEDDING_BATCH_SIZE,
    show_default=True,
    help="Texts per embedding request",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging")
def main(
    repos: tuple[str, ...],
    component_dirs: tuple[str, ...],
    brand_dir: Path,
    output_dir: Path,
    embeddings: bool,
    provider: str,
    embedding_model: str | None,
    batch_size: int,
    verbose: bool,
) -> None:
    """Run the design component and brand corpus ingestion pipeline."""
    repositories = [parse_repository(value, list(component_dirs)) for value in repos]
    try:
        asyncio.run(
            run_pipeline(
                repositories=repositories,
                brand_directory=brand_dir,
                output_directory=output_dir,
                embeddings=embeddings,
                provider=provider,
                embedding_model=embedding_model,
                batch_size=batch_size,
                verbose=verbose,
            )
        )
    except IngestionError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    main()
