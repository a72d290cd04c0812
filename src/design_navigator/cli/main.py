"""Command-Line Interface for the design navigator.

Provides commands to match, project, interpolate and explore design components
and to validate design requests against platform identities, all against the
locally generated semantic index.
"""

import asyncio
from typing import Callable

import typer
from pydantic import BaseModel
from rich.console import Console

from design_navigator.cli.display import (
    display_anchor_activations,
    display_component,
    display_component_list,
    display_corpus_results,
    display_design_space,
    display_drift_result,
    display_exploration_result,
    display_graph,
    display_interpolation_result,
    display_match_result,
    display_platform_detection,
    display_position_result,
    display_projection_result,
    display_stats,
    display_validation_report,
)
from design_navigator.exceptions import DesignNavigatorError
from design_navigator.models import SemanticPosition
from design_navigator.search.service import Service
from design_navigator.util import setup_logging

app = typer.Typer(
    name="design-navigator",
    help="Navigate, project and validate designs in a component design space.",
    add_completion=False,
    rich_markup_mode="markdown",
)


def _get_console(use_stderr: bool = False) -> Console:
    """Create a Rich console instance.

    Args:
        use_stderr: Print to stderr instead of stdout.

    Returns:
        Configured Console instance.
    """
    return Console(stderr=use_stderr)


def _load_service() -> Service:
    return Service.from_config()


def _fail(error: Exception) -> typer.Exit:
    """Print an error to stderr and return the exit to raise."""
    error_console = _get_console(use_stderr=True)
    error_console.print(f"[bold red]Error: {error}[/bold red]")
    return typer.Exit(code=1)


def _emit(result: BaseModel, display: Callable, as_json: bool) -> None:
    console = _get_console()
    if as_json:
        console.print_json(result.model_dump_json())
    else:
        display(result, console=console)


def _position(
    terminal_organic: float,
    minimal_dense: float,
    cool_warm: float,
    static_animated: float,
) -> SemanticPosition:
    return SemanticPosition(
        terminal_organic=terminal_organic,
        minimal_dense=minimal_dense,
        cool_warm=cool_warm,
        static_animated=static_animated,
    )


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging."),
):
    """Configure logging for every command."""
    setup_logging(verbose)


# --- Navigation ---


async def _match_async(
    query: str, platform: str | None, limit: int, threshold: float, as_json: bool
) -> None:
    try:
        service = _load_service()
        result = await service.match(
            query, platform=platform, limit=limit, threshold=threshold
        )
    except DesignNavigatorError as e:
        raise _fail(e) from e
    _emit(result, display_match_result, as_json)


@app.command("match")
def match_command(
    query: str = typer.Argument(..., help="Description of the desired component."),
    platform: str | None = typer.Option(
        None, "--platform", "-p", help="Only match this platform and shared ones."
    ),
    limit: int = typer.Option(5, "--limit", "-n", help="Maximum number of matches."),
    threshold: float = typer.Option(0.3, "--threshold", help="Minimum similarity."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Find components similar to a free-text reference."""
    asyncio.run(_match_async(query, platform, limit, threshold, as_json))


async def _project_async(
    reference: str, platforms: list[str] | None, as_json: bool
) -> None:
    try:
        service = _load_service()
        result = await service.project(reference, platforms or None)
    except DesignNavigatorError as e:
        raise _fail(e) from e
    _emit(result, display_projection_result, as_json)


@app.command("project")
def project_command(
    reference: str = typer.Argument(..., help="Description of the reference design."),
    platforms: list[str] | None = typer.Option(
        None, "--platform", "-p", help="Target platform (repeatable, keeps order)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Project a reference onto several platforms."""
    asyncio.run(_project_async(reference, platforms, as_json))


@app.command("interpolate")
def interpolate_command(
    component_a: str = typer.Argument(..., help="Start component id or name."),
    component_b: str = typer.Argument(..., help="End component id or name."),
    steps: int = typer.Option(5, "--steps", "-s", min=1, help="Number of intervals."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Blend two components step by step."""
    try:
        result = _load_service().interpolate(component_a, component_b, steps)
    except DesignNavigatorError as e:
        raise _fail(e) from e
    _emit(result, display_interpolation_result, as_json)


@app.command("explore")
def explore_command(
    terminal_organic: float = typer.Option(0.0, "--terminal-organic", "-t"),
    minimal_dense: float = typer.Option(0.0, "--minimal-dense", "-m"),
    cool_warm: float = typer.Option(0.0, "--cool-warm", "-c"),
    static_animated: float = typer.Option(0.0, "--static-animated", "-a"),
    limit: int = typer.Option(5, "--limit", "-n", help="Maximum nearby components."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Describe the neighbourhood of a position given by axis sliders."""
    position = _position(terminal_organic, minimal_dense, cool_warm, static_animated)
    try:
        result = _load_service().explore(position, limit)
    except DesignNavigatorError as e:
        raise _fail(e) from e
    _emit(result, display_exploration_result, as_json)


@app.command("position")
def position_command(
    terminal_organic: float = typer.Option(0.0, "--terminal-organic", "-t"),
    minimal_dense: float = typer.Option(0.0, "--minimal-dense", "-m"),
    cool_warm: float = typer.Option(0.0, "--cool-warm", "-c"),
    static_animated: float = typer.Option(0.0, "--static-animated", "-a"),
    limit: int = typer.Option(5, "--limit", "-n", help="Maximum number of results."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Rank components by closeness to a design-space position."""
    position = _position(terminal_organic, minimal_dense, cool_warm, static_animated)
    try:
        result = _load_service().search_by_position(position, limit)
    except DesignNavigatorError as e:
        raise _fail(e) from e
    _emit(result, display_position_result, as_json)


async def _search_async(
    query: str, category: str | None, limit: int, threshold: float, as_json: bool
) -> None:
    try:
        service = _load_service()
        result = await service.search_corpus(
            query, category=category, limit=limit, threshold=threshold
        )
    except DesignNavigatorError as e:
        raise _fail(e) from e
    _emit(result, display_corpus_results, as_json)


@app.command("search")
def search_command(
    query: str = typer.Argument(..., help="The search query string."),
    category: str | None = typer.Option(
        None, "--category", help="Only search one record category."
    ),
    limit: int = typer.Option(5, "--limit", "-n", help="Maximum number of results."),
    threshold: float = typer.Option(0.5, "--threshold", help="Minimum similarity."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Search the brand corpus (philosophy, anchors, patterns, references)."""
    asyncio.run(_search_async(query, category, limit, threshold, as_json))


# --- Validation ---


async def _anchors_async(request: str, as_json: bool) -> None:
    try:
        result = await _load_service().activate_anchors(request)
    except DesignNavigatorError as e:
        raise _fail(e) from e
    _emit(result, display_anchor_activations, as_json)


@app.command("anchors")
def anchors_command(
    request: str = typer.Argument(..., help="Design request text."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Rank anchors by how strongly a request activates them."""
    asyncio.run(_anchors_async(request, as_json))


async def _detect_async(request: str, as_json: bool) -> None:
    try:
        result = await _load_service().detect_platform(request)
    except DesignNavigatorError as e:
        raise _fail(e) from e
    _emit(result, display_platform_detection, as_json)


@app.command("detect")
def detect_command(
    request: str = typer.Argument(..., help="Design request text."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Detect the platform a request fits best."""
    asyncio.run(_detect_async(request, as_json))


async def _drift_async(request: str, platform: str, as_json: bool) -> None:
    try:
        result = await _load_service().drift(request, platform)
    except DesignNavigatorError as e:
        raise _fail(e) from e
    _emit(result, display_drift_result, as_json)


@app.command("drift")
def drift_command(
    request: str = typer.Argument(..., help="Design request text."),
    platform: str = typer.Option(..., "--platform", "-p", help="Target platform."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Measure how far a request drifts from a platform identity."""
    asyncio.run(_drift_async(request, platform, as_json))


async def _validate_async(request: str, platform: str | None, as_json: bool) -> None:
    try:
        result = await _load_service().validate(request, platform)
    except DesignNavigatorError as e:
        raise _fail(e) from e
    _emit(result, display_validation_report, as_json)


@app.command("validate")
def validate_command(
    request: str = typer.Argument(..., help="Design request text."),
    platform: str | None = typer.Option(
        None, "--platform", "-p", help="Target platform. Detected when omitted."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Run the full validation of a design request."""
    asyncio.run(_validate_async(request, platform, as_json))


# --- Lookups ---


@app.command("component")
def component_command(
    identifier: str = typer.Argument(..., help="Component id or name."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Show one component."""
    try:
        component = _load_service().get_component(identifier)
    except DesignNavigatorError as e:
        raise _fail(e) from e
    _emit(component, display_component, as_json)


@app.command("components")
def components_command(
    platform: str | None = typer.Option(
        None, "--platform", "-p", help="Only list this platform."
    ),
):
    """List indexed components."""
    components = _load_service().list_components(platform)
    display_component_list(components, console=_get_console())


@app.command("space")
def space_command(
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Show the design space axes and platform positions."""
    _emit(_load_service().get_design_space(), display_design_space, as_json)


@app.command("graph")
def graph_command(
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Show the component relationship graph."""
    _emit(_load_service().get_component_graph(), display_graph, as_json)


@app.command("stats")
def stats_command(
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Summarize the loaded index."""
    _emit(_load_service().get_stats(), display_stats, as_json)


if __name__ == "__main__":
    app()
