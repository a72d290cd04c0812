# src/design_navigator/cli/display.py

"""Display and formatting utilities for CLI output."""

import textwrap

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from design_navigator.models import (
    AnchorActivationResult,
    ComponentGraph,
    ComponentMatch,
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
    ValidationReport,
)

STATUS_STYLES = {
    "approved": "green",
    "expansion": "cyan",
    "edge_case": "yellow",
    "violation": "red",
}


def _wrap_line(line: str, width: int) -> list[str]:
    """Wrap a single line and pad each segment to the target width."""
    if not line.strip():
        return [" " * width]
    segments = textwrap.wrap(
        line,
        width=width,
        replace_whitespace=True,
        drop_whitespace=True,
        break_long_words=True,
        break_on_hyphens=True,
    )
    return [segment.ljust(width) for segment in segments] or [" " * width]


def _format_text_for_panel(text_content: str | None, width: int = 80) -> str:
    """Wrap text and pad lines to a fixed content width for a Panel.

    Args:
        text_content: The text to format.
        width: The target width for wrapped text.

    Returns:
        Formatted text with paragraphs separated by a blank padded line.
    """
    if not text_content or not text_content.strip():
        return " " * width

    output_lines: list[str] = []
    paragraphs = [p for p in text_content.split("\n\n") if p.strip()]
    for i, paragraph in enumerate(paragraphs):
        for line in paragraph.splitlines():
            output_lines.extend(_wrap_line(line, width))
        if i < len(paragraphs) - 1:
            output_lines.append(" " * width)
    return "\n".join(output_lines)


def _format_position(position: SemanticPosition) -> str:
    return ", ".join(
        f"{axis}={value:+.2f}" for axis, value in position.model_dump().items()
    )


def _mode_line(mode: str, processing_time_ms: int | None) -> str:
    time_info = f" Time: {processing_time_ms}ms" if processing_time_ms else ""
    return f"[dim]Mode: {mode}.{time_info}[/dim]"


def _matches_table(matches: list[ComponentMatch], title: str) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Component", style="bold cyan")
    table.add_column("Platform", style="green")
    table.add_column("Similarity", justify="right")
    table.add_column("Path", style="dim")
    for i, match in enumerate(matches, start=1):
        table.add_row(
            str(i), match.id, match.platform, f"{match.similarity:.3f}", match.path
        )
    return table


def _print_list(console: Console, label: str, items: list[str]) -> None:
    if items:
        console.print(f"[bold cyan]{label}:[/bold cyan] {', '.join(items)}")


def display_match_result(result: MatchResult, console: Console | None = None) -> None:
    """Display components matching a free-text reference.

    Args:
        result: Match result to display.
        console: Console to print to. A new stdout console is used if None.
    """
    console = console or Console()
    console.print(
        Panel(
            f"[bold cyan]Reference:[/bold cyan] {result.query}",
            expand=False,
            border_style="dim",
        )
    )
    console.print(_mode_line(result.mode, result.processing_time_ms))
    if not result.matches:
        console.print("[yellow]No matching components found.[/yellow]")
        return

    console.print(_matches_table(result.matches, "Matches"))
    _print_list(console, "Suggested tokens", result.suggested_tokens)
    _print_list(console, "Suggested patterns", result.suggested_patterns)
    if result.implementation_path:
        console.print(
            Panel(
                "\n".join(
                    f"{i}. {step}"
                    for i, step in enumerate(result.implementation_path, start=1)
                ),
                title="[bold green]Implementation path[/bold green]",
                border_style="green",
                expand=False,
                padding=(0, 1),
            )
        )


def display_position_result(
    result: PositionSearchResult, console: Console | None = None
) -> None:
    """Display the components nearest to a design-space position."""
    console = console or Console()
    position = _format_position(result.position)
    console.print(f"[bold cyan]Position:[/bold cyan] {position}")
    if not result.matches:
        console.print("[yellow]No components indexed.[/yellow]")
        return
    console.print(_matches_table(result.matches, "Nearest components"))


def display_projection_result(
    result: ProjectionResult, console: Console | None = None
) -> None:
    """Display a reference projected onto several platforms."""
    console = console or Console()
    console.print(
        Panel(
            f"[bold cyan]Reference:[/bold cyan] {result.reference}",
            expand=False,
            border_style="dim",
        )
    )
    console.print(_mode_line(result.mode, result.processing_time_ms))
    if result.base_matches:
        console.print(_matches_table(result.base_matches, "Base matches"))

    for projection in result.projections:
        console.rule(f"[bold]{projection.platform}[/bold]", style="dim")
        console.print(
            Panel(
                _format_text_for_panel(projection.description),
                border_style="magenta",
                expand=False,
                padding=(0, 1),
            )
        )
        _print_list(console, "Tokens", projection.tokens)
        _print_list(console, "Patterns", projection.patterns)
        _print_list(console, "Similar components", projection.similar_components)
        console.print(
            "[bold cyan]Position:[/bold cyan] "
            + _format_position(projection.position_adjustments)
        )
    if not result.projections:
        console.print("[yellow]No known platforms requested.[/yellow]")


def display_interpolation_result(
    result: InterpolationResult, console: Console | None = None
) -> None:
    """Display the steps of an interpolation between two components."""
    console = console or Console()
    console.print(
        f"[bold cyan]Interpolating[/bold cyan] {result.component_a} "
        f"[dim]->[/dim] {result.component_b}"
    )
    table = Table(show_lines=True)
    table.add_column("Ratio", justify="right")
    table.add_column("Position")
    table.add_column("Tokens")
    table.add_column("Patterns")
    table.add_column("Description")
    for step in result.steps:
        table.add_row(
            f"{step.ratio:.2f}",
            _format_position(step.position),
            ", ".join(step.tokens),
            ", ".join(step.patterns),
            step.description,
        )
    console.print(table)


def display_exploration_result(
    result: ExplorationResult, console: Console | None = None
) -> None:
    """Display the neighbourhood of a design-space position."""
    console = console or Console()
    position = _format_position(result.position)
    console.print(f"[bold cyan]Position:[/bold cyan] {position}")
    if result.nearest_platform:
        console.print(
            f"[bold cyan]Nearest platform:[/bold cyan] [green]{result.nearest_platform}"
            f"[/green] (distance {result.platform_distance:.3f})"
        )
    _print_list(console, "Suggested tokens", result.suggested_tokens)
    _print_list(console, "Suggested patterns", result.suggested_patterns)
    if result.components:
        console.print(_matches_table(result.components, "Nearby components"))


def display_corpus_results(
    result: CorpusSearchResult, console: Console | None = None, width: int = 80
) -> None:
    """Display brand corpus search hits as panels."""
    console = console or Console()
    console.print(
        Panel(
            f"[bold cyan]Search Query:[/bold cyan] {result.query}",
            expand=False,
            border_style="dim",
        )
    )
    console.print(_mode_line(result.mode, result.processing_time_ms))
    if not result.results:
        console.print("[yellow]No results found.[/yellow]")
        return

    for hit in result.results:
        console.print(
            Panel(
                _format_text_for_panel(hit.content, width=width),
                title=f"[bold blue]{hit.title}[/bold blue] [dim]({hit.category})[/dim]",
                subtitle=f"{hit.similarity:.3f}",
                border_style="blue",
                expand=False,
                padding=(0, 1),
            )
        )


def display_anchor_activations(
    result: AnchorActivationResult, console: Console | None = None
) -> None:
    """Display anchors ranked by activation."""
    console = console or Console()
    console.print(_mode_line(result.mode, result.processing_time_ms))
    if not result.activations:
        console.print("[yellow]No anchors indexed.[/yellow]")
        return
    table = Table(title="Anchor activation")
    table.add_column("Anchor", style="bold cyan")
    table.add_column("Score", justify="right")
    for activation in result.activations:
        table.add_row(activation.anchor, f"{activation.score:.3f}")
    console.print(table)


def display_platform_detection(
    result: PlatformDetection, console: Console | None = None
) -> None:
    """Display the detected platform and the runner-up."""
    console = console or Console()
    console.print(_mode_line(result.mode, result.processing_time_ms))
    console.print(
        f"[bold cyan]Platform:[/bold cyan] [green]{result.platform}[/green] "
        f"(score {result.score:.3f})"
    )
    if result.runner_up:
        console.print(
            f"[bold cyan]Runner-up:[/bold cyan] {result.runner_up.platform} "
            f"(score {result.runner_up.score:.3f})"
        )


def display_drift_result(result: DriftResult, console: Console | None = None) -> None:
    """Display the drift of a request from a platform identity."""
    console = console or Console()
    style = STATUS_STYLES.get(result.status, "white")
    console.print(_mode_line(result.mode, result.processing_time_ms))
    console.print(
        Panel(
            f"[bold]Platform:[/bold] {result.platform}\n"
            f"[bold]Drift:[/bold] {result.drift_score:.3f}  "
            f"[bold]Alignment:[/bold] {result.alignment_score:.3f}\n"
            f"[bold {style}]{result.status}[/bold {style}]: {result.interpretation}",
            title="[bold]Drift[/bold]",
            border_style=style,
            expand=False,
        )
    )


def display_validation_report(
    report: ValidationReport, console: Console | None = None
) -> None:
    """Display a full validation report."""
    console = console or Console()
    style = STATUS_STYLES.get(report.status, "white")
    console.print(_mode_line(report.mode, report.processing_time_ms))
    console.print(
        Panel(
            f"[bold]Platform:[/bold] {report.platform} "
            f"(confidence {report.platform_confidence:.3f})\n"
            f"[bold]Drift:[/bold] {report.drift_score:.3f}\n"
            f"[bold {style}]{report.status}[/bold {style}]: {report.interpretation}",
            title="[bold]Validation[/bold]",
            border_style=style,
            expand=False,
        )
    )
    top_anchors = [
        f"{activation.anchor} ({activation.score:.2f})"
        for activation in report.activated_anchors[:3]
    ]
    _print_list(console, "Activated anchors", top_anchors)
    _print_list(console, "Suggested patterns", report.suggested_patterns)
    _print_list(console, "Suggested components", report.suggested_components)
    if report.violated_antipatterns:
        console.print(
            "[bold red]Antipatterns:[/bold red] "
            + ", ".join(report.violated_antipatterns)
        )


def display_component(
    component: ComponentRecord, console: Console | None = None
) -> None:
    """Display one component record in full."""
    console = console or Console()
    console.rule(f"[bold]{component.id}[/bold]", style="dim")
    console.print(f"[bold cyan]Name:[/bold cyan] {component.name}")
    console.print(
        f"[bold cyan]Platform:[/bold cyan] [green]{component.platform}[/green]"
    )
    console.print(f"[bold cyan]Path:[/bold cyan] [dim]{component.path}[/dim]")
    position = _format_position(component.semantic_position)
    console.print(f"[bold cyan]Position:[/bold cyan] {position}")
    console.print(
        Panel(
            _format_text_for_panel(component.description),
            title="[bold green]Description[/bold green]",
            border_style="green",
            expand=False,
            padding=(0, 1),
        )
    )
    _print_list(console, "Tokens", component.tokens)
    _print_list(console, "Patterns", component.patterns)
    _print_list(console, "Anchors", component.anchors)
    _print_list(console, "Related", component.related_components)
    if component.implementation:
        console.print(
            f"[bold cyan]Implementation:[/bold cyan] {component.implementation}"
        )


def display_component_list(
    components: list[ComponentRecord], console: Console | None = None
) -> None:
    """Display a table of components."""
    console = console or Console()
    if not components:
        console.print("[yellow]No components found.[/yellow]")
        return
    table = Table(title=f"{len(components)} components")
    table.add_column("Component", style="bold cyan")
    table.add_column("Platform", style="green")
    table.add_column("Type")
    table.add_column("Lines", justify="right")
    table.add_column("Patterns")
    for component in components:
        table.add_row(
            component.id,
            component.platform,
            component.file_type,
            str(component.line_count),
            ", ".join(component.patterns),
        )
    console.print(table)


def display_design_space(space: DesignSpace, console: Console | None = None) -> None:
    """Display the axes and canonical platform positions."""
    console = console or Console()
    axes = Table(title="Axes")
    axes.add_column("Axis", style="bold cyan")
    axes.add_column("Negative")
    axes.add_column("Positive")
    for axis in space.axes:
        axes.add_row(axis.name, axis.negative.label, axis.positive.label)
    console.print(axes)

    platforms = Table(title="Platforms")
    platforms.add_column("Platform", style="green")
    platforms.add_column("Position")
    platforms.add_column("Primary tokens")
    for platform in space.platforms:
        platforms.add_row(
            platform.id,
            _format_position(platform.position),
            ", ".join(platform.primary_tokens),
        )
    console.print(platforms)


def display_graph(graph: ComponentGraph, console: Console | None = None) -> None:
    """Display the edges of the component graph."""
    console = console or Console()
    console.print(f"{len(graph.nodes)} nodes, {len(graph.edges)} edges")
    if not graph.edges:
        return
    table = Table()
    table.add_column("Source", style="bold cyan")
    table.add_column("Relationship", style="magenta")
    table.add_column("Target", style="bold cyan")
    for edge in graph.edges:
        table.add_row(edge.source, edge.relationship, edge.target)
    console.print(table)


def display_stats(stats: IndexStats, console: Console | None = None) -> None:
    """Display a summary of the loaded index."""
    console = console or Console()
    table = Table(title="Index", show_header=False)
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")
    table.add_row("Mode", stats.mode)
    table.add_row("Records", str(stats.record_count))
    for category, count in sorted(stats.categories.items()):
        table.add_row(f"  {category}", str(count))
    table.add_row("Components", str(stats.component_count))
    for platform, count in sorted(stats.platforms.items()):
        table.add_row(f"  {platform}", str(count))
    table.add_row("Fingerprints", str(stats.fingerprint_count))
    console.print(table)
