"""Default design space: the four axes and the canonical platform positions."""

from design_navigator.models import (
    AxisPole,
    DesignSpace,
    DesignSpaceAxis,
    PlatformDefinition,
    SemanticPosition,
)


def default_design_space() -> DesignSpace:
    """Return the built-in design space written by the ingestion pipeline."""
    return DesignSpace(
        axes=[
            DesignSpaceAxis(
                id="terminal_organic",
                name="Terminal ↔ Organic",
                negative=AxisPole(
                    label="Terminal",
                    tokens=["--verde", "--ink", "monospace"],
                    patterns=["scanlines", "gridSnapping"],
                ),
                positive=AxisPole(
                    label="Organic",
                    tokens=["--dawn", "--gold", "serif-accent"],
                    patterns=["breathing", "particleSystem"],
                ),
            ),
            DesignSpaceAxis(
                id="minimal_dense",
                name="Minimal ↔ Dense",
                negative=AxisPole(label="Minimal", tokens=["--void", "space-large"]),
                positive=AxisPole(
                    label="Dense",
                    tokens=["--surface-1", "space-tight"],
                    patterns=["glassmorphism", "cornerBrackets"],
                ),
            ),
            DesignSpaceAxis(
                id="cool_warm",
                name="Cool ↔ Warm",
                negative=AxisPole(label="Cool", tokens=["--verde", "--teal", "--ink"]),
                positive=AxisPole(
                    label="Warm", tokens=["--gold", "--dawn", "--signal"]
                ),
            ),
            DesignSpaceAxis(
                id="static_animated",
                name="Static ↔ Animated",
                negative=AxisPole(label="Static"),
                positive=AxisPole(
                    label="Animated",
                    patterns=["particleSystem", "breathing", "scanlines"],
                ),
            ),
        ],
        platforms=[
            PlatformDefinition(
                id="atlas",
                position=SemanticPosition(
                    terminal_organic=0.6,
                    minimal_dense=0.3,
                    cool_warm=0.5,
                    static_animated=0.4,
                ),
                primary_tokens=["--dawn", "--void", "--gold"],
            ),
            PlatformDefinition(
                id="ledger",
                position=SemanticPosition(
                    terminal_organic=-0.6,
                    minimal_dense=0.4,
                    cool_warm=-0.4,
                    static_animated=0.2,
                ),
                primary_tokens=["--verde", "--void", "--ink"],
            ),
            PlatformDefinition(
                id="astrolabe",
                position=SemanticPosition(
                    terminal_organic=0.2,
                    minimal_dense=0.2,
                    cool_warm=0.6,
                    static_animated=0.5,
                ),
                primary_tokens=["--gold", "--void", "--dawn"],
            ),
            PlatformDefinition(
                id="marketing",
                position=SemanticPosition(
                    terminal_organic=0.3,
                    minimal_dense=-0.2,
                    cool_warm=0.4,
                    static_animated=0.6,
                ),
                primary_tokens=["--gold", "--void", "--dawn"],
            ),
        ],
    )
