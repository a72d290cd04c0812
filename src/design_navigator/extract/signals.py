"""Heuristic placement of components in the design space.

Each entry of SIGNALS pairs a predicate over the extracted facts of a file with
the axis deltas it contributes. A component's semantic position is the sum of
the deltas of every signal that fires, clamped to [-1, 1] per axis.
"""

import re
from dataclasses import dataclass, field
from typing import Callable

from design_navigator.models import AXES, SemanticPosition
from design_navigator.models.components import clamp


@dataclass
class SignalContext:
    """Facts about one source file that signals are evaluated against."""

    content: str
    tokens: list[str] = field(default_factory=list)
    patterns: list[str] = field(default_factory=list)
    platform: str = "shared"

    @property
    def line_count(self) -> int:
        return len(self.content.split("\n"))

    def has_token(self, *fragments: str) -> bool:
        return any(fragment in token for token in self.tokens for fragment in fragments)

    def has_pattern(self, *names: str) -> bool:
        return any(name in self.patterns for name in names)

    def mentions(self, regex: str) -> bool:
        return re.search(regex, self.content, re.IGNORECASE) is not None


@dataclass(frozen=True)
class Signal:
    """A named heuristic and the axis deltas it applies when it fires."""

    name: str
    deltas: dict[str, float]
    fires: Callable[[SignalContext], bool]


SIGNALS: tuple[Signal, ...] = (
    Signal(
        "terminal_texture",
        {"terminal_organic": -0.4},
        lambda ctx: ctx.has_pattern("scanlines")
        or ctx.mentions(r"monospace|PT Mono|terminal"),
    ),
    Signal(
        "organic_forms",
        {"terminal_organic": 0.4},
        lambda ctx: ctx.has_pattern("breathing")
        or ctx.mentions(r"organic|radial|creature|entity"),
    ),
    Signal(
        "verde_token", {"terminal_organic": -0.2}, lambda ctx: ctx.has_token("verde")
    ),
    Signal("dawn_token", {"terminal_organic": 0.2}, lambda ctx: ctx.has_token("dawn")),
    Signal("short_file", {"minimal_dense": -0.3}, lambda ctx: ctx.line_count < 100),
    Signal("long_file", {"minimal_dense": 0.3}, lambda ctx: ctx.line_count > 300),
    Signal(
        "minimal_vocabulary",
        {"minimal_dense": -0.2},
        lambda ctx: ctx.mentions(r"simple|minimal|clean"),
    ),
    Signal(
        "dense_vocabulary",
        {"minimal_dense": 0.2},
        lambda ctx: ctx.mentions(r"complex|rich|detailed|parameter"),
    ),
    Signal(
        "cool_tokens",
        {"cool_warm": -0.4},
        lambda ctx: ctx.has_token("verde", "teal"),
    ),
    Signal(
        "warm_tokens",
        {"cool_warm": 0.4},
        lambda ctx: ctx.has_token("gold", "dawn", "signal"),
    ),
    Signal(
        "animated_patterns",
        {"static_animated": 0.5},
        lambda ctx: ctx.has_pattern("particleSystem", "breathing"),
    ),
    Signal(
        "animation_vocabulary",
        {"static_animated": 0.3},
        lambda ctx: ctx.mentions(r"animation|transition|animate|requestAnimationFrame"),
    ),
    Signal(
        "static_vocabulary",
        {"static_animated": -0.3},
        lambda ctx: ctx.mentions(r"static|no-animation|immediate"),
    ),
    Signal(
        "ledger_bias",
        {"terminal_organic": -0.2, "cool_warm": -0.1},
        lambda ctx: ctx.platform == "ledger",
    ),
    Signal(
        "atlas_bias",
        {"terminal_organic": 0.2, "cool_warm": 0.1},
        lambda ctx: ctx.platform == "atlas",
    ),
)


def fired_signals(
    context: SignalContext, signals: tuple[Signal, ...] = SIGNALS
) -> list[Signal]:
    """Return the signals that fire for the given context, in table order."""
    return [signal for signal in signals if signal.fires(context)]


def semantic_position(
    context: SignalContext, signals: tuple[Signal, ...] = SIGNALS
) -> SemanticPosition:
    """Sum the deltas of every firing signal and clamp each axis.

    Args:
        context: Extracted facts about a source file.
        signals: Signal table to evaluate. Defaults to SIGNALS.

    Returns:
        The component's position in the design space.
    """
    totals = dict.fromkeys(AXES, 0.0)
    for signal in fired_signals(context, signals):
        for axis, delta in signal.deltas.items():
            totals[axis] += delta
    return SemanticPosition(**{axis: clamp(value) for axis, value in totals.items()})
