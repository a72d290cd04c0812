"""Pydantic models describing the design space."""

from pydantic import BaseModel, Field

from design_navigator.models.components import SemanticPosition


class AxisPole(BaseModel):
    """One end of a design axis."""

    label: str
    tokens: list[str] = Field(default_factory=list)
    patterns: list[str] = Field(default_factory=list)


class DesignSpaceAxis(BaseModel):
    """A named design axis with its two poles."""

    id: str
    """Matches a SemanticPosition field name."""

    name: str
    negative: AxisPole
    positive: AxisPole


class PlatformDefinition(BaseModel):
    """Canonical placement of a platform in the design space."""

    id: str
    position: SemanticPosition
    primary_tokens: list[str] = Field(default_factory=list)


class DesignSpace(BaseModel):
    """The axes plus the canonical platform positions.

    Platform order is significant: earlier platforms win ties.
    """

    axes: list[DesignSpaceAxis] = Field(default_factory=list)
    platforms: list[PlatformDefinition] = Field(default_factory=list)

    def get_platform(self, platform_id: str) -> PlatformDefinition | None:
        """Return the platform definition with the given id, if any."""
        for platform in self.platforms:
            if platform.id == platform_id:
                return platform
        return None

    def get_axis(self, axis_id: str) -> DesignSpaceAxis | None:
        """Return the axis with the given id, if any."""
        for axis in self.axes:
            if axis.id == axis_id:
                return axis
        return None
