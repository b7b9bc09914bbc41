"""Preset definitions for icon style families.

A preset resolves everything an icon draft deliberately leaves out: stroke
width and padding per icon size, the fixed stroke/fill/cap/join quad and the
grid and complexity constraints the geometry is checked against.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class LineCap(str, Enum):
    """SVG stroke-linecap values."""

    ROUND = "round"
    SQUARE = "square"
    BUTT = "butt"


class LineJoin(str, Enum):
    """SVG stroke-linejoin values."""

    ROUND = "round"
    MITER = "miter"
    BEVEL = "bevel"


@dataclass(frozen=True, slots=True)
class PresetStyle:
    """Fixed style values shared by every icon of a preset.

    Attributes:
        stroke: Stroke paint (usually "currentColor" or "none")
        fill: Fill paint
        line_cap: Stroke line cap
        line_join: Stroke line join
    """

    stroke: str
    fill: str
    line_cap: LineCap
    line_join: LineJoin

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a camelCase dictionary."""
        return {
            "stroke": self.stroke,
            "fill": self.fill,
            "lineCap": self.line_cap.value,
            "lineJoin": self.line_join.value,
        }


@dataclass(frozen=True, slots=True)
class PresetConstraints:
    """Grid and complexity constraints of a preset.

    Attributes:
        grid_size: Grid unit geometry numbers are snapped to
        max_total_path_commands: Soft budget for path command letters
        max_paths: Soft budget for the number of path entries
    """

    grid_size: float = 1
    max_total_path_commands: int | None = None
    max_paths: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a camelCase dictionary, omitting unset budgets."""
        data: dict[str, Any] = {"gridSize": self.grid_size}
        if self.max_total_path_commands is not None:
            data["maxTotalPathCommands"] = self.max_total_path_commands
        if self.max_paths is not None:
            data["maxPaths"] = self.max_paths
        return data


@dataclass(frozen=True)
class PresetDefinition:
    """A named style family.

    Immutable; the size maps are wrapped in read-only proxies on construction.

    Attributes:
        key: Registry key (e.g. "outline_rounded")
        name: Human readable name
        description: One-line description
        recommended_sizes: Icon sizes the preset is tuned for
        stroke_width_by_size: Icon size -> stroke width
        padding_by_size: Icon size -> padding
        style: Fixed stroke/fill/cap/join quad
        constraints: Grid and complexity constraints
    """

    key: str
    name: str
    description: str
    recommended_sizes: tuple[int, ...]
    stroke_width_by_size: Mapping[float, float]
    padding_by_size: Mapping[float, float]
    style: PresetStyle
    constraints: PresetConstraints = field(default_factory=PresetConstraints)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "stroke_width_by_size", MappingProxyType(dict(self.stroke_width_by_size))
        )
        object.__setattr__(self, "padding_by_size", MappingProxyType(dict(self.padding_by_size)))
        object.__setattr__(self, "recommended_sizes", tuple(self.recommended_sizes))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a camelCase dictionary.

        Returns:
            Dictionary representation of the preset
        """
        return {
            "id": self.key,
            "name": self.name,
            "description": self.description,
            "recommendedSizes": list(self.recommended_sizes),
            "strokeWidthBySize": {str(k): v for k, v in self.stroke_width_by_size.items()},
            "paddingBySize": {str(k): v for k, v in self.padding_by_size.items()},
            "style": self.style.to_dict(),
            "constraints": self.constraints.to_dict(),
        }
