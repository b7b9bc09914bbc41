"""Axis-aligned bounding boxes."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Bounds:
    """An axis-aligned bounding box.

    Attributes:
        min_x: Left edge
        min_y: Top edge
        max_x: Right edge
        max_y: Bottom edge
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def union(self, other: "Bounds | None") -> "Bounds":
        """Smallest box containing both boxes."""
        if other is None:
            return self
        return Bounds(
            min_x=min(self.min_x, other.min_x),
            min_y=min(self.min_y, other.min_y),
            max_x=max(self.max_x, other.max_x),
            max_y=max(self.max_y, other.max_y),
        )

    def expand(self, margin: float) -> "Bounds":
        """Grow the box by margin on every side."""
        return Bounds(
            min_x=self.min_x - margin,
            min_y=self.min_y - margin,
            max_x=self.max_x + margin,
            max_y=self.max_y + margin,
        )

    def within(self, low: float, high: float) -> bool:
        """Check that both axes lie inside [low, high]."""
        return (
            self.min_x >= low
            and self.min_y >= low
            and self.max_x <= high
            and self.max_y <= high
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "minX": self.min_x,
            "minY": self.min_y,
            "maxX": self.max_x,
            "maxY": self.max_y,
        }
