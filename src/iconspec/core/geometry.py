"""Geometric estimates for icon geometry.

This module provides bounding boxes for every geometry kind:
- Circles, rects and lines: exact boxes
- Path data and point lists: a heuristic box

The heuristic reads the numbers in path data pairwise as raw (x, y) samples.
It ignores command semantics entirely: relative coordinates, arc flags and
radii, and curve control points are all treated as absolute positions. A
relative path such as "M3 9l9-7" therefore contributes a sample at (9, -7).
This is deliberate; bounds thresholds downstream are tuned against exactly
this estimate, so it must not be replaced by true curve extrema.

All functions are pure and stateless.
"""

import math
from collections.abc import Sequence

from iconspec.core.numbers import extract_numbers
from iconspec.domain import Bounds, CircleEntry, Geometry, LineEntry, RectEntry


def pairwise_bounds(numbers: Sequence[float]) -> Bounds | None:
    """Bounding box of numbers read as consecutive (x, y) pairs.

    A trailing unpaired number is ignored, as are pairs with a non-finite
    member.

    Args:
        numbers: Flat sequence x0, y0, x1, y1, ...

    Returns:
        Bounds of the samples, or None if there are none

    Examples:
        >>> pairwise_bounds([3, 9, 9, -7])
        Bounds(min_x=3, min_y=-7, max_x=9, max_y=9)
    """
    bounds: Bounds | None = None
    for i in range(0, len(numbers) - 1, 2):
        x, y = numbers[i], numbers[i + 1]
        if not (math.isfinite(x) and math.isfinite(y)):
            continue
        sample = Bounds(x, y, x, y)
        bounds = sample if bounds is None else bounds.union(sample)
    return bounds


def path_bounds(path_data: str) -> Bounds | None:
    """Heuristic bounds of path data (see module docstring)."""
    return pairwise_bounds(extract_numbers(path_data))


def points_bounds(points: str) -> Bounds | None:
    """Bounds of a polyline point list."""
    return pairwise_bounds(extract_numbers(points))


def circle_bounds(circle: CircleEntry) -> Bounds:
    return Bounds(
        min_x=circle.cx - circle.r,
        min_y=circle.cy - circle.r,
        max_x=circle.cx + circle.r,
        max_y=circle.cy + circle.r,
    )


def rect_bounds(rect: RectEntry) -> Bounds:
    return Bounds(
        min_x=rect.x,
        min_y=rect.y,
        max_x=rect.x + rect.width,
        max_y=rect.y + rect.height,
    )


def line_bounds(line: LineEntry) -> Bounds:
    return Bounds(
        min_x=min(line.x1, line.x2),
        min_y=min(line.y1, line.y2),
        max_x=max(line.x1, line.x2),
        max_y=max(line.y1, line.y2),
    )


def merge_bounds(a: Bounds | None, b: Bounds | None) -> Bounds | None:
    """Union of two optional boxes."""
    if a is None:
        return b
    return a.union(b)


def geometry_bounds(geometry: Geometry) -> Bounds | None:
    """Estimated bounds of all geometry, before stroke expansion.

    Args:
        geometry: Geometry collections of an expanded spec

    Returns:
        Union of per-entry bounds, or None for empty geometry
    """
    bounds: Bounds | None = None
    for path in geometry.paths:
        bounds = merge_bounds(bounds, path_bounds(path.d))
    for circle in geometry.circles:
        bounds = merge_bounds(bounds, circle_bounds(circle))
    for rect in geometry.rects:
        bounds = merge_bounds(bounds, rect_bounds(rect))
    for line in geometry.lines:
        bounds = merge_bounds(bounds, line_bounds(line))
    for polyline in geometry.polylines:
        bounds = merge_bounds(bounds, points_bounds(polyline.points))
    return bounds
