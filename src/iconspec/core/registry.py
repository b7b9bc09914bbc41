"""Preset registry.

The registry is an explicitly constructed, immutable value. The pipeline
functions accept it as an argument (falling back to the built-in registry),
so tests and embedders can substitute synthetic presets without touching
global state.
"""

from collections.abc import Iterable, Iterator
from functools import lru_cache
from types import MappingProxyType

from iconspec.domain import (
    LineCap,
    LineJoin,
    PresetConstraints,
    PresetDefinition,
    PresetStyle,
)
from iconspec.exceptions import PresetNotFoundError

# Size whose entry is used when a preset has no entry for the requested size
REFERENCE_SIZE = 24
DEFAULT_STROKE_WIDTH = 2
DEFAULT_PADDING = 2

RECOMMENDED_SIZES = (16, 20, 24, 32, 48)

OUTLINE_STROKE_WIDTH_BY_SIZE = {16: 1.5, 20: 1.75, 24: 2, 32: 2.5, 48: 3}
OUTLINE_PADDING_BY_SIZE = {16: 1, 20: 2, 24: 2, 32: 3, 48: 4}
SOLID_STROKE_WIDTH_BY_SIZE = {16: 0, 20: 0, 24: 0, 32: 0, 48: 0}
SOLID_PADDING_BY_SIZE = {16: 1, 20: 1, 24: 2, 32: 2, 48: 3}

DEFAULT_CONSTRAINTS = PresetConstraints(
    grid_size=1,
    max_total_path_commands=160,
    max_paths=8,
)


class PresetRegistry:
    """Read-only table of presets keyed by id, in declared order.

    Example:
        registry = PresetRegistry([my_preset])
        preset = registry.get("my_preset")
        width = registry.stroke_width_for(preset, 32)
    """

    def __init__(self, presets: Iterable[PresetDefinition]) -> None:
        """Build the registry.

        Args:
            presets: Preset definitions in declared order

        Raises:
            ValueError: If two presets share a key
        """
        table: dict[str, PresetDefinition] = {}
        for preset in presets:
            if preset.key in table:
                raise ValueError(f"Duplicate preset key '{preset.key}'")
            table[preset.key] = preset
        self._presets = MappingProxyType(table)

    def get(self, key: str) -> PresetDefinition | None:
        """Look up a preset; None when the key is not registered."""
        return self._presets.get(key)

    def require(self, key: str) -> PresetDefinition:
        """Look up a preset that must exist.

        Raises:
            PresetNotFoundError: If the key is not registered
        """
        preset = self._presets.get(key)
        if preset is None:
            raise PresetNotFoundError(key)
        return preset

    def list_keys(self) -> list[str]:
        """Preset keys in declared order."""
        return list(self._presets)

    def __contains__(self, key: object) -> bool:
        return key in self._presets

    def __iter__(self) -> Iterator[PresetDefinition]:
        return iter(self._presets.values())

    def __len__(self) -> int:
        return len(self._presets)

    @staticmethod
    def stroke_width_for(preset: PresetDefinition, size: float) -> float:
        """Stroke width for size: exact entry, else the size-24 entry, else 2."""
        by_size = preset.stroke_width_by_size
        if size in by_size:
            return by_size[size]
        return by_size.get(REFERENCE_SIZE, DEFAULT_STROKE_WIDTH)

    @staticmethod
    def padding_for(preset: PresetDefinition, size: float) -> float:
        """Padding for size: exact entry, else the size-24 entry, else 2."""
        by_size = preset.padding_by_size
        if size in by_size:
            return by_size[size]
        return by_size.get(REFERENCE_SIZE, DEFAULT_PADDING)


def fallback_preset(key: str) -> PresetDefinition:
    """Stand-in preset used to expand drafts naming an unknown preset.

    It lets expansion always return a complete spec; the validator still
    reports the unknown key.
    """
    return PresetDefinition(
        key=key,
        name="Unknown",
        description="Fallback for an unregistered preset",
        recommended_sizes=(),
        stroke_width_by_size={},
        padding_by_size={},
        style=PresetStyle(
            stroke="currentColor",
            fill="none",
            line_cap=LineCap.ROUND,
            line_join=LineJoin.ROUND,
        ),
        constraints=PresetConstraints(grid_size=1),
    )


def builtin_presets() -> list[PresetDefinition]:
    """The four built-in style families, in declared order."""
    return [
        PresetDefinition(
            key="outline_rounded",
            name="Outline Rounded",
            description="Clean outlines with rounded corners and caps",
            recommended_sizes=RECOMMENDED_SIZES,
            stroke_width_by_size=OUTLINE_STROKE_WIDTH_BY_SIZE,
            padding_by_size=OUTLINE_PADDING_BY_SIZE,
            style=PresetStyle(
                stroke="currentColor",
                fill="none",
                line_cap=LineCap.ROUND,
                line_join=LineJoin.ROUND,
            ),
            constraints=DEFAULT_CONSTRAINTS,
        ),
        PresetDefinition(
            key="outline_sharp",
            name="Outline Sharp",
            description="Crisp outlines with square corners and caps",
            recommended_sizes=RECOMMENDED_SIZES,
            stroke_width_by_size=OUTLINE_STROKE_WIDTH_BY_SIZE,
            padding_by_size=OUTLINE_PADDING_BY_SIZE,
            style=PresetStyle(
                stroke="currentColor",
                fill="none",
                line_cap=LineCap.SQUARE,
                line_join=LineJoin.MITER,
            ),
            constraints=DEFAULT_CONSTRAINTS,
        ),
        PresetDefinition(
            key="solid",
            name="Solid",
            description="Filled shapes with no stroke",
            recommended_sizes=RECOMMENDED_SIZES,
            stroke_width_by_size=SOLID_STROKE_WIDTH_BY_SIZE,
            padding_by_size=SOLID_PADDING_BY_SIZE,
            style=PresetStyle(
                stroke="none",
                fill="currentColor",
                line_cap=LineCap.ROUND,
                line_join=LineJoin.ROUND,
            ),
            constraints=DEFAULT_CONSTRAINTS,
        ),
        PresetDefinition(
            key="duotone",
            name="Duotone",
            description="Two-tone style with shared fill/stroke",
            recommended_sizes=RECOMMENDED_SIZES,
            stroke_width_by_size=OUTLINE_STROKE_WIDTH_BY_SIZE,
            padding_by_size=OUTLINE_PADDING_BY_SIZE,
            style=PresetStyle(
                stroke="currentColor",
                fill="currentColor",
                line_cap=LineCap.ROUND,
                line_join=LineJoin.ROUND,
            ),
            constraints=DEFAULT_CONSTRAINTS,
        ),
    ]


@lru_cache(maxsize=1)
def get_default_registry() -> PresetRegistry:
    """The built-in registry, built once per process."""
    return PresetRegistry(builtin_presets())


def resolve_registry(registry: PresetRegistry | None) -> PresetRegistry:
    """Return registry, or the built-in one when None."""
    return registry if registry is not None else get_default_registry()
