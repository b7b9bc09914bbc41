"""Preset expansion: draft + preset -> expanded spec.

The expander turns an author-supplied draft into a complete expanded spec:
it canonicalizes the viewBox, fills missing export settings, snaps geometry
numbers to the preset grid and copies the preset's resolved style and
constraints for the draft's size.

It never fails on content. An unknown preset, an off-size viewBox or
off-grid geometry all still produce an expanded spec; judging it is the
validator's job. Every alteration is recorded as a ChangeRecord, in a fixed
order (preset, viewBox, exports, paths, circles, rects, lines, polylines),
so that identical drafts always produce identical change logs.
"""

from collections.abc import Callable, Mapping
from functools import partial
from typing import Any

from iconspec.core.numbers import (
    collapse_whitespace,
    extract_numbers,
    format_number,
    rewrite_numbers,
    snap_number,
)
from iconspec.core.registry import PresetRegistry, fallback_preset, resolve_registry
from iconspec.domain import (
    ChangeRecord,
    ChangeType,
    ExpandOptions,
    ExpansionResult,
    ExportSettings,
    Geometry,
    GeometryEntry,
    IconConstraints,
    IconDraft,
    IconSpecExpanded,
    IconStyle,
    PathEntry,
    PolylineEntry,
    PresetDefinition,
)


def canonical_view_box(size: float) -> str:
    """The only accepted viewBox for an icon of the given size."""
    text = format_number(size)
    return f"0 0 {text} {text}"


def normalize_view_box(view_box: str, size: float) -> str:
    """Canonicalize a viewBox that should read "0 0 size size".

    Args:
        view_box: ViewBox as supplied
        size: Icon size

    Returns:
        The canonical viewBox string
    """
    numbers = extract_numbers(view_box)
    if numbers != [0, 0, size, size]:
        return canonical_view_box(size)
    return " ".join(format_number(value) for value in numbers)


def _identity(value: float) -> float:
    return value


class PresetExpander:
    """Expands drafts against a preset registry.

    Stateless; one instance may be shared freely.

    Example:
        expander = PresetExpander()
        result = expander.expand(draft)
        result.expanded.style.stroke_width  # 2 for a 24px outline icon
    """

    def __init__(self, registry: PresetRegistry | None = None) -> None:
        self.registry = resolve_registry(registry)

    def expand(
        self,
        draft: IconDraft | Mapping[str, Any],
        options: ExpandOptions | None = None,
    ) -> ExpansionResult:
        """Expand a draft.

        Args:
            draft: Draft model, or a mapping that parses as one
            options: Expansion flags (all enabled when None)

        Returns:
            ExpansionResult with the expanded spec and the change log

        Raises:
            pydantic.ValidationError: If a mapping does not parse as a draft
        """
        if not isinstance(draft, IconDraft):
            draft = IconDraft.model_validate(draft)
        if options is None:
            options = ExpandOptions()

        changes: list[ChangeRecord] = []

        preset = self.registry.get(draft.preset)
        if preset is None:
            preset = fallback_preset(draft.preset)
            changes.append(
                ChangeRecord(
                    type=ChangeType.UNKNOWN_PRESET,
                    json_path="$.preset",
                    before=draft.preset,
                    note="preset is not registered; fallback style applied",
                )
            )

        size = draft.size
        view_box = draft.view_box
        if options.normalize:
            view_box = normalize_view_box(draft.view_box, size)
            if view_box != draft.view_box:
                changes.append(
                    ChangeRecord(
                        type=ChangeType.NORMALIZE_VIEWBOX,
                        json_path="$.viewBox",
                        before=draft.view_box,
                        after=view_box,
                    )
                )

        exports = draft.exports
        if exports is None:
            exports = ExportSettings()
            changes.append(
                ChangeRecord(
                    type=ChangeType.FILL_MISSING_DEFAULTS,
                    json_path="$.exports",
                    after=exports.to_dict(),
                    note=(
                        None
                        if options.fill_missing_defaults
                        else "exports are required on an expanded spec"
                    ),
                )
            )

        geometry = self._expand_geometry(draft, preset, options, changes)

        return ExpansionResult(
            expanded=IconSpecExpanded(
                name=draft.name,
                preset=draft.preset,
                size=size,
                view_box=view_box,
                style=self._resolve_style(preset, size),
                constraints=self._resolve_constraints(preset, size),
                geometry=geometry,
                exports=exports,
            ),
            changes=changes,
        )

    def _resolve_style(self, preset: PresetDefinition, size: float) -> IconStyle:
        return IconStyle(
            stroke_width=self.registry.stroke_width_for(preset, size),
            stroke=preset.style.stroke,
            fill=preset.style.fill,
            line_cap=preset.style.line_cap.value,
            line_join=preset.style.line_join.value,
        )

    def _resolve_constraints(self, preset: PresetDefinition, size: float) -> IconConstraints:
        return IconConstraints(
            grid_size=preset.constraints.grid_size,
            padding=self.registry.padding_for(preset, size),
            max_total_path_commands=preset.constraints.max_total_path_commands,
            max_paths=preset.constraints.max_paths,
        )

    def _expand_geometry(
        self,
        draft: IconDraft,
        preset: PresetDefinition,
        options: ExpandOptions,
        changes: list[ChangeRecord],
    ) -> Geometry:
        grid_size = preset.constraints.grid_size or 1
        snap: Callable[[float], float] = (
            partial(snap_number, grid_size=grid_size) if options.snap_to_grid else _identity
        )
        rewrite_strings = options.normalize or options.snap_to_grid

        paths: list[PathEntry] = []
        for index, path in enumerate(draft.paths):
            d = path.d
            if rewrite_strings:
                d = collapse_whitespace(rewrite_numbers(path.d, snap))
            if d != path.d:
                changes.append(
                    ChangeRecord(
                        type=(
                            ChangeType.SNAP_TO_GRID
                            if options.snap_to_grid
                            else ChangeType.NORMALIZE_PATH
                        ),
                        json_path=f"$.paths[{index}].d",
                        before=path.d,
                        after=d,
                    )
                )
                path = path.model_copy(update={"d": d})
            paths.append(path)

        circles = self._snap_entries(
            draft.circles, ("cx", "cy", "r"), "circles", options, snap, changes
        )
        rects = self._snap_entries(
            draft.rects,
            ("x", "y", "width", "height", "rx", "ry"),
            "rects",
            options,
            snap,
            changes,
        )
        lines = self._snap_entries(
            draft.lines, ("x1", "y1", "x2", "y2"), "lines", options, snap, changes
        )

        polylines: list[PolylineEntry] = []
        for index, polyline in enumerate(draft.polylines):
            points = polyline.points
            if rewrite_strings:
                points = rewrite_numbers(polyline.points, snap)
            if points != polyline.points:
                changes.append(
                    ChangeRecord(
                        type=(
                            ChangeType.SNAP_TO_GRID
                            if options.snap_to_grid
                            else ChangeType.NORMALIZE_POINTS
                        ),
                        json_path=f"$.polylines[{index}].points",
                        before=polyline.points,
                        after=points,
                    )
                )
                polyline = polyline.model_copy(update={"points": points})
            polylines.append(polyline)

        return Geometry(
            paths=paths,
            circles=circles,
            rects=rects,
            lines=lines,
            polylines=polylines,
        )

    @staticmethod
    def _snap_entries(
        entries: list[GeometryEntry],
        fields: tuple[str, ...],
        kind: str,
        options: ExpandOptions,
        snap: Callable[[float], float],
        changes: list[ChangeRecord],
    ) -> list[GeometryEntry]:
        """Snap the numeric fields of shape entries, one record per changed entry."""
        if not options.snap_to_grid:
            return list(entries)

        result: list[GeometryEntry] = []
        for index, entry in enumerate(entries):
            update = {
                name: snap(getattr(entry, name))
                for name in fields
                if getattr(entry, name) is not None
            }
            if any(update[name] != getattr(entry, name) for name in update):
                snapped = entry.model_copy(update=update)
                changes.append(
                    ChangeRecord(
                        type=ChangeType.SNAP_TO_GRID,
                        json_path=f"$.{kind}[{index}]",
                        before=entry.to_dict(),
                        after=snapped.to_dict(),
                    )
                )
                entry = snapped
            result.append(entry)
        return result


def expand(
    draft: IconDraft | Mapping[str, Any],
    options: ExpandOptions | None = None,
    registry: PresetRegistry | None = None,
) -> ExpansionResult:
    """Expand a draft against registry (the built-in one when None)."""
    return PresetExpander(registry).expand(draft, options)
