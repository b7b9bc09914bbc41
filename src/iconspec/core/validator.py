"""Validation of expanded icon specs.

The validator checks an expanded spec against the preset registry and a set
of structural and geometric rules, and reports every finding as a
ValidationIssue. It never raises: malformed or untrusted input is reported
as schema issues.

Checks, in report order:
- Schema conformance (short-circuits when the document is unusable)
- Preset identity, style and constraints conformance
- viewBox form
- Per-shape style prohibition
- Grid alignment
- Bounds (heuristic, see iconspec.core.geometry)
- Complexity budgets (warnings only)
- Export settings
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from iconspec.core.geometry import geometry_bounds
from iconspec.core.numbers import count_commands, extract_numbers, is_grid_multiple
from iconspec.core.registry import PresetRegistry, resolve_registry
from iconspec.domain import (
    GEOMETRY_KINDS,
    IconSpecExpanded,
    IssueCode,
    PresetDefinition,
    Severity,
    ValidationIssue,
    ValidationMetrics,
    ValidationResult,
)

GRID_EPSILON = 1e-6

_IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

# Union member tags pydantic inserts into error locations
_UNION_TAGS = frozenset(
    {"int", "float", "str", "bool", "constrained-int", "constrained-float"}
)

_SHAPE_FIELDS: dict[str, tuple[str, ...]] = {
    "circles": ("cx", "cy", "r"),
    "rects": ("x", "y", "width", "height", "rx", "ry"),
    "lines": ("x1", "y1", "x2", "y2"),
}


def format_json_path(segments: Sequence[str | int]) -> str:
    """Format location segments as a JSON path.

    Examples:
        >>> format_json_path(["geometry", "circles", 0, "cx"])
        '$.geometry.circles[0].cx'
        >>> format_json_path([])
        '$'
    """
    path = "$"
    for segment in segments:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif _IDENTIFIER.match(segment):
            path += f".{segment}"
        else:
            path += f'["{segment}"]'
    return path


def _clean_location(loc: Sequence[str | int]) -> list[str | int]:
    return [
        segment
        for segment in loc
        if isinstance(segment, int) or (segment not in _UNION_TAGS and "[" not in segment)
    ]


def _error(
    code: IssueCode,
    message: str,
    json_path: str,
    details: dict[str, Any] | None = None,
) -> ValidationIssue:
    return ValidationIssue(
        code=code,
        message=message,
        severity=Severity.ERROR,
        json_path=json_path,
        details=details,
    )


def _mismatch(expected: Any, received: Any) -> dict[str, Any]:
    return {"expected": expected, "received": received}


class IconValidator:
    """Validates expanded specs against a preset registry.

    Stateless; one instance may be shared freely.

    Example:
        validator = IconValidator()
        result = validator.validate(spec_dict)
        if not result.valid:
            for issue in result.errors:
                print(issue.code.value, issue.json_path)
    """

    def __init__(
        self,
        registry: PresetRegistry | None = None,
        epsilon: float = GRID_EPSILON,
    ) -> None:
        self.registry = resolve_registry(registry)
        self.epsilon = epsilon

    def validate(self, spec: IconSpecExpanded | Mapping[str, Any] | Any) -> ValidationResult:
        """Validate an expanded spec.

        Args:
            spec: Expanded spec model, or any untrusted value

        Returns:
            ValidationResult with all issues and the computed metrics
        """
        result = ValidationResult()
        parsed, export_issues = self._parse(spec, result.issues)
        if parsed is None:
            return result

        issues = result.issues
        preset = self.registry.get(parsed.preset)
        if preset is None:
            issues.append(
                _error(
                    IssueCode.PRESET_UNKNOWN,
                    f'Unknown preset "{parsed.preset}"',
                    "$.preset",
                    {"available": self.registry.list_keys()},
                )
            )
        else:
            self._check_style(parsed, preset, issues)
            self._check_constraints(parsed, preset, issues)

        self._check_view_box(parsed, issues)
        self._check_shape_keys(parsed, issues)
        self._check_grid(parsed, issues)
        self._check_bounds(parsed, issues, result.metrics)
        self._check_complexity(parsed, issues, result.metrics)
        issues.extend(export_issues)
        self._check_export_sizes(parsed, issues)
        return result

    def _parse(
        self,
        spec: Any,
        issues: list[ValidationIssue],
    ) -> tuple[IconSpecExpanded | None, list[ValidationIssue]]:
        """Parse the document, splitting schema issues from export issues.

        Export field errors do not make the document unusable; they are
        returned separately and the document is re-parsed with default
        export settings so the remaining checks can run.
        """
        if isinstance(spec, IconSpecExpanded):
            return spec, []
        if not isinstance(spec, Mapping):
            issues.append(
                _error(
                    IssueCode.SCHEMA_INVALID,
                    f"Expected an object, received {type(spec).__name__}",
                    "$",
                )
            )
            return None, []

        try:
            return IconSpecExpanded.model_validate(spec), []
        except ValidationError as exc:
            errors = exc.errors(include_url=False)

        schema_issues: list[ValidationIssue] = []
        export_issues: list[ValidationIssue] = []
        seen: set[str] = set()
        for err in errors:
            loc = _clean_location(err["loc"])
            json_path = format_json_path(loc)
            if json_path in seen:
                continue
            seen.add(json_path)
            export_issue = self._export_issue(loc, err["msg"])
            if export_issue is not None:
                export_issues.append(export_issue)
                continue
            schema_issues.append(
                _error(
                    IssueCode.SCHEMA_INVALID,
                    err["msg"],
                    json_path,
                    {"type": err["type"]},
                )
            )

        if schema_issues:
            issues.extend(schema_issues)
            issues.extend(export_issues)
            return None, []

        try:
            parsed = IconSpecExpanded.model_validate({**spec, "exports": {}})
        except ValidationError:
            issues.extend(export_issues)
            return None, []
        return parsed, export_issues

    @staticmethod
    def _export_issue(loc: list[str | int], message: str) -> ValidationIssue | None:
        if len(loc) < 2 or loc[0] != "exports":
            return None
        field = loc[1]
        if field == "emitSvg":
            return _error(
                IssueCode.EXPORT_SVG_FLAG,
                f"exports.emitSvg must be a boolean ({message})",
                "$.exports.emitSvg",
            )
        if field == "pngSizes":
            if len(loc) >= 3 and isinstance(loc[2], int):
                return _error(
                    IssueCode.EXPORT_PNG_SIZE,
                    "Export sizes must be positive integers",
                    format_json_path(loc[:3]),
                )
            return _error(
                IssueCode.EXPORT_PNG_LIST,
                "exports.pngSizes must be an array of sizes",
                "$.exports.pngSizes",
            )
        return None

    def _check_style(
        self,
        spec: IconSpecExpanded,
        preset: PresetDefinition,
        issues: list[ValidationIssue],
    ) -> None:
        style = spec.style
        checks = (
            (IssueCode.STYLE_STROKE, "stroke", "Stroke value must match preset",
             preset.style.stroke, style.stroke),
            (IssueCode.STYLE_FILL, "fill", "Fill value must match preset",
             preset.style.fill, style.fill),
            (IssueCode.STYLE_LINE_CAP, "lineCap", "lineCap must match preset",
             preset.style.line_cap.value, style.line_cap),
            (IssueCode.STYLE_LINE_JOIN, "lineJoin", "lineJoin must match preset",
             preset.style.line_join.value, style.line_join),
            (IssueCode.STYLE_STROKE_WIDTH, "strokeWidth",
             "strokeWidth must match preset size mapping",
             self.registry.stroke_width_for(preset, spec.size), style.stroke_width),
        )
        for code, key, message, expected, received in checks:
            if expected != received:
                issues.append(
                    _error(code, message, f"$.style.{key}", _mismatch(expected, received))
                )

    def _check_constraints(
        self,
        spec: IconSpecExpanded,
        preset: PresetDefinition,
        issues: list[ValidationIssue],
    ) -> None:
        constraints = spec.constraints
        checks = (
            ("gridSize", preset.constraints.grid_size, constraints.grid_size),
            ("padding", self.registry.padding_for(preset, spec.size), constraints.padding),
            (
                "maxTotalPathCommands",
                preset.constraints.max_total_path_commands,
                constraints.max_total_path_commands,
            ),
            ("maxPaths", preset.constraints.max_paths, constraints.max_paths),
        )
        for key, expected, received in checks:
            if expected != received:
                issues.append(
                    _error(
                        IssueCode.PRESET_CONSTRAINTS_MISMATCH,
                        f"constraints.{key} must match preset",
                        f"$.constraints.{key}",
                        _mismatch(expected, received),
                    )
                )

    def _check_view_box(self, spec: IconSpecExpanded, issues: list[ValidationIssue]) -> None:
        numbers = extract_numbers(spec.view_box)
        if len(numbers) != 4:
            issues.append(
                _error(
                    IssueCode.VIEWBOX_MALFORMED,
                    "viewBox must contain four numbers",
                    "$.viewBox",
                    {"received": spec.view_box},
                )
            )
            return
        if numbers != [0, 0, spec.size, spec.size]:
            issues.append(
                _error(
                    IssueCode.VIEWBOX_SIZE_MISMATCH,
                    "viewBox must match size",
                    "$.viewBox",
                    _mismatch(f"0 0 {spec.size} {spec.size}", spec.view_box),
                )
            )

    def _check_shape_keys(self, spec: IconSpecExpanded, issues: list[ValidationIssue]) -> None:
        for kind in GEOMETRY_KINDS:
            for index, entry in enumerate(getattr(spec.geometry, kind)):
                extras = entry.extra_keys
                if extras:
                    issues.append(
                        _error(
                            IssueCode.STYLE_PER_SHAPE,
                            "Per-shape styling is not allowed",
                            f"$.geometry.{kind}[{index}]",
                            {"keys": extras},
                        )
                    )

    def _check_grid(self, spec: IconSpecExpanded, issues: list[ValidationIssue]) -> None:
        grid_size = spec.constraints.grid_size
        geometry = spec.geometry

        def on_grid(value: float) -> bool:
            return is_grid_multiple(value, grid_size, self.epsilon)

        for index, path in enumerate(geometry.paths):
            if not all(on_grid(value) for value in extract_numbers(path.d)):
                issues.append(
                    _error(
                        IssueCode.GRID_PATH_DATA,
                        "Path data must align to grid",
                        f"$.geometry.paths[{index}].d",
                        {"gridSize": grid_size},
                    )
                )

        for kind, fields in _SHAPE_FIELDS.items():
            for index, entry in enumerate(getattr(geometry, kind)):
                for name in fields:
                    value = getattr(entry, name)
                    if value is not None and not on_grid(value):
                        issues.append(
                            _error(
                                IssueCode.GRID_VALUE,
                                "Numeric values must align to grid",
                                f"$.geometry.{kind}[{index}].{name}",
                                {"gridSize": grid_size, "value": value},
                            )
                        )

        for index, polyline in enumerate(geometry.polylines):
            if not all(on_grid(value) for value in extract_numbers(polyline.points)):
                issues.append(
                    _error(
                        IssueCode.GRID_PATH_DATA,
                        "Polyline points must align to grid",
                        f"$.geometry.polylines[{index}].points",
                        {"gridSize": grid_size},
                    )
                )

    def _check_bounds(
        self,
        spec: IconSpecExpanded,
        issues: list[ValidationIssue],
        metrics: ValidationMetrics,
    ) -> None:
        bounds = geometry_bounds(spec.geometry)
        if bounds is None:
            return
        stroke_bounds = bounds.expand(spec.style.stroke_width / 2)
        metrics.estimated_stroke_bounds = stroke_bounds

        padding = spec.constraints.padding
        if not stroke_bounds.within(padding, spec.size - padding):
            issues.append(
                _error(
                    IssueCode.BOUNDS_EXCEEDED,
                    "Geometry exceeds viewBox bounds or padding",
                    "$.geometry",
                    {"padding": padding, "bounds": stroke_bounds.to_dict()},
                )
            )

    @staticmethod
    def _check_complexity(
        spec: IconSpecExpanded,
        issues: list[ValidationIssue],
        metrics: ValidationMetrics,
    ) -> None:
        paths = spec.geometry.paths
        metrics.path_count = len(paths)
        metrics.total_path_commands = sum(count_commands(path.d) for path in paths)

        max_commands = spec.constraints.max_total_path_commands
        if max_commands and metrics.total_path_commands > max_commands:
            issues.append(
                ValidationIssue(
                    code=IssueCode.COMPLEXITY_EXCEEDED,
                    message="Icon exceeds complexity guidance",
                    severity=Severity.WARNING,
                    json_path="$.geometry.paths",
                    details={
                        "maxTotalPathCommands": max_commands,
                        "totalPathCommands": metrics.total_path_commands,
                    },
                )
            )

        max_paths = spec.constraints.max_paths
        if max_paths and metrics.path_count > max_paths:
            issues.append(
                ValidationIssue(
                    code=IssueCode.COMPLEXITY_EXCEEDED,
                    message="Icon exceeds path count guidance",
                    severity=Severity.WARNING,
                    json_path="$.geometry.paths",
                    details={"maxPaths": max_paths, "pathCount": metrics.path_count},
                )
            )

    @staticmethod
    def _check_export_sizes(spec: IconSpecExpanded, issues: list[ValidationIssue]) -> None:
        for index, size in enumerate(spec.exports.png_sizes):
            if size <= 0 or not float(size).is_integer():
                issues.append(
                    _error(
                        IssueCode.EXPORT_PNG_SIZE,
                        "Export sizes must be positive integers",
                        f"$.exports.pngSizes[{index}]",
                        {"received": size},
                    )
                )


def validate(
    spec: IconSpecExpanded | Mapping[str, Any] | Any,
    registry: PresetRegistry | None = None,
    epsilon: float = GRID_EPSILON,
) -> ValidationResult:
    """Validate an expanded spec against registry (the built-in one when None)."""
    return IconValidator(registry, epsilon).validate(spec)
