"""Unit tests for expanded spec validation."""

import copy

import pytest

from iconspec.core.expander import expand
from iconspec.core.validator import IconValidator, format_json_path, validate
from iconspec.domain import IssueCode, Severity

SEARCH_DRAFT = {
    "name": "search",
    "preset": "outline_rounded",
    "size": 24,
    "viewBox": "0 0 24 24",
    "circles": [{"cx": 11, "cy": 11, "r": 8}],
    "lines": [{"x1": 21, "y1": 21, "x2": 16.65, "y2": 16.65}],
}


@pytest.fixture
def spec():
    """A valid expanded search spec as a plain document."""
    return expand(copy.deepcopy(SEARCH_DRAFT)).expanded.to_dict()


def codes(result):
    return [issue.code for issue in result.issues]


class TestValidSpec:
    """Tests for a spec with no problems."""

    def test_valid(self, spec):
        result = validate(spec)
        assert result.valid
        assert result.issues == []

    def test_metrics(self, spec):
        metrics = validate(spec).metrics
        assert metrics.path_count == 0
        assert metrics.total_path_commands == 0
        assert metrics.estimated_stroke_bounds.to_dict() == {
            "minX": 2,
            "minY": 2,
            "maxX": 22,
            "maxY": 22,
        }

    def test_model_input(self):
        expanded = expand(copy.deepcopy(SEARCH_DRAFT)).expanded
        assert validate(expanded).valid

    def test_to_dict(self, spec):
        data = validate(spec).to_dict()
        assert data["valid"] is True
        assert data["issues"] == []
        assert data["metrics"]["pathCount"] == 0
        assert "estimatedStrokeBounds" in data["metrics"]


class TestStyleChecks:
    """Tests for preset style conformance."""

    def test_hand_set_fill(self, spec):
        """Test a fill of "red" under outline_rounded is the only error."""
        spec["style"]["fill"] = "red"
        result = validate(spec)
        assert not result.valid
        assert codes(result) == [IssueCode.STYLE_FILL]
        issue = result.issues[0]
        assert issue.code.value == "ICON_STYLE_002"
        assert issue.json_path == "$.style.fill"
        assert issue.details == {"expected": "none", "received": "red"}

    def test_each_style_field(self, spec):
        spec["style"].update(
            {"stroke": "black", "lineCap": "butt", "lineJoin": "miter"}
        )
        assert codes(validate(spec)) == [
            IssueCode.STYLE_STROKE,
            IssueCode.STYLE_LINE_CAP,
            IssueCode.STYLE_LINE_JOIN,
        ]

    def test_stroke_width_follows_size(self, spec):
        spec["style"]["strokeWidth"] = 1
        result = validate(spec)
        assert codes(result) == [IssueCode.STYLE_STROKE_WIDTH]
        assert result.issues[0].details == {"expected": 2, "received": 1}

    def test_per_shape_style(self, spec):
        spec["geometry"]["circles"][0]["stroke"] = "red"
        spec["geometry"]["circles"][0]["opacity"] = 0.5
        result = validate(spec)
        assert codes(result) == [IssueCode.STYLE_PER_SHAPE]
        issue = result.issues[0]
        assert issue.json_path == "$.geometry.circles[0]"
        assert issue.details == {"keys": ["stroke", "opacity"]}


class TestPresetChecks:
    """Tests for preset identity and constraints."""

    def test_unknown_preset(self, spec):
        spec["preset"] = "mystery"
        result = validate(spec)
        assert codes(result) == [IssueCode.PRESET_UNKNOWN]
        assert result.issues[0].json_path == "$.preset"

    def test_constraint_mismatch(self, spec):
        spec["constraints"]["maxPaths"] = 20
        result = validate(spec)
        assert codes(result) == [IssueCode.PRESET_CONSTRAINTS_MISMATCH]
        assert result.issues[0].json_path == "$.constraints.maxPaths"


class TestViewBoxChecks:
    """Tests for viewBox form."""

    def test_not_four_numbers(self, spec):
        spec["viewBox"] = "0 0 24"
        result = validate(spec)
        assert codes(result) == [IssueCode.VIEWBOX_MALFORMED]

    def test_size_mismatch(self, spec):
        spec["viewBox"] = "0 0 32 32"
        assert codes(validate(spec)) == [IssueCode.VIEWBOX_SIZE_MISMATCH]

    def test_equivalent_formatting_accepted(self, spec):
        spec["viewBox"] = "0,0,24.0,24"
        assert validate(spec).valid


class TestGridChecks:
    """Tests for grid alignment."""

    def test_off_grid_field(self, spec):
        spec["geometry"]["circles"][0]["cx"] = 11.5
        result = validate(spec)
        assert codes(result) == [IssueCode.GRID_VALUE]
        assert result.issues[0].json_path == "$.geometry.circles[0].cx"

    def test_off_grid_path(self, spec):
        spec["geometry"]["paths"] = [{"d": "M4.5 4L20 20"}]
        result = validate(spec)
        assert codes(result) == [IssueCode.GRID_PATH_DATA]
        assert result.issues[0].json_path == "$.geometry.paths[0].d"

    def test_off_grid_polyline(self, spec):
        spec["geometry"]["polylines"] = [{"points": "4,4 12.25,12"}]
        result = validate(spec)
        assert codes(result) == [IssueCode.GRID_PATH_DATA]
        assert result.issues[0].json_path == "$.geometry.polylines[0].points"

    def test_infinite_path_literal(self, spec):
        """Test a literal that overflows to infinity is reported, not raised."""
        spec["geometry"]["paths"] = [{"d": "M1e999 4L5 5"}]
        result = validate(spec)
        assert codes(result) == [IssueCode.GRID_PATH_DATA]
        assert result.issues[0].json_path == "$.geometry.paths[0].d"

    def test_infinite_polyline_literal(self, spec):
        spec["geometry"]["polylines"] = [{"points": "4,4 1e400,5"}]
        result = validate(spec)
        assert codes(result) == [IssueCode.GRID_PATH_DATA]
        assert result.issues[0].json_path == "$.geometry.polylines[0].points"

    def test_off_grid_rect_radius(self, spec):
        spec["geometry"]["rects"] = [
            {"x": 4, "y": 4, "width": 16, "height": 16, "rx": 1.5}
        ]
        result = validate(spec)
        assert codes(result) == [IssueCode.GRID_VALUE]
        assert result.issues[0].json_path == "$.geometry.rects[0].rx"

    def test_epsilon(self, spec):
        spec["geometry"]["circles"][0]["cx"] = 11.0000001
        assert validate(spec).valid
        assert not IconValidator(epsilon=1e-9).validate(spec).valid


class TestBoundsChecks:
    """Tests for the padded canvas bounds check."""

    def test_far_outside(self, spec):
        """Test a circle at (100, 100) r=50 on a 24x24 canvas."""
        spec["geometry"]["circles"] = [{"cx": 100, "cy": 100, "r": 50}]
        spec["geometry"]["lines"] = []
        result = validate(spec)
        assert IssueCode.BOUNDS_EXCEEDED in codes(result)
        issue = result.issues[codes(result).index(IssueCode.BOUNDS_EXCEEDED)]
        assert issue.json_path == "$.geometry"
        assert issue.details["padding"] == 2
        assert issue.details["bounds"] == {"minX": 49, "minY": 49, "maxX": 151, "maxY": 151}

    def test_stroke_counts_towards_bounds(self, spec):
        """Test geometry touching the padding fails once stroke is added."""
        spec["geometry"]["circles"] = [{"cx": 12, "cy": 12, "r": 10}]
        spec["geometry"]["lines"] = []
        assert codes(validate(spec)) == [IssueCode.BOUNDS_EXCEEDED]

    def test_relative_path_heuristic(self, spec):
        """Test path numbers are read as raw pairs, so "l9-7" reads as y=-7."""
        spec["geometry"]["paths"] = [{"d": "M3 9l9-7"}]
        result = validate(spec)
        assert codes(result) == [IssueCode.BOUNDS_EXCEEDED]
        assert result.metrics.estimated_stroke_bounds.min_y == -8

    def test_empty_geometry(self, spec):
        spec["geometry"] = {}
        result = validate(spec)
        assert result.valid
        assert result.metrics.estimated_stroke_bounds is None


class TestComplexityChecks:
    """Tests for complexity budgets."""

    def test_too_many_paths_is_warning(self, spec):
        spec["geometry"]["paths"] = [{"d": "M4 4L20 20"}] * 9
        result = validate(spec)
        assert result.valid
        assert codes(result) == [IssueCode.COMPLEXITY_EXCEEDED]
        assert result.issues[0].severity is Severity.WARNING
        assert result.issues[0].details == {"maxPaths": 8, "pathCount": 9}
        assert result.metrics.path_count == 9
        assert result.metrics.total_path_commands == 18

    def test_too_many_commands_is_warning(self, spec):
        spec["geometry"]["paths"] = [{"d": "M4 4" + "L20 20" * 160}]
        result = validate(spec)
        assert result.valid
        assert codes(result) == [IssueCode.COMPLEXITY_EXCEEDED]
        assert result.warnings[0].details["totalPathCommands"] == 161

    def test_unset_budget_skipped(self, spec):
        spec["preset"] = "mystery"
        spec["constraints"] = {"gridSize": 1, "padding": 2}
        spec["geometry"]["paths"] = [{"d": "M4 4L20 20"}] * 9
        assert codes(validate(spec)) == [IssueCode.PRESET_UNKNOWN]


class TestExportChecks:
    """Tests for export settings."""

    def test_emit_svg_not_boolean(self, spec):
        spec["exports"]["emitSvg"] = "yes"
        result = validate(spec)
        assert codes(result) == [IssueCode.EXPORT_SVG_FLAG]
        assert result.issues[0].json_path == "$.exports.emitSvg"

    def test_png_sizes_not_list(self, spec):
        spec["exports"]["pngSizes"] = "64"
        assert codes(validate(spec)) == [IssueCode.EXPORT_PNG_LIST]

    def test_png_size_entries(self, spec):
        spec["exports"]["pngSizes"] = [64, -1, 12.5]
        result = validate(spec)
        assert codes(result) == [IssueCode.EXPORT_PNG_SIZE] * 2
        assert [issue.json_path for issue in result.issues] == [
            "$.exports.pngSizes[1]",
            "$.exports.pngSizes[2]",
        ]

    def test_non_numeric_png_size(self, spec):
        spec["exports"]["pngSizes"] = [64, "big"]
        result = validate(spec)
        assert codes(result) == [IssueCode.EXPORT_PNG_SIZE]
        assert result.issues[0].json_path == "$.exports.pngSizes[1]"

    def test_export_errors_do_not_hide_other_checks(self, spec):
        spec["exports"]["emitSvg"] = 1
        spec["style"]["fill"] = "red"
        assert codes(validate(spec)) == [IssueCode.STYLE_FILL, IssueCode.EXPORT_SVG_FLAG]


class TestSchemaChecks:
    """Tests for structural conformance."""

    @pytest.mark.parametrize("value", [None, 42, "spec", [1, 2]])
    def test_not_an_object(self, value):
        result = validate(value)
        assert codes(result) == [IssueCode.SCHEMA_INVALID]
        assert result.issues[0].json_path == "$"

    def test_empty_object(self):
        result = validate({})
        assert not result.valid
        assert set(codes(result)) == {IssueCode.SCHEMA_INVALID}
        paths = {issue.json_path for issue in result.issues}
        assert {"$.name", "$.preset", "$.style", "$.exports"} <= paths

    def test_string_size(self, spec):
        spec["size"] = "24"
        result = validate(spec)
        assert codes(result) == [IssueCode.SCHEMA_INVALID]
        assert result.issues[0].json_path == "$.size"

    def test_nested_location(self, spec):
        del spec["geometry"]["circles"][0]["r"]
        result = validate(spec)
        assert codes(result) == [IssueCode.SCHEMA_INVALID]
        assert result.issues[0].json_path == "$.geometry.circles[0].r"

    def test_unknown_top_level_key(self, spec):
        spec["color"] = "red"
        assert codes(validate(spec)) == [IssueCode.SCHEMA_INVALID]

    def test_wrong_doc_type(self, spec):
        spec["docType"] = "iconDraft"
        assert codes(validate(spec)) == [IssueCode.SCHEMA_INVALID]

    def test_never_raises_on_garbage(self):
        result = validate({"geometry": {"paths": [{"d": 5}]}, "size": float("nan")})
        assert not result.valid


class TestFormatJsonPath:
    """Tests for JSON path formatting."""

    def test_root(self):
        assert format_json_path([]) == "$"

    def test_nested(self):
        assert format_json_path(["geometry", "circles", 0, "cx"]) == "$.geometry.circles[0].cx"

    def test_non_identifier_key(self):
        assert format_json_path(["a b"]) == '$["a b"]'
