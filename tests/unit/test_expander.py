"""Unit tests for preset expansion."""

import pytest
from pydantic import ValidationError

from iconspec.core.expander import (
    PresetExpander,
    canonical_view_box,
    expand,
    normalize_view_box,
)
from iconspec.core.registry import PresetRegistry
from iconspec.domain import (
    ChangeType,
    ExpandOptions,
    IconDraft,
    IconSpecExpanded,
    LineCap,
    LineJoin,
    PresetConstraints,
    PresetDefinition,
    PresetStyle,
)


@pytest.fixture
def search_draft():
    """The search icon draft from the sample library, without exports."""
    return {
        "name": "search",
        "preset": "outline_rounded",
        "size": 24,
        "viewBox": "0 0 24 24",
        "circles": [{"cx": 11, "cy": 11, "r": 8}],
        "lines": [{"x1": 21, "y1": 21, "x2": 16.65, "y2": 16.65}],
    }


def redraft(expanded: IconSpecExpanded) -> dict:
    """Turn an expanded spec back into a draft document."""
    data = expanded.to_dict()
    geometry = data.pop("geometry")
    del data["style"], data["constraints"]
    data["docType"] = "iconDraft"
    data.update(geometry)
    return data


class TestViewBox:
    """Tests for viewBox canonicalization."""

    def test_canonical(self):
        assert canonical_view_box(24) == "0 0 24 24"
        assert canonical_view_box(24.0) == "0 0 24 24"

    def test_reformats_matching_view_box(self):
        assert normalize_view_box("0  0 24.0 24", 24) == "0 0 24 24"

    def test_replaces_mismatched_view_box(self):
        assert normalize_view_box("0 0 32 32", 24) == "0 0 24 24"
        assert normalize_view_box("garbage", 16) == "0 0 16 16"


class TestSearchExpansion:
    """Expansion of the search draft with default options."""

    def test_style_resolved_from_preset(self, search_draft):
        """Test style comes from outline_rounded at size 24."""
        expanded = expand(search_draft).expanded
        assert expanded.style.to_dict() == {
            "strokeWidth": 2,
            "stroke": "currentColor",
            "fill": "none",
            "lineCap": "round",
            "lineJoin": "round",
        }

    def test_constraints_resolved_from_preset(self, search_draft):
        expanded = expand(search_draft).expanded
        assert expanded.constraints.to_dict() == {
            "gridSize": 1,
            "padding": 2,
            "maxTotalPathCommands": 160,
            "maxPaths": 8,
        }

    def test_line_endpoint_snapped(self, search_draft):
        """Test 16.65 snaps to 17 under gridSize 1."""
        line = expand(search_draft).expanded.geometry.lines[0]
        assert (line.x1, line.y1, line.x2, line.y2) == (21, 21, 17, 17)

    def test_change_log(self, search_draft):
        """Test exports default and the line snap are recorded, in order."""
        changes = expand(search_draft).changes
        assert [change.type for change in changes] == [
            ChangeType.FILL_MISSING_DEFAULTS,
            ChangeType.SNAP_TO_GRID,
        ]
        exports_change, line_change = changes
        assert exports_change.json_path == "$.exports"
        assert exports_change.after == {"emitSvg": True, "pngSizes": [64, 128, 256]}
        assert line_change.json_path == "$.lines[0]"
        assert line_change.before == {"x1": 21, "y1": 21, "x2": 16.65, "y2": 16.65}
        assert line_change.after == {"x1": 21, "y1": 21, "x2": 17, "y2": 17}

    def test_unchanged_circle_not_logged(self, search_draft):
        changes = expand(search_draft).changes
        assert all(not change.json_path.startswith("$.circles") for change in changes)

    def test_document_fields(self, search_draft):
        data = expand(search_draft).to_dict()["expanded"]
        assert data["docType"] == "iconExpanded"
        assert data["name"] == "search"
        assert data["viewBox"] == "0 0 24 24"
        assert data["exports"] == {"emitSvg": True, "pngSizes": [64, 128, 256]}


class TestIdempotence:
    """Expanding already expanded geometry changes nothing."""

    def test_second_pass_has_no_changes(self, search_draft):
        first = expand(search_draft).expanded
        second = expand(redraft(first))
        assert second.changes == []
        assert second.expanded == first

    def test_paths_idempotent(self):
        draft = {
            "name": "zigzag",
            "preset": "outline_rounded",
            "paths": [{"d": "M 4.4  4.6 L 20.2 19.9\n"}],
        }
        first = expand(draft).expanded
        assert first.geometry.paths[0].d == "M 4 5 L 20 20"
        assert expand(redraft(first)).changes == []


class TestOptions:
    """Tests for expansion flags."""

    def test_snap_disabled_keeps_values(self, search_draft):
        options = ExpandOptions(snap_to_grid=False)
        result = expand(search_draft, options)
        assert result.expanded.geometry.lines[0].x2 == 16.65
        assert ChangeType.SNAP_TO_GRID not in [change.type for change in result.changes]

    def test_normalize_only_reformats_path(self):
        """Test path text is canonicalized without snapping."""
        draft = {
            "name": "p",
            "preset": "outline_rounded",
            "paths": [{"d": "M 3.0  9.5 L 4 4"}],
        }
        result = expand(draft, ExpandOptions(snap_to_grid=False))
        assert result.expanded.geometry.paths[0].d == "M 3 9.5 L 4 4"
        assert result.changes[-1].type is ChangeType.NORMALIZE_PATH
        assert result.changes[-1].json_path == "$.paths[0].d"

    def test_normalize_off_keeps_view_box(self):
        draft = {"name": "v", "preset": "outline_rounded", "viewBox": "0 0 32 32"}
        result = expand(draft, ExpandOptions(normalize=False))
        assert result.expanded.view_box == "0 0 32 32"

    def test_view_box_normalized(self):
        draft = {"name": "v", "preset": "outline_rounded", "viewBox": "0 0 32 32"}
        result = expand(draft)
        assert result.expanded.view_box == "0 0 24 24"
        change = result.changes[0]
        assert change.type is ChangeType.NORMALIZE_VIEWBOX
        assert (change.before, change.after) == ("0 0 32 32", "0 0 24 24")

    def test_all_disabled_leaves_geometry(self, search_draft):
        options = ExpandOptions(normalize=False, snap_to_grid=False)
        result = expand(search_draft, options)
        assert result.expanded.geometry.lines[0].x2 == 16.65

    def test_exports_defaulted_without_fill_flag(self, search_draft):
        """Test exports are still filled, with a note, when the flag is off."""
        result = expand(search_draft, ExpandOptions(fill_missing_defaults=False))
        assert result.expanded.exports.png_sizes == [64, 128, 256]
        assert result.changes[0].type is ChangeType.FILL_MISSING_DEFAULTS
        assert result.changes[0].note is not None

    def test_supplied_exports_kept(self, search_draft):
        search_draft["exports"] = {"emitSvg": False, "pngSizes": [32]}
        result = expand(search_draft)
        assert result.expanded.exports.emit_svg is False
        assert result.expanded.exports.png_sizes == [32]
        assert ChangeType.FILL_MISSING_DEFAULTS not in [c.type for c in result.changes]


class TestGeometryKinds:
    """Tests for snapping each geometry kind."""

    def test_polyline_points_snapped(self):
        draft = {
            "name": "poly",
            "preset": "outline_rounded",
            "polylines": [{"points": "4.4,4.6 12,12.5"}],
        }
        result = expand(draft)
        assert result.expanded.geometry.polylines[0].points == "4,5 12,13"
        change = result.changes[-1]
        assert change.type is ChangeType.SNAP_TO_GRID
        assert change.json_path == "$.polylines[0].points"

    def test_rect_optional_radii_snapped(self):
        draft = {
            "name": "box",
            "preset": "outline_rounded",
            "rects": [{"x": 4.2, "y": 4, "width": 16, "height": 16, "rx": 1.6}],
        }
        rect = expand(draft).expanded.geometry.rects[0]
        assert (rect.x, rect.rx, rect.ry) == (4, 2, None)

    def test_fused_tokens_kept_apart(self):
        draft = {"name": "f", "preset": "outline_rounded", "paths": [{"d": "M1.5.5"}]}
        assert expand(draft).expanded.geometry.paths[0].d == "M2 1"

    def test_extra_shape_keys_survive(self):
        """Test per-shape style keys are carried through for the validator."""
        draft = {
            "name": "styled",
            "preset": "outline_rounded",
            "circles": [{"cx": 12, "cy": 12, "r": 4.4, "stroke": "red"}],
        }
        circle = expand(draft).expanded.geometry.circles[0]
        assert circle.r == 4
        assert circle.extra_keys == ["stroke"]

    def test_custom_grid(self):
        preset = PresetDefinition(
            key="half",
            name="Half",
            description="Half-unit grid",
            recommended_sizes=(24,),
            stroke_width_by_size={24: 1},
            padding_by_size={24: 1},
            style=PresetStyle("currentColor", "none", LineCap.ROUND, LineJoin.ROUND),
            constraints=PresetConstraints(grid_size=0.5),
        )
        expander = PresetExpander(PresetRegistry([preset]))
        draft = {"name": "c", "preset": "half", "circles": [{"cx": 11.3, "cy": 11.8, "r": 4}]}
        circle = expander.expand(draft).expanded.geometry.circles[0]
        assert (circle.cx, circle.cy) == (11.5, 12)


class TestUnknownPreset:
    """Tests for drafts naming an unregistered preset."""

    def test_fallback_style(self, search_draft):
        search_draft["preset"] = "mystery"
        result = expand(search_draft)
        assert result.expanded.preset == "mystery"
        assert result.expanded.style.stroke_width == 2
        assert result.expanded.style.line_cap == "round"
        assert result.expanded.constraints.padding == 2

    def test_recorded_first(self, search_draft):
        search_draft["preset"] = "mystery"
        change = expand(search_draft).changes[0]
        assert change.type is ChangeType.UNKNOWN_PRESET
        assert change.json_path == "$.preset"
        assert change.before == "mystery"


class TestDraftParsing:
    """Tests for draft schema enforcement at the expander boundary."""

    def test_model_input(self, search_draft):
        draft = IconDraft.model_validate(search_draft)
        assert expand(draft).expanded.name == "search"

    def test_missing_name_rejected(self, search_draft):
        del search_draft["name"]
        with pytest.raises(ValidationError):
            expand(search_draft)

    def test_string_number_rejected(self, search_draft):
        search_draft["circles"][0]["cx"] = "11"
        with pytest.raises(ValidationError):
            expand(search_draft)

    def test_style_key_on_draft_rejected(self, search_draft):
        search_draft["style"] = {"fill": "red"}
        with pytest.raises(ValidationError):
            expand(search_draft)
