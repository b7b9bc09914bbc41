"""Wire schemas for icon drafts and expanded specs.

Drafts and expanded specs arrive as JSON documents from agents, files or UIs.
They are modeled with Pydantic so that shape errors surface as structured,
locatable errors instead of attribute errors deep inside the pipeline.

Documents use camelCase keys; attributes are snake_case. Scalar fields are
strict: a number written as a string is a schema error, not a coercion.

Geometry entries keep any unknown keys they carry (``model_extra``). Geometry
is style-free by contract, but rejecting such keys is the validator's job,
not the parser's, so they are preserved until they can be reported.
"""

from typing import Annotated, Any, Literal

from pydantic import (
    AllowInfNan,
    BaseModel,
    ConfigDict,
    Field,
    Strict,
    StrictBool,
    StrictInt,
    StrictStr,
    StringConstraints,
    field_validator,
)
from pydantic.alias_generators import to_camel

_Float = Annotated[float, Strict(), AllowInfNan(False)]
Number = StrictInt | _Float
Name = Annotated[str, StringConstraints(strict=True, min_length=1)]

DEFAULT_SIZE = 24
DEFAULT_PNG_SIZES = (64, 128, 256)


class WireModel(BaseModel):
    """Base for all camelCase JSON documents."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a camelCase dictionary, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class GeometryEntry(WireModel):
    """Base for geometry entries; unknown keys are kept for the validator."""

    model_config = ConfigDict(extra="allow")

    @classmethod
    def geometric_keys(cls) -> frozenset[str]:
        """Keys a geometry entry of this kind may carry."""
        return frozenset(info.alias or name for name, info in cls.model_fields.items())

    @property
    def extra_keys(self) -> list[str]:
        """Keys outside the geometric key set, in document order."""
        return list(self.model_extra or {})


class PathEntry(GeometryEntry):
    d: StrictStr


class CircleEntry(GeometryEntry):
    cx: Number
    cy: Number
    r: Number


class RectEntry(GeometryEntry):
    x: Number
    y: Number
    width: Number
    height: Number
    rx: Number | None = None
    ry: Number | None = None


class LineEntry(GeometryEntry):
    x1: Number
    y1: Number
    x2: Number
    y2: Number


class PolylineEntry(GeometryEntry):
    points: StrictStr


class Geometry(WireModel):
    """Ordered geometry collections of an expanded spec."""

    paths: list[PathEntry] = Field(default_factory=list)
    circles: list[CircleEntry] = Field(default_factory=list)
    rects: list[RectEntry] = Field(default_factory=list)
    lines: list[LineEntry] = Field(default_factory=list)
    polylines: list[PolylineEntry] = Field(default_factory=list)


GEOMETRY_KINDS: dict[str, type[GeometryEntry]] = {
    "paths": PathEntry,
    "circles": CircleEntry,
    "rects": RectEntry,
    "lines": LineEntry,
    "polylines": PolylineEntry,
}


class ExportSettings(WireModel):
    """Export settings carried alongside the geometry."""

    emit_svg: StrictBool = True
    png_sizes: list[Number] = Field(default_factory=lambda: list(DEFAULT_PNG_SIZES))


class IconStyle(WireModel):
    """Fully resolved style of an expanded spec."""

    stroke_width: Number
    stroke: StrictStr
    fill: StrictStr
    line_cap: StrictStr
    line_join: StrictStr

    @field_validator("stroke_width")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("strokeWidth must not be negative")
        return value


class IconConstraints(WireModel):
    """Resolved constraints of an expanded spec."""

    grid_size: Number
    padding: Number
    max_total_path_commands: StrictInt | None = None
    max_paths: StrictInt | None = None

    @field_validator("grid_size")
    @classmethod
    def _positive_grid(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("gridSize must be positive")
        return value

    @field_validator("padding")
    @classmethod
    def _non_negative_padding(cls, value: float) -> float:
        if value < 0:
            raise ValueError("padding must not be negative")
        return value


def _check_size(value: float) -> float:
    if value <= 0:
        raise ValueError("size must be positive")
    return value


class IconDraft(WireModel):
    """Minimal, author-supplied, style-free icon geometry."""

    doc_type: Literal["iconDraft"] = "iconDraft"
    name: Name
    preset: StrictStr
    size: Number = DEFAULT_SIZE
    view_box: StrictStr = "0 0 24 24"
    paths: list[PathEntry] = Field(default_factory=list)
    circles: list[CircleEntry] = Field(default_factory=list)
    rects: list[RectEntry] = Field(default_factory=list)
    lines: list[LineEntry] = Field(default_factory=list)
    polylines: list[PolylineEntry] = Field(default_factory=list)
    exports: ExportSettings | None = None

    @field_validator("size")
    @classmethod
    def _positive_size(cls, value: float) -> float:
        return _check_size(value)


class IconSpecExpanded(WireModel):
    """A draft merged with its preset's resolved style and constraints."""

    doc_type: Literal["iconExpanded"] = "iconExpanded"
    name: Name
    preset: StrictStr
    size: Number
    view_box: StrictStr
    style: IconStyle
    constraints: IconConstraints
    geometry: Geometry = Field(default_factory=Geometry)
    exports: ExportSettings

    @field_validator("size")
    @classmethod
    def _positive_size(cls, value: float) -> float:
        return _check_size(value)


class ExpandOptions(WireModel):
    """Per-request preset expansion options."""

    normalize: StrictBool = True
    snap_to_grid: StrictBool = True
    fill_missing_defaults: StrictBool = True
