"""SVG compilation of expanded specs.

The compiler re-validates its input and refuses to emit markup while any
error-severity issue remains. Otherwise it writes a deterministic SVG
document: the resolved style is hoisted onto the root element and the
geometry elements carry geometric attributes only, in a fixed kind order.
"""

from collections.abc import Mapping
from typing import Any

from iconspec.core.numbers import format_number
from iconspec.core.registry import PresetRegistry, resolve_registry
from iconspec.core.validator import GRID_EPSILON, IconValidator
from iconspec.domain import (
    CompileFailure,
    CompileMetadata,
    CompileResult,
    CompileSuccess,
    Geometry,
    IconSpecExpanded,
    ValidationResult,
)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

_ESCAPES = (
    ("&", "&amp;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)


def escape_attribute(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute.

    Examples:
        >>> escape_attribute('a<b & "c"')
        'a&lt;b &amp; &quot;c&quot;'
    """
    for char, entity in _ESCAPES:
        value = value.replace(char, entity)
    return value


def _attribute_value(value: Any) -> str:
    if isinstance(value, str):
        return escape_attribute(value)
    return format_number(value)


def _element(tag: str, attributes: list[tuple[str, Any]]) -> str:
    rendered = " ".join(
        f'{name}="{_attribute_value(value)}"'
        for name, value in attributes
        if value is not None
    )
    return f"<{tag} {rendered} />"


def render_elements(geometry: Geometry) -> list[str]:
    """Render geometry as element strings: paths, rects, circles, lines, polylines."""
    elements = [_element("path", [("d", path.d)]) for path in geometry.paths]
    elements.extend(
        _element(
            "rect",
            [
                ("x", rect.x),
                ("y", rect.y),
                ("width", rect.width),
                ("height", rect.height),
                ("rx", rect.rx),
                ("ry", rect.ry),
            ],
        )
        for rect in geometry.rects
    )
    elements.extend(
        _element("circle", [("cx", circle.cx), ("cy", circle.cy), ("r", circle.r)])
        for circle in geometry.circles
    )
    elements.extend(
        _element(
            "line",
            [("x1", line.x1), ("y1", line.y1), ("x2", line.x2), ("y2", line.y2)],
        )
        for line in geometry.lines
    )
    elements.extend(
        _element("polyline", [("points", polyline.points)])
        for polyline in geometry.polylines
    )
    return elements


def render_root(spec: IconSpecExpanded) -> str:
    """Render the opening svg tag with the hoisted style attributes."""
    style = spec.style
    attributes = [
        ("width", spec.size),
        ("height", spec.size),
        ("viewBox", spec.view_box),
        ("fill", style.fill),
        ("xmlns", SVG_NAMESPACE),
        ("stroke", style.stroke),
        ("stroke-width", style.stroke_width),
        ("stroke-linecap", style.line_cap),
        ("stroke-linejoin", style.line_join),
    ]
    rendered = " ".join(f'{name}="{_attribute_value(value)}"' for name, value in attributes)
    return f"<svg {rendered}>"


class SvgCompiler:
    """Compiles expanded specs into pretty and minified SVG.

    Example:
        compiler = SvgCompiler()
        result = compiler.compile(spec)
        if result.ok:
            Path("icon.svg").write_text(result.svg)
    """

    def __init__(
        self,
        registry: PresetRegistry | None = None,
        epsilon: float = GRID_EPSILON,
    ) -> None:
        self.registry = resolve_registry(registry)
        self.validator = IconValidator(self.registry, epsilon)

    def compile(self, spec: IconSpecExpanded | Mapping[str, Any] | Any) -> CompileResult:
        """Validate and compile an expanded spec.

        Args:
            spec: Expanded spec model, or any untrusted value

        Returns:
            CompileSuccess with markup and metadata, or CompileFailure with
            exactly the error-severity issues when any exist
        """
        return self.render(spec, self.validator.validate(spec))

    def render(
        self,
        spec: IconSpecExpanded | Mapping[str, Any] | Any,
        validation: ValidationResult,
    ) -> CompileResult:
        """Compile a spec whose validation result is already known.

        Args:
            spec: The spec validation was run on
            validation: Result of validating spec with this compiler's rules

        Returns:
            CompileSuccess, or CompileFailure when validation has errors
        """
        errors = validation.errors
        if errors:
            return CompileFailure(issues=errors)

        if not isinstance(spec, IconSpecExpanded):
            spec = IconSpecExpanded.model_validate(spec)

        root = render_root(spec)
        elements = render_elements(spec.geometry)
        svg = root + "\n" + "\n".join(f"  {element}" for element in elements) + "\n</svg>"
        svg_minified = root + "".join(elements) + "</svg>"

        metrics = validation.metrics
        return CompileSuccess(
            svg=svg,
            svg_minified=svg_minified,
            metadata=CompileMetadata(
                size=spec.size,
                view_box=spec.view_box,
                path_count=metrics.path_count,
                total_path_commands=metrics.total_path_commands,
                stroke_width=spec.style.stroke_width,
                padding=spec.constraints.padding,
            ),
        )


def compile_svg(
    spec: IconSpecExpanded | Mapping[str, Any] | Any,
    registry: PresetRegistry | None = None,
) -> CompileResult:
    """Compile an expanded spec against registry (the built-in one when None)."""
    return SvgCompiler(registry).compile(spec)
