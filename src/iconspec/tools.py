"""Agent-facing tool operations.

Four JSON-in, JSON-out operations wrap the pipeline so an agent loop can
drive it by name:

- icon.preset.list: List presets and their recommended sizes
- icon.preset.apply: Expand a draft against its preset
- icon.validate: Validate an expanded spec
- icon.compileSvg: Compile an expanded spec into SVG

Each response carries a ``docType`` naming its kind. Request envelopes that
do not parse raise ToolRequestError; problems with a spec inside a valid
envelope are reported in the response instead.
"""

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from iconspec.core.compiler import compile_svg
from iconspec.core.expander import expand
from iconspec.core.registry import PresetRegistry, resolve_registry
from iconspec.core.validator import validate
from iconspec.domain.requests import (
    CompileRequest,
    PresetApplyRequest,
    PresetListRequest,
    ValidateRequest,
)
from iconspec.exceptions import ToolRequestError, UnknownToolError

logger = structlog.get_logger("iconspec.tools")

RequestT = TypeVar("RequestT", bound=BaseModel)

PRESET_LIST = "icon.preset.list"
PRESET_APPLY = "icon.preset.apply"
VALIDATE = "icon.validate"
COMPILE_SVG = "icon.compileSvg"

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": PRESET_LIST,
        "description": "List available icon presets and recommended sizes.",
        "input_schema": {
            "type": "object",
            "properties": {
                "docType": {"type": "string", "const": "iconPresetQuery"},
            },
        },
    },
    {
        "name": PRESET_APPLY,
        "description": (
            "Apply a preset to an IconDraft, normalize geometry, "
            "and return an expanded spec."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "docType": {"type": "string", "const": "iconPresetApplyRequest"},
                "draft": {"type": "object"},
                "options": {"type": "object"},
            },
            "required": ["draft"],
        },
    },
    {
        "name": VALIDATE,
        "description": "Validate an expanded icon spec and return issues/metrics.",
        "input_schema": {
            "type": "object",
            "properties": {
                "docType": {"type": "string", "const": "iconValidateRequest"},
                "spec": {"type": "object"},
            },
            "required": ["spec"],
        },
    },
    {
        "name": COMPILE_SVG,
        "description": "Compile an expanded icon spec into deterministic SVG output.",
        "input_schema": {
            "type": "object",
            "properties": {
                "docType": {"type": "string", "const": "iconCompileSvgRequest"},
                "spec": {"type": "object"},
            },
            "required": ["spec"],
        },
    },
]


def _parse_request(model: type[RequestT], payload: Any, tool: str) -> RequestT:
    try:
        return model.model_validate({} if payload is None else payload)
    except ValidationError as exc:
        logger.warning("Tool request rejected", tool=tool, error_count=exc.error_count())
        raise ToolRequestError(
            tool,
            f"{exc.error_count()} validation error(s)",
            exc.errors(include_url=False, include_input=False, include_context=False),
        ) from exc


def preset_list(
    payload: Mapping[str, Any] | None = None,
    registry: PresetRegistry | None = None,
) -> dict[str, Any]:
    """List registered presets with their recommended sizes.

    Args:
        payload: Optional query document
        registry: Preset registry (the built-in one when None)

    Returns:
        {"docType": "iconPresetList", "presets": [{"id", "recommendedSizes"}]}
    """
    _parse_request(PresetListRequest, payload, PRESET_LIST)
    registry = resolve_registry(registry)
    return {
        "docType": "iconPresetList",
        "presets": [
            {"id": preset.key, "recommendedSizes": list(preset.recommended_sizes)}
            for preset in registry
        ],
    }


def preset_apply(
    payload: Mapping[str, Any],
    registry: PresetRegistry | None = None,
) -> dict[str, Any]:
    """Expand the request's draft against its preset.

    Raises:
        ToolRequestError: If the envelope, draft or options do not parse
    """
    request = _parse_request(PresetApplyRequest, payload, PRESET_APPLY)
    result = expand(request.draft, request.options, registry)
    return {"docType": "iconPresetApplyResponse", **result.to_dict()}


def validate_spec(
    payload: Mapping[str, Any],
    registry: PresetRegistry | None = None,
) -> dict[str, Any]:
    """Validate the request's expanded spec.

    The spec itself is untrusted; its problems come back as issues.

    Raises:
        ToolRequestError: If the envelope carries no spec
    """
    request = _parse_request(ValidateRequest, payload, VALIDATE)
    result = validate(request.document, registry)
    return {"docType": "iconValidateResponse", **result.to_dict()}


def compile_spec(
    payload: Mapping[str, Any],
    registry: PresetRegistry | None = None,
) -> dict[str, Any]:
    """Compile the request's expanded spec.

    Returns:
        Success: {"docType", "ok": True, "svg", "svgMinified", "metadata"}
        Failure: {"docType", "ok": False, "issues"}

    Raises:
        ToolRequestError: If the envelope carries no spec
    """
    request = _parse_request(CompileRequest, payload, COMPILE_SVG)
    result = compile_svg(request.document, registry)
    return {"docType": "iconCompileSvgResponse", **result.to_dict()}


ToolHandler = Callable[[Any, PresetRegistry | None], dict[str, Any]]

TOOL_HANDLERS: dict[str, ToolHandler] = {
    PRESET_LIST: preset_list,
    PRESET_APPLY: preset_apply,
    VALIDATE: validate_spec,
    COMPILE_SVG: compile_spec,
}


def call_tool(
    name: str,
    payload: Mapping[str, Any] | None = None,
    registry: PresetRegistry | None = None,
) -> dict[str, Any]:
    """Dispatch a tool call by name.

    Args:
        name: Tool name (e.g. "icon.validate")
        payload: Request document
        registry: Preset registry (the built-in one when None)

    Returns:
        The tool's response document

    Raises:
        UnknownToolError: If name is not a known tool
        ToolRequestError: If the request envelope does not parse
    """
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        logger.warning("Unknown tool requested", tool=name)
        raise UnknownToolError(name)

    logger.debug("Tool call", tool=name)
    return handler(payload, registry)
