"""Request envelopes for the agent-facing tools.

Each tool takes a flat JSON document. The envelopes only check the outer
shape; the documents inside are judged by the pipeline itself. In
particular a validate/compile request passes its spec through untouched,
because the validator must be able to report schema problems as issues.
"""

from typing import Any, Literal

from pydantic import ConfigDict, model_validator

from iconspec.domain.spec import ExpandOptions, IconDraft, WireModel


class ToolRequest(WireModel):
    """Base for tool requests; unknown envelope keys are ignored."""

    model_config = ConfigDict(extra="ignore")


class PresetListRequest(ToolRequest):
    doc_type: Literal["iconPresetQuery"] | None = None


class PresetApplyRequest(ToolRequest):
    doc_type: Literal["iconPresetApplyRequest"] | None = None
    draft: IconDraft
    options: ExpandOptions | None = None


class SpecRequest(ToolRequest):
    """Request carrying an expanded spec under ``spec`` (or ``expanded``)."""

    spec: Any = None
    expanded: Any = None

    @model_validator(mode="after")
    def _require_spec(self) -> "SpecRequest":
        if self.spec is None and self.expanded is None:
            raise ValueError("request must carry 'spec'")
        return self

    @property
    def document(self) -> Any:
        return self.spec if self.spec is not None else self.expanded


class ValidateRequest(SpecRequest):
    doc_type: Literal["iconValidateRequest"] | None = None


class CompileRequest(SpecRequest):
    doc_type: Literal["iconCompileSvgRequest"] | None = None
