"""Pipeline result types.

- ChangeRecord / ExpansionResult: output of preset expansion
- CompileSuccess / CompileFailure: the two branches of compilation

CompileResult is a tagged union on ``ok``; callers branch on it (or on
isinstance) before touching ``svg``. A failure never carries markup.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from iconspec.domain.issues import ValidationIssue
from iconspec.domain.spec import IconSpecExpanded


class ChangeType(str, Enum):
    """Kinds of alterations expansion can make to a draft."""

    NORMALIZE_VIEWBOX = "normalizeViewBox"
    FILL_MISSING_DEFAULTS = "fillMissingDefaults"
    SNAP_TO_GRID = "snapToGrid"
    NORMALIZE_PATH = "normalizePath"
    NORMALIZE_POINTS = "normalizePoints"
    UNKNOWN_PRESET = "unknownPreset"


@dataclass(frozen=True)
class ChangeRecord:
    """Audit entry for a value expansion altered.

    Purely informational; no later stage reads it.

    Attributes:
        type: What kind of change was made
        json_path: Location in the draft (e.g. "$.lines[0]")
        before: Value before the change (None when it was absent)
        after: Value after the change
        note: Optional free-form explanation
    """

    type: ChangeType
    json_path: str
    before: Any = None
    after: Any = None
    note: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value, "jsonPath": self.json_path}
        if self.before is not None:
            data["before"] = self.before
        if self.after is not None:
            data["after"] = self.after
        if self.note is not None:
            data["note"] = self.note
        return data


@dataclass(frozen=True)
class ExpansionResult:
    """An expanded spec and the ordered log of changes that produced it."""

    expanded: IconSpecExpanded
    changes: list[ChangeRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "expanded": self.expanded.to_dict(),
            "changes": [change.to_dict() for change in self.changes],
        }


@dataclass(frozen=True)
class CompileMetadata:
    """Resolved values and metrics accompanying compiled markup."""

    size: float
    view_box: str
    path_count: int
    total_path_commands: int
    stroke_width: float
    padding: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "viewBox": self.view_box,
            "pathCount": self.path_count,
            "totalPathCommands": self.total_path_commands,
            "strokeWidth": self.stroke_width,
            "padding": self.padding,
        }


@dataclass(frozen=True)
class CompileSuccess:
    """Compiled markup in pretty and minified form."""

    svg: str
    svg_minified: str
    metadata: CompileMetadata
    ok: Literal[True] = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": True,
            "svg": self.svg,
            "svgMinified": self.svg_minified,
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class CompileFailure:
    """Blocking validation errors; no markup was produced."""

    issues: list[ValidationIssue]
    ok: Literal[False] = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": False,
            "issues": [issue.to_dict() for issue in self.issues],
        }


CompileResult = CompileSuccess | CompileFailure
