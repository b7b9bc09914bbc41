"""Validation issue types.

Issues are the validator's only output channel: every problem with an
expanded spec, from a missing field to geometry outside the padded canvas,
is reported as a ValidationIssue carrying a code, a severity and a JSON path
into the offending document.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from iconspec.domain.bounds import Bounds


class Severity(str, Enum):
    """Issue severity. Errors block compilation, warnings never do."""

    ERROR = "error"
    WARNING = "warning"


class IssueCode(str, Enum):
    """Closed set of issue codes, grouped by concern."""

    SCHEMA_INVALID = "ICON_SCHEMA_001"

    PRESET_UNKNOWN = "ICON_PRESET_001"
    PRESET_CONSTRAINTS_MISMATCH = "ICON_PRESET_002"

    STYLE_STROKE = "ICON_STYLE_001"
    STYLE_FILL = "ICON_STYLE_002"
    STYLE_LINE_CAP = "ICON_STYLE_003"
    STYLE_LINE_JOIN = "ICON_STYLE_004"
    STYLE_STROKE_WIDTH = "ICON_STYLE_005"
    STYLE_PER_SHAPE = "ICON_STYLE_006"

    VIEWBOX_MALFORMED = "ICON_VIEWBOX_001"
    VIEWBOX_SIZE_MISMATCH = "ICON_VIEWBOX_002"

    GRID_VALUE = "ICON_GRID_001"
    GRID_PATH_DATA = "ICON_GRID_002"

    BOUNDS_EXCEEDED = "ICON_BOUNDS_001"

    COMPLEXITY_EXCEEDED = "ICON_COMPLEXITY_001"

    EXPORT_SVG_FLAG = "ICON_EXPORT_001"
    EXPORT_PNG_LIST = "ICON_EXPORT_002"
    EXPORT_PNG_SIZE = "ICON_EXPORT_003"


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation finding.

    Attributes:
        code: Issue code
        message: Human readable message
        severity: Error or warning
        json_path: Locator into the spec (e.g. "$.geometry.circles[0].cx")
        details: Optional structured context (expected/received, keys, ...)
    """

    code: IssueCode
    message: str
    severity: Severity
    json_path: str
    details: dict[str, Any] | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a camelCase dictionary.

        Returns:
            Dictionary with code, message, severity, jsonPath and details
        """
        data: dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
            "severity": self.severity.value,
            "jsonPath": self.json_path,
        }
        if self.details is not None:
            data["details"] = self.details
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ValidationIssue":
        """Deserialize from dictionary.

        Args:
            data: Dictionary produced by to_dict()

        Returns:
            ValidationIssue instance
        """
        return cls(
            code=IssueCode(data["code"]),
            message=data["message"],
            severity=Severity(data["severity"]),
            json_path=data["jsonPath"],
            details=data.get("details"),
        )


@dataclass
class ValidationMetrics:
    """Metrics computed while validating.

    Attributes:
        path_count: Number of path entries
        total_path_commands: Command letters across all path data
        estimated_stroke_bounds: Heuristic geometry bounds grown by half the
            stroke width (None when there is no geometry)
    """

    path_count: int = 0
    total_path_commands: int = 0
    estimated_stroke_bounds: Bounds | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "pathCount": self.path_count,
            "totalPathCommands": self.total_path_commands,
        }
        if self.estimated_stroke_bounds is not None:
            data["estimatedStrokeBounds"] = self.estimated_stroke_bounds.to_dict()
        return data


@dataclass
class ValidationResult:
    """Outcome of validating an expanded spec.

    ``valid`` is derived from the issues: it is true iff no issue has error
    severity. Warnings are always reported but never affect it.
    """

    issues: list[ValidationIssue] = field(default_factory=list)
    metrics: ValidationMetrics = field(default_factory=ValidationMetrics)

    @property
    def valid(self) -> bool:
        return not any(issue.is_error for issue in self.issues)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.is_error]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if not issue.is_error]

    def codes(self) -> list[str]:
        """Issue codes in report order."""
        return [issue.code.value for issue in self.issues]

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "issues": [issue.to_dict() for issue in self.issues],
            "metrics": self.metrics.to_dict(),
        }
