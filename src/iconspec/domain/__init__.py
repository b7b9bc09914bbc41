"""Domain models for iconspec.

This module contains the data model of the icon pipeline. Models are:

- Immutable where possible (frozen dataclasses, frozen Pydantic models)
- Serializable to camelCase dictionaries for tool responses and IPC
- Free of pipeline logic

Key classes:
- PresetDefinition: A named style family
- IconDraft: Author-supplied, style-free geometry
- IconSpecExpanded: A draft merged with its preset's style and constraints
- ValidationIssue / ValidationResult: Validator output
- ChangeRecord / ExpansionResult: Expander output
- CompileSuccess / CompileFailure: Compiler output
"""

from iconspec.domain.bounds import Bounds
from iconspec.domain.issues import (
    IssueCode,
    Severity,
    ValidationIssue,
    ValidationMetrics,
    ValidationResult,
)
from iconspec.domain.preset import (
    LineCap,
    LineJoin,
    PresetConstraints,
    PresetDefinition,
    PresetStyle,
)
from iconspec.domain.results import (
    ChangeRecord,
    ChangeType,
    CompileFailure,
    CompileMetadata,
    CompileResult,
    CompileSuccess,
    ExpansionResult,
)
from iconspec.domain.spec import (
    GEOMETRY_KINDS,
    CircleEntry,
    ExpandOptions,
    ExportSettings,
    Geometry,
    GeometryEntry,
    IconConstraints,
    IconDraft,
    IconSpecExpanded,
    IconStyle,
    LineEntry,
    PathEntry,
    PolylineEntry,
    RectEntry,
)

__all__: list[str] = [
    # Enums
    "ChangeType",
    "IssueCode",
    "LineCap",
    "LineJoin",
    "Severity",
    # Presets
    "PresetConstraints",
    "PresetDefinition",
    "PresetStyle",
    # Documents
    "GEOMETRY_KINDS",
    "CircleEntry",
    "ExpandOptions",
    "ExportSettings",
    "Geometry",
    "GeometryEntry",
    "IconConstraints",
    "IconDraft",
    "IconSpecExpanded",
    "IconStyle",
    "LineEntry",
    "PathEntry",
    "PolylineEntry",
    "RectEntry",
    # Results
    "Bounds",
    "ChangeRecord",
    "CompileFailure",
    "CompileMetadata",
    "CompileResult",
    "CompileSuccess",
    "ExpansionResult",
    "ValidationIssue",
    "ValidationMetrics",
    "ValidationResult",
]
