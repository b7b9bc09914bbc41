"""Core pipeline stages for iconspec.

This module contains the stages that turn a draft into SVG:

- Numeric tokenizing and grid snapping of path data
- Preset lookup (registry) and draft expansion
- Validation of expanded specs against presets and geometric rules
- Deterministic SVG compilation
- Batch orchestration over worker processes

All stages are:
- Stateless (safe for use in worker processes)
- Synchronous
- Free of exceptions on bad content; problems are reported as data

Key functions:
- expand: Draft + preset -> expanded spec and change log
- validate: Expanded spec -> issues and metrics
- compile_svg: Expanded spec -> markup or blocking issues
- build_icon: Draft -> build result dictionary

Key classes:
- PresetRegistry: Read-only preset table
- PresetExpander: Expands drafts
- IconValidator: Validates expanded specs
- SvgCompiler: Compiles expanded specs
- IconPipeline: Single and batch builds
"""

from iconspec.core.compiler import SvgCompiler, compile_svg, escape_attribute
from iconspec.core.expander import PresetExpander, canonical_view_box, expand
from iconspec.core.numbers import format_number, snap_number
from iconspec.core.pipeline import IconPipeline, build_icon
from iconspec.core.registry import (
    PresetRegistry,
    builtin_presets,
    get_default_registry,
)
from iconspec.core.validator import IconValidator, format_json_path, validate

__all__ = [
    # Pipeline classes
    "IconPipeline",
    "IconValidator",
    "PresetExpander",
    "PresetRegistry",
    "SvgCompiler",
    # Functions
    "build_icon",
    "builtin_presets",
    "canonical_view_box",
    "compile_svg",
    "escape_attribute",
    "expand",
    "format_json_path",
    "format_number",
    "get_default_registry",
    "snap_number",
    "validate",
]
