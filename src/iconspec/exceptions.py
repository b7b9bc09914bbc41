"""Exception hierarchy for iconspec.

The pipeline itself reports problems as data (changes, issues, compile
failures). Exceptions are reserved for the edges: reading and writing files,
malformed tool requests and explicit preset lookups.
"""

from typing import Any


class IconSpecError(Exception):
    """Base exception for all iconspec errors."""

    pass


class DocumentError(IconSpecError):
    """Errors related to reading or writing documents."""

    pass


class DocumentLoadError(DocumentError):
    """Error loading a draft or spec document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load document '{path}': {reason}")


class DocumentSaveError(DocumentError):
    """Error writing a generated artifact."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save '{path}': {reason}")


class PresetError(IconSpecError):
    """Errors related to preset lookup."""

    pass


class PresetNotFoundError(PresetError):
    """Requested preset is not registered."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Preset '{key}' not found in registry")


class ToolError(IconSpecError):
    """Errors raised at the tool-call boundary."""

    pass


class UnknownToolError(ToolError):
    """Requested tool name is not one of the pipeline tools."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ToolRequestError(ToolError):
    """Tool request envelope could not be parsed."""

    def __init__(
        self,
        tool: str,
        reason: str,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.tool = tool
        self.reason = reason
        self.errors = errors or []
        super().__init__(f"Invalid request for '{tool}': {reason}")
