"""Document reader for loading drafts and expanded specs.

This module provides the DocumentReader class for loading JSON documents
from disk. Documents are returned as plain mappings; judging their content
is left to the pipeline.
"""

import json
from pathlib import Path
from typing import Any

from iconspec.exceptions import DocumentLoadError

DRAFT = "draft"
EXPANDED = "expanded"


class DocumentReader:
    """Loads draft and expanded-spec JSON documents.

    Example:
        reader = DocumentReader(Path("search.json"))
        reader.load()
        if reader.kind == "draft":
            result = expand(reader.data)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the document reader.

        Args:
            path: Path to the JSON document
        """
        self._path = path
        self._data: dict[str, Any] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        """Load and parse the document.

        Returns:
            The parsed document

        Raises:
            DocumentLoadError: If the file is missing, is not JSON or does
                not hold a JSON object
        """
        if not self._path.exists():
            raise DocumentLoadError(str(self._path), "file not found")

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(str(self._path), str(e)) from e
        except json.JSONDecodeError as e:
            raise DocumentLoadError(str(self._path), f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise DocumentLoadError(
                str(self._path),
                f"expected a JSON object, found {type(data).__name__}",
            )

        self._data = data
        return data

    @property
    def data(self) -> dict[str, Any]:
        """Return the parsed document.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        if self._data is None:
            raise RuntimeError("Document not loaded. Call load() first.")

        return self._data

    @property
    def kind(self) -> str:
        """Return the document kind.

        Decided by ``docType`` when present, otherwise by whether the
        document carries resolved ``style`` or ``geometry``.

        Returns:
            'expanded' for expanded specs, 'draft' for everything else

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        data = self.data

        doc_type = data.get("docType")
        if doc_type == "iconExpanded":
            return EXPANDED
        if doc_type == "iconDraft":
            return DRAFT
        if "style" in data or "geometry" in data:
            return EXPANDED
        return DRAFT
