"""Artifact writer for compiled icons.

This module provides the IconWriter class for writing compiled SVG markup
and JSON documents next to their inputs or into an output directory.
"""

import json
import re
from pathlib import Path
from typing import Any

from iconspec.domain import CompileResult, CompileSuccess
from iconspec.exceptions import DocumentSaveError

CURRENT_COLOR = "currentColor"

_PATH_SEPARATORS = re.compile(r"[/\\]+")


def safe_file_stem(name: str) -> str:
    """Turn an icon name into a file stem that stays inside its directory.

    Path separators become underscores and leading dots are dropped, so
    names such as "../evil" or "a/b" cannot address other directories.

    Examples:
        >>> safe_file_stem("../evil")
        '_evil'
        >>> safe_file_stem("search")
        'search'
    """
    stem = _PATH_SEPARATORS.sub("_", name).lstrip(".")
    return stem or "icon"


def replace_current_color(svg: str, color: str) -> str:
    """Replace every currentColor in svg with a concrete color.

    Examples:
        >>> replace_current_color('<svg stroke="currentColor">', "#000")
        '<svg stroke="#000">'
    """
    if color == CURRENT_COLOR:
        return svg
    return svg.replace(CURRENT_COLOR, color)


class IconWriter:
    """Writes compiled icons and JSON documents.

    Example:
        writer = IconWriter(Path("build"))
        writer.write_svg(result, "search", color="#000000")
    """

    def __init__(self, output_dir: Path | None = None) -> None:
        """Initialize the icon writer.

        Args:
            output_dir: Directory for artifacts (None = current directory)
        """
        self._output_dir = output_dir

    def write_svg(
        self,
        result: CompileResult,
        name: str,
        color: str | None = None,
        minified: bool = False,
    ) -> Path:
        """Write compiled markup to <output_dir>/<name>.svg.

        The name is passed through safe_file_stem first.

        Args:
            result: Compile result; must be a success
            name: File stem
            color: Replacement for currentColor (None keeps it)
            minified: Write the minified form instead of the pretty form

        Returns:
            Path of the written file

        Raises:
            DocumentSaveError: If result is a failure or the file cannot be written
        """
        if not isinstance(result, CompileSuccess):
            raise DocumentSaveError(
                str(self._resolve(Path(f"{safe_file_stem(name)}.svg"))),
                "compilation failed; no markup to write",
            )

        svg = result.svg_minified if minified else result.svg
        return self.write_markup(svg, name, color)

    def write_markup(self, svg: str, name: str, color: str | None = None) -> Path:
        """Write already compiled markup to <output_dir>/<name>.svg.

        Raises:
            DocumentSaveError: If the file cannot be written
        """
        path = self._resolve(Path(f"{safe_file_stem(name)}.svg"))
        if color is not None:
            svg = replace_current_color(svg, color)

        self._write(path, svg + "\n")
        return path

    def write_json(self, document: dict[str, Any], path: Path) -> Path:
        """Write a JSON document with two-space indentation.

        Raises:
            DocumentSaveError: If the file cannot be written
        """
        path = self._resolve(path)
        self._write(path, json.dumps(document, indent=2) + "\n")
        return path

    def get_output_path(self, input_path: Path, suffix: str) -> Path:
        """Generate an output path for an input document.

        Converts: search.json -> search.svg (suffix ".svg")
                  search.json -> search.expanded.json (suffix ".expanded.json")

        Args:
            input_path: Input document path
            suffix: Replacement suffix, including the leading dot

        Returns:
            Path in the output directory, or next to the input when unset
        """
        name = f"{input_path.stem}{suffix}"
        if self._output_dir is not None:
            return self._output_dir / name
        return input_path.parent / name

    def _resolve(self, path: Path) -> Path:
        if self._output_dir is not None and not path.is_absolute():
            return self._output_dir / path.name
        return path

    @staticmethod
    def _write(path: Path, text: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise DocumentSaveError(str(path), str(e)) from e
