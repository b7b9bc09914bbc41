"""Document I/O layer for iconspec.

This module handles reading JSON documents and writing generated artifacts.
It keeps file handling out of the pipeline, which works on mappings and
models only.

Key responsibilities:
- Load draft and expanded-spec documents
- Detect document kind
- Write SVG markup, optionally with a concrete color
- Write JSON documents

Key classes:
- DocumentReader: Load documents
- IconWriter: Save artifacts
"""

from iconspec.io.reader import DocumentReader
from iconspec.io.writer import IconWriter, replace_current_color, safe_file_stem

__all__ = [
    "DocumentReader",
    "IconWriter",
    "replace_current_color",
    "safe_file_stem",
]
