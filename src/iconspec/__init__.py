"""iconspec - Compile minimal icon drafts into canonical SVG markup.

iconspec takes a small, style-free geometric description of an icon (a draft),
merges it with a named style preset, validates the result against the preset
and a set of geometric rules, and serializes it into deterministic SVG.

Example:
    $ iconspec build search.json

This will expand, validate and compile search.json and write search.svg.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
