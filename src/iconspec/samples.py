"""Built-in sample drafts.

A small fixed library of draft documents used for demos, smoke tests and as
seed material for agents. Every accessor returns a fresh deep copy, so
callers may mutate what they get.
"""

import copy
from typing import Any

SAMPLE_LIBRARY_VERSION = "1"

_EXPORTS = {"emitSvg": True, "pngSizes": [64, 128, 256]}


def _draft(name: str, **geometry: list[dict[str, Any]]) -> dict[str, Any]:
    draft: dict[str, Any] = {
        "docType": "iconDraft",
        "name": name,
        "preset": "outline_rounded",
        "size": 24,
        "viewBox": "0 0 24 24",
        "paths": [],
        "circles": [],
        "rects": [],
        "lines": [],
        "polylines": [],
        "exports": copy.deepcopy(_EXPORTS),
    }
    draft.update(geometry)
    return draft


_SETTINGS_GEAR = (
    "M19.4 15a1.65 1.65 0 0 0 .33 1.82l.06.06a2 2 0 0 1 0 2.83 2 2 0 0 1-2.83 0"
    "l-.06-.06a1.65 1.65 0 0 0-1.82-.33 1.65 1.65 0 0 0-1 1.51V21a2 2 0 0 1-2 2"
    " 2 2 0 0 1-2-2v-.09A1.65 1.65 0 0 0 9 19.4a1.65 1.65 0 0 0-1.82.33l-.06.06"
    "a2 2 0 0 1-2.83 0 2 2 0 0 1 0-2.83l.06-.06a1.65 1.65 0 0 0 .33-1.82"
    " 1.65 1.65 0 0 0-1.51-1H3a2 2 0 0 1-2-2 2 2 0 0 1 2-2h.09A1.65 1.65 0 0 0"
    " 4.6 9a1.65 1.65 0 0 0-.33-1.82l-.06-.06a2 2 0 0 1 0-2.83 2 2 0 0 1 2.83 0"
    "l.06.06a1.65 1.65 0 0 0 1.82.33H9a1.65 1.65 0 0 0 1-1.51V3a2 2 0 0 1 2-2"
    " 2 2 0 0 1 2 2v.09a1.65 1.65 0 0 0 1 1.51 1.65 1.65 0 0 0 1.82-.33l.06-.06"
    "a2 2 0 0 1 2.83 0 2 2 0 0 1 0 2.83l-.06.06a1.65 1.65 0 0 0-.33 1.82V9"
    "a1.65 1.65 0 0 0 1.51 1H21a2 2 0 0 1 2 2 2 2 0 0 1-2 2h-.09"
    "a1.65 1.65 0 0 0-1.51 1z"
)

_SAMPLES: tuple[dict[str, Any], ...] = (
    _draft(
        "home",
        paths=[
            {"d": "M3 9l9-7 9 7v11a2 2 0 0 1-2 2H5a2 2 0 0 1-2-2z"},
            {"d": "M9 22V12h6v10"},
        ],
    ),
    _draft(
        "settings",
        paths=[
            {"d": "M12 15a3 3 0 1 0 0-6 3 3 0 0 0 0 6z"},
            {"d": _SETTINGS_GEAR},
        ],
    ),
    _draft(
        "user",
        paths=[{"d": "M20 21v-2a4 4 0 0 0-4-4H8a4 4 0 0 0-4 4v2"}],
        circles=[{"cx": 12, "cy": 7, "r": 4}],
    ),
    _draft(
        "search",
        circles=[{"cx": 11, "cy": 11, "r": 8}],
        lines=[{"x1": 21, "y1": 21, "x2": 16.65, "y2": 16.65}],
    ),
    _draft(
        "heart",
        paths=[
            {
                "d": (
                    "M20.84 4.61a5.5 5.5 0 0 0-7.78 0L12 5.67l-1.06-1.06"
                    "a5.5 5.5 0 0 0-7.78 7.78l1.06 1.06L12 21.23l7.78-7.78"
                    " 1.06-1.06a5.5 5.5 0 0 0 0-7.78z"
                )
            }
        ],
    ),
)


def list_samples() -> list[str]:
    """Sample names in library order."""
    return [sample["name"] for sample in _SAMPLES]


def get_sample(name: str) -> dict[str, Any] | None:
    """Fresh copy of the named sample draft, or None if there is none."""
    for sample in _SAMPLES:
        if sample["name"] == name:
            return copy.deepcopy(sample)
    return None


def get_sample_by_index(index: int) -> dict[str, Any]:
    """Fresh copy of the sample at index, wrapping around the library.

    Examples:
        >>> get_sample_by_index(5)["name"]
        'home'
    """
    return copy.deepcopy(_SAMPLES[index % len(_SAMPLES)])


def all_samples() -> list[dict[str, Any]]:
    """Fresh copies of every sample draft, in library order."""
    return copy.deepcopy(list(_SAMPLES))
