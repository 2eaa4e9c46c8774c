"""Type aliases for the localization domain.

Provides semantic type aliases used throughout localkeys and by user code
annotating document sources and flattened tables.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "DocumentText",
    "FlatTable",
    "LocalizationPath",
]

type LocalizationPath = str
"""Dotted path of normalized segments (e.g., 'UI.menu.start', 'list.0')."""

type DocumentText = str
"""Raw YAML text of one language document."""

type FlatTable = Mapping[LocalizationPath, str]
"""Flattened document: path -> text. Replaced wholesale, never mutated."""
