"""Enumerations for localkeys type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class LoadStatus(StrEnum):
    """Outcome of switching the active language.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Document for the requested language was loaded."""

    FALLBACK = "fallback"
    """Requested language had no document; the default language was loaded."""

    NOT_FOUND = "not_found"
    """Neither the requested nor the default language had a document."""

    NO_CONFIG = "no_config"
    """Client has no configuration; nothing could be looked up."""


class NodeKind(StrEnum):
    """Kind of tree node understood by the flattener."""

    MAPPING = "mapping"
    """Ordered key -> child node pairs."""

    SEQUENCE = "sequence"
    """Ordered list of child nodes, addressed by zero-based index."""

    SCALAR = "scalar"
    """Leaf text."""


__all__ = [
    "LoadStatus",
    "NodeKind",
]
