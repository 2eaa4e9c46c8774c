"""Document parsing and flattening.

Exports:
    parse_document: YAML text -> composed node tree
    flatten_document: YAML text -> FlattenResult
    flatten_tree: Composed node tree -> FlattenResult
    flatten_object: Python dict/list tree -> FlattenResult
    normalize_segment: Normalize one path segment
    TreeFlattener: Reusable flattener
    FlattenResult: Flat table plus diagnostics

Python 3.13+.
"""

from .document import parse_document
from .flattener import (
    FlattenResult,
    TreeFlattener,
    flatten_document,
    flatten_object,
    flatten_tree,
    normalize_segment,
)

__all__ = [
    "FlattenResult",
    "TreeFlattener",
    "flatten_document",
    "flatten_object",
    "flatten_tree",
    "normalize_segment",
    "parse_document",
]
