"""Hypothesis strategies for localkeys property-based testing.

Usage:
    from tests.strategies import document_trees, segments, texts
"""

from .trees import document_trees, dotted_paths, language_ids, segments, texts

__all__ = [
    "document_trees",
    "dotted_paths",
    "language_ids",
    "segments",
    "texts",
]
