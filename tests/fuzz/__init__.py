"""Fuzz tests for localkeys.

This package contains:
- test_flattener_depth_exhaustion: MAX_DEPTH boundaries and alias cycles
- test_document_text_fuzz: Arbitrary YAML-like text through the full pipeline

Run with: pytest -m fuzz

Python 3.13+.
"""
