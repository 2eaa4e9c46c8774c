"""Diagnostic system for localkeys.

Provides structured diagnostics with codes, document marks and hints, plus
the exception hierarchy raised for authoring and configuration bugs.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, DocumentMark
from .errors import (
    ConfigurationError,
    DocumentDepthError,
    DocumentParseError,
    LocalizationError,
)

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "DocumentDepthError",
    "DocumentMark",
    "DocumentParseError",
    "LocalizationError",
]
