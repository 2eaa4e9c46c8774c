"""Diagnostic codes and data structures.

Defines diagnostic codes, document locations, and diagnostic messages
reported while flattening language documents and resolving keys.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DocumentMark",
]


class DiagnosticCode(Enum):
    """Diagnostic codes with unique identifiers.

    Organized by category:
        1000-1999: Language selection (missing documents, missing config)
        2000-2999: Document structure warnings (flattening)
        3000-3999: Document errors (parse failures, limits)
        4000-4999: Configuration errors
    """

    # Language selection (1000-1999)
    DOCUMENT_NOT_FOUND = 1002
    NO_CONFIG = 1003

    # Document structure warnings (2000-2999)
    DOTTED_KEY = 2001
    DUPLICATE_PATH = 2002
    NON_SCALAR_KEY = 2003

    # Document errors (3000-3999)
    DOCUMENT_MALFORMED = 3001
    DOCUMENT_TOO_LARGE = 3002
    MAX_DEPTH_EXCEEDED = 3003
    EXPANSION_LIMIT_EXCEEDED = 3004

    # Configuration errors (4000-4999)
    INVALID_CONFIG = 4001
    INVALID_LANGUAGE_ID = 4002


@dataclass(frozen=True, slots=True)
class DocumentMark:
    """Position of a node inside a source document.

    Built from the marks PyYAML attaches to composed nodes, which are
    0-indexed; stored here 1-indexed for human-facing output.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate DocumentMark invariants.

        Raises:
            ValueError: If line or column is less than 1.
        """
        if self.line < 1:
            msg = f"DocumentMark.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"DocumentMark.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique diagnostic code
        message: Human-readable description
        path: Localization path the diagnostic refers to (if any)
        mark: Location in the source document (if known)
        source_path: Document the diagnostic came from (if known)
        hint: Suggestion for fixing the problem
        severity: Diagnostic severity level
    """

    code: DiagnosticCode
    message: str
    path: str | None = None
    mark: DocumentMark | None = None
    source_path: str | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic as a multi-line report.

        Example output:
            warning[DOTTED_KEY]: Key 'a.b' contains '.'
              --> lang_en.yaml: line 3, column 1
              = path: UI.a.b
              = help: Prefer nested YAML instead of dotted keys

        Returns:
            Formatted diagnostic
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.mark is not None or self.source_path is not None:
            location = ": ".join(
                part for part in (self.source_path, str(self.mark) if self.mark else None) if part
            )
            lines.append(f"  --> {location}")
        if self.path is not None:
            lines.append(f"  = path: {self.path}")
        if self.hint is not None:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
