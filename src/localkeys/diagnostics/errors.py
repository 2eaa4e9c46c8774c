"""Localization exception hierarchy with structured diagnostics.

Almost every abnormal state in localkeys is a fallback, not a failure:
missing keys render their reference form and missing documents clear the
store. The exceptions below cover the remaining cases that indicate an
authoring or configuration bug and must surface loudly.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class LocalizationError(Exception):
    """Base exception for all localkeys errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocalizationError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class DocumentParseError(LocalizationError):
    """Language document could not be parsed into a tree.

    A malformed document cannot safely produce any table, so this error
    propagates out of LocalizationClient.use() instead of degrading to
    reference-form placeholders.

    Attributes:
        source_path: Human-readable document location (if known)
    """

    def __init__(self, message: str | Diagnostic, *, source_path: str | None = None) -> None:
        """Initialize DocumentParseError.

        Args:
            message: Error message string OR Diagnostic object
            source_path: Human-readable document location
        """
        super().__init__(message)
        self.source_path = source_path


class DocumentDepthError(DocumentParseError):
    """Document nesting exceeds the flattener's depth limit.

    Raised for absurdly deep trees and for YAML aliases that refer back to
    one of their own ancestors.
    """


class ConfigurationError(LocalizationError, ValueError):
    """Invalid client configuration or document source arguments."""
