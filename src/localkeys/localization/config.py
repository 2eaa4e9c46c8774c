"""Client configuration.

Provides a single frozen dataclass holding everything a LocalizationClient
needs to find documents: where they come from and which language to fall
back to.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from localkeys.constants import DEFAULT_LANGUAGE_ID, LANGUAGE_FILE_PREFIX
from localkeys.diagnostics import ConfigurationError, Diagnostic, DiagnosticCode
from localkeys.keys import LanguageId
from localkeys.localization.loading import (
    DirectoryDocumentSource,
    DocumentSource,
    MappingDocumentSource,
)

if TYPE_CHECKING:
    from localkeys.types import DocumentText

__all__ = ["ClientConfig"]


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Immutable configuration for LocalizationClient.

    Attributes:
        source: Where language documents come from
        default_language: Language loaded when the requested one has no
            document (default: "en"). A plain string passed here is
            converted to LanguageId, so the stored value is always a LanguageId.

    Example:
        >>> config = ClientConfig.from_directory("assets/localisation")
        >>> config.default_language
        LanguageId(id='en')

    Example - In-memory documents:
        >>> config = ClientConfig.from_mapping(
        ...     {"en": "hello: Hello", "fr": "hello: Bonjour"},
        ...     default_language="fr",
        ... )
    """

    source: DocumentSource
    default_language: LanguageId = LanguageId(DEFAULT_LANGUAGE_ID)

    def __post_init__(self) -> None:
        """Normalize and validate configuration values.

        Raises:
            ConfigurationError: If source is missing or default_language is empty
        """
        if self.source is None:
            msg = "ClientConfig.source is required"
            raise ConfigurationError(msg)
        default = _as_language(self.default_language)
        object.__setattr__(self, "default_language", default)
        if not default.id.strip():
            raise ConfigurationError(
                Diagnostic(
                    code=DiagnosticCode.INVALID_LANGUAGE_ID,
                    message="default_language must be a non-empty language id",
                )
            )

    @classmethod
    def from_directory(
        cls,
        directory: str | Path,
        *,
        default_language: LanguageId | str = DEFAULT_LANGUAGE_ID,
        prefix: str = LANGUAGE_FILE_PREFIX,
    ) -> ClientConfig:
        """Build a config reading ``<prefix><id>.yaml`` files from a directory.

        Raises:
            ConfigurationError: If the directory does not exist
        """
        return cls(
            source=DirectoryDocumentSource(directory, prefix=prefix),
            default_language=_as_language(default_language),
        )

    @classmethod
    def from_mapping(
        cls,
        documents: Mapping[str | LanguageId, DocumentText],
        *,
        default_language: LanguageId | str = DEFAULT_LANGUAGE_ID,
    ) -> ClientConfig:
        """Build a config over in-memory documents."""
        return cls(
            source=MappingDocumentSource(documents),
            default_language=_as_language(default_language),
        )


def _as_language(language: LanguageId | str) -> LanguageId:
    return language if isinstance(language, LanguageId) else LanguageId(language)
