"""Language document loading infrastructure.

Provides the protocol for language document sources, an in-memory and a
directory-backed implementation, and the immutable records describing the
outcome of a language switch.

Components:
    DocumentSource - Protocol for fetching the raw document of a language
    MappingDocumentSource - In-memory {language id: YAML text} source
    DirectoryDocumentSource - Discovers lang_<id>.yaml files in a directory
    FallbackInfo - Immutable record of a default-language fallback
    LoadResult - Immutable result of one LocalizationClient.use() call

"No document for this language" is a normal outcome: sources return None
instead of raising.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from localkeys.constants import LANGUAGE_FILE_PREFIX, LANGUAGE_FILE_SUFFIXES
from localkeys.diagnostics import ConfigurationError, Diagnostic, DiagnosticCode
from localkeys.enums import LoadStatus
from localkeys.keys import LanguageId

if TYPE_CHECKING:
    from localkeys.types import DocumentText

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "DocumentSource",
    # Concrete sources
    "MappingDocumentSource",
    "DirectoryDocumentSource",
    # Load records
    "FallbackInfo",
    "LoadResult",
]

logger = logging.getLogger(__name__)


class DocumentSource(Protocol):
    """Protocol for fetching the raw YAML document of a language.

    This is a Protocol (structural typing) rather than ABC so that any object
    with matching methods can feed a LocalizationClient.

    Example:
        >>> class PackageSource:
        ...     def load(self, language: LanguageId) -> str | None:
        ...         try:
        ...             return resources.read_text("game.lang", f"{language.id}.yaml")
        ...         except FileNotFoundError:
        ...             return None
        ...     def describe_path(self, language: LanguageId) -> str:
        ...         return f"game.lang/{language.id}.yaml"
        ...     def available_languages(self) -> tuple[LanguageId, ...]:
        ...         return (LanguageId("en"),)
    """

    def load(self, language: LanguageId) -> DocumentText | None:
        """Return the document text for a language.

        Args:
            language: Language to look up (case-insensitive)

        Returns:
            Raw YAML text, or None if no document exists for the language

        Raises:
            OSError: If an existing document cannot be read
        """

    def describe_path(self, language: LanguageId) -> str:
        """Return human-readable document location for diagnostics.

        Args:
            language: Language whose document is described

        Returns:
            Location string for log messages and load results
        """
        return f"<{language.id}>"

    def available_languages(self) -> tuple[LanguageId, ...]:
        """Return every language this source has a document for."""


class MappingDocumentSource:
    """In-memory document source keyed by language id.

    Lookup is case-insensitive. Useful for tests and for documents bundled
    as package data and read up front.

    Example:
        >>> source = MappingDocumentSource({"en": "hello: Hello", "de": "hello: Hallo"})
        >>> source.load(LanguageId("DE"))
        'hello: Hallo'
    """

    __slots__ = ("_documents", "_languages")

    def __init__(self, documents: Mapping[str | LanguageId, DocumentText]) -> None:
        """Initialize source.

        Args:
            documents: Language id (string or LanguageId) -> YAML text

        Raises:
            ConfigurationError: If two entries map to the same language
        """
        self._documents: dict[LanguageId, DocumentText] = {}
        for raw_language, text in documents.items():
            language = (
                raw_language if isinstance(raw_language, LanguageId) else LanguageId(raw_language)
            )
            if language in self._documents:
                raise ConfigurationError(
                    Diagnostic(
                        code=DiagnosticCode.INVALID_CONFIG,
                        message=f"Duplicate document for language '{language.id}'",
                    )
                )
            self._documents[language] = text
        self._languages = tuple(sorted(self._documents, key=lambda lang: lang.normalized))

    def load(self, language: LanguageId) -> DocumentText | None:
        """Return the document for a language, or None."""
        return self._documents.get(language)

    def describe_path(self, language: LanguageId) -> str:
        """Return human-readable document location for diagnostics."""
        return f"<memory:{language.id}>"

    def available_languages(self) -> tuple[LanguageId, ...]:
        """Return languages in case-insensitive id order."""
        return self._languages

    def __repr__(self) -> str:
        ids = [language.id for language in self._languages]
        return f"MappingDocumentSource(languages={ids!r})"


@dataclass(frozen=True, slots=True)
class DirectoryDocumentSource:
    """Directory of ``<prefix><id><suffix>`` language documents.

    With the defaults, ``lang_en.yaml`` and ``lang_pt-BR.yml`` provide the
    ``en`` and ``pt-BR`` languages. The directory is re-scanned on every
    lookup so that edited or added files are picked up by the next language
    switch.

    Security:
        Language ids are only ever matched against discovered file names;
        they are never joined into a filesystem path, so ids such as
        ``"../secrets"`` simply find no document.

    Example:
        >>> source = DirectoryDocumentSource("assets/localisation")
        >>> text = source.load(LanguageId("en"))
        # Reads: assets/localisation/lang_en.yaml

    Attributes:
        directory: Directory holding the language documents
        prefix: File name prefix before the language id
        suffixes: Accepted file extensions, in preference order
    """

    directory: str | Path
    prefix: str = LANGUAGE_FILE_PREFIX
    suffixes: tuple[str, ...] = LANGUAGE_FILE_SUFFIXES
    _resolved_dir: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Resolve and validate the directory.

        Raises:
            ConfigurationError: If the directory does not exist or no
                suffixes are given
        """
        resolved = Path(self.directory).resolve()
        if not resolved.is_dir():
            raise ConfigurationError(
                Diagnostic(
                    code=DiagnosticCode.INVALID_CONFIG,
                    message=f"Language document directory not found: {self.directory}",
                )
            )
        if not self.suffixes:
            msg = "At least one document suffix is required"
            raise ConfigurationError(msg)
        object.__setattr__(self, "_resolved_dir", resolved)

    def _language_of(self, path: Path) -> LanguageId | None:
        name = path.name
        if not name.casefold().startswith(self.prefix.casefold()):
            return None
        for suffix in self.suffixes:
            if name.casefold().endswith(suffix.casefold()):
                language_id = name[len(self.prefix) : len(name) - len(suffix)]
                return LanguageId(language_id) if language_id else None
        return None

    def discover(self) -> dict[LanguageId, Path]:
        """Scan the directory for language documents.

        When one language has several files (``lang_en.yaml`` and
        ``lang_en.yml``), the earlier suffix in ``suffixes`` wins.

        Returns:
            Language -> document path, in case-insensitive id order
        """
        found: dict[LanguageId, Path] = {}
        rank: dict[LanguageId, int] = {}
        for path in sorted(self._resolved_dir.iterdir()):
            if not path.is_file():
                continue
            language = self._language_of(path)
            if language is None:
                continue
            suffix_rank = next(
                i for i, s in enumerate(self.suffixes) if path.name.casefold().endswith(s.casefold())
            )
            if language in found:
                logger.warning(
                    "Several documents for language '%s' in %s; keeping the preferred suffix",
                    language.id,
                    self._resolved_dir,
                )
                if suffix_rank >= rank[language]:
                    continue
            found[language] = path
            rank[language] = suffix_rank
        return dict(sorted(found.items(), key=lambda item: item[0].normalized))

    def load(self, language: LanguageId) -> DocumentText | None:
        """Read the document for a language.

        Returns:
            UTF-8 decoded document text, or None if there is no such file

        Raises:
            OSError: If the file exists but cannot be read
        """
        if not language.id.strip():
            return None
        path = self.discover().get(language)
        if path is None:
            return None
        return path.read_text(encoding="utf-8")

    def describe_path(self, language: LanguageId) -> str:
        """Return the document path, or the path it would have."""
        path = self.discover().get(language)
        if path is not None:
            return str(path)
        return str(self._resolved_dir / f"{self.prefix}{language.id}{self.suffixes[0]}")

    def available_languages(self) -> tuple[LanguageId, ...]:
        """Return discovered languages in case-insensitive id order."""
        return tuple(self.discover())


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a default-language fallback.

    Provided to the on_fallback callback when LocalizationClient.use() finds
    no document for the requested language and loads the default instead.

    Attributes:
        requested_language: Language passed to use()
        resolved_language: Language whose document was actually loaded

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"No '{info.requested_language}' document; "
        ...           f"using '{info.resolved_language}'")
        >>> client = LocalizationClient(config, on_fallback=log_fallback)
    """

    requested_language: LanguageId
    resolved_language: LanguageId


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Result of switching the active language.

    Attributes:
        requested_language: Language passed to use()
        status: Outcome of the switch
        resolved_language: Language whose document was loaded (None if none)
        source_path: Human-readable document location (if a document was found)
        entry_count: Number of entries in the installed table
        diagnostics: Flattening warnings for the loaded document, or the
            reason nothing was loaded
    """

    requested_language: LanguageId
    status: LoadStatus
    resolved_language: LanguageId | None = None
    source_path: str | None = None
    entry_count: int = 0
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def is_success(self) -> bool:
        """Check if the requested language itself was loaded."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_fallback(self) -> bool:
        """Check if the default language was loaded instead."""
        return self.status == LoadStatus.FALLBACK

    @property
    def is_loaded(self) -> bool:
        """Check if any document was installed."""
        return self.status in (LoadStatus.SUCCESS, LoadStatus.FALLBACK)

    @property
    def has_warnings(self) -> bool:
        """Check if the switch produced any diagnostics."""
        return len(self.diagnostics) > 0
