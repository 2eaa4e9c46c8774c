"""Client binding: active language selection over a resolution store.

Call site API:
    client = LocalizationClient(ClientConfig.from_directory("assets/localisation"))
    client.use(langs.en)
    text = client.get(defs.UI.menu.start)

Key architectural decisions:
- Full reload on every switch: the whole document is re-read, re-parsed and
  re-flattened; no diffing or partial merges.
- Missing documents degrade, malformed documents fail: a language with no
  document (and no default) clears the store so every key renders as
  ``$<path>``, while a parse error propagates and leaves the previously
  installed table active.
- Injectable store: the client owns a ResolutionStore instance rather than
  process-wide state.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from threading import Lock
from typing import TYPE_CHECKING

from localkeys.diagnostics import Diagnostic, DiagnosticCode, DocumentParseError
from localkeys.enums import LoadStatus
from localkeys.localization.loading import FallbackInfo, LoadResult
from localkeys.runtime.store import ResolutionStore
from localkeys.syntax.flattener import flatten_document

if TYPE_CHECKING:
    from localkeys.keys import LanguageId, LocalizationKey
    from localkeys.localization.config import ClientConfig

__all__ = ["LocalizationClient"]

logger = logging.getLogger(__name__)


class LocalizationClient:
    """Owns the current language and keeps the store's table in sync with it.

    Example:
        >>> config = ClientConfig.from_mapping({
        ...     "en": "UI:\\n  menu:\\n    $: Menu\\n    start: Start Game\\n",
        ... })
        >>> client = LocalizationClient(config)
        >>> client.use(LanguageId("fr")).status
        <LoadStatus.FALLBACK: 'fallback'>
        >>> client.get(LocalizationKey("UI.menu.start"))
        'Start Game'
        >>> client.current
        LanguageId(id='fr')
    """

    __slots__ = ("_config", "_current", "_last_load", "_lock", "_on_fallback", "_store")

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        store: ResolutionStore | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize client.

        Args:
            config: Document source and default language. May be set later
                via set_config(); until then use() clears the store.
            store: Store to install tables into (default: a new private store)
            on_fallback: Optional callback invoked when use() loads the
                default language because the requested one has no document
        """
        self._config = config
        self._store = store if store is not None else ResolutionStore()
        self._on_fallback = on_fallback
        self._current: LanguageId | None = None
        self._last_load: LoadResult | None = None
        # Serializes use(); lookups go straight to the store.
        self._lock = Lock()

    def set_config(self, config: ClientConfig | None) -> None:
        """Replace the configuration used by subsequent use() calls.

        The active table is left alone; call use() to reload.
        """
        with self._lock:
            self._config = config

    @property
    def config(self) -> ClientConfig | None:
        """Current configuration (None if unset)."""
        return self._config

    @property
    def store(self) -> ResolutionStore:
        """Store receiving the flattened tables."""
        return self._store

    @property
    def current(self) -> LanguageId | None:
        """Language most recently passed to use(), whether or not it loaded."""
        return self._current

    @property
    def last_load(self) -> LoadResult | None:
        """Result of the most recent completed use() call."""
        return self._last_load

    def available_languages(self) -> tuple[LanguageId, ...]:
        """Return languages the configured source has documents for."""
        config = self._config
        if config is None:
            return ()
        return config.source.available_languages()

    def use(self, language: LanguageId) -> LoadResult:
        """Make a language active.

        The language is recorded as current before anything else, so
        ``current`` always reports what was last requested.

        Args:
            language: Language to activate

        Returns:
            LoadResult describing which document (if any) was installed

        Raises:
            DocumentParseError: If the selected document is malformed. The
                previously installed table stays active.
            OSError: If the selected document exists but cannot be read
        """
        with self._lock:
            self._current = language
            result = self._load(language)
            self._last_load = result

        if result.is_fallback and self._on_fallback is not None and result.resolved_language:
            self._on_fallback(
                FallbackInfo(
                    requested_language=language,
                    resolved_language=result.resolved_language,
                )
            )
        return result

    def _load(self, language: LanguageId) -> LoadResult:
        config = self._config
        if config is None:
            logger.warning(
                "No ClientConfig assigned. Localization will return $-prefixed keys."
            )
            self._store.clear()
            return LoadResult(
                requested_language=language,
                status=LoadStatus.NO_CONFIG,
                diagnostics=(
                    Diagnostic(
                        code=DiagnosticCode.NO_CONFIG,
                        message="No ClientConfig assigned",
                        hint="Pass a ClientConfig or call set_config() before use()",
                        severity="warning",
                    ),
                ),
            )

        source = config.source
        default = config.default_language
        resolved = language
        status = LoadStatus.SUCCESS
        text = source.load(language)
        if text is None:
            resolved = default
            status = LoadStatus.FALLBACK
            text = source.load(default)

        if text is None:
            logger.warning(
                "No document found for '%s' (or default '%s').", language.id, default.id
            )
            self._store.clear()
            return LoadResult(
                requested_language=language,
                status=LoadStatus.NOT_FOUND,
                diagnostics=(
                    Diagnostic(
                        code=DiagnosticCode.DOCUMENT_NOT_FOUND,
                        message=f"No document for '{language.id}' or default '{default.id}'",
                        source_path=source.describe_path(language),
                        severity="warning",
                    ),
                ),
            )

        source_path = source.describe_path(resolved)
        try:
            flattened = flatten_document(text, source_path=source_path)
        except DocumentParseError as e:
            logger.error("Failed to parse language document %s: %s", source_path, e)
            raise

        self._store.set_table(flattened.table)
        logger.info(
            "Loaded language '%s' from %s (%d entries%s)",
            resolved.id,
            source_path,
            len(flattened.table),
            f", requested '{language.id}'" if status == LoadStatus.FALLBACK else "",
        )
        return LoadResult(
            requested_language=language,
            status=status,
            resolved_language=resolved,
            source_path=source_path,
            entry_count=len(flattened.table),
            diagnostics=flattened.diagnostics,
        )

    def get(self, key: LocalizationKey) -> str:
        """Resolve a key against the active language.

        Returns:
            Localized text, ``""`` for an empty key, or ``"$" + path``
        """
        return self._store.get(key)

    def __repr__(self) -> str:
        current = self._current.id if self._current is not None else None
        return f"LocalizationClient(current={current!r}, store={self._store!r})"
