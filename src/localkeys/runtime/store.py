"""Resolution store: active flat table plus per-key resolution cache.

The table and its cache always travel together as one snapshot record.
Installing a table swaps the whole record under a single lock, so a reader
can never pair a table with a cache built from a different table. Lookups
read the snapshot reference once and then proceed without locking.

Resolution rules for ``get(key)``:
    1. Empty path -> ``""`` (table and cache bypassed).
    2. Cached path -> cached text, verbatim.
    3. Otherwise the table text when present and non-empty, else the key's
       reference form (``"$" + path``). The result is cached either way, so
       repeated misses stay cheap.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import Lock
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from localkeys.keys import LocalizationKey
    from localkeys.types import FlatTable, LocalizationPath

__all__ = ["ResolutionStore"]

logger = logging.getLogger(__name__)

_EMPTY_TABLE: FlatTable = MappingProxyType({})


@dataclass(slots=True)
class _Snapshot:
    """One table and the cache derived from it."""

    table: FlatTable | None
    cache: dict[LocalizationPath, str] = field(default_factory=dict)


class ResolutionStore:
    """Holds the active FlatTable and memoizes key resolution against it.

    Instances are independent; there is no process-wide state. A client
    owns one store, and tests can build as many as they like.

    Example:
        >>> from localkeys.keys import LocalizationKey
        >>> store = ResolutionStore()
        >>> store.set_table({"UI.menu.start": "Start Game"})
        >>> store.get(LocalizationKey("UI.menu.start"))
        'Start Game'
        >>> store.get(LocalizationKey("UI.menu.quit"))
        '$UI.menu.quit'
    """

    __slots__ = ("_hits", "_misses", "_snapshot", "_swap_lock")

    def __init__(self, table: FlatTable | None = None) -> None:
        """Initialize store.

        Args:
            table: Initial table (None: every key resolves to its reference form)
        """
        self._swap_lock = Lock()
        self._snapshot = _Snapshot(table=self._freeze(table))
        self._hits = 0
        self._misses = 0

    @staticmethod
    def _freeze(table: FlatTable | None) -> FlatTable | None:
        if table is None or isinstance(table, MappingProxyType):
            return table
        return MappingProxyType(dict(table))

    def set_table(self, table: FlatTable | None) -> None:
        """Install a new table and drop every cached resolution.

        Args:
            table: New path -> text table. None clears the store, after which
                every key resolves to its reference form.
        """
        snapshot = _Snapshot(table=self._freeze(table))
        with self._swap_lock:
            self._snapshot = snapshot
        logger.debug(
            "Installed localization table with %d entries; cache cleared",
            len(snapshot.table) if snapshot.table is not None else 0,
        )

    def clear(self) -> None:
        """Remove the active table (equivalent to ``set_table(None)``)."""
        self.set_table(None)

    def get(self, key: LocalizationKey) -> str:
        """Resolve a key to display text.

        Never raises for a well-formed key: unresolved keys return the
        visible ``"$" + path`` placeholder.

        Args:
            key: Localization key

        Returns:
            Localized text, ``""`` for an empty path, or the reference form
        """
        path = key.path
        if not path:
            return ""

        snapshot = self._snapshot
        cached = snapshot.cache.get(path)
        if cached is not None:
            self._hits += 1
            return cached

        self._misses += 1
        resolved = self._resolve(snapshot.table, key)
        snapshot.cache[path] = resolved
        return resolved

    @staticmethod
    def _resolve(table: FlatTable | None, key: LocalizationKey) -> str:
        if table is not None:
            value = table.get(key.path)
            if value:
                return value
        logger.debug("Localization key '%s' not found; using reference form", key.path)
        return key.reference_form()

    def has(self, key: LocalizationKey) -> bool:
        """Check if the active table holds non-empty text for a key."""
        table = self._snapshot.table
        return table is not None and bool(table.get(key.path))

    @property
    def table(self) -> FlatTable:
        """Active table as a read-only mapping (empty when cleared)."""
        table = self._snapshot.table
        return table if table is not None else _EMPTY_TABLE

    @property
    def is_loaded(self) -> bool:
        """Check if a table is installed (it may still be empty)."""
        return self._snapshot.table is not None

    def get_stats(self) -> dict[str, int | float]:
        """Get resolution statistics.

        Hit and miss counters are updated without locking and are approximate
        under concurrent lookups.

        Returns:
            Dict with keys:
            - size (int): Number of cached resolutions for the active table
            - table_size (int): Number of entries in the active table
            - hits (int): Cache hits since construction
            - misses (int): Cache misses since construction
            - hit_rate (float): Hit rate as percentage (0.0-100.0)
        """
        snapshot = self._snapshot
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0.0
        return {
            "size": len(snapshot.cache),
            "table_size": len(snapshot.table) if snapshot.table is not None else 0,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(hit_rate, 2),
        }

    def __len__(self) -> int:
        """Return number of cached resolutions for the active table."""
        return len(self._snapshot.cache)

    def __repr__(self) -> str:
        snapshot = self._snapshot
        table_size = len(snapshot.table) if snapshot.table is not None else None
        return f"ResolutionStore(table_size={table_size}, cached={len(snapshot.cache)})"
