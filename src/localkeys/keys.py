"""Strongly-typed localization keys and language ids.

Call sites never look text up by raw string: they hold LocalizationKey
constants (usually generated from the authored documents) and LanguageId
constants for the available languages.

    >>> start = LocalizationKey("UI.menu.start")
    >>> start.reference_form()
    '$UI.menu.start'
    >>> LanguageId("EN") == LanguageId("en")
    True

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from localkeys.constants import PATH_SEPARATOR, REFERENCE_PREFIX
from localkeys.locale_utils import get_babel_locale, normalize_language_id

if TYPE_CHECKING:
    from babel import Locale

__all__ = ["LanguageId", "LocalizationKey"]


@dataclass(frozen=True, slots=True)
class LocalizationKey:
    """Immutable identifier of a localized string.

    Wraps a dotted path such as ``"UI.menu.start"``. Equality and hashing
    are exact, case-sensitive string comparison. No validation happens at
    construction: an empty path is legal and always resolves to ``""``.

    Attributes:
        path: Dotted localization path
    """

    path: str

    def __post_init__(self) -> None:
        if self.path is None:
            object.__setattr__(self, "path", "")

    def __str__(self) -> str:
        return self.path

    def reference_form(self) -> str:
        """Return the ``$``-prefixed placeholder used for missing text.

        Returns:
            ``"$" + path`` (e.g., ``"$UI.menu.start"``)
        """
        return REFERENCE_PREFIX + self.path

    def child(self, segment: str) -> LocalizationKey:
        """Return the key of a nested node.

        Args:
            segment: Normalized child segment (e.g., "start")

        Returns:
            Key whose path is this path extended by ``segment``

        Example:
            >>> LocalizationKey("UI.menu").child("start").path
            'UI.menu.start'
        """
        if not self.path:
            return LocalizationKey(segment)
        return LocalizationKey(f"{self.path}{PATH_SEPARATOR}{segment}")


@dataclass(frozen=True, slots=True, eq=False)
class LanguageId:
    """Immutable language identifier (e.g., ``"en"``).

    Equality and hashing are case-insensitive so ``LanguageId("EN")`` and
    ``LanguageId("en")`` select the same document. Used only to look up
    documents; never stored in a flattened table.

    Attributes:
        id: Language id as authored
    """

    id: str

    def __post_init__(self) -> None:
        if self.id is None:
            object.__setattr__(self, "id", "")

    def __str__(self) -> str:
        return self.id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LanguageId):
            return NotImplemented
        return self.normalized == other.normalized

    def __hash__(self) -> int:
        return hash(self.normalized)

    @property
    def normalized(self) -> str:
        """Comparison form: the casefolded id."""
        return normalize_language_id(self.id)

    def to_babel_locale(self) -> Locale:
        """Return the Babel Locale for this language.

        Raises:
            babel.core.UnknownLocaleError: If the id is not a CLDR locale
            ValueError: If the id is not a well-formed locale identifier
        """
        return get_babel_locale(self.id)

    def display_name(self, in_language: LanguageId | None = None) -> str:
        """Return the human-readable name of this language.

        Args:
            in_language: Language to render the name in. Defaults to the
                language itself ("Deutsch" for ``LanguageId("de")``).

        Returns:
            Display name, or the raw id when Babel has no name for it

        Raises:
            babel.core.UnknownLocaleError: If the id is not a CLDR locale
        """
        locale = self.to_babel_locale()
        target = in_language.to_babel_locale() if in_language is not None else locale
        return locale.get_display_name(target) or self.id
