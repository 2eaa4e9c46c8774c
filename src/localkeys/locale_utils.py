"""Language id utilities backed by Babel.

Language ids select documents by exact, case-insensitive comparison. Babel
lookups are more forgiving and accept BCP-47 (``pt-BR``) as well as POSIX
(``pt_BR``) spellings.

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_system_language",
    "normalize_language_id",
]


def normalize_language_id(language_id: str) -> str:
    """Return the comparison form of a language id.

    Language ids compare case-insensitively and otherwise exactly: ``"EN"``
    matches ``"en"``, but ``"pt-BR"`` does not match ``"pt_BR"`` and
    surrounding whitespace is significant.

    Args:
        language_id: Language id as authored (e.g., "en", "pt-BR")

    Returns:
        Casefolded id

    Example:
        >>> normalize_language_id("EN")
        'en'
        >>> normalize_language_id("pt-BR")
        'pt-br'
    """
    return language_id.casefold()


@functools.lru_cache(maxsize=128)
def get_babel_locale(language_id: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        language_id: Language id (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If the language is not in CLDR
        ValueError: If the id is not a well-formed locale identifier

    Example:
        >>> get_babel_locale("pt-BR").territory
        'BR'
    """
    # Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(language_id.strip().replace("-", "_"))


def get_system_language(*, default: str = "en") -> str:
    """Detect the language of the running environment.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    The "C" and "POSIX" pseudo-locales are skipped and encoding suffixes
    (".UTF-8") are stripped. Only the language part is returned because
    language documents are keyed by language, not by region.

    Args:
        default: Language id returned when nothing usable is found

    Returns:
        Language id (e.g., "de" for "de_DE.UTF-8")
    """
    import locale as locale_module  # noqa: PLC0415

    candidates: list[str] = []
    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale:
            candidates.append(system_locale)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value:
            candidates.append(value)

    for candidate in candidates:
        code = candidate.split(".")[0].split("@")[0]
        if not code or code in ("C", "POSIX"):
            continue
        return code.replace("-", "_").split("_")[0].lower()

    return default
