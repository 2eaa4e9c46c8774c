"""Shared constants for localkeys.

Centralizes the reserved tokens of the document format, the fallback
placeholder prefix, and the limits applied while parsing and flattening.
Placing them here avoids circular imports between the syntax, runtime and
localization packages.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Document format
    "SELF_TEXT_KEY",
    "PATH_SEPARATOR",
    "SEGMENT_SPACE_REPLACEMENT",
    # Fallback strings
    "REFERENCE_PREFIX",
    # Language selection
    "DEFAULT_LANGUAGE_ID",
    "LANGUAGE_FILE_PREFIX",
    "LANGUAGE_FILE_SUFFIXES",
    # Limits
    "MAX_DEPTH",
    "MAX_SOURCE_SIZE",
    "MAX_EXPANSION_NODES",
]

# ============================================================================
# DOCUMENT FORMAT
# ============================================================================

# Reserved mapping key binding text to the mapping's own path:
#   menu:
#     $: Menu Root      -> "menu"
#     start: Start Game -> "menu.start"
SELF_TEXT_KEY: str = "$"

# Separator between path segments ("UI.menu.start").
PATH_SEPARATOR: str = "."

# Internal spaces in document keys become underscores ("start menu" -> "start_menu").
SEGMENT_SPACE_REPLACEMENT: str = "_"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Prefix of the reference form returned for unresolved keys ("$UI.menu.start").
REFERENCE_PREFIX: str = "$"

# ============================================================================
# LANGUAGE SELECTION
# ============================================================================

# Language loaded when the requested language has no document.
DEFAULT_LANGUAGE_ID: str = "en"

# Language documents are discovered as lang_<id>.yaml / lang_<id>.yml.
LANGUAGE_FILE_PREFIX: str = "lang_"
LANGUAGE_FILE_SUFFIXES: tuple[str, ...] = (".yaml", ".yml")

# ============================================================================
# LIMITS
# ============================================================================

# Maximum tree nesting followed by the flattener.
# Real language documents rarely exceed 10 levels; anything past 100 is
# either malformed or a self-referencing YAML alias.
MAX_DEPTH: int = 100

# Maximum document size in characters (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# Maximum number of child nodes the flattener visits in one document.
# YAML aliases reuse subtrees, so a small document can name an exponential
# number of entries (&a1 [*a0, *a0, ...], &a2 [*a1, *a1, ...], ...).
MAX_EXPANSION_NODES: int = 1_000_000
