"""localkeys - typed hierarchical localization keys over flattened YAML.

Language text is authored as one nested YAML document per language. When a
language is selected the document is flattened into a path -> text table,
and typed keys are resolved against it with per-key caching. Unresolved keys
render as ``$<path>`` so missing translations are visible in running output.

Public API:
    LocalizationKey - Typed dotted path ("UI.menu.start")
    LanguageId - Case-insensitive language id ("en")
    LocalizationClient - Current language + document loading
    ClientConfig - Document source and default language
    ResolutionStore - Active table and resolution cache
    flatten_document - Parse and flatten one YAML document

Exceptions:
    LocalizationError - Base exception class
    DocumentParseError - Malformed or oversized document
    DocumentDepthError - Document nesting too deep
    ConfigurationError - Invalid configuration

Submodules:
    localkeys.syntax - Parse step and tree flattener
    localkeys.runtime - Resolution store
    localkeys.localization - Document sources, config and client
    localkeys.diagnostics - Diagnostic codes and exceptions
"""

from .diagnostics import (
    ConfigurationError,
    DocumentDepthError,
    DocumentParseError,
    LocalizationError,
)
from .keys import LanguageId, LocalizationKey
from .localization import ClientConfig, LocalizationClient
from .runtime import ResolutionStore
from .syntax import flatten_document

# Version information - Auto-populated from package metadata
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("localkeys")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "DocumentDepthError",
    "DocumentParseError",
    "LanguageId",
    "LocalizationClient",
    "LocalizationError",
    "LocalizationKey",
    "ResolutionStore",
    "__version__",
    "flatten_document",
]
