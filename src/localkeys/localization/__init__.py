"""Language selection package for LocalizationClient.

Provides the full client stack: document sources, client configuration,
load records and the client binding itself.

Submodules:
    loading - DocumentSource protocol, MappingDocumentSource,
              DirectoryDocumentSource, FallbackInfo, LoadResult
    config  - ClientConfig
    client  - LocalizationClient

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from localkeys.enums import LoadStatus
from localkeys.localization.client import LocalizationClient
from localkeys.localization.config import ClientConfig
from localkeys.localization.loading import (
    DirectoryDocumentSource,
    DocumentSource,
    FallbackInfo,
    LoadResult,
    MappingDocumentSource,
)

__all__ = [
    # Client
    "LocalizationClient",
    "ClientConfig",
    # Document sources
    "DocumentSource",
    "MappingDocumentSource",
    "DirectoryDocumentSource",
    # Load tracking
    "LoadStatus",
    "LoadResult",
    "FallbackInfo",
]
