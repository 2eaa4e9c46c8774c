"""Runtime resolution of localization keys.

Exports:
    ResolutionStore: Active flat table plus per-key resolution cache

Python 3.13+.
"""

from .store import ResolutionStore

__all__ = ["ResolutionStore"]
