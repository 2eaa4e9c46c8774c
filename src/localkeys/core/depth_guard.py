"""Depth limiting for recursive tree walks.

Prevents stack overflow while flattening:
- Absurdly deep hand-authored documents
- YAML aliases that refer back to one of their own ancestors
  (``a: &x [*x]`` composes into a cyclic node graph)

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from localkeys.constants import MAX_DEPTH
from localkeys.diagnostics import Diagnostic, DiagnosticCode, DocumentDepthError

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)

# The flattener spends two frames per nesting level (_walk + _walk_mapping
# or _walk_sequence).
FRAMES_PER_LEVEL = 2


@dataclass(slots=True)
class DepthGuard:
    """Nesting counter for the flattener's recursive walk.

    Usage:
        guard = DepthGuard()
        with guard:
            self._walk(child)

    Mutable on purpose: entering the guard adds one level, leaving it
    removes one. Each flatten call owns its own guard.

    Attributes:
        max_depth: Deepest mapping/sequence nesting that may be entered
        current_depth: Levels entered so far
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Validate max_depth and fit it under the interpreter recursion limit."""
        if self.max_depth <= 0:
            msg = f"max_depth must be positive, got {self.max_depth}"
            raise ValueError(msg)
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # __exit__ does not run when __enter__ raises, so check first.
        self.check()
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Levels currently entered."""
        return self.current_depth

    def check(self) -> None:
        """Refuse to go one level deeper once max_depth levels are entered.

        Raises:
            DocumentDepthError: If max_depth levels are already entered
        """
        if self.current_depth < self.max_depth:
            return
        raise DocumentDepthError(
            Diagnostic(
                code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
                message=f"Document nesting exceeds maximum depth of {self.max_depth}",
                hint="Flatten the document or remove self-referencing YAML aliases",
            )
        )


def depth_clamp(
    requested_depth: int,
    *,
    frames_per_level: int = FRAMES_PER_LEVEL,
    reserve: int = 50,
) -> int:
    """Lower a nesting limit until walking that deep cannot hit RecursionError.

    Args:
        requested_depth: Desired nesting limit
        frames_per_level: Stack frames one nesting level costs
        reserve: Frames kept free for callers (test runners, frameworks)

    Returns:
        requested_depth, or the deepest safe nesting if that is lower

    Example:
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(100)
        100
        >>> depth_clamp(1000)
        475
    """
    limit = sys.getrecursionlimit()
    safe = max(1, (limit - reserve) // frames_per_level)
    if requested_depth <= safe:
        return requested_depth
    logger.warning(
        "Nesting limit %d does not fit recursion limit %d; using %d",
        requested_depth,
        limit,
        safe,
    )
    return safe
