"""Tree flattener: nested language document -> flat path table.

Transforms a composed document tree into a single mapping of dotted path to
text:

    UI:                        UI.menu        -> "Menu Root"
      menu:                    UI.menu.start  -> "Start Game"
        $: Menu Root           UI.credits.0   -> "Alice"
        start: Start Game      UI.credits.1   -> "Bob"
      credits: [Alice, Bob]

Walk rules:
    - Mappings bind a scalar under the reserved ``$`` key to their OWN path
      (self text) before visiting their other children, so a child that
      resolves to the same path overwrites the self text.
    - Keys are trimmed and internal spaces become underscores.
    - Dotted keys (``a.b: X``) are split into segments with a warning;
      nested authoring is preferred.
    - Sequence items are addressed by zero-based index segments.
    - A root scalar is ignored: there is no path to bind it to.
    - Collisions resolve last-write-wins with a DUPLICATE_PATH warning.

Every segment pushed for a key is popped after that key is visited, so the
segment stack is restored no matter how deep the recursion went.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

import yaml

from localkeys.constants import (
    MAX_DEPTH,
    MAX_EXPANSION_NODES,
    PATH_SEPARATOR,
    SEGMENT_SPACE_REPLACEMENT,
    SELF_TEXT_KEY,
)
from localkeys.core.depth_guard import DepthGuard
from localkeys.diagnostics import Diagnostic, DiagnosticCode, DocumentParseError
from localkeys.enums import NodeKind
from localkeys.syntax.document import mark_of, node_kind, parse_document, represent_object

if TYPE_CHECKING:
    from localkeys.types import FlatTable, LocalizationPath

__all__ = [
    "FlattenResult",
    "TreeFlattener",
    "flatten_document",
    "flatten_object",
    "flatten_tree",
    "normalize_segment",
]

logger = logging.getLogger(__name__)


def normalize_segment(segment: str) -> str:
    """Normalize one path segment.

    Args:
        segment: Raw key text (a single dot-free part)

    Returns:
        Trimmed segment with internal spaces replaced by underscores, or ""
        for whitespace-only input

    Example:
        >>> normalize_segment("  start menu ")
        'start_menu'
    """
    return segment.strip().replace(" ", SEGMENT_SPACE_REPLACEMENT)


@dataclass(frozen=True, slots=True)
class FlattenResult:
    """Flattened table plus the warnings raised while building it.

    Attributes:
        table: Read-only path -> text mapping in first-write order
        diagnostics: Warnings (dotted keys, duplicate paths, skipped keys)
    """

    table: FlatTable
    diagnostics: tuple[Diagnostic, ...] = ()

    def __len__(self) -> int:
        return len(self.table)

    @property
    def has_warnings(self) -> bool:
        """Check if flattening produced any diagnostics."""
        return len(self.diagnostics) > 0


class TreeFlattener:
    """Depth-first, path-building walk over a composed document tree.

    One instance can flatten many trees; each flatten() call starts from a
    clean segment stack, table and depth guard. Not thread-safe: use one
    instance per thread (flatten_tree() creates a fresh one per call).

    Example:
        >>> root = yaml.compose("menu: {$: Menu Root, start: Start Game}")
        >>> dict(TreeFlattener().flatten(root).table)
        {'menu': 'Menu Root', 'menu.start': 'Start Game'}
    """

    __slots__ = (
        "_diagnostics",
        "_guard",
        "_max_depth",
        "_max_nodes",
        "_segments",
        "_source_path",
        "_table",
        "_visited",
    )

    def __init__(
        self,
        *,
        max_depth: int = MAX_DEPTH,
        max_nodes: int = MAX_EXPANSION_NODES,
        source_path: str | None = None,
    ) -> None:
        """Initialize flattener.

        Args:
            max_depth: Maximum mapping/sequence nesting to follow
            max_nodes: Maximum child nodes visited per flatten() call,
                counting every alias expansion
            source_path: Document location attached to diagnostics
        """
        self._max_depth = max_depth
        self._max_nodes = max_nodes
        self._source_path = source_path
        self._visited = 0
        self._segments: list[str] = []
        self._table: dict[LocalizationPath, str] = {}
        self._diagnostics: list[Diagnostic] = []
        self._guard = DepthGuard(max_depth=max_depth)

    def flatten(self, root: yaml.Node | None) -> FlattenResult:
        """Flatten a document tree.

        Args:
            root: Root node, or None for an empty document

        Returns:
            FlattenResult with a fresh read-only table

        Raises:
            DocumentDepthError: If nesting exceeds max_depth
            DocumentParseError: If aliases expand past max_nodes
        """
        self._segments = []
        self._table = {}
        self._diagnostics = []
        self._visited = 0
        self._guard = DepthGuard(max_depth=self._max_depth)

        if root is not None:
            self._walk(root)

        return FlattenResult(
            table=MappingProxyType(self._table),
            diagnostics=tuple(self._diagnostics),
        )

    def _walk(self, node: yaml.Node) -> None:
        match node_kind(node):
            case NodeKind.MAPPING:
                with self._guard:
                    self._walk_mapping(node)
            case NodeKind.SEQUENCE:
                with self._guard:
                    self._walk_sequence(node)
            case _:
                # Root scalar: nothing to bind it to. Leaf scalars are
                # written by their parent and never visited here.
                pass

    def _walk_mapping(self, node: yaml.MappingNode) -> None:
        for key_node, value_node in node.value:
            if self._is_self_text(key_node, value_node):
                self._write(self._current_path(), value_node)

        for key_node, value_node in node.value:
            self._track_visit()
            if not isinstance(key_node, yaml.ScalarNode):
                self._warn_non_scalar_key(key_node)
                continue
            if self._is_self_text(key_node, value_node):
                continue

            # A non-scalar value under "$" falls through and is walked as an
            # ordinary child under the literal segment "$".
            pushed = self._expand_key(key_node)
            self._segments.extend(pushed)
            try:
                if isinstance(value_node, yaml.ScalarNode):
                    self._write(self._current_path(), value_node)
                else:
                    self._walk(value_node)
            finally:
                if pushed:
                    del self._segments[-len(pushed) :]

    def _walk_sequence(self, node: yaml.SequenceNode) -> None:
        for index, item in enumerate(node.value):
            self._track_visit()
            self._segments.append(str(index))
            try:
                if isinstance(item, yaml.ScalarNode):
                    self._write(self._current_path(), item)
                else:
                    self._walk(item)
            finally:
                self._segments.pop()

    def _track_visit(self) -> None:
        self._visited += 1
        if self._visited <= self._max_nodes:
            return
        raise DocumentParseError(
            Diagnostic(
                code=DiagnosticCode.EXPANSION_LIMIT_EXCEEDED,
                message=f"Document expands to more than {self._max_nodes} nodes",
                source_path=self._source_path,
                hint="Reduce nested YAML alias reuse",
            ),
            source_path=self._source_path,
        )

    @staticmethod
    def _is_self_text(key_node: yaml.Node, value_node: yaml.Node) -> bool:
        return (
            isinstance(key_node, yaml.ScalarNode)
            and key_node.value == SELF_TEXT_KEY
            and isinstance(value_node, yaml.ScalarNode)
        )

    def _expand_key(self, key_node: yaml.ScalarNode) -> tuple[str, ...]:
        """Turn a raw mapping key into the segments it contributes.

        Whitespace-only keys and empty dotted parts contribute nothing.
        """
        raw_key: str = key_node.value
        stripped = raw_key.strip()
        if not stripped:
            return ()

        if PATH_SEPARATOR not in stripped:
            segment = normalize_segment(stripped)
            return (segment,) if segment else ()

        parts = [part for part in stripped.split(PATH_SEPARATOR) if part]
        if len(parts) > 1:
            logger.warning(
                "Key '%s' contains '%s'. Prefer nested YAML instead of dotted keys.",
                stripped,
                PATH_SEPARATOR,
            )
            self._diagnostics.append(
                Diagnostic(
                    code=DiagnosticCode.DOTTED_KEY,
                    message=f"Key '{stripped}' contains '{PATH_SEPARATOR}'",
                    path=self._current_path() or None,
                    mark=mark_of(key_node),
                    source_path=self._source_path,
                    hint="Prefer nested YAML instead of dotted keys",
                    severity="warning",
                )
            )
        return tuple(segment for part in parts if (segment := normalize_segment(part)))

    def _current_path(self) -> LocalizationPath:
        return PATH_SEPARATOR.join(self._segments)

    def _write(self, path: LocalizationPath, value_node: yaml.ScalarNode) -> None:
        if not path:
            return

        if path in self._table:
            logger.warning("Duplicate localization path '%s'; later value wins", path)
            self._diagnostics.append(
                Diagnostic(
                    code=DiagnosticCode.DUPLICATE_PATH,
                    message=f"Path '{path}' is produced more than once; later value wins",
                    path=path,
                    mark=mark_of(value_node),
                    source_path=self._source_path,
                    severity="warning",
                )
            )
        self._table[path] = value_node.value or ""

    def _warn_non_scalar_key(self, key_node: yaml.Node) -> None:
        logger.warning(
            "Skipping non-scalar mapping key under '%s'", self._current_path() or "<root>"
        )
        self._diagnostics.append(
            Diagnostic(
                code=DiagnosticCode.NON_SCALAR_KEY,
                message="Mapping key is not a scalar; entry skipped",
                path=self._current_path() or None,
                mark=mark_of(key_node),
                source_path=self._source_path,
                severity="warning",
            )
        )


def flatten_tree(
    root: yaml.Node | None,
    *,
    source_path: str | None = None,
    max_depth: int = MAX_DEPTH,
    max_nodes: int = MAX_EXPANSION_NODES,
) -> FlattenResult:
    """Flatten an already-composed document tree.

    Args:
        root: Root node, or None for an empty document
        source_path: Document location attached to diagnostics
        max_depth: Maximum nesting to follow
        max_nodes: Maximum child nodes visited, counting alias expansions

    Returns:
        FlattenResult

    Raises:
        DocumentDepthError: If nesting exceeds max_depth
        DocumentParseError: If aliases expand past max_nodes
    """
    flattener = TreeFlattener(max_depth=max_depth, max_nodes=max_nodes, source_path=source_path)
    return flattener.flatten(root)


def flatten_document(
    source: str | None,
    *,
    source_path: str | None = None,
    max_depth: int = MAX_DEPTH,
    max_nodes: int = MAX_EXPANSION_NODES,
) -> FlattenResult:
    """Parse YAML text and flatten it.

    Args:
        source: Raw document text (None/empty/whitespace -> empty table)
        source_path: Document location for errors and diagnostics
        max_depth: Maximum nesting to follow
        max_nodes: Maximum child nodes visited, counting alias expansions

    Returns:
        FlattenResult

    Raises:
        DocumentParseError: If the text is malformed, too large, or expands
            past max_nodes
        DocumentDepthError: If nesting exceeds max_depth

    Example:
        >>> dict(flatten_document("list: [x, y]").table)
        {'list.0': 'x', 'list.1': 'y'}
    """
    root = parse_document(source, source_path=source_path)
    return flatten_tree(root, source_path=source_path, max_depth=max_depth, max_nodes=max_nodes)


def flatten_object(data: object, *, max_depth: int = MAX_DEPTH) -> FlattenResult:
    """Flatten an already-loaded Python tree (dicts, lists, scalars).

    Scalars are flattened to their YAML text, so ``True`` becomes ``"true"``
    and ``3`` becomes ``"3"``.

    Example:
        >>> dict(flatten_object({"a.b": "X"}).table)
        {'a.b': 'X'}
    """
    return flatten_tree(represent_object(data), max_depth=max_depth)
