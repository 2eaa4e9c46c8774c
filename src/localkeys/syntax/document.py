"""Parse step for language documents.

Turns raw YAML text into a tree of PyYAML representation nodes. Composing
(rather than loading) keeps every scalar as the exact authored text, so
``yes``, ``1.0`` and ``~`` stay strings instead of becoming bool, float and
None. It also preserves duplicate mapping keys and source marks, both of
which the flattener reports on.

Python 3.13+.
"""

from __future__ import annotations

import logging

import yaml

from localkeys.constants import MAX_SOURCE_SIZE
from localkeys.diagnostics import Diagnostic, DiagnosticCode, DocumentMark, DocumentParseError
from localkeys.enums import NodeKind

__all__ = [
    "mark_of",
    "node_kind",
    "parse_document",
    "represent_object",
]

logger = logging.getLogger(__name__)


def node_kind(node: yaml.Node | None) -> NodeKind | None:
    """Classify a composed node.

    Args:
        node: PyYAML node (or None for an empty document)

    Returns:
        NodeKind for mapping, sequence and scalar nodes, None otherwise
    """
    match node:
        case yaml.MappingNode():
            return NodeKind.MAPPING
        case yaml.SequenceNode():
            return NodeKind.SEQUENCE
        case yaml.ScalarNode():
            return NodeKind.SCALAR
        case _:
            return None


def mark_of(node: yaml.Node) -> DocumentMark | None:
    """Return the 1-indexed start position of a node, if PyYAML recorded one."""
    start = getattr(node, "start_mark", None)
    if start is None:
        return None
    return DocumentMark(line=start.line + 1, column=start.column + 1)


def parse_document(
    source: str | None,
    *,
    source_path: str | None = None,
    max_source_size: int = MAX_SOURCE_SIZE,
) -> yaml.Node | None:
    """Parse YAML text into a node tree.

    Only the first document of a multi-document stream is returned, but the
    whole stream is composed so that a malformed later document still fails.

    Args:
        source: Raw document text. None, empty and whitespace-only text all
            yield None (an empty tree, not an error).
        source_path: Human-readable document location for error messages
        max_source_size: Maximum accepted source length in characters

    Returns:
        Root node of the first document, or None if there is none

    Raises:
        DocumentParseError: If the text is not valid YAML or is too large
    """
    if source is None or not source.strip():
        return None

    if len(source) > max_source_size:
        raise DocumentParseError(
            Diagnostic(
                code=DiagnosticCode.DOCUMENT_TOO_LARGE,
                message=(
                    f"Document is {len(source)} characters, "
                    f"exceeding the limit of {max_source_size}"
                ),
                source_path=source_path,
            ),
            source_path=source_path,
        )

    try:
        documents = list(yaml.compose_all(source, Loader=yaml.SafeLoader))
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        diagnostic = Diagnostic(
            code=DiagnosticCode.DOCUMENT_MALFORMED,
            message=f"Malformed YAML document: {getattr(e, 'problem', None) or e}",
            mark=DocumentMark(line=mark.line + 1, column=mark.column + 1) if mark else None,
            source_path=source_path,
        )
        raise DocumentParseError(diagnostic, source_path=source_path) from e

    if not documents:
        return None
    if len(documents) > 1:
        logger.debug(
            "Document %s contains %d YAML documents; using the first",
            source_path or "<string>",
            len(documents),
        )
    return documents[0]


def represent_object(data: object) -> yaml.Node:
    """Represent an already-loaded Python tree as YAML nodes.

    dicts become mappings (insertion order kept), lists become
    sequences, and every other value becomes a scalar holding its YAML text.

    Args:
        data: Tree of dicts, lists and scalar values

    Returns:
        Root node equivalent to composing the dumped document

    Raises:
        DocumentParseError: If the tree contains values YAML cannot represent
    """
    try:
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
        return yaml.compose(text, Loader=yaml.SafeLoader)
    except yaml.YAMLError as e:
        msg = f"Cannot represent {type(data).__name__} as a document tree: {e}"
        raise DocumentParseError(msg) from e
