"""Tests for the tree flattener.

Covers self text, key normalization, dotted legacy keys, sequence indexing,
collision policy, the non-scalar "$" rule and depth limiting.
"""

from __future__ import annotations

import logging

import pytest
import yaml

from localkeys.diagnostics import DiagnosticCode, DocumentDepthError, DocumentParseError
from localkeys.syntax import (
    TreeFlattener,
    flatten_document,
    flatten_object,
    flatten_tree,
    normalize_segment,
)


def table_of(source: str) -> dict[str, str]:
    return dict(flatten_document(source).table)


class TestBasicFlattening:
    """Nested mappings become dotted paths."""

    def test_nested_mapping(self) -> None:
        source = "UI:\n  menu:\n    start: Start Game\n    quit: Quit\n"
        assert table_of(source) == {"UI.menu.start": "Start Game", "UI.menu.quit": "Quit"}

    def test_table_preserves_source_order(self) -> None:
        source = "b: B\na: A\nc:\n  z: Z\n  y: Y\n"
        assert list(table_of(source)) == ["b", "a", "c.z", "c.y"]

    def test_scalars_keep_authored_text(self) -> None:
        """Composed scalars are not converted to bool/int/None."""
        source = "flag: yes\ncount: 010\nnothing: ~\nratio: 1.50\n"
        assert table_of(source) == {
            "flag": "yes",
            "count": "010",
            "nothing": "~",
            "ratio": "1.50",
        }

    def test_null_value_becomes_empty_text(self) -> None:
        assert table_of("empty:\n") == {"empty": ""}

    def test_multiline_block_scalar(self) -> None:
        source = "intro: |\n  Line one\n  Line two\n"
        assert table_of(source) == {"intro": "Line one\nLine two\n"}

    def test_table_is_read_only(self) -> None:
        table = flatten_document("a: A").table
        with pytest.raises(TypeError):
            table["b"] = "B"  # type: ignore[index]


class TestEmptyInput:
    """Empty input yields an empty table, never an error."""

    @pytest.mark.parametrize("source", ["", "   ", "\n\n\t\n", None, "# only a comment\n"])
    def test_empty_or_whitespace(self, source: str | None) -> None:
        result = flatten_document(source)
        assert dict(result.table) == {}
        assert result.diagnostics == ()

    def test_root_scalar_ignored(self) -> None:
        assert table_of("just some text") == {}

    def test_none_root(self) -> None:
        assert dict(flatten_tree(None).table) == {}


class TestSelfText:
    """The reserved "$" key binds text to the node's own path."""

    def test_self_text_merge(self) -> None:
        source = '{"menu": {"$": "Menu Root", "start": "Start Game"}}'
        assert table_of(source) == {"menu": "Menu Root", "menu.start": "Start Game"}

    def test_self_text_written_before_children(self) -> None:
        """Self text comes first even if authored after the children."""
        source = "menu:\n  start: Start Game\n  $: Menu Root\n"
        assert list(table_of(source)) == ["menu", "menu.start"]

    def test_self_text_at_root_is_dropped(self) -> None:
        """The root has an empty path, so its self text has nowhere to go."""
        assert table_of("$: Root\nchild: Child\n") == {"child": "Child"}

    def test_self_text_inside_sequence_item(self) -> None:
        source = "steps:\n  - $: First\n    detail: More\n"
        assert table_of(source) == {"steps.0": "First", "steps.0.detail": "More"}

    def test_non_scalar_self_text_walked_as_child(self) -> None:
        """A mapping or sequence under "$" is walked under a literal "$" segment."""
        source = "menu:\n  $:\n    a: A\n  items: [x]\n"
        assert table_of(source) == {"menu.$.a": "A", "menu.items.0": "x"}

    def test_non_scalar_self_text_sequence(self) -> None:
        assert table_of("menu:\n  $: [x, y]\n") == {"menu.$.0": "x", "menu.$.1": "y"}

    def test_padded_dollar_key_is_ordinary_child(self) -> None:
        """Only the exact key "$" is reserved."""
        assert table_of("menu:\n  ' $ ': X\n") == {"menu.$": "X"}

    def test_child_overwrites_self_text_on_collision(self) -> None:
        """A whitespace key contributes no segment and lands on the parent path."""
        source = "menu:\n  $: Self\n  ' ': Child\n"
        result = flatten_document(source)
        assert dict(result.table) == {"menu": "Child"}
        assert [d.code for d in result.diagnostics] == [DiagnosticCode.DUPLICATE_PATH]


class TestKeyNormalization:
    """Keys are trimmed and internal spaces become underscores."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("start", "start"),
            ("  start  ", "start"),
            ("start menu", "start_menu"),
            (" intro line ", "intro_line"),
            ("a  b", "a__b"),
            ("   ", ""),
            ("", ""),
        ],
    )
    def test_normalize_segment(self, raw: str, expected: str) -> None:
        assert normalize_segment(raw) == expected

    def test_spaces_in_document_keys(self) -> None:
        source = "dialog:\n  intro line: Welcome\n  ' padded ': Padded\n"
        assert table_of(source) == {"dialog.intro_line": "Welcome", "dialog.padded": "Padded"}

    def test_whitespace_key_contributes_no_segment(self) -> None:
        source = "menu:\n  '  ':\n    start: Start\n"
        assert table_of(source) == {"menu.start": "Start"}

    def test_whitespace_key_at_root_with_scalar_is_dropped(self) -> None:
        assert table_of("' ': lost\nkept: Kept\n") == {"kept": "Kept"}

    def test_paths_are_case_sensitive(self) -> None:
        assert table_of("Menu: A\nmenu: B\n") == {"Menu": "A", "menu": "B"}


class TestDottedKeys:
    """Legacy dotted keys are split into segments, with a warning."""

    def test_dotted_key_flattens_like_nested(self) -> None:
        assert table_of('{"a.b": "X"}') == {"a.b": "X"}
        assert table_of('{"a.b": "X"}') == table_of('{"a": {"b": "X"}}')

    def test_dotted_key_parts_normalized(self) -> None:
        assert table_of("' start menu . main ': X") == {"start_menu.main": "X"}

    def test_empty_dotted_parts_dropped(self) -> None:
        assert table_of("'a..b.': X") == {"a.b": "X"}

    def test_whitespace_dotted_part_dropped(self) -> None:
        """Pushed and popped segment counts stay symmetric."""
        source = "root:\n  'a. .b':\n    c: C\n  d: D\n"
        assert table_of(source) == {"root.a.b.c": "C", "root.d": "D"}

    def test_dotted_key_with_nested_value(self) -> None:
        source = "'UI.menu':\n  start: Start\nother: O\n"
        assert table_of(source) == {"UI.menu.start": "Start", "other": "O"}

    def test_dotted_key_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="localkeys.syntax.flattener"):
            result = flatten_document("UI:\n  a.b: X\n", source_path="lang_en.yaml")

        assert "Prefer nested YAML" in caplog.text
        [diagnostic] = result.diagnostics
        assert diagnostic.code == DiagnosticCode.DOTTED_KEY
        assert diagnostic.severity == "warning"
        assert diagnostic.path == "UI"
        assert diagnostic.source_path == "lang_en.yaml"
        assert diagnostic.mark is not None
        assert diagnostic.mark.line == 2
        assert diagnostic.mark.column == 3

    def test_single_trailing_dot_is_not_a_warning(self) -> None:
        """'a.' splits into one non-empty part, so nothing is really dotted."""
        result = flatten_document("'a.': X")
        assert dict(result.table) == {"a": "X"}
        assert result.diagnostics == ()


class TestSequences:
    """Sequence items are addressed by zero-based index."""

    def test_sequence_indexing(self) -> None:
        assert table_of('{"list": ["x", "y"]}') == {"list.0": "x", "list.1": "y"}

    def test_nested_sequences(self) -> None:
        assert table_of("grid: [[a, b], [c]]") == {
            "grid.0.0": "a",
            "grid.0.1": "b",
            "grid.1.0": "c",
        }

    def test_sequence_of_mappings(self) -> None:
        source = "credits:\n  - name: Alice\n    role: Art\n  - name: Bob\n"
        assert table_of(source) == {
            "credits.0.name": "Alice",
            "credits.0.role": "Art",
            "credits.1.name": "Bob",
        }

    def test_root_sequence(self) -> None:
        assert table_of("- a\n- b\n") == {"0": "a", "1": "b"}

    def test_siblings_after_sequence_unaffected(self) -> None:
        source = "a: [x, [y, z]]\nb: B\n"
        assert table_of(source) == {"a.0": "x", "a.1.0": "y", "a.1.1": "z", "b": "B"}


class TestCollisions:
    """Collisions resolve last-write-wins with a warning."""

    def test_dotted_and_nested_collision(self) -> None:
        source = "a:\n  b: First\na.b: Second\n"
        result = flatten_document(source)
        assert dict(result.table) == {"a.b": "Second"}
        assert DiagnosticCode.DUPLICATE_PATH in [d.code for d in result.diagnostics]

    def test_duplicate_mapping_keys(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            result = flatten_document("greeting: Hello\ngreeting: Hi\n")
        assert dict(result.table) == {"greeting": "Hi"}
        assert "Duplicate localization path 'greeting'" in caplog.text
        [diagnostic] = result.diagnostics
        assert diagnostic.path == "greeting"
        assert diagnostic.mark is not None
        assert diagnostic.mark.line == 2

    def test_normalization_collision(self) -> None:
        result = flatten_document("start menu: A\nstart_menu: B\n")
        assert dict(result.table) == {"start_menu": "B"}
        assert result.has_warnings


class TestNonScalarKeys:
    """Complex mapping keys are skipped with a warning."""

    def test_sequence_key_skipped(self) -> None:
        source = "? [a, b]\n: ignored\nkept: K\n"
        result = flatten_document(source)
        assert dict(result.table) == {"kept": "K"}
        assert [d.code for d in result.diagnostics] == [DiagnosticCode.NON_SCALAR_KEY]


class TestDepthLimit:
    """Depth guard bounds the recursion."""

    def test_deep_nesting_within_limit(self) -> None:
        data: object = "leaf"
        for _ in range(20):
            data = {"n": data}
        assert dict(flatten_object(data).table) == {".".join(["n"] * 20): "leaf"}

    def test_nesting_beyond_limit_raises(self) -> None:
        data: object = "leaf"
        for _ in range(6):
            data = {"n": data}
        with pytest.raises(DocumentDepthError):
            flatten_object(data, max_depth=5)

    def test_recursive_alias_raises(self) -> None:
        with pytest.raises(DocumentDepthError, match="maximum depth"):
            flatten_document("loop: &a [x, *a]\n")

    def test_depth_error_is_parse_error(self) -> None:
        assert issubclass(DocumentDepthError, DocumentParseError)

    def test_shared_alias_flattened_at_each_use(self) -> None:
        source = "base: &b {ok: OK}\ncopy: *b\n"
        assert table_of(source) == {"base.ok": "OK", "copy.ok": "OK"}


def alias_chain(levels: int, fanout: int = 10) -> str:
    """Build a document whose level N list repeats level N-1 ``fanout`` times."""
    lines = ["l0: &l0 [" + ", ".join(["x"] * fanout) + "]"]
    for level in range(1, levels):
        refs = ", ".join([f"*l{level - 1}"] * fanout)
        lines.append(f"l{level}: &l{level} [{refs}]")
    return "\n".join(lines) + "\n"


class TestExpansionLimit:
    """Alias reuse is bounded by a node-visit budget."""

    def test_chain_within_budget(self) -> None:
        table = table_of(alias_chain(3))
        assert len(table) == 10 + 100 + 1000
        assert table["l2.9.9.9"] == "x"

    def test_chain_beyond_budget_raises(self) -> None:
        with pytest.raises(DocumentParseError) as exc_info:
            flatten_document(alias_chain(3), source_path="lang_en.yaml", max_nodes=1000)
        error = exc_info.value
        assert not isinstance(error, DocumentDepthError)
        assert error.source_path == "lang_en.yaml"
        assert error.diagnostic is not None
        assert error.diagnostic.code == DiagnosticCode.EXPANSION_LIMIT_EXCEEDED

    def test_budget_counts_every_visit(self) -> None:
        # 3 root entries plus 3 list items
        flatten_document("a: [x, y, z]\nb: B\nc: C\n", max_nodes=6)
        with pytest.raises(DocumentParseError):
            flatten_document("a: [x, y, z]\nb: B\nc: C\n", max_nodes=5)

    def test_empty_lists_still_counted(self) -> None:
        source = "l0: &l0 []\nl1: &l1 [*l0, *l0, *l0]\nl2: [*l1, *l1, *l1]\n"
        assert table_of(source) == {}
        with pytest.raises(DocumentParseError):
            flatten_document(source, max_nodes=10)

    def test_budget_resets_between_flattens(self) -> None:
        flattener = TreeFlattener(max_nodes=4)
        root = yaml.compose("a: [x, y]\n")
        for _ in range(3):
            assert len(flattener.flatten(root).table) == 2


class TestMalformedInput:
    """Malformed YAML surfaces as DocumentParseError."""

    def test_malformed_yaml(self) -> None:
        with pytest.raises(DocumentParseError) as exc_info:
            flatten_document("a: [unclosed\n", source_path="lang_en.yaml")
        error = exc_info.value
        assert error.source_path == "lang_en.yaml"
        assert error.diagnostic is not None
        assert error.diagnostic.code == DiagnosticCode.DOCUMENT_MALFORMED
        assert isinstance(error.__cause__, yaml.YAMLError)

    def test_malformed_later_document_fails(self) -> None:
        with pytest.raises(DocumentParseError):
            flatten_document("a: A\n---\nb: [\n")

    def test_first_document_used(self) -> None:
        assert table_of("a: A\n---\nb: B\n") == {"a": "A"}


class TestTreeFlattenerReuse:
    """A TreeFlattener starts fresh on every call."""

    def test_results_independent(self) -> None:
        flattener = TreeFlattener()
        first = flattener.flatten(yaml.compose("a: A"))
        second = flattener.flatten(yaml.compose("b: B"))
        assert dict(first.table) == {"a": "A"}
        assert dict(second.table) == {"b": "B"}

    def test_diagnostics_not_carried_over(self) -> None:
        flattener = TreeFlattener()
        assert flattener.flatten(yaml.compose("a.b: X")).has_warnings
        assert not flattener.flatten(yaml.compose("a: X")).has_warnings

    def test_len(self) -> None:
        assert len(flatten_document("a: A\nb: [x, y]\n")) == 3


class TestFlattenObject:
    """Already-loaded Python trees flatten like their YAML equivalent."""

    def test_nested_dict(self) -> None:
        data = {"menu": {"$": "Menu Root", "start": "Start Game"}}
        assert dict(flatten_object(data).table) == {
            "menu": "Menu Root",
            "menu.start": "Start Game",
        }

    def test_non_string_scalars_become_yaml_text(self) -> None:
        assert dict(flatten_object({"on": True, "n": 3, "none": None}).table) == {
            "on": "true",
            "n": "3",
            "none": "null",
        }

    def test_unrepresentable_object(self) -> None:
        with pytest.raises(DocumentParseError, match="Cannot represent"):
            flatten_object({"a": object()})
