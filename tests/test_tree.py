"""
Unit tests for paths, expansion state and the structural tree renderer.
"""

import math

import pytest

from json_data_viewer.expansion import ExpansionSet
from json_data_viewer.paths import child_path, escape_path_segment, split_path
from json_data_viewer.tree import (
    ArrayNode,
    NullNode,
    ObjectNode,
    PrimitiveNode,
    StructuralTreeRenderer,
    ValueKind,
    classify,
    display_text,
    format_tree,
    tree_rows,
)


def render_tree(value, expansion=None):
    return StructuralTreeRenderer().render(value, "", expansion)


class CountingRenderer(StructuralTreeRenderer):
    """Counts every node visited during rendering."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calls = 0

    def _render_node(self, value, path, expansion, depth):
        self.calls += 1
        return super()._render_node(value, path, expansion, depth)


def nested_lists(depth):
    value = "leaf"
    for _ in range(depth):
        value = [value]
    return value


class TestPaths:

    def test_child_paths_from_root(self):
        assert child_path("", 0) == ".0"
        assert child_path("", "a") == ".a"
        assert child_path(".a", 2) == ".a.2"

    def test_dots_in_keys_are_escaped(self):
        assert escape_path_segment("gpt-3.5") == "gpt-3\\.5"
        assert child_path("", "a.b") != child_path(".a", "b")

    def test_split_path(self):
        assert split_path("data.items") == ["data", "items"]
        assert split_path("responses.gpt-3\\.5") == ["responses", "gpt-3.5"]
        assert split_path(None) == []

    def test_split_path_reverses_escaping(self):
        path = ".".join([escape_path_segment("a\\"), escape_path_segment("b.c")])
        assert split_path(path) == ["a\\", "b.c"]

    def test_split_path_edges(self):
        assert split_path("a\\") == ["a\\"]
        assert split_path(".a..b.") == ["a", "b"]
        assert split_path("") == []
        assert split_path(3) == ["3"]


class TestExpansionSet:

    def test_toggle(self):
        exp = ExpansionSet()
        assert not exp.is_expanded(".a")
        exp.toggle(".a")
        assert exp.is_expanded(".a")
        assert ".a" in exp

    @pytest.mark.parametrize("path", ["", ".0", ".a.b", "weird path"])
    def test_double_toggle_is_identity(self, path):
        exp = ExpansionSet()
        exp.expand(".other")
        before = exp.is_expanded(path)
        exp.toggle(path)
        exp.toggle(path)
        assert exp.is_expanded(path) == before
        assert exp.is_expanded(".other")

    def test_reset_clears_everything(self):
        exp = ExpansionSet()
        for p in ("", ".0", ".0.x"):
            exp.toggle(p)
        exp.reset()
        assert len(exp) == 0
        assert not exp.is_expanded("")

    def test_expand_and_collapse(self):
        exp = ExpansionSet()
        exp.expand(".a")
        exp.expand(".a")
        assert list(exp) == [".a"]
        exp.collapse(".a")
        exp.collapse(".a")
        assert len(exp) == 0


class TestClassify:

    @pytest.mark.parametrize("value,kind", [
        (None, ValueKind.NULL),
        (True, ValueKind.BOOLEAN),
        (0, ValueKind.NUMBER),
        (1.5, ValueKind.NUMBER),
        ("x", ValueKind.STRING),
        ([], ValueKind.ARRAY),
        ((1, 2), ValueKind.ARRAY),
        ({}, ValueKind.OBJECT),
        (math.nan, ValueKind.OTHER),
        (math.inf, ValueKind.OTHER),
        (object(), ValueKind.OTHER),
    ])
    def test_kinds(self, value, kind):
        assert classify(value) is kind


class TestRenderer:

    def test_leaves(self):
        assert render_tree(None) == NullNode()
        assert render_tree("hi") == PrimitiveNode("string", "hi")
        assert render_tree(3) == PrimitiveNode("number", "3")
        assert render_tree(2.5) == PrimitiveNode("number", "2.5")
        assert render_tree(False) == PrimitiveNode("boolean", "false")

    def test_fallback_never_raises(self):
        assert render_tree(math.nan) == PrimitiveNode("other", "nan")
        assert render_tree(len).kind == "other"
        assert render_tree({1, 2}).kind == "other"

    def test_unprintable_value_falls_back(self):
        class Broken:
            def __str__(self):
                raise RuntimeError("boom")

        node = render_tree(Broken())
        assert node.kind == "other"
        assert "Broken" in node.text

    def test_collapsed_array(self):
        node = render_tree([1, 2, 3])
        assert node == ArrayNode(path="", length=3, expanded=False, children=None)

    def test_expanded_array_children(self):
        exp = ExpansionSet()
        exp.toggle("")
        node = render_tree(["a", None], exp)
        assert node.expanded
        assert node.children == (PrimitiveNode("string", "a"), NullNode())

    def test_expanded_object_children(self):
        exp = ExpansionSet()
        exp.toggle("")
        exp.toggle(".inner")
        node = render_tree({"n": 1, "inner": {"deep": [1]}}, exp)
        assert isinstance(node, ObjectNode)
        assert node.keys == ("n", "inner")
        key, inner = node.children[1]
        assert key == "inner"
        assert inner.path == ".inner"
        assert inner.expanded
        deep = dict(inner.children)["deep"]
        assert deep == ArrayNode(path=".inner.deep", length=1, expanded=False)

    def test_lazy_collapsed_tree_visits_only_root(self):
        renderer = CountingRenderer()
        node = renderer.render(nested_lists(200), "", ExpansionSet())
        assert not node.expanded
        assert node.children is None
        assert renderer.calls == 1

    def test_expansion_materialises_one_level(self):
        renderer = CountingRenderer()
        exp = ExpansionSet()
        exp.toggle("")
        node = renderer.render(nested_lists(200), "", exp)
        assert renderer.calls == 2
        assert node.children[0].children is None

    def test_rerender_is_structurally_equal(self):
        value = {"a": [1, {"b": "c"}], "d": None}
        exp = ExpansionSet()
        for p in ("", ".a", ".a.1"):
            exp.toggle(p)
        first = render_tree(value, exp)
        second = render_tree(value, exp)
        assert first == second
        assert first is not second

    def test_toggle_changes_rendering(self):
        value = {"a": [1]}
        exp = ExpansionSet()
        assert render_tree(value, exp).children is None
        exp.toggle("")
        assert render_tree(value, exp).children is not None

    def test_depth_cap(self):
        renderer = StructuralTreeRenderer(max_depth=2)
        exp = ExpansionSet()
        for p in ("", ".0", ".0.0"):
            exp.toggle(p)
        node = renderer.render(nested_lists(5), "", exp)
        level1 = node.children[0]
        level2 = level1.children[0]
        assert level1.expanded
        assert not level2.expanded
        assert level2.children is None

    def test_non_string_keys(self):
        exp = ExpansionSet()
        exp.toggle("")
        node = render_tree({1: "one"}, exp)
        assert node.keys == ("1",)
        assert node.children == (("1", PrimitiveNode("string", "one")),)


class TestTreeText:

    def test_display_text(self):
        assert display_text(NullNode()) == "null"
        assert display_text(PrimitiveNode("string", "a")) == '"a"'
        assert display_text(PrimitiveNode("number", "123")) == "123"
        assert display_text(ArrayNode("", 1, False)) == "[1 item]"
        assert display_text(ObjectNode("", ("a", "b"), False)) == "{2 keys}"

    def test_format_tree(self):
        exp = ExpansionSet()
        exp.toggle("")
        text = format_tree(render_tree({"name": "x", "tags": ["a"]}, exp), label="Row")
        assert text.splitlines() == [
            '▼ Row: {2 keys}',
            '    name: "x"',
            '  ▶ tags: [1 item]',
        ]

    def test_rows_and_paths(self):
        exp = ExpansionSet()
        exp.toggle("")
        node = render_tree([{"a": 1}, 2], exp)
        rows = tree_rows(node)
        assert [r.label for r in rows] == ["root", "[0]", "[1]"]
        assert [r.path for r in rows if r.expandable] == ["", ".0"]
