"""
Structural tree rendering for nested JSON-like values.

A value is classified once into a `ValueKind` and turned into a tagged
`TreeNode`. Container nodes only materialise their children when their path
is present in the `ExpansionSet`, so a collapsed subtree costs nothing no
matter how deep it is. Re-rendering after a toggle is done by calling
`render` again on the unchanged root value.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple, Union

from .config import MAX_RENDER_DEPTH
from .expansion import ExpansionSet
from .paths import child_path

logger = logging.getLogger(__name__)


class ValueKind(Enum):
    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    OTHER = "other"


def classify(value: Any) -> ValueKind:
    if value is None:
        return ValueKind.NULL
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, int):
        return ValueKind.NUMBER
    if isinstance(value, float):
        return ValueKind.NUMBER if math.isfinite(value) else ValueKind.OTHER
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    return ValueKind.OTHER


@dataclass(frozen=True)
class NullNode:
    pass


@dataclass(frozen=True)
class PrimitiveNode:
    """Leaf value. `kind` is 'string', 'number', 'boolean' or 'other'."""
    kind: str
    text: str


@dataclass(frozen=True)
class ArrayNode:
    path: str
    length: int
    expanded: bool
    children: Optional[Tuple["TreeNode", ...]] = None


@dataclass(frozen=True)
class ObjectNode:
    path: str
    keys: Tuple[str, ...]
    expanded: bool
    children: Optional[Tuple[Tuple[str, "TreeNode"], ...]] = None


TreeNode = Union[NullNode, PrimitiveNode, ArrayNode, ObjectNode]


def _safe_text(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)


def _primitive_text(value: Any, kind: ValueKind) -> str:
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        return repr(value)
    return value


class StructuralTreeRenderer:
    """Turns an arbitrary JSON-like value into a `TreeNode`.

    Containers nested deeper than `max_depth` are rendered collapsed even if
    their path is expanded; pass None to disable the cap.
    """

    def __init__(self, max_depth: Optional[int] = MAX_RENDER_DEPTH):
        self.max_depth = max_depth

    def render(self, value: Any, path: str = "", expansion: Optional[ExpansionSet] = None) -> TreeNode:
        if expansion is None:
            expansion = ExpansionSet()
        return self._render_node(value, path, expansion, 0)

    def _is_open(self, path: str, expansion: ExpansionSet, depth: int) -> bool:
        if not expansion.is_expanded(path):
            return False
        if self.max_depth is not None and depth >= self.max_depth:
            logger.debug(f"Depth cap {self.max_depth} reached at {path!r}, rendering collapsed")
            return False
        return True

    def _render_node(self, value: Any, path: str, expansion: ExpansionSet, depth: int) -> TreeNode:
        kind = classify(value)

        if kind is ValueKind.NULL:
            return NullNode()

        if kind in (ValueKind.STRING, ValueKind.NUMBER, ValueKind.BOOLEAN):
            return PrimitiveNode(kind.value, _primitive_text(value, kind))

        if kind is ValueKind.ARRAY:
            expanded = self._is_open(path, expansion, depth)
            items = None
            if expanded:
                items = tuple(
                    self._render_node(item, child_path(path, index), expansion, depth + 1)
                    for index, item in enumerate(value)
                )
            return ArrayNode(path=path, length=len(value), expanded=expanded, children=items)

        if kind is ValueKind.OBJECT:
            keys = tuple(str(k) for k in value.keys())
            expanded = self._is_open(path, expansion, depth)
            pairs = None
            if expanded:
                pairs = tuple(
                    (str(k), self._render_node(v, child_path(path, k), expansion, depth + 1))
                    for k, v in value.items()
                )
            return ObjectNode(path=path, keys=keys, expanded=expanded, children=pairs)

        return PrimitiveNode(ValueKind.OTHER.value, _safe_text(value))


# --- Text display ---

@dataclass(frozen=True)
class TreeRow:
    depth: int
    label: str
    text: str
    path: Optional[str] = None
    expandable: bool = False
    expanded: bool = False


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def display_text(node: TreeNode) -> str:
    """One-line text for a node; strings are quoted, containers summarised."""
    if isinstance(node, NullNode):
        return "null"
    if isinstance(node, PrimitiveNode):
        if node.kind == ValueKind.STRING.value:
            return json.dumps(node.text, ensure_ascii=False)
        return node.text
    if isinstance(node, ArrayNode):
        return f"[{_plural(node.length, 'item')}]"
    if isinstance(node, ObjectNode):
        return "{" + _plural(len(node.keys), 'key') + "}"
    return _safe_text(node)


def tree_rows(node: TreeNode, label: str = "root", depth: int = 0) -> List[TreeRow]:
    """Flatten the materialised part of a tree into display rows, parents first."""
    if isinstance(node, ArrayNode):
        rows = [TreeRow(depth, label, display_text(node), node.path, True, node.expanded)]
        for index, child in enumerate(node.children or ()):
            rows.extend(tree_rows(child, f"[{index}]", depth + 1))
        return rows

    if isinstance(node, ObjectNode):
        rows = [TreeRow(depth, label, display_text(node), node.path, True, node.expanded)]
        for key, child in node.children or ():
            rows.extend(tree_rows(child, key, depth + 1))
        return rows

    return [TreeRow(depth, label, display_text(node))]


def format_tree(node: TreeNode, label: str = "root", indent: str = "  ") -> str:
    lines = []
    for row in tree_rows(node, label):
        if row.expandable:
            marker = "▼ " if row.expanded else "▶ "
        else:
            marker = "  "
        lines.append(f"{indent * row.depth}{marker}{row.label}: {row.text}")
    return "\n".join(lines)
