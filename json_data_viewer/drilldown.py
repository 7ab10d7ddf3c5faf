from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import PARSE_STRING_VALUES
from .expansion import ExpansionSet
from .tree import StructuralTreeRenderer, TreeNode, format_tree

logger = logging.getLogger(__name__)


def try_parse_structured(value: Any) -> Any:
    """Parse a string holding a JSON array or object; anything else is returned as-is.

    Strings that parse to scalars ('123', 'true') stay strings.
    """
    if not isinstance(value, str):
        return value
    try:
        parsed = json.loads(value)
    except (ValueError, RecursionError):
        logger.debug("Cell value is not JSON, showing it as a plain string")
        return value
    if isinstance(parsed, (dict, list)):
        return parsed
    return value


class DrillDownCoordinator:
    """One drill-down session at a time over a single cell value.

    Opening a new target always starts from a fresh expansion state.
    """

    def __init__(
        self,
        renderer: Optional[StructuralTreeRenderer] = None,
        parse_strings: bool = PARSE_STRING_VALUES,
    ):
        self.renderer = renderer or StructuralTreeRenderer()
        self.parse_strings = parse_strings
        self.expansion = ExpansionSet()
        self.value: Any = None
        self.title: str = ""
        self.is_active = False

    def open(self, value: Any, title: str) -> None:
        if self.parse_strings:
            value = try_parse_structured(value)
        self.value = value
        self.title = title
        self.expansion.reset()
        self.is_active = True

    def close(self) -> None:
        self.is_active = False

    def toggle(self, path: str) -> None:
        self.expansion.toggle(path)

    def tree(self) -> Optional[TreeNode]:
        if not self.is_active:
            return None
        return self.renderer.render(self.value, "", self.expansion)

    def text(self) -> str:
        node = self.tree()
        if node is None:
            return ""
        return format_tree(node, label=self.title or "root")
