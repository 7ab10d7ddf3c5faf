from __future__ import annotations

import re
from typing import Any, List

from .config import PATH_SEPARATOR


def escape_path_segment(segment: Any) -> str:
    """Escape a single key segment for dot-path representation.

    - Dots are escaped as '\\.' so keys like 'gpt-3.5-turbo' stay one step.
    - Backslashes are escaped as '\\\\' so escaped and literal keys never collide.
    """
    if not isinstance(segment, str):
        segment = str(segment)
    return segment.replace('\\', '\\\\').replace(PATH_SEPARATOR, '\\' + PATH_SEPARATOR)


def child_path(parent: str, step: Any) -> str:
    """Path of the child reached from `parent` by an array index or object key.

    The root path is the empty string, so the first element of a root array
    is '.0' and key 'a' of a root object is '.a'.
    """
    return f"{parent or ''}{PATH_SEPARATOR}{escape_path_segment(step)}"


# Runs of escaped characters or anything that is neither separator nor backslash.
# A lone trailing backslash is kept as a literal.
_SEGMENT = re.compile(r'(?:\\.|\\$|[^' + re.escape(PATH_SEPARATOR) + r'\\])+', re.DOTALL)
_ESCAPE = re.compile(r'\\(.)', re.DOTALL)


def split_path(path: str) -> List[str]:
    """Split a dot path on unescaped '.' and unescape each segment.

    Empty segments are dropped. Used for data root selection only; expansion
    paths are opaque keys.
    """
    if path is None:
        return []
    return [_ESCAPE.sub(r'\1', seg) for seg in _SEGMENT.findall(str(path))]
