from __future__ import annotations

from typing import Any, List

from .config import PATH_SEPARATOR, ROOT_PATH
from .paths import escape_path_segment


def find_list_paths(data: Any, parent_key: str = '', sep: str = PATH_SEPARATOR) -> List[str]:
    """Find all paths in the JSON that point to a list reachable through objects.

    A top-level list is reported as '(root)'. Lists nested inside lists are
    not reported because a record collection is selected by keys only.
    """
    paths: List[str] = []
    if isinstance(data, dict):
        for k, v in data.items():
            escaped_k = escape_path_segment(k)
            current_key = f"{parent_key}{sep}{escaped_k}" if parent_key else escaped_k
            if isinstance(v, list):
                paths.append(current_key)
            elif isinstance(v, dict):
                paths.extend(find_list_paths(v, current_key, sep))
    elif isinstance(data, list) and not parent_key:
        paths.append(ROOT_PATH)
    return sorted(paths)


def default_root(list_paths: List[str]) -> str:
    if ROOT_PATH in list_paths or not list_paths:
        return ROOT_PATH
    return list_paths[0]
