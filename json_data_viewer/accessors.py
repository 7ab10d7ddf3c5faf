from __future__ import annotations

from typing import Any

from .paths import split_path


def get_value_by_path(data: Any, path: str) -> Any:
    """Retrieve a value from nested data using a dot-notation path.

    Dict steps look up keys, list steps take integer indices. Returns None
    when any step is missing.
    """
    keys = split_path(path)
    val = data

    i = 0
    while i < len(keys):
        key = keys[i]

        if isinstance(val, dict):
            if key in val:
                val = val[key]
                i += 1
                continue
            # Fallback for unescaped dotted dict keys (e.g. 'gpt-3.5-turbo')
            # when the incoming path is 'responses.gpt-3.5-turbo'.
            matched = False
            candidate = key
            for j in range(i + 1, len(keys)):
                candidate = candidate + '.' + keys[j]
                if candidate in val:
                    val = val[candidate]
                    i = j + 1
                    matched = True
                    break
            if not matched:
                return None
        elif isinstance(val, list):
            try:
                val = val[int(key)]
            except (ValueError, IndexError):
                return None
            i += 1
        else:
            return None

    return val
