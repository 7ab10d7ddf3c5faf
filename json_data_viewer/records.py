from __future__ import annotations

import json
import math
import reprlib
from typing import Any, Dict, List, Mapping

from .accessors import get_value_by_path
from .config import ROOT_PATH

Record = Dict[str, Any]


def resolve_records(data: Any, root_path: str = ROOT_PATH) -> List[Record]:
    """Resolve the selected root into the record list shown in the grid.

    - list -> one record per item
    - dict -> a single record
    - scalar -> a single wrapped record

    Items that are not objects are wrapped as {'value': item} so every
    record is a mapping.
    """
    if data is None:
        return []

    if root_path in (None, '', ROOT_PATH):
        target = data
    else:
        target = get_value_by_path(data, root_path)

    if target is None:
        return []
    items = target if isinstance(target, list) else [target]
    return [item if isinstance(item, dict) else {'value': item} for item in items]


def field_value(record: Any, field: str) -> Any:
    """Value of `field` in `record`, or None for absent fields and non-mappings."""
    if isinstance(record, Mapping):
        return record.get(field)
    return None


def is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def is_nested(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple))


def stringify_value(value: Any) -> str:
    """Text form of a cell value, following JSON spelling for non-strings.

    Containers are serialized so their content stays searchable. Values that
    cannot be serialized, including ones nested past the recursion limit,
    fall back to a depth-bounded repr.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return 'null'
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        return reprlib.repr(value)
