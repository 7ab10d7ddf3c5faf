from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Sequence

logger = logging.getLogger(__name__)

_INTERNAL_UPPER = re.compile(r'(?<=.)([A-Z])', re.DOTALL)


@dataclass(frozen=True)
class Column:
    field: str
    header: str


def format_header(field: str) -> str:
    """Human-readable header for a field name.

    Inserts a space before every internal uppercase letter, uppercases the
    first character and turns underscores into spaces:
    'first_name' -> 'First name', 'userID' -> 'User I D'.
    """
    if not field:
        return ''
    spaced = _INTERNAL_UPPER.sub(r' \1', field)
    return (spaced[:1].upper() + spaced[1:]).replace('_', ' ')


def discover_columns(records: Iterable[Any]) -> List[Column]:
    """One column per distinct key across `records`, in first-seen order."""
    seen: Dict[str, Column] = {}
    for record in records or ():
        if not isinstance(record, Mapping):
            continue
        for key in record.keys():
            field = str(key)
            if field not in seen:
                seen[field] = Column(field, format_header(field))
    return list(seen.values())


def visible_columns(all_columns: Sequence[Column], visibility: Mapping[str, bool]) -> List[Column]:
    """Columns whose field maps to True; fields missing from the map are hidden."""
    return [col for col in all_columns if visibility.get(col.field, False)]


class ColumnModel:
    """Discovered columns plus a per-field visibility map.

    Every discovered field starts visible except those listed in `hidden`.
    Toggling a field that is not a known column is ignored.
    """

    def __init__(self, hidden: Iterable[str] = ()):
        self.hidden = tuple(hidden)
        self.columns: List[Column] = []
        self.visibility: Dict[str, bool] = {}

    def reset(self, records: Iterable[Any]) -> None:
        """Rebuild columns and visibility from scratch, dropping earlier choices."""
        self.columns = discover_columns(records)
        self.visibility = {col.field: col.field not in self.hidden for col in self.columns}
        logger.debug(f"Discovered {len(self.columns)} columns")

    def visible_columns(self) -> List[Column]:
        return visible_columns(self.columns, self.visibility)

    def is_visible(self, field: str) -> bool:
        return self.visibility.get(field, False)

    def toggle_visibility(self, field: str) -> None:
        if field not in self.visibility:
            logger.debug(f"Ignoring visibility toggle for unknown column {field!r}")
            return
        self.visibility[field] = not self.visibility[field]

    def set_visible_fields(self, fields: Iterable[str]) -> None:
        """Make exactly `fields` visible, toggling only the columns that differ."""
        wanted = set(fields or ())
        for col in self.columns:
            if self.is_visible(col.field) != (col.field in wanted):
                self.toggle_visibility(col.field)
