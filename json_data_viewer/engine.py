"""
Tabular view engine.

Owns the raw record list and derives the filter -> sort -> paginate pipeline
from a small `DataState`. Every derived view is recomputed on each call;
the only mutations are to the engine's own state fields.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .columns import Column, ColumnModel
from .config import DEFAULT_PAGE_SIZE
from .records import Record, field_value, is_missing, stringify_value

logger = logging.getLogger(__name__)


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: SortDirection = SortDirection.ASC


@dataclass
class DataState:
    """Query, sort and paging state. Presentation state lives in the host."""
    query: str = ""
    sort: Optional[SortSpec] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


def _sort_key(value: Any) -> Tuple[int, Any]:
    # missing < booleans/numbers < strings < containers
    if is_missing(value):
        return (0, 0)
    if isinstance(value, (bool, int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    return (3, stringify_value(value))


def _coerce_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


class TabularViewEngine:
    def __init__(
        self,
        records: Optional[Iterable[Record]] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        hidden: Iterable[str] = (),
    ):
        self.column_model = ColumnModel(hidden=hidden)
        self.state = DataState(page_size=max(1, _coerce_int(page_size) or DEFAULT_PAGE_SIZE))
        self._records: List[Record] = []
        self.set_records(records)

    # --- Records & columns ---

    @property
    def records(self) -> List[Record]:
        return list(self._records)

    @property
    def record_count(self) -> int:
        return len(self._records)

    @property
    def columns(self) -> List[Column]:
        return list(self.column_model.columns)

    def set_records(self, records: Optional[Iterable[Record]]) -> None:
        """Replace the backing collection. Query and sort are kept."""
        self._records = list(records or [])
        self.state.page = 1
        self.column_model.reset(self._records)
        logger.debug(f"Loaded {len(self._records)} records")

    def visible_columns(self) -> List[Column]:
        return self.column_model.visible_columns()

    def toggle_column(self, field: str) -> None:
        self.column_model.toggle_visibility(field)

    def set_visible_fields(self, fields: Iterable[str]) -> None:
        self.column_model.set_visible_fields(fields)

    # --- Search ---

    def set_search_query(self, query: Optional[str]) -> None:
        self.state.query = query or ""

    def _matches(self, record: Record, needle: str, fields: Sequence[str]) -> bool:
        for field in fields:
            value = field_value(record, field)
            if value is None:
                continue
            if needle in stringify_value(value).casefold():
                return True
        return False

    def filtered_view(self) -> List[Record]:
        if not self.state.query:
            return list(self._records)
        needle = self.state.query.casefold()
        fields = [col.field for col in self.visible_columns()]
        return [r for r in self._records if self._matches(r, needle, fields)]

    # --- Sort ---

    @property
    def sort(self) -> Optional[SortSpec]:
        return self.state.sort

    def set_sort(self, field: str) -> None:
        """Cycle sorting on `field`: none -> asc -> desc -> asc -> ...

        A different field starts over at ascending.
        """
        current = self.state.sort
        if current is None or current.field != field:
            self.state.sort = SortSpec(field, SortDirection.ASC)
        elif current.direction is SortDirection.ASC:
            self.state.sort = SortSpec(field, SortDirection.DESC)
        else:
            self.state.sort = SortSpec(field, SortDirection.ASC)

    def clear_sort(self) -> None:
        self.state.sort = None

    def sorted_view(self) -> List[Record]:
        rows = self.filtered_view()
        order = self.state.sort
        if order is None:
            return rows
        # sorted() is stable in both directions, so ties keep input order
        return sorted(
            rows,
            key=lambda r: _sort_key(field_value(r, order.field)),
            reverse=order.direction is SortDirection.DESC,
        )

    def sort_indicator(self, field: str) -> str:
        order = self.state.sort
        if order is None or order.field != field:
            return ""
        return "↑" if order.direction is SortDirection.ASC else "↓"

    # --- Pagination ---

    @property
    def page_size(self) -> int:
        return self.state.page_size

    def set_page_size(self, size: Any) -> None:
        n = _coerce_int(size)
        if n is None:
            logger.warning(f"Ignoring invalid page size {size!r}")
            return
        self.state.page_size = max(1, n)
        self.state.page = 1

    def total_pages(self) -> int:
        return max(1, math.ceil(len(self.filtered_view()) / self.state.page_size))

    def _clamp(self, page: int) -> int:
        return min(max(1, page), self.total_pages())

    @property
    def current_page(self) -> int:
        return self._clamp(self.state.page)

    def set_page(self, page: Any) -> None:
        n = _coerce_int(page)
        if n is None:
            logger.debug(f"Ignoring invalid page {page!r}")
            return
        self.state.page = self._clamp(n)

    def next_page(self) -> None:
        self.state.page = self._clamp(self.current_page + 1)

    def prev_page(self) -> None:
        self.state.page = self._clamp(self.current_page - 1)

    def paged_view(self) -> List[Record]:
        start = (self.current_page - 1) * self.state.page_size
        return self.sorted_view()[start:start + self.state.page_size]

    def page_info(self) -> str:
        return f"Page {self.current_page} of {self.total_pages()}"
