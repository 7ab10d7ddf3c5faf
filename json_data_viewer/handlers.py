from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import gradio as gr
import pandas as pd

from .config import EMPTY_CELL, NESTED_CELL, ROOT_PATH
from .drilldown import DrillDownCoordinator
from .engine import TabularViewEngine
from .io_utils import read_json_content
from .records import field_value, is_nested, resolve_records, stringify_value
from .schema_utils import default_root, find_list_paths
from .tree import tree_rows

logger = logging.getLogger(__name__)


@dataclass
class ViewerSession:
    """Per-browser state kept in gr.State: the loaded document plus the engine."""
    data: Any = None
    root_path: str = ROOT_PATH
    engine: TabularViewEngine = field(default_factory=TabularViewEngine)
    drilldown: DrillDownCoordinator = field(default_factory=DrillDownCoordinator)


def cell_text(value: Any) -> str:
    if value is None:
        return EMPTY_CELL
    if is_nested(value):
        return NESTED_CELL
    return stringify_value(value)


def build_page_table(engine: TabularViewEngine) -> pd.DataFrame:
    columns = engine.visible_columns()
    headers = [f"{col.header} {engine.sort_indicator(col.field)}".rstrip() for col in columns]
    rows = [[cell_text(field_value(record, col.field)) for col in columns] for record in engine.paged_view()]
    return pd.DataFrame(rows, columns=headers)


def grid_outputs(session: ViewerSession) -> Tuple[ViewerSession, pd.DataFrame, str]:
    return session, build_page_table(session.engine), session.engine.page_info()


def column_choices(engine: TabularViewEngine) -> List[Tuple[str, str]]:
    return [(col.header, col.field) for col in engine.columns]


def _load_records(session: ViewerSession, root_path: str):
    records = resolve_records(session.data, root_path or ROOT_PATH)
    session.root_path = root_path or ROOT_PATH
    session.engine.set_records(records)
    session.drilldown.close()
    engine = session.engine
    visible = [col.field for col in engine.visible_columns()]
    status = f"Records: {engine.record_count} · Columns: {len(engine.columns)}"
    return (
        status,
        gr.update(choices=column_choices(engine), value=visible),
        gr.update(choices=column_choices(engine), value=None),
    )


def load_dataset(file_obj, session: Optional[ViewerSession]):
    session = session or ViewerSession()
    try:
        session.data = read_json_content(file_obj)
    except Exception as e:
        logger.warning(f"Failed to load dataset: {e}")
        session.data = None
        session.engine.set_records([])
        session.drilldown.close()
        return (
            session,
            gr.update(choices=[ROOT_PATH], value=ROOT_PATH),
            f"Error parsing JSON: {str(e)}",
            gr.update(choices=[], value=[]),
            gr.update(choices=[], value=None),
            build_page_table(session.engine),
            session.engine.page_info(),
        )

    list_paths = find_list_paths(session.data) or [ROOT_PATH]
    root = default_root(list_paths)
    status, columns_update, sort_update = _load_records(session, root)
    return (
        session,
        gr.update(choices=list_paths, value=root),
        status,
        columns_update,
        sort_update,
        build_page_table(session.engine),
        session.engine.page_info(),
    )


def change_root(session: Optional[ViewerSession], root_path: str):
    session = session or ViewerSession()
    status, columns_update, sort_update = _load_records(session, root_path)
    return session, status, columns_update, sort_update, build_page_table(session.engine), session.engine.page_info()


def search(session: Optional[ViewerSession], query: str):
    session = session or ViewerSession()
    session.engine.set_search_query(query)
    return grid_outputs(session)


def sort_by(session: Optional[ViewerSession], field_name: Optional[str]):
    session = session or ViewerSession()
    if field_name:
        session.engine.set_sort(field_name)
    return grid_outputs(session)


def clear_sort(session: Optional[ViewerSession]):
    session = session or ViewerSession()
    session.engine.clear_sort()
    return grid_outputs(session)


def change_page_size(session: Optional[ViewerSession], size):
    session = session or ViewerSession()
    session.engine.set_page_size(size)
    return grid_outputs(session)


def next_page(session: Optional[ViewerSession]):
    session = session or ViewerSession()
    session.engine.next_page()
    return grid_outputs(session)


def prev_page(session: Optional[ViewerSession]):
    session = session or ViewerSession()
    session.engine.prev_page()
    return grid_outputs(session)


def set_columns(session: Optional[ViewerSession], fields: Optional[List[str]]):
    session = session or ViewerSession()
    session.engine.set_visible_fields(fields or [])
    return grid_outputs(session)


# --- Drill-down ---

def tree_path_choices(session: ViewerSession) -> List[Tuple[str, str]]:
    node = session.drilldown.tree()
    if node is None:
        return []
    return [
        (f"{'  ' * row.depth}{row.label} {row.text}", row.path)
        for row in tree_rows(node, session.drilldown.title or "root")
        if row.expandable
    ]


def drilldown_outputs(session: ViewerSession):
    dd = session.drilldown
    choices = tree_path_choices(session)
    return (
        session,
        gr.update(visible=dd.is_active),
        f"### {dd.title}" if dd.is_active else "",
        dd.text(),
        gr.update(choices=choices, value=choices[0][1] if choices else None),
    )


def open_cell(session: Optional[ViewerSession], row: int, col: int):
    """Open the drill-down for the cell at (row, col) of the current page."""
    session = session or ViewerSession()
    engine = session.engine
    page = engine.paged_view()
    columns = engine.visible_columns()
    if 0 <= row < len(page) and 0 <= col < len(columns):
        column = columns[col]
        value = field_value(page[row], column.field)
        if value is not None:
            session.drilldown.open(value, column.header)
    return drilldown_outputs(session)


def select_cell(session: Optional[ViewerSession], evt: gr.SelectData):
    row, col = evt.index
    return open_cell(session, row, col)


def toggle_node(session: Optional[ViewerSession], path: Optional[str]):
    session = session or ViewerSession()
    if path is not None:
        session.drilldown.toggle(path)
    outputs = drilldown_outputs(session)
    # keep the toggled node selected so repeated clicks flip it back
    return outputs[:4] + (gr.update(choices=tree_path_choices(session), value=path),)


def close_drilldown(session: Optional[ViewerSession]):
    session = session or ViewerSession()
    session.drilldown.close()
    return session, gr.update(visible=False)
