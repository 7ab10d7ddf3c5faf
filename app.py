import logging
import os

import gradio as gr

from json_data_viewer.config import DEFAULT_LOG_LEVEL, DEFAULT_PAGE_SIZE, LOG_LEVEL_ENV, PAGE_SIZE_OPTIONS, ROOT_PATH
from json_data_viewer.handlers import (
    change_page_size,
    change_root,
    clear_sort,
    close_drilldown,
    load_dataset,
    next_page,
    prev_page,
    search,
    select_cell,
    set_columns,
    sort_by,
    toggle_node,
)

logging.basicConfig(
    level=os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# --- UI Definition ---
with gr.Blocks(title="JSON Data Viewer") as demo:
    gr.Markdown("# JSON Data Viewer")
    gr.Markdown("Upload a JSON file, browse its records as a table and drill into nested values.")

    # State
    session_state = gr.State()

    with gr.Row():
        # Left Panel: Input & Columns
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            file_input = gr.File(label="Upload JSON File", file_types=[".json"])
            status_msg = gr.Textbox(label="Status", interactive=False)
            root_path_selector = gr.Dropdown(
                label="Data Root Path",
                choices=[ROOT_PATH],
                value=ROOT_PATH,
                allow_custom_value=True,
                interactive=True,
            )

            gr.Markdown("### 2. Columns")
            column_selector = gr.CheckboxGroup(label="Visible Columns", choices=[], value=[])

        # Right Panel: Grid
        with gr.Column(scale=3):
            with gr.Row():
                search_box = gr.Textbox(label="Search", placeholder="Search...", scale=3)
                sort_field = gr.Dropdown(label="Sort Column", choices=[], interactive=True, scale=2)
                sort_btn = gr.Button("Sort ↑↓", scale=1)
                unsort_btn = gr.Button("Clear Sort", scale=1)

            grid = gr.Dataframe(label="Records", interactive=False, wrap=True)

            with gr.Row():
                page_size = gr.Dropdown(
                    label="Rows per page",
                    choices=list(PAGE_SIZE_OPTIONS),
                    value=DEFAULT_PAGE_SIZE,
                    interactive=True,
                )
                prev_btn = gr.Button("◀")
                page_info = gr.Markdown("Page 1 of 1")
                next_btn = gr.Button("▶")

            # Nested data view
            with gr.Group(visible=False) as drilldown_panel:
                with gr.Row():
                    drilldown_title = gr.Markdown()
                    close_btn = gr.Button("✕", scale=0)
                drilldown_tree = gr.Code(label="Value", language=None, interactive=False)
                with gr.Row():
                    node_selector = gr.Dropdown(label="Node", choices=[], interactive=True, scale=3)
                    toggle_btn = gr.Button("Expand / Collapse", scale=1)

    grid_outputs = [session_state, grid, page_info]
    drilldown_outputs = [session_state, drilldown_panel, drilldown_title, drilldown_tree, node_selector]

    file_input.upload(
        fn=load_dataset,
        inputs=[file_input, session_state],
        outputs=[session_state, root_path_selector, status_msg, column_selector, sort_field, grid, page_info],
    )

    root_path_selector.input(
        fn=change_root,
        inputs=[session_state, root_path_selector],
        outputs=[session_state, status_msg, column_selector, sort_field, grid, page_info],
    )

    search_box.change(fn=search, inputs=[session_state, search_box], outputs=grid_outputs)
    sort_btn.click(fn=sort_by, inputs=[session_state, sort_field], outputs=grid_outputs)
    unsort_btn.click(fn=clear_sort, inputs=[session_state], outputs=grid_outputs)
    page_size.input(fn=change_page_size, inputs=[session_state, page_size], outputs=grid_outputs)
    prev_btn.click(fn=prev_page, inputs=[session_state], outputs=grid_outputs)
    next_btn.click(fn=next_page, inputs=[session_state], outputs=grid_outputs)
    column_selector.input(fn=set_columns, inputs=[session_state, column_selector], outputs=grid_outputs)

    grid.select(fn=select_cell, inputs=[session_state], outputs=drilldown_outputs)
    toggle_btn.click(fn=toggle_node, inputs=[session_state, node_selector], outputs=drilldown_outputs)
    close_btn.click(fn=close_drilldown, inputs=[session_state], outputs=[session_state, drilldown_panel])

if __name__ == "__main__":
    demo.launch()
