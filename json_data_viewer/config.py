"""
Viewer defaults.

Module-level constants shared by the engine, the tree renderer and the
Gradio host.
"""

from typing import Tuple

# --- Paths ---
PATH_SEPARATOR = "."

# Label for "iterate the top-level document" in the data root selector
ROOT_PATH = "(root)"

# --- Grid ---
DEFAULT_PAGE_SIZE = 10

PAGE_SIZE_OPTIONS: Tuple[int, ...] = (5, 10, 25)

# Placeholder shown for None / missing cells
EMPTY_CELL = "—"

NESTED_CELL = "\U0001F50D View"

# --- Drill-down ---
# Containers deeper than this render collapsed even when expanded
MAX_RENDER_DEPTH = 64

# Try json.loads on string cell values before rendering them
PARSE_STRING_VALUES = True

# --- Logging ---
LOG_LEVEL_ENV = "JSON_DATA_VIEWER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
