from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _source_path(file_obj) -> Path:
    # Gradio hands over either a path string or a tempfile wrapper with .name
    return Path(getattr(file_obj, 'name', file_obj))


def read_json_content(file_obj) -> Any:
    """Read JSON content from an uploaded file, a file-like object or a path.

    Raises ValueError when nothing was uploaded; json.JSONDecodeError is left
    to the caller.
    """
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8-sig')
        return json.loads(content)

    path = _source_path(file_obj)
    logger.debug(f"Reading JSON records from {path}")
    return json.loads(path.read_text(encoding='utf-8-sig'))
