"""Core logic for JSON Data Viewer.

The Gradio UI lives in `app.py`. This package contains the presentation engine:
- discover columns and track their visibility
- filter, sort and paginate an in-memory record list
- render nested values as expandable trees keyed by dot paths
- coordinate the drill-down view of a single cell
"""
