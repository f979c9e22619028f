"""CSV/JSON export of session tables."""

from .export_utils import convert_to_csv, convert_to_json, render_export, select_sessions

__all__ = ["convert_to_csv", "convert_to_json", "render_export", "select_sessions"]
