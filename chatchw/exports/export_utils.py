"""Serialize session tables to CSV or JSON for download."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel

from chatchw.config import settings
from chatchw.models.session import ExportData, ExportRequest

logger = logging.getLogger(__name__)

# Title and ExportData attribute of each CSV section, in output order.
CSV_SECTIONS: List[Tuple[str, str]] = [
    ("CONVERSATION MESSAGES", "conversations"),
    ("SESSION SUMMARIES", "summaries"),
    ("RAG CHUNKS", "chunks"),
    ("MATRIX EVALUATIONS", "matrix"),
]

MEDIA_TYPES = {
    "csv": "text/csv",
    "json": "application/json",
}


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return _quote(json.dumps(value, separators=(",", ":"), ensure_ascii=False))
    if isinstance(value, bool):
        return _quote("true" if value else "false")
    return _quote(str(value))


def object_to_csv_row(row: Dict[str, Any]) -> str:
    return ",".join(_cell(value) for value in row.values())


def _dump_rows(rows: Sequence[BaseModel]) -> List[Dict[str, Any]]:
    return [row.model_dump(mode="json") for row in rows]


def convert_to_csv(data: ExportData) -> str:
    """Render all non-empty tables as titled CSV sections."""
    sections: List[List[str]] = []
    for title, attr in CSV_SECTIONS:
        rows = _dump_rows(getattr(data, attr))
        if not rows:
            continue
        lines = [title, ",".join(rows[0].keys())]
        lines.extend(object_to_csv_row(row) for row in rows)
        sections.append(lines)
    return "\n\n".join("\n".join(lines) for lines in sections)


def convert_to_json(data: ExportData) -> str:
    return json.dumps(data.model_dump(mode="json"), indent=2, ensure_ascii=False)


def _selected(session_id: Any, wanted: set) -> bool:
    return session_id is not None and str(session_id) in wanted


def select_sessions(data: ExportData, sessions: Union[str, Sequence[Union[int, str]]]) -> ExportData:
    """Keep only rows that belong to the selected sessions."""
    if sessions == "all":
        return data
    wanted = {str(session_id) for session_id in sessions}
    return ExportData(
        conversations=[row for row in data.conversations if _selected(row.id, wanted)],
        summaries=[row for row in data.summaries if _selected(row.session_id, wanted)],
        chunks=[row for row in data.chunks if _selected(row.session_id, wanted)],
        matrix=[row for row in data.matrix if _selected(row.session_id, wanted)],
    )


def export_filename(fmt: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    timestamp = now.strftime("%Y-%m-%d_%H-%M-%S")
    return f"{settings.export_filename_prefix}_{timestamp}.{fmt}"


def render_export(request: ExportRequest, now: Optional[datetime] = None) -> Tuple[str, str, str]:
    """Return ``(content, filename, media_type)`` for an export request."""
    data = select_sessions(request.data, request.sessions)
    if request.format == "csv":
        content = convert_to_csv(data)
    else:
        content = convert_to_json(data)
    filename = export_filename(request.format, now)
    logger.info(
        "Rendered %s export with %s conversations, %s chunks",
        request.format,
        len(data.conversations),
        len(data.chunks),
    )
    return content, filename, MEDIA_TYPES[request.format]
