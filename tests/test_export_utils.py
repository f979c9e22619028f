"""Tests for CSV/JSON export of session tables."""

import json
from datetime import datetime

from chatchw.exports.export_utils import (
    convert_to_csv,
    convert_to_json,
    export_filename,
    object_to_csv_row,
    render_export,
    select_sessions,
)
from chatchw.models.session import (
    ExportData,
    ExportRequest,
    MatrixEvaluation,
    RagChunk,
    SessionRecord,
    SessionSummary,
)


def build_data() -> ExportData:
    return ExportData(
        conversations=[
            SessionRecord(id=1, chat_name='cough "day 2"', initial_responses=[{"q": "age"}]),
            SessionRecord(id=2, chat_name="fever"),
        ],
        summaries=[SessionSummary(session_id="1", summary="refer")],
        chunks=[
            RagChunk(session_id="1", source="who-guide.pdf/page_15", text="antibiotics"),
            RagChunk(session_id="2", source="blood in", text="dysentery", score=0.5),
        ],
        matrix=[],
    )


def test_object_to_csv_row_quotes_every_value() -> None:
    row = {"a": 'say "hi"', "b": None, "c": [1, 2], "d": True, "e": 3}
    assert object_to_csv_row(row) == '"say ""hi""",,"[1,2]","true","3"'


def test_convert_to_csv_sections() -> None:
    csv_text = convert_to_csv(build_data())
    lines = csv_text.split("\n")

    assert lines[0] == "CONVERSATION MESSAGES"
    assert lines[1] == "id,chat_name,initial_responses,followup_responses,exam_responses,created_at,updated_at"
    assert lines[2] == '"1","cough ""day 2""","[{""q"":""age""}]","[]","[]",,'
    assert "SESSION SUMMARIES" in lines
    assert "RAG CHUNKS" in lines
    # header comes from the first row only
    assert "session_id,source,text" in lines
    assert "MATRIX EVALUATIONS" not in csv_text
    assert lines[lines.index("SESSION SUMMARIES") - 1] == ""


def test_convert_to_csv_empty_data() -> None:
    assert convert_to_csv(ExportData()) == ""


def test_convert_to_json_is_indented() -> None:
    text = convert_to_json(build_data())
    assert text.startswith('{\n  "conversations"')
    assert json.loads(text)["chunks"][1]["score"] == 0.5


def test_select_sessions_filters_every_table() -> None:
    data = build_data()
    data.matrix.append(MatrixEvaluation(session_id="2", decision="refer"))

    selected = select_sessions(data, ["2"])

    assert [row.id for row in selected.conversations] == [2]
    assert selected.summaries == []
    assert [row.text for row in selected.chunks] == ["dysentery"]
    assert len(selected.matrix) == 1


def test_select_all_sessions_keeps_data() -> None:
    data = build_data()
    assert select_sessions(data, "all") is data


def test_export_filename() -> None:
    now = datetime(2024, 3, 5, 14, 7, 9)
    assert export_filename("csv", now) == "chatCHW_export_2024-03-05_14-07-09.csv"


def test_render_export_json() -> None:
    request = ExportRequest(format="json", sessions=["1"], data=build_data())
    content, filename, media_type = render_export(request, now=datetime(2024, 1, 1))

    assert media_type == "application/json"
    assert filename.endswith(".json")
    payload = json.loads(content)
    assert [row["id"] for row in payload["conversations"]] == [1]


def test_integer_session_ids_are_accepted_and_selected() -> None:
    request = ExportRequest.model_validate(
        {
            "format": "csv",
            "sessions": [1],
            "data": {
                "conversations": [{"id": 1, "chat_name": "cough"}, {"id": 2, "chat_name": "fever"}],
                "summaries": [{"session_id": 1, "summary": "refer"}, {"session_id": 2}],
                "chunks": [{"session_id": 1, "source": "blood in", "text": "dysentery"}],
                "matrix": [{"session_id": "1", "decision": "refer"}, {"session_id": None}],
            },
        }
    )
    selected = select_sessions(request.data, request.sessions)

    assert [row.id for row in selected.conversations] == [1]
    assert [row.session_id for row in selected.summaries] == [1]
    assert len(selected.chunks) == 1
    assert [row.session_id for row in selected.matrix] == ["1"]

    content, _, _ = render_export(request, now=datetime(2024, 1, 1))
    assert '"1","refer"' in content.split("\n")
