"""Session log rows as stored by the ChatCHW backend."""

from __future__ import annotations

from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SessionRecord(BaseModel):
    """One conversation session."""

    model_config = ConfigDict(extra="allow")

    id: int
    chat_name: str
    initial_responses: List[Any] = Field(default_factory=list)
    followup_responses: List[Any] = Field(default_factory=list)
    exam_responses: List[Any] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SessionSummary(BaseModel):
    """Summary written at the end of a session."""

    model_config = ConfigDict(extra="allow")

    session_id: Optional[Union[int, str]] = None
    summary: Optional[str] = None


class RagChunk(BaseModel):
    """Retrieved chunk attached to an assistant message."""

    model_config = ConfigDict(extra="allow")

    session_id: Optional[Union[int, str]] = None
    source: Optional[str] = None
    text: str = ""


class MatrixEvaluation(BaseModel):
    """Decision trace produced by the matrix evaluation step."""

    model_config = ConfigDict(extra="allow")

    session_id: Optional[Union[int, str]] = None


class ExportData(BaseModel):
    """The four tables the dashboard exports."""

    conversations: List[SessionRecord] = Field(default_factory=list)
    summaries: List[SessionSummary] = Field(default_factory=list)
    chunks: List[RagChunk] = Field(default_factory=list)
    matrix: List[MatrixEvaluation] = Field(default_factory=list)


class ExportRequest(BaseModel):
    """Export payload posted by the dashboard."""

    format: Literal["csv", "json"] = "csv"
    sessions: Union[Literal["all"], List[Union[int, str]]] = "all"
    data: ExportData = Field(default_factory=ExportData)
