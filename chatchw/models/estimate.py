"""Request/response models for LLM page estimates."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EstimateRequest(BaseModel):
    """Chunk text to locate."""

    text: str = Field(..., min_length=1)


class PageEstimate(BaseModel):
    """Best guess of where a chunk sits in the document."""

    page: int = Field(default=1, ge=1)
    highlight_text: str = ""
