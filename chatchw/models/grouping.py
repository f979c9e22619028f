"""Models for chunks grouped under their resolved source."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .source import ResolvedLocation


class ChunkPreview(BaseModel):
    """Short excerpt of a chunk shown inside a source group."""

    text: str
    truncated: bool = False


class SourceGroup(BaseModel):
    """All chunks of a message that share one source string."""

    source: str
    display_name: str
    location: ResolvedLocation
    viewer_link: Optional[str] = None
    chunk_count: int = 0
    previews: List[ChunkPreview] = Field(default_factory=list)
