"""Group RAG chunks by the source they were retrieved from."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from chatchw.config import settings
from chatchw.models.grouping import ChunkPreview, SourceGroup
from chatchw.models.session import RagChunk
from chatchw.resolver.source_resolver import SourceResolver, get_default_resolver

UNKNOWN_GROUP = "Unknown"


def build_preview(text: str, limit: int) -> ChunkPreview:
    if len(text) <= limit:
        return ChunkPreview(text=text)
    return ChunkPreview(text=f"{text[:limit]}...", truncated=True)


def group_chunks_by_source(
    chunks: Iterable[RagChunk],
    resolver: Optional[SourceResolver] = None,
    preview_chars: Optional[int] = None,
) -> List[SourceGroup]:
    """Bucket chunks under their source, keeping first-seen order."""
    resolver = resolver or get_default_resolver()
    if preview_chars is None:
        preview_chars = settings.chunk_preview_chars

    buckets: Dict[str, List[RagChunk]] = {}
    for chunk in chunks:
        buckets.setdefault(chunk.source or UNKNOWN_GROUP, []).append(chunk)

    groups: List[SourceGroup] = []
    for source, members in buckets.items():
        groups.append(
            SourceGroup(
                source=source,
                display_name=resolver.display_name(source),
                location=resolver.resolve(source),
                viewer_link=resolver.build_viewer_link(source),
                chunk_count=len(members),
                previews=[build_preview(chunk.text, preview_chars) for chunk in members],
            )
        )
    return groups
