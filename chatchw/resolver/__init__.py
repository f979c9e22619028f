"""Source resolution and grouping."""

from .grouping import group_chunks_by_source
from .source_resolver import (
    SourceResolver,
    build_viewer_link,
    get_default_resolver,
    resolve_source,
    source_display_name,
)

__all__ = [
    "SourceResolver",
    "build_viewer_link",
    "get_default_resolver",
    "group_chunks_by_source",
    "resolve_source",
    "source_display_name",
]
