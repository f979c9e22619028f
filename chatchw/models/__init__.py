"""Typed models shared across the application."""

from .estimate import EstimateRequest, PageEstimate
from .grouping import ChunkPreview, SourceGroup
from .session import (
    ExportData,
    ExportRequest,
    MatrixEvaluation,
    RagChunk,
    SessionRecord,
    SessionSummary,
)
from .source import (
    PhraseRule,
    ResolvedLocation,
    ResolverConfig,
    SourceLookup,
    TermClause,
    TopicRule,
)

__all__ = [
    "ChunkPreview",
    "EstimateRequest",
    "ExportData",
    "ExportRequest",
    "MatrixEvaluation",
    "PageEstimate",
    "PhraseRule",
    "RagChunk",
    "ResolvedLocation",
    "ResolverConfig",
    "SessionRecord",
    "SessionSummary",
    "SourceGroup",
    "SourceLookup",
    "TermClause",
    "TopicRule",
]
