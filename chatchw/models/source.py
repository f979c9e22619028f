"""Models describing source resolution rules and their results."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResolvedLocation(BaseModel):
    """Document and 1-based page a source string points at."""

    model_config = ConfigDict(frozen=True)

    document_name: str
    page: Optional[int] = None


class PhraseRule(BaseModel):
    """Curated literal phrase mapped to a page of the default document."""

    phrase: str = Field(..., min_length=1)
    page: int = Field(..., ge=1)

    def matches(self, lowered: str) -> bool:
        return self.phrase.lower() in lowered


class TermClause(BaseModel):
    """Conjunction of synonym groups.

    Each inner list is a group of interchangeable terms; the clause holds when
    every group has at least one of its terms in the text.
    """

    all_of: List[List[str]] = Field(..., min_length=1)

    def matches(self, lowered: str) -> bool:
        return all(
            any(term.lower() in lowered for term in group) for group in self.all_of
        )


class TopicRule(BaseModel):
    """Keyword fallback rule; holds when any of its clauses holds."""

    name: str
    page: int = Field(..., ge=1)
    clauses: List[TermClause] = Field(..., min_length=1)

    def matches(self, lowered: str) -> bool:
        return any(clause.matches(lowered) for clause in self.clauses)


class ResolverConfig(BaseModel):
    """Rule tables and document settings consumed by the resolver.

    The order of ``phrases`` and ``topics`` is the evaluation order.
    """

    default_document: str = Field(..., min_length=1)
    base_path: str = "/pdfs"
    document_suffix: str = Field(default=".pdf", min_length=1)
    phrases: List[PhraseRule] = Field(default_factory=list)
    topics: List[TopicRule] = Field(default_factory=list)


class SourceLookup(BaseModel):
    """Everything the dashboard needs to render a single source."""

    source: str
    location: ResolvedLocation
    display_name: str
    viewer_link: Optional[str] = None
