"""Shared fixtures."""

from pathlib import Path

import fitz
import pytest

from chatchw.config import Settings
from chatchw.models.source import ResolverConfig, TermClause, TopicRule
from chatchw.resolver.rules import build_default_config
from chatchw.resolver.source_resolver import SourceResolver


def write_pdf(path: Path, pages: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    doc = fitz.open()
    for number in range(1, pages + 1):
        page = doc.new_page()
        page.insert_text((72, 72), f"Page {number}")
    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, default_document="who-guide.pdf", pdf_base_path="/pdfs")


@pytest.fixture
def resolver(test_settings) -> SourceResolver:
    return SourceResolver(build_default_config(test_settings))


@pytest.fixture
def numbered_resolver() -> SourceResolver:
    """Resolver whose topic rules each map to a distinct page."""
    diarrhoea = ["diarrhea", "arrhoea"]
    topics = [
        TopicRule(name="a", page=101, clauses=[TermClause(all_of=[diarrhoea, ["antibiotic", "suggest against"]])]),
        TopicRule(name="b", page=102, clauses=[TermClause(all_of=[diarrhoea, ["treatment", "management"]])]),
        TopicRule(name="c", page=103, clauses=[TermClause(all_of=[diarrhoea])]),
        TopicRule(name="d", page=104, clauses=[TermClause(all_of=[["evidence"], ["decision", "framework"]])]),
        TopicRule(
            name="e",
            page=105,
            clauses=[TermClause(all_of=[["equity"]]), TermClause(all_of=[["cost"], ["policy"]])],
        ),
        TopicRule(name="f", page=106, clauses=[TermClause(all_of=[["stool", "output"]])]),
    ]
    return SourceResolver(ResolverConfig(default_document="corpus.pdf", topics=topics))


@pytest.fixture
def pdf_root(tmp_path) -> Path:
    root = tmp_path / "pdfs"
    write_pdf(root / "guide.pdf", pages=3)
    write_pdf(root / "sub" / "other.pdf", pages=1)
    (root / "notes.txt").write_text("not a pdf", encoding="utf-8")
    return root
