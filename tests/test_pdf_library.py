"""Tests for the PDF library."""

import pytest

from chatchw.documents.pdf_library import DocumentNotFoundError, DocumentUnreadableError, PdfLibrary


def test_list_documents(pdf_root) -> None:
    assert PdfLibrary(pdf_root).list_documents() == ["guide.pdf", "sub/other.pdf"]


def test_list_documents_missing_root(tmp_path) -> None:
    assert PdfLibrary(tmp_path / "nope").list_documents() == []


def test_path_for_existing_document(pdf_root) -> None:
    path = PdfLibrary(pdf_root).path_for("sub/other.pdf")
    assert path.name == "other.pdf"


@pytest.mark.parametrize("name", ["", "missing.pdf", "../pdfs/guide.pdf/../../secret.pdf", "a\x00.pdf", "sub"])
def test_path_for_rejects_bad_names(pdf_root, name) -> None:
    with pytest.raises(DocumentNotFoundError):
        PdfLibrary(pdf_root).path_for(name)


def test_path_for_rejects_traversal(pdf_root) -> None:
    outside = pdf_root.parent / "outside.pdf"
    outside.write_bytes(b"%PDF-1.4")
    with pytest.raises(DocumentNotFoundError):
        PdfLibrary(pdf_root).path_for("../outside.pdf")


def test_page_count(pdf_root) -> None:
    assert PdfLibrary(pdf_root).page_count("guide.pdf") == 3


@pytest.mark.parametrize("page, expected", [(None, 1), (0, 1), (-4, 1), (2, 2), (10, 3)])
def test_clamp_page(pdf_root, page, expected) -> None:
    assert PdfLibrary(pdf_root).clamp_page("guide.pdf", page) == expected


def test_damaged_pdf_is_reported_as_unreadable(pdf_root) -> None:
    (pdf_root / "bad.pdf").write_bytes(b"not a pdf")
    library = PdfLibrary(pdf_root)
    with pytest.raises(DocumentUnreadableError):
        library.page_count("bad.pdf")
    with pytest.raises(DocumentUnreadableError):
        library.clamp_page("bad.pdf", 2)
