"""PDF document access."""

from .pdf_library import DocumentNotFoundError, DocumentUnreadableError, PdfLibrary

__all__ = ["DocumentNotFoundError", "DocumentUnreadableError", "PdfLibrary"]
