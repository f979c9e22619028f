"""Access to the PDF files the viewer links point at."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import fitz

from chatchw.config import settings

logger = logging.getLogger(__name__)


class DocumentNotFoundError(FileNotFoundError):
    """Raised for unknown documents or names that leave the library root."""


class DocumentUnreadableError(ValueError):
    """Raised when a document exists but PyMuPDF cannot open it."""


class PdfLibrary:
    """Read-only view over the PDF directory."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = Path(root or settings.pdf_root_path)

    def list_documents(self) -> List[str]:
        if not self.root.exists():
            logger.warning("PDF root %s does not exist", self.root)
            return []
        root = self.root.resolve()
        names = [
            pdf.resolve().relative_to(root).as_posix()
            for pdf in self.root.rglob("*")
            if pdf.is_file() and pdf.suffix.lower() == settings.document_suffix.lower()
        ]
        return sorted(names)

    def path_for(self, name: str) -> Path:
        """Resolve ``name`` inside the root, refusing traversal."""
        if not name or "\x00" in name:
            raise DocumentNotFoundError(f"Invalid document name: {name!r}")
        root = self.root.resolve()
        candidate = (root / name).resolve()
        if candidate != root and root not in candidate.parents:
            raise DocumentNotFoundError(f"Document {name!r} is outside the PDF root.")
        if not candidate.is_file():
            raise DocumentNotFoundError(f"Document {name!r} not found in {root}.")
        return candidate

    def page_count(self, name: str) -> int:
        path = self.path_for(name)
        try:
            doc = fitz.open(path)
        except fitz.FileDataError as exc:
            logger.error("Failed to open %s: %s", path, exc)
            raise DocumentUnreadableError(f"Document {name!r} is not a readable PDF.") from exc
        try:
            return doc.page_count
        finally:
            doc.close()

    def clamp_page(self, name: str, page: Optional[int]) -> int:
        """Limit ``page`` to the pages the document actually has."""
        total = self.page_count(name)
        if not page or page < 1:
            return 1
        if total and page > total:
            logger.debug("Page %s beyond %s pages of %s; clamping", page, total, name)
            return total
        return page
