"""FastAPI application entry point."""

from __future__ import annotations

import html
import logging
from typing import List, Optional
from urllib.parse import quote

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import FileResponse, HTMLResponse, Response

from chatchw.config import settings
from chatchw.documents.pdf_library import DocumentNotFoundError, DocumentUnreadableError, PdfLibrary
from chatchw.exports.export_utils import render_export
from chatchw.llm.page_estimator import PageEstimator
from chatchw.models.estimate import EstimateRequest, PageEstimate
from chatchw.models.grouping import SourceGroup
from chatchw.models.session import ExportRequest, RagChunk
from chatchw.models.source import SourceLookup
from chatchw.resolver.grouping import group_chunks_by_source
from chatchw.resolver.source_resolver import URI_COMPONENT_SAFE, SourceResolver, get_default_resolver

logger = logging.getLogger(__name__)

app = FastAPI(
    title="ChatCHW Source Viewer",
    description="Resolve RAG chunk sources to guideline PDF pages",
    version="0.1.0",
)

VIEWER_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <title>{title}</title>
  <style>
    body, html {{ margin: 0; padding: 0; height: 100%; }}
  </style>
</head>
<body>
  <iframe id="pdf-viewer" src="{src}" width="100%" height="100%" frameborder="0"></iframe>
</body>
</html>
"""


def get_resolver() -> SourceResolver:
    return get_default_resolver()


def get_library() -> PdfLibrary:
    return PdfLibrary()


def get_estimator() -> PageEstimator:
    try:
        return PageEstimator()
    except ValueError as exc:
        raise HTTPException(status_code=503, detail="Page estimation is not configured.") from exc


@app.get("/health")
def health() -> dict[str, str]:
    """Simple readiness probe."""
    return {"status": "ok"}


@app.get("/sources/resolve", response_model=SourceLookup)
def resolve(
    source: str = Query(default=""),
    resolver: SourceResolver = Depends(get_resolver),
) -> SourceLookup:
    """Resolve one source string to its document, page and viewer link."""
    return SourceLookup(
        source=source,
        location=resolver.resolve(source),
        display_name=resolver.display_name(source),
        viewer_link=resolver.build_viewer_link(source),
    )


@app.post("/sources/groups", response_model=List[SourceGroup])
def group_sources(
    chunks: List[RagChunk],
    resolver: SourceResolver = Depends(get_resolver),
) -> List[SourceGroup]:
    return group_chunks_by_source(chunks, resolver=resolver)


@app.post("/sources/estimate", response_model=PageEstimate)
def estimate_page(
    payload: EstimateRequest,
    estimator: PageEstimator = Depends(get_estimator),
) -> PageEstimate:
    return estimator.estimate(payload.text)


@app.get("/documents")
def list_documents(library: PdfLibrary = Depends(get_library)) -> dict[str, list[str]]:
    return {"documents": library.list_documents()}


@app.get("/pdfs/{name:path}")
def get_pdf(name: str, library: PdfLibrary = Depends(get_library)) -> FileResponse:
    try:
        path = library.path_for(name)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=404, detail="PDF not found") from exc
    return FileResponse(path, media_type="application/pdf")


@app.get("/viewer", response_class=HTMLResponse)
def viewer(
    file: Optional[str] = None,
    page: Optional[int] = None,
    library: PdfLibrary = Depends(get_library),
) -> HTMLResponse:
    """Embed a PDF opened at the requested page."""
    name = file or settings.default_document
    try:
        target_page = library.clamp_page(name, page)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=404, detail="PDF not found") from exc
    except DocumentUnreadableError as exc:
        raise HTTPException(status_code=422, detail="PDF could not be read") from exc
    base = settings.pdf_base_path.rstrip("/")
    escaped = quote(name, safe="/" + URI_COMPONENT_SAFE)
    src = f"{base}/{escaped}#page={target_page}"
    content = VIEWER_TEMPLATE.format(
        title=html.escape(f"{name} - Page {target_page}"),
        src=html.escape(src, quote=True),
    )
    return HTMLResponse(content)


@app.post("/export")
def export(payload: ExportRequest) -> Response:
    content, filename, media_type = render_export(payload)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
