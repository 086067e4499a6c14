"""FastAPI server that renders stored documents to PDF on request."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date
from typing import Any, Literal

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from docsmith.domain.document import DOCUMENT_TYPES, CompanyProfile, DocumentType
from docsmith.domain.tax import LineItemValidationError
from docsmith.export import ExportedDocument, Rasterizer, RenderError, export_document
from docsmith.normalize import normalize_document
from docsmith.runtime.document_source import fetch_document_record, fetch_statement_record, load_company_profile
from docsmith.runtime.logging import get_logger
from docsmith.runtime.notifications import ErrorNotifier, LoggingSink
from docsmith.runtime.settings import Settings, load_settings
from docsmith.runtime.store import DocumentNotFound, DocumentStore, PostgrestStore, StoreError

logger = get_logger(__name__)

Disposition = Literal["inline", "attachment"]

router = APIRouter()


class _HTTPFailure(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_response(request: Request, failure: _HTTPFailure) -> JSONResponse:
    notifier: ErrorNotifier = request.app.state.notifier
    notifier.error(failure.message)
    return JSONResponse({"status": "error", "message": failure.message}, status_code=failure.status_code)


def _require_store(request: Request) -> DocumentStore:
    store: DocumentStore | None = request.app.state.store
    if store is None:
        raise _HTTPFailure(503, "Data store is not configured")
    return store


def _fetch(loader: Any, *args: Any) -> Any:
    try:
        return loader(*args)
    except DocumentNotFound as e:
        raise _HTTPFailure(404, str(e)) from e
    except StoreError as e:
        raise _HTTPFailure(502, f"Data store error: {e}") from e


async def _render(
    request: Request,
    record: dict[str, Any],
    doc_type: DocumentType,
    company: CompanyProfile,
) -> ExportedDocument:
    settings: Settings = request.app.state.settings
    rasterizer: Rasterizer | None = request.app.state.rasterizer
    try:
        document = normalize_document(record, doc_type, company=company)
    except LineItemValidationError as e:
        raise _HTTPFailure(422, f"Invalid line item: {e}") from e
    try:
        return await export_document(document, company=company, rasterizer=rasterizer, currency=settings.currency)
    except RenderError as e:
        raise _HTTPFailure(500, str(e)) from e
    except Exception as e:
        logger.exception("Exporting %s %s failed", document.type, document.number)
        raise _HTTPFailure(500, f"Failed to render PDF content: {e}") from e


def _pdf_response(exported: ExportedDocument, disposition: Disposition) -> Response:
    return Response(
        content=exported.content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'{disposition}; filename="{exported.filename}"'},
    )


@router.get("/documents/{doc_type}/{document_id}.pdf")
async def document_pdf(
    request: Request,
    doc_type: str,
    document_id: str,
    disposition: Disposition = "attachment",
) -> Response:
    """Render one stored document; statements use their own route."""
    try:
        if doc_type not in DOCUMENT_TYPES or doc_type == "statement":
            raise _HTTPFailure(404, f"Unknown document type: {doc_type}")
        store = _require_store(request)
        record = await run_in_threadpool(_fetch, fetch_document_record, store, doc_type, document_id)
        company = await run_in_threadpool(load_company_profile, store, request.app.state.settings.company)
        exported = await _render(request, record, doc_type, company)  # type: ignore[arg-type]
    except _HTTPFailure as failure:
        return _error_response(request, failure)
    return _pdf_response(exported, disposition)


@router.get("/statements/{customer_id}.pdf")
async def statement_pdf(
    request: Request,
    customer_id: str,
    statement_date: date | None = None,
    disposition: Disposition = "attachment",
) -> Response:
    """Render a customer statement as of `statement_date` (default today)."""
    try:
        store = _require_store(request)
        record = await run_in_threadpool(_fetch, fetch_statement_record, store, customer_id, statement_date)
        company = await run_in_threadpool(load_company_profile, store, request.app.state.settings.company)
        exported = await _render(request, record, "statement", company)
    except _HTTPFailure as failure:
        return _error_response(request, failure)
    return _pdf_response(exported, disposition)


@router.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


def create_app(
    *,
    settings: Settings | None = None,
    store: DocumentStore | None = None,
    rasterizer: Rasterizer | None = None,
    notifier: ErrorNotifier | None = None,
) -> FastAPI:
    """
    Build the application.

    Without an explicit `store`, one is opened on startup from the store
    settings (when configured) and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owned: PostgrestStore | None = None
        store_settings = app.state.settings.store
        if app.state.store is None and store_settings.configured:
            owned = PostgrestStore(store_settings.url, store_settings.key)
            app.state.store = owned
            logger.info("Connected document store at %s", store_settings.url)
        try:
            yield
        finally:
            if owned is not None:
                owned.close()

    app = FastAPI(title="docsmith", lifespan=lifespan)
    app.state.settings = settings or load_settings()
    app.state.store = store
    app.state.rasterizer = rasterizer
    app.state.notifier = notifier or ErrorNotifier(LoggingSink())
    app.include_router(router)
    return app
