"""Document export workflow orchestration."""

from __future__ import annotations

import asyncio
import webbrowser
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Literal

from docsmith.domain.document import CompanyProfile, Document, DocumentType
from docsmith.domain.tax import LineItemValidationError
from docsmith.export import (
    DisplaySurfaceBlocked,
    Disposition,
    ExportedDocument,
    Rasterizer,
    RenderError,
    deliver,
    export_document,
)
from docsmith.normalize import normalize_document
from docsmith.render import build_document_html
from docsmith.runtime import get_logger, get_paths
from docsmith.runtime.document_source import fetch_document_record, fetch_statement_record, load_company_profile
from docsmith.runtime.settings import Settings
from docsmith.runtime.store import DocumentNotFound, DocumentStore, StoreError

logger = get_logger(__name__)

LoadStatus = Literal["loaded", "store_not_configured", "not_found", "store_error", "invalid_record"]
ExportStatus = Literal[
    "exported",
    "store_not_configured",
    "not_found",
    "store_error",
    "invalid_record",
    "render_failed",
    "display_blocked",
    "save_failed",
]


@dataclass(frozen=True)
class DocumentRequest:
    """Inputs for loading one document.

    Exactly one of `record` (a local raw record) or `document_id` (a store
    lookup) is used; `record` wins when both are given. For statements the
    id is the customer id.
    """

    doc_type: DocumentType
    document_id: str | None = None
    record: Mapping[str, Any] | None = None
    statement_date: date | None = None
    today: date | None = None


@dataclass(frozen=True)
class DocumentLoadResult:
    status: LoadStatus
    document: Document | None = None
    company: CompanyProfile | None = None
    error: str | None = None


@dataclass(frozen=True)
class DocumentExportResult:
    """Outcome from the export workflow."""

    status: ExportStatus
    document: Document | None = None
    exported: ExportedDocument | None = None
    path: Path | None = None
    error: str | None = None


def load_document(
    request: DocumentRequest,
    *,
    settings: Settings,
    store: DocumentStore | None = None,
) -> DocumentLoadResult:
    """Fetch (or take) the raw record and normalize it."""
    company = settings.company
    record = request.record
    if record is None:
        if store is None:
            return DocumentLoadResult(
                status="store_not_configured",
                error="Data store is not configured. Set DOCSMITH_STORE_URL and DOCSMITH_STORE_KEY.",
            )
        if not request.document_id:
            return DocumentLoadResult(status="invalid_record", error="A document id is required.")
        try:
            if request.doc_type == "statement":
                record = fetch_statement_record(store, request.document_id, request.statement_date)
            else:
                record = fetch_document_record(store, request.doc_type, request.document_id)
        except DocumentNotFound as exc:
            return DocumentLoadResult(status="not_found", error=str(exc))
        except StoreError as exc:
            return DocumentLoadResult(status="store_error", error=f"Data store error: {exc}")
        company = load_company_profile(store, settings.company)
    elif request.doc_type == "statement" and request.statement_date is not None:
        record = {**record, "statement_date": request.statement_date.isoformat()}

    try:
        document = normalize_document(record, request.doc_type, company=company, today=request.today)
    except LineItemValidationError as exc:
        return DocumentLoadResult(status="invalid_record", error=f"Invalid line item: {exc}")

    return DocumentLoadResult(status="loaded", document=document, company=company)


def run_html_render(
    request: DocumentRequest,
    *,
    settings: Settings,
    store: DocumentStore | None = None,
) -> tuple[DocumentLoadResult, str | None]:
    """Load a document and return its markup, or the failed load result."""
    loaded = load_document(request, settings=settings, store=store)
    if loaded.document is None:
        return loaded, None
    return loaded, build_document_html(loaded.document, loaded.company, currency=settings.currency)


def run_document_export(
    request: DocumentRequest,
    *,
    settings: Settings,
    store: DocumentStore | None = None,
    disposition: Disposition = "download",
    output_dir: Path | None = None,
    rasterizer: Rasterizer | None = None,
    opener: Callable[[str], bool] = webbrowser.open,
) -> DocumentExportResult:
    """Run export flow: load -> normalize -> render -> paginate -> deliver."""
    loaded = load_document(request, settings=settings, store=store)
    if loaded.document is None:
        return DocumentExportResult(status=loaded.status, error=loaded.error)  # type: ignore[arg-type]
    document = loaded.document

    try:
        exported = asyncio.run(
            export_document(
                document,
                company=loaded.company,
                rasterizer=rasterizer,
                currency=settings.currency,
            )
        )
    except RenderError as exc:
        logger.error("Rendering %s %s failed: %s", document.type, document.number, exc)
        return DocumentExportResult(status="render_failed", document=document, error=str(exc))
    except Exception as exc:
        logger.exception("Exporting %s %s failed", document.type, document.number)
        return DocumentExportResult(
            status="render_failed",
            document=document,
            error=f"Failed to render PDF content: {exc}",
        )

    try:
        path = deliver(exported, disposition, output_dir or get_paths().exports, opener=opener)
    except DisplaySurfaceBlocked as exc:
        return DocumentExportResult(status="display_blocked", document=document, exported=exported, error=str(exc))
    except OSError as exc:
        logger.error("Saving %s failed: %s", exported.filename, exc)
        return DocumentExportResult(
            status="save_failed",
            document=document,
            exported=exported,
            error=f"Could not save {exported.filename}: {exc}",
        )

    return DocumentExportResult(status="exported", document=document, exported=exported, path=path)
