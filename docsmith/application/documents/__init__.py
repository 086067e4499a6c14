"""Document workflow orchestration APIs."""

from docsmith.application.documents.export import (
    DocumentExportResult,
    DocumentLoadResult,
    DocumentRequest,
    load_document,
    run_document_export,
    run_html_render,
)

__all__ = [
    "DocumentExportResult",
    "DocumentLoadResult",
    "DocumentRequest",
    "load_document",
    "run_document_export",
    "run_html_render",
]
