"""Document command handlers used by the unified CLI."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any

from docsmith.application.documents import (
    DocumentExportResult,
    DocumentRequest,
    run_document_export,
    run_html_render,
)
from docsmith.runtime import ErrorNotifier, PostgrestStore, Settings, get_logger, load_settings
from docsmith.runtime.notifications import Level

logger = get_logger(__name__)


class ConsoleSink:
    """Print notifications line by line, errors to stderr."""

    def notify(self, level: Level, message: str, description: str | None = None) -> None:
        stream = sys.stderr if level in ("error", "warning") else sys.stdout
        for line in message.splitlines():
            print(line, file=stream)
        if description:
            print(description, file=stream)


def _notifier() -> ErrorNotifier:
    return ErrorNotifier(ConsoleSink())


def _read_record(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        record = json.load(f)
    if not isinstance(record, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return record


def _parse_date(raw: str | None) -> date | None:
    return date.fromisoformat(raw) if raw else None


def _open_store(settings: Settings) -> PostgrestStore | None:
    if not settings.store.configured:
        return None
    return PostgrestStore(settings.store.url, settings.store.key)


def _report_export(result: DocumentExportResult, notifier: ErrorNotifier) -> int:
    if result.status == "exported":
        assert result.exported is not None
        notifier.success(f"Saved {result.exported.filename} ({result.exported.page_count} pages): {result.path}")
        return 0
    notifier.error(result.error or result.status)
    return 1


def _export(args: argparse.Namespace, request: DocumentRequest, *, needs_store: bool) -> int:
    settings = load_settings(args.config)
    store = _open_store(settings) if needs_store else None
    try:
        result = run_document_export(
            request,
            settings=settings,
            store=store,
            disposition="inline" if args.inline else "download",
            output_dir=Path(args.output_dir) if args.output_dir else None,
        )
    finally:
        if store is not None:
            store.close()
    return _report_export(result, _notifier())


def cmd_render(args: argparse.Namespace) -> int:
    """Render a local JSON record to PDF."""
    try:
        record = _read_record(Path(args.record))
    except (OSError, ValueError) as exc:
        _notifier().error(f"Could not read record: {exc}")
        return 1
    request = DocumentRequest(doc_type=args.doc_type, record=record, statement_date=_parse_date(args.date))
    return _export(args, request, needs_store=False)


def cmd_html(args: argparse.Namespace) -> int:
    """Print the markup for a local JSON record."""
    try:
        record = _read_record(Path(args.record))
    except (OSError, ValueError) as exc:
        _notifier().error(f"Could not read record: {exc}")
        return 1
    loaded, html = run_html_render(
        DocumentRequest(doc_type=args.doc_type, record=record, statement_date=_parse_date(args.date)),
        settings=load_settings(args.config),
    )
    if html is None:
        _notifier().error(loaded.error or loaded.status)
        return 1
    sys.stdout.write(html)
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Fetch a stored document by id and export it."""
    return _export(args, DocumentRequest(doc_type=args.doc_type, document_id=args.document_id), needs_store=True)


def cmd_statement(args: argparse.Namespace) -> int:
    """Export a customer statement built from stored invoices and payments."""
    request = DocumentRequest(
        doc_type="statement",
        document_id=args.customer_id,
        statement_date=_parse_date(args.date),
    )
    return _export(args, request, needs_store=True)


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the PDF server."""
    import uvicorn

    from docsmith.runtime.document_server import create_app

    app = create_app(settings=load_settings(args.config))
    print(f"Starting document server on {args.host}:{args.port}")
    print(f"PDF endpoints: http://{args.host}:{args.port}/documents/<type>/<id>.pdf | /statements/<customer_id>.pdf")
    print("Press Ctrl+C to stop")

    uvicorn.run(app, host=args.host, port=args.port)
    return 0
