#!/usr/bin/env python3

import argparse
from collections.abc import Sequence

from docsmith.domain.document import DOCUMENT_TYPES

_FETCHABLE_TYPES = [doc_type for doc_type in DOCUMENT_TYPES if doc_type != "statement"]


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--output-dir", default=None, help="Directory to save the PDF to (default: exports/)")
    parser.add_argument("--inline", action="store_true", help="Open the PDF in a viewer instead of saving it")


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Financial document PDF utilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  render <type> <record.json>  Render a local JSON record to PDF
  html <type> <record.json>    Print the document markup
  export <type> <id>           Export a stored document by id
  statement <customer_id>      Export a customer statement
  serve [--host] [--port]      Start the PDF server

Types:
  quotation invoice proforma credit_note delivery statement receipt remittance lpo

Environment:
  DOCSMITH_STORE_URL, DOCSMITH_STORE_KEY  data store for export/statement/serve
  DOCSMITH_HOME                           project root holding config/ and exports/
  DOCSMITH_LOG_LEVEL                      DEBUG, INFO, WARNING or ERROR
""",
    )
    parser.add_argument("--config", default=None, help="Path to company.toml (default: config/company.toml)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Render a local JSON record to PDF")
    render_parser.add_argument("doc_type", choices=DOCUMENT_TYPES, help="Document type")
    render_parser.add_argument("record", help="Path to a JSON record")
    render_parser.add_argument("--date", default=None, help="Statement date (YYYY-MM-DD)")
    _add_output_options(render_parser)

    html_parser = subparsers.add_parser("html", help="Print document markup for a local JSON record")
    html_parser.add_argument("doc_type", choices=DOCUMENT_TYPES, help="Document type")
    html_parser.add_argument("record", help="Path to a JSON record")
    html_parser.add_argument("--date", default=None, help="Statement date (YYYY-MM-DD)")

    export_parser = subparsers.add_parser("export", help="Export a stored document by id")
    export_parser.add_argument("doc_type", choices=_FETCHABLE_TYPES, help="Document type")
    export_parser.add_argument("document_id", help="Document id in the data store")
    _add_output_options(export_parser)

    statement_parser = subparsers.add_parser("statement", help="Export a customer statement")
    statement_parser.add_argument("customer_id", help="Customer id in the data store")
    statement_parser.add_argument("--date", default=None, help="Statement date (YYYY-MM-DD, default: today)")
    _add_output_options(statement_parser)

    serve_parser = subparsers.add_parser("serve", help="Start the PDF server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    from docsmith.cli import documents

    if getattr(args, "date", None):
        try:
            documents._parse_date(args.date)
        except ValueError:
            print(f"Invalid date: {args.date} (expected YYYY-MM-DD)")
            return 1

    handlers = {
        "render": documents.cmd_render,
        "html": documents.cmd_html,
        "export": documents.cmd_export,
        "statement": documents.cmd_statement,
        "serve": documents.cmd_serve,
    }
    handler = handlers.get(args.command)
    if handler is None:
        return 1
    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
