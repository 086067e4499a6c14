"""Map loosely typed store records onto the canonical Document.

- normalize_document: one entry point for all nine document types
- normalize_line_item: single item row with recomputed amounts
- map_delivery_note_for_display / map_delivery_note_for_storage: legacy
  delivery-note column names

Usage:
    from docsmith.normalize import normalize_document
    document = normalize_document(record, "invoice")
"""

from docsmith.normalize.aliases import DOCUMENT_ALIASES, UNKNOWN_CUSTOMER, UNKNOWN_SUPPLIER, aliases_for
from docsmith.normalize.fields import lookup, resolve, to_date, to_decimal, with_collection_aliases
from docsmith.normalize.mapper import (
    PRICED_TYPES,
    map_delivery_note_for_display,
    map_delivery_note_for_storage,
    normalize_document,
    normalize_line_item,
    recompute_document,
    related_invoice_number,
)
from docsmith.normalize.statement import aging_summary, build_statement_lines

__all__ = [
    "DOCUMENT_ALIASES",
    "PRICED_TYPES",
    "UNKNOWN_CUSTOMER",
    "UNKNOWN_SUPPLIER",
    "aging_summary",
    "aliases_for",
    "build_statement_lines",
    "lookup",
    "map_delivery_note_for_display",
    "map_delivery_note_for_storage",
    "normalize_document",
    "normalize_line_item",
    "recompute_document",
    "related_invoice_number",
    "resolve",
    "to_date",
    "to_decimal",
    "with_collection_aliases",
]
