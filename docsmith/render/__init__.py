"""HTML rendering of canonical documents.

Usage:
    from docsmith.render import build_document_html
    html = build_document_html(document, company)
"""

from docsmith.render.formatting import DEFAULT_CURRENCY, format_currency, format_date, format_quantity
from docsmith.render.html_builder import PAGE_ROOT_CLASS, TERMS_SECTION_CLASS, build_document_html
from docsmith.render.sanitize import sanitize_text
from docsmith.render.templates import QUOTATION_FOOTER, TEMPLATES, Column, DocumentTemplate, template_for

__all__ = [
    "DEFAULT_CURRENCY",
    "PAGE_ROOT_CLASS",
    "QUOTATION_FOOTER",
    "TEMPLATES",
    "TERMS_SECTION_CLASS",
    "Column",
    "DocumentTemplate",
    "build_document_html",
    "format_currency",
    "format_date",
    "format_quantity",
    "sanitize_text",
    "template_for",
]
