"""Core domain models for financial documents.

This package provides the canonical document representation and the
tax/total calculator:
- Document, LineItem, DocumentTotals: canonical document shape
- calculate_line, calculate_document_totals: money math

Usage:
    from docsmith.domain import Document, LineItem, calculate_document_totals
"""

from docsmith.domain.company import DEFAULT_COMPANY
from docsmith.domain.document import (
    DOCUMENT_TITLES,
    DOCUMENT_TYPES,
    AgingSummary,
    CompanyProfile,
    DeliveryInfo,
    DeliveryLine,
    Document,
    DocumentTotals,
    DocumentType,
    LineAmounts,
    LineItem,
    Party,
    RemittanceLine,
    StatementLine,
    document_title,
)
from docsmith.domain.tax import (
    LineItemValidationError,
    apply_line_amounts,
    calculate_document_totals,
    calculate_line,
    fixed_totals,
    quantize_money,
)

__all__ = [
    "DEFAULT_COMPANY",
    "DOCUMENT_TITLES",
    "DOCUMENT_TYPES",
    "AgingSummary",
    "CompanyProfile",
    "DeliveryInfo",
    "DeliveryLine",
    "Document",
    "DocumentTotals",
    "DocumentType",
    "LineAmounts",
    "LineItem",
    "Party",
    "RemittanceLine",
    "StatementLine",
    "document_title",
    "LineItemValidationError",
    "apply_line_amounts",
    "calculate_document_totals",
    "calculate_line",
    "fixed_totals",
    "quantize_money",
]
