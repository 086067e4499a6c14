"""Build the printable HTML page for any document type.

A single Jinja2 skeleton (letterhead, counterparty, metadata, table, totals,
notes/terms, bank details) is filled from the type's DocumentTemplate.
Autoescaping is on and every free-text value passes through the
``sanitize`` filter. Output depends only on the inputs, so the same
document always yields byte-identical markup.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from jinja2 import BaseLoader, Environment, select_autoescape

from docsmith.domain.company import DEFAULT_COMPANY
from docsmith.domain.document import ZERO, CompanyProfile, Document
from docsmith.domain.tax import quantize_money
from docsmith.render.formatting import DEFAULT_CURRENCY, format_currency, format_date, format_quantity
from docsmith.render.sanitize import sanitize_text
from docsmith.render.templates import Column, DocumentTemplate, template_for

PAGE_ROOT_CLASS = "page"
TERMS_SECTION_CLASS = "invoice-terms-section"

_AMOUNT_KEYS = frozenset(
    {
        "unit_price",
        "line_total",
        "discount_amount",
        "tax_amount",
        "debit",
        "credit",
        "balance",
        "invoice_amount",
        "credit_amount",
        "payment_amount",
    }
)
_TEXT_KEYS = frozenset({"description", "product_name"})
_BLANK_LINE = "_________________________"


STYLESHEET = """
@page { size: A4; margin: 0; }
* { box-sizing: border-box; }
body { font-family: Arial, sans-serif; margin: 0; padding: 0; color: #333; line-height: 1.4; font-size: 12px; background: white; }
.page { width: 210mm; min-height: 297mm; margin: 0 auto; background: white; padding: 20mm; position: relative; }
.watermark { position: absolute; top: 50%; left: 50%; transform: translate(-50%, -50%) rotate(-45deg); font-size: 72px; color: rgba(0, 0, 0, 0.06); font-weight: bold; z-index: 0; pointer-events: none; text-transform: uppercase; letter-spacing: 5px; }
.header { margin-bottom: 30px; padding-bottom: 20px; border-bottom: 1px solid #D1D5DB; }
.header-row { display: flex; justify-content: space-between; align-items: flex-start; gap: 16px; margin-top: 6px; }
.logo-row { justify-content: flex-end; }
.logo { width: 75%; max-height: 220px; margin-bottom: 15px; overflow: hidden; }
.logo img { width: 100%; height: auto; object-fit: contain; }
.party-left, .party-right { flex: 1 1 0; min-width: 0; }
.party-right { text-align: right; }
.client-label { font-size: 12px; font-weight: bold; color: #5B21B6; text-transform: uppercase; margin-bottom: 4px; }
.customer-name { font-size: 16px; font-weight: bold; margin-bottom: 8px; color: #212529; }
.customer-details, .company-details { font-size: 11px; line-height: 1.6; color: #444; }
.company-name { font-size: 18px; font-weight: bold; color: #111827; }
.document-info { flex: 0 0 380px; max-width: 380px; margin-left: auto; }
.document-details table { width: 100%; border-collapse: collapse; }
.document-details td { padding: 4px 0; }
.document-details .label { font-weight: 600; color: #4B5563; width: 50%; }
.document-details .value { text-align: right; color: #111827; font-size: 13px; font-weight: 700; }
.document-number { font-size: 24px; font-weight: 700; color: #5B21B6; margin-top: 10px; }
.section-title, .section-subtitle { font-weight: bold; color: #111827; text-transform: uppercase; margin: 0 0 10px 0; }
.delivery-info-section { margin: 25px 0; padding: 20px; background: #f8f9fa; border: 1px solid #e9ecef; }
.delivery-row { display: flex; gap: 20px; margin-bottom: 12px; }
.delivery-field { flex: 1; min-width: 0; }
.field-label { font-size: 10px; font-weight: bold; text-transform: uppercase; }
.items-table { width: 100%; border-collapse: collapse; margin: 20px 0; font-size: 11px; border: 1px solid #E5E7EB; }
.items-table thead { background: #F3F4F6; }
.items-table th { padding: 12px 8px; font-size: 10px; text-transform: uppercase; }
.items-table td { padding: 10px 8px; border-bottom: 1px solid #e9ecef; text-align: center; vertical-align: top; }
.description-cell { text-align: left !important; word-wrap: break-word; }
.amount-cell { text-align: right !important; }
.status-complete, .status-partial { font-weight: bold; font-size: 10px; }
.totals-section { margin-top: 20px; display: flex; justify-content: flex-end; }
.totals-table { width: 300px; border-collapse: collapse; font-size: 12px; }
.totals-table td { padding: 8px 15px; }
.totals-table .amount { text-align: right; font-weight: 600; }
.totals-table .total-row { border-top: 1px solid #111827; background: #f8f9fa; font-weight: bold; }
.aging-section { margin-top: 20px; }
.aging-table { width: 100%; border-collapse: collapse; font-size: 11px; }
.aging-table th, .aging-table td { padding: 6px; border: 1px solid #e9ecef; text-align: center; }
.notes-section { margin-top: 30px; display: flex; gap: 20px; }
.notes, .terms { flex: 1; padding: 15px; background: #f8f9fa; border: 1px solid #e9ecef; }
.notes-content, .terms-content { font-size: 10px; line-height: 1.6; color: #666; white-space: pre-wrap; }
.signature-section { margin: 30px 0 20px 0; padding: 20px; border-top: 1px solid #e9ecef; }
.signature-row { display: flex; gap: 40px; }
.signature-box { flex: 1; text-align: center; }
.signature-line { font-weight: bold; border-bottom: 1px solid #333; margin: 20px 0 10px 0; min-height: 20px; }
.invoice-terms-section { margin: 30px 0 20px 0; page-break-before: always; }
.invoice-terms { padding: 20px; background: #f8f9fa; border: 1px solid #e9ecef; }
.invoice-bank-details { margin-top: 12px; font-size: 10px; color: #111827; font-weight: 600; line-height: 1.4; }
.invoice-bank-details .bank-line { margin: 6px 0; }
""".strip()

HTML_TEMPLATE = r"""<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<title>{{ title|sanitize }}</title>
<style>
{{ css|safe }}
</style>
</head>
<body>
<div class="{{ page_root_class }}">
{% macro lines(values) %}{% for line in values %}{% if not loop.first %}<br>{% endif %}{{ line|sanitize }}{% endfor %}{% endmacro %}
{% if template.watermark %}
<div class="watermark">{{ template.watermark }}</div>
{% endif %}
<div class="header">
<div class="header-row logo-row"><div class="logo">{% if company.logo_url %}<img src="{{ company.logo_url }}" alt="{{ company.name|sanitize }} Logo" />{% endif %}</div></div>
<div class="header-row party-row"><div class="party-left"><div class="client-label">{{ template.party_label }}</div><div class="customer-name">{{ party.name|sanitize }}</div><div class="customer-details">{{ lines(party_lines) }}</div></div><div class="party-right"><div class="company-details"><div class="company-name">{{ company.name|sanitize }}</div>{{ lines(company_lines) }}</div></div></div>
<div class="header-row meta-row"><div class="document-info"><div class="document-details"><table>{% for label, value in meta_rows %}<tr><td class="label">{{ label }}:</td><td class="value">{{ value|sanitize }}</td></tr>{% endfor %}</table></div></div></div>
<div class="document-number">{{ title|sanitize }}</div>
</div>
{% if delivery_rows %}
<div class="delivery-info-section"><div class="section-title">Delivery Information</div><div class="delivery-details">{% for pair in delivery_rows %}<div class="delivery-row">{% for label, value in pair %}<div class="delivery-field"><div class="field-label">{{ label }}:</div><div class="field-value">{{ lines(value.splitlines()) }}</div></div>{% endfor %}</div>{% endfor %}</div></div>
{% endif %}
{% if rows %}
<div class="items-section"><table class="items-table"><thead><tr>{% for column in columns %}<th style="width: {{ column.width }}%;">{{ column.header }}</th>{% endfor %}</tr></thead><tbody>{% for cells in rows %}<tr>{% for column in columns %}{% set cell = cells[column.key] %}<td class="{{ cell_class(column.key) }}">{% if column.key == "status" %}<span class="status-{{ cell|lower }}">{{ cell }}</span>{% elif column.key == "payment_amount" %}<strong>{{ cell }}</strong>{% else %}{{ cell|sanitize }}{% endif %}</td>{% endfor %}</tr>{% endfor %}</tbody></table></div>
{% endif %}
{% if totals_rows %}
<div class="totals-section"><table class="totals-table">{% for css_class, label, value in totals_rows %}<tr class="{{ css_class }}"><td class="label">{{ label }}</td><td class="amount">{{ value }}</td></tr>{% endfor %}</table></div>
{% endif %}
{% if aging_rows %}
<div class="aging-section"><div class="section-subtitle">Aging Summary</div><table class="aging-table"><thead><tr>{% for label, _ in aging_rows %}<th>{{ label }}</th>{% endfor %}</tr></thead><tbody><tr>{% for _, amount in aging_rows %}<td>{{ amount }}</td>{% endfor %}</tr></tbody></table></div>
{% endif %}
{% if signatures %}
<div class="signature-section"><div class="signature-row"><div class="signature-box"><div class="signature-label">Delivered By:</div><div class="signature-line">{{ signatures.delivered_by|sanitize }}</div><div class="signature-date">Date: {{ signatures.delivered_on }}</div></div><div class="signature-box"><div class="signature-label">Received By:</div><div class="signature-line">{{ signatures.received_by|sanitize }}</div><div class="signature-date">Date: __________</div></div></div></div>
{% endif %}
{% if document.notes or inline_terms %}
<div class="notes-section">{% if document.notes %}<div class="notes"><div class="section-subtitle">Notes</div><div class="notes-content">{{ document.notes|sanitize }}</div></div>{% endif %}{% if inline_terms %}<div class="terms"><div class="section-subtitle">Terms &amp; Conditions</div><div class="terms-content">{{ document.terms_and_conditions|sanitize }}</div></div>{% endif %}</div>
{% endif %}
{% if terms_page %}
<div class="{{ terms_section_class }}"><div class="invoice-terms"><div class="section-subtitle">Terms &amp; Conditions</div><div class="terms-content">{{ document.terms_and_conditions|sanitize }}</div></div></div>
{% endif %}
{% if bank_lines %}
<div class="invoice-bank-details">{% for line in bank_lines %}<div class="bank-line">{% if loop.first %}<strong>{{ line|sanitize }}</strong>{% else %}{{ line|sanitize }}{% endif %}</div>{% endfor %}</div>
{% endif %}
</div>
</body>
</html>
"""


def _is_set(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, Decimal):
        return value != ZERO
    return bool(value)


def _text_lines(value: Any) -> list[str]:
    return [line for line in str(value or "").splitlines() if line.strip()]


def visible_columns(template: DocumentTemplate, rows: Sequence[Any]) -> list[Column]:
    """Drop optional columns no row carries a value for."""
    return [
        column
        for column in template.columns
        if column.visible_when is None or any(_is_set(getattr(row, column.visible_when, None)) for row in rows)
    ]


def _table_rows(document: Document, template: DocumentTemplate) -> Sequence[Any]:
    if template.row_kind == "delivery":
        return document.delivery_lines
    if template.row_kind == "statement":
        return document.statement_lines
    if template.row_kind == "remittance":
        return document.allocations
    return document.items


def _optional_amount(value: Decimal | None, currency: str) -> str:
    return format_currency(value, currency) if _is_set(value) else ""


def _percentage(value: Decimal) -> str:
    return f"{quantize_money(value)}%" if value else ""


def _cells(kind: str, row: Any, index: int, currency: str) -> dict[str, str]:
    if kind == "delivery":
        return {
            "index": str(index + 1),
            "description": row.description,
            "quantity_ordered": format_quantity(row.quantity_ordered),
            "quantity_delivered": format_quantity(row.quantity_delivered),
            "unit_of_measure": row.unit_of_measure,
            "status": "Complete" if row.is_complete else "Partial",
        }
    if kind == "statement":
        return {
            "transaction_date": format_date(row.transaction_date),
            "reference": row.reference,
            "lpo_number": row.lpo_number,
            "description": row.description,
            "debit": _optional_amount(row.debit, currency),
            "credit": _optional_amount(row.credit, currency),
            "balance": format_currency(row.balance, currency),
        }
    if kind == "remittance":
        return {
            "document_date": format_date(row.document_date),
            "document_type": row.document_type,
            "document_number": row.document_number,
            "invoice_amount": _optional_amount(row.invoice_amount, currency),
            "credit_amount": _optional_amount(row.credit_amount, currency),
            "payment_amount": format_currency(row.payment_amount, currency),
        }
    # Priced line items, also used for receipt rows.
    return {
        "index": str(index + 1),
        "product_name": row.product_name,
        "description": row.description,
        "units": f"{format_quantity(row.quantity)} {row.unit_of_measure}",
        "unit_price": format_currency(row.unit_price, currency),
        "discount_percentage": _percentage(row.discount_percentage),
        "discount_amount": _optional_amount(row.discount_amount, currency),
        "tax_percentage": _percentage(row.tax_percentage),
        "tax_amount": _optional_amount(row.tax_amount, currency),
        "line_total": format_currency(row.line_total, currency),
    }


def cell_class(key: str) -> str:
    if key in _AMOUNT_KEYS:
        return "amount-cell"
    if key in _TEXT_KEYS:
        return "description-cell"
    return "center"


def _party_lines(document: Document) -> list[str]:
    party = document.party
    lines = _text_lines(party.address)
    lines.append(", ".join(part for part in (party.city, party.country) if part))
    lines.extend((party.phone, party.email))
    return [line for line in lines if line]


def _company_lines(company: CompanyProfile) -> list[str]:
    lines = _text_lines(company.address)
    lines.append(", ".join(part for part in (company.city, company.country) if part))
    labelled = (
        ("Tel", company.phone),
        ("Email", company.email),
        ("PIN", company.tax_number),
        ("Reg No", company.registration_number),
    )
    lines.extend(f"{label}: {value}" for label, value in labelled if value)
    return [line for line in lines if line]


def _meta_rows(document: Document, template: DocumentTemplate, currency: str) -> list[tuple[str, str]]:
    rows = [(template.date_label, format_date(document.date))]
    if document.due_date:
        rows.append((template.due_date_label, format_date(document.due_date)))
    if document.valid_until:
        rows.append(("Valid Until", format_date(document.valid_until)))
    if document.lpo_number:
        rows.append(("LPO No.", document.lpo_number))
    if template.show_totals:
        rows.append((template.amount_label, format_currency(document.totals.total_amount, currency)))
    return rows


def _delivery_rows(document: Document) -> list[list[tuple[str, str]]]:
    info = document.delivery
    if info is None:
        return []
    fields = [
        ("Delivery Date", format_date(info.delivery_date)),
        ("Delivery Method", info.delivery_method),
        ("Delivery Address", info.delivery_address),
        ("Carrier", info.carrier),
        ("Tracking Number", info.tracking_number),
        ("Delivered By", info.delivered_by),
        ("Received By", info.received_by),
    ]
    present = [(label, value) for label, value in fields if value and str(value).strip()]
    # Two fields per row.
    return [present[start : start + 2] for start in range(0, len(present), 2)]


def _totals_rows(document: Document, template: DocumentTemplate, currency: str) -> list[tuple[str, str, str]]:
    totals = document.totals
    rows: list[tuple[str, str, str]] = []
    if totals.subtotal:
        rows.append(("subtotal-row", "Subtotal:", format_currency(totals.subtotal, currency)))
    if totals.tax_total:
        rows.append(("", "Tax Amount:", format_currency(totals.tax_total, currency)))
    rows.append(("total-row", template.total_label, format_currency(totals.total_amount, currency)))
    if template.show_payment_rows and totals.paid_amount is not None:
        rows.append(("payment-info", "Paid Amount:", format_currency(totals.paid_amount, currency)))
        rows.append(("balance-info", "Balance Due:", format_currency(totals.balance_due, currency)))
    if template.show_credit_rows and totals.applied_amount is not None:
        rows.append(("payment-info", "Applied Amount:", format_currency(totals.applied_amount, currency)))
        rows.append(("balance-info", "Balance:", format_currency(totals.balance, currency)))
    return rows


def _aging_rows(document: Document, currency: str) -> list[tuple[str, str]]:
    aging = document.aging
    if aging is None:
        return []
    buckets = [
        ("Current", aging.current),
        ("1-30 Days", aging.days_1_30),
        ("31-60 Days", aging.days_31_60),
        ("61-90 Days", aging.days_61_90),
        ("Over 90 Days", aging.over_90),
    ]
    return [(label, format_currency(amount, currency)) for label, amount in buckets]


def _signatures(document: Document) -> dict[str, str]:
    info = document.delivery
    return {
        "delivered_by": info.delivered_by if info and info.delivered_by else _BLANK_LINE,
        "received_by": info.received_by if info and info.received_by else _BLANK_LINE,
        "delivered_on": format_date(info.delivery_date) if info and info.delivery_date else "__________",
    }


_ENV = Environment(
    loader=BaseLoader(),
    autoescape=select_autoescape(),
    trim_blocks=True,
    lstrip_blocks=True,
)
_ENV.filters["sanitize"] = sanitize_text
_ENV.globals["cell_class"] = cell_class
_PAGE = _ENV.from_string(HTML_TEMPLATE)


def build_document_html(
    document: Document,
    company: CompanyProfile | None = None,
    *,
    currency: str = DEFAULT_CURRENCY,
) -> str:
    """
    Render a document as one self-contained HTML page.

    Args:
        document: Canonical document (already normalized).
        company: Letterhead; falls back to the document's own, then the default.
        currency: Currency code printed before every amount.

    Returns:
        Complete HTML with inline CSS, rooted at a single ``.page`` element.
    """
    company = company or document.company or DEFAULT_COMPANY
    template = template_for(document.type)
    rows = _table_rows(document, template)
    has_terms = bool(document.terms_and_conditions)

    return _PAGE.render(
        css=STYLESHEET,
        page_root_class=PAGE_ROOT_CLASS,
        terms_section_class=TERMS_SECTION_CLASS,
        title=f"{document.title} {document.number}",
        document=document,
        template=template,
        company=company,
        party=document.party,
        party_lines=_party_lines(document),
        company_lines=_company_lines(company),
        meta_rows=_meta_rows(document, template, currency),
        delivery_rows=_delivery_rows(document) if template.show_delivery_info else [],
        columns=visible_columns(template, rows),
        rows=[_cells(template.row_kind, row, index, currency) for index, row in enumerate(rows)],
        totals_rows=_totals_rows(document, template, currency) if template.show_totals else [],
        aging_rows=_aging_rows(document, currency) if template.show_aging else [],
        signatures=_signatures(document) if template.show_signatures else None,
        inline_terms=has_terms and not template.terms_on_new_page,
        terms_page=has_terms and template.terms_on_new_page,
        bank_lines=list(company.bank_details) if template.show_bank_details else [],
    )
