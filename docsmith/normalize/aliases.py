"""Alias tables mapping store column names onto canonical document fields.

Each entry lists accepted names in preference order: canonical first, then
legacy or camelCase spellings written by older code paths. Dotted names
follow embedded relations (``customers.name``, ``products.unit_of_measure``).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from docsmith.domain.document import DocumentType

FieldAliases = dict[str, tuple[str, ...]]

UNKNOWN_CUSTOMER = "Unknown Customer"
UNKNOWN_SUPPLIER = "Unknown Supplier"


@dataclass(frozen=True)
class DocumentAliases:
    """How one document type's record is laid out in the store."""

    fields: FieldAliases
    item_collections: tuple[str, ...] = ()
    party_relations: tuple[str, ...] = ("customers", "customer")
    # Flat columns holding the counterparty name directly on the record.
    party_name_fields: tuple[str, ...] = ()
    party_placeholder: str = UNKNOWN_CUSTOMER
    extra: FieldAliases = field(default_factory=dict)


PARTY_FIELDS: FieldAliases = {
    "name": ("name", "customer_name", "supplier_name"),
    "email": ("email",),
    "phone": ("phone",),
    "address": ("address",),
    "city": ("city",),
    "country": ("country",),
}

LINE_ITEM_FIELDS: FieldAliases = {
    "description": ("description", "product_name", "products.name"),
    "product_name": ("product_name", "products.name"),
    "product_code": ("product_code", "products.product_code"),
    "quantity": ("quantity",),
    "unit_price": ("unit_price",),
    "discount_percentage": ("discount_percentage",),
    "discount_amount": ("discount_amount",),
    "tax_percentage": ("tax_percentage", "tax_rate"),
    "tax_inclusive": ("tax_inclusive",),
    "unit_of_measure": ("unit_of_measure", "products.unit_of_measure"),
}

DELIVERY_LINE_FIELDS: FieldAliases = {
    "description": ("products.name", "product_name", "description"),
    "quantity_ordered": ("quantity_ordered", "quantity"),
    "quantity_delivered": ("quantity_delivered", "quantity"),
    "unit_of_measure": ("unit_of_measure", "products.unit_of_measure"),
}

REMITTANCE_LINE_FIELDS: FieldAliases = {
    "document_date": ("document_date", "date"),
    "document_type": ("document_type",),
    "document_number": ("document_number",),
    "invoice_reference": ("invoice_number", "invoiceNumber"),
    "credit_reference": ("credit_note_number", "creditNote"),
    "invoice_amount": ("invoice_amount", "invoiceAmount"),
    "credit_amount": ("credit_amount", "creditAmount"),
    "payment_amount": ("payment_amount", "payment"),
    "description": ("description",),
}

PAYMENT_ALLOCATION_FIELDS: FieldAliases = {
    "invoice_number": ("invoice_number", "invoices.invoice_number", "invoice_id"),
    "amount": ("allocated_amount", "amount_allocated", "amount"),
}

STATEMENT_INVOICE_FIELDS: FieldAliases = {
    "id": ("id",),
    "number": ("invoice_number",),
    "date": ("invoice_date",),
    "due_date": ("due_date",),
    "total_amount": ("total_amount",),
    "paid_amount": ("paid_amount",),
    "lpo_number": ("lpo_number",),
}

STATEMENT_PAYMENT_FIELDS: FieldAliases = {
    "reference": ("payment_number", "id"),
    "date": ("payment_date", "date"),
    "method": ("payment_method", "method"),
    "amount": ("amount",),
}

STATEMENT_DELIVERY_FIELDS: FieldAliases = {
    "invoice_id": ("invoice_id",),
    "number": ("delivery_note_number", "delivery_number"),
}

_PRICED_COMMON: FieldAliases = {
    "notes": ("notes",),
    "terms_and_conditions": ("terms_and_conditions",),
    "lpo_number": ("lpo_number",),
}

DOCUMENT_ALIASES: dict[DocumentType, DocumentAliases] = {
    "quotation": DocumentAliases(
        fields={
            "number": ("quotation_number", "number"),
            "date": ("quotation_date", "date"),
            "valid_until": ("valid_until",),
            **_PRICED_COMMON,
        },
        item_collections=("quotation_items", "items"),
    ),
    "invoice": DocumentAliases(
        fields={
            "number": ("invoice_number", "number"),
            "date": ("invoice_date", "date"),
            "due_date": ("due_date",),
            "paid_amount": ("paid_amount",),
            **_PRICED_COMMON,
        },
        item_collections=("invoice_items", "items"),
    ),
    "proforma": DocumentAliases(
        fields={
            "number": ("proforma_number", "invoice_number", "number"),
            "date": ("proforma_date", "invoice_date", "date"),
            "due_date": ("due_date",),
            "valid_until": ("valid_until",),
            "paid_amount": ("paid_amount",),
            **_PRICED_COMMON,
        },
        item_collections=("proforma_items", "invoice_items", "items"),
    ),
    "credit_note": DocumentAliases(
        fields={
            "number": ("credit_note_number", "number"),
            "date": ("credit_note_date", "date"),
            "applied_amount": ("applied_amount",),
            "invoice_number": ("invoices.invoice_number", "invoice_number"),
            **_PRICED_COMMON,
        },
        item_collections=("credit_note_items", "items"),
    ),
    "lpo": DocumentAliases(
        fields={
            "number": ("lpo_number", "number"),
            "date": ("lpo_date", "date"),
            "due_date": ("delivery_date", "expected_delivery_date"),
            "notes": ("notes",),
            "terms_and_conditions": ("terms_and_conditions",),
            "contact_person": ("contact_person",),
            "contact_phone": ("contact_phone",),
        },
        item_collections=("lpo_items", "items"),
        party_relations=("suppliers", "supplier"),
        party_placeholder=UNKNOWN_SUPPLIER,
    ),
    "delivery": DocumentAliases(
        fields={
            "number": ("delivery_note_number", "delivery_number", "number"),
            "date": ("delivery_date", "date"),
            "invoice_number": ("invoice_number", "invoices.invoice_number"),
            "invoice_id": ("invoice_id",),
            "delivery_address": ("delivery_address",),
            "delivery_method": ("delivery_method",),
            "carrier": ("carrier",),
            "tracking_number": ("tracking_number",),
            "delivered_by": ("delivered_by",),
            "received_by": ("received_by",),
            "notes": ("notes",),
        },
        item_collections=("delivery_note_items", "delivery_items"),
    ),
    "receipt": DocumentAliases(
        fields={
            "number": ("number", "payment_number", "receipt_number"),
            "date": ("date", "payment_date"),
            "amount": ("amount",),
            "method": ("payment_method", "method"),
            "reference_number": ("reference_number",),
        },
        item_collections=("payment_allocations",),
        party_name_fields=("customer", "customer_name"),
    ),
    "remittance": DocumentAliases(
        fields={
            "number": ("advice_number", "adviceNumber", "number"),
            "date": ("advice_date", "adviceDate", "date"),
            "total_payment": ("total_payment", "totalPayment"),
            "notes": ("notes",),
        },
        item_collections=("remittance_advice_items", "items"),
        party_name_fields=("customerName", "customer_name"),
    ),
    "statement": DocumentAliases(
        fields={
            "statement_date": ("statement_date", "date"),
            "customer_code": ("customer.customer_code", "customer.id"),
        },
        item_collections=("invoices",),
        party_relations=("customer", "customers"),
        extra={
            "payments": ("payments",),
            "delivery_notes": ("delivery_notes", "deliveryNotes"),
        },
    ),
}


def aliases_for(doc_type: DocumentType) -> DocumentAliases:
    """Return the alias table for a document type."""
    try:
        return DOCUMENT_ALIASES[doc_type]
    except KeyError as exc:
        raise ValueError(f"Unknown document type: {doc_type}") from exc
