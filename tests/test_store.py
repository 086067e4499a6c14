"""Tests for the PostgREST-backed document store and record fetching."""

from __future__ import annotations

from datetime import date

import httpx
import pytest

from docsmith.domain.company import DEFAULT_COMPANY
from docsmith.runtime.document_source import (
    DOCUMENT_SOURCES,
    fetch_document_record,
    fetch_statement_record,
    load_company_profile,
    source_for,
)
from docsmith.runtime.store import DocumentNotFound, PostgrestStore, StoreError, select_one


def _store(handler) -> PostgrestStore:
    return PostgrestStore("https://db.example.com/", "anon-key", transport=httpx.MockTransport(handler))


def test_select_builds_postgrest_query() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": "inv-1"}])

    with _store(handler) as store:
        rows = store.select("invoices", "*, customers(*)", {"id": "inv-1"}, limit=1)

    assert rows == [{"id": "inv-1"}]
    [request] = seen
    assert request.url.path == "/rest/v1/invoices"
    assert request.url.params["select"] == "*, customers(*)"
    assert request.url.params["id"] == "eq.inv-1"
    assert request.url.params["limit"] == "1"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["Authorization"] == "Bearer anon-key"


def test_error_response_raises_store_error_with_code() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"code": "42P01", "message": 'relation "lpos" does not exist'})

    with _store(handler) as store, pytest.raises(StoreError) as excinfo:
        store.select("lpos")

    assert excinfo.value.code == "42P01"
    assert "does not exist" in excinfo.value.message


def test_unreachable_store_raises_store_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _store(handler) as store, pytest.raises(StoreError, match="Failed to reach data store"):
        store.select("invoices")


def test_non_list_payload_is_rejected() -> None:
    with _store(lambda request: httpx.Response(200, json={"id": 1})) as store, pytest.raises(StoreError):
        store.select("invoices")


def test_non_json_body_is_a_store_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>Gateway login</html>")

    with _store(handler) as store, pytest.raises(StoreError, match="non-JSON response from invoices"):
        store.select("invoices")


def test_select_one_raises_not_found(make_store) -> None:
    with pytest.raises(DocumentNotFound) as excinfo:
        select_one(make_store(), "invoices", "*", {"id": "missing"})

    assert excinfo.value.code == "not_found"


def test_fetch_document_record_uses_type_source(make_store) -> None:
    store = make_store({"proforma_invoices": [{"id": "pf-1", "proforma_number": "PF-1"}]})

    record = fetch_document_record(store, "proforma", "pf-1")

    assert record["proforma_number"] == "PF-1"
    table, columns, filters = store.calls[0]
    assert table == "proforma_invoices"
    assert "proforma_items" in columns
    assert filters == {"id": "pf-1"}


def test_statements_have_no_single_record_source() -> None:
    assert "statement" not in DOCUMENT_SOURCES
    with pytest.raises(ValueError):
        source_for("statement")


def test_fetch_statement_record_gathers_customer_history(make_store) -> None:
    store = make_store(
        {
            "customers": [{"id": "c-1", "name": "Lab"}, {"id": "c-2", "name": "Other"}],
            "invoices": [{"id": "i-1", "customer_id": "c-1"}, {"id": "i-2", "customer_id": "c-2"}],
            "payments": [{"id": "p-1", "customer_id": "c-1"}],
            "delivery_notes": [],
        }
    )

    record = fetch_statement_record(store, "c-1", date(2024, 4, 15))

    assert record["customer"]["name"] == "Lab"
    assert [row["id"] for row in record["invoices"]] == ["i-1"]
    assert [row["id"] for row in record["payments"]] == ["p-1"]
    assert record["delivery_notes"] == []
    assert record["statement_date"] == "2024-04-15"


def test_company_profile_overlays_first_row(make_store) -> None:
    store = make_store({"companies": [{"id": "co-1", "name": "Lab Supplies", "phone": "", "tax_number": "P9"}]})

    company = load_company_profile(store, DEFAULT_COMPANY)

    assert company.name == "Lab Supplies"
    assert company.tax_number == "P9"
    assert company.phone == DEFAULT_COMPANY.phone


def test_company_profile_falls_back_on_errors(make_store) -> None:
    assert load_company_profile(make_store(), DEFAULT_COMPANY) == DEFAULT_COMPANY
    assert load_company_profile(make_store(error=StoreError("denied", "42501")), DEFAULT_COMPANY) == DEFAULT_COMPANY
