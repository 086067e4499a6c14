"""Row access to the hosted document store over its PostgREST API."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from docsmith.runtime.logging import get_logger

logger = get_logger(__name__)

Row = dict[str, Any]


class StoreError(RuntimeError):
    """Raised when the data store rejects a query or cannot be reached."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class DocumentNotFound(StoreError):
    """Raised when a lookup by id matches no row."""


class DocumentStore(Protocol):
    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[Row]: ...


class PostgrestStore:
    """
    DocumentStore backed by ``{url}/rest/v1/{table}``.

    Filters are equality only (``col=eq.value``); embedded relations are
    requested through the `columns` select string.
    """

    def __init__(
        self,
        url: str,
        key: str,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=url.rstrip("/"),
            headers={"apikey": key, "Authorization": f"Bearer {key}", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> PostgrestStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[Row]:
        params: dict[str, str] = {"select": columns}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{value}"
        if limit is not None:
            params["limit"] = str(limit)

        try:
            response = self._client.get(f"/rest/v1/{table}", params=params)
        except httpx.RequestError as e:
            logger.error("Failed to reach data store: %s", e)
            raise StoreError(f"Failed to reach data store: {e}") from e

        if response.status_code >= 400:
            code, message = _error_details(response)
            logger.error("Data store error on %s: %s %s", table, code, message)
            raise StoreError(message, code=code)

        try:
            rows = response.json()
        except ValueError as e:
            logger.error("Data store returned a non-JSON body for %s", table)
            raise StoreError(f"Unexpected non-JSON response from {table}") from e
        if not isinstance(rows, list):
            raise StoreError(f"Unexpected response shape from {table}: {type(rows).__name__}")
        logger.debug("Fetched %d rows from %s", len(rows), table)
        return rows


def _error_details(response: httpx.Response) -> tuple[str, str]:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        code = str(payload.get("code") or response.status_code)
        message = str(payload.get("message") or payload.get("hint") or response.reason_phrase)
        return code, message
    return str(response.status_code), response.text or response.reason_phrase


def select_one(store: DocumentStore, table: str, columns: str, filters: Mapping[str, Any]) -> Row:
    """Fetch exactly one row or raise DocumentNotFound."""
    rows = store.select(table, columns, filters, limit=1)
    if not rows:
        described = ", ".join(f"{key}={value}" for key, value in filters.items())
        raise DocumentNotFound(f"No {table} row with {described}", code="not_found")
    return rows[0]
