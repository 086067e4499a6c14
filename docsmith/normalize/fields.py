"""Field lookup and coercion helpers for loosely typed store records."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from docsmith.domain.document import ZERO

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]

_AMOUNT_NOISE_RE = re.compile(r"[^0-9.\-]")


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, (list, tuple, dict)) and not value:
        return True
    return False


def lookup(record: Record, path: str) -> Any:
    """
    Read a possibly dotted path (e.g. ``customers.name``) from a record.

    Embedded relations may arrive as a mapping or as a one-element list;
    both are followed. Returns None when any segment is missing.
    """
    current: Any = record
    for segment in path.split("."):
        if isinstance(current, list):
            current = current[0] if current else None
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment)
    return current


def resolve(record: Record, aliases: Sequence[str], default: Any = None) -> Any:
    """Return the first non-empty value among `aliases`, else `default`."""
    for alias in aliases:
        value = lookup(record, alias)
        if not _is_empty(value):
            return value
    return default


def to_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """
    Coerce a store value into a Decimal.

    Floats go through ``str`` so 0.1 stays 0.1. Strings tolerate currency
    symbols and thousands separators (``"$1,250.00"``).
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        cleaned = _AMOUNT_NOISE_RE.sub("", value)
        if not cleaned:
            return default
        try:
            return Decimal(cleaned)
        except InvalidOperation:
            logger.warning("Unparseable amount %r, using %s", value, default)
            return default
    logger.warning("Unsupported amount type %s, using %s", type(value).__name__, default)
    return default


def to_date(value: Any) -> date | None:
    """Coerce a date, datetime or ISO-8601 string into a date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            logger.warning("Unparseable date %r", value)
            return None
    return None


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "t", "1", "yes"}
    return bool(value)


def resolve_text(record: Record, aliases: Sequence[str], default: str = "") -> str:
    value = resolve(record, aliases)
    if value is None:
        return default
    return str(value).strip()


def resolve_decimal(record: Record, aliases: Sequence[str], default: Decimal = ZERO) -> Decimal:
    return to_decimal(resolve(record, aliases), default)


def resolve_optional_decimal(record: Record, aliases: Sequence[str]) -> Decimal | None:
    value = resolve(record, aliases)
    if value is None:
        return None
    return to_decimal(value)


def resolve_date(record: Record, aliases: Sequence[str]) -> date | None:
    return to_date(resolve(record, aliases))


def resolve_collection(record: Record, names: Sequence[str]) -> list[Record]:
    """Return the first non-empty nested collection among `names`."""
    for name in names:
        rows = lookup(record, name)
        if isinstance(rows, list) and rows:
            return [row for row in rows if isinstance(row, Mapping)]
    return []


def with_collection_aliases(record: Record, names: Sequence[str]) -> dict[str, Any]:
    """
    Copy `record`, exposing the resolved collection under every name.

    Callers that still read a legacy collection key see the same rows as
    callers that moved to the current one.
    """
    rows = resolve_collection(record, names)
    mapped = dict(record)
    for name in names:
        mapped[name] = list(rows)
    return mapped
