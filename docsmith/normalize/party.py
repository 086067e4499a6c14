"""Counterparty resolution shared by all document mappers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from docsmith.domain.document import Party
from docsmith.normalize.aliases import PARTY_FIELDS, DocumentAliases
from docsmith.normalize.fields import Record, lookup, resolve, resolve_text

logger = logging.getLogger(__name__)


def _embedded_relation(record: Record, names: tuple[str, ...]) -> Mapping[str, Any]:
    for name in names:
        candidate = lookup(record, name)
        if isinstance(candidate, list):
            candidate = candidate[0] if candidate else None
        if isinstance(candidate, Mapping) and candidate:
            return candidate
    return {}


def resolve_party(record: Record, aliases: DocumentAliases) -> Party:
    """Build the counterparty, substituting a placeholder for a missing name."""
    relation = _embedded_relation(record, aliases.party_relations)

    name = resolve_text(relation, PARTY_FIELDS["name"])
    if not name and aliases.party_name_fields:
        flat = resolve(record, aliases.party_name_fields)
        name = flat.strip() if isinstance(flat, str) else ""
    if not name:
        name = aliases.party_placeholder
        logger.debug("Record has no counterparty name, using %r", name)

    return Party(
        name=name,
        email=resolve_text(relation, PARTY_FIELDS["email"]),
        phone=resolve_text(relation, PARTY_FIELDS["phone"]),
        address=resolve_text(relation, PARTY_FIELDS["address"]),
        city=resolve_text(relation, PARTY_FIELDS["city"]),
        country=resolve_text(relation, PARTY_FIELDS["country"]),
    )
