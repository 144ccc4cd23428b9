"""Billing entity resolution from a deal's free-text country."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EntityDescriptor:
    id: str
    name: str
    region: str
    currency: str


ENTITIES: dict[str, EntityDescriptor] = {
    "US": EntityDescriptor(id="US-01", name="Odoo Inc (North America)", region="US", currency="USD"),
    "UK": EntityDescriptor(id="UK-02", name="Odoo Ltd (UK & Ireland)", region="UK", currency="GBP"),
    "EU": EntityDescriptor(id="EU-03", name="Odoo Europe (Mainland)", region="EU", currency="EUR"),
    "APAC": EntityDescriptor(id="AP-04", name="Odoo Asia Pacific", region="APAC", currency="USD"),
    "CL": EntityDescriptor(id="CL-05", name="Odoo Chile SpA", region="CL", currency="CLP"),
    "MX": EntityDescriptor(id="MX-06", name="Odoo Mexico S. de R.L.", region="MX", currency="MXN"),
}

DEFAULT_ENTITY = ENTITIES["APAC"]

# Order matters: substring rules run before the exact-name tables.
_SUBSTRING_RULES = (
    ("chile", "CL"),
    ("mexico", "MX"),
)
_EXACT_RULES = (
    ({"united states", "usa", "us"}, "US"),
    ({"united kingdom", "uk", "ireland"}, "UK"),
    ({"germany", "france", "spain", "italy", "netherlands"}, "EU"),
)


def resolve_entity(country: str | None) -> EntityDescriptor:
    """Map a country name to its billing entity. Never fails; APAC is the fallback."""
    text = (country or "").strip().lower()
    for needle, key in _SUBSTRING_RULES:
        if needle in text:
            return ENTITIES[key]
    for names, key in _EXACT_RULES:
        if text in names:
            return ENTITIES[key]
    return DEFAULT_ENTITY


def entity_by_id(entity_id: str) -> EntityDescriptor | None:
    return next((entity for entity in ENTITIES.values() if entity.id == entity_id), None)
