from __future__ import annotations

import re
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from packages.categorize.engine import categorize_provider
from packages.core.schemas.fhir import HumanName, Practitioner
from packages.core.schemas.views import CategorizedProvider, Department, Provider
from packages.ingest.fasten.store import ResourceStore, reference_id, resolve_store
from packages.transform.common import (
    codeable_text,
    join_name,
    parse_datetime,
    report_datetime,
    telecom_value,
)

DEFAULT_QUALIFICATIONS = "Healthcare Provider"
DEFAULT_SPECIALTY = "General"

# first hit wins; matched against the lowercased text
_SPECIALTY_SNIFF = [
    (("cardiology", "cardiac"), "Cardiology"),
    (("neurology", "neuro"), "Neurology"),
    (("pediatric",), "Pediatrics"),
    (("ortho",), "Orthopedics"),
]

# first hit wins; matched case-sensitively against the full name
_QUALIFICATION_SNIFF = [("MD", "MD"), ("DO", "DO"), ("PA", "PA-C"), ("NP", "NP")]


def _name_entry(practitioner: Practitioner) -> HumanName:
    return practitioner.name[0] if practitioner.name else HumanName()


def _full_name(name: HumanName, fallback: str) -> str:
    return name.text or join_name(name) or fallback


def _qualifications(name: HumanName, full_name: str) -> str:
    if name.suffix:
        return ", ".join(name.suffix)
    for needle, label in _QUALIFICATION_SNIFF:
        if needle in full_name:
            return label
    return ""


def _specialty(text: str) -> str:
    lowered = text.lower()
    for needles, label in _SPECIALTY_SNIFF:
        if any(needle in lowered for needle in needles):
            return label
    return ""


def to_provider(
    practitioner: Practitioner, fallback_name: str, engagement_count: Optional[int] = None
) -> Provider:
    name = _name_entry(practitioner)
    full_name = _full_name(name, fallback_name)
    return Provider(
        id=practitioner.id,
        name=full_name,
        qualifications=_qualifications(name, full_name) or DEFAULT_QUALIFICATIONS,
        specialty=_specialty(full_name) or DEFAULT_SPECIALTY,
        phone=telecom_value(practitioner.telecom, "phone"),
        email=telecom_value(practitioner.telecom, "email"),
        engagement_count=engagement_count,
    )


def _engagements(store: ResourceStore) -> tuple[Counter, dict[str, datetime]]:
    """Tally report/encounter references per practitioner id, with the latest engagement date."""
    counts: Counter = Counter()
    last_seen: dict[str, datetime] = {}

    def _touch(practitioner_id: Optional[str], when: Optional[datetime]) -> None:
        if not practitioner_id:
            return
        counts[practitioner_id] += 1
        if when and (practitioner_id not in last_seen or when > last_seen[practitioner_id]):
            last_seen[practitioner_id] = when

    for report in store.diagnostic_reports:
        when = report_datetime(report)
        for performer in report.performer:
            # untyped performers are assumed to be practitioners
            if performer.reference and performer.type in (None, "", "Practitioner"):
                _touch(reference_id(performer.reference), when)
        for interpreter in report.results_interpreter:
            if interpreter.reference:
                _touch(reference_id(interpreter.reference), when)

    for encounter in store.encounters.values():
        period = encounter.period
        when = None
        if period is not None:
            when = parse_datetime(period.start) or parse_datetime(period.end)
        for participant in encounter.participant:
            individual = participant.individual
            if individual is not None and individual.reference:
                _touch(reference_id(individual.reference), when)

    return counts, last_seen


def list_practitioners(
    store: Optional[ResourceStore] = None, path: Optional[Path] = None
) -> list[Provider]:
    """Providers ordered most-engaged first; ties keep source order."""
    store = resolve_store(store, path)
    counts, _ = _engagements(store)
    providers = [
        to_provider(practitioner, f"Provider {index + 1}", counts.get(practitioner.id, 0))
        for index, practitioner in enumerate(store.practitioner_list)
    ]
    return sorted(providers, key=lambda provider: -(provider.engagement_count or 0))


def get_practitioner_by_id(
    practitioner_id: str, store: Optional[ResourceStore] = None, path: Optional[Path] = None
) -> Optional[Provider]:
    store = resolve_store(store, path)
    for practitioner in store.practitioner_list:
        if practitioner.id == practitioner_id:
            return to_provider(practitioner, "Unknown Provider")
    return None


def _department_label(provider: Provider) -> str:
    specialty = provider.specialty or DEFAULT_SPECIALTY
    if specialty != DEFAULT_SPECIALTY:
        return specialty
    quals = (provider.qualifications or "").lower()
    name = provider.name.lower()
    if "md" in quals or "md" in name:
        return "Physicians"
    if "pa" in quals or "pa" in name:
        return "Physician Assistants"
    if "np" in quals or "np" in name:
        return "Nurse Practitioners"
    if "rn" in quals or "nurse" in name:
        return "Nurses"
    return "Healthcare Providers"


def department_id(label: str) -> str:
    return re.sub(r"\s+", "-", label.lower())


def group_practitioners_by_department(
    store: Optional[ResourceStore] = None, path: Optional[Path] = None
) -> list[Department]:
    grouped: dict[str, list[Provider]] = {}
    for provider in list_practitioners(store, path):
        grouped.setdefault(_department_label(provider), []).append(provider)
    departments = [
        Department(id=department_id(label), name=label, doctors=doctors)
        for label, doctors in grouped.items()
    ]
    departments.sort(key=lambda department: department.name.casefold())
    return departments


def _categorized_qualifications(practitioner: Practitioner, name: HumanName, full_name: str) -> str:
    if name.suffix:
        return ", ".join(name.suffix)
    codes = [codeable_text(item.code) for item in practitioner.qualification]
    codes = [code for code in codes if code]
    if codes:
        return ", ".join(codes)
    return _qualifications(name, full_name)


def _last_visited_key(provider: CategorizedProvider) -> tuple:
    visited = parse_datetime(provider.last_visited)
    if visited is not None:
        return (0, -visited.timestamp(), 0)
    return (1, 0.0, -(provider.engagement_count or 0))


def list_categorized_providers(
    store: Optional[ResourceStore] = None, path: Optional[Path] = None
) -> list[CategorizedProvider]:
    """Providers with category labels, most recently visited first."""
    store = resolve_store(store, path)
    counts, last_seen = _engagements(store)
    providers = []
    for practitioner in store.practitioner_list:
        name = _name_entry(practitioner)
        full_name = _full_name(name, "Unknown Provider")
        qualifications = _categorized_qualifications(practitioner, name, full_name)
        specialty = _specialty(f"{qualifications} {full_name}")
        categorization = categorize_provider(
            qualifications=qualifications, specialty=specialty, name=full_name
        )
        visited = last_seen.get(practitioner.id)
        providers.append(
            CategorizedProvider(
                id=practitioner.id,
                name=full_name,
                first_name=name.given[0] if name.given else None,
                last_name=name.family,
                qualifications=qualifications or None,
                specialty=specialty or None,
                phone=telecom_value(practitioner.telecom, "phone") or None,
                email=telecom_value(practitioner.telecom, "email") or None,
                engagement_count=counts.get(practitioner.id, 0),
                category=categorization.category,
                sub_category=categorization.sub_category,
                sub_categories=list(categorization.sub_categories),
                last_visited=visited.astimezone(timezone.utc).isoformat() if visited else None,
            )
        )
    return sorted(providers, key=_last_visited_key)


__all__ = [
    "DEFAULT_QUALIFICATIONS",
    "DEFAULT_SPECIALTY",
    "to_provider",
    "list_practitioners",
    "get_practitioner_by_id",
    "department_id",
    "group_practitioners_by_department",
    "list_categorized_providers",
]
