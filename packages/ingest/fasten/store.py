from __future__ import annotations

import hashlib
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from packages.core.config import settings
from packages.core.schemas.fhir import (
    DiagnosticReport,
    Encounter,
    MedicationStatement,
    Observation,
    Organization,
    Patient,
    Practitioner,
)
from packages.ingest.fasten.loader import decode_bundle_bytes, parse_bundle_text, source_label
from packages.ingest.fasten.parser import parse_fhir_resources

logger = logging.getLogger(__name__)


def reference_id(reference: Optional[str]) -> Optional[str]:
    """Return the id segment of a ``"Type/id"`` reference, or ``None``."""
    if not reference:
        return None
    parts = reference.split("/")
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


@dataclass
class ResourceStore:
    """Typed resources from one bundle, indexed the way the view builders read them."""
    diagnostic_reports: list[DiagnosticReport] = field(default_factory=list)
    observations: dict[str, Observation] = field(default_factory=dict)
    patients: list[Patient] = field(default_factory=list)
    practitioners: dict[str, Practitioner] = field(default_factory=dict)
    practitioner_list: list[Practitioner] = field(default_factory=list)
    encounters: dict[str, Encounter] = field(default_factory=dict)
    medication_statements: list[MedicationStatement] = field(default_factory=list)
    organizations: list[Organization] = field(default_factory=list)

    def practitioner_for(self, reference: Optional[str]) -> Optional[Practitioner]:
        practitioner_id = reference_id(reference)
        return self.practitioners.get(practitioner_id) if practitioner_id else None

    def encounter_for(self, reference: Optional[str]) -> Optional[Encounter]:
        encounter_id = reference_id(reference)
        return self.encounters.get(encounter_id) if encounter_id else None

    def observation_for(self, reference: Optional[str]) -> Optional[Observation]:
        observation_id = reference_id(reference)
        return self.observations.get(observation_id) if observation_id else None

    def __len__(self) -> int:
        return (
            len(self.diagnostic_reports)
            + len(self.observations)
            + len(self.patients)
            + len(self.practitioner_list)
            + len(self.encounters)
            + len(self.medication_statements)
            + len(self.organizations)
        )


def build_store(resources: Iterable[object]) -> ResourceStore:
    """Index typed resources. Later duplicates of an id replace earlier ones in the maps."""
    store = ResourceStore()
    for resource in resources:
        if isinstance(resource, DiagnosticReport):
            store.diagnostic_reports.append(resource)
        elif isinstance(resource, Observation):
            store.observations[resource.id] = resource
        elif isinstance(resource, Patient):
            store.patients.append(resource)
        elif isinstance(resource, Practitioner):
            store.practitioners[resource.id] = resource
            store.practitioner_list.append(resource)
        elif isinstance(resource, Encounter):
            store.encounters[resource.id] = resource
        elif isinstance(resource, MedicationStatement):
            store.medication_statements.append(resource)
        elif isinstance(resource, Organization):
            store.organizations.append(resource)
    return store


def store_from_raw(raw_resources: Iterable[dict]) -> ResourceStore:
    return build_store(parse_fhir_resources(raw_resources))


_CACHE: dict[str, tuple[str, ResourceStore]] = {}
_CACHE_LOCK = threading.Lock()


def get_store(path: Optional[Path] = None) -> ResourceStore:
    """Return the indexed store for a bundle file, memoized by content digest.

    The file is re-read on every call; parsing and indexing only happen again
    when its bytes change, so results never go stale.
    """
    source = source_label(path)
    path = Path(path) if path is not None else settings.bundle_path()
    if not path.is_file():
        raise FileNotFoundError(f"Bundle file not found: {path}")
    data = path.read_bytes()
    digest = hashlib.sha256(data).hexdigest()
    key = str(path.resolve())

    with _CACHE_LOCK:
        cached = _CACHE.get(key)
    if cached and cached[0] == digest:
        logger.debug("Store cache hit for %s", key)
        return cached[1]

    logger.debug("Store cache miss for %s", key)
    raw = parse_bundle_text(decode_bundle_bytes(data), source=source)
    store = store_from_raw(raw)
    with _CACHE_LOCK:
        _CACHE[key] = (digest, store)
    return store


def clear_store_cache() -> None:
    with _CACHE_LOCK:
        _CACHE.clear()


def resolve_store(store: Optional[ResourceStore] = None, path: Optional[Path] = None) -> ResourceStore:
    return store if store is not None else get_store(path)


__all__ = [
    "ResourceStore",
    "reference_id",
    "build_store",
    "store_from_raw",
    "get_store",
    "clear_store_cache",
    "resolve_store",
]
