from __future__ import annotations

from pathlib import Path
from typing import Optional

from packages.core.schemas.fhir import Organization
from packages.core.schemas.views import Clinic, Lab, OrganizationAddress
from packages.ingest.fasten.store import ResourceStore, reference_id, resolve_store
from packages.transform.common import telecom_value

UNKNOWN_ORGANIZATION = "Unknown Organization"
DEFAULT_CLINIC_ID = "default-clinic"
DEFAULT_CLINIC_NAME = "Default Clinic"

# matched as lowercase substrings of the organization name
LAB_KEYWORDS = (
    "lab",
    "laboratory",
    "diagnostic",
    "pathology",
    "quest",
    "labcorp",
    "testing",
    "specimen",
    "analytical",
    "imaging",
)

# interface engines and export artifacts that show up as organizations
EXCLUDED_KEYWORDS = ("interface", "pws interface", "system", "internal", "csv")


def is_lab(name: str) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in LAB_KEYWORDS)


def should_exclude_organization(name: str) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in EXCLUDED_KEYWORDS)


def _address(organization: Organization) -> Optional[OrganizationAddress]:
    if not organization.address:
        return None
    address = organization.address[0]
    return OrganizationAddress(
        line=list(address.line),
        city=address.city,
        state=address.state,
        zip=address.postal_code,
        country=address.country,
    )


def _fields(organization: Organization, name: str) -> dict:
    return {
        "id": organization.id,
        "name": name,
        "identifier": organization.identifier[0].value if organization.identifier else None,
        "address": _address(organization),
        "phone": telecom_value(organization.telecom, "phone") or None,
        "email": telecom_value(organization.telecom, "email") or None,
    }


def process_organizations(store: ResourceStore) -> tuple[list[Clinic], list[Lab]]:
    """Split organizations into clinics and labs.

    Excluded names are dropped and the first organization seen for an id
    wins. Patients' managing organizations that are not otherwise present are
    added as clinics. An empty result yields a single default clinic.
    """
    clinics: dict[str, Clinic] = {}
    labs: dict[str, Lab] = {}

    for organization in store.organizations:
        name = organization.name or UNKNOWN_ORGANIZATION
        if should_exclude_organization(name):
            continue
        if is_lab(name):
            labs.setdefault(organization.id, Lab(**_fields(organization, name)))
        elif organization.id not in clinics:
            clinics[organization.id] = Clinic(**_fields(organization, name))

    for patient in store.patients:
        managing = patient.managing_organization
        organization_id = reference_id(managing.reference) if managing is not None else None
        if organization_id is None:
            continue
        name = managing.display or UNKNOWN_ORGANIZATION
        if should_exclude_organization(name):
            continue
        if organization_id not in clinics and organization_id not in labs:
            clinics[organization_id] = Clinic(id=organization_id, name=name)

    if not clinics and not labs:
        clinics[DEFAULT_CLINIC_ID] = Clinic(id=DEFAULT_CLINIC_ID, name=DEFAULT_CLINIC_NAME)
    return list(clinics.values()), list(labs.values())


def list_clinics(store: Optional[ResourceStore] = None, path: Optional[Path] = None) -> list[Clinic]:
    clinics, _ = process_organizations(resolve_store(store, path))
    return clinics


def list_labs(store: Optional[ResourceStore] = None, path: Optional[Path] = None) -> list[Lab]:
    """Labs for report filters, in bundle order."""
    _, labs = process_organizations(resolve_store(store, path))
    return labs


__all__ = [
    "LAB_KEYWORDS",
    "EXCLUDED_KEYWORDS",
    "is_lab",
    "should_exclude_organization",
    "process_organizations",
    "list_clinics",
    "list_labs",
]
