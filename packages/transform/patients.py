from __future__ import annotations

from pathlib import Path
from typing import Optional

from packages.core.schemas.fhir import HumanName, Patient, PatientContact
from packages.core.schemas.views import EmergencyContact
from packages.core.schemas.views import Patient as PatientView
from packages.ingest.fasten.store import ResourceStore, resolve_store
from packages.transform.common import codeable_text, human_name_text, join_name, telecom_value


def _official_name(patient: Patient) -> HumanName:
    for name in patient.name:
        if name.use == "official":
            return name
    return patient.name[0] if patient.name else HumanName()


def _is_emergency(contact: PatientContact) -> bool:
    for relationship in contact.relationship:
        for coding in relationship.coding:
            if coding.code == "C":
                return True
            if coding.display and "emergency" in coding.display.lower():
                return True
    return False


def _emergency_contact(patient: Patient) -> Optional[EmergencyContact]:
    contact = next((item for item in patient.contact if _is_emergency(item)), None)
    if contact is None:
        return None
    relationship = codeable_text(contact.relationship[0]) if contact.relationship else None
    return EmergencyContact(
        name=human_name_text(contact.name),
        relationship=relationship or "",
        phone=telecom_value(contact.telecom, "phone"),
    )


def to_patient(patient: Patient) -> PatientView:
    name = _official_name(patient)
    phone = telecom_value(patient.telecom, "phone", use="home") or telecom_value(patient.telecom, "phone")

    address = next((item for item in patient.address if item.use == "home"), None)
    if address is None and patient.address:
        address = patient.address[0]

    gender = patient.gender[:1].upper() + patient.gender[1:] if patient.gender else None

    return PatientView(
        id=patient.id,
        name=name.text or join_name(name) or "Unknown Patient",
        first_name=name.given[0] if name.given else "",
        last_name=name.family or "",
        email=telecom_value(patient.telecom, "email"),
        phone=phone,
        date_of_birth=patient.birth_date,
        gender=gender,
        address=address.line[0] if address and address.line else "",
        city=(address.city if address else None) or "",
        state=(address.state if address else None) or "",
        zip_code=(address.postal_code if address else None) or "",
        country=(address.country if address else None) or "",
        marital_status=codeable_text(patient.marital_status) or "",
        emergency_contact=_emergency_contact(patient),
    )


def get_fasten_patient(
    store: Optional[ResourceStore] = None, path: Optional[Path] = None
) -> Optional[PatientView]:
    """The first Patient in the bundle, or ``None`` when there is none."""
    store = resolve_store(store, path)
    if not store.patients:
        return None
    return to_patient(store.patients[0])


__all__ = ["to_patient", "get_fasten_patient"]
