from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from packages.core.schemas.fhir import Dosage, MedicationStatement
from packages.core.schemas.views import Medication
from packages.ingest.fasten.store import ResourceStore, resolve_store
from packages.transform.common import codeable_text, format_number

AS_PRESCRIBED = "As prescribed"
DEFAULT_PURPOSE = "Prescribed medication"

PURPOSE_KEYWORDS = [
    (("metformin", "glucophage"), "Diabetes management"),
    (("lisinopril", "ace inhibitor"), "Blood pressure control"),
    (("aspirin",), "Cardiovascular protection"),
    (("statin", "atorvastatin", "simvastatin"), "Cholesterol management"),
    (("insulin",), "Blood sugar control"),
]


def medication_name(statement: MedicationStatement) -> str:
    return codeable_text(statement.medication_codeable_concept) or "Unknown Medication"


def _first_dosage(statement: MedicationStatement) -> Optional[Dosage]:
    return statement.dosage[0] if statement.dosage else None


def dose_quantity_text(statement: MedicationStatement) -> str:
    dosage = _first_dosage(statement)
    if dosage is None or not dosage.dose_and_rate:
        return ""
    quantity = dosage.dose_and_rate[0].dose_quantity
    if quantity is None:
        return ""
    return f"{format_number(quantity.value)}{quantity.unit or ''}"


def dosage_text(statement: MedicationStatement) -> str:
    dosage = _first_dosage(statement)
    return dose_quantity_text(statement) or (dosage.text if dosage and dosage.text else AS_PRESCRIBED)


def frequency_text(statement: MedicationStatement) -> str:
    dosage = _first_dosage(statement)
    if dosage is None:
        return AS_PRESCRIBED
    repeat = dosage.timing.repeat if dosage.timing else None
    if repeat is not None:
        frequency = format_number(repeat.frequency) if repeat.frequency else "1"
        return f"{frequency} times per {repeat.period_unit or 'day'}"
    return dosage.text or AS_PRESCRIBED


def infer_purpose(name: str) -> str:
    lowered = name.lower()
    for needles, purpose in PURPOSE_KEYWORDS:
        if any(needle in lowered for needle in needles):
            return purpose
    return DEFAULT_PURPOSE


def to_medication(statement: MedicationStatement) -> Medication:
    name = medication_name(statement)
    return Medication(
        name=name,
        dosage=dosage_text(statement),
        frequency=frequency_text(statement),
        purpose=infer_purpose(name),
    )


def medications_with_status(
    statements: Iterable[MedicationStatement], statuses: Iterable[str]
) -> list[Medication]:
    wanted = set(statuses)
    return [to_medication(statement) for statement in statements if statement.status in wanted]


def plan_medication_labels(statements: Iterable[MedicationStatement], limit: int = 3) -> list[str]:
    """Short ``"name dose"`` labels for the first few active statements."""
    labels = []
    for statement in statements:
        if statement.status != "active":
            continue
        name = medication_name(statement)
        dose = dose_quantity_text(statement)
        labels.append(f"{name} {dose}" if dose else name)
        if len(labels) >= limit:
            break
    return labels


def get_fasten_medications(
    store: Optional[ResourceStore] = None, path: Optional[Path] = None
) -> list[Medication]:
    """Active medications sorted by name."""
    store = resolve_store(store, path)
    medications = medications_with_status(store.medication_statements, ("active",))
    return sorted(medications, key=lambda medication: medication.name.casefold())


__all__ = [
    "AS_PRESCRIBED",
    "DEFAULT_PURPOSE",
    "medication_name",
    "dose_quantity_text",
    "dosage_text",
    "frequency_text",
    "infer_purpose",
    "to_medication",
    "medications_with_status",
    "plan_medication_labels",
    "get_fasten_medications",
]
