from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from packages.core.schemas.fhir import DiagnosticReport
from packages.core.schemas.views import ProgressNote, ProviderAppointment, TreatmentPlanItem
from packages.ingest.fasten.store import ResourceStore, resolve_store
from packages.transform.common import (
    display_date,
    display_time,
    first_concept,
    practitioner_name,
    report_datetime_or_now,
    reports_for_practitioner,
    utcnow,
)
from packages.transform.medications import plan_medication_labels
from packages.transform.reports import conclusion_text

ACTIVE_WINDOW = timedelta(days=90)


def _minute(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


def _category_label(report: DiagnosticReport) -> Optional[str]:
    concept = first_concept(report.category)
    return concept.text if concept is not None and concept.text else None


def _code_label(report: DiagnosticReport) -> Optional[str]:
    return report.code.text if report.code is not None and report.code.text else None


def get_provider_diagnoses_and_treatment_plans(
    practitioner_id: str,
    store: Optional[ResourceStore] = None,
    path: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> list[TreatmentPlanItem]:
    """Treatment plan cards for one practitioner, newest first.

    The newest card is the current plan and the rest are previous ones. Each
    card lists the bundle's active medications, not ones tied to the report.
    """
    store = resolve_store(store, path)
    now = now or utcnow()
    dated = [
        (report_datetime_or_now(report, now), report)
        for report in reports_for_practitioner(store.diagnostic_reports, practitioner_id)
    ]
    dated.sort(key=lambda item: item[0], reverse=True)

    medications = plan_medication_labels(store.medication_statements) or ["No medications recorded"]
    cutoff = now - ACTIVE_WINDOW

    items = []
    for index, (when, report) in enumerate(dated):
        formatted = display_date(when)
        if index == 0:
            title = "Current Diagnosis & Treatment Plan"
            date_label = f"Started {formatted}"
        else:
            title = "Previous Diagnosis & Treatment Recommendations"
            date_label = f"{formatted} - {display_date(dated[0][0])}" if index == 1 else formatted
        items.append(
            TreatmentPlanItem(
                id=report.id,
                title=title,
                status="Active" if when > cutoff else "Completed",
                date=date_label,
                diagnosis=conclusion_text(report) or _code_label(report) or "No diagnosis recorded",
                description=_code_label(report) or _category_label(report) or "Treatment plan details",
                medications=list(medications),
            )
        )
    return items


def get_provider_progress_notes(
    practitioner_id: str,
    store: Optional[ResourceStore] = None,
    path: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> list[ProgressNote]:
    store = resolve_store(store, path)
    now = now or utcnow()
    author = practitioner_name(store.practitioners.get(practitioner_id)) or "Unknown Provider"

    notes = []
    for report in reports_for_practitioner(store.diagnostic_reports, practitioner_id):
        when = report_datetime_or_now(report, now)
        conclusion = first_concept(report.conclusion_code)
        note = (
            _code_label(report)
            or (conclusion.text if conclusion is not None else None)
            or _category_label(report)
            or "Progress note recorded"
        )
        notes.append(
            (
                _minute(when),
                ProgressNote(
                    id=report.id,
                    date=display_date(when),
                    time=display_time(when),
                    author=author,
                    note=note,
                ),
            )
        )
    notes.sort(key=lambda item: item[0], reverse=True)
    return [note for _, note in notes]


def _appointment_status(when: datetime, now: datetime, encounter_status: Optional[str]) -> str:
    if when > now:
        return "Confirmed"
    if encounter_status in ("planned", "arrived"):
        return "Pending"
    return "Completed"


def get_provider_appointments(
    practitioner_id: str,
    store: Optional[ResourceStore] = None,
    path: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> list[ProviderAppointment]:
    """Visits for one practitioner from reports with a resolvable encounter, newest first."""
    store = resolve_store(store, path)
    now = now or utcnow()

    unique: dict[str, tuple[datetime, ProviderAppointment]] = {}
    for report in reports_for_practitioner(store.diagnostic_reports, practitioner_id):
        if report.encounter is None:
            continue
        encounter = store.encounter_for(report.encounter.reference)
        if encounter is None:
            continue
        when = report_datetime_or_now(report, now)
        encounter_type = None
        if encounter.type and encounter.type[0].text:
            encounter_type = encounter.type[0].text
        elif encounter.class_ is not None and encounter.class_.display:
            encounter_type = encounter.class_.display
        unique[report.id] = (
            _minute(when),
            ProviderAppointment(
                id=report.id,
                date=display_date(when),
                time=display_time(when),
                type=encounter_type or "Follow-up",
                status=_appointment_status(when, now, encounter.status),
            ),
        )

    ordered = sorted(unique.values(), key=lambda item: item[0], reverse=True)
    return [appointment for _, appointment in ordered]


__all__ = [
    "ACTIVE_WINDOW",
    "get_provider_diagnoses_and_treatment_plans",
    "get_provider_progress_notes",
    "get_provider_appointments",
]
