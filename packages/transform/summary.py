from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

from packages.core.schemas.fhir import DiagnosticReport
from packages.core.schemas.views import (
    Appointment,
    DoctorDiagnosis,
    HealthSummary,
    TreatmentPlan,
)
from packages.ingest.fasten.store import ResourceStore, resolve_store
from packages.transform.common import (
    codeable_text,
    display_time,
    first_concept,
    iso_date,
    practitioner_name,
    report_datetime_or_now,
    utcnow,
)
from packages.transform.medications import medications_with_status
from packages.transform.reports import sorted_reports, to_medical_report

MAX_MEDICAL_REPORTS = 20
UNKNOWN_DOCTOR = "Unknown Doctor"


def placeholder_treatment_plan() -> TreatmentPlan:
    # bundles carry no CarePlan resources, so the plan is fixed text
    return TreatmentPlan(
        plan="Comprehensive health monitoring and management",
        duration="Ongoing",
        goals=[
            "Monitor and manage chronic conditions",
            "Maintain optimal health metrics",
            "Prevent complications",
            "Improve overall wellness",
        ],
    )


def _specialty_label(report: DiagnosticReport) -> str:
    concept = first_concept(report.category)
    return (concept.text if concept is not None else None) or "General"


def _code_text(report: DiagnosticReport) -> Optional[str]:
    return report.code.text if report.code is not None and report.code.text else None


def _performer_name(report: DiagnosticReport, store: ResourceStore, use_display: bool) -> str:
    if not report.performer:
        return UNKNOWN_DOCTOR
    performer = report.performer[0]
    if use_display and performer.display:
        return performer.display
    return practitioner_name(store.practitioner_for(performer.reference)) or UNKNOWN_DOCTOR


def build_appointments(store: ResourceStore, now: datetime) -> list[Appointment]:
    """One appointment per report that points at an encounter, newest first."""
    unique: dict[str, Appointment] = {}
    for report in sorted_reports(store):
        if report.encounter is None or not report.encounter.reference:
            continue
        encounter = store.encounter_for(report.encounter.reference)
        when = report_datetime_or_now(report, now)

        appointment_type = "Follow-up"
        if encounter is not None:
            if encounter.type and encounter.type[0].text:
                appointment_type = encounter.type[0].text
            elif encounter.class_ is not None and encounter.class_.display:
                appointment_type = encounter.class_.display

        conclusion = first_concept(report.conclusion_code)
        unique[report.id] = Appointment(
            id=report.id,
            date=iso_date(when),
            time=display_time(when),
            type=appointment_type,
            status="Scheduled" if when > now else "Completed",
            doctor_name=_performer_name(report, store, use_display=True),
            doctor_specialty=_specialty_label(report),
            diagnosis=(conclusion.text if conclusion is not None else None) or _code_text(report),
        )
    return sorted(unique.values(), key=lambda appointment: appointment.date, reverse=True)


def build_doctor_diagnoses(store: ResourceStore, now: datetime) -> list[DoctorDiagnosis]:
    unique: dict[tuple[str, str, str], DoctorDiagnosis] = {}
    for report in sorted_reports(store):
        if not report.conclusion_code:
            continue
        diagnosis = DoctorDiagnosis(
            doctor_name=_performer_name(report, store, use_display=False),
            doctor_specialty=_specialty_label(report),
            date=iso_date(report_datetime_or_now(report, now)),
            diagnosis=codeable_text(report.conclusion_code[0]) or "",
            notes=_code_text(report),
        )
        unique[(diagnosis.doctor_name, diagnosis.date, diagnosis.diagnosis)] = diagnosis
    return sorted(unique.values(), key=lambda item: item.date, reverse=True)


def transform_fasten_health_data(
    store: Optional[ResourceStore] = None,
    path: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> HealthSummary:
    """Build the aggregate health summary from every resource in the bundle."""
    store = resolve_store(store, path)
    now = now or utcnow()

    medical_reports = [
        to_medical_report(report, store.observations, now)
        for report in sorted_reports(store)[:MAX_MEDICAL_REPORTS]
    ]
    appointments = build_appointments(store, now)
    diagnoses = build_doctor_diagnoses(store, now)

    return HealthSummary(
        treatment_plan=placeholder_treatment_plan(),
        medical_reports=medical_reports,
        medications=medications_with_status(store.medication_statements, ("active", "completed")),
        appointments=appointments or None,
        doctor_diagnoses=diagnoses or None,
    )


__all__ = [
    "MAX_MEDICAL_REPORTS",
    "placeholder_treatment_plan",
    "build_appointments",
    "build_doctor_diagnoses",
    "transform_fasten_health_data",
]
