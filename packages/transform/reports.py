from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional

from packages.core.schemas.fhir import (
    DiagnosticReport,
    Encounter,
    Observation,
    ObservationComponent,
    Practitioner,
    Quantity,
    Reference,
)
from packages.core.schemas.views import MedicalReport, PerformingFacility, Report
from packages.ingest.fasten.store import ResourceStore, reference_id, resolve_store
from packages.transform.common import (
    codeable_text,
    display_date,
    display_datetime,
    first_concept,
    format_number,
    iso_date,
    parse_datetime,
    practitioner_name,
    report_datetime_or_now,
    report_sort_key,
    utcnow,
)

_STATUS_MAP = {
    "final": "Completed",
    "preliminary": "Pending",
    "registered": "Pending",
}


def _category_text(report: DiagnosticReport) -> Optional[str]:
    concept = first_concept(report.category)
    if concept is None:
        return None
    return codeable_text(concept) or ""


def bucket_category(
    category_text: Optional[str], lab_label: str, missing: str, unlabeled: str
) -> str:
    """Bucket a report category into Imaging/Pathology/lab, else keep the free text."""
    if category_text is None:
        return missing
    lowered = category_text.lower()
    if "imaging" in lowered or "radiology" in lowered:
        return "Imaging"
    if "pathology" in lowered:
        return "Pathology"
    if "lab" in lowered:
        return lab_label
    return category_text or unlabeled


def report_title(report: DiagnosticReport) -> str:
    return codeable_text(report.code) or "Medical Report"


def conclusion_text(report: DiagnosticReport) -> Optional[str]:
    return codeable_text(first_concept(report.conclusion_code))


def _quantity_line(label: str, quantity: Quantity) -> Optional[str]:
    if quantity.value is None or quantity.value == "":
        return None
    value = f"{quantity.comparator or ''}{format_number(quantity.value)}"
    return f"{label}: {value} {quantity.unit or ''}".strip()


def _component_line(component: ObservationComponent) -> Optional[str]:
    label = codeable_text(component.code) or ""
    if component.value_quantity is not None:
        return _quantity_line(label, component.value_quantity)
    if component.value_string:
        return f"{label}: {component.value_string}"
    if component.value_codeable_concept is not None and component.value_codeable_concept.text:
        return f"{label}: {component.value_codeable_concept.text}"
    return None


def observation_findings(observation: Observation) -> list[str]:
    """Render an observation as finding lines; component panels expand to one line each."""
    label = codeable_text(observation.code) or ""
    if observation.value_quantity is not None:
        line = _quantity_line(label, observation.value_quantity)
        return [line] if line else []
    if observation.value_string:
        return [f"{label}: {observation.value_string}"]
    if observation.component:
        lines = []
        for component in observation.component:
            line = _component_line(component)
            if line:
                lines.append(line)
        return lines
    # a coded value only stands in when there are no components to expand
    text = codeable_text(observation.value_codeable_concept)
    return [f"{label}: {text}"] if text else []


def to_medical_report(
    report: DiagnosticReport,
    observations: Mapping[str, Observation],
    now: Optional[datetime] = None,
) -> MedicalReport:
    when = report_datetime_or_now(report, now or utcnow())
    name = report_title(report)

    findings: list[str] = []
    for result in report.result:
        observation_id = reference_id(result.reference)
        observation = observations.get(observation_id) if observation_id else None
        if observation is not None:
            findings.extend(observation_findings(observation))

    summary = conclusion_text(report) or name
    return MedicalReport(
        date=iso_date(when),
        type=bucket_category(_category_text(report), "Lab Report", "Lab Report", "Medical Report"),
        summary=f"{name} - {summary}",
        findings=findings or [f"{name} completed"],
    )


def _resolve_reference_name(
    reference: Optional[Reference], practitioners: Mapping[str, Practitioner]
) -> Optional[str]:
    if reference is None:
        return None
    if reference.display:
        return reference.display
    practitioner_id = reference_id(reference.reference)
    if practitioner_id is None:
        return None
    return practitioner_name(practitioners.get(practitioner_id)) or None


def _identifier_value(report: DiagnosticReport, code: str, system_hint: Optional[str] = None) -> Optional[str]:
    for identifier in report.identifier:
        type_code = None
        if identifier.type is not None and identifier.type.coding:
            type_code = identifier.type.coding[0].code
        system_hit = bool(system_hint and identifier.system and system_hint in identifier.system)
        if type_code == code or system_hit:
            return identifier.value or None
    return None


def _interpreted_by(report: DiagnosticReport, practitioners: Mapping[str, Practitioner]) -> Optional[str]:
    if report.results_interpreter:
        return _resolve_reference_name(report.results_interpreter[0], practitioners)
    for performer in report.performer:
        if performer.type == "Practitioner":
            return performer.display or None
    return None


def _organization_performer(report: DiagnosticReport) -> Optional[Reference]:
    for performer in report.performer:
        if performer.type == "Organization":
            return performer
    return None


def _file_type(report: DiagnosticReport, category: str) -> Optional[str]:
    if not report.presented_form:
        return "DICOM" if category == "Imaging" else "PDF"
    content_type = report.presented_form[0].content_type or ""
    if "pdf" in content_type:
        return "PDF"
    if "dicom" in content_type or "image" in content_type:
        return "DICOM"
    return None


def to_report(
    report: DiagnosticReport,
    index: int,
    practitioners: Mapping[str, Practitioner],
    encounters: Mapping[str, Encounter],
    now: Optional[datetime] = None,
) -> Report:
    """Detailed reports-screen entry; ``index`` is 0-based and the id is ``index + 1``."""
    when = report_datetime_or_now(report, now or utcnow())
    category = bucket_category(
        _category_text(report), "Lab Reports", "Medical Records", "Medical Records"
    )
    title = report_title(report)

    provider = "Unknown Provider"
    if report.performer:
        performer = _organization_performer(report) or report.performer[0]
        provider = _resolve_reference_name(performer, practitioners) or provider

    impression = conclusion_text(report)
    interpreted_by = _interpreted_by(report, practitioners)
    issued = parse_datetime(report.issued)

    facility = None
    organization = _organization_performer(report)
    if organization is not None and organization.display:
        facility = PerformingFacility(name=organization.display)

    clinical_history = None
    encounter_id = reference_id(report.encounter.reference) if report.encounter else None
    encounter = encounters.get(encounter_id) if encounter_id else None
    if encounter is not None and encounter.type and encounter.type[0].text:
        clinical_history = encounter.type[0].text

    return Report(
        id=index + 1,
        title=title,
        category=category,
        provider=provider,
        date=display_date(when),
        status=_STATUS_MAP.get(report.status or "", "Available"),
        description=title,
        file_type=_file_type(report, category),
        exam=title,
        clinical_history=clinical_history,
        technique="Standard imaging protocol" if category == "Imaging" else None,
        findings=impression,
        impression=impression,
        interpreted_by=interpreted_by,
        signed_by=interpreted_by,
        signed_on=display_datetime(issued) if issued else None,
        accession_number=_identifier_value(report, "FILL", "accession-number"),
        order_number=_identifier_value(report, "PLAC"),
        performing_facility=facility,
    )


def sorted_reports(store: ResourceStore) -> list[DiagnosticReport]:
    """Reports newest first by effective (or issued) date; undated last."""
    return sorted(store.diagnostic_reports, key=report_sort_key, reverse=True)


def list_diagnostic_reports_as_reports(
    store: Optional[ResourceStore] = None,
    path: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> list[Report]:
    store = resolve_store(store, path)
    now = now or utcnow()
    return [
        to_report(report, index, store.practitioners, store.encounters, now)
        for index, report in enumerate(sorted_reports(store))
    ]


__all__ = [
    "bucket_category",
    "report_title",
    "conclusion_text",
    "observation_findings",
    "to_medical_report",
    "to_report",
    "sorted_reports",
    "list_diagnostic_reports_as_reports",
]
