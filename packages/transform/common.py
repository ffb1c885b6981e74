from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Iterable, Optional, Union

from packages.core.schemas.fhir import (
    CodeableConcept,
    ContactPoint,
    DiagnosticReport,
    HumanName,
    Practitioner,
)
from packages.ingest.fasten.store import reference_id

EPOCH = datetime.min.replace(tzinfo=timezone.utc)

_COMPACT_OFFSET = re.compile(r"([+-]\d{2})(\d{2})$")
_FRACTION = re.compile(r"\.(\d+)")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse a FHIR dateTime/instant; partial dates pad to the first day, naive means UTC."""
    if not value or not isinstance(value, str):
        return None
    text = value.strip().replace("Z", "+00:00")
    if "T" in text:
        # fromisoformat before 3.11 wants hh:mm offsets and 3 or 6 fraction digits
        text = _COMPACT_OFFSET.sub(r"\1:\2", text)
        text = _FRACTION.sub(lambda match: "." + match.group(1).ljust(6, "0")[:6], text)
    if len(text) == 4 and text.isdigit():
        text = f"{text}-01-01"
    elif len(text) == 7 and text[4] == "-":
        text = f"{text}-01"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def report_datetime(report: DiagnosticReport) -> Optional[datetime]:
    return parse_datetime(report.effective_date_time) or parse_datetime(report.issued)


def report_datetime_or_now(report: DiagnosticReport, now: datetime) -> datetime:
    return report_datetime(report) or now


def report_sort_key(report: DiagnosticReport) -> datetime:
    # undated reports sort after dated ones in a descending sort
    return report_datetime(report) or EPOCH


def iso_date(value: datetime) -> str:
    return value.astimezone(timezone.utc).date().isoformat()


def display_date(value: datetime) -> str:
    return f"{value:%b} {value.day}, {value.year}"


def display_time(value: datetime) -> str:
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {meridiem}"


def display_datetime(value: datetime) -> str:
    return f"{display_date(value)}, {display_time(value)}"


def format_number(value: Optional[Union[float, str]]) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def codeable_text(concept: Optional[CodeableConcept]) -> Optional[str]:
    """``text`` first, then the first coding's display."""
    if concept is None:
        return None
    if concept.text:
        return concept.text
    if concept.coding and concept.coding[0].display:
        return concept.coding[0].display
    return None


def first_concept(concepts: list[CodeableConcept]) -> Optional[CodeableConcept]:
    return concepts[0] if concepts else None


def join_name(name: Optional[HumanName]) -> str:
    if name is None:
        return ""
    given = " ".join(part for part in name.given if part)
    return f"{given} {name.family or ''}".strip()


def human_name_text(name: Optional[HumanName]) -> str:
    if name is None:
        return ""
    return name.text or join_name(name)


def practitioner_name(practitioner: Optional[Practitioner]) -> str:
    if practitioner is None or not practitioner.name:
        return ""
    return human_name_text(practitioner.name[0])


def telecom_value(
    telecom: Iterable[ContactPoint], system: str, use: Optional[str] = None
) -> str:
    for point in telecom:
        if point.system != system:
            continue
        if use is not None and point.use != use:
            continue
        if point.value:
            return point.value
    return ""


def first_performer_id(report: DiagnosticReport) -> Optional[str]:
    if not report.performer:
        return None
    return reference_id(report.performer[0].reference)


def reports_for_practitioner(
    reports: Iterable[DiagnosticReport], practitioner_id: str
) -> list[DiagnosticReport]:
    """Reports whose first performer references the practitioner; other performers are ignored."""
    return [report for report in reports if first_performer_id(report) == practitioner_id]


__all__ = [
    "EPOCH",
    "utcnow",
    "parse_datetime",
    "report_datetime",
    "report_datetime_or_now",
    "report_sort_key",
    "iso_date",
    "display_date",
    "display_time",
    "display_datetime",
    "format_number",
    "codeable_text",
    "first_concept",
    "join_name",
    "human_name_text",
    "practitioner_name",
    "telecom_value",
    "first_performer_id",
    "reports_for_practitioner",
]
