from datetime import datetime, timezone

from packages.ingest.fasten.store import store_from_raw
from packages.transform.provider_detail import (
    get_provider_appointments,
    get_provider_diagnoses_and_treatment_plans,
    get_provider_progress_notes,
)
from tests.fhir_samples import encounter, medication, practitioner, report

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _store(*extra: dict):
    return store_from_raw(
        [
            practitioner("p1", "Ann", "Lee"),
            practitioner("p2", "Bo", "Kim"),
            encounter("e1", "Office Visit"),
            encounter("e2", status="planned", **{"class": {"display": "ambulatory"}}),
            report("r1", performer="p1", effective="2024-11-20T09:00:00Z", encounter="e1", code="CBC"),
            report("r2", performer="p1", effective="2024-11-25T14:30:00Z", encounter="e1", conclusion="Anemia"),
            report(
                "shared",
                performer=[{"reference": "Practitioner/p2"}, {"reference": "Practitioner/p1"}],
                effective="2024-11-26T09:00:00Z",
                encounter="e1",
            ),
            report("no-encounter", performer="p1", effective="2024-06-01T09:00:00Z"),
            *extra,
        ]
    )


def test_appointments_newest_first_and_first_performer_only() -> None:
    appointments = get_provider_appointments("p1", _store(), now=NOW)
    assert [item.id for item in appointments] == ["r2", "r1"]
    assert appointments[0].date == "Nov 25, 2024"
    assert appointments[0].time == "2:30 PM"
    assert appointments[0].type == "Office Visit"
    assert appointments[0].status == "Completed"


def test_appointment_status_and_type_fallbacks() -> None:
    store = _store(
        report("future", performer="p1", effective="2025-02-01T09:00:00Z", encounter="e1"),
        report("planned", performer="p1", effective="2024-12-01T09:00:00Z", encounter="e2"),
        report("dangling", performer="p1", effective="2024-12-02T09:00:00Z", encounter="gone"),
    )
    appointments = {item.id: item for item in get_provider_appointments("p1", store, now=NOW)}
    assert appointments["future"].status == "Confirmed"
    assert appointments["planned"].status == "Pending"
    assert appointments["planned"].type == "ambulatory"
    assert "dangling" not in appointments


def test_treatment_plans() -> None:
    store = _store(
        report("r0", performer="p1", effective="2024-01-05T09:00:00Z", encounter="e1"),
        medication("m1", "Metformin", dose=500),
    )
    plans = get_provider_diagnoses_and_treatment_plans("p1", store, now=NOW)
    assert [plan.id for plan in plans] == ["r2", "r1", "no-encounter", "r0"]

    current, previous = plans[0], plans[1]
    assert current.title == "Current Diagnosis & Treatment Plan"
    assert current.date == "Started Nov 25, 2024"
    assert current.diagnosis == "Anemia"
    assert current.status == "Active"
    assert current.medications == ["Metformin 500mg"]

    assert previous.title == "Previous Diagnosis & Treatment Recommendations"
    assert previous.date == "Nov 20, 2024 - Nov 25, 2024"
    assert previous.diagnosis == "CBC"
    assert plans[3].date == "Jan 5, 2024"
    assert plans[3].status == "Completed"


def test_treatment_plans_without_medications() -> None:
    plans = get_provider_diagnoses_and_treatment_plans("p1", _store(), now=NOW)
    assert plans[0].medications == ["No medications recorded"]
    assert get_provider_diagnoses_and_treatment_plans("nobody", _store(), now=NOW) == []


def test_progress_notes() -> None:
    notes = get_provider_progress_notes("p1", _store(), now=NOW)
    assert [note.id for note in notes] == ["r2", "r1", "no-encounter"]
    assert notes[0].author == "Ann Lee"
    assert notes[0].note == "Lipid Panel"
    assert notes[1].note == "CBC"

    unknown = get_provider_progress_notes("ghost", _store(report("g1", performer="ghost")), now=NOW)
    assert unknown[0].author == "Unknown Provider"
