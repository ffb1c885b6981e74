from datetime import datetime, timezone

from packages.ingest.fasten.store import store_from_raw
from packages.transform.summary import MAX_MEDICAL_REPORTS, transform_fasten_health_data
from tests.fhir_samples import encounter, medication, practitioner, report

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_empty_bundle_summary() -> None:
    summary = transform_fasten_health_data(store_from_raw([]), now=NOW)
    assert summary.treatment_plan.duration == "Ongoing"
    assert summary.medical_reports == []
    assert summary.medications == []
    assert summary.appointments is None
    assert summary.doctor_diagnoses is None


def test_summary_sections() -> None:
    store = store_from_raw(
        [
            practitioner("p1", "Ann", "Lee"),
            encounter("e1", "Office Visit"),
            report("r1", performer="p1", effective="2024-11-20T09:00:00Z", encounter="e1", conclusion="Anemia"),
            report(
                "r2",
                performer=[{"reference": "Practitioner/p1", "display": "Dr. Ann Lee"}],
                effective="2025-02-01T09:00:00Z",
                encounter="missing",
            ),
            report("r3", effective="2024-10-01T09:00:00Z", conclusion="Anemia"),
            report("r4", performer="p1", effective="2024-11-20T18:00:00Z", conclusion="Anemia"),
            medication("m1", "Metformin", dose=500),
            medication("m2", "Aspirin", status="completed"),
            medication("m3", "Old", status="stopped"),
        ]
    )
    summary = transform_fasten_health_data(store, now=NOW)

    assert [item.date for item in summary.medical_reports] == [
        "2025-02-01",
        "2024-11-20",
        "2024-11-20",
        "2024-10-01",
    ]
    assert [item.name for item in summary.medications] == ["Metformin", "Aspirin"]

    appointments = summary.appointments
    assert [item.id for item in appointments] == ["r2", "r1"]
    assert appointments[0].status == "Scheduled"
    assert appointments[0].type == "Follow-up"
    assert appointments[0].doctor_name == "Dr. Ann Lee"
    assert appointments[1].status == "Completed"
    assert appointments[1].type == "Office Visit"
    assert appointments[1].doctor_name == "Ann Lee"
    assert appointments[1].diagnosis == "Anemia"
    assert appointments[1].doctor_specialty == "Laboratory"

    diagnoses = summary.doctor_diagnoses
    assert [(item.doctor_name, item.date) for item in diagnoses] == [
        ("Ann Lee", "2024-11-20"),
        ("Unknown Doctor", "2024-10-01"),
    ]


def test_summary_caps_medical_reports() -> None:
    reports = [report(f"r{i}", effective=f"2024-01-{i + 1:02d}") for i in range(MAX_MEDICAL_REPORTS + 5)]
    summary = transform_fasten_health_data(store_from_raw(reports), now=NOW)
    assert len(summary.medical_reports) == MAX_MEDICAL_REPORTS
    assert summary.medical_reports[0].date == "2024-01-25"


def test_summary_serializes_camel_case() -> None:
    payload = transform_fasten_health_data(store_from_raw([]), now=NOW).model_dump(by_alias=True)
    assert set(payload) == {"treatmentPlan", "medicalReports", "medications", "appointments", "doctorDiagnoses"}


def test_same_day_appointments_newest_first() -> None:
    store = store_from_raw(
        [
            encounter("e1", "Office Visit"),
            report("morning", effective="2024-11-20T09:00:00Z", encounter="e1", conclusion="Anemia"),
            report("evening", effective="2024-11-20T18:00:00Z", encounter="e1", conclusion="Anemia", code="CBC"),
        ]
    )
    summary = transform_fasten_health_data(store, now=NOW)
    assert [item.id for item in summary.appointments] == ["evening", "morning"]
    # duplicates collapse onto the oldest report of the day
    assert [item.notes for item in summary.doctor_diagnoses] == ["Lipid Panel"]
