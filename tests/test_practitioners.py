from packages.ingest.fasten.store import store_from_raw
from packages.transform.practitioners import (
    department_id,
    get_practitioner_by_id,
    group_practitioners_by_department,
    list_categorized_providers,
    list_practitioners,
)
from tests.fhir_samples import encounter, practitioner, report


def _store():
    return store_from_raw(
        [
            practitioner("p1", "Ann", "Lee", suffix=["MD"]),
            practitioner("p2"),
            practitioner("p3", "Bo", "Kim", telecom=[{"system": "phone", "value": ""}, {"system": "phone", "value": "555-0100"}]),
            report("r1", performer="p2", effective="2024-11-20T09:00:00Z"),
            report("r2", performer="p3", effective="2024-11-25T10:00:00Z"),
            encounter("e1", participant=[{"individual": {"reference": "Practitioner/p3"}}]),
        ]
    )


def test_list_practitioners_orders_by_engagement() -> None:
    providers = list_practitioners(_store())
    assert [provider.id for provider in providers] == ["p3", "p2", "p1"]
    assert [provider.engagement_count for provider in providers] == [2, 1, 0]


def test_list_practitioners_ties_keep_source_order() -> None:
    store = store_from_raw([practitioner("a"), practitioner("b"), practitioner("c")])
    assert [provider.id for provider in list_practitioners(store)] == ["a", "b", "c"]


def test_name_and_field_fallbacks() -> None:
    providers = {provider.id: provider for provider in list_practitioners(_store())}
    assert providers["p2"].name == "Provider 2"
    assert providers["p2"].qualifications == "Healthcare Provider"
    assert providers["p2"].specialty == "General"
    assert providers["p1"].name == "Ann Lee"
    assert providers["p1"].qualifications == "MD"
    assert providers["p3"].phone == "555-0100"
    assert providers["p3"].email == ""


def test_organization_performers_are_not_counted() -> None:
    store = store_from_raw(
        [
            practitioner("p1", "Ann", "Lee"),
            {
                "resourceType": "DiagnosticReport",
                "id": "r1",
                "performer": [{"reference": "Practitioner/p1", "type": "Organization"}],
            },
        ]
    )
    assert list_practitioners(store)[0].engagement_count == 0


def test_get_practitioner_by_id() -> None:
    store = _store()
    found = get_practitioner_by_id("p2", store)
    assert found is not None
    assert found.name == "Unknown Provider"
    assert found.engagement_count is None
    assert get_practitioner_by_id("missing", store) is None


def test_group_practitioners_by_department() -> None:
    store = store_from_raw(
        [
            practitioner("p1", "Ann", "Lee", suffix=["MD"]),
            practitioner("p2"),
            practitioner("p3", "Cardiology", "Clinic"),
        ]
    )
    departments = group_practitioners_by_department(store)
    assert [department.name for department in departments] == [
        "Cardiology",
        "Healthcare Providers",
        "Physicians",
    ]
    assert departments[1].id == "healthcare-providers"
    assert [doctor.id for doctor in departments[2].doctors] == ["p1"]


def test_department_id() -> None:
    assert department_id("Physician Assistants") == "physician-assistants"


def test_list_categorized_providers() -> None:
    store = store_from_raw(
        [
            practitioner("p1", "Jane", "Nurse", suffix=["RN"]),
            practitioner("p2", "Alex", "Smith"),
            report("r1", performer="p1", effective="2024-11-25T10:00:00Z"),
        ]
    )
    providers = list_categorized_providers(store)
    assert [provider.id for provider in providers] == ["p1", "p2"]

    nurse = providers[0]
    assert nurse.category == "Medical"
    assert nurse.sub_categories == ["Registered Nurses"]
    assert nurse.sub_category == "Registered Nurses"
    assert nurse.first_name == "Jane"
    assert nurse.last_name == "Nurse"
    assert nurse.last_visited == "2024-11-25T10:00:00+00:00"

    other = providers[1]
    assert other.sub_categories == ["Others"]
    assert other.last_visited is None
