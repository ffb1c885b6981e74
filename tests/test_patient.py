from packages.ingest.fasten.store import store_from_raw
from packages.transform.patients import get_fasten_patient


def test_patient_without_telecom() -> None:
    store = store_from_raw(
        [
            {
                "resourceType": "Patient",
                "id": "pt1",
                "name": [{"use": "official", "given": ["Jenny"], "family": "Wilson"}],
            }
        ]
    )
    patient = get_fasten_patient(store)
    assert patient is not None
    assert patient.name == "Jenny Wilson"
    assert patient.phone == ""
    assert patient.email == ""
    assert patient.emergency_contact is None


def test_patient_prefers_official_name_and_home_contact() -> None:
    store = store_from_raw(
        [
            {
                "resourceType": "Patient",
                "id": "pt1",
                "name": [
                    {"use": "nickname", "given": ["Jen"]},
                    {"use": "official", "given": ["Jennifer", "Ann"], "family": "Wilson"},
                ],
                "gender": "female",
                "birthDate": "1980-04-02",
                "telecom": [
                    {"system": "phone", "value": "555-0001", "use": "work"},
                    {"system": "phone", "value": "555-0002", "use": "home"},
                    {"system": "email", "value": "jen@example.com"},
                ],
                "address": [
                    {"use": "work", "line": ["1 Office Park"], "city": "Elsewhere"},
                    {"use": "home", "line": ["12 Elm St"], "city": "Springfield", "state": "IL", "postalCode": "62701", "country": "US"},
                ],
                "maritalStatus": {"coding": [{"display": "Married"}]},
                "contact": [
                    {
                        "relationship": [{"coding": [{"code": "N", "display": "Next-of-Kin"}]}],
                        "name": {"given": ["Sam"], "family": "Wilson"},
                    },
                    {
                        "relationship": [{"coding": [{"code": "C", "display": "Emergency Contact"}]}],
                        "name": {"given": ["Pat"], "family": "Wilson"},
                        "telecom": [{"system": "phone", "value": "555-0999"}],
                    },
                ],
            },
            {"resourceType": "Patient", "id": "pt2", "name": []},
        ]
    )
    patient = get_fasten_patient(store)
    assert patient.id == "pt1"
    assert patient.name == "Jennifer Ann Wilson"
    assert patient.first_name == "Jennifer"
    assert patient.phone == "555-0002"
    assert patient.email == "jen@example.com"
    assert patient.gender == "Female"
    assert patient.date_of_birth == "1980-04-02"
    assert patient.address == "12 Elm St"
    assert patient.zip_code == "62701"
    assert patient.marital_status == "Married"
    assert patient.emergency_contact.name == "Pat Wilson"
    assert patient.emergency_contact.relationship == "Emergency Contact"
    assert patient.emergency_contact.phone == "555-0999"


def test_no_patient_returns_none() -> None:
    assert get_fasten_patient(store_from_raw([])) is None
