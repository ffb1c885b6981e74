from pathlib import Path

import pytest

from packages.core.schemas.fhir import Encounter, Practitioner
from packages.ingest.fasten.parser import parse_fhir_resources
from packages.ingest.fasten.store import (
    clear_store_cache,
    get_store,
    reference_id,
    store_from_raw,
)
from tests.fhir_samples import encounter, observation, practitioner, report, write_bundle


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_store_cache()
    yield
    clear_store_cache()


def test_reference_id() -> None:
    assert reference_id("Practitioner/abc") == "abc"
    assert reference_id("urn:uuid:abc") is None
    assert reference_id("Practitioner/") is None
    assert reference_id(None) is None
    assert reference_id("") is None


def test_parser_skips_unknown_and_invalid() -> None:
    resources = parse_fhir_resources(
        [
            {"resourceType": "Condition", "id": "c1"},
            {"resourceType": "Practitioner"},
            practitioner("p1", "Ann", "Lee"),
            {"resourceType": "Encounter", "id": "e1", "class": {"display": "ambulatory"}},
        ]
    )
    assert len(resources) == 2
    assert isinstance(resources[0], Practitioner)
    assert isinstance(resources[1], Encounter)
    assert resources[1].class_.display == "ambulatory"


def test_store_indexes_by_kind() -> None:
    store = store_from_raw(
        [
            practitioner("p1", "Ann", "Lee"),
            practitioner("p1", "Ann", "Updated"),
            observation("o1", "Glucose"),
            encounter("e1"),
            report("r1", performer="p1"),
        ]
    )
    assert len(store.practitioner_list) == 2
    assert store.practitioners["p1"].name[0].family == "Updated"
    assert store.observation_for("Observation/o1").id == "o1"
    assert store.encounter_for("Encounter/e1").id == "e1"
    assert store.practitioner_for("Practitioner/missing") is None
    assert len(store) == 5


def test_get_store_memoizes_until_content_changes(tmp_path: Path) -> None:
    path = write_bundle(tmp_path / "data.json", [practitioner("p1", "Ann", "Lee")])
    first = get_store(path)
    assert get_store(path) is first

    write_bundle(path, [practitioner("p1", "Ann", "Lee"), practitioner("p2", "Bo", "Kim")])
    second = get_store(path)
    assert second is not first
    assert len(second.practitioner_list) == 2


def test_clear_store_cache_forces_rebuild(tmp_path: Path) -> None:
    path = write_bundle(tmp_path / "data.json", [practitioner("p1")])
    first = get_store(path)
    clear_store_cache()
    assert get_store(path) is not first


def test_get_store_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        get_store(tmp_path / "absent.json")
