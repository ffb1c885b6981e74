from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from apps.api.main import app
from packages.ingest.fasten.store import clear_store_cache
from tests.fhir_samples import practitioner, write_bundle


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_store_cache()
    yield
    clear_store_cache()


def test_healthz() -> None:
    client = TestClient(app)
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_readyz(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = write_bundle(tmp_path / "data.json", [practitioner("p1", "Ann", "Lee")])
    monkeypatch.setenv("FASTEN_DATA_PATH", str(path))
    client = TestClient(app)
    response = client.get("/readyz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "resources": 1}


def test_readyz_missing_bundle(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FASTEN_DATA_PATH", str(tmp_path / "absent.json"))
    client = TestClient(app)
    response = client.get("/readyz")
    assert response.status_code == 500
    assert response.json()["status"] == "error"
