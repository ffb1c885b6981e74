from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

REAL_BUNDLE_FILE = "fasten-health-data.json"
MOCK_BUNDLE_FILE = "mock-fasten-health-data.json"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


class Settings:
    """Environment-backed settings, read at access time so tests can monkeypatch."""

    @property
    def data_path(self) -> str:
        return os.getenv("FASTEN_DATA_PATH", "")

    @property
    def data_dir(self) -> Path:
        return Path(os.getenv("FASTEN_DATA_DIR", "data"))

    @property
    def use_mock_data(self) -> bool:
        return _env_flag("FASTEN_USE_MOCK_DATA")

    @property
    def log_level(self) -> str:
        return os.getenv("LOG_LEVEL", "INFO").upper()

    def bundle_path(self) -> Path:
        if self.data_path:
            return Path(self.data_path)
        filename = MOCK_BUNDLE_FILE if self.use_mock_data else REAL_BUNDLE_FILE
        return self.data_dir / filename

    def bundle_name(self) -> str:
        return "mock" if self.use_mock_data else "fasten-health-data"


settings = Settings()


__all__ = ["Settings", "settings", "REAL_BUNDLE_FILE", "MOCK_BUNDLE_FILE"]
