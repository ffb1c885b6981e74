from __future__ import annotations

from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from packages.core.config import settings
from packages.ingest.fasten.store import ResourceStore, get_store


def load_store() -> ResourceStore:
    return get_store(settings.bundle_path())


def ok(payload: Any) -> JSONResponse:
    return JSONResponse(status_code=200, content=jsonable_encoder(payload, by_alias=True))


def error(status: int, code: str, message: str, detail: Optional[dict] = None) -> JSONResponse:
    payload = {"error": {"code": code, "message": message, "detail": detail or {}}}
    return JSONResponse(status_code=status, content=payload)


def bundle_missing(exc: FileNotFoundError) -> JSONResponse:
    return error(404, "not_found", "bundle not found", {"path": str(settings.bundle_path()), "error": str(exc)})


__all__ = ["load_store", "ok", "error", "bundle_missing"]
