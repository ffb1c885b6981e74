from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from apps.api.routers.common import error, load_store
from apps.api.routers.health_data import router as health_data_router
from apps.api.routers.providers import router as providers_router
from packages.core.config import settings

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Fasten Health Views API")
app.include_router(providers_router)
app.include_router(health_data_router)


@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s", request.url.path)
    return error(500, "internal_error", "failed to build view", {"error": str(exc)})


ENDPOINTS = [
    "/healthz",
    "/readyz",
    "/v1/providers",
    "/v1/reports",
    "/v1/summary",
    "/v1/medications",
    "/v1/patient",
    "/v1/clinics",
    "/v1/labs",
    "/v1/categorize",
]


@app.get("/")
def root() -> dict:
    return {"name": "fasten-health-views", "status": "ok", "endpoints": ENDPOINTS}


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


@app.get("/readyz")
def readyz() -> JSONResponse:
    try:
        store = load_store()
    except Exception as exc:
        logger.warning("readiness check failed: %s", exc)
        return JSONResponse(status_code=500, content={"status": "error", "detail": str(exc)})
    return JSONResponse(status_code=200, content={"status": "ok", "resources": len(store)})


__all__ = ["app"]
