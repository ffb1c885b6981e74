from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from apps.api.routers.common import bundle_missing, error, load_store, ok
from packages.transform import (
    get_fasten_medications,
    get_fasten_patient,
    list_clinics,
    list_diagnostic_reports_as_reports,
    list_labs,
    transform_fasten_health_data,
)

router = APIRouter(prefix="/v1")


@router.get("/reports")
def reports() -> JSONResponse:
    try:
        return ok(list_diagnostic_reports_as_reports(load_store()))
    except FileNotFoundError as exc:
        return bundle_missing(exc)


@router.get("/summary")
def summary() -> JSONResponse:
    try:
        return ok(transform_fasten_health_data(load_store()))
    except FileNotFoundError as exc:
        return bundle_missing(exc)


@router.get("/medications")
def medications() -> JSONResponse:
    try:
        return ok(get_fasten_medications(load_store()))
    except FileNotFoundError as exc:
        return bundle_missing(exc)


@router.get("/patient")
def patient() -> JSONResponse:
    try:
        found = get_fasten_patient(load_store())
    except FileNotFoundError as exc:
        return bundle_missing(exc)
    if found is None:
        return error(404, "not_found", "no patient in bundle")
    return ok(found)


@router.get("/clinics")
def clinics() -> JSONResponse:
    try:
        return ok(list_clinics(load_store()))
    except FileNotFoundError as exc:
        return bundle_missing(exc)


@router.get("/labs")
def labs() -> JSONResponse:
    try:
        return ok(list_labs(load_store()))
    except FileNotFoundError as exc:
        return bundle_missing(exc)
