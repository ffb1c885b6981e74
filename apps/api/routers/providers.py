from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from apps.api.routers.common import bundle_missing, error, load_store, ok
from packages.categorize import categorize_provider, get_categorized_providers_summary
from packages.core.schemas.categories import CategoryInput
from packages.transform import (
    get_practitioner_by_id,
    get_provider_appointments,
    get_provider_diagnoses_and_treatment_plans,
    get_provider_progress_notes,
    group_practitioners_by_department,
    list_categorized_providers,
    list_practitioners,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1")


@router.get("/providers")
def providers() -> JSONResponse:
    try:
        return ok(list_practitioners(load_store()))
    except FileNotFoundError as exc:
        return bundle_missing(exc)


@router.get("/providers/categorized")
def categorized_providers() -> JSONResponse:
    try:
        return ok(list_categorized_providers(load_store()))
    except FileNotFoundError as exc:
        return bundle_missing(exc)


@router.get("/providers/departments")
def departments() -> JSONResponse:
    try:
        return ok(group_practitioners_by_department(load_store()))
    except FileNotFoundError as exc:
        return bundle_missing(exc)


@router.get("/providers/categories/summary")
def categories_summary() -> JSONResponse:
    try:
        return ok(get_categorized_providers_summary(list_categorized_providers(load_store())))
    except FileNotFoundError as exc:
        return bundle_missing(exc)


@router.get("/providers/{practitioner_id}")
def provider(practitioner_id: str) -> JSONResponse:
    try:
        found = get_practitioner_by_id(practitioner_id, load_store())
    except FileNotFoundError as exc:
        return bundle_missing(exc)
    if found is None:
        return error(404, "not_found", "practitioner not found", {"id": practitioner_id})
    return ok(found)


@router.get("/providers/{practitioner_id}/treatment-plans")
def treatment_plans(practitioner_id: str) -> JSONResponse:
    try:
        return ok(get_provider_diagnoses_and_treatment_plans(practitioner_id, load_store()))
    except FileNotFoundError as exc:
        return bundle_missing(exc)


@router.get("/providers/{practitioner_id}/progress-notes")
def progress_notes(practitioner_id: str) -> JSONResponse:
    try:
        return ok(get_provider_progress_notes(practitioner_id, load_store()))
    except FileNotFoundError as exc:
        return bundle_missing(exc)


@router.get("/providers/{practitioner_id}/appointments")
def appointments(practitioner_id: str) -> JSONResponse:
    try:
        return ok(get_provider_appointments(practitioner_id, load_store()))
    except FileNotFoundError as exc:
        return bundle_missing(exc)


@router.post("/categorize")
def categorize(request: CategoryInput) -> JSONResponse:
    config = categorize_provider(
        qualifications=request.qualifications, specialty=request.specialty, name=request.name
    )
    logger.debug("categorized %r as %s/%s", request.name, config.category, config.sub_category)
    return ok(config)
