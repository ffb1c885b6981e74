from __future__ import annotations

import logging
from typing import Iterable

from pydantic import TypeAdapter, ValidationError

from packages.core.schemas.fhir import KNOWN_TYPES, FhirResource

logger = logging.getLogger(__name__)

_RESOURCE_ADAPTER: TypeAdapter = TypeAdapter(FhirResource)


def parse_resource(raw: dict):
    """Validate one raw resource dict, returning ``None`` when it cannot be used."""
    resource_type = raw.get("resourceType")
    if resource_type not in KNOWN_TYPES:
        logger.debug("Skipping unsupported resourceType %r", resource_type)
        return None
    try:
        return _RESOURCE_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        logger.warning(
            "Skipping invalid %s/%s: %d validation error(s)",
            resource_type,
            raw.get("id", "?"),
            exc.error_count(),
        )
        return None


def parse_fhir_resources(resources: Iterable[dict]) -> list:
    """Parse raw dicts into typed resources, keeping source order."""
    parsed = []
    for raw in resources:
        if not isinstance(raw, dict):
            continue
        resource = parse_resource(raw)
        if resource is not None:
            parsed.append(resource)
    return parsed


__all__ = ["parse_resource", "parse_fhir_resources"]
