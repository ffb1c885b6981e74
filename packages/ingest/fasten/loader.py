from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from packages.core.config import settings

logger = logging.getLogger(__name__)


def _flatten_bundle(payload: dict) -> list[dict]:
    entries = payload.get("entry", [])
    if not isinstance(entries, list):
        return []
    resources = []
    for entry in entries:
        if isinstance(entry, dict):
            resource = entry.get("resource")
            if isinstance(resource, dict):
                resources.append(resource)
    return resources


def coerce_resources(payload: Any) -> list[dict]:
    """Turn a decoded bundle payload into a flat list of resource dicts."""
    if isinstance(payload, list):
        return [item for item in payload if isinstance(item, dict)]
    if isinstance(payload, dict):
        if payload.get("resourceType") == "Bundle":
            return _flatten_bundle(payload)
        return [payload]
    logger.warning("Fasten Health data is not in expected format: %s", type(payload).__name__)
    return []


def source_label(path: Optional[Path] = None) -> str:
    """Log label for a bundle; the configured bundle is named by its data set."""
    if path is None:
        return f"{settings.bundle_name()} ({settings.bundle_path()})"
    return str(path)


def decode_bundle_bytes(data: bytes) -> str:
    # undecodable bytes become U+FFFD so a stray byte in one string never sinks the load
    return data.decode("utf-8", errors="replace")


def load_resources(path: Optional[Path] = None) -> list[dict]:
    """Load the FHIR resource array from a bundle file.

    A bare object is wrapped into a one-element list and a FHIR ``Bundle`` is
    flattened to its entries. Malformed content is logged and yields ``[]``.
    A missing file raises ``FileNotFoundError``.
    """
    source = source_label(path)
    path = Path(path) if path is not None else settings.bundle_path()
    if not path.is_file():
        raise FileNotFoundError(f"Bundle file not found: {path}")
    return parse_bundle_text(decode_bundle_bytes(path.read_bytes()), source=source)


def parse_bundle_text(text: str, source: str = "<memory>") -> list[dict]:
    try:
        payload = json.loads(text)
    except ValueError as exc:
        logger.warning("Error loading Fasten Health data from %s: %s", source, exc)
        return []
    resources = coerce_resources(payload)
    logger.info("Loaded %d resources from %s", len(resources), source)
    return resources


__all__ = [
    "load_resources",
    "parse_bundle_text",
    "coerce_resources",
    "decode_bundle_bytes",
    "source_label",
]
