from __future__ import annotations

from typing import Any, Mapping, Optional

from packages.categorize import keywords as kw
from packages.categorize.rules import (
    CATEGORY_RULES,
    MEDICAL_FALLBACK,
    MEDICAL_RULES,
    contains_any,
)
from packages.core.schemas.categories import ProviderCategorizationConfig


def _config(category: str, labels: list[str]) -> ProviderCategorizationConfig:
    return ProviderCategorizationConfig(
        category=category, sub_category=labels[0], sub_categories=labels
    )


def _has_medical_signal(quals: str, specialty: str, name: str) -> bool:
    return (
        contains_any(quals, kw.MEDICAL_QUALIFICATION_TOKENS)
        or contains_any(name, kw.MEDICAL_NAME_TOKENS)
        or bool(specialty)
        or bool(quals)
    )


def medical_subcategories(text: str) -> list[str]:
    labels = [rule.label for rule in MEDICAL_RULES if rule.applies(text)]
    return labels or [MEDICAL_FALLBACK]


def categorize_provider(
    qualifications: Optional[str] = None,
    specialty: Optional[str] = None,
    name: Optional[str] = None,
) -> ProviderCategorizationConfig:
    """Assign one category and one or more subcategories from free-text provider fields.

    Non-medical categories are tried in order and the first with any matching
    group wins, carrying every group that matched. Anything else is Medical,
    where the subcategory rules collect all labels that apply.
    """
    quals = (qualifications or "").lower()
    specialty_text = (specialty or "").lower()
    name_text = (name or "").lower()
    combined = f"{quals} {specialty_text} {name_text}"

    for rule in CATEGORY_RULES:
        labels = rule.match(combined)
        if labels:
            return _config(rule.category, labels)

    if _has_medical_signal(quals, specialty_text, name_text):
        return _config("Medical", medical_subcategories(combined))
    return _config("Medical", [MEDICAL_FALLBACK])


def _field(provider: Any, key: str) -> Optional[str]:
    if isinstance(provider, Mapping):
        value = provider.get(key)
    else:
        value = getattr(provider, key, None)
    return value if isinstance(value, str) else None


def categorize(provider: Any) -> ProviderCategorizationConfig:
    """Categorize a mapping or object exposing qualifications/specialty/name."""
    return categorize_provider(
        qualifications=_field(provider, "qualifications"),
        specialty=_field(provider, "specialty"),
        name=_field(provider, "name"),
    )


__all__ = ["categorize", "categorize_provider", "medical_subcategories"]
