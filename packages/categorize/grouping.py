from __future__ import annotations

from typing import Iterable, TypeVar

from packages.core.schemas.categories import (
    ALL_CATEGORIES,
    ALL_MEDICAL_SUBCATEGORIES,
    CategorizedProvidersSummary,
    CategoryCount,
    SubcategoryCount,
)

T = TypeVar("T")


def _category(provider) -> str:
    return getattr(provider, "category", None) or "Medical"


def _primary(provider) -> str:
    return getattr(provider, "sub_category", None) or "Others"


def _all_subcategories(provider) -> list[str]:
    labels = getattr(provider, "sub_categories", None)
    return list(labels) if labels else [_primary(provider)]


def get_all_categories() -> list[str]:
    return list(ALL_CATEGORIES)


def get_all_medical_subcategories() -> list[str]:
    return list(ALL_MEDICAL_SUBCATEGORIES)


def group_providers_by_category(providers: Iterable[T]) -> dict[str, dict[str, list[T]]]:
    """category -> subcategory -> providers; a provider is listed under each of its subcategories."""
    grouped: dict[str, dict[str, list[T]]] = {}
    for provider in providers:
        bucket = grouped.setdefault(_category(provider), {})
        for label in _all_subcategories(provider):
            bucket.setdefault(label, []).append(provider)
    return grouped


def get_providers_by_category(providers: Iterable[T], category: str) -> list[T]:
    return [provider for provider in providers if _category(provider) == category]


def get_providers_by_medical_subcategory(providers: Iterable[T], sub_category: str) -> list[T]:
    return [
        provider
        for provider in providers
        if _category(provider) == "Medical" and _primary(provider) == sub_category
    ]


def get_available_categories(providers: Iterable[T]) -> list[str]:
    return sorted({_category(provider) for provider in providers})


def get_available_medical_subcategories(providers: Iterable[T]) -> list[str]:
    return sorted({_primary(provider) for provider in providers if _category(provider) == "Medical"})


def get_categorized_providers_summary(providers: Iterable[T]) -> CategorizedProvidersSummary:
    """Counts per category (and per subcategory for Medical) keyed by primary subcategory."""
    providers = list(providers)
    grouped: dict[str, dict[str, int]] = {}
    for provider in providers:
        bucket = grouped.setdefault(_category(provider), {})
        label = _primary(provider)
        bucket[label] = bucket.get(label, 0) + 1

    categories = []
    for category in sorted(grouped):
        breakdown = [
            SubcategoryCount(name=label, count=grouped[category][label])
            for label in sorted(grouped[category])
        ]
        categories.append(
            CategoryCount(
                name=category,
                count=sum(item.count for item in breakdown),
                sub_categories=breakdown if category == "Medical" else None,
            )
        )
    return CategorizedProvidersSummary(categories=categories, total_providers=len(providers))


__all__ = [
    "get_all_categories",
    "get_all_medical_subcategories",
    "group_providers_by_category",
    "get_providers_by_category",
    "get_providers_by_medical_subcategory",
    "get_available_categories",
    "get_available_medical_subcategories",
    "get_categorized_providers_summary",
]
