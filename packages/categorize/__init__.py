from packages.categorize.engine import categorize, categorize_provider
from packages.categorize.grouping import (
    get_all_categories,
    get_all_medical_subcategories,
    get_available_categories,
    get_available_medical_subcategories,
    get_categorized_providers_summary,
    get_providers_by_category,
    get_providers_by_medical_subcategory,
    group_providers_by_category,
)

__all__ = [
    "categorize",
    "categorize_provider",
    "get_all_categories",
    "get_all_medical_subcategories",
    "get_available_categories",
    "get_available_medical_subcategories",
    "get_categorized_providers_summary",
    "get_providers_by_category",
    "get_providers_by_medical_subcategory",
    "group_providers_by_category",
]
