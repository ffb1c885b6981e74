from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ProviderCategory = Literal[
    "Mental Health",
    "Family",
    "Social/Leisure",
    "Faith",
    "Services",
    "Medical",
]

MedicalSubcategory = Literal[
    "PCP",
    "All Specialists",
    "Surgical Specialists",
    "Registered Nurses",
    "Nurse Practitioners",
    "Physician Assistants",
    "Physical/Occupational Therapists",
    "Others",
]

ALL_CATEGORIES: tuple[str, ...] = (
    "Mental Health",
    "Family",
    "Social/Leisure",
    "Faith",
    "Services",
    "Medical",
)

ALL_MEDICAL_SUBCATEGORIES: tuple[str, ...] = (
    "PCP",
    "All Specialists",
    "Surgical Specialists",
    "Registered Nurses",
    "Nurse Practitioners",
    "Physician Assistants",
    "Physical/Occupational Therapists",
    "Others",
)


class ProviderCategorizationConfig(BaseModel):
    """Category plus primary and full subcategory labels for one provider."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    category: ProviderCategory
    # primary label, always sub_categories[0]
    sub_category: Optional[str] = None
    sub_categories: List[str] = Field(default_factory=list)


class CategoryInput(BaseModel):
    qualifications: Optional[str] = None
    specialty: Optional[str] = None
    name: Optional[str] = None


class SubcategoryCount(BaseModel):
    name: str
    count: int


class CategoryCount(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    count: int
    sub_categories: Optional[List[SubcategoryCount]] = None


class CategorizedProvidersSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    categories: List[CategoryCount] = Field(default_factory=list)
    total_providers: int = 0


__all__ = [
    "ProviderCategory",
    "MedicalSubcategory",
    "ALL_CATEGORIES",
    "ALL_MEDICAL_SUBCATEGORIES",
    "ProviderCategorizationConfig",
    "CategoryInput",
    "SubcategoryCount",
    "CategoryCount",
    "CategorizedProvidersSummary",
]
