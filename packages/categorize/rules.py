from __future__ import annotations

from dataclasses import dataclass, field

from packages.categorize import keywords as kw


def contains_any(text: str, needles: tuple[str, ...]) -> bool:
    return any(needle in text for needle in needles)


@dataclass(frozen=True)
class SubcategoryGroup:
    label: str
    keywords: tuple[str, ...]

    def matches(self, text: str) -> bool:
        return contains_any(text, self.keywords)


@dataclass(frozen=True)
class CategoryRule:
    """A non-medical category: every group that matches contributes a label."""
    category: str
    groups: tuple[SubcategoryGroup, ...]

    def match(self, text: str) -> list[str]:
        return [group.label for group in self.groups if group.matches(text)]


@dataclass(frozen=True)
class MedicalRule:
    """A medical subcategory that fires on its keywords unless a guard family also hits."""
    label: str
    family: str
    guards: tuple[str, ...] = field(default_factory=tuple)

    def applies(self, text: str) -> bool:
        if not contains_any(text, MEDICAL_FAMILIES[self.family]):
            return False
        return not any(contains_any(text, MEDICAL_FAMILIES[guard]) for guard in self.guards)


def _groups(pairs) -> tuple[SubcategoryGroup, ...]:
    return tuple(SubcategoryGroup(label, tuple(words)) for label, words in pairs)


# evaluated top to bottom, first category with any match wins
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule("Mental Health", _groups(kw.MENTAL_HEALTH_GROUPS)),
    CategoryRule("Family", _groups(kw.FAMILY_GROUPS)),
    CategoryRule("Social/Leisure", _groups(kw.SOCIAL_GROUPS)),
    CategoryRule("Faith", _groups(kw.FAITH_GROUPS)),
    CategoryRule("Services", _groups(kw.SERVICES_GROUPS)),
)

MEDICAL_FAMILIES: dict[str, tuple[str, ...]] = {
    "np": kw.NURSE_PRACTITIONER_KEYWORDS,
    "rn": kw.REGISTERED_NURSE_KEYWORDS,
    "pa": kw.PHYSICIAN_ASSISTANT_KEYWORDS,
    "therapist": kw.THERAPIST_KEYWORDS,
    "surgical": kw.SURGICAL_SPECIALIST_KEYWORDS,
    "specialist": kw.SPECIALIST_KEYWORDS,
    "pcp": kw.PCP_KEYWORDS,
}

# evaluated top to bottom, every rule that applies is collected in order;
# the guards make the first four mutually exclusive
MEDICAL_RULES: tuple[MedicalRule, ...] = (
    MedicalRule("Nurse Practitioners", "np", guards=("pa", "therapist")),
    MedicalRule("Registered Nurses", "rn", guards=("np", "pa", "therapist")),
    MedicalRule("Physician Assistants", "pa", guards=("rn", "np", "therapist")),
    MedicalRule("Physical/Occupational Therapists", "therapist", guards=("rn", "np", "pa")),
    MedicalRule("Surgical Specialists", "surgical"),
    MedicalRule("All Specialists", "specialist"),
    MedicalRule("PCP", "pcp"),
)

MEDICAL_FALLBACK = "Others"


__all__ = [
    "contains_any",
    "SubcategoryGroup",
    "CategoryRule",
    "MedicalRule",
    "CATEGORY_RULES",
    "MEDICAL_FAMILIES",
    "MEDICAL_RULES",
    "MEDICAL_FALLBACK",
]
