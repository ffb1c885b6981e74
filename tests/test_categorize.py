from packages.categorize import categorize, categorize_provider
from packages.categorize.engine import medical_subcategories
from packages.categorize.rules import MEDICAL_RULES


def test_registered_nurse_has_no_specialist_leakage() -> None:
    config = categorize({"qualifications": "RN", "name": "Jane Nurse"})
    assert config.category == "Medical"
    assert config.sub_categories == ["Registered Nurses"]
    assert config.sub_category == "Registered Nurses"


def test_surgeon_collects_every_matching_label() -> None:
    config = categorize_provider(qualifications="MD", specialty="Cardiology", name="Dr. Heart Surgeon")
    assert config.category == "Medical"
    assert config.sub_categories == ["Surgical Specialists", "All Specialists", "PCP"]


def test_surgeon_without_md_skips_pcp() -> None:
    config = categorize_provider(specialty="Cardiology", name="Dr. Heart Surgeon")
    assert config.sub_categories == ["Surgical Specialists", "All Specialists"]
    assert config.sub_category == "Surgical Specialists"


def test_nurse_practitioner_suppresses_registered_nurse() -> None:
    config = categorize_provider(qualifications="Nurse Practitioner", name="Kim Lee")
    assert config.sub_categories == ["Nurse Practitioners"]


def test_non_medical_category_carries_all_matching_groups() -> None:
    config = categorize_provider(name="Pastor John, church minister")
    assert config.category == "Faith"
    assert config.sub_categories == ["Minister", "Church"]
    assert config.sub_category == "Minister"


def test_earlier_category_wins() -> None:
    config = categorize_provider(qualifications="Psychiatrist", name="Dr. Rivera")
    assert config.category == "Mental Health"
    assert config.sub_categories == ["Psychiatrist"]


def test_services_substring_match() -> None:
    config = categorize_provider(name="Home care")
    assert config.category == "Services"
    assert config.sub_categories == ["Caregivers"]


def test_no_signal_falls_back_to_others() -> None:
    config = categorize_provider(name="Alex Smith")
    assert config.category == "Medical"
    assert config.sub_categories == ["Others"]
    assert categorize_provider().sub_categories == ["Others"]


def test_categorize_accepts_objects() -> None:
    class _Provider:
        qualifications = "RN"
        specialty = None
        name = "Jane Nurse"

    assert categorize(_Provider()).sub_categories == ["Registered Nurses"]


def test_medical_rule_order_is_stable() -> None:
    assert [rule.label for rule in MEDICAL_RULES] == [
        "Nurse Practitioners",
        "Registered Nurses",
        "Physician Assistants",
        "Physical/Occupational Therapists",
        "Surgical Specialists",
        "All Specialists",
        "PCP",
    ]
    assert medical_subcategories("zzz") == ["Others"]


def test_camel_case_serialization() -> None:
    payload = categorize_provider(qualifications="RN", name="Jane Nurse").model_dump(by_alias=True)
    assert payload == {
        "category": "Medical",
        "subCategory": "Registered Nurses",
        "subCategories": ["Registered Nurses"],
    }
