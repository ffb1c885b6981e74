from __future__ import annotations

# Matching is case-insensitive substring search, so short tokens such as
# "pa" or "ot" also hit inside longer words.

PCP_KEYWORDS = (
    "primary care",
    "family medicine",
    "family practice",
    "general practice",
    "internal medicine",
    "general practitioner",
    "gp",
    "family physician",
    "primary physician",
    "md",
    "do",
    "physician",
    "naturopath",
    "naturopathic",
    "chiropractor",
    "chiropractic",
    "dc",
)

NURSE_PRACTITIONER_KEYWORDS = (
    "nurse practitioner",
    "np",
    "n.p.",
    "n.p",
    "aprn",
    "apn",
    "fnp",
    "anp",
    "pnp",
)

SURGICAL_SPECIALIST_KEYWORDS = (
    "surgeon",
    "surgery",
    "surgical",
    "cardiothoracic",
    "neurosurgery",
    "orthopedic surgery",
    "plastic surgery",
    "general surgery",
    "vascular surgery",
    "urological surgery",
    "gynecological surgery",
    "otolaryngology",
    "ophthalmology",
)

SPECIALIST_KEYWORDS = (
    "specialist",
    "specialty",
    "cardiology",
    "cardiac",
    "neurology",
    "neurological",
    "dermatology",
    "dermatologist",
    "endocrinology",
    "endocrinologist",
    "gastroenterology",
    "gastroenterologist",
    "hematology",
    "hematologist",
    "oncology",
    "oncologist",
    "nephrology",
    "nephrologist",
    "pulmonology",
    "pulmonologist",
    "rheumatology",
    "rheumatologist",
    "urology",
    "urologist",
    "gynecology",
    "gynecologist",
    "obstetrics",
    "obstetrician",
    "pediatrics",
    "pediatrician",
    "psychiatry",
    "psychiatrist",
    "psychology",
    "psychologist",
    "orthopedics",
    "orthopedic",
    "ortho",
    "ophthalmology",
    "ophthalmologist",
    "otolaryngology",
    "ent",
    "allergy",
    "allergist",
    "immunology",
    "immunologist",
    "infectious disease",
    "radiology",
    "radiologist",
    "pathology",
    "pathologist",
    "anesthesiology",
    "anesthesiologist",
)

REGISTERED_NURSE_KEYWORDS = (
    "registered nurse",
    "rn",
    "nurse",
    "nursing",
    "r.n.",
    "r.n",
)

PHYSICIAN_ASSISTANT_KEYWORDS = (
    "physician assistant",
    "pa",
    "pa-c",
    "pa c",
    "physician's assistant",
)

THERAPIST_KEYWORDS = (
    "physical therapist",
    "pt",
    "occupational therapist",
    "ot",
    "physical therapy",
    "occupational therapy",
    "physiotherapy",
    "physiotherapist",
    "rehabilitation",
    "rehab",
)

MENTAL_HEALTH_GROUPS = (
    ("Psychiatrist", ("psychiatrist", "psychiatry")),
    ("Psychologist", ("psychologist", "psychology")),
    ("MFT", ("mft", "marriage", "family therapist")),
    ("LCSW", ("lcsw", "social worker", "licensed clinical")),
    ("AA", ("aa", "alcoholics anonymous")),
    ("Substance Abuse Counselors", ("substance abuse", "addiction", "counselor", "counsellor")),
)

FAMILY_GROUPS = (
    ("Spouse", ("spouse", "partner", "husband", "wife")),
    ("Children", ("children", "child", "son", "daughter")),
    ("Siblings", ("sibling", "brother", "sister")),
    ("Parents", ("parent", "mother", "father", "mom", "dad")),
    ("Cousins", ("cousin",)),
    ("Nephews", ("nephew",)),
    ("Niece", ("niece",)),
)

SOCIAL_GROUPS = (
    ("Friends", ("friend",)),
    ("Groups", ("group", "community")),
    ("Exercise", ("exercise", "fitness", "trainer")),
    ("Yoga", ("yoga", "yogi")),
    ("Music", ("music", "musician")),
    ("Concerts", ("concert",)),
    ("Education", ("education", "teacher", "tutor")),
)

FAITH_GROUPS = (
    ("Priest", ("priest", "catholic")),
    ("Rabbi", ("rabbi", "jewish")),
    ("Minister", ("minister", "pastor", "clergy")),
    ("Church", ("church", "christian")),
    ("Synagogue", ("synagogue", "temple")),
)

SERVICES_GROUPS = (
    ("Meals", ("meal", "food", "nutrition")),
    ("Caregivers", ("caregiver", "care")),
    ("Aids", ("aid", "assistant", "helper")),
    ("Housekeeper", ("housekeeper", "cleaning")),
    ("Maintenance", ("maintenance", "repair")),
    ("Delivery", ("delivery", "deliver")),
    ("Yard", ("yard", "landscaping", "gardening")),
)

# qualification tokens and name words that mark a provider as medical
MEDICAL_QUALIFICATION_TOKENS = ("md", "do", "np", "pa", "rn", "pt", "ot", "dc")
MEDICAL_NAME_TOKENS = ("doctor", "physician", "nurse", "therapist")
