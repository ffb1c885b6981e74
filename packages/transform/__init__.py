from packages.transform.medications import get_fasten_medications
from packages.transform.organizations import list_clinics, list_labs
from packages.transform.patients import get_fasten_patient
from packages.transform.practitioners import (
    get_practitioner_by_id,
    group_practitioners_by_department,
    list_categorized_providers,
    list_practitioners,
)
from packages.transform.provider_detail import (
    get_provider_appointments,
    get_provider_diagnoses_and_treatment_plans,
    get_provider_progress_notes,
)
from packages.transform.reports import (
    list_diagnostic_reports_as_reports,
    to_medical_report,
    to_report,
)
from packages.transform.summary import transform_fasten_health_data

__all__ = [
    "get_fasten_medications",
    "get_fasten_patient",
    "list_clinics",
    "list_labs",
    "get_practitioner_by_id",
    "group_practitioners_by_department",
    "list_categorized_providers",
    "list_practitioners",
    "get_provider_appointments",
    "get_provider_diagnoses_and_treatment_plans",
    "get_provider_progress_notes",
    "list_diagnostic_reports_as_reports",
    "to_medical_report",
    "to_report",
    "transform_fasten_health_data",
]
