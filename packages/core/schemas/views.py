from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ViewModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Provider(ViewModel):
    id: str
    name: str
    qualifications: Optional[str] = None
    specialty: Optional[str] = None
    photo_url: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    # ranking only, recomputed per query
    engagement_count: Optional[int] = None


class CategorizedProvider(Provider):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    category: str = "Medical"
    sub_category: Optional[str] = None
    sub_categories: List[str] = Field(default_factory=list)
    last_visited: Optional[str] = None


class Department(ViewModel):
    id: str
    name: str
    doctors: List[Provider] = Field(default_factory=list)


class EmergencyContact(ViewModel):
    name: Optional[str] = None
    relationship: Optional[str] = None
    phone: Optional[str] = None


class Patient(ViewModel):
    id: str
    name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    marital_status: Optional[str] = None
    photo_url: Optional[str] = None
    emergency_contact: Optional[EmergencyContact] = None


class MedicalReport(ViewModel):
    date: str
    type: str
    summary: str
    findings: List[str] = Field(default_factory=list)


class PerformingFacility(ViewModel):
    name: str
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    phone: Optional[str] = None


class Report(ViewModel):
    """Detailed report entry for the reports screen."""
    id: int
    title: str
    category: str
    provider: str
    date: str
    status: Literal["Available", "Pending", "Completed"]
    description: Optional[str] = None
    file_type: Optional[str] = None
    exam: Optional[str] = None
    clinical_history: Optional[str] = None
    technique: Optional[str] = None
    findings: Optional[str] = None
    impression: Optional[str] = None
    interpreted_by: Optional[str] = None
    signed_by: Optional[str] = None
    signed_on: Optional[str] = None
    accession_number: Optional[str] = None
    order_number: Optional[str] = None
    performing_facility: Optional[PerformingFacility] = None


class Appointment(ViewModel):
    id: str
    date: str
    time: str
    type: str
    status: str
    doctor_name: str
    doctor_specialty: Optional[str] = None
    diagnosis: Optional[str] = None
    notes: Optional[str] = None


class Medication(ViewModel):
    name: str
    dosage: str
    frequency: str
    purpose: str


class DoctorDiagnosis(ViewModel):
    doctor_name: str
    doctor_specialty: str
    date: str
    diagnosis: str
    notes: Optional[str] = None
    treatment_recommendations: Optional[List[str]] = None


class TreatmentPlan(ViewModel):
    plan: str
    duration: str
    goals: List[str] = Field(default_factory=list)


class HealthSummary(ViewModel):
    """Aggregate view handed to the home and summary screens."""
    treatment_plan: TreatmentPlan
    medical_reports: List[MedicalReport] = Field(default_factory=list)
    medications: List[Medication] = Field(default_factory=list)
    appointments: Optional[List[Appointment]] = None
    doctor_diagnoses: Optional[List[DoctorDiagnosis]] = None


class TreatmentPlanItem(ViewModel):
    id: str
    title: str
    status: Literal["Active", "Completed"]
    date: str
    diagnosis: str
    description: str
    medications: List[str] = Field(default_factory=list)


class ProgressNote(ViewModel):
    id: str
    date: str
    time: str
    author: str
    note: str


class ProviderAppointment(ViewModel):
    id: str
    date: str
    time: str
    type: str
    status: Literal["Confirmed", "Pending", "Completed"]


class OrganizationAddress(ViewModel):
    line: List[str] = Field(default_factory=list)
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


class Lab(ViewModel):
    id: str
    name: str
    identifier: Optional[str] = None
    address: Optional[OrganizationAddress] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class Clinic(Lab):
    type: Literal["clinic"] = "clinic"


__all__ = [
    "ViewModel",
    "Provider",
    "CategorizedProvider",
    "Department",
    "EmergencyContact",
    "Patient",
    "MedicalReport",
    "PerformingFacility",
    "Report",
    "Appointment",
    "Medication",
    "DoctorDiagnosis",
    "TreatmentPlan",
    "HealthSummary",
    "TreatmentPlanItem",
    "ProgressNote",
    "ProviderAppointment",
    "OrganizationAddress",
    "Lab",
    "Clinic",
]
