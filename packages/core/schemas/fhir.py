from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel


class FhirModel(BaseModel):
    """Base for FHIR shapes: camelCase keys on the wire, unknown keys ignored.

    Numbers arriving where text is expected are kept as text. A field that
    still fails validation is dropped back to its default so one bad value
    never costs the whole resource; required fields still fail.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="wrap")
    @classmethod
    def _drop_invalid_fields(cls, data, handler):
        try:
            return handler(data)
        except ValidationError as exc:
            if not isinstance(data, dict):
                raise
            bad_keys = _invalid_optional_keys(cls, exc)
            if not bad_keys:
                raise
            return handler({key: value for key, value in data.items() if key not in bad_keys})


def _invalid_optional_keys(model: type[BaseModel], exc: ValidationError) -> set[str]:
    """Input keys (alias and field name) of optional fields named by validation errors."""
    keys: set[str] = set()
    for field_name, info in model.model_fields.items():
        if info.is_required():
            continue
        names = {field_name, info.alias or field_name}
        for error in exc.errors():
            if error["loc"] and error["loc"][0] in names:
                keys.update(names)
    return keys


class Coding(FhirModel):
    system: Optional[str] = None
    code: Optional[str] = None
    display: Optional[str] = None


class CodeableConcept(FhirModel):
    coding: List[Coding] = Field(default_factory=list)
    text: Optional[str] = None


class Reference(FhirModel):
    reference: Optional[str] = None
    type: Optional[str] = None
    display: Optional[str] = None


class Quantity(FhirModel):
    # some exports carry the comparator inside the value, e.g. "<5"
    value: Optional[Union[float, str]] = None
    comparator: Optional[str] = None
    unit: Optional[str] = None
    system: Optional[str] = None
    code: Optional[str] = None


class Period(FhirModel):
    start: Optional[str] = None
    end: Optional[str] = None


class Identifier(FhirModel):
    use: Optional[str] = None
    type: Optional[CodeableConcept] = None
    system: Optional[str] = None
    value: Optional[str] = None


class HumanName(FhirModel):
    use: Optional[str] = None
    text: Optional[str] = None
    family: Optional[str] = None
    given: List[str] = Field(default_factory=list)
    suffix: List[str] = Field(default_factory=list)


class ContactPoint(FhirModel):
    system: Optional[str] = None
    value: Optional[str] = None
    use: Optional[str] = None


class Address(FhirModel):
    use: Optional[str] = None
    text: Optional[str] = None
    line: List[str] = Field(default_factory=list)
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class Attachment(FhirModel):
    content_type: Optional[str] = None
    url: Optional[str] = None
    title: Optional[str] = None


class DiagnosticReport(FhirModel):
    resource_type: Literal["DiagnosticReport"] = "DiagnosticReport"
    id: str
    status: Optional[str] = None
    category: List[CodeableConcept] = Field(default_factory=list)
    code: Optional[CodeableConcept] = None
    subject: Optional[Reference] = None
    encounter: Optional[Reference] = None
    effective_date_time: Optional[str] = None
    issued: Optional[str] = None
    performer: List[Reference] = Field(default_factory=list)
    results_interpreter: List[Reference] = Field(default_factory=list)
    identifier: List[Identifier] = Field(default_factory=list)
    result: List[Reference] = Field(default_factory=list)
    conclusion_code: List[CodeableConcept] = Field(default_factory=list)
    presented_form: List[Attachment] = Field(default_factory=list)


class ObservationComponent(FhirModel):
    code: Optional[CodeableConcept] = None
    value_quantity: Optional[Quantity] = None
    value_string: Optional[str] = None
    value_codeable_concept: Optional[CodeableConcept] = None


class Observation(FhirModel):
    resource_type: Literal["Observation"] = "Observation"
    id: str
    status: Optional[str] = None
    code: Optional[CodeableConcept] = None
    value_quantity: Optional[Quantity] = None
    value_string: Optional[str] = None
    value_codeable_concept: Optional[CodeableConcept] = None
    effective_date_time: Optional[str] = None
    interpretation: List[CodeableConcept] = Field(default_factory=list)
    component: List[ObservationComponent] = Field(default_factory=list)


class PatientContact(FhirModel):
    relationship: List[CodeableConcept] = Field(default_factory=list)
    name: Optional[HumanName] = None
    telecom: List[ContactPoint] = Field(default_factory=list)


class Patient(FhirModel):
    resource_type: Literal["Patient"] = "Patient"
    id: str
    name: List[HumanName] = Field(default_factory=list)
    birth_date: Optional[str] = None
    gender: Optional[str] = None
    telecom: List[ContactPoint] = Field(default_factory=list)
    address: List[Address] = Field(default_factory=list)
    marital_status: Optional[CodeableConcept] = None
    contact: List[PatientContact] = Field(default_factory=list)
    managing_organization: Optional[Reference] = None


class Organization(FhirModel):
    resource_type: Literal["Organization"] = "Organization"
    id: str
    name: Optional[str] = None
    identifier: List[Identifier] = Field(default_factory=list)
    telecom: List[ContactPoint] = Field(default_factory=list)
    address: List[Address] = Field(default_factory=list)


class PractitionerQualification(FhirModel):
    code: Optional[CodeableConcept] = None


class Practitioner(FhirModel):
    resource_type: Literal["Practitioner"] = "Practitioner"
    id: str
    name: List[HumanName] = Field(default_factory=list)
    telecom: List[ContactPoint] = Field(default_factory=list)
    qualification: List[PractitionerQualification] = Field(default_factory=list)


class EncounterClass(FhirModel):
    code: Optional[str] = None
    display: Optional[str] = None


class EncounterParticipant(FhirModel):
    individual: Optional[Reference] = None


class Encounter(FhirModel):
    resource_type: Literal["Encounter"] = "Encounter"
    id: str
    status: Optional[str] = None
    class_: Optional[EncounterClass] = Field(default=None, alias="class")
    type: List[CodeableConcept] = Field(default_factory=list)
    period: Optional[Period] = None
    participant: List[EncounterParticipant] = Field(default_factory=list)


class TimingRepeat(FhirModel):
    frequency: Optional[float] = None
    period: Optional[float] = None
    period_unit: Optional[str] = None


class Timing(FhirModel):
    repeat: Optional[TimingRepeat] = None


class DoseAndRate(FhirModel):
    dose_quantity: Optional[Quantity] = None


class Dosage(FhirModel):
    text: Optional[str] = None
    timing: Optional[Timing] = None
    dose_and_rate: List[DoseAndRate] = Field(default_factory=list)


class MedicationStatement(FhirModel):
    resource_type: Literal["MedicationStatement"] = "MedicationStatement"
    id: str
    status: Optional[str] = None
    medication_codeable_concept: Optional[CodeableConcept] = None
    dosage: List[Dosage] = Field(default_factory=list)
    effective_period: Optional[Period] = None


FhirResource = Annotated[
    Union[
        DiagnosticReport,
        Observation,
        Patient,
        Practitioner,
        Encounter,
        MedicationStatement,
        Organization,
    ],
    Field(discriminator="resource_type"),
]

KNOWN_TYPES = {
    "DiagnosticReport",
    "Observation",
    "Patient",
    "Practitioner",
    "Encounter",
    "MedicationStatement",
    "Organization",
}


__all__ = [
    "Coding",
    "CodeableConcept",
    "Reference",
    "Quantity",
    "Period",
    "Identifier",
    "HumanName",
    "ContactPoint",
    "Address",
    "Attachment",
    "DiagnosticReport",
    "ObservationComponent",
    "Observation",
    "PatientContact",
    "Patient",
    "Organization",
    "PractitionerQualification",
    "Practitioner",
    "EncounterClass",
    "EncounterParticipant",
    "Encounter",
    "TimingRepeat",
    "Timing",
    "DoseAndRate",
    "Dosage",
    "MedicationStatement",
    "FhirResource",
    "KNOWN_TYPES",
]
