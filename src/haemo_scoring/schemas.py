"""Pydantic models for payloads entering and leaving the engine.

Stored records are loosely typed (numbers saved as strings, blank form
fields saved as ""). These models coerce them into domain entities via
``to_entity``. Results are serialized with ``analysis_to_dict``.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from haemo_scoring.domain.entities import (
    MedicalRecord,
    Patient,
    PatientRecord,
    QuestionnaireResponse,
)
from haemo_scoring.domain.enums import InstrumentType

if TYPE_CHECKING:
    from haemo_scoring.domain.value_objects import AnalysisResult


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class PatientPayload(BaseModel):
    """Patient demographics as stored by the patient form."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None
    age: float | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, ge=0)
    height: float | None = Field(default=None, ge=0)

    @field_validator("age", "weight", "height", mode="before")
    @classmethod
    def blank_numbers(cls, value: object) -> object:
        return _blank_to_none(value)

    def to_entity(self) -> Patient:
        return Patient(
            id=self.id,
            name=self.name,
            age=self.age,
            weight=self.weight,
            height=self.height,
        )


class MedicalRecordPayload(BaseModel):
    """Doctor-maintained medical fields."""

    model_config = ConfigDict(extra="ignore")

    treatment_plan: str | None = None
    treatment_dose: float | str | None = None
    treatment_frequency: float | None = None
    evaluation_date: str | None = None
    next_follow_up: str | None = None
    diagnosis_info: str | None = None
    notes: str | None = None

    @field_validator("treatment_dose", "treatment_frequency", mode="before")
    @classmethod
    def blank_numbers(cls, value: object) -> object:
        return _blank_to_none(value)

    def to_entity(self) -> MedicalRecord:
        return MedicalRecord(
            treatment_plan=self.treatment_plan,
            treatment_dose=self.treatment_dose,
            treatment_frequency=self.treatment_frequency,
            evaluation_date=self.evaluation_date,
            next_follow_up=self.next_follow_up,
            diagnosis_info=self.diagnosis_info,
            notes=self.notes,
        )


class ResponsePayload(BaseModel):
    """A stored questionnaire response."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    questionnaire_type: InstrumentType
    answers: dict[str, Any] | str = Field(default_factory=dict)
    completed_at: datetime | None = None
    created_at: datetime | None = None

    @field_validator("completed_at", "created_at", mode="before")
    @classmethod
    def blank_timestamps(cls, value: object) -> object:
        return _blank_to_none(value)

    def to_entity(self) -> QuestionnaireResponse:
        return QuestionnaireResponse(
            id=self.id,
            instrument=self.questionnaire_type,
            answers=self.answers,
            completed_at=self.completed_at,
            created_at=self.created_at,
        )


class PatientRecordPayload(BaseModel):
    """One patient with medical record and stored responses."""

    patient: PatientPayload
    medical_info: MedicalRecordPayload | None = None
    responses: list[ResponsePayload] = Field(default_factory=list)

    def to_entity(self) -> PatientRecord:
        return PatientRecord(
            patient=self.patient.to_entity(),
            medical=self.medical_info.to_entity() if self.medical_info else None,
            responses=tuple(response.to_entity() for response in self.responses),
        )


class AnalyzeRequest(BaseModel):
    """Request body for scoring one answer set."""

    instrument: InstrumentType
    answers: dict[str, Any] = Field(default_factory=dict)


class ExportRequest(BaseModel):
    """Request body for building export rows."""

    records: list[PatientRecordPayload] = Field(default_factory=list)


class ExportResponse(BaseModel):
    """Export header and rows."""

    headers: list[str]
    rows: list[list[str]]


def analysis_to_dict(result: AnalysisResult) -> dict[str, Any]:
    """Serialize an analysis result to JSON-compatible primitives.

    Args:
        result: HAL or HAEMO-QoL-A analysis.

    Returns:
        Nested dict; the ``instrument`` tag is a plain string.
    """
    payload = asdict(result)
    payload["instrument"] = result.instrument.value
    return payload
