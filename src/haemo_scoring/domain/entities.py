"""Domain entities supplied by the record collaborators.

Patients, medical records and questionnaire responses are read-only inputs
to the engine. They are plain frozen dataclasses; loose payload coercion
happens in ``haemo_scoring.schemas``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from haemo_scoring.domain.enums import InstrumentType


_EPOCH_MIN = datetime.min.replace(tzinfo=UTC)


def as_utc(timestamp: datetime) -> datetime:
    """Attach UTC to a naive timestamp; aware timestamps pass through."""
    return timestamp.replace(tzinfo=UTC) if timestamp.tzinfo is None else timestamp


@dataclass(frozen=True, slots=True)
class Patient:
    """Patient demographics (patient-editable)."""

    name: str | None = None
    age: float | None = None
    """Age in years."""

    weight: float | None = None
    """Weight in kg."""

    height: float | None = None
    """Height in cm."""

    id: str | None = None


@dataclass(frozen=True, slots=True)
class MedicalRecord:
    """Doctor-maintained treatment fields for a patient.

    Dates are kept as the strings the doctor entered; the engine copies
    them verbatim.
    """

    treatment_plan: str | None = None
    treatment_dose: float | str | None = None
    """Dose per administration (IU/kg)."""

    treatment_frequency: float | None = None
    """Administrations per week."""

    evaluation_date: str | None = None
    next_follow_up: str | None = None
    diagnosis_info: str | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class QuestionnaireResponse:
    """A stored questionnaire submission."""

    instrument: InstrumentType
    answers: Mapping[str, object] | str
    """Raw answers, either a mapping or its JSON-encoded form."""

    completed_at: datetime | None = None
    created_at: datetime | None = None
    id: str | None = None

    @property
    def timestamp(self) -> datetime | None:
        """Completion time, falling back to creation time.

        Returns:
            The best available timestamp, or None.
        """
        return self.completed_at or self.created_at

    @property
    def recency(self) -> datetime:
        """Timezone-aware sort key for picking the latest response.

        Naive timestamps are read as UTC; responses without any timestamp
        sort before all others.
        """
        return as_utc(self.timestamp) if self.timestamp is not None else _EPOCH_MIN


@dataclass(frozen=True, slots=True)
class PatientRecord:
    """Everything the exporter needs for one patient."""

    patient: Patient
    medical: MedicalRecord | None = None
    responses: tuple[QuestionnaireResponse, ...] = field(default=())
