"""Domain models and entities for HAL and HAEMO-QoL-A scoring.

This module provides the core domain layer for Haemo Scoring, containing
pure Python objects with no external dependencies.

Modules:
    enums: Domain enumerations (InstrumentType, HalAnswerCode, etc.)
    value_objects: Immutable value types (AnswerSet, ScoreResult, etc.)
    entities: Record inputs (Patient, MedicalRecord, QuestionnaireResponse)
    exceptions: Domain-specific exceptions

Example:
    >>> from haemo_scoring.domain import AgeGroup, HalAnswerCode
    >>> AgeGroup.from_age(42)
    <AgeGroup.ADULT: 'adult'>
    >>> HalAnswerCode.IMPOSSIBLE.reencoded
    6
"""

from haemo_scoring.domain.entities import (
    MedicalRecord,
    Patient,
    PatientRecord,
    QuestionnaireResponse,
)
from haemo_scoring.domain.enums import (
    AgeGroup,
    HaemqolPart,
    HalAnswerCode,
    HalDomain,
    HalSpecialGroup,
    InstrumentType,
)
from haemo_scoring.domain.exceptions import (
    DomainError,
    InstrumentError,
    InstrumentMismatchError,
    UnknownInstrumentError,
)
from haemo_scoring.domain.value_objects import (
    AnalysisResult,
    AnswerSet,
    ExportRow,
    GroupScore,
    HaemqolAnalysis,
    HalAnalysis,
    QuestionGroup,
    ScoreResult,
    SpecialScores,
)

__all__ = [
    "AgeGroup",
    "AnalysisResult",
    "AnswerSet",
    "DomainError",
    "ExportRow",
    "GroupScore",
    "HaemqolAnalysis",
    "HaemqolPart",
    "HalAnalysis",
    "HalAnswerCode",
    "HalDomain",
    "HalSpecialGroup",
    "InstrumentError",
    "InstrumentMismatchError",
    "InstrumentType",
    "MedicalRecord",
    "Patient",
    "PatientRecord",
    "QuestionGroup",
    "QuestionnaireResponse",
    "ScoreResult",
    "SpecialScores",
    "UnknownInstrumentError",
]
