"""Domain enumerations for Haemo Scoring.

This module defines core enumerations used throughout the domain layer:
- InstrumentType: The two supported questionnaires (HAL, HAEMO-QoL-A)
- HalAnswerCode: Degree-of-difficulty answer codes for HAL items
- HalDomain: The seven HAL functional domains
- HalSpecialGroup: The three cross-cutting HAL limb groups
- HaemqolPart: The four HAEMO-QoL-A parts
- AgeGroup: Age bucket used in export rows
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


class InstrumentType(StrEnum):
    """Questionnaire instruments handled by the engine.

    Values match the ``questionnaire_type`` stored with each response.
    """

    HAL = "hal"
    """Haemophilia Activities List (42 items)."""

    HAEMQOL = "haemqol"
    """HAEMO-QoL-A adult quality-of-life questionnaire (41 items)."""

    @property
    def question_prefix(self) -> str:
        """Prefix of the question identifiers for this instrument.

        Returns:
            ``"q"`` for HAL, ``"hq"`` for HAEMO-QoL-A.
        """
        return "q" if self is InstrumentType.HAL else "hq"

    @property
    def question_count(self) -> int:
        """Number of items in the instrument."""
        return 42 if self is InstrumentType.HAL else 41


class HalAnswerCode(IntEnum):
    """HAL answer code (degree of difficulty).

    Codes 1-6 run from worst to best. Code 8 marks an item that does not
    apply to the patient and is excluded from every aggregate.
    """

    IMPOSSIBLE = 1
    """Impossible to perform."""

    ALWAYS_DIFFICULT = 2
    """Possible but always with difficulty."""

    MOSTLY_DIFFICULT = 3
    """Difficult most of the time."""

    SOMETIMES_DIFFICULT = 4
    """Difficult some of the time."""

    RARELY_DIFFICULT = 5
    """Rarely difficult."""

    NEVER_DIFFICULT = 6
    """Never difficult."""

    NOT_APPLICABLE = 8
    """Not applicable / don't know (sentinel)."""

    @property
    def is_sentinel(self) -> bool:
        """Check if the code is the not-applicable sentinel.

        Returns:
            True for NOT_APPLICABLE.
        """
        return self is HalAnswerCode.NOT_APPLICABLE

    @property
    def reencoded(self) -> int:
        """Value on the inverted scale used by the special groups.

        Maps 1<->6, 2<->5, 3<->4. The sentinel maps to 0.

        Returns:
            The inverted value (1-6), or 0 for NOT_APPLICABLE.
        """
        if self.is_sentinel:
            return 0
        return 7 - int(self)


class HalDomain(StrEnum):
    """HAL functional domains."""

    LSKS = "LSKS"
    """Lying, sitting, kneeling, standing (q1-q8)."""

    LEGS = "LEGS"
    """Functions of the legs (q9-q17)."""

    ARMS = "ARMS"
    """Functions of the arms (q18-q21)."""

    TRANS = "TRANS"
    """Use of transportation (q22-q24)."""

    SELFC = "SELFC"
    """Self care (q25-q29)."""

    HOUSEH = "HOUSEH"
    """Household tasks (q30-q35)."""

    LEISPO = "LEISPO"
    """Leisure activities and sports (q36-q42)."""


class HalSpecialGroup(StrEnum):
    """Cross-cutting HAL groups scored on the inverted scale."""

    UPPER = "UPPER"
    """Upper extremity activities."""

    LOWBAS = "LOWBAS"
    """Basic lower extremity activities."""

    LOWCOM = "LOWCOM"
    """Complex lower extremity activities."""


class HaemqolPart(StrEnum):
    """HAEMO-QoL-A questionnaire parts."""

    PART1 = "PART1"
    PART2 = "PART2"
    PART3 = "PART3"
    PART4 = "PART4"


class AgeGroup(StrEnum):
    """Age bucket used in export rows.

    - Child: under 18
    - Adult: 18-59
    - Elderly: 60 and over
    """

    CHILD = "child"
    ADULT = "adult"
    ELDERLY = "elderly"

    @classmethod
    def from_age(cls, age: float) -> AgeGroup:
        """Determine the age group for an age in years.

        Args:
            age: Age in years.

        Returns:
            AgeGroup bucket for the age.
        """
        if age < 18:
            return cls.CHILD
        if age < 60:
            return cls.ADULT
        return cls.ELDERLY
