"""Instrument definitions for HAL and HAEMO-QoL-A.

Centralizes the question partitions used by the scorers. Changing a
clinical definition (adding a question, renaming a domain) is an edit to
this module only; the scorers iterate whatever ids they are given.
"""

from __future__ import annotations

from typing import Final

from haemo_scoring.domain.enums import HaemqolPart, HalDomain, HalSpecialGroup, InstrumentType
from haemo_scoring.domain.value_objects import QuestionGroup


def _ids(prefix: str, *numbers: int) -> tuple[str, ...]:
    return tuple(f"{prefix}{n}" for n in numbers)


def _hal(*numbers: int) -> tuple[str, ...]:
    return _ids("q", *numbers)


def _haemqol(first: int, last: int) -> tuple[str, ...]:
    return _ids("hq", *range(first, last + 1))


# Seven functional domains (partition of q1-q42).
HAL_DOMAINS: Final[tuple[QuestionGroup, ...]] = (
    QuestionGroup(
        key=HalDomain.LSKS,
        name="Lying, sitting, kneeling, standing",
        question_ids=_hal(*range(1, 9)),
    ),
    QuestionGroup(key=HalDomain.LEGS, name="Functions of the legs", question_ids=_hal(*range(9, 18))),
    QuestionGroup(key=HalDomain.ARMS, name="Functions of the arms", question_ids=_hal(*range(18, 22))),
    QuestionGroup(
        key=HalDomain.TRANS, name="Use of transportation", question_ids=_hal(*range(22, 25))
    ),
    QuestionGroup(key=HalDomain.SELFC, name="Self care", question_ids=_hal(*range(25, 30))),
    QuestionGroup(key=HalDomain.HOUSEH, name="Household tasks", question_ids=_hal(*range(30, 36))),
    QuestionGroup(
        key=HalDomain.LEISPO,
        name="Leisure activities and sports",
        question_ids=_hal(*range(36, 43)),
    ),
)

# Cross-cutting limb groups; these overlap the domains.
HAL_SPECIAL_GROUPS: Final[tuple[QuestionGroup, ...]] = (
    QuestionGroup(
        key=HalSpecialGroup.UPPER,
        name="Upper extremity activities",
        question_ids=_hal(18, 19, 20, 21, 25, 26, 27, 28, 29),
    ),
    QuestionGroup(
        key=HalSpecialGroup.LOWBAS,
        name="Basic lower extremity activities",
        question_ids=_hal(8, 9, 10, 11, 12, 13),
    ),
    QuestionGroup(
        key=HalSpecialGroup.LOWCOM,
        name="Complex lower extremity activities",
        question_ids=_hal(3, 4, 5, 6, 7, 14, 15, 16, 17, 22),
    ),
)

# Four parts (partition of hq1-hq41).
HAEMQOL_PARTS: Final[tuple[QuestionGroup, ...]] = (
    QuestionGroup(key=HaemqolPart.PART1, name="Physical health", question_ids=_haemqol(1, 9)),
    QuestionGroup(
        key=HaemqolPart.PART2, name="Feelings and emotions", question_ids=_haemqol(10, 20)
    ),
    QuestionGroup(key=HaemqolPart.PART3, name="Views of others", question_ids=_haemqol(21, 29)),
    QuestionGroup(key=HaemqolPart.PART4, name="Sports and school", question_ids=_haemqol(30, 41)),
)

QUESTION_IDS: Final[dict[InstrumentType, tuple[str, ...]]] = {
    InstrumentType.HAL: _hal(*range(1, 43)),
    InstrumentType.HAEMQOL: _haemqol(1, 41),
}

HAL_ANSWER_POINTS_PER_ITEM: Final[int] = 5
"""Width of the 1-6 HAL scale (best minus worst)."""

HAEMQOL_MAX_PER_ITEM: Final[int] = 4
"""Highest HAEMO-QoL-A answer value."""

HAL_MAX_SCORE: Final[float] = 100.0
