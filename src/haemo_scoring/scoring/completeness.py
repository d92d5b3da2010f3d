"""Questionnaire completeness checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from haemo_scoring.config.instruments import QUESTION_IDS
from haemo_scoring.domain.value_objects import AnswerSet
from haemo_scoring.scoring.analysis import resolve_instrument

if TYPE_CHECKING:
    from collections.abc import Mapping

    from haemo_scoring.domain.enums import InstrumentType


def unanswered_questions(
    instrument: InstrumentType | str,
    answers: AnswerSet | Mapping[str, object],
) -> list[str]:
    """List the questions of an instrument that have no usable answer.

    A HAL item answered "not applicable" (8) counts as answered.

    Args:
        instrument: Instrument whose question pool is checked.
        answers: Parsed AnswerSet or raw answer mapping.

    Returns:
        Question ids in questionnaire order.
    """
    kind = resolve_instrument(instrument)
    answer_set = answers if isinstance(answers, AnswerSet) else AnswerSet.from_raw(kind, answers)
    return [qid for qid in QUESTION_IDS[kind] if qid not in answer_set]


def is_complete(
    instrument: InstrumentType | str,
    answers: AnswerSet | Mapping[str, object],
) -> bool:
    """Check whether every question of the instrument is answered."""
    return not unanswered_questions(instrument, answers)
