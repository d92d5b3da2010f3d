"""HAEMO-QoL-A scoring.

Each answered item contributes its raw value (0-4) to its part. There is
no inversion and no sentinel; an item is excluded only when unanswered.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from haemo_scoring.config.instruments import HAEMQOL_MAX_PER_ITEM
from haemo_scoring.domain.value_objects import ScoreResult
from haemo_scoring.scoring.rounding import round_one_decimal

if TYPE_CHECKING:
    from collections.abc import Iterable

    from haemo_scoring.domain.value_objects import AnswerSet


def part_score(question_ids: Iterable[str], answers: AnswerSet) -> ScoreResult:
    """Compute the score of one HAEMO-QoL-A part.

    Args:
        question_ids: Question ids of the part.
        answers: Parsed HAEMO-QoL-A answers.

    Returns:
        ScoreResult with the raw sum as ``score``, ``answered * 4`` as
        ``total`` and the one-decimal percentage of the two.
    """
    score = 0
    answered = 0
    for question_id in question_ids:
        value = answers.get(question_id)
        if value is None:
            continue
        score += value
        answered += 1

    total = answered * HAEMQOL_MAX_PER_ITEM
    percentage = round_one_decimal(100 * score / total) if total > 0 else 0.0
    return ScoreResult(score=float(score), total=total, percentage=percentage)


def grand_total(parts: Iterable[ScoreResult]) -> tuple[float, int]:
    """Combine part results into the questionnaire total.

    Args:
        parts: Computed part results.

    Returns:
        Tuple of (sum of part scores, sum of part totals).
    """
    score = 0.0
    max_score = 0
    for part in parts:
        score += part.score
        max_score += part.total
    return score, max_score
