"""HAL (Haemophilia Activities List) scoring.

Three computations, all on the 1-6 difficulty scale with code 8 excluded:

- ``normalized_domain_score``: 0-100 ability score for one functional domain.
- ``reencoded_group_score``: 0-100 score for a special limb group, computed
  on the inverted scale (1<->6, 2<->5, 3<->4) as the manual prescribes.
- ``national_standard_total``: the composite score pooled over the raw
  answers of every domain.

The domain and special-group formulas give the same direction (higher is
more able) but are evaluated along different arithmetic paths and must stay
separate: floating point results differ in the last bits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from haemo_scoring.config.instruments import HAL_ANSWER_POINTS_PER_ITEM
from haemo_scoring.domain.enums import HalAnswerCode
from haemo_scoring.domain.value_objects import ScoreResult
from haemo_scoring.scoring.rounding import clamp, round_one_decimal

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from haemo_scoring.domain.value_objects import AnswerSet, QuestionGroup


def _accumulate(
    question_ids: Iterable[str],
    answers: AnswerSet,
    transform: Callable[[HalAnswerCode], int] = int,
) -> tuple[int, int]:
    """Sum valid answers over question ids.

    Returns:
        Tuple of (sum of transformed values, number of valid answers).
    """
    total = 0
    valid = 0
    for question_id in question_ids:
        value = answers.get(question_id)
        if value is None:
            continue
        try:
            code = HalAnswerCode(value)
        except ValueError:
            continue
        if code.is_sentinel:
            continue
        total += transform(code)
        valid += 1
    return total, valid


def _normalize(total: int, valid: int) -> float:
    raw = ((total - valid) * 100) / (HAL_ANSWER_POINTS_PER_ITEM * valid)
    return round_one_decimal(clamp(raw))


def normalized_domain_score(question_ids: Iterable[str], answers: AnswerSet) -> ScoreResult:
    """Compute the 0-100 ability score for one HAL domain.

    Unanswered and not-applicable items shrink the denominator instead of
    counting as failures, so a patient is scored only on what they answered.

    Args:
        question_ids: Question ids of the domain.
        answers: Parsed HAL answers.

    Returns:
        ScoreResult with ``total = valid * 5`` and ``percentage == score``.
        A domain without valid answers yields the empty result.
    """
    total, valid = _accumulate(question_ids, answers)
    if valid == 0:
        return ScoreResult.empty()

    score = _normalize(total, valid)
    return ScoreResult(score=score, total=valid * HAL_ANSWER_POINTS_PER_ITEM, percentage=score)


def reencoded_group_score(question_ids: Iterable[str], answers: AnswerSet) -> float | None:
    """Compute the 0-100 score for a HAL special group on the inverted scale.

    Args:
        question_ids: Question ids of the special group.
        answers: Parsed HAL answers.

    Returns:
        The score rounded to one decimal, or None when no item has a valid
        answer.
    """
    total, valid = _accumulate(question_ids, answers, transform=lambda code: code.reencoded)
    if valid == 0:
        return None

    raw = 100 - ((total - valid) * (100 / (HAL_ANSWER_POINTS_PER_ITEM * valid)))
    return round_one_decimal(clamp(raw))


def national_standard_total(domains: Iterable[QuestionGroup], answers: AnswerSet) -> float:
    """Compute the HAL national standard total.

    Pools raw sums and valid counts over every domain question and applies
    the domain formula once. Averaging the rounded domain scores instead
    would weight small domains more and compound rounding error.

    Args:
        domains: Domain definitions whose questions are pooled.
        answers: Parsed HAL answers.

    Returns:
        Total score (0-100, one decimal); 0 when nothing valid was answered.
    """
    pooled_total = 0
    pooled_valid = 0
    for domain in domains:
        total, valid = _accumulate(domain.question_ids, answers)
        pooled_total += total
        pooled_valid += valid

    if pooled_valid == 0:
        return 0.0
    return _normalize(pooled_total, pooled_valid)
