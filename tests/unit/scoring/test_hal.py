"""Tests for HAL domain, special group and national total scoring."""

from __future__ import annotations

import pytest

from haemo_scoring.config.instruments import HAL_DOMAINS, HAL_SPECIAL_GROUPS
from haemo_scoring.domain.enums import HalDomain, HalSpecialGroup, InstrumentType
from haemo_scoring.domain.value_objects import AnswerSet, ScoreResult
from haemo_scoring.scoring.hal import (
    national_standard_total,
    normalized_domain_score,
    reencoded_group_score,
)

pytestmark = pytest.mark.unit

LSKS = next(d for d in HAL_DOMAINS if d.key == HalDomain.LSKS)
LOWBAS = next(g for g in HAL_SPECIAL_GROUPS if g.key == HalSpecialGroup.LOWBAS)
UPPER = next(g for g in HAL_SPECIAL_GROUPS if g.key == HalSpecialGroup.UPPER)


def _hal(raw: dict[str, object]) -> AnswerSet:
    return AnswerSet.from_raw(InstrumentType.HAL, raw)


def _fill(ids: tuple[str, ...], value: object) -> dict[str, object]:
    return dict.fromkeys(ids, value)


class TestNormalizedDomainScore:
    """Tests for the 0-100 domain formula."""

    def test_all_best(self) -> None:
        result = normalized_domain_score(LSKS.question_ids, _hal(_fill(LSKS.question_ids, "6")))
        assert result == ScoreResult(score=100.0, total=40, percentage=100.0)

    def test_all_worst(self) -> None:
        result = normalized_domain_score(LSKS.question_ids, _hal(_fill(LSKS.question_ids, "1")))
        assert result.score == 0.0
        assert result.total == 40

    def test_partial_answers_shrink_denominator(self) -> None:
        """q1=6 and q2=1 with the rest unanswered scores 50."""
        result = normalized_domain_score(LSKS.question_ids, _hal({"q1": "6", "q2": "1"}))
        assert result.score == 50.0
        assert result.total == 10
        assert result.percentage == 50.0

    def test_sentinel_excluded(self) -> None:
        raw = {"q1": "6", "q2": "8", "q3": "8"}
        result = normalized_domain_score(LSKS.question_ids, _hal(raw))
        assert result.score == 100.0
        assert result.total == 5

    def test_only_sentinels_is_empty(self) -> None:
        result = normalized_domain_score(LSKS.question_ids, _hal(_fill(LSKS.question_ids, 8)))
        assert result == ScoreResult.empty()

    def test_no_answers_is_empty(self) -> None:
        result = normalized_domain_score(LSKS.question_ids, AnswerSet.empty(InstrumentType.HAL))
        assert result == ScoreResult.empty()

    def test_rounded_to_one_decimal(self) -> None:
        """Three items summing to 10 give 7*100/15 = 46.666... -> 46.7."""
        result = normalized_domain_score(LSKS.question_ids, _hal({"q1": "3", "q2": "3", "q3": "4"}))
        assert result.score == 46.7

    def test_monotonic_in_each_answer(self) -> None:
        """Raising one answer never lowers the domain score."""
        base = dict.fromkeys(LSKS.question_ids, "3")
        previous = normalized_domain_score(LSKS.question_ids, _hal(base)).score
        for value in ("4", "5", "6"):
            raised = {**base, "q4": value}
            score = normalized_domain_score(LSKS.question_ids, _hal(raised)).score
            assert score >= previous
            previous = score


class TestReencodedGroupScore:
    """Tests for special groups on the inverted scale."""

    def test_all_best(self) -> None:
        answers = _hal(_fill(UPPER.question_ids, "6"))
        assert reencoded_group_score(UPPER.question_ids, answers) == 100.0

    def test_all_worst(self) -> None:
        answers = _hal(_fill(UPPER.question_ids, "1"))
        assert reencoded_group_score(UPPER.question_ids, answers) == 0.0

    def test_all_fours(self) -> None:
        answers = _hal(_fill(LOWBAS.question_ids, "4"))
        assert reencoded_group_score(LOWBAS.question_ids, answers) == 60.0

    def test_no_valid_answers_is_none(self) -> None:
        answers = _hal(_fill(LOWBAS.question_ids, "8"))
        assert reencoded_group_score(LOWBAS.question_ids, answers) is None

    @pytest.mark.parametrize("value", ["1", "2", "3", "4", "5", "6"])
    def test_uniform_answers_linear(self, value: str) -> None:
        """A group answered uniformly with v scores (v - 1) * 20."""
        answers = _hal(_fill(LOWBAS.question_ids, value))
        assert reencoded_group_score(LOWBAS.question_ids, answers) == (int(value) - 1) * 20

    def test_agrees_with_domain_direction(self) -> None:
        """Better answers give higher special scores, like the domains."""
        low = reencoded_group_score(LOWBAS.question_ids, _hal(_fill(LOWBAS.question_ids, "2")))
        high = reencoded_group_score(LOWBAS.question_ids, _hal(_fill(LOWBAS.question_ids, "5")))
        assert low is not None
        assert high is not None
        assert high > low


class TestNationalStandardTotal:
    """Tests for the pooled HAL total."""

    def test_pooled_not_averaged(self) -> None:
        """LSKS all 6 plus q9=1 pools to 40*100/45 = 88.9, not the 50 mean."""
        raw = {**_fill(LSKS.question_ids, "6"), "q9": "1"}
        assert national_standard_total(HAL_DOMAINS, _hal(raw)) == 88.9

    def test_all_best(self, hal_all_best: dict[str, object]) -> None:
        assert national_standard_total(HAL_DOMAINS, _hal(hal_all_best)) == 100.0

    def test_nothing_valid_is_zero(self) -> None:
        assert national_standard_total(HAL_DOMAINS, AnswerSet.empty(InstrumentType.HAL)) == 0.0
