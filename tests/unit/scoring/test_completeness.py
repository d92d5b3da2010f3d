"""Tests for questionnaire completeness checks."""

from __future__ import annotations

import pytest

from haemo_scoring.domain.exceptions import UnknownInstrumentError
from haemo_scoring.scoring.completeness import is_complete, unanswered_questions

pytestmark = pytest.mark.unit


class TestUnansweredQuestions:
    def test_empty_hal(self) -> None:
        missing = unanswered_questions("hal", {})
        assert len(missing) == 42
        assert missing[0] == "q1"
        assert missing[-1] == "q42"

    def test_not_applicable_counts_as_answered(self) -> None:
        answers = {f"q{n}": "8" for n in range(1, 43)}
        assert unanswered_questions("hal", answers) == []
        assert is_complete("hal", answers)

    def test_blank_and_invalid_are_unanswered(self) -> None:
        answers = {f"q{n}": "6" for n in range(1, 43)}
        answers["q5"] = ""
        answers["q7"] = "9"
        assert unanswered_questions("hal", answers) == ["q5", "q7"]

    def test_haemqol_complete(self, haemqol_all_twos: dict[str, object]) -> None:
        assert is_complete("haemqol", haemqol_all_twos)

    def test_haemqol_order(self) -> None:
        missing = unanswered_questions("haemqol", {"hq1": "1"})
        assert missing[:2] == ["hq2", "hq3"]
        assert len(missing) == 40

    def test_unknown_instrument(self) -> None:
        with pytest.raises(UnknownInstrumentError):
            unanswered_questions("phq8", {})
