"""Scoring engine for HAL and HAEMO-QoL-A.

Public surface:
    analyze: Score an answer set for an instrument.
    analyze_response: Score a stored questionnaire response.
    unanswered_questions / is_complete: Completeness checks.
"""

from haemo_scoring.scoring.analysis import analyze, analyze_response, load_answers
from haemo_scoring.scoring.completeness import is_complete, unanswered_questions

__all__ = [
    "analyze",
    "analyze_response",
    "is_complete",
    "load_answers",
    "unanswered_questions",
]
