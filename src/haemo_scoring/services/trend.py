"""Score trend over a patient's completed responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from haemo_scoring.domain.entities import as_utc
from haemo_scoring.scoring.analysis import analyze_response

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from haemo_scoring.domain.entities import QuestionnaireResponse
    from haemo_scoring.domain.enums import InstrumentType


@dataclass(frozen=True, slots=True)
class TrendPoint:
    """Total score of one completed response."""

    completed_at: datetime
    instrument: InstrumentType
    total_score: float


def score_trend(responses: Iterable[QuestionnaireResponse]) -> list[TrendPoint]:
    """Build the total-score trend for a patient.

    Responses without a completion time are skipped.

    Args:
        responses: Stored responses of one patient, any order.

    Returns:
        One point per completed response, oldest first.
    """
    points = [
        TrendPoint(
            completed_at=response.completed_at,
            instrument=response.instrument,
            total_score=analyze_response(response).total_score,
        )
        for response in responses
        if response.completed_at is not None
    ]
    return sorted(points, key=lambda point: as_utc(point.completed_at))
