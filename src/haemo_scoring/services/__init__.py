"""Services built on the scoring engine.

Modules:
    export: Flattened export rows and tables
    trend: Total-score trend over completed responses
"""

from haemo_scoring.services.export import EXPORT_COLUMNS, ExportService, latest_responses
from haemo_scoring.services.trend import TrendPoint, score_trend

__all__ = [
    "EXPORT_COLUMNS",
    "ExportService",
    "TrendPoint",
    "latest_responses",
    "score_trend",
]
