"""Analysis facade: the single entry point for scoring a response.

UI views and the exporter call ``analyze`` (or ``analyze_response`` for a
stored response); the per-group scorers in ``hal`` and ``haemqol`` are
internal collaborators.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING

from haemo_scoring.config.instruments import (
    HAEMQOL_PARTS,
    HAL_DOMAINS,
    HAL_MAX_SCORE,
    HAL_SPECIAL_GROUPS,
)
from haemo_scoring.domain.enums import HalSpecialGroup, InstrumentType
from haemo_scoring.domain.exceptions import InstrumentMismatchError, UnknownInstrumentError
from haemo_scoring.domain.value_objects import (
    AnswerSet,
    GroupScore,
    HaemqolAnalysis,
    HalAnalysis,
    SpecialScores,
)
from haemo_scoring.infrastructure.logging import get_logger
from haemo_scoring.scoring.haemqol import grand_total, part_score
from haemo_scoring.scoring.hal import (
    national_standard_total,
    normalized_domain_score,
    reencoded_group_score,
)

if TYPE_CHECKING:
    from haemo_scoring.domain.entities import QuestionnaireResponse
    from haemo_scoring.domain.value_objects import AnalysisResult

logger = get_logger(__name__)


def resolve_instrument(value: InstrumentType | str) -> InstrumentType:
    """Convert a caller-supplied instrument identifier.

    Args:
        value: InstrumentType or its string value (``"hal"``/``"haemqol"``).

    Returns:
        The matching InstrumentType.

    Raises:
        UnknownInstrumentError: If the value is not a supported instrument.
    """
    try:
        return InstrumentType(value)
    except ValueError:
        raise UnknownInstrumentError(value) from None


def analyze(
    instrument: InstrumentType | str,
    answers: AnswerSet | Mapping[str, object],
) -> AnalysisResult:
    """Score a set of answers for the given instrument.

    Args:
        instrument: Instrument to score as.
        answers: Parsed AnswerSet or a raw mapping of question id to stored
            value. Raw mappings are parsed with ``AnswerSet.from_raw``.

    Returns:
        HalAnalysis or HaemqolAnalysis.

    Raises:
        UnknownInstrumentError: If the instrument is not supported.
        InstrumentMismatchError: If an AnswerSet parsed for the other
            instrument is supplied.
    """
    kind = resolve_instrument(instrument)

    if isinstance(answers, AnswerSet):
        if answers.instrument is not kind:
            raise InstrumentMismatchError(expected=kind, actual=answers.instrument)
        answer_set = answers
    else:
        answer_set = AnswerSet.from_raw(kind, answers)

    if answer_set.ignored_keys or answer_set.rejected_ids:
        logger.debug(
            "Answers dropped before scoring",
            instrument=kind.value,
            ignored_keys=len(answer_set.ignored_keys),
            rejected_ids=list(answer_set.rejected_ids),
        )

    result: AnalysisResult
    if kind is InstrumentType.HAL:
        result = _analyze_hal(answer_set)
    else:
        result = _analyze_haemqol(answer_set)

    logger.debug(
        "Analysis computed",
        instrument=kind.value,
        answered=len(answer_set),
        total_score=result.total_score,
        max_score=result.max_score,
    )
    return result


def _analyze_hal(answers: AnswerSet) -> HalAnalysis:
    domains = tuple(
        GroupScore.from_result(domain, normalized_domain_score(domain.question_ids, answers))
        for domain in HAL_DOMAINS
    )

    special = {
        group.key: reencoded_group_score(group.question_ids, answers)
        for group in HAL_SPECIAL_GROUPS
    }
    total = national_standard_total(HAL_DOMAINS, answers)

    return HalAnalysis(
        total_score=total,
        max_score=HAL_MAX_SCORE,
        domains=domains,
        special_scores=SpecialScores(
            upper_limb_activity=special[HalSpecialGroup.UPPER] or 0.0,
            basic_lower_limb=special[HalSpecialGroup.LOWBAS] or 0.0,
            complex_lower_limb=special[HalSpecialGroup.LOWCOM] or 0.0,
            national_standard_total=total,
        ),
    )


def _analyze_haemqol(answers: AnswerSet) -> HaemqolAnalysis:
    results = [(part, part_score(part.question_ids, answers)) for part in HAEMQOL_PARTS]
    total, max_score = grand_total(result for _, result in results)

    return HaemqolAnalysis(
        total_score=total,
        max_score=float(max_score),
        parts=tuple(GroupScore.from_result(part, result) for part, result in results),
    )


def load_answers(response: QuestionnaireResponse) -> Mapping[str, object]:
    """Get the raw answer mapping of a stored response.

    Responses may hold their answers JSON-encoded. Undecodable or non-object
    JSON is logged and treated as an empty answer set.

    Args:
        response: Stored questionnaire response.

    Returns:
        Raw mapping of question id to stored value.
    """
    if not isinstance(response.answers, str):
        return response.answers

    try:
        decoded = json.loads(response.answers)
    except json.JSONDecodeError as e:
        logger.warning(
            "Response answers are not valid JSON",
            response_id=response.id,
            error=str(e),
        )
        return {}

    if not isinstance(decoded, Mapping):
        logger.warning(
            "Response answers are not a JSON object",
            response_id=response.id,
            type=type(decoded).__name__,
        )
        return {}
    return decoded


def analyze_response(response: QuestionnaireResponse) -> AnalysisResult:
    """Score a stored questionnaire response.

    Args:
        response: Stored response (answers as mapping or JSON string).

    Returns:
        Analysis result for the response's instrument.
    """
    return analyze(response.instrument, load_answers(response))
