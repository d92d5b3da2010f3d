"""Immutable value objects for the Haemo Scoring domain.

Value objects are immutable (frozen) dataclasses that represent domain
concepts without identity. They are equal if all their attributes are equal.

All value objects use:
- frozen=True: Makes instances immutable
- slots=True: Optimizes memory usage
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from haemo_scoring.domain.enums import HalAnswerCode, InstrumentType

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

_QUESTION_ID_PATTERN = re.compile(r"^(?P<prefix>hq|q)(?P<number>[1-9][0-9]*)$")
_INTEGER_TEXT_PATTERN = re.compile(r"^(?P<number>[+-]?[0-9]+)(?:\.0*)?$")


def parse_int(raw: object) -> int | None:
    """Parse a raw stored answer into an integer.

    Accepts ints, integral floats and integer strings in ASCII digits,
    optionally signed and optionally followed by a zero fraction (``"6"``,
    ``" 6 "``, ``"6.0"``). Everything else, including booleans, empty
    strings, ``"6.5"``, ``"1_0"`` and non-ASCII digits, counts as
    unanswered.

    Args:
        raw: Value as stored by the questionnaire form.

    Returns:
        The parsed integer, or None if the value is not numeric.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    if isinstance(raw, str):
        match = _INTEGER_TEXT_PATTERN.match(raw.strip())
        return int(match.group("number")) if match else None
    return None


def _is_blank(raw: object) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def is_question_id(instrument: InstrumentType, key: str) -> bool:
    """Check whether a key is a valid question id for an instrument.

    Args:
        instrument: Instrument whose key format applies.
        key: Candidate key, e.g. ``"q17"`` or ``"hq23"``.

    Returns:
        True if the key has the instrument's prefix and an in-range number.
    """
    match = _QUESTION_ID_PATTERN.match(key)
    if match is None or match.group("prefix") != instrument.question_prefix:
        return False
    return 1 <= int(match.group("number")) <= instrument.question_count


@dataclass(frozen=True, slots=True)
class QuestionGroup:
    """A named subset of an instrument's questions.

    Used for HAL domains, HAL special groups and HAEMO-QoL-A parts.
    """

    key: str
    """Stable identifier (e.g. ``"LSKS"``, ``"PART1"``)."""

    name: str
    """Human-readable name."""

    question_ids: tuple[str, ...]
    """Ordered question identifiers belonging to the group."""

    def __post_init__(self) -> None:
        """Validate group data.

        Raises:
            ValueError: If the group is empty or lists a question twice.
        """
        if not self.question_ids:
            raise ValueError(f"Question group {self.key} cannot be empty")
        if len(set(self.question_ids)) != len(self.question_ids):
            raise ValueError(f"Question group {self.key} has duplicate question ids")

    def __len__(self) -> int:
        return len(self.question_ids)


@dataclass(frozen=True, slots=True)
class AnswerSet:
    """Parsed answers for one questionnaire response.

    Maps question ids to parsed values: ``HalAnswerCode`` for HAL, plain
    integers for HAEMO-QoL-A. A missing key means the question was not
    answered. Build instances with ``from_raw``.
    """

    instrument: InstrumentType
    """Instrument the answers belong to."""

    values: Mapping[str, int]
    """Read-only mapping of question id to parsed value."""

    ignored_keys: tuple[str, ...] = field(default=(), compare=False)
    """Keys dropped because they are not question ids of the instrument."""

    rejected_ids: tuple[str, ...] = field(default=(), compare=False)
    """Question ids whose values could not be parsed."""

    @classmethod
    def from_raw(cls, instrument: InstrumentType, raw: Mapping[str, object]) -> AnswerSet:
        """Parse a raw answer mapping as stored by the questionnaire forms.

        Keys that do not follow the instrument's key format are ignored.
        HAL values outside the codes 1-6 and 8 are rejected. HAEMO-QoL-A
        values only need to parse as integers.

        Args:
            instrument: Instrument whose answers are being parsed.
            raw: Mapping of question id to raw stored value.

        Returns:
            A new AnswerSet. The input mapping is not modified.
        """
        values: dict[str, int] = {}
        ignored: list[str] = []
        rejected: list[str] = []

        for key, raw_value in raw.items():
            if not isinstance(key, str) or not is_question_id(instrument, key):
                ignored.append(str(key))
                continue

            parsed = parse_int(raw_value)
            if parsed is None:
                # Blank values are unanswered; anything else unparseable is rejected.
                if not _is_blank(raw_value):
                    rejected.append(key)
                continue

            if instrument is InstrumentType.HAL:
                try:
                    values[key] = HalAnswerCode(parsed)
                except ValueError:
                    rejected.append(key)
                continue

            values[key] = parsed

        return cls(
            instrument=instrument,
            values=MappingProxyType(values),
            ignored_keys=tuple(ignored),
            rejected_ids=tuple(rejected),
        )

    @classmethod
    def empty(cls, instrument: InstrumentType) -> AnswerSet:
        """Create an answer set with no answers.

        Args:
            instrument: Instrument the empty set belongs to.

        Returns:
            An AnswerSet with no values.
        """
        return cls(instrument=instrument, values=MappingProxyType({}))

    def get(self, question_id: str) -> int | None:
        """Get the parsed answer for a question.

        Args:
            question_id: Question identifier.

        Returns:
            The parsed value, or None if unanswered.
        """
        return self.values.get(question_id)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """Score for one HAL domain or HAEMO-QoL-A part."""

    score: float
    """Group score (0-100 for HAL, raw sum for HAEMO-QoL-A)."""

    total: int
    """Maximum attainable raw score over the answered questions."""

    percentage: float
    """Score as a percentage (one decimal)."""

    def __post_init__(self) -> None:
        """Validate the total.

        Raises:
            ValueError: If total is negative.
        """
        if self.total < 0:
            raise ValueError(f"Total must be non-negative, got {self.total}")

    @classmethod
    def empty(cls) -> ScoreResult:
        """Create the result for a group with no valid answers.

        Returns:
            A zero-valued result with zero total.
        """
        return cls(score=0.0, total=0, percentage=0.0)

    @property
    def has_answers(self) -> bool:
        """Check if any valid answer contributed to the score.

        Returns:
            True if the total is positive.
        """
        return self.total > 0


@dataclass(frozen=True, slots=True)
class GroupScore:
    """A ScoreResult labelled with its group key and name."""

    key: str
    name: str
    score: float
    total: int
    percentage: float

    @classmethod
    def from_result(cls, group: QuestionGroup, result: ScoreResult) -> GroupScore:
        """Label a score result with its group.

        Args:
            group: Group definition the result was computed for.
            result: Computed score.

        Returns:
            GroupScore carrying the group's key and name.
        """
        return cls(
            key=group.key,
            name=group.name,
            score=result.score,
            total=result.total,
            percentage=result.percentage,
        )


@dataclass(frozen=True, slots=True)
class SpecialScores:
    """HAL cross-cutting scores and the national standard total.

    Special groups without valid answers are reported as 0.
    """

    upper_limb_activity: float
    basic_lower_limb: float
    complex_lower_limb: float
    national_standard_total: float


@dataclass(frozen=True, slots=True)
class HalAnalysis:
    """Analysis result for a HAL response."""

    total_score: float
    """National standard total (0-100)."""

    max_score: float
    """Maximum total score (always 100 for HAL)."""

    domains: tuple[GroupScore, ...]
    """Scores for the seven functional domains, in registry order."""

    special_scores: SpecialScores
    """Upper/lower limb group scores and the national total."""

    instrument: InstrumentType = field(default=InstrumentType.HAL, init=False)

    def domain(self, key: str) -> GroupScore | None:
        """Look up a domain score by key.

        Args:
            key: Domain key, e.g. ``"LSKS"``.

        Returns:
            The matching GroupScore, or None.
        """
        return next((d for d in self.domains if d.key == key), None)


@dataclass(frozen=True, slots=True)
class HaemqolAnalysis:
    """Analysis result for a HAEMO-QoL-A response."""

    total_score: float
    """Sum of the four part scores."""

    max_score: float
    """Sum of the part totals (answered questions x 4)."""

    parts: tuple[GroupScore, ...]
    """Scores for the four parts, in registry order."""

    instrument: InstrumentType = field(default=InstrumentType.HAEMQOL, init=False)

    def part(self, key: str) -> GroupScore | None:
        """Look up a part score by key.

        Args:
            key: Part key, e.g. ``"PART1"``.

        Returns:
            The matching GroupScore, or None.
        """
        return next((p for p in self.parts if p.key == key), None)


AnalysisResult = HalAnalysis | HaemqolAnalysis


@dataclass(frozen=True, slots=True)
class ExportRow:
    """One flattened export row, all cells already rendered as strings."""

    cells: tuple[str, ...]

    def __iter__(self) -> Iterator[str]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, index: int) -> str:
        return self.cells[index]
