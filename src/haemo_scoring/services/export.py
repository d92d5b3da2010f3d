"""Export row builder.

Flattens a patient, the latest response of each instrument and the
doctor's medical record into one row of string cells. The column order is
a contract with downstream spreadsheet consumers: reordering a column
requires a matching header change.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, TypeGuard

import pandas as pd

from haemo_scoring.domain.enums import (
    AgeGroup,
    HaemqolPart,
    HalDomain,
    InstrumentType,
)
from haemo_scoring.domain.value_objects import ExportRow, HaemqolAnalysis, HalAnalysis
from haemo_scoring.infrastructure.logging import get_logger
from haemo_scoring.scoring.analysis import analyze_response

if TYPE_CHECKING:
    from collections.abc import Iterable

    from haemo_scoring.config import ExportSettings
    from haemo_scoring.domain.entities import (
        MedicalRecord,
        Patient,
        PatientRecord,
        QuestionnaireResponse,
    )

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ExportColumn:
    """One column of the export header."""

    key: str
    """Stable ASCII key."""

    label: str
    """Header text as used in the exported spreadsheets."""


EXPORT_COLUMNS: Final[tuple[ExportColumn, ...]] = (
    ExportColumn("patient_name", "患者名字"),
    ExportColumn("age_group", "年龄段"),
    ExportColumn("age", "年龄"),
    ExportColumn("weight", "体重"),
    ExportColumn("height", "身高"),
    ExportColumn("treatment_plan", "用药方案"),
    ExportColumn("treatment_dose", "每次剂量"),
    ExportColumn("haemqol_part1", "HAEMO-QoL-A问卷一"),
    ExportColumn("haemqol_part2", "HAEMO-QoL-A问卷二"),
    ExportColumn("haemqol_part3", "HAEMO-QoL-A问卷三"),
    ExportColumn("haemqol_part4", "HAEMO-QoL-A问卷四"),
    ExportColumn("haemqol_total", "HAEMO-QoL-A总分"),
    ExportColumn("hal_lsks", "HAL躺坐跪站"),
    ExportColumn("hal_legs", "HAL下肢功能"),
    ExportColumn("hal_arms", "HAL上肢功能"),
    ExportColumn("hal_trans", "HAL交通工具"),
    ExportColumn("hal_selfc", "HAL自我照料"),
    ExportColumn("hal_househ", "HAL家务劳动"),
    ExportColumn("hal_leispo", "HAL休闲体育"),
    ExportColumn("hal_upper", "HAL上肢活动"),
    ExportColumn("hal_lowbas", "HAL基础下肢"),
    ExportColumn("hal_lowcom", "HAL复杂下肢"),
    ExportColumn("hal_national_total", "HAL国标总分"),
    ExportColumn("evaluation_date", "评估日期"),
    ExportColumn("next_follow_up", "下次时间"),
    ExportColumn("notes", "医生备注"),
)

AGE_GROUP_LABELS: Final[dict[AgeGroup, str]] = {
    AgeGroup.CHILD: "儿童",
    AgeGroup.ADULT: "成人",
    AgeGroup.ELDERLY: "老年",
}

_HAEMQOL_PART_COLUMNS: Final[dict[HaemqolPart, str]] = {
    HaemqolPart.PART1: "haemqol_part1",
    HaemqolPart.PART2: "haemqol_part2",
    HaemqolPart.PART3: "haemqol_part3",
    HaemqolPart.PART4: "haemqol_part4",
}

_HAL_DOMAIN_COLUMNS: Final[dict[HalDomain, str]] = {
    HalDomain.LSKS: "hal_lsks",
    HalDomain.LEGS: "hal_legs",
    HalDomain.ARMS: "hal_arms",
    HalDomain.TRANS: "hal_trans",
    HalDomain.SELFC: "hal_selfc",
    HalDomain.HOUSEH: "hal_househ",
    HalDomain.LEISPO: "hal_leispo",
}


def format_cell(value: object) -> str:
    """Render a value as an export cell.

    None and non-finite floats become an empty string. Integral floats drop
    their trailing ``.0`` (``50.0`` -> ``"50"``).

    Args:
        value: Value to render.

    Returns:
        Cell text.
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if not math.isfinite(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    return str(value)


def latest_responses(
    responses: Iterable[QuestionnaireResponse],
) -> dict[InstrumentType, QuestionnaireResponse]:
    """Pick the most recent response of each instrument.

    Recency uses the completion time, falling back to the creation time.
    On ties the response listed first wins, so a list already sorted newest
    first yields its first response of each type.

    Args:
        responses: Stored responses of one patient, any order.

    Returns:
        Mapping of instrument to its latest response.
    """
    latest: dict[InstrumentType, QuestionnaireResponse] = {}
    for response in responses:
        current = latest.get(response.instrument)
        if current is None or response.recency > current.recency:
            latest[response.instrument] = response
    return latest


def is_administered(response: QuestionnaireResponse | None) -> TypeGuard[QuestionnaireResponse]:
    """Check whether a response should fill its instrument's columns.

    A response whose stored answers are an empty string counts as not
    administered. An empty mapping is still scored.
    """
    if response is None:
        return False
    answers = response.answers
    return not (isinstance(answers, str) and not answers.strip())


def age_group_label(age: float | None) -> str:
    """Export label for an age, empty when the age is unknown."""
    if age is None:
        return ""
    return AGE_GROUP_LABELS[AgeGroup.from_age(age)]


class ExportService:
    """Builds export rows and tables for patients.

    Stateless apart from its settings; rows for different patients can be
    built concurrently.
    """

    def __init__(self, settings: ExportSettings) -> None:
        """Initialize export service.

        Args:
            settings: Export configuration.
        """
        self._column_labels = settings.column_labels

    def headers(self) -> list[str]:
        """Header row matching the cells of ``build_row``.

        Returns:
            Spreadsheet labels or column keys, depending on settings.
        """
        if self._column_labels == "keys":
            return [column.key for column in EXPORT_COLUMNS]
        return [column.label for column in EXPORT_COLUMNS]

    def build_row(
        self,
        patient: Patient,
        responses: Iterable[QuestionnaireResponse] = (),
        medical: MedicalRecord | None = None,
    ) -> ExportRow:
        """Flatten one patient into an export row.

        Args:
            patient: Patient demographics.
            responses: The patient's stored responses; only the latest of
                each instrument is used.
            medical: Doctor-maintained medical record, if any.

        Returns:
            ExportRow with one cell per header column. Columns of an
            instrument without a response, or whose latest response has
            no stored answers, are empty strings.
        """
        cells: dict[str, str] = {column.key: "" for column in EXPORT_COLUMNS}

        cells["patient_name"] = format_cell(patient.name)
        cells["age_group"] = age_group_label(patient.age)
        cells["age"] = format_cell(patient.age)
        cells["weight"] = format_cell(patient.weight)
        cells["height"] = format_cell(patient.height)

        if medical is not None:
            cells["treatment_plan"] = format_cell(medical.treatment_plan)
            cells["treatment_dose"] = format_cell(medical.treatment_dose)
            cells["evaluation_date"] = format_cell(medical.evaluation_date)
            cells["next_follow_up"] = format_cell(medical.next_follow_up)
            cells["notes"] = format_cell(medical.notes)

        latest = latest_responses(responses)

        haemqol_response = latest.get(InstrumentType.HAEMQOL)
        if is_administered(haemqol_response):
            analysis = analyze_response(haemqol_response)
            if isinstance(analysis, HaemqolAnalysis):
                cells.update(self._haemqol_cells(analysis))

        hal_response = latest.get(InstrumentType.HAL)
        if is_administered(hal_response):
            analysis = analyze_response(hal_response)
            if isinstance(analysis, HalAnalysis):
                cells.update(self._hal_cells(analysis))

        return ExportRow(cells=tuple(cells[column.key] for column in EXPORT_COLUMNS))

    def build_rows(self, records: Iterable[PatientRecord]) -> list[ExportRow]:
        """Build one row per patient record."""
        return [
            self.build_row(record.patient, record.responses, record.medical) for record in records
        ]

    def build_table(self, records: Iterable[PatientRecord]) -> pd.DataFrame:
        """Build the export table for a batch of patients.

        Args:
            records: Patient records to export.

        Returns:
            DataFrame with the header columns and one string row per patient.
        """
        rows = self.build_rows(records)
        table = pd.DataFrame([row.cells for row in rows], columns=self.headers(), dtype=object)
        logger.info("Export table built", rows=len(table), columns=len(table.columns))
        return table

    @staticmethod
    def _haemqol_cells(analysis: HaemqolAnalysis) -> dict[str, str]:
        cells = {
            column: format_cell(part.score) if (part := analysis.part(key)) else ""
            for key, column in _HAEMQOL_PART_COLUMNS.items()
        }
        cells["haemqol_total"] = format_cell(analysis.total_score)
        return cells

    @staticmethod
    def _hal_cells(analysis: HalAnalysis) -> dict[str, str]:
        cells = {
            column: format_cell(domain.score) if (domain := analysis.domain(key)) else ""
            for key, column in _HAL_DOMAIN_COLUMNS.items()
        }
        special = analysis.special_scores
        cells["hal_upper"] = format_cell(special.upper_limb_activity)
        cells["hal_lowbas"] = format_cell(special.basic_lower_limb)
        cells["hal_lowcom"] = format_cell(special.complex_lower_limb)
        cells["hal_national_total"] = format_cell(special.national_standard_total)
        return cells
