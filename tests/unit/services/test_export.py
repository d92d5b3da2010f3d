"""Tests for the export row builder."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pandas as pd
import pytest

from haemo_scoring.config import ExportSettings
from haemo_scoring.domain.entities import (
    MedicalRecord,
    Patient,
    PatientRecord,
    QuestionnaireResponse,
)
from haemo_scoring.domain.enums import InstrumentType
from haemo_scoring.domain.value_objects import ExportRow
from haemo_scoring.services.export import (
    EXPORT_COLUMNS,
    ExportService,
    age_group_label,
    format_cell,
    is_administered,
    latest_responses,
)

pytestmark = pytest.mark.unit

_KEYS = [column.key for column in EXPORT_COLUMNS]


def _cell(row: ExportRow, key: str) -> str:
    return row[_KEYS.index(key)]


@pytest.fixture
def service() -> ExportService:
    return ExportService(ExportSettings())


@pytest.fixture
def patient() -> Patient:
    return Patient(name="张三", age=30.0, weight=70.5, height=175.0)


@pytest.fixture
def medical() -> MedicalRecord:
    return MedicalRecord(
        treatment_plan="prophylaxis",
        treatment_dose=25.0,
        treatment_frequency=3.0,
        evaluation_date="2024-05-01",
        next_follow_up="2024-08-01",
        notes="stable",
    )


class TestFormatCell:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            (50.0, "50"),
            (46.7, "46.7"),
            (0.0, "0"),
            (3, "3"),
            ("text", "text"),
            (float("nan"), ""),
        ],
    )
    def test_rendering(self, value: object, expected: str) -> None:
        assert format_cell(value) == expected


class TestIsAdministered:
    @pytest.mark.parametrize(
        ("answers", "expected"),
        [("", False), ("  ", False), ("{}", True), ({}, True), ({"q1": "3"}, True)],
    )
    def test_answers(self, answers: dict[str, str] | str, expected: bool) -> None:
        response = QuestionnaireResponse(instrument=InstrumentType.HAL, answers=answers)
        assert is_administered(response) is expected

    def test_none(self) -> None:
        assert is_administered(None) is False


class TestAgeGroupLabel:
    def test_labels(self) -> None:
        assert age_group_label(10) == "儿童"
        assert age_group_label(30) == "成人"
        assert age_group_label(60) == "老年"
        assert age_group_label(None) == ""


class TestHeaders:
    """Tests for the export header."""

    def test_column_count_and_order(self, service: ExportService) -> None:
        headers = service.headers()
        assert len(headers) == 26
        assert headers[0] == "患者名字"
        assert headers[7] == "HAEMO-QoL-A问卷一"
        assert headers[12] == "HAL躺坐跪站"
        assert headers[22] == "HAL国标总分"
        assert headers[-1] == "医生备注"

    def test_keys_mode(self) -> None:
        service = ExportService(ExportSettings(column_labels="keys"))
        assert service.headers() == _KEYS


class TestLatestResponses:
    def test_picks_most_recent_per_instrument(self) -> None:
        old = QuestionnaireResponse(
            instrument=InstrumentType.HAL, answers={}, id="old", completed_at=datetime(2024, 1, 1)
        )
        new = QuestionnaireResponse(
            instrument=InstrumentType.HAL, answers={}, id="new", completed_at=datetime(2024, 6, 1)
        )
        qol = QuestionnaireResponse(instrument=InstrumentType.HAEMQOL, answers={}, id="qol")

        latest = latest_responses([old, qol, new])

        assert latest[InstrumentType.HAL].id == "new"
        assert latest[InstrumentType.HAEMQOL].id == "qol"

    def test_created_at_fallback(self) -> None:
        completed = QuestionnaireResponse(
            instrument=InstrumentType.HAL, answers={}, id="a", completed_at=datetime(2024, 1, 1)
        )
        draft = QuestionnaireResponse(
            instrument=InstrumentType.HAL, answers={}, id="b", created_at=datetime(2024, 2, 1)
        )
        assert latest_responses([completed, draft])[InstrumentType.HAL].id == "b"

    def test_tie_keeps_first(self) -> None:
        ts = datetime(2024, 1, 1, tzinfo=UTC)
        first = QuestionnaireResponse(
            instrument=InstrumentType.HAL, answers={}, id="first", completed_at=ts
        )
        second = QuestionnaireResponse(
            instrument=InstrumentType.HAL, answers={}, id="second", completed_at=ts
        )
        assert latest_responses([first, second])[InstrumentType.HAL].id == "first"


class TestBuildRow:
    """Tests for ExportService.build_row."""

    def test_demographics_without_responses(
        self, service: ExportService, patient: Patient, medical: MedicalRecord
    ) -> None:
        row = service.build_row(patient, medical=medical)

        assert len(row) == 26
        assert _cell(row, "patient_name") == "张三"
        assert _cell(row, "age_group") == "成人"
        assert _cell(row, "age") == "30"
        assert _cell(row, "weight") == "70.5"
        assert _cell(row, "height") == "175"
        assert _cell(row, "treatment_plan") == "prophylaxis"
        assert _cell(row, "treatment_dose") == "25"
        assert _cell(row, "evaluation_date") == "2024-05-01"
        assert _cell(row, "next_follow_up") == "2024-08-01"
        assert _cell(row, "notes") == "stable"
        score_keys = [key for key in _KEYS if key.startswith(("hal_", "haemqol_"))]
        assert all(_cell(row, key) == "" for key in score_keys)

    def test_missing_medical_record(self, service: ExportService, patient: Patient) -> None:
        row = service.build_row(patient)
        assert _cell(row, "treatment_plan") == ""
        assert _cell(row, "notes") == ""

    def test_missing_name(self, service: ExportService) -> None:
        row = service.build_row(Patient(age=45))
        assert _cell(row, "patient_name") == ""
        assert _cell(row, "age_group") == "成人"

    def test_missing_age(self, service: ExportService) -> None:
        row = service.build_row(Patient(name="李四"))
        assert _cell(row, "age_group") == ""
        assert _cell(row, "age") == ""

    def test_hal_columns(self, service: ExportService, patient: Patient) -> None:
        response = QuestionnaireResponse(
            instrument=InstrumentType.HAL,
            answers={f"q{n}": "6" for n in range(1, 43)},
            completed_at=datetime(2024, 5, 1),
        )
        row = service.build_row(patient, [response])

        assert _cell(row, "hal_lsks") == "100"
        assert _cell(row, "hal_leispo") == "100"
        assert _cell(row, "hal_upper") == "100"
        assert _cell(row, "hal_national_total") == "100"
        assert _cell(row, "haemqol_total") == ""

    def test_zero_scores_are_not_blank(self, service: ExportService, patient: Patient) -> None:
        """An administered instrument scoring 0 exports "0", not an empty cell."""
        response = QuestionnaireResponse(
            instrument=InstrumentType.HAEMQOL,
            answers={f"hq{n}": "0" for n in range(1, 42)},
        )
        row = service.build_row(patient, [response])

        assert _cell(row, "haemqol_part1") == "0"
        assert _cell(row, "haemqol_total") == "0"

    def test_empty_answer_string_not_administered(
        self, service: ExportService, patient: Patient
    ) -> None:
        """A latest response stored with empty answers leaves its columns blank."""
        older = QuestionnaireResponse(
            instrument=InstrumentType.HAL,
            answers={"q1": "6"},
            completed_at=datetime(2024, 1, 1),
        )
        latest = QuestionnaireResponse(
            instrument=InstrumentType.HAL, answers="", completed_at=datetime(2024, 6, 1)
        )
        row = service.build_row(patient, [older, latest])

        assert _cell(row, "hal_lsks") == ""
        assert _cell(row, "hal_national_total") == ""

    def test_empty_mapping_still_scored(self, service: ExportService, patient: Patient) -> None:
        response = QuestionnaireResponse(instrument=InstrumentType.HAEMQOL, answers={})
        row = service.build_row(patient, [response])
        assert _cell(row, "haemqol_total") == "0"

    def test_haemqol_json_answers(self, service: ExportService, patient: Patient) -> None:
        response = QuestionnaireResponse(
            instrument=InstrumentType.HAEMQOL,
            answers=json.dumps({f"hq{n}": "2" for n in range(1, 42)}),
        )
        row = service.build_row(patient, [response])

        assert _cell(row, "haemqol_part1") == "18"
        assert _cell(row, "haemqol_part2") == "22"
        assert _cell(row, "haemqol_part3") == "18"
        assert _cell(row, "haemqol_part4") == "24"
        assert _cell(row, "haemqol_total") == "82"

    def test_uses_latest_response(self, service: ExportService, patient: Patient) -> None:
        older = QuestionnaireResponse(
            instrument=InstrumentType.HAL,
            answers={"q1": "1"},
            completed_at=datetime(2024, 1, 1),
        )
        newer = QuestionnaireResponse(
            instrument=InstrumentType.HAL,
            answers={"q1": "6"},
            completed_at=datetime(2024, 6, 1),
        )
        row = service.build_row(patient, [newer, older])
        assert _cell(row, "hal_lsks") == "100"

    def test_one_decimal_scores(self, service: ExportService, patient: Patient) -> None:
        response = QuestionnaireResponse(
            instrument=InstrumentType.HAL, answers={"q1": "3", "q2": "3", "q3": "4"}
        )
        row = service.build_row(patient, [response])
        assert _cell(row, "hal_lsks") == "46.7"


class TestBuildTable:
    def test_dataframe(self, service: ExportService, patient: Patient) -> None:
        records = [
            PatientRecord(patient=patient),
            PatientRecord(patient=Patient(name="李四", age=8)),
        ]
        table = service.build_table(records)

        assert isinstance(table, pd.DataFrame)
        assert list(table.columns) == service.headers()
        assert len(table) == 2
        assert table.iloc[1]["年龄段"] == "儿童"
        assert table.iloc[0]["HAL国标总分"] == ""

    def test_empty_batch(self, service: ExportService) -> None:
        table = service.build_table([])
        assert table.empty
        assert len(table.columns) == 26
