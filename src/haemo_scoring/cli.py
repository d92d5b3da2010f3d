"""CLI entry point for Haemo Scoring.

Usage:
    haemo-scoring                                  # print version
    haemo-scoring analyze --instrument hal answers.json
    haemo-scoring export records.json

Input files are JSON; ``-`` reads stdin. Results are printed to stdout as
JSON. Logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

import haemo_scoring
from haemo_scoring.config import LoggingSettings, get_export_settings, get_settings
from haemo_scoring.domain.enums import InstrumentType
from haemo_scoring.infrastructure.logging import (
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
)
from haemo_scoring.schemas import PatientRecordPayload, analysis_to_dict
from haemo_scoring.scoring import analyze, unanswered_questions
from haemo_scoring.services.export import ExportService

logger = get_logger(__name__)

_RECORDS_ADAPTER = TypeAdapter(list[PatientRecordPayload])


def _read_json(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def _print_json(payload: object) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _cmd_analyze(args: argparse.Namespace) -> int:
    answers = _read_json(args.file)
    if not isinstance(answers, dict):
        print("error: answers file must contain a JSON object", file=sys.stderr)
        return 2

    result = analyze(args.instrument, answers)
    payload = analysis_to_dict(result)
    payload["unanswered"] = unanswered_questions(args.instrument, answers)
    _print_json(payload)
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    try:
        records = _RECORDS_ADAPTER.validate_python(_read_json(args.file))
    except ValidationError as e:
        print(f"error: invalid records file: {e}", file=sys.stderr)
        return 2

    service = ExportService(get_export_settings())
    rows = service.build_rows(record.to_entity() for record in records)
    logger.info("Export rows built", rows=len(rows))
    _print_json({"headers": service.headers(), "rows": [list(row) for row in rows]})
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="haemo-scoring",
        description="Score HAL and HAEMO-QoL-A questionnaires.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override LOG_LEVEL",
    )
    subparsers = parser.add_subparsers(dest="command")

    analyze_parser = subparsers.add_parser("analyze", help="Score one answer set")
    analyze_parser.add_argument(
        "--instrument",
        required=True,
        choices=[instrument.value for instrument in InstrumentType],
    )
    analyze_parser.add_argument("file", help="JSON object of question id -> answer ('-' = stdin)")
    analyze_parser.set_defaults(handler=_cmd_analyze)

    export_parser = subparsers.add_parser("export", help="Build export rows for patients")
    export_parser.add_argument("file", help="JSON list of patient records ('-' = stdin)")
    export_parser.set_defaults(handler=_cmd_export)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the Haemo Scoring CLI."""
    args = build_parser().parse_args(argv)

    if args.command is None:
        print(f"Haemo Scoring v{haemo_scoring.__version__}")
        print("Run with --help for usage information.")
        return 0

    settings: LoggingSettings = get_settings().logging
    if args.log_level is not None:
        settings = settings.model_copy(update={"level": args.log_level})
    setup_logging(settings)
    bind_context(command=args.command)

    try:
        return int(args.handler(args))
    except (OSError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        clear_context()


if __name__ == "__main__":
    sys.exit(main())
