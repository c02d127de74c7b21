from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import ValidationError

from .export import NOTICES_MEMBER
from .models import NoticeSummary, ValidationReport

logger = logging.getLogger(__name__)

E_REPORT_NOT_OBJECT: Final[str] = "E_REPORT_NOT_OBJECT"
E_REPORT_NOTICES_MISSING: Final[str] = "E_REPORT_NOTICES_MISSING"
E_REPORT_NOTICES_NOT_ARRAY: Final[str] = "E_REPORT_NOTICES_NOT_ARRAY"
E_REPORT_SUMMARY_INVALID: Final[str] = "E_REPORT_SUMMARY_INVALID"
E_REPORT_JSON_INVALID: Final[str] = "E_REPORT_JSON_INVALID"
E_REPORT_READ_FAILED: Final[str] = "E_REPORT_READ_FAILED"


class MalformedReportError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


def parse_report(document: object) -> ValidationReport:
    if not isinstance(document, Mapping):
        raise MalformedReportError(E_REPORT_NOT_OBJECT, "report document must be a JSON object")
    if NOTICES_MEMBER not in document:
        raise MalformedReportError(
            E_REPORT_NOTICES_MISSING, f"report document has no '{NOTICES_MEMBER}' member"
        )
    raw_notices = document[NOTICES_MEMBER]
    if not isinstance(raw_notices, list):
        raise MalformedReportError(
            E_REPORT_NOTICES_NOT_ARRAY, f"report member '{NOTICES_MEMBER}' must be an array"
        )

    summaries: list[NoticeSummary] = []
    for index, raw_summary in enumerate(raw_notices):
        try:
            summaries.append(NoticeSummary.model_validate(raw_summary))
        except ValidationError as exc:
            raise MalformedReportError(
                E_REPORT_SUMMARY_INVALID,
                f"{NOTICES_MEMBER}[{index}] is not a valid notice summary: {_describe(exc)}",
            ) from exc
    return ValidationReport.from_summaries(summaries)


def parse_report_json(text: str) -> ValidationReport:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedReportError(E_REPORT_JSON_INVALID, f"report is not valid JSON: {exc}") from exc
    return parse_report(document)


def load_report(path: str | Path) -> ValidationReport:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedReportError(
            E_REPORT_READ_FAILED, f"unable to read report '{source}': {exc}"
        ) from exc
    report = parse_report_json(text)
    logger.debug(
        "loaded report %s: %d notice groups, %d error codes",
        source,
        len(report.notices),
        len(report.error_codes),
    )
    return report


def _describe(exc: ValidationError) -> str:
    details: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        details.append(f"{location}: {error['msg']}")
    return "; ".join(details)
