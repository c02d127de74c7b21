from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from noticekit.notices import Severity


class NoticeSummary(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    code: StrictStr = Field(min_length=1)
    severity: Severity
    total_notices: StrictInt = Field(alias="totalNotices", ge=0)
    contexts: tuple[object, ...] = Field(default=(), alias="notices")

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR


@dataclass(frozen=True, slots=True)
class ValidationReport:
    notices: tuple[NoticeSummary, ...]
    error_codes: tuple[str, ...]

    @classmethod
    def from_summaries(cls, summaries: Iterable[NoticeSummary]) -> ValidationReport:
        notices = tuple(summaries)
        return cls(notices=notices, error_codes=extract_error_codes(notices))

    def has_error_code(self, code: str) -> bool:
        return code in self.error_codes


def extract_error_codes(summaries: Iterable[NoticeSummary]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(summary.code for summary in summaries if summary.is_error))
