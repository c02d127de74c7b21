from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated, Literal, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Severity(StrEnum):
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


_SEVERITY_RANK: dict[Severity, int] = {
    Severity.INFO: 0,
    Severity.WARNING: 1,
    Severity.ERROR: 2,
}


def severity_rank(severity: Severity) -> int:
    return _SEVERITY_RANK[severity]


@dataclass(frozen=True, slots=True)
class MappingKey:
    code: str
    severity: Severity

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("mapping key code must be non-empty")
        object.__setattr__(self, "severity", Severity(self.severity))

    @property
    def sort_token(self) -> str:
        return f"{self.code}{self.severity.value}"


def mapping_key_sort_key(key: MappingKey) -> tuple[str, str, int]:
    return (key.sort_token, key.code, severity_rank(key.severity))


def _normalize_json(value: object) -> object:
    if value is None or isinstance(value, bool | int | str):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("context numbers must be finite")
        return value
    if isinstance(value, list | tuple):
        return [_normalize_json(item) for item in value]
    if isinstance(value, dict):
        raw_dict = cast(dict[object, object], value)
        string_keys: list[str] = []
        for key in raw_dict:
            if not isinstance(key, str):
                raise ValueError("context object keys must be strings")
            string_keys.append(key)
        normalized: dict[str, object] = {}
        for key in sorted(string_keys):
            normalized[key] = _normalize_json(raw_dict[key])
        return normalized
    raise ValueError("context must be JSON-serializable")


class _NoticeFields(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    code: str = Field(min_length=1)
    context: object = Field(default_factory=dict)

    @field_validator("context", mode="before")
    @classmethod
    def _validate_and_normalize_context(cls, context: object) -> object:
        return _normalize_json(context)


class ValidationNotice(_NoticeFields):
    kind: Literal["validation"] = "validation"
    severity: Severity

    @property
    def mapping_key(self) -> MappingKey:
        return MappingKey(code=self.code, severity=self.severity)


class SystemErrorNotice(_NoticeFields):
    kind: Literal["system_error"] = "system_error"
    severity: Severity = Severity.ERROR

    @field_validator("severity")
    @classmethod
    def _require_error_severity(cls, severity: Severity) -> Severity:
        if severity is not Severity.ERROR:
            raise ValueError("system errors always have ERROR severity")
        return severity

    @property
    def mapping_key(self) -> MappingKey:
        return MappingKey(code=self.code, severity=self.severity)


Notice = Annotated[ValidationNotice | SystemErrorNotice, Field(discriminator="kind")]


def is_error(notice: ValidationNotice | SystemErrorNotice) -> bool:
    return notice.severity is Severity.ERROR
