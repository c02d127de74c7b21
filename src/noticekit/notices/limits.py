from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from functools import cache
from pathlib import Path
from typing import Final, cast

import yaml  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOTAL_VALIDATION_NOTICES: Final[int] = 10_000_000
DEFAULT_MAX_PER_NOTICE_TYPE_AND_SEVERITY: Final[int] = 100_000
DEFAULT_MAX_EXPORT_PER_NOTICE_TYPE: Final[int] = 1_000

_LIMITS_SECTION: Final[str] = "notice_limits"
_OPTION_FIELDS: Final[Mapping[str, str]] = {
    "max_total_validation_notices": "max_total_validation_notices",
    "maxTotalValidationNotices": "max_total_validation_notices",
    "max_per_notice_type_and_severity": "max_per_notice_type_and_severity",
    "maxPerNoticeTypeAndSeverity": "max_per_notice_type_and_severity",
    "max_export_per_notice_type": "max_export_per_notice_type",
    "maxExportPerNoticeType": "max_export_per_notice_type",
}


class LimitsConfigError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


@dataclass(frozen=True, slots=True)
class NoticeLimits:
    max_total_validation_notices: int = DEFAULT_MAX_TOTAL_VALIDATION_NOTICES
    max_per_notice_type_and_severity: int = DEFAULT_MAX_PER_NOTICE_TYPE_AND_SEVERITY
    max_export_per_notice_type: int = DEFAULT_MAX_EXPORT_PER_NOTICE_TYPE

    def __post_init__(self) -> None:
        for name in (
            "max_total_validation_notices",
            "max_per_notice_type_and_severity",
            "max_export_per_notice_type",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer")
            if value < 0:
                raise ValueError(f"{name} must be >= 0")

    @property
    def effective_export_per_notice_type(self) -> int:
        return min(self.max_per_notice_type_and_severity, self.max_export_per_notice_type)


def limits_from_mapping(options: Mapping[str, object]) -> NoticeLimits:
    resolved: dict[str, int] = {}
    for option, value in options.items():
        field_name = _OPTION_FIELDS.get(option)
        if field_name is None:
            raise LimitsConfigError(
                "E_LIMITS_CONFIG_INVALID", f"unsupported notice limit option '{option}'"
            )
        if field_name in resolved:
            raise LimitsConfigError(
                "E_LIMITS_CONFIG_INVALID", f"notice limit '{field_name}' is set more than once"
            )
        resolved[field_name] = _require_count(option, value)
    return NoticeLimits(**resolved)


def load_notice_limits(path: str | Path) -> NoticeLimits:
    return _load_notice_limits_cached(str(Path(path).resolve()))


@cache
def _load_notice_limits_cached(path: str) -> NoticeLimits:
    target = Path(path)
    raw = _read_yaml_file(target)
    section = raw.get(_LIMITS_SECTION)
    if section is None:
        return NoticeLimits()
    if not isinstance(section, dict):
        raise LimitsConfigError(
            "E_LIMITS_CONFIG_INVALID", f"missing or invalid mapping for key '{_LIMITS_SECTION}'"
        )
    limits = limits_from_mapping(cast(dict[str, object], section))
    logger.debug("loaded notice limits from %s: %s", target, limits)
    return limits


def _read_yaml_file(path: Path) -> dict[str, object]:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LimitsConfigError(
            "E_LIMITS_CONFIG_READ_FAILED",
            f"unable to read notice limits file '{path}': {exc}",
        ) from exc
    try:
        payload = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise LimitsConfigError(
            "E_LIMITS_CONFIG_PARSE_FAILED",
            f"invalid notice limits yaml in '{path}': {exc}",
        ) from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise LimitsConfigError(
            "E_LIMITS_CONFIG_INVALID", "notice limits file root must be a mapping"
        )
    return cast(dict[str, object], payload)


def _require_count(option: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise LimitsConfigError(
            "E_LIMITS_CONFIG_INVALID", f"notice limit '{option}' must be an integer"
        )
    if value < 0:
        raise LimitsConfigError("E_LIMITS_CONFIG_INVALID", f"notice limit '{option}' must be >= 0")
    return value
