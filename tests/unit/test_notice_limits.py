from __future__ import annotations

from pathlib import Path

import pytest

from noticekit.notices.limits import (
    DEFAULT_MAX_EXPORT_PER_NOTICE_TYPE,
    DEFAULT_MAX_PER_NOTICE_TYPE_AND_SEVERITY,
    DEFAULT_MAX_TOTAL_VALIDATION_NOTICES,
    LimitsConfigError,
    NoticeLimits,
    limits_from_mapping,
    load_notice_limits,
)

pytestmark = pytest.mark.unit


def test_defaults_match_documented_caps() -> None:
    limits = NoticeLimits()

    assert limits.max_total_validation_notices == DEFAULT_MAX_TOTAL_VALIDATION_NOTICES == 10_000_000
    assert limits.max_per_notice_type_and_severity == DEFAULT_MAX_PER_NOTICE_TYPE_AND_SEVERITY
    assert DEFAULT_MAX_PER_NOTICE_TYPE_AND_SEVERITY == 100_000
    assert limits.max_export_per_notice_type == DEFAULT_MAX_EXPORT_PER_NOTICE_TYPE == 1_000
    assert limits.effective_export_per_notice_type == 1_000


def test_effective_export_is_bounded_by_storage_cap() -> None:
    limits = NoticeLimits(max_per_notice_type_and_severity=10, max_export_per_notice_type=50)
    assert limits.effective_export_per_notice_type == 10


@pytest.mark.parametrize("value", [-1, True, 1.5, "10"])
def test_limits_reject_invalid_values(value: object) -> None:
    with pytest.raises(ValueError):
        NoticeLimits(max_export_per_notice_type=value)  # type: ignore[arg-type]


def test_limits_from_mapping_accepts_both_option_spellings() -> None:
    limits = limits_from_mapping(
        {
            "maxTotalValidationNotices": 5,
            "max_per_notice_type_and_severity": 3,
            "maxExportPerNoticeType": 2,
        }
    )

    assert limits == NoticeLimits(
        max_total_validation_notices=5,
        max_per_notice_type_and_severity=3,
        max_export_per_notice_type=2,
    )


def test_limits_from_mapping_rejects_unknown_and_duplicate_options() -> None:
    with pytest.raises(LimitsConfigError) as unknown:
        limits_from_mapping({"max_samples": 1})
    assert unknown.value.code == "E_LIMITS_CONFIG_INVALID"

    with pytest.raises(LimitsConfigError, match="more than once"):
        limits_from_mapping({"maxExportPerNoticeType": 1, "max_export_per_notice_type": 2})

    with pytest.raises(LimitsConfigError, match=">= 0"):
        limits_from_mapping({"maxExportPerNoticeType": -4})


def test_load_notice_limits_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "limits.yaml"
    path.write_text(
        "notice_limits:\n  max_per_notice_type_and_severity: 7\n  maxExportPerNoticeType: 3\n",
        encoding="utf-8",
    )

    limits = load_notice_limits(path)

    assert limits.max_per_notice_type_and_severity == 7
    assert limits.max_export_per_notice_type == 3
    assert limits.max_total_validation_notices == DEFAULT_MAX_TOTAL_VALIDATION_NOTICES


def test_load_notice_limits_defaults_when_section_absent(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("other: 1\n", encoding="utf-8")

    assert load_notice_limits(path) == NoticeLimits()


def test_load_notice_limits_error_codes(tmp_path: Path) -> None:
    with pytest.raises(LimitsConfigError) as missing:
        load_notice_limits(tmp_path / "missing.yaml")
    assert missing.value.code == "E_LIMITS_CONFIG_READ_FAILED"

    broken = tmp_path / "broken.yaml"
    broken.write_text("notice_limits: [unclosed\n", encoding="utf-8")
    with pytest.raises(LimitsConfigError) as parse_failed:
        load_notice_limits(broken)
    assert parse_failed.value.code == "E_LIMITS_CONFIG_PARSE_FAILED"

    not_mapping = tmp_path / "list.yaml"
    not_mapping.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(LimitsConfigError) as invalid_root:
        load_notice_limits(not_mapping)
    assert invalid_root.value.code == "E_LIMITS_CONFIG_INVALID"

    bad_section = tmp_path / "section.yaml"
    bad_section.write_text("notice_limits: 12\n", encoding="utf-8")
    with pytest.raises(LimitsConfigError) as invalid_section:
        load_notice_limits(bad_section)
    assert invalid_section.value.code == "E_LIMITS_CONFIG_INVALID"
