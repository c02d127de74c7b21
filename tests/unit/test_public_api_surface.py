from __future__ import annotations

import pytest

import noticekit.compare as compare_api
import noticekit.notices as notices_api
import noticekit.report as report_api

pytestmark = pytest.mark.unit


def test_notices_public_api_surface_is_explicit_and_stable() -> None:
    assert notices_api.__all__ == [
        "DEFAULT_MAX_EXPORT_PER_NOTICE_TYPE",
        "DEFAULT_MAX_PER_NOTICE_TYPE_AND_SEVERITY",
        "DEFAULT_MAX_TOTAL_VALIDATION_NOTICES",
        "LimitsConfigError",
        "MappingKey",
        "MergeCoordinator",
        "Notice",
        "NoticeLimits",
        "NoticeRecorder",
        "RUNTIME_EXCEPTION_IN_TASK",
        "Severity",
        "SystemErrorNotice",
        "ValidationNotice",
        "is_error",
        "limits_from_mapping",
        "load_notice_limits",
        "mapping_key_sort_key",
        "merge_recorders",
        "run_tasks",
        "severity_rank",
    ]
    assert not hasattr(notices_api, "_normalize_json")


def test_report_public_api_surface_is_explicit_and_stable() -> None:
    assert report_api.__all__ == [
        "MalformedReportError",
        "NoticeSummary",
        "ValidationReport",
        "canonical_report_json",
        "export_notices",
        "export_system_errors",
        "export_validation_notices",
        "extract_error_codes",
        "group_notices_by_mapping_key",
        "load_report",
        "parse_report",
        "parse_report_json",
        "write_report",
    ]


def test_compare_public_api_surface_is_explicit_and_stable() -> None:
    assert compare_api.__all__ == [
        "AcceptanceSummary",
        "RegressionDiff",
        "compare_reports",
        "error_codes",
        "summarize_acceptance",
    ]
