from .deserialize import MalformedReportError, load_report, parse_report, parse_report_json
from .export import (
    canonical_report_json,
    export_notices,
    export_system_errors,
    export_validation_notices,
    group_notices_by_mapping_key,
    write_report,
)
from .models import NoticeSummary, ValidationReport, extract_error_codes

__all__ = [
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
