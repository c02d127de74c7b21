from .regression import (
    AcceptanceSummary,
    RegressionDiff,
    compare_reports,
    error_codes,
    summarize_acceptance,
)

__all__ = [
    "AcceptanceSummary",
    "RegressionDiff",
    "compare_reports",
    "error_codes",
    "summarize_acceptance",
]
