from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np

from noticekit.report import ValidationReport


@dataclass(frozen=True, slots=True)
class RegressionDiff:
    new_errors: tuple[str, ...]
    resolved_errors: tuple[str, ...]

    @property
    def has_new_errors(self) -> bool:
        return bool(self.new_errors)

    def to_dict(self) -> dict[str, object]:
        return {
            "newErrors": list(self.new_errors),
            "resolvedErrors": list(self.resolved_errors),
        }


@dataclass(frozen=True, slots=True)
class AcceptanceSummary:
    dataset_count: int
    datasets_with_new_errors: tuple[str, ...]
    new_error_percent: float
    threshold_percent: float
    new_error_dataset_counts: Mapping[str, int]

    @property
    def passed(self) -> bool:
        return self.new_error_percent <= self.threshold_percent

    def to_dict(self) -> dict[str, object]:
        return {
            "datasetCount": self.dataset_count,
            "datasetsWithNewErrors": list(self.datasets_with_new_errors),
            "newErrorPercent": self.new_error_percent,
            "thresholdPercent": self.threshold_percent,
            "newErrorDatasetCounts": dict(self.new_error_dataset_counts),
            "passed": self.passed,
        }


def error_codes(report: ValidationReport) -> frozenset[str]:
    return frozenset(report.error_codes)


def compare_reports(baseline: ValidationReport, candidate: ValidationReport) -> RegressionDiff:
    baseline_codes = error_codes(baseline)
    candidate_codes = error_codes(candidate)
    return RegressionDiff(
        new_errors=tuple(sorted(candidate_codes - baseline_codes)),
        resolved_errors=tuple(sorted(baseline_codes - candidate_codes)),
    )


def summarize_acceptance(
    diffs: Mapping[str, RegressionDiff],
    *,
    threshold_percent: float,
) -> AcceptanceSummary:
    if not math.isfinite(threshold_percent) or not 0.0 <= threshold_percent <= 100.0:
        raise ValueError("threshold_percent must be within [0, 100]")

    dataset_ids = tuple(sorted(diffs))
    flags = np.fromiter(
        (diffs[dataset_id].has_new_errors for dataset_id in dataset_ids),
        dtype=np.bool_,
        count=len(dataset_ids),
    )
    new_error_percent = float(flags.mean() * 100.0) if flags.size else 0.0

    codes = np.asarray(
        [code for dataset_id in dataset_ids for code in diffs[dataset_id].new_errors],
        dtype=np.str_,
    )
    unique_codes, dataset_counts = np.unique(codes, return_counts=True)
    return AcceptanceSummary(
        dataset_count=len(dataset_ids),
        datasets_with_new_errors=tuple(
            dataset_id for dataset_id, flagged in zip(dataset_ids, flags, strict=True) if flagged
        ),
        new_error_percent=new_error_percent,
        threshold_percent=float(threshold_percent),
        new_error_dataset_counts=MappingProxyType(
            {
                str(code): int(count)
                for code, count in zip(unique_codes.tolist(), dataset_counts.tolist(), strict=True)
            }
        ),
    )
