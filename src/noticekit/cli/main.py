from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Final, Literal

import typer

from noticekit.compare import (
    AcceptanceSummary,
    RegressionDiff,
    compare_reports,
    summarize_acceptance,
)
from noticekit.report import MalformedReportError, ValidationReport, load_report

app = typer.Typer(help="Validation notice report tools")

_EXIT_REGRESSION: Final[int] = 1
_EXIT_MALFORMED: Final[int] = 2
_REPORT_GLOB: Final[str] = "*.json"
_FORMAT_OPTION_HELP: Final[str] = "Output format: text|json"


@app.command()
def compare(
    baseline: Path,
    candidate: Path,
    format: Literal["text", "json"] = typer.Option(
        "text",
        "--format",
        help=_FORMAT_OPTION_HELP,
        show_default=True,
    ),
) -> None:
    """Compare the error codes of a baseline and a candidate report."""
    baseline_report = _load_or_exit(baseline)
    candidate_report = _load_or_exit(candidate)
    diff = compare_reports(baseline_report, candidate_report)

    if format == "json":
        typer.echo(_dump_json(diff.to_dict()))
    else:
        _print_diff(diff)
    raise typer.Exit(code=_EXIT_REGRESSION if diff.has_new_errors else 0)


@app.command()
def acceptance(
    baseline_dir: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory of baseline reports",
    ),
    candidate_dir: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory of candidate reports",
    ),
    threshold: float = typer.Option(
        1.0,
        "--threshold",
        help="Maximum percentage of datasets allowed to gain new error codes",
        show_default=True,
    ),
    format: Literal["text", "json"] = typer.Option(
        "text",
        "--format",
        help=_FORMAT_OPTION_HELP,
        show_default=True,
    ),
) -> None:
    """Compare every report shared by two directories and gate on new errors."""
    diffs: dict[str, RegressionDiff] = {}
    for baseline_path in sorted(baseline_dir.glob(_REPORT_GLOB)):
        candidate_path = candidate_dir / baseline_path.name
        if not candidate_path.is_file():
            typer.echo(f"SKIP dataset={baseline_path.stem} reason=missing_candidate", err=True)
            continue
        diffs[baseline_path.stem] = compare_reports(
            _load_or_exit(baseline_path),
            _load_or_exit(candidate_path),
        )

    if not diffs:
        typer.echo(
            f"no dataset reports compared between {baseline_dir} and {candidate_dir}",
            err=True,
        )
        raise typer.Exit(code=_EXIT_MALFORMED)

    try:
        summary = summarize_acceptance(diffs, threshold_percent=threshold)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--threshold") from exc

    if format == "json":
        typer.echo(_dump_json(summary.to_dict()))
    else:
        _print_acceptance(summary, diffs)
    raise typer.Exit(code=0 if summary.passed else _EXIT_REGRESSION)


@app.command()
def summary(report: Path) -> None:
    """Print one line per notice group of a report."""
    parsed = _load_or_exit(report)
    for notice in parsed.notices:
        typer.echo(
            "NOTICE"
            f" code={notice.code}"
            f" severity={notice.severity}"
            f" total={notice.total_notices}"
            f" samples={len(notice.contexts)}"
        )
    typer.echo(f"ERROR_CODES {','.join(parsed.error_codes)}")


def _load_or_exit(path: Path) -> ValidationReport:
    try:
        return load_report(path)
    except MalformedReportError as exc:
        typer.echo(f"malformed report {path}: {exc}", err=True)
        raise typer.Exit(code=_EXIT_MALFORMED) from exc


def _print_diff(diff: RegressionDiff) -> None:
    for code in diff.new_errors:
        typer.echo(f"NEW_ERROR code={code}")
    for code in diff.resolved_errors:
        typer.echo(f"RESOLVED_ERROR code={code}")
    typer.echo(
        "SUMMARY"
        f" new_errors={len(diff.new_errors)}"
        f" resolved_errors={len(diff.resolved_errors)}"
    )


def _print_acceptance(summary: AcceptanceSummary, diffs: Mapping[str, RegressionDiff]) -> None:
    for dataset_id in summary.datasets_with_new_errors:
        typer.echo(f"DATASET id={dataset_id} new_errors={','.join(diffs[dataset_id].new_errors)}")
    for code, count in summary.new_error_dataset_counts.items():
        typer.echo(f"NEW_ERROR code={code} datasets={count}")
    typer.echo(
        "ACCEPTANCE"
        f" datasets={summary.dataset_count}"
        f" with_new_errors={len(summary.datasets_with_new_errors)}"
        f" percent={summary.new_error_percent:.6g}"
        f" threshold={summary.threshold_percent:.6g}"
        f" status={'pass' if summary.passed else 'fail'}"
    )


def _dump_json(payload: object) -> str:
    return json.dumps(payload, ensure_ascii=True, separators=(",", ":"), sort_keys=True)


def main() -> None:
    app()
