from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Final

from noticekit.notices import (
    MappingKey,
    Notice,
    NoticeRecorder,
    SystemErrorNotice,
    ValidationNotice,
    mapping_key_sort_key,
)

logger = logging.getLogger(__name__)

NOTICES_MEMBER: Final[str] = "notices"


def group_notices_by_mapping_key[N: ValidationNotice | SystemErrorNotice](
    notices: Iterable[N],
) -> dict[MappingKey, list[N]]:
    grouped: dict[MappingKey, list[N]] = {}
    for notice in notices:
        grouped.setdefault(notice.mapping_key, []).append(notice)
    return {key: grouped[key] for key in sorted(grouped, key=mapping_key_sort_key)}


def export_notices(
    notices: Iterable[Notice],
    counts: Mapping[MappingKey, int],
    *,
    max_export_per_notice_type: int,
) -> dict[str, object]:
    if max_export_per_notice_type < 0:
        raise ValueError("max_export_per_notice_type must be >= 0")
    samples: dict[MappingKey, list[object]] = {key: [] for key in counts}
    for notice in notices:
        group = samples.setdefault(notice.mapping_key, [])
        if len(group) < max_export_per_notice_type:
            group.append(notice.context)

    summaries: list[dict[str, object]] = []
    for key in sorted(samples, key=mapping_key_sort_key):
        summaries.append(
            {
                "code": key.code,
                "severity": key.severity.value,
                "totalNotices": _true_count(counts, key),
                NOTICES_MEMBER: samples[key],
            }
        )
    return {NOTICES_MEMBER: summaries}


def export_validation_notices(recorder: NoticeRecorder) -> dict[str, object]:
    return export_notices(
        recorder.iter_validation_notices(),
        recorder.validation_notice_counts(),
        max_export_per_notice_type=recorder.limits.max_export_per_notice_type,
    )


def export_system_errors(recorder: NoticeRecorder) -> dict[str, object]:
    return export_notices(
        recorder.iter_system_errors(),
        recorder.system_error_counts(),
        max_export_per_notice_type=recorder.limits.max_export_per_notice_type,
    )


def canonical_report_json(document: Mapping[str, object]) -> str:
    return json.dumps(
        document,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def write_report(path: str | Path, document: Mapping[str, object]) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(canonical_report_json(document), encoding="utf-8")
    logger.info("wrote notice report to %s", target)
    return target


def _true_count(counts: Mapping[MappingKey, int], key: MappingKey) -> int:
    count = counts.get(key)
    if count is None:
        raise ValueError(f"no recorded count for notice '{key.code}' with severity {key.severity}")
    return count
