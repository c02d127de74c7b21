from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from .limits import NoticeLimits
from .models import MappingKey, SystemErrorNotice, ValidationNotice, is_error


class NoticeRecorder:
    """Bounded notice aggregator owned by a single validation task.

    Recorders are not synchronized. Each task writes to its own recorder and
    the recorders are merged sequentially once every task has finished.
    """

    __slots__ = (
        "_consumed",
        "_has_validation_errors",
        "_limits",
        "_system_error_counts",
        "_system_errors",
        "_validation_counts",
        "_validation_notices",
    )

    def __init__(self, limits: NoticeLimits | None = None) -> None:
        self._limits = limits if limits is not None else NoticeLimits()
        self._validation_notices: list[ValidationNotice] = []
        self._system_errors: list[SystemErrorNotice] = []
        self._validation_counts: dict[MappingKey, int] = {}
        self._system_error_counts: dict[MappingKey, int] = {}
        self._has_validation_errors = False
        self._consumed = False

    @property
    def limits(self) -> NoticeLimits:
        return self._limits

    @property
    def consumed(self) -> bool:
        return self._consumed

    def add_validation_notice(self, notice: ValidationNotice) -> None:
        if not isinstance(notice, ValidationNotice):
            raise TypeError("notice must be a ValidationNotice")
        if is_error(notice):
            self._has_validation_errors = True
        if len(self._validation_notices) >= self._limits.max_total_validation_notices:
            return
        key = notice.mapping_key
        count = self._validation_counts.get(key, 0) + 1
        self._validation_counts[key] = count
        if count <= self._limits.max_per_notice_type_and_severity:
            self._validation_notices.append(notice)

    def add_system_error(self, error: SystemErrorNotice) -> None:
        if not isinstance(error, SystemErrorNotice):
            raise TypeError("error must be a SystemErrorNotice")
        key = error.mapping_key
        self._system_error_counts[key] = self._system_error_counts.get(key, 0) + 1
        self._system_errors.append(error)

    def merge(self, other: NoticeRecorder) -> None:
        if other is self:
            raise ValueError("cannot merge a recorder into itself")
        if other._consumed:
            raise ValueError("recorder has already been merged")
        self._validation_notices.extend(other._validation_notices)
        self._system_errors.extend(other._system_errors)
        _add_counts(self._validation_counts, other._validation_counts)
        _add_counts(self._system_error_counts, other._system_error_counts)
        self._has_validation_errors |= other._has_validation_errors
        other._consumed = True

    def has_validation_errors(self) -> bool:
        return self._has_validation_errors

    @property
    def validation_notices(self) -> tuple[ValidationNotice, ...]:
        return tuple(self._validation_notices)

    @property
    def system_errors(self) -> tuple[SystemErrorNotice, ...]:
        return tuple(self._system_errors)

    def iter_validation_notices(self) -> Iterator[ValidationNotice]:
        return iter(self._validation_notices)

    def iter_system_errors(self) -> Iterator[SystemErrorNotice]:
        return iter(self._system_errors)

    def validation_notice_counts(self) -> Mapping[MappingKey, int]:
        return MappingProxyType(self._validation_counts)

    def system_error_counts(self) -> Mapping[MappingKey, int]:
        return MappingProxyType(self._system_error_counts)

    def validation_notice_count(self, key: MappingKey) -> int:
        return self._validation_counts.get(key, 0)

    def system_error_count(self, key: MappingKey) -> int:
        return self._system_error_counts.get(key, 0)


def _add_counts(target: dict[MappingKey, int], source: Mapping[MappingKey, int]) -> None:
    for key, count in source.items():
        target[key] = target.get(key, 0) + count
