from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Final

from .limits import NoticeLimits
from .models import SystemErrorNotice
from .recorder import NoticeRecorder

logger = logging.getLogger(__name__)

RUNTIME_EXCEPTION_IN_TASK: Final[str] = "runtime_exception_in_task"

type NoticeTask = Callable[[NoticeRecorder], None]


class MergeCoordinator:
    def __init__(self, limits: NoticeLimits | None = None) -> None:
        self._destination = NoticeRecorder(limits)
        self._joined_count = 0

    @property
    def joined_count(self) -> int:
        return self._joined_count

    def join(self, recorder: NoticeRecorder) -> None:
        if recorder is self._destination:
            raise ValueError("cannot join the destination recorder into itself")
        self._destination.merge(recorder)
        self._joined_count += 1
        logger.debug(
            "joined recorder %d (has_validation_errors=%s)",
            self._joined_count,
            recorder.has_validation_errors(),
        )

    def result(self) -> NoticeRecorder:
        return self._destination


def merge_recorders(
    recorders: Iterable[NoticeRecorder],
    *,
    limits: NoticeLimits | None = None,
) -> NoticeRecorder:
    coordinator = MergeCoordinator(limits)
    for recorder in recorders:
        coordinator.join(recorder)
    return coordinator.result()


def run_tasks(
    tasks: Sequence[NoticeTask],
    *,
    limits: NoticeLimits | None = None,
    max_workers: int | None = None,
) -> NoticeRecorder:
    recorders = [NoticeRecorder(limits) for _ in tasks]
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(_run_task, task, recorder, task_index)
            for task_index, (task, recorder) in enumerate(zip(tasks, recorders, strict=True))
        ]
    for future in futures:
        future.result()
    return merge_recorders(recorders, limits=limits)


def _run_task(task: NoticeTask, recorder: NoticeRecorder, task_index: int) -> None:
    try:
        task(recorder)
    except Exception as exc:
        task_name = _task_name(task)
        logger.warning("task %s (index %d) failed: %s", task_name, task_index, exc)
        recorder.add_system_error(
            SystemErrorNotice(
                code=RUNTIME_EXCEPTION_IN_TASK,
                context={
                    "exception": type(exc).__name__,
                    "message": _exception_message(exc),
                    "task": task_name,
                    "taskIndex": task_index,
                },
            )
        )


def _task_name(task: NoticeTask) -> str:
    name = getattr(task, "__qualname__", None) or getattr(task, "__name__", None)
    if isinstance(name, str) and name:
        return name
    return type(task).__name__


def _exception_message(exc: Exception) -> str:
    message = str(exc).strip()
    if message:
        return message
    return type(exc).__name__
