from .limits import (
    DEFAULT_MAX_EXPORT_PER_NOTICE_TYPE,
    DEFAULT_MAX_PER_NOTICE_TYPE_AND_SEVERITY,
    DEFAULT_MAX_TOTAL_VALIDATION_NOTICES,
    LimitsConfigError,
    NoticeLimits,
    limits_from_mapping,
    load_notice_limits,
)
from .merge import RUNTIME_EXCEPTION_IN_TASK, MergeCoordinator, merge_recorders, run_tasks
from .models import (
    MappingKey,
    Notice,
    Severity,
    SystemErrorNotice,
    ValidationNotice,
    is_error,
    mapping_key_sort_key,
    severity_rank,
)
from .recorder import NoticeRecorder

__all__ = [
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
