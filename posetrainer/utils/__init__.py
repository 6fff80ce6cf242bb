from .logging_config import (
    setup_logger,
    set_log_level,
    log_cpu_and_mem_usage,
    start_resource_monitoring,
)
from .warning_suppressor import suppress_warnings

__all__ = [
    "setup_logger",
    "set_log_level",
    "log_cpu_and_mem_usage",
    "start_resource_monitoring",
    "suppress_warnings",
]
