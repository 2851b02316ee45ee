from .init import get_logger, log_summary, setup_logging
from .skip_log import SkipLogBuffer

__all__ = [
    "SkipLogBuffer",
    "get_logger",
    "log_summary",
    "setup_logging",
]
