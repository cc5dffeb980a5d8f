"""Shared utilities package."""

from xtemp.shared.logging import setup_logger, get_logger, LoggerAdapter
from xtemp.shared.limits import default_batch_size, compute_batch_size, read_open_file_limit
from xtemp.shared.metrics import MetricsCollector
from xtemp.shared.types import PathLike, LimitProvider, Quoter

__all__ = [
    "setup_logger",
    "get_logger",
    "LoggerAdapter",
    "default_batch_size",
    "compute_batch_size",
    "read_open_file_limit",
    "MetricsCollector",
    "PathLike",
    "LimitProvider",
    "Quoter",
]
