"""Default batch sizing from the open-file limit.

Kept free of side effects apart from the limit query itself so the sizing
rules can be unit-tested with a fake limit.
"""
from typing import Optional

from xtemp.shared.types import LimitProvider

# Descriptors kept back for stdio, the list file and whatever the child inherits
RESERVED_DESCRIPTORS = 32
FALLBACK_OPEN_FILES = 1024


def read_open_file_limit() -> Optional[int]:
    """Return the soft RLIMIT_NOFILE, or None if unavailable or unlimited."""
    try:
        import resource
    except ImportError:
        # not a POSIX platform
        return None

    try:
        soft, _hard = resource.getrlimit(resource.RLIMIT_NOFILE)
    except (OSError, ValueError):
        return None

    if soft == resource.RLIM_INFINITY or soft <= 0:
        return None
    return soft


def compute_batch_size(open_file_limit: Optional[int]) -> int:
    """Map an open-file limit to a batch size that leaves descriptors spare.

    Rules:
    - unknown limit => FALLBACK_OPEN_FILES - RESERVED_DESCRIPTORS
    - otherwise => limit - RESERVED_DESCRIPTORS, never below 1
    """
    if open_file_limit is None:
        open_file_limit = FALLBACK_OPEN_FILES
    return max(1, open_file_limit - RESERVED_DESCRIPTORS)


def default_batch_size(limit_provider: LimitProvider = read_open_file_limit) -> int:
    """Batch size to use when none is configured."""
    return compute_batch_size(limit_provider())
