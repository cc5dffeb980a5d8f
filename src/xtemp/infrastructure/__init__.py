"""Infrastructure layer package."""

from xtemp.infrastructure.config import ConfigLoader, BatchConfig
from xtemp.infrastructure.io import read_records
from xtemp.infrastructure.process import SubprocessRunner
from xtemp.infrastructure.storage import ScratchFile, TempfilePool, ListFile

__all__ = [
    "ConfigLoader",
    "BatchConfig",
    "read_records",
    "SubprocessRunner",
    "ScratchFile",
    "TempfilePool",
    "ListFile",
]
