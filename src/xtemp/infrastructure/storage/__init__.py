"""Storage infrastructure."""

from xtemp.infrastructure.storage.scratch import ScratchFile
from xtemp.infrastructure.storage.tempfile_pool import TempfilePool
from xtemp.infrastructure.storage.list_file import ListFile

__all__ = ['ScratchFile', 'TempfilePool', 'ListFile']
