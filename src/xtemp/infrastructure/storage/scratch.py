"""A single reusable on-disk scratch file."""

import os
import tempfile
from pathlib import Path
from typing import Optional

from xtemp.domain.exceptions import ProvisioningError, WriteError
from xtemp.shared.logging import get_logger
from xtemp.shared.types import PathLike

logger = get_logger(__name__)

DEFAULT_PREFIX = "xtemp-"


class ScratchFile:
    """
    A named temporary file whose path stays fixed while its contents are
    rewritten in place. The file is removed when closed.
    """

    def __init__(self, handle):
        self._handle = handle
        self.path = Path(os.path.abspath(handle.name))

    @classmethod
    def create(cls, directory: Optional[PathLike] = None, prefix: str = DEFAULT_PREFIX) -> "ScratchFile":
        """
        Create an empty scratch file.

        Args:
            directory: Directory for the file (defaults to the system temp dir)
            prefix: File name prefix

        Raises:
            ProvisioningError: If the file cannot be created
        """
        try:
            handle = tempfile.NamedTemporaryFile(mode="w+b", prefix=prefix, dir=directory)
        except OSError as e:
            raise ProvisioningError(str(e)) from e
        return cls(handle)

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def rewrite(self, data: bytes) -> None:
        """
        Replace the file contents with ``data`` and flush it to the OS.

        Raises:
            WriteError: If truncating, seeking, writing or flushing fails
        """
        try:
            self._handle.seek(0)
            self._handle.truncate()
            self._handle.write(data)
            self._handle.flush()
        except OSError as e:
            raise WriteError(f"{self.path}: {e}") from e

    def close(self) -> None:
        """Close and delete the file. Failures are logged, not raised."""
        if self._handle.closed:
            return
        try:
            self._handle.close()
        except FileNotFoundError:
            # removed by someone else, e.g. the command itself
            logger.debug(f"Scratch file already gone: {self.path}")
        except OSError as e:
            logger.warning(f"Failed to remove scratch file {self.path}: {e}")
