"""Single file listing the active pool slot paths."""

from pathlib import Path
from typing import Optional, Sequence

from xtemp.infrastructure.storage.scratch import ScratchFile
from xtemp.shared.logging import get_logger
from xtemp.shared.types import PathLike

logger = get_logger(__name__)


class ListFile:
    """
    One scratch file rewritten per batch with the newline-joined paths of
    that batch's slots. Implements IListFile protocol.
    """

    def __init__(self, scratch: ScratchFile):
        self._scratch = scratch

    @classmethod
    def allocate(cls, directory: Optional[PathLike] = None) -> "ListFile":
        """
        Create the list file.

        Raises:
            ProvisioningError: If the file cannot be created
        """
        scratch = ScratchFile.create(directory=directory, prefix="xtemp-list-")
        logger.debug(f"Allocated list file {scratch.path}")
        return cls(scratch)

    @property
    def path(self) -> Path:
        return self._scratch.path

    def write_paths(self, paths: Sequence[PathLike]) -> None:
        """
        Rewrite the file with one path per line.

        Raises:
            WriteError: If the file cannot be rewritten
        """
        content = "\n".join(str(p) for p in paths)
        self._scratch.rewrite(content.encode("utf-8"))

    def close(self) -> None:
        """Remove the list file."""
        self._scratch.close()

    def __enter__(self) -> "ListFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
