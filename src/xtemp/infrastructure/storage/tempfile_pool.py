"""Fixed-size pool of reusable scratch files."""

from pathlib import Path
from typing import List, Optional, Sequence

from xtemp.domain.exceptions import ProvisioningError
from xtemp.infrastructure.storage.scratch import ScratchFile, DEFAULT_PREFIX
from xtemp.shared.logging import get_logger
from xtemp.shared.types import PathLike

logger = get_logger(__name__)


class TempfilePool:
    """
    Owns exactly ``size`` scratch files, created once and rewritten for every
    batch. Implements ITempfilePool protocol.

    Slot ``i`` only holds valid content for the batch most recently written;
    slots past that batch's length keep stale data and are never handed out.
    """

    def __init__(self, slots: List[ScratchFile]):
        if not slots:
            raise ValueError("Pool needs at least one slot")
        self._slots = slots
        self._active_count = 0

    @classmethod
    def allocate(
        cls,
        size: int,
        directory: Optional[PathLike] = None,
        prefix: str = DEFAULT_PREFIX
    ) -> "TempfilePool":
        """
        Create a pool of ``size`` empty scratch files.

        Files created before a failure are removed before the error
        propagates.

        Raises:
            ProvisioningError: If any file cannot be created
        """
        if size < 1:
            raise ValueError(f"Pool size must be positive, got: {size}")

        slots: List[ScratchFile] = []
        try:
            for _ in range(size):
                slots.append(ScratchFile.create(directory=directory, prefix=prefix))
        except ProvisioningError:
            logger.debug(f"Allocation failed after {len(slots)} of {size} slots, cleaning up")
            for slot in slots:
                slot.close()
            raise

        logger.debug(f"Allocated {size} pool slots")
        return cls(slots)

    @property
    def size(self) -> int:
        return len(self._slots)

    @property
    def active_count(self) -> int:
        """Number of slots written by the most recent ``write_batch``."""
        return self._active_count

    def write_batch(self, records: Sequence[str], keep_newlines: bool = False) -> None:
        """
        Write one record per slot, starting at slot 0.

        Each slot is truncated, rewound, written and flushed so a process
        spawned afterwards sees exactly this batch.

        Args:
            records: Records for the batch, at most ``size`` of them
            keep_newlines: Append a single ``\\n`` after each record

        Raises:
            WriteError: If any slot cannot be rewritten
        """
        if len(records) > len(self._slots):
            raise ValueError(f"Batch of {len(records)} records exceeds pool size {len(self._slots)}")

        self._active_count = 0
        suffix = b"\n" if keep_newlines else b""
        for slot, record in zip(self._slots, records):
            slot.rewrite(record.encode("utf-8") + suffix)
        self._active_count = len(records)

    def paths(self, active_count: int) -> List[Path]:
        """Return the paths of slots ``0..active_count`` in order."""
        if active_count < 0 or active_count > len(self._slots):
            raise ValueError(f"active_count must be within 0..{len(self._slots)}, got: {active_count}")
        return [slot.path for slot in self._slots[:active_count]]

    def close(self) -> None:
        """Remove every slot file."""
        for slot in self._slots:
            slot.close()
        self._active_count = 0

    def __enter__(self) -> "TempfilePool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
