"""Domain models for batch execution."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Iterator


@dataclass(frozen=True)
class Batch:
    """A contiguous run of input records handled by one command invocation."""

    index: int
    records: Sequence[str]

    def __post_init__(self):
        if self.index < 0:
            raise ValueError("Batch index cannot be negative")
        if not self.records:
            raise ValueError("Batch must contain at least one record")

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class CommandTemplate:
    """Command tokens plus the optional placeholder marking the expansion site."""

    tokens: Sequence[str]
    placeholder: Optional[str] = None

    def __post_init__(self):
        if not self.tokens:
            raise ValueError("Command template cannot be empty")
        if self.placeholder == "":
            raise ValueError("Placeholder cannot be an empty string")

    @property
    def program(self) -> str:
        return self.tokens[0]


@dataclass
class RunResult:
    """Summary of a completed run."""

    batch_size: int
    batches_run: int = 0
    records_processed: int = 0
    metrics: dict = field(default_factory=dict)

    def record_batch(self, batch: Batch) -> None:
        """Account for a batch whose command exited successfully."""
        self.batches_run += 1
        self.records_processed += len(batch)


def partition_records(records: Sequence[str], batch_size: int) -> Iterator[Batch]:
    """
    Split records into ordered, non-overlapping batches.

    Every batch holds ``batch_size`` records except possibly the last one.
    No batch is produced for empty input.
    """
    if batch_size < 1:
        raise ValueError(f"Batch size must be positive, got: {batch_size}")

    for index, start in enumerate(range(0, len(records), batch_size)):
        yield Batch(index=index, records=records[start:start + batch_size])


def batch_count(record_count: int, batch_size: int) -> int:
    """Number of batches ``partition_records`` yields for ``record_count`` records."""
    return -(-record_count // batch_size)


def split_lines(text: str) -> List[str]:
    """Split decoded input into records on ``\\n``, dropping a trailing ``\\r``."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
