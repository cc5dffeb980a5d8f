"""Protocol definitions for dependency inversion."""

from typing import Protocol, List, Sequence, Optional, TextIO
from pathlib import Path


class ITempfilePool(Protocol):
    """Interface for the fixed set of reusable scratch files."""

    @property
    def size(self) -> int:
        """Number of slots in the pool."""
        ...

    def write_batch(self, records: Sequence[str], keep_newlines: bool = False) -> None:
        """Rewrite slots ``0..len(records)`` with one record each."""
        ...

    def paths(self, active_count: int) -> List[Path]:
        """Return the paths of the first ``active_count`` slots."""
        ...

    def close(self) -> None:
        """Remove every slot file."""
        ...


class IListFile(Protocol):
    """Interface for the single file listing the active slot paths."""

    @property
    def path(self) -> Path:
        """Stable path of the list file."""
        ...

    def write_paths(self, paths: Sequence[Path]) -> None:
        """Rewrite the file with the given paths."""
        ...

    def close(self) -> None:
        """Remove the list file."""
        ...


class IProcessRunner(Protocol):
    """Interface for spawning a command and waiting for it."""

    def run(self, argv: Sequence[str], output: Optional[TextIO] = None) -> int:
        """Run ``argv`` to completion and return its return code."""
        ...


class ILogger(Protocol):
    """Interface for logging."""

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        ...

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback."""
        ...


class IMetricsCollector(Protocol):
    """Interface for collecting metrics."""

    def start_timer(self, name: str) -> None:
        """Start a named timer."""
        ...

    def stop_timer(self, name: str) -> float:
        """Stop a named timer and return elapsed time."""
        ...

    def record_metric(self, name: str, value: float) -> None:
        """Record a metric value."""
        ...

    def increment_counter(self, name: str, amount: int = 1) -> None:
        """Increment a named counter."""
        ...

    def get_summary(self) -> dict:
        """Get summary of all metrics."""
        ...
