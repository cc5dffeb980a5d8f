"""Domain exceptions for the batch runner."""

from typing import Optional


class XtempError(Exception):
    """Base exception for all run errors."""

    kind = "error"

    def __str__(self) -> str:
        detail = super().__str__()
        return f"{self.kind}: {detail}" if detail else self.kind


class ConfigurationError(XtempError):
    """Raised when configuration is missing, invalid or contradictory."""

    kind = "invalid configuration"


class InputError(XtempError):
    """Raised when standard input is unreadable or not valid UTF-8."""

    kind = "invalid input"


class ProvisioningError(XtempError):
    """Raised when a pool slot or list file cannot be created."""

    kind = "could not create temporary file"


class WriteError(XtempError):
    """Raised when a scratch file or the output stream cannot be written."""

    kind = "write failed"


class SpawnError(XtempError):
    """Raised when the command cannot be started."""

    kind = "could not start command"


class SubprocessError(XtempError):
    """Raised when the command exits non-zero or is killed by a signal."""

    kind = "subprocess failed"

    def __init__(
        self,
        exit_code: Optional[int],
        batch_index: int,
        signal: Optional[int] = None
    ):
        self.exit_code = exit_code
        self.batch_index = batch_index
        self.signal = signal
        if exit_code is not None:
            detail = f"command exited with code {exit_code}"
        elif signal is not None:
            detail = f"command terminated by signal {signal}"
        else:
            detail = "command exited with code -1"
        super().__init__(f"{detail} (batch {batch_index + 1})")
