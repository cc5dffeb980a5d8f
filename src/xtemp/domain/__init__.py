"""Domain layer package."""

from .models import Batch, CommandTemplate, RunResult, partition_records, batch_count, split_lines
from .exceptions import (
    XtempError,
    ConfigurationError,
    InputError,
    ProvisioningError,
    WriteError,
    SpawnError,
    SubprocessError,
)
from .protocols import (
    ITempfilePool,
    IListFile,
    IProcessRunner,
    ILogger,
    IMetricsCollector,
)

__all__ = [
    # Models
    "Batch",
    "CommandTemplate",
    "RunResult",
    "partition_records",
    "batch_count",
    "split_lines",
    # Exceptions
    "XtempError",
    "ConfigurationError",
    "InputError",
    "ProvisioningError",
    "WriteError",
    "SpawnError",
    "SubprocessError",
    # Protocols
    "ITempfilePool",
    "IListFile",
    "IProcessRunner",
    "ILogger",
    "IMetricsCollector",
]
