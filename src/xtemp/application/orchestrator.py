"""Top-level batch runner."""

import shlex
from contextlib import ExitStack
from typing import BinaryIO, Callable, List, Optional, Sequence, TextIO

from xtemp.application.resolver import build_argv
from xtemp.domain.exceptions import ConfigurationError, SubprocessError
from xtemp.domain.models import Batch, RunResult, partition_records, batch_count
from xtemp.domain.protocols import (
    ITempfilePool, IListFile, IProcessRunner, ILogger, IMetricsCollector
)
from xtemp.infrastructure.config.loader import BatchConfig
from xtemp.infrastructure.io.reader import read_records
from xtemp.infrastructure.process.runner import SubprocessRunner
from xtemp.infrastructure.storage.list_file import ListFile
from xtemp.infrastructure.storage.tempfile_pool import TempfilePool
from xtemp.shared.limits import compute_batch_size, read_open_file_limit
from xtemp.shared.logging import LoggerAdapter, get_logger
from xtemp.shared.metrics import MetricsCollector
from xtemp.shared.types import LimitProvider, Quoter


class BatchRunner:
    """
    Runs the configured command once per batch of input records.

    Batches run strictly one after another. The first batch that cannot be
    written, started, or that exits unsuccessfully ends the run; later
    batches are never attempted.
    """

    def __init__(
        self,
        config: BatchConfig,
        process_runner: Optional[IProcessRunner] = None,
        limit_provider: LimitProvider = read_open_file_limit,
        logger: Optional[ILogger] = None,
        metrics: Optional[IMetricsCollector] = None,
        pool_factory: Optional[Callable[..., ITempfilePool]] = None,
        list_file_factory: Optional[Callable[..., IListFile]] = None,
        quote: Quoter = shlex.quote
    ):
        if not config.command:
            raise ConfigurationError("missing required argument: command")

        self._config = config
        self._template = config.template
        self._runner = process_runner or SubprocessRunner(line_output=config.line_output)
        self._limit_provider = limit_provider
        self._logger = logger or LoggerAdapter(get_logger(__name__))
        self._metrics = metrics or MetricsCollector()
        self._pool_factory = pool_factory or TempfilePool.allocate
        self._list_file_factory = list_file_factory or ListFile.allocate
        self._quote = quote

    @property
    def metrics(self) -> IMetricsCollector:
        return self._metrics

    def effective_batch_size(self) -> int:
        """Configured batch size, or one derived from the open-file limit."""
        if self._config.batch_size is not None:
            return self._config.batch_size

        size = compute_batch_size(self._limit_provider())
        self._logger.debug(f"Using default batch size {size}")
        return size

    def run_stream(self, stream: BinaryIO, output: Optional[TextIO] = None) -> RunResult:
        """Read every record from ``stream``, then run all batches."""
        records = read_records(stream)
        return self.run(records, output=output)

    def run(self, records: Sequence[str], output: Optional[TextIO] = None) -> RunResult:
        """
        Run the command over ``records``.

        Args:
            records: Input records in order
            output: Stream for captured child output in line-output mode

        Returns:
            RunResult for a run in which every batch succeeded

        Raises:
            ProvisioningError: If the pool or list file cannot be created
            WriteError: If a batch cannot be written
            SpawnError: If the command cannot be started
            SubprocessError: If the command fails for some batch
        """
        batch_size = self.effective_batch_size()
        result = RunResult(batch_size=batch_size)
        total = batch_count(len(records), batch_size)

        self._logger.info(
            f"Running {self._template.program} over {len(records)} records "
            f"in {total} batches of up to {batch_size}"
        )
        self._metrics.start_timer('run')

        with ExitStack() as stack:
            pool = self._pool_factory(batch_size, directory=self._config.temp_dir)
            stack.callback(pool.close)

            list_file = None
            if self._config.list_mode:
                list_file = self._list_file_factory(directory=self._config.temp_dir)
                stack.callback(list_file.close)

            for batch in partition_records(records, batch_size):
                self._run_batch(batch, total, pool, list_file, output)
                result.record_batch(batch)

        elapsed = self._metrics.stop_timer('run')
        result.metrics = self._metrics.get_summary()
        self._logger.info(
            f"Finished {result.batches_run} batches ({result.records_processed} records) in {elapsed:.2f}s"
        )
        return result

    def _run_batch(
        self,
        batch: Batch,
        total: int,
        pool: ITempfilePool,
        list_file: Optional[IListFile],
        output: Optional[TextIO]
    ) -> None:
        """Write, resolve, spawn and wait for one batch."""
        self._metrics.start_timer('batch')

        pool.write_batch(batch.records, keep_newlines=self._config.keep_newlines)
        paths = pool.paths(len(batch))

        if list_file is not None:
            list_file.write_paths(paths)
            replacements: List[str] = [str(list_file.path)]
        else:
            replacements = [str(p) for p in paths]

        argv = build_argv(
            self._template,
            replacements,
            shell=self._config.shell,
            quote=self._quote
        )

        self._logger.debug(f"Batch {batch.index + 1}/{total}: {len(batch)} records")
        self._metrics.increment_counter('invocations')
        rc = self._runner.run(argv, output=output)
        self._metrics.stop_timer('batch')

        if rc < 0:
            raise SubprocessError(None, batch.index, signal=-rc)
        if rc != 0:
            raise SubprocessError(rc, batch.index)

        self._metrics.increment_counter('batches')
        self._metrics.increment_counter('records', len(batch))
        self._metrics.record_metric('batch_records', len(batch))
