"""Spawning commands and waiting for them."""

import subprocess
import sys
from typing import Optional, Sequence, TextIO

from xtemp.domain.exceptions import SpawnError, WriteError
from xtemp.shared.logging import get_logger

logger = get_logger(__name__)


class SubprocessRunner:
    """
    Runs one command at a time and blocks until it exits.
    Implements IProcessRunner protocol.

    By default the child inherits stdin/stdout/stderr. With ``line_output``
    its stdout is captured and copied line by line to ``output`` as it is
    produced; stderr stays inherited.
    """

    def __init__(self, line_output: bool = False):
        self.line_output = line_output

    def run(self, argv: Sequence[str], output: Optional[TextIO] = None) -> int:
        """
        Run a command to completion.

        Args:
            argv: Program followed by its arguments
            output: Stream receiving captured lines (defaults to stdout)

        Returns:
            The child's return code; negative when killed by a signal

        Raises:
            SpawnError: If the program cannot be started
            WriteError: If captured output cannot be written to ``output``
        """
        out = output if output is not None else sys.stdout
        cmd = list(argv)

        # Keep our buffered output ahead of anything the child writes
        try:
            out.flush()
        except OSError as e:
            raise WriteError(f"could not write to output stream: {e}") from e

        try:
            if self.line_output:
                proc = subprocess.Popen(cmd, stdout=subprocess.PIPE)
            else:
                proc = subprocess.Popen(cmd)
        except OSError as e:
            reason = e.strerror or str(e)
            raise SpawnError(f"{cmd[0]}: {reason}") from e

        logger.debug(f"Started pid {proc.pid}: {cmd[0]} with {len(cmd) - 1} arguments")

        if self.line_output:
            self._copy_lines(proc, out)

        rc = proc.wait()
        logger.debug(f"pid {proc.pid} exited with {rc}")
        return rc

    def _copy_lines(self, proc: subprocess.Popen, out: TextIO) -> None:
        """Re-emit each stdout line of ``proc`` on ``out`` as soon as it arrives."""
        with proc.stdout:
            for raw in proc.stdout:
                line = raw.decode("utf-8", errors="replace")
                if line.endswith("\n"):
                    line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
                try:
                    out.write(line + "\n")
                    out.flush()
                except OSError as e:
                    proc.kill()
                    proc.wait()
                    raise WriteError(f"could not write to output stream: {e}") from e
