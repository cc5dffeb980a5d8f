"""CLI interface for the batch runner."""
import sys
import logging
import argparse
from pathlib import Path
from typing import BinaryIO, List, Optional, TextIO

from xtemp import __version__
from xtemp.application.orchestrator import BatchRunner
from xtemp.domain.exceptions import XtempError
from xtemp.infrastructure.config import ConfigLoader
from xtemp.shared.logging import setup_logger, LoggerAdapter, get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='xtemp',
        description=(
            "Read lines from stdin, write each batch of lines to reusable temporary "
            "files, and run a command once per batch with those files as arguments."
        ),
    )
    parser.add_argument('-n', '--batch-size', type=int,
                        help='Lines per batch (default: open-file limit minus 32)')
    parser.add_argument('-F', '--batch-replstr', dest='placeholder', metavar='REPLSTR',
                        help='Argument replaced by the batch\'s tempfile paths '
                             '(default: append paths at the end)')
    parser.add_argument('-l', '--list', dest='list_mode', action='store_true', default=None,
                        help='Pass a single file listing the tempfile paths instead')
    parser.add_argument('-k', '--keep-newlines', action='store_true', default=None,
                        help='End each tempfile with a newline')
    parser.add_argument('-s', '--shell', action='store_true', default=None,
                        help='Run the command through "sh -eu -c" with quoted paths')
    parser.add_argument('-o', '--line-output', action='store_true', default=None,
                        help='Capture command stdout and re-emit it line by line')
    parser.add_argument('--config', type=Path, help='Config YAML file')
    parser.add_argument('--log-file', type=Path, help='Also write a debug log to this file')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug output on stderr')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('command', nargs=argparse.REMAINDER,
                        help='Command and arguments to run for each batch')
    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[TextIO] = None
) -> int:
    """Main CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    logger = get_logger(__name__)

    command = list(args.command)
    if command and command[0] == '--':
        command = command[1:]

    try:
        setup_logger(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            log_file=args.log_file
        )

        config_loader = ConfigLoader(config_path=args.config)
        config = config_loader.load(overrides={
            'command': command or None,
            'batch_size': args.batch_size,
            'placeholder': args.placeholder,
            'list_mode': args.list_mode,
            'keep_newlines': args.keep_newlines,
            'shell': args.shell,
            'line_output': args.line_output,
        })

        runner = BatchRunner(config, logger=LoggerAdapter(get_logger('runner')))
        result = runner.run_stream(
            stdin if stdin is not None else sys.stdin.buffer,
            output=stdout
        )
        logger.debug(f"Metrics: {result.metrics}")
        return 0

    except XtempError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130
    except Exception as e:
        logger.exception(f"Error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
