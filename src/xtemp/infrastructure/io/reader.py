"""Reading input records."""

from typing import BinaryIO, List

from xtemp.domain.exceptions import InputError
from xtemp.domain.models import split_lines
from xtemp.shared.logging import get_logger

logger = get_logger(__name__)


def read_records(stream: BinaryIO) -> List[str]:
    """
    Read the whole stream and split it into records.

    Args:
        stream: Binary input stream, normally ``sys.stdin.buffer``

    Returns:
        Records in input order

    Raises:
        InputError: If the stream cannot be read or is not valid UTF-8
    """
    try:
        data = stream.read()
    except OSError as e:
        raise InputError(f"could not read input: {e}") from e

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        line_no = data.count(b"\n", 0, e.start) + 1
        raise InputError(f"input contains invalid UTF-8 on line {line_no}") from e

    records = split_lines(text)
    logger.debug(f"Read {len(records)} records ({len(data)} bytes)")
    return records
