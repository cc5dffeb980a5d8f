"""I/O infrastructure."""

from xtemp.infrastructure.io.reader import read_records

__all__ = ['read_records']
