"""Common type definitions."""

from typing import Callable, Optional, Union
from pathlib import Path

# Type alias for paths
PathLike = Union[str, Path]

# Returns the soft open-file limit, or None when it cannot be determined
LimitProvider = Callable[[], Optional[int]]

# Quotes one token for a shell-interpreted command string
Quoter = Callable[[str], str]
