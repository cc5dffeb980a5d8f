import sys
import os
from pathlib import Path

import pytest

# Ensure src/ is on sys.path so the 'xtemp' package is importable without installing
SRC = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from xtemp.infrastructure.config import BatchConfig


class RecordingRunner:
    """Process runner double that remembers each argv and the files it named."""

    def __init__(self, return_codes=None):
        self.calls = []
        self.contents = []
        self._return_codes = list(return_codes or [])

    def run(self, argv, output=None):
        self.calls.append(list(argv))
        snapshot = {}
        for token in argv:
            if os.path.isfile(token):
                snapshot[token] = Path(token).read_bytes()
        self.contents.append(snapshot)
        return self._return_codes.pop(0) if self._return_codes else 0


@pytest.fixture
def recording_runner():
    return RecordingRunner()


@pytest.fixture
def make_recording_runner():
    return RecordingRunner


@pytest.fixture
def make_config(tmp_path):
    def _make(**kwargs):
        kwargs.setdefault('command', ['cat'])
        kwargs.setdefault('temp_dir', tmp_path)
        return BatchConfig(**kwargs)
    return _make
