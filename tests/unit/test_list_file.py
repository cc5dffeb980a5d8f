"""
Unit tests for the list file.
"""

from unittest import mock

import pytest

from xtemp.domain.exceptions import ProvisioningError, WriteError
from xtemp.infrastructure.storage import ListFile, ScratchFile, TempfilePool


def test_list_file_contains_joined_paths(tmp_path):
    """Test the file holds the newline-joined absolute slot paths."""
    with TempfilePool.allocate(3, directory=tmp_path) as pool, ListFile.allocate(directory=tmp_path) as list_file:
        pool.write_batch(["a", "b", "c"])
        paths = pool.paths(3)

        list_file.write_paths(paths)

        assert list_file.path.read_text() == "\n".join(str(p) for p in paths)
        assert all(p.is_absolute() for p in paths)


def test_list_file_rewritten_per_batch(tmp_path):
    """Test a shorter list fully replaces a longer one and the path is stable."""
    with ListFile.allocate(directory=tmp_path) as list_file:
        original = list_file.path
        list_file.write_paths(["/tmp/one", "/tmp/two", "/tmp/three"])
        list_file.write_paths(["/tmp/four"])

        assert list_file.path == original
        assert list_file.path.read_text() == "/tmp/four"


def test_list_file_removed_on_close(tmp_path):
    list_file = ListFile.allocate(directory=tmp_path)
    path = list_file.path
    list_file.close()

    assert not path.exists()


def test_list_file_provisioning_error(tmp_path):
    with pytest.raises(ProvisioningError):
        ListFile.allocate(directory=tmp_path / "missing")


def test_list_file_write_error(tmp_path):
    with ListFile.allocate(directory=tmp_path) as list_file:
        with mock.patch.object(ScratchFile, "rewrite", side_effect=WriteError("read-only file system")):
            with pytest.raises(WriteError):
                list_file.write_paths(["/tmp/a"])
