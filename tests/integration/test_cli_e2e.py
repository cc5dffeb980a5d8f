"""
End-to-end tests running ``python -m xtemp`` as a separate process.

These exercise real stdin, real child processes and the process exit code.

Run with:
    pytest tests/integration/ -v
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

SRC = Path(__file__).parent.parent.parent / "src"


def run_xtemp(args, data, tmp_dir, preexec_fn=None):
    env = dict(os.environ)
    env["PYTHONPATH"] = str(SRC) + os.pathsep + env.get("PYTHONPATH", "")
    env["TMPDIR"] = str(tmp_dir)
    return subprocess.run(
        [sys.executable, "-m", "xtemp", *args],
        input=data,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env=env,
        preexec_fn=preexec_fn,
    )


@pytest.fixture
def scratch_dir(tmp_path):
    d = tmp_path / "scratch"
    d.mkdir()
    return d


def test_cat_scenario(scratch_dir):
    proc = run_xtemp(["-n", "2", "-k", "cat"], b"a\nb\nc\nd\ne\n", scratch_dir)

    assert proc.returncode == 0
    assert proc.stdout == b"a\nb\nc\nd\ne\n"
    assert proc.stderr == b""
    assert list(scratch_dir.iterdir()) == []


def test_exit_code_propagation(scratch_dir):
    script = "first=$(cat \"$1\"); [ \"$first\" != c ] || exit 3; printf '%s;' \"$first\""
    proc = run_xtemp(["-n", "2", "sh", "-c", script, "sh"], b"a\nb\nc\nd\ne\n", scratch_dir)

    assert proc.returncode == 1
    assert proc.stdout == b"a;"
    assert proc.stderr.decode().strip() == "xtemp: subprocess failed: command exited with code 3 (batch 2)"
    assert list(scratch_dir.iterdir()) == []


def test_spawn_error_exit_code(scratch_dir):
    proc = run_xtemp(["xtemp-no-such-program-for-tests"], b"a\n", scratch_dir)

    assert proc.returncode == 1
    assert proc.stderr.decode().startswith("xtemp: could not start command")
    assert list(scratch_dir.iterdir()) == []


def test_identical_runs(scratch_dir):
    """Test repeated runs give identical output."""
    args = ["-n", "3", "-o", "-s", "cat"]
    data = "".join(f"record {i}\n" for i in range(10)).encode()

    first = run_xtemp(args, data, scratch_dir)
    second = run_xtemp(args, data, scratch_dir)

    assert first.returncode == second.returncode == 0
    assert first.stdout == second.stdout
    assert str(scratch_dir).encode() not in first.stdout


def test_default_batch_size_from_limit(scratch_dir):
    """Test the default batch size is the open-file limit minus the reserve."""
    resource = pytest.importorskip("resource")

    def lower_limit():
        _soft, hard = resource.getrlimit(resource.RLIMIT_NOFILE)
        resource.setrlimit(resource.RLIMIT_NOFILE, (64, hard))

    data = "".join(f"{i}\n" for i in range(40)).encode()
    proc = run_xtemp(["-o", "sh", "-c", "echo $#", "sh"], data, scratch_dir, preexec_fn=lower_limit)

    assert proc.returncode == 0
    assert proc.stdout == b"32\n8\n"
    assert list(scratch_dir.iterdir()) == []
