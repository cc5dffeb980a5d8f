import io
import sys

import pytest

from xtemp.domain.exceptions import SpawnError, WriteError
from xtemp.infrastructure.process import SubprocessRunner


def test_run_success():
    rc = SubprocessRunner().run([sys.executable, "-c", "pass"], output=io.StringIO())
    assert rc == 0


def test_run_nonzero():
    rc = SubprocessRunner().run(["/bin/sh", "-c", "exit 3"], output=io.StringIO())
    assert rc == 3


def test_run_signal():
    rc = SubprocessRunner().run(["/bin/sh", "-c", "kill -TERM $$"], output=io.StringIO())
    assert rc == -15


def test_missing_program_is_spawn_error():
    with pytest.raises(SpawnError) as excinfo:
        SubprocessRunner().run(["xtemp-no-such-program-for-tests"], output=io.StringIO())
    assert "xtemp-no-such-program-for-tests" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_not_executable_is_spawn_error(tmp_path):
    script = tmp_path / "script.sh"
    script.write_text("#!/bin/sh\necho hi\n")
    script.chmod(0o644)

    with pytest.raises(SpawnError):
        SubprocessRunner().run([str(script)], output=io.StringIO())


def test_line_output_reemits_lines():
    out = io.StringIO()
    code = "import sys; sys.stdout.write('one\\ntwo\\r\\nthree')"

    rc = SubprocessRunner(line_output=True).run([sys.executable, "-c", code], output=out)

    assert rc == 0
    assert out.getvalue() == "one\ntwo\nthree\n"


def test_line_output_invalid_utf8_replaced():
    out = io.StringIO()
    code = "import sys; sys.stdout.buffer.write(b'ok\\xff\\n')"

    SubprocessRunner(line_output=True).run([sys.executable, "-c", code], output=out)

    assert out.getvalue() == "ok�\n"


def test_line_output_broken_stream():
    class BrokenStream(io.StringIO):
        def write(self, s):
            raise BrokenPipeError(32, "Broken pipe")

    code = "import sys\nfor i in range(3): print(i)"
    with pytest.raises(WriteError):
        SubprocessRunner(line_output=True).run([sys.executable, "-c", code], output=BrokenStream())


def test_unflushable_output_is_write_error():
    class ClosedPipe(io.StringIO):
        def flush(self):
            raise BrokenPipeError(32, "Broken pipe")

    with pytest.raises(WriteError, match="Broken pipe"):
        SubprocessRunner().run(["/bin/sh", "-c", "exit 0"], output=ClosedPipe())
