import stat
import subprocess
from unittest import mock

from wafops.operators.external import InspectFile


def test_echo_succeeds():
    assert InspectFile("/bin/echo").evaluate(None, "test") is True


def test_missing_program_fails():
    assert InspectFile("/bin/nonexistant").evaluate(None, "test") is False


def _script(tmp_path, body):
    path = tmp_path / "check.sh"
    path.write_text("#!/bin/sh\n" + body + "\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return str(path)


def test_exit_status_decides(tmp_path):
    script = _script(tmp_path, '[ "$1" = "good" ]')
    op = InspectFile(script)
    assert op.evaluate(None, "good") is True
    assert op.evaluate(None, "bad") is False


def test_timeout_gives_no_match():
    op = InspectFile("/bin/echo")
    with mock.patch(
        "wafops.operators.external.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="echo", timeout=10),
    ) as run:
        assert op.evaluate(None, "test") is False
    assert run.call_args.kwargs["timeout"] == 10.0
    assert run.call_args.args[0] == ["/bin/echo", "test"]