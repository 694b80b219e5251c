"""Tests for the process runner: exit status handling and log cleanup."""

import signal
import subprocess
from pathlib import Path

import pytest

from conftest import leftovers, posix_only
from wkpdf.errors import ConversionError, ConversionTimeoutError, ProcessLaunchError
from wkpdf.runner import ProcessRunner, format_diagnostics

pytestmark = posix_only


def test_success_runs_binary_with_arguments(locator, fake_binary, scratch_dir):
    runner = ProcessRunner(locator, temp_dir=scratch_dir)
    runner.run(["--quiet", "a.html", str(scratch_dir / "out.pdf")])

    assert fake_binary.recorded_args == ["--quiet", "a.html", str(scratch_dir / "out.pdf")]
    assert leftovers(scratch_dir, "*.log") == []


def test_non_zero_exit_raises_with_diagnostics(locator, fake_binary, scratch_dir):
    fake_binary.exit_code = 3
    fake_binary.stderr_lines = ["Loading page", "Error: Failed loading page", "Exit with code 1"]
    runner = ProcessRunner(locator, temp_dir=scratch_dir)

    with pytest.raises(ConversionError) as exc_info:
        runner.run(["in.html", "out.pdf"])

    err = exc_info.value
    assert err.exit_code == 3
    assert err.diagnostics == "ERROR:\nLoading page\nError: Failed loading page\nExit with code 1\n"
    assert str(err).startswith("wkhtmltopdf exited with code 3: ERROR:\n")
    assert leftovers(scratch_dir, "*.log") == []


def test_non_zero_exit_without_stderr(locator, fake_binary, scratch_dir):
    fake_binary.exit_code = 1
    with pytest.raises(ConversionError) as exc_info:
        ProcessRunner(locator, temp_dir=scratch_dir).run(["in.html", "out.pdf"])
    assert exc_info.value.diagnostics == "ERROR:\n"


def test_timeout_kills_process_and_removes_log(locator, fake_binary, scratch_dir):
    fake_binary.sleep_seconds = 10
    runner = ProcessRunner(locator, timeout=0.5, temp_dir=scratch_dir)

    with pytest.raises(ConversionTimeoutError) as exc_info:
        runner.run(["in.html", "out.pdf"])

    assert exc_info.value.exit_code is None
    assert leftovers(scratch_dir, "*.log") == []


class _MissingLocator:
    def __init__(self, path: Path):
        self.path = path

    def get_path(self) -> Path:
        return self.path


def test_launch_failure_raises_launch_error(tmp_path, scratch_dir):
    runner = ProcessRunner(_MissingLocator(tmp_path / "not-there"), temp_dir=scratch_dir)
    with pytest.raises(ProcessLaunchError) as exc_info:
        runner.run(["in.html", "out.pdf"])
    assert isinstance(exc_info.value, OSError)
    assert leftovers(scratch_dir, "*.log") == []


def test_format_diagnostics():
    assert format_diagnostics([]) == "ERROR:\n"
    assert format_diagnostics(["a", "b"]) == "ERROR:\na\nb\n"


def test_interrupt_while_waiting_kills_child_and_removes_log(locator, fake_binary, scratch_dir, monkeypatch):
    fake_binary.sleep_seconds = 10
    real_wait = subprocess.Popen.wait
    waited = []

    def interrupted_wait(self, timeout=None):
        waited.append(self)
        if len(waited) == 1:
            raise KeyboardInterrupt
        return real_wait(self, timeout)

    monkeypatch.setattr(subprocess.Popen, "wait", interrupted_wait)

    with pytest.raises(KeyboardInterrupt):
        ProcessRunner(locator, temp_dir=scratch_dir).run(["in.html", "out.pdf"])

    process = waited[0]
    assert process.returncode == -signal.SIGKILL
    assert leftovers(scratch_dir, "*.log") == []
