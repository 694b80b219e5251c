"""Pytest configuration and shared fixtures.

The real wkhtmltopdf is replaced by a small POSIX shell script served through
the locator's resource opener. The script records its arguments, copies the
HTML input it was given, writes configured stderr lines and exits with a
configured status.
"""

import io
import sys
import threading
import time
from pathlib import Path

import pytest

from wkpdf.binary import BinaryLocator
from wkpdf.converter import HtmlToPdfConverter
from wkpdf.platforms import Platform
from wkpdf.tempfiles import TempFileRegistry

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake wkhtmltopdf is a shell script")

FAKE_BINARY_TEMPLATE = """#!/bin/sh
: > "{args_file}"
html=""
pdf=""
for arg in "$@"; do
    printf '%s\\n' "$arg" >> "{args_file}"
    html="$pdf"
    pdf="$arg"
done
if [ -f "$html" ]; then
    cat "$html" > "{html_copy}"
fi
{body}
if [ {exit_code} -eq 0 ]; then
    printf '%%PDF-1.4\\n' > "$pdf"
fi
exit {exit_code}
"""


class FakeBinary:
    """Shell-script stand-in for wkhtmltopdf plus the files it leaves behind."""

    def __init__(self, workdir: Path):
        self.workdir = workdir
        self.args_file = workdir / "args.txt"
        self.html_copy = workdir / "html_copy.html"
        self.exit_code = 0
        self.stderr_lines: list[str] = []
        self.sleep_seconds = 0
        self.opened: list[str] = []
        self.open_delay = 0.0
        self._lock = threading.Lock()

    def script(self) -> bytes:
        body = [f"echo '{line}' >&2" for line in self.stderr_lines]
        if self.sleep_seconds:
            body.append(f"sleep {self.sleep_seconds}")
        return FAKE_BINARY_TEMPLATE.format(
            args_file=self.args_file,
            html_copy=self.html_copy,
            body="\n".join(body),
            exit_code=self.exit_code,
        ).encode()

    def open_resource(self, name: str) -> io.BytesIO:
        with self._lock:
            self.opened.append(name)
        if self.open_delay:
            time.sleep(self.open_delay)
        return io.BytesIO(self.script())

    @property
    def recorded_args(self) -> list[str]:
        return self.args_file.read_text().splitlines()


@pytest.fixture
def fake_binary(tmp_path):
    workdir = tmp_path / "fake"
    workdir.mkdir()
    return FakeBinary(workdir)


@pytest.fixture
def scratch_dir(tmp_path):
    """Temp directory handed to wkpdf so leftovers can be inspected."""
    d = tmp_path / "scratch"
    d.mkdir()
    return d


@pytest.fixture
def temp_files():
    registry = TempFileRegistry()
    yield registry
    registry.cleanup()


@pytest.fixture
def locator(fake_binary, scratch_dir, temp_files):
    return BinaryLocator(
        fake_binary.open_resource,
        lambda: Platform.UNIX,
        temp_dir=scratch_dir,
        temp_files=temp_files,
    )


@pytest.fixture
def converter(locator, scratch_dir, temp_files):
    conv = HtmlToPdfConverter(locator, temp_dir=scratch_dir, temp_files=temp_files)
    yield conv
    conv.close()


@pytest.fixture
def html_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text("<html><body><h1>Hello</h1></body></html>", encoding="utf-8")
    return path


def leftovers(directory: Path, pattern: str) -> list[Path]:
    return sorted(directory.glob(pattern))
