"""Run the extracted executable and turn a non-zero exit into ConversionError."""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import IO, Sequence

from wkpdf.binary import BinaryLocator
from wkpdf.errors import ConversionError, ConversionTimeoutError, ProcessLaunchError
from wkpdf.platforms import BINARY_PREFIX
from wkpdf.tempfiles import remove_quietly

logger = logging.getLogger(__name__)

DIAGNOSTICS_HEADER = "ERROR:\n"


def format_diagnostics(lines: Sequence[str]) -> str:
    """Join stderr lines into the message carried by ConversionError."""
    return DIAGNOSTICS_HEADER + "".join(f"{line}\n" for line in lines)


def read_diagnostics(log_path: Path) -> str:
    with log_path.open(encoding="utf-8", errors="replace") as f:
        return format_diagnostics([line.rstrip("\r\n") for line in f])


class ProcessRunner:
    """Synchronous invocation of wkhtmltopdf with stderr captured to a temp log."""

    def __init__(
        self,
        locator: BinaryLocator,
        *,
        timeout: float | None = None,
        temp_dir: str | Path | None = None,
    ):
        self.locator = locator
        self.timeout = timeout
        self._temp_dir = str(temp_dir) if temp_dir is not None else None

    def run(self, arguments: Sequence[str]) -> None:
        """Run the executable with *arguments*; blocks until it exits.

        The stderr log is always deleted before this returns or raises.
        """
        command = [str(self.locator.get_path()), *arguments]
        fd, log_name = tempfile.mkstemp(prefix=BINARY_PREFIX, suffix=".log", dir=self._temp_dir)
        log_path = Path(log_name)
        try:
            with os.fdopen(fd, "wb") as log_file:
                exit_code = self._execute(command, log_file)
            if exit_code != 0:
                raise ConversionError(exit_code, read_diagnostics(log_path))
            logger.debug("%s finished successfully", BINARY_PREFIX)
        finally:
            remove_quietly(log_path)

    def _execute(self, command: list[str], log_file: IO[bytes]) -> int:
        logger.debug("Running %s", command)
        try:
            process = subprocess.Popen(command, stdout=subprocess.DEVNULL, stderr=log_file)
        except OSError as e:
            raise ProcessLaunchError(f"Could not start {command[0]}: {e}") from e

        try:
            return process.wait(timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            _kill(process)
            raise ConversionTimeoutError(self.timeout) from e
        except KeyboardInterrupt:
            _kill(process)
            raise


def _kill(process: subprocess.Popen) -> None:
    process.kill()
    process.wait()
