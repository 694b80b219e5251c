"""HTML to PDF conversion entry points.

``HtmlToPdfConverter`` owns the extracted executable for as long as it lives.
Most callers share the default instance from ``get_converter()``.
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Sequence, Union

from wkpdf.binary import BinaryLocator
from wkpdf.config import Settings, get_settings
from wkpdf.errors import WkPdfError
from wkpdf.models import ConversionRequest, ConversionResult
from wkpdf.platforms import open_packaged_resource
from wkpdf.runner import ProcessRunner
from wkpdf.tempfiles import TempFileRegistry, registry as default_registry

logger = logging.getLogger(__name__)

ORIENTATION_FLAG = "-O"
LANDSCAPE = "Landscape"
PORTRAIT = "Portrait"

HtmlSource = Union[str, os.PathLike, bytes, bytearray, memoryview]


def build_arguments(
    html_file: str | os.PathLike,
    pdf_file: str | os.PathLike,
    landscape: bool = False,
    options: Sequence[str] = (),
) -> list[str]:
    """Pass-through options first, then the orientation flag, then the two paths."""
    return [
        *options,
        ORIENTATION_FLAG,
        LANDSCAPE if landscape else PORTRAIT,
        os.fspath(html_file),
        os.fspath(pdf_file),
    ]


class HtmlToPdfConverter:
    def __init__(
        self,
        locator: BinaryLocator | None = None,
        runner: ProcessRunner | None = None,
        *,
        timeout: float | None = None,
        temp_dir: str | Path | None = None,
        temp_files: TempFileRegistry = default_registry,
    ):
        self._temp_dir = str(temp_dir) if temp_dir is not None else None
        self._temp_files = temp_files
        if runner is None:
            if locator is None:
                locator = BinaryLocator(temp_dir=temp_dir, temp_files=temp_files)
            runner = ProcessRunner(locator, timeout=timeout, temp_dir=temp_dir)
        self.runner = runner
        self.locator = runner.locator

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> HtmlToPdfConverter:
        settings = settings or get_settings()
        package = settings.wkpdf_resource_package
        locator = BinaryLocator(
            lambda name: open_packaged_resource(name, package),
            chunk_size=settings.wkpdf_chunk_size,
            temp_dir=settings.temp_dir,
        )
        return cls(locator, timeout=settings.wkpdf_timeout, temp_dir=settings.temp_dir)

    def convert_file(
        self,
        html_file: str | os.PathLike,
        pdf_file: str | os.PathLike,
        landscape: bool = False,
        options: Sequence[str] = (),
    ) -> None:
        """Convert an HTML file on disk into *pdf_file*.

        Raises ConversionError on a non-zero exit, BinaryResolutionError or
        ProcessLaunchError when the executable cannot be prepared or started.
        """
        self.runner.run(build_arguments(html_file, pdf_file, landscape, options))

    def convert_bytes(
        self,
        html_bytes: bytes | bytearray | memoryview,
        pdf_file: str | os.PathLike,
        landscape: bool = False,
        options: Sequence[str] = (),
    ) -> None:
        """Convert in-memory HTML by way of a scratch ``.html`` file.

        The scratch file is deleted when the call returns, whether or not
        the conversion succeeded.
        """
        fd, html_name = tempfile.mkstemp(prefix="temp", suffix=".html", dir=self._temp_dir)
        html_path = self._temp_files.track(Path(html_name))
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(html_bytes)
            self.convert_file(html_path, pdf_file, landscape, options)
        finally:
            self._temp_files.release(html_path)

    def convert(
        self,
        source: HtmlSource,
        pdf_file: str | os.PathLike,
        landscape: bool = False,
        options: Sequence[str] = (),
    ) -> None:
        """Bytes are treated as HTML content; ``str`` and paths as an HTML file."""
        if isinstance(source, (bytes, bytearray, memoryview)):
            self.convert_bytes(source, pdf_file, landscape, options)
        else:
            self.convert_file(source, pdf_file, landscape, options)

    def convert_request(self, request: ConversionRequest) -> None:
        source = request.html_bytes if request.html_bytes is not None else request.html_path
        self.convert(source, request.pdf_path, request.landscape, request.options)

    def convert_result(
        self,
        source: HtmlSource,
        pdf_file: str | os.PathLike,
        landscape: bool = False,
        options: Sequence[str] = (),
    ) -> ConversionResult:
        """Like ``convert`` but reports failures as a ``ConversionResult``."""
        try:
            self.convert(source, pdf_file, landscape, options)
        except WkPdfError as e:
            return ConversionResult.failure(e)
        return ConversionResult.success()

    def close(self) -> None:
        self.locator.close()


_default_converter: HtmlToPdfConverter | None = None
_default_lock = threading.Lock()


def get_converter() -> HtmlToPdfConverter:
    """Return the process-wide converter, creating it from settings on first use."""
    global _default_converter
    with _default_lock:
        if _default_converter is None:
            _default_converter = HtmlToPdfConverter.from_settings()
        return _default_converter


def reset_converter() -> None:
    """Close and drop the process-wide converter."""
    global _default_converter
    with _default_lock:
        if _default_converter is not None:
            _default_converter.close()
            _default_converter = None


def convert_html_bytes(
    html_bytes: bytes,
    pdf_file: str | os.PathLike,
    landscape: bool = False,
    options: Sequence[str] = (),
) -> bool:
    """Convert HTML bytes with the default converter; True on success.

    Failures are logged, not raised. Use ``HtmlToPdfConverter`` directly when
    the exit code or diagnostics matter.
    """
    try:
        get_converter().convert_bytes(html_bytes, pdf_file, landscape, options)
    except Exception:
        logger.exception("HTML to PDF conversion failed")
        return False
    return True
