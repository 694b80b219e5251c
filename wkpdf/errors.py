"""Errors raised while resolving or running wkhtmltopdf."""

from __future__ import annotations

from wkpdf.models import ConversionFailure, ErrorKind


class WkPdfError(Exception):
    """Base class for every wkpdf failure."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def to_failure(self) -> ConversionFailure:
        return ConversionFailure(kind=self.kind, message=str(self))


class BinaryResolutionError(WkPdfError, OSError):
    """Raised when the bundled executable cannot be extracted."""

    kind = ErrorKind.RESOLUTION


class ProcessLaunchError(WkPdfError, OSError):
    """Raised when the operating system refuses to start the executable."""

    kind = ErrorKind.LAUNCH


class ConversionError(WkPdfError):
    """Raised when wkhtmltopdf exits with a non-zero status.

    ``diagnostics`` holds everything the process wrote to stderr, prefixed
    with ``"ERROR:\\n"``.
    """

    kind = ErrorKind.EXIT_STATUS

    def __init__(self, exit_code: int | None, diagnostics: str, binary: str = "wkhtmltopdf"):
        self.exit_code = exit_code
        self.diagnostics = diagnostics
        super().__init__(f"{binary} exited with code {exit_code}: {diagnostics}")

    def to_failure(self) -> ConversionFailure:
        return ConversionFailure(
            kind=self.kind,
            message=str(self),
            exit_code=self.exit_code,
            diagnostics=self.diagnostics,
        )


class ConversionTimeoutError(ConversionError):
    """Raised when the executable outlives the configured timeout and is killed."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, timeout: float, binary: str = "wkhtmltopdf"):
        self.timeout = timeout
        self.exit_code = None
        self.diagnostics = ""
        WkPdfError.__init__(self, f"{binary} did not finish within {timeout:g}s")
