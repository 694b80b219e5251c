"""Conversion request and outcome schemas."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, model_validator

if TYPE_CHECKING:
    from wkpdf.errors import WkPdfError


class ErrorKind(str, Enum):
    RESOLUTION = "resolution"
    LAUNCH = "launch"
    EXIT_STATUS = "exit_status"
    TIMEOUT = "timeout"
    # Failure that is not tied to resolving, starting or running the executable
    INTERNAL = "internal"


class ConversionFailure(BaseModel):
    """Structured description of a failed invocation."""

    kind: ErrorKind
    message: str
    exit_code: int | None = None
    diagnostics: str = ""


class ConversionResult(BaseModel):
    """Tagged outcome: ``ok`` with no error, or not ok with a ``ConversionFailure``."""

    ok: bool
    error: ConversionFailure | None = None

    @classmethod
    def success(cls) -> ConversionResult:
        return cls(ok=True)

    @classmethod
    def failure(cls, exc: WkPdfError) -> ConversionResult:
        return cls(ok=False, error=exc.to_failure())


class ConversionRequest(BaseModel):
    """One HTML-to-PDF job: a file path or raw HTML bytes, plus pass-through options.

    Options are forwarded verbatim and never inspected.
    """

    html_path: str | None = None
    html_bytes: bytes | None = None
    pdf_path: str
    landscape: bool = False
    options: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _exactly_one_source(self) -> ConversionRequest:
        if (self.html_path is None) == (self.html_bytes is None):
            raise ValueError("Provide exactly one of html_path or html_bytes")
        return self
