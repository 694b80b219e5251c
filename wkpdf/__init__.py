"""wkpdf: run a bundled wkhtmltopdf to turn HTML into PDF."""

from wkpdf.binary import BinaryLocator
from wkpdf.converter import (
    HtmlToPdfConverter,
    build_arguments,
    convert_html_bytes,
    get_converter,
    reset_converter,
)
from wkpdf.errors import (
    BinaryResolutionError,
    ConversionError,
    ConversionTimeoutError,
    ProcessLaunchError,
    WkPdfError,
)
from wkpdf.models import ConversionFailure, ConversionRequest, ConversionResult, ErrorKind
from wkpdf.platforms import Platform, detect_platform
from wkpdf.runner import ProcessRunner

__all__ = [
    "BinaryLocator",
    "BinaryResolutionError",
    "ConversionError",
    "ConversionFailure",
    "ConversionRequest",
    "ConversionResult",
    "ConversionTimeoutError",
    "ErrorKind",
    "HtmlToPdfConverter",
    "Platform",
    "ProcessLaunchError",
    "ProcessRunner",
    "WkPdfError",
    "build_arguments",
    "convert_html_bytes",
    "detect_platform",
    "get_converter",
    "reset_converter",
]
