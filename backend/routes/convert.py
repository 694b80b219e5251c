"""Conversion API route: HTML in, PDF bytes out."""

import logging
import tempfile
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response
from pydantic import BaseModel, Field

from wkpdf.config import get_settings
from wkpdf.converter import HtmlToPdfConverter, get_converter
from wkpdf.errors import ConversionError, WkPdfError

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()

MAX_HTML_BYTES = settings.max_html_bytes


class ConvertRequest(BaseModel):
    html: str
    landscape: bool = False
    # Forwarded to wkhtmltopdf as-is, e.g. ["--margin-top", "10mm"]
    options: list[str] = Field(default_factory=list)


@router.post("/convert", response_class=Response)
def convert_html(body: ConvertRequest, converter: HtmlToPdfConverter = Depends(get_converter)):
    """Render the posted HTML to PDF and return the document."""
    html_bytes = body.html.encode("utf-8")
    if len(html_bytes) > MAX_HTML_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"HTML exceeds {MAX_HTML_BYTES} bytes",
        )

    with tempfile.TemporaryDirectory(prefix="wkpdf-", dir=settings.wkpdf_temp_dir) as out_dir:
        pdf_path = Path(out_dir) / "document.pdf"
        try:
            converter.convert_bytes(html_bytes, pdf_path, body.landscape, body.options)
        except ConversionError as e:
            logger.warning("wkhtmltopdf failed with exit code %s", e.exit_code)
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail={"exit_code": e.exit_code, "diagnostics": e.diagnostics[:2000]},
            )
        except WkPdfError as e:
            logger.exception("wkhtmltopdf unavailable")
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)[:300])

        if not pdf_path.exists():
            raise HTTPException(status_code=500, detail="wkhtmltopdf produced no output")
        pdf_bytes = pdf_path.read_bytes()

    return Response(content=pdf_bytes, media_type="application/pdf")
