"""
Module: export.pdf_export

Purpose:
    Place a rendered barcode PNG on a single PDF page using ReportLab.
    Geometry comes from core.page_fitter.fit(); this module only embeds
    the image and serializes the document.

Key Functions:
    - build_pdf(): PNG bytes -> PDF bytes
    - export_pdf(): PNG bytes -> PDF file
    - png_bytes_from_data_url() / png_to_data_url(): data URL helpers

Dependencies:
    - reportlab: PDF generation
    - PIL: PNG decoding (through reportlab's ImageReader)
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Final, Union

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from barcodesnap.core.page_fitter import (
    A4_HEIGHT_PT,
    A4_WIDTH_PT,
    DEFAULT_MARGIN_PT,
    PageLayout,
    fit,
)
from barcodesnap.exceptions import ExportError, InvalidImageDataError

logger = logging.getLogger(__name__)

__all__ = [
    "PNG_DATA_URL_PREFIX",
    "png_to_data_url",
    "png_bytes_from_data_url",
    "build_pdf",
    "export_pdf",
]

PNG_DATA_URL_PREFIX: Final[str] = "data:image/png;base64,"
_PNG_SIGNATURE: Final[bytes] = b"\x89PNG\r\n\x1a\n"


def png_to_data_url(png: bytes) -> str:
    """Encode PNG bytes as a ``data:image/png;base64,`` URL."""
    return PNG_DATA_URL_PREFIX + base64.b64encode(png).decode("ascii")


def png_bytes_from_data_url(data_url: str) -> bytes:
    """
    Decode a base64 PNG data URL.

    Raises:
        InvalidImageDataError: if the URL is not a base64 PNG data URL.
    """
    if not isinstance(data_url, str) or not data_url.startswith(PNG_DATA_URL_PREFIX):
        raise InvalidImageDataError()
    try:
        png = base64.b64decode(data_url[len(PNG_DATA_URL_PREFIX):], validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageDataError() from e
    if not png.startswith(_PNG_SIGNATURE):
        raise InvalidImageDataError()
    return png


def build_pdf(
    png: bytes,
    *,
    page_width: float = A4_WIDTH_PT,
    page_height: float = A4_HEIGHT_PT,
    margin: float = DEFAULT_MARGIN_PT,
    title: str = "Barcode",
) -> bytes:
    """
    Build a one-page PDF with ``png`` centered on the page.

    Args:
        png: PNG image bytes
        page_width: Page width in points (default A4)
        page_height: Page height in points (default A4)
        margin: Margin on all sides in points
        title: PDF document title

    Returns:
        PDF document bytes.

    Raises:
        DegenerateImageError: if the image has no pixels.
        ExportError: if the image cannot be decoded or the PDF cannot be built.
    """
    try:
        image = ImageReader(io.BytesIO(png))
        source_width, source_height = image.getSize()
    except (OSError, ValueError) as e:
        raise ExportError(f"Unable to export PDF: {e}") from e

    layout: PageLayout = fit(page_width, page_height, margin, source_width, source_height)

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=(page_width, page_height))
    c.setTitle(title)
    c.drawImage(
        image,
        layout.x,
        layout.y,
        width=layout.draw_width,
        height=layout.draw_height,
    )
    c.showPage()
    c.save()

    logger.debug(
        "PDF page built: %sx%s px image at (%.2f, %.2f) %.2fx%.2f pt",
        source_width,
        source_height,
        layout.x,
        layout.y,
        layout.draw_width,
        layout.draw_height,
    )
    return buf.getvalue()


def export_pdf(
    png: bytes,
    output_path: Union[str, Path],
    *,
    page_width: float = A4_WIDTH_PT,
    page_height: float = A4_HEIGHT_PT,
    margin: float = DEFAULT_MARGIN_PT,
) -> Path:
    """
    Write ``png`` as a one-page PDF to ``output_path``.

    Returns:
        The written path.

    Raises:
        ExportError: if the PDF cannot be built or written.

    Example:
        >>> export_pdf(rendered.png, Path("out/barcode.pdf"))
    """
    path = Path(output_path)
    pdf_bytes = build_pdf(png, page_width=page_width, page_height=page_height, margin=margin)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(pdf_bytes)
    except OSError as e:
        raise ExportError(f"Unable to export PDF: {e}", context={"path": str(path)}) from e

    logger.info("PDF exported: %s", path)
    return path
