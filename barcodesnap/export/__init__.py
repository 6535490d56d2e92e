"""
export

PDF export (ReportLab) and HTML preview of rendered barcodes.
"""

from barcodesnap.export.pdf_export import (
    PNG_DATA_URL_PREFIX,
    build_pdf,
    export_pdf,
    png_bytes_from_data_url,
    png_to_data_url,
)
from barcodesnap.export.preview import render_preview_html, write_preview_html

__all__ = [
    "PNG_DATA_URL_PREFIX",
    "build_pdf",
    "export_pdf",
    "png_bytes_from_data_url",
    "png_to_data_url",
    "render_preview_html",
    "write_preview_html",
]
