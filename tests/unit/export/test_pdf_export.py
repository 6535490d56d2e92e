from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import patch

import pytest
from PIL import Image
from reportlab.pdfgen import canvas

from barcodesnap.core.page_fitter import fit
from barcodesnap.exceptions import ExportError, InvalidImageDataError
from barcodesnap.export.pdf_export import (
    PNG_DATA_URL_PREFIX,
    build_pdf,
    export_pdf,
    png_bytes_from_data_url,
    png_to_data_url,
)


def make_png(width: int, height: int, color: str = "white") -> bytes:
    buf = BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


class TestDataUrl:
    def test_round_trip(self) -> None:
        png = make_png(4, 3)
        url = png_to_data_url(png)
        assert url.startswith(PNG_DATA_URL_PREFIX)
        assert png_bytes_from_data_url(url) == png

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "data:image/jpeg;base64,AAAA",
            "image/png;base64,AAAA",
            PNG_DATA_URL_PREFIX + "!!!not base64!!!",
            PNG_DATA_URL_PREFIX + "aGVsbG8=",  # valid base64, not a PNG
        ],
    )
    def test_invalid_urls(self, url: str) -> None:
        with pytest.raises(InvalidImageDataError, match="invalid image data"):
            png_bytes_from_data_url(url)

    def test_non_string(self) -> None:
        with pytest.raises(InvalidImageDataError):
            png_bytes_from_data_url(b"data:image/png;base64,")  # type: ignore[arg-type]


class TestBuildPdf:
    def test_produces_pdf(self) -> None:
        pdf = build_pdf(make_png(640, 180))
        assert pdf.startswith(b"%PDF")
        assert b"/Image" in pdf
        assert pdf.rstrip().endswith(b"%%EOF")

    def test_image_drawn_at_fitted_layout(self) -> None:
        calls: List[Dict[str, Any]] = []

        def record(self: canvas.Canvas, image: Any, x: float, y: float, **kwargs: Any) -> None:
            calls.append({"x": x, "y": y, **kwargs})

        with patch.object(canvas.Canvas, "drawImage", record):
            build_pdf(make_png(640, 180))

        expected = fit(595.28, 841.89, 36, 640, 180)
        assert len(calls) == 1
        assert calls[0]["x"] == pytest.approx(expected.x)
        assert calls[0]["y"] == pytest.approx(expected.y)
        assert calls[0]["width"] == pytest.approx(expected.draw_width)
        assert calls[0]["height"] == pytest.approx(expected.draw_height)

    def test_custom_page(self) -> None:
        calls: List[Dict[str, Any]] = []

        def record(self: canvas.Canvas, image: Any, x: float, y: float, **kwargs: Any) -> None:
            calls.append({"x": x, "y": y, **kwargs})

        with patch.object(canvas.Canvas, "drawImage", record):
            build_pdf(make_png(100, 50), page_width=300, page_height=200, margin=10)

        assert calls[0] == {"x": 100.0, "y": 75.0, "width": 100.0, "height": 50.0}

    def test_garbage_bytes_raise_export_error(self) -> None:
        with pytest.raises(ExportError, match="Unable to export PDF"):
            build_pdf(b"definitely not a png")


class TestExportPdf:
    def test_writes_file(self, tmp_path: Path) -> None:
        target = tmp_path / "out" / "barcode.pdf"
        written = export_pdf(make_png(280, 280), target)
        assert written == target
        assert target.read_bytes().startswith(b"%PDF")

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        written = export_pdf(make_png(10, 10), str(tmp_path / "b.pdf"))
        assert written.exists()

    def test_write_failure_wrapped(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(ExportError) as exc_info:
            export_pdf(make_png(10, 10), blocker / "nested.pdf")
        assert "path" in exc_info.value.context
