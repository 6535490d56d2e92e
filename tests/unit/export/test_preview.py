from pathlib import Path

from barcodesnap.barcodegen.renderer import RenderedBarcode
from barcodesnap.export.pdf_export import png_to_data_url
from barcodesnap.export.preview import render_preview_html, write_preview_html
from barcodesnap.model.decision import BarcodeDecision
from barcodesnap.model.enums import BarcodeKind

PNG = b"\x89PNG\r\n\x1a\nfake"


def make_rendered(value: str, kind: BarcodeKind = BarcodeKind.CODE128) -> RenderedBarcode:
    return RenderedBarcode(BarcodeDecision(kind, value), PNG, 640, 180)


def test_preview_contains_label_and_image() -> None:
    page = render_preview_html(make_rendered("ABC"))
    assert page.startswith("<!DOCTYPE html>")
    assert "<title>Barcode Preview: Code 128</title>" in page
    assert "<h1>Code 128 Preview</h1>" in page
    assert png_to_data_url(PNG) in page
    assert 'width="640" height="180"' in page


def test_preview_escapes_value() -> None:
    page = render_preview_html(make_rendered("<script>alert('x')</script>&\""))
    assert "<script>alert" not in page
    assert "&lt;script&gt;alert(&#x27;x&#x27;)&lt;/script&gt;&amp;&quot;" in page


def test_preview_escapes_label() -> None:
    rendered = RenderedBarcode(
        BarcodeDecision(BarcodeKind.QRCODE, "x", "<b>QR</b>"), PNG, 280, 280
    )
    page = render_preview_html(rendered)
    assert "<b>QR</b>" not in page
    assert "&lt;b&gt;QR&lt;/b&gt; Preview" in page


def test_write_preview_html(tmp_path: Path) -> None:
    target = tmp_path / "preview" / "barcode.html"
    written = write_preview_html(make_rendered("ABC"), target)
    assert written == target
    assert "Code 128 Preview" in target.read_text(encoding="utf-8")
