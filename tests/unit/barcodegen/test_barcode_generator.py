from io import BytesIO
from typing import Any, Dict
from unittest.mock import patch

import pytest
from barcode.errors import BarcodeError
from PIL import Image

from barcodesnap.barcodegen.barcode_generator import BarcodeGenerator, BarcodeGenError
from barcodesnap.exceptions import RenderError
from barcodesnap.model.enums import BarcodeKind


class TestBarcodeGenerator:
    """Test suite for BarcodeGenerator: validation, rendering and raster size."""

    @pytest.fixture
    def valid_ean13_generator(self) -> BarcodeGenerator:
        return BarcodeGenerator(BarcodeKind.EAN13, "4006381333931")

    @pytest.fixture
    def valid_code128_generator(self) -> BarcodeGenerator:
        return BarcodeGenerator(BarcodeKind.CODE128, "ABC-123 hello")

    # === Initialization ===
    def test_init_basic(self) -> None:
        gen = BarcodeGenerator(BarcodeKind.EAN13, "4006381333931")
        assert gen.kind == BarcodeKind.EAN13
        assert gen.data == "4006381333931"
        assert gen.config["min_raster_width_px"] == 640

    def test_init_config_overrides_defaults(self) -> None:
        gen = BarcodeGenerator(BarcodeKind.CODE128, "TEST", {"linear_dpi": 300})
        assert gen.config["linear_dpi"] == 300
        assert gen.config["min_raster_height_px"] == 180

    def test_init_rejects_non_enum(self) -> None:
        with pytest.raises(TypeError, match="BarcodeKind"):
            BarcodeGenerator("ean13", "4006381333931")  # type: ignore[arg-type]

    def test_init_rejects_qr(self) -> None:
        with pytest.raises(BarcodeGenError, match="not a linear"):
            BarcodeGenerator(BarcodeKind.QRCODE, "hello")

    def test_supported_kinds(self) -> None:
        assert BarcodeGenerator.supported_kinds() == {
            BarcodeKind.EAN13,
            BarcodeKind.CODE128,
        }

    # === Validation ===
    def test_validate_success_ean13(self, valid_ean13_generator: BarcodeGenerator) -> None:
        valid_ean13_generator.validate()

    def test_validate_success_code128(
        self, valid_code128_generator: BarcodeGenerator
    ) -> None:
        valid_code128_generator.validate()

    def test_validate_empty_data(self) -> None:
        gen = BarcodeGenerator(BarcodeKind.CODE128, "")
        with pytest.raises(BarcodeGenError, match="non-empty"):
            gen.validate()

    @pytest.mark.parametrize("data", ["400638133393", "40063813339310", "400638133393X"])
    def test_validate_ean13_length(self, data: str) -> None:
        gen = BarcodeGenerator(BarcodeKind.EAN13, data)
        with pytest.raises(BarcodeGenError, match="must be 13 digits"):
            gen.validate()

    def test_validate_ean13_check_digit(self) -> None:
        gen = BarcodeGenerator(BarcodeKind.EAN13, "4006381333932")
        with pytest.raises(BarcodeGenError, match="check digit"):
            gen.validate()

    def test_validate_code128_non_ascii(self) -> None:
        gen = BarcodeGenerator(BarcodeKind.CODE128, "Привет")
        with pytest.raises(BarcodeGenError, match="ASCII"):
            gen.validate()

    @pytest.mark.parametrize("data", ["A\tB", "\x00\x1f", "line\nbreak\x7f"])
    def test_validate_code128_accepts_control_characters(self, data: str) -> None:
        BarcodeGenerator(BarcodeKind.CODE128, data).validate()

    def test_gen_error_is_render_error(self) -> None:
        assert issubclass(BarcodeGenError, RenderError)

    # === Rendering ===
    @pytest.mark.parametrize(
        "kind,data",
        [
            (BarcodeKind.EAN13, "4006381333931"),
            (BarcodeKind.EAN13, "0123456789050"),
            (BarcodeKind.CODE128, "ABC-123 hello"),
            (BarcodeKind.CODE128, "12345678901"),
        ],
    )
    def test_render_image_min_size(self, kind: BarcodeKind, data: str) -> None:
        img = BarcodeGenerator(kind, data).render_image()
        assert isinstance(img, Image.Image)
        assert img.mode == "RGB"
        assert img.width >= 640
        assert img.height >= 180

    def test_render_image_custom_min_size(self) -> None:
        gen = BarcodeGenerator(
            BarcodeKind.CODE128,
            "X",
            {"min_raster_width_px": 1200, "min_raster_height_px": 400},
        )
        img = gen.render_image()
        assert img.width >= 1200
        assert img.height >= 400

    def test_render_image_large_barcode_not_shrunk(self) -> None:
        gen = BarcodeGenerator(BarcodeKind.CODE128, "A" * 60, {"linear_dpi": 300})
        img = gen.render_image()
        assert img.width > 640

    def test_render_image_writer_options(self) -> None:
        gen = BarcodeGenerator(BarcodeKind.CODE128, "TEST")
        img = gen.render_image(options={"write_text": False})
        assert isinstance(img, Image.Image)

    def test_render_image_invalid_data_raises(self) -> None:
        gen = BarcodeGenerator(BarcodeKind.EAN13, "4006381333932")
        with pytest.raises(BarcodeGenError):
            gen.render_image()

    def test_render_library_error_wrapped(self) -> None:
        gen = BarcodeGenerator(BarcodeKind.CODE128, "TEST")
        with patch(
            "barcodesnap.barcodegen.barcode_generator.pybarcode.get_barcode_class",
            side_effect=BarcodeError("boom"),
        ):
            with pytest.raises(BarcodeGenError, match="generation failed"):
                gen.render_image()

    def test_render_non_image_output_raises(self) -> None:
        gen = BarcodeGenerator(BarcodeKind.CODE128, "TEST")

        class FakeBarcode:
            def __init__(self, *args: Any, **kwargs: Any) -> None:
                pass

            def render(self, writer_options: Dict[str, Any]) -> bytes:
                return b"not an image"

        with patch(
            "barcodesnap.barcodegen.barcode_generator.pybarcode.get_barcode_class",
            return_value=FakeBarcode,
        ):
            with pytest.raises(BarcodeGenError, match="not an Image"):
                gen.render_image()

    def test_ean13_payload_passed_without_check_digit(self) -> None:
        captured: Dict[str, Any] = {}

        class FakeBarcode:
            def __init__(self, code: str, writer: Any = None) -> None:
                captured["code"] = code

            def render(self, writer_options: Dict[str, Any]) -> Image.Image:
                captured["options"] = writer_options
                return Image.new("RGB", (10, 10), "white")

        gen = BarcodeGenerator(BarcodeKind.EAN13, "4006381333931")
        with patch(
            "barcodesnap.barcodegen.barcode_generator.pybarcode.get_barcode_class",
            return_value=FakeBarcode,
        ):
            img = gen.render_image()
        assert captured["code"] == "400638133393"
        assert captured["options"]["dpi"] == 144
        assert img.size == (640, 180)

    def test_render_bytes_is_png(self, valid_ean13_generator: BarcodeGenerator) -> None:
        data = valid_ean13_generator.render_bytes()
        assert data.startswith(b"\x89PNG")
        img = Image.open(BytesIO(data))
        assert img.format == "PNG"
        assert img.width >= 640
