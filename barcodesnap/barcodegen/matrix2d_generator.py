"""
RU: Генерация QR-кодов через qrcode с масштабированием до заданной ширины.
EN: QR code generator backed by the qrcode package, scaled to a fixed width.

Provides:
- QR image generation (PIL)
- PNG bytes output
- Typed public API

Requirements: Pillow, qrcode
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Any, Dict, Final, Mapping, Optional

import qrcode
import qrcode.image.pil
from PIL import Image
from PIL.Image import Resampling
from qrcode.constants import ERROR_CORRECT_M
from qrcode.exceptions import DataOverflowError

from barcodesnap.config import DEFAULT_CONFIG
from barcodesnap.exceptions import RenderError

logger = logging.getLogger(__name__)

__all__ = [
    "Matrix2DCodeGenerator",
    "Matrix2DCodeGenError",
]

# Максимальный размер для предотвращения исчерпания памяти
MAX_IMAGE_WIDTH: Final[int] = 10000


class Matrix2DCodeGenError(RenderError):
    """QR generation error (Ошибка генерации QR-кода)."""


class Matrix2DCodeGenerator:
    """QR code generator.

    Args:
        data: Source data to encode.
        config: Settings mapping; ``qr_width_px`` and ``qr_border_modules`` are used.
        options: Per-call qrcode options (``version``, ``error_correction``,
            ``box_size``, ``fill_color``, ``back_color``).

    Examples:
        >>> gen = Matrix2DCodeGenerator("https://example.com")
        >>> img = gen.render_image()
        >>> img.size
        (280, 280)
    """

    def __init__(
        self,
        data: str,
        config: Optional[Mapping[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.data = data
        self.config: Dict[str, Any] = {**DEFAULT_CONFIG, **(config or {})}
        self.options = options or {}

    def validate(self) -> None:
        """Validate data and target width.

        Raises:
            Matrix2DCodeGenError: For empty data or an out-of-range width.
        """
        if not isinstance(self.data, str) or not self.data:
            logger.error("Input data is empty or not string, got %r", self.data)
            raise Matrix2DCodeGenError("Data must be a non-empty string")
        width = self.config["qr_width_px"]
        if not isinstance(width, int) or width <= 0:
            raise Matrix2DCodeGenError(f"Width must be a positive integer, got {width!r}")
        if width > MAX_IMAGE_WIDTH:
            raise Matrix2DCodeGenError(
                f"Width {width} exceeds maximum {MAX_IMAGE_WIDTH}px"
            )

    def render_image(self) -> Image.Image:
        """
        Render the QR code as a square RGB image ``qr_width_px`` wide.

        Raises:
            Matrix2DCodeGenError: on invalid data or when the payload does not fit.
        """
        self.validate()
        opts = self.options
        width = self.config["qr_width_px"]

        qr = qrcode.QRCode(
            version=opts.get("version", None),
            error_correction=opts.get("error_correction", ERROR_CORRECT_M),
            box_size=opts.get("box_size", 10),
            border=opts.get("border", self.config["qr_border_modules"]),
        )
        try:
            qr.add_data(self.data)
            qr.make(fit=True)
        except (DataOverflowError, ValueError) as e:
            logger.error("QR encoding failed for %d chars: %r", len(self.data), e)
            raise Matrix2DCodeGenError(f"Unable to generate QR Code: {e}") from e

        qr_img = qr.make_image(
            fill_color=opts.get("fill_color", "black"),
            back_color=opts.get("back_color", "white"),
            image_factory=qrcode.image.pil.PilImage,
        )
        if hasattr(qr_img, "get_image"):
            qr_img = qr_img.get_image()
        if not isinstance(qr_img, Image.Image):
            logger.error("QR code did not produce a PIL.Image")
            raise Matrix2DCodeGenError("QR code rendering did not produce a valid image")

        img = qr_img.convert("RGB")
        if img.size != (width, width):
            img = img.resize((width, width), resample=Resampling.NEAREST)
        logger.info("QR code generated: %d chars, %dpx", len(self.data), width)
        return img

    def render_bytes(self) -> bytes:
        """Render the QR code to PNG bytes."""
        img = self.render_image()
        buf = BytesIO()
        img.save(buf, format="PNG")
        logger.debug("QR rendered as PNG (%d bytes)", buf.getbuffer().nbytes)
        return buf.getvalue()
