from __future__ import annotations

import logging
from io import BytesIO
from typing import Any, Dict, Mapping, Optional, Set, TypedDict

import barcode as pybarcode
from barcode.errors import BarcodeError
from barcode.writer import ImageWriter
from PIL import Image
from PIL.Image import Resampling

from barcodesnap.config import DEFAULT_CONFIG
from barcodesnap.core.checksum import EAN13_FULL_PATTERN, is_valid_ean13
from barcodesnap.exceptions import RenderError
from barcodesnap.model.enums import BarcodeKind

logger = logging.getLogger(__name__)

__all__ = [
    "BarcodeGenerator",
    "BarcodeGenError",
    "BarcodeRenderOptions",
]


class BarcodeRenderOptions(TypedDict, total=False):
    """
    Типобезопасные опции рендеринга штрихкода (python-barcode ImageWriter).

    Размеры модулей и отступов задаются в миллиметрах, итоговый размер
    в пикселях определяется через dpi.

    Example:
        >>> options: BarcodeRenderOptions = {"module_width": 0.3, "write_text": False}
        >>> BarcodeGenerator(BarcodeKind.CODE128, "TEST").render_image(options)
    """

    module_width: float  # Ширина одного модуля/бара (в мм)
    module_height: float  # Высота модулей (в мм)
    quiet_zone: float  # Пустая зона слева/справа (в мм)
    font_size: int  # Размер шрифта подписи под штрихкодом
    text_distance: float  # Расстояние между штрихкодом и текстом (в мм)
    dpi: int
    background: str
    foreground: str
    write_text: bool


class BarcodeGenError(RenderError):
    """Linear barcode generation/validation error."""


def _options_from_config(config: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "module_width": config["linear_module_width_mm"],
        "module_height": config["linear_module_height_mm"],
        "quiet_zone": config["linear_quiet_zone_mm"],
        "font_size": config["linear_font_size"],
        "text_distance": config["linear_text_distance_mm"],
        "dpi": config["linear_dpi"],
        "write_text": True,
    }


class BarcodeGenerator:
    """
    Linear barcode generator (EAN13, Code 128) on top of python-barcode.

    The rendered raster is never smaller than the configured minimum
    (640x180 by default); smaller output is stretched onto that canvas.

    Args:
        kind: EAN13 or CODE128
        data: Payload string (13 digits for EAN13)
        config: Settings mapping, see barcodesnap.config.DEFAULT_CONFIG
    """

    _pybarcode_support: Dict[BarcodeKind, str] = {
        BarcodeKind.EAN13: "ean13",
        BarcodeKind.CODE128: "code128",
    }

    def __init__(
        self,
        kind: BarcodeKind,
        data: str,
        config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if not isinstance(kind, BarcodeKind):
            raise TypeError(f"kind must be BarcodeKind enum, got {type(kind)!r}")
        if kind not in self.supported_kinds():
            raise BarcodeGenError(f"{kind.name} is not a linear barcode kind")
        self.kind = kind
        self.data = data
        self.config: Dict[str, Any] = {**DEFAULT_CONFIG, **(config or {})}

    def validate(self) -> None:
        """
        Проверяет входные данные для выбранного типа штрихкода.

        Raises:
            BarcodeGenError: при ошибке данных.
        """
        if not isinstance(self.data, str) or not self.data:
            raise BarcodeGenError("Barcode data must be non-empty string")

        if self.kind == BarcodeKind.EAN13:
            if not EAN13_FULL_PATTERN.fullmatch(self.data):
                raise BarcodeGenError("EAN13 must be 13 digits.")
            if not is_valid_ean13(self.data):
                raise BarcodeGenError("EAN13 check digit is invalid.")

        elif self.kind == BarcodeKind.CODE128:
            if any(ord(c) > 127 for c in self.data):
                raise BarcodeGenError("CODE128 supports only ASCII characters")

    def render_image(self, options: Optional[BarcodeRenderOptions] = None) -> Image.Image:
        """
        Рендеринг изображения штрихкода.

        Args:
            options: Опции ImageWriter поверх значений из конфигурации.

        Returns:
            PIL Image (RGB), не меньше минимального размера растра.

        Raises:
            BarcodeGenError: при ошибке данных или рендеринга.
        """
        self.validate()
        logger.debug("Rendering image for barcode [%s] data=%s", self.kind, self.data)

        barcode_name = self._pybarcode_support[self.kind]
        # python-barcode appends the EAN13 check digit itself
        payload = self.data[:12] if self.kind == BarcodeKind.EAN13 else self.data
        try:
            bclass = pybarcode.get_barcode_class(barcode_name)
            barcode_inst = bclass(payload, writer=ImageWriter())
            img = barcode_inst.render(
                writer_options={
                    **_options_from_config(self.config),
                    **(options or {}),
                }
            )
        except BarcodeError as e:
            raise BarcodeGenError(
                f"Barcode image generation failed: {self.kind.name}: {e}"
            ) from e
        except (ValueError, KeyError, OSError) as e:
            raise BarcodeGenError(
                f"Barcode image generation failed: {self.kind.name}"
            ) from e

        if not isinstance(img, Image.Image):
            raise BarcodeGenError("Barcode output is not an Image.Image object")

        return self._ensure_min_size(img.convert("RGB"))

    def _ensure_min_size(self, img: Image.Image) -> Image.Image:
        min_w = int(self.config["min_raster_width_px"])
        min_h = int(self.config["min_raster_height_px"])
        target = (max(img.width, min_w), max(img.height, min_h))
        if target == img.size:
            return img
        logger.debug("Stretching %s raster from %s to %s", self.kind.name, img.size, target)
        return img.resize(target, resample=Resampling.NEAREST)

    def render_bytes(self, options: Optional[BarcodeRenderOptions] = None) -> bytes:
        img = self.render_image(options=options)
        buf = BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    @classmethod
    def supported_kinds(cls) -> Set[BarcodeKind]:
        return set(cls._pybarcode_support.keys())
