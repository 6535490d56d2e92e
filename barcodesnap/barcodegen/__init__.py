"""
barcodegen

Рендеринг штрихкодов в PNG для предпросмотра и экспорта.

- EAN13 и Code 128 через python-barcode (ImageWriter, Pillow).
- QR через qrcode.

Public API:
    - BarcodeGenerator: генератор линейных штрихкодов (class)
    - BarcodeGenError: исключение для ошибок генерации линейных штрихкодов
    - BarcodeRenderOptions: типобезопасные опции рендеринга (TypedDict)
    - Matrix2DCodeGenerator: генератор QR (class)
    - Matrix2DCodeGenError: исключение для ошибок генерации QR
    - RenderedBarcode, render_decision: рендеринг BarcodeDecision

Примеры:
    >>> from barcodesnap.barcodegen import BarcodeGenerator, Matrix2DCodeGenerator
    >>> img = BarcodeGenerator(BarcodeKind.EAN13, "4006381333931").render_image()
    >>> img2d = Matrix2DCodeGenerator("test123").render_image()

Зависимости:
    Pillow, qrcode, python-barcode
"""

from barcodesnap.barcodegen.barcode_generator import (
    BarcodeGenerator,
    BarcodeGenError,
    BarcodeRenderOptions,
)
from barcodesnap.barcodegen.matrix2d_generator import (
    Matrix2DCodeGenerator,
    Matrix2DCodeGenError,
)
from barcodesnap.barcodegen.renderer import RenderedBarcode, render_decision

__all__ = [
    "BarcodeGenerator",
    "BarcodeGenError",
    "BarcodeRenderOptions",
    "Matrix2DCodeGenerator",
    "Matrix2DCodeGenError",
    "RenderedBarcode",
    "render_decision",
]
