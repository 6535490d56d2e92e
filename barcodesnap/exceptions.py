"""
Централизованные исключения barcodesnap.

Иерархия типизированных исключений для классификации ввода,
расчёта разметки страницы, рендеринга и экспорта в PDF.

Example:
    >>> from barcodesnap.exceptions import BarcodeSnapError
    >>> try:
    ...     service.generate_from_selection(text)
    ... except BarcodeSnapError as e:
    ...     logger.error(f"Generation failed: {e}")

Иерархия:
    BarcodeSnapError (базовое)
    ├── InputError
    │   ├── NoInputError
    │   └── InvalidChecksumError
    ├── PreconditionError (также ValueError)
    │   ├── DegenerateImageError
    │   ├── InvalidPageError
    │   └── InvalidDecisionError
    ├── RenderError
    └── ExportError
        └── InvalidImageDataError

InputError означает "данные пользователя некорректны",
PreconditionError означает "код интеграции передал недопустимые аргументы".
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__: list[str] = [
    "BarcodeSnapError",
    "InputError",
    "NoInputError",
    "InvalidChecksumError",
    "PreconditionError",
    "DegenerateImageError",
    "InvalidPageError",
    "InvalidDecisionError",
    "RenderError",
    "ExportError",
    "InvalidImageDataError",
]


# ==============================================================================
# BASE EXCEPTION
# ==============================================================================


class BarcodeSnapError(Exception):
    """
    Базовое исключение для всех ошибок barcodesnap.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        context: Дополнительный контекст для отладки (опционально)

    Example:
        >>> raise BarcodeSnapError("Operation failed", context={"kind": "ean13"})
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """
        Строковое представление исключения.

        Example:
            >>> str(NoInputError())
            'NoInputError: Please select text to generate a barcode.'
        """
        parts = [self.__class__.__name__, ": ", self.message]

        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f" ({ctx_str})")

        return "".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"context={self.context!r})"
        )


# ==============================================================================
# INPUT ERRORS
# ==============================================================================


class InputError(BarcodeSnapError):
    """Ошибки пользовательских данных (видны пользователю)."""


class NoInputError(InputError):
    """Ввод пуст после удаления пробелов."""

    def __init__(self, message: str = "Please select text to generate a barcode.") -> None:
        super().__init__(message)


class InvalidChecksumError(InputError):
    """
    Контрольная цифра 13-значного EAN13 не совпадает с вычисленной.

    Генерация блокируется полностью, резервная кодировка не применяется.

    Attributes:
        value: Исходное 13-значное значение
        expected: Вычисленная контрольная цифра
        actual: Контрольная цифра во вводе
    """

    def __init__(self, value: str, expected: int, actual: int) -> None:
        super().__init__(
            "Invalid EAN13: check digit parity is incorrect. "
            "Generation is not possible.",
            context={"value": value, "expected": expected, "actual": actual},
        )
        self.value = value
        self.expected = expected
        self.actual = actual


# ==============================================================================
# PRECONDITION ERRORS
# ==============================================================================


class PreconditionError(BarcodeSnapError, ValueError):
    """Нарушение предусловия вызова (ошибка интеграции, а не данных)."""


class DegenerateImageError(PreconditionError):
    """
    Исходное изображение имеет нулевую или отрицательную ширину/высоту.

    Attributes:
        width: Ширина источника в пикселях
        height: Высота источника в пикселях
    """

    def __init__(self, width: float, height: float) -> None:
        super().__init__(
            f"Source image must have positive finite dimensions, got {width}x{height}",
            context={"width": width, "height": height},
        )
        self.width = width
        self.height = height


class InvalidPageError(PreconditionError):
    """Размер страницы или поля не оставляют положительной области рисования."""


class InvalidDecisionError(PreconditionError):
    """Нарушен инвариант BarcodeDecision."""


# ==============================================================================
# RENDER / EXPORT ERRORS
# ==============================================================================


class RenderError(BarcodeSnapError):
    """Ошибка рендеринга штрихкода внешней библиотекой."""


class ExportError(BarcodeSnapError):
    """Не удалось сформировать или записать PDF."""


class InvalidImageDataError(ExportError):
    """Data URL не является base64 PNG."""

    def __init__(self, message: str = "Unable to export PDF: invalid image data.") -> None:
        super().__init__(message)
