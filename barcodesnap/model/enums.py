"""
model/enums.py

(Краткое RU: Перечисления типов штрихкодов и причин отказа.)

EN: Domain enums for barcodesnap. Only the three symbologies the tool can
produce from a text selection are listed here.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final, FrozenSet, Literal

_logger: Final[logging.Logger] = logging.getLogger(__name__)


class BarcodeKind(str, Enum):
    EAN13 = "ean13"
    CODE128 = "code128"
    QRCODE = "qrcode"

    @property
    def is_linear(self) -> bool:
        return self in {BarcodeKind.EAN13, BarcodeKind.CODE128}

    def localized_name(self, lang: Literal["ru", "en"] = "en") -> str:
        names_ru = {
            self.EAN13: "EAN-13",
            self.CODE128: "Code 128",
            self.QRCODE: "QR-код",
        }
        names_en = {
            self.EAN13: "EAN13",
            self.CODE128: "Code 128",
            self.QRCODE: "QR Code",
        }
        return (
            names_ru.get(self, self.value)
            if lang == "ru"
            else names_en.get(self, self.value)
        )

    @classmethod
    def from_string(cls, value: str) -> "BarcodeKind":
        """Parse a kind from its value or name, case-insensitive ("qr" is accepted)."""
        normalized = value.strip().lower().replace("-", "").replace(" ", "")
        if normalized == "qr":
            normalized = cls.QRCODE.value
        for kind in cls:
            if normalized in (kind.value, kind.name.lower()):
                return kind
        _logger.debug("Unknown barcode kind %r", value)
        raise ValueError(f"Unknown barcode kind: {value!r}")


# Ambiguous input is never offered EAN13.
AMBIGUOUS_CHOICES: Final[FrozenSet[BarcodeKind]] = frozenset(
    {BarcodeKind.CODE128, BarcodeKind.QRCODE}
)


class RejectReason(str, Enum):
    INVALID_CHECKSUM = "invalid_checksum"

    def localized_name(self, lang: Literal["ru", "en"] = "en") -> str:
        names = {
            "invalid_checksum": {
                "ru": "Неверная контрольная цифра EAN13",
                "en": "Invalid EAN13 check digit",
            },
        }
        return names[self.value][lang] if lang in names[self.value] else self.value
