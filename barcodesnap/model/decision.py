# RU: Неизменяемые объекты-значения решения о типе штрихкода и результата классификации.
# EN: Immutable value objects for the barcode decision and the tagged classification result.

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Dict, Union

from barcodesnap.core.checksum import EAN13_FULL_PATTERN, compute_ean13_check_digit
from barcodesnap.exceptions import InvalidDecisionError

from .enums import BarcodeKind, RejectReason

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BarcodeDecision:
    """
    Which symbology to render and the exact value to encode.

    For EAN13 the value is always 13 ASCII digits with a valid check digit;
    this is checked here, so an existing instance is always consistent.
    For CODE128 and QRCODE the value is the original trimmed input.

    Examples:
        bd = BarcodeDecision(BarcodeKind.EAN13, "0123456789050")
        bd.label  # "EAN13"
    """

    schema_version: ClassVar[str] = "1.0"

    kind: BarcodeKind
    value: str
    label: str = field(default="")

    def __post_init__(self) -> None:
        if not isinstance(self.kind, BarcodeKind):
            raise InvalidDecisionError(
                f"kind must be BarcodeKind enum, got {type(self.kind)!r}"
            )
        if not isinstance(self.value, str) or not self.value:
            raise InvalidDecisionError("Barcode value must be a non-empty string")
        if self.kind is BarcodeKind.EAN13:
            if not EAN13_FULL_PATTERN.fullmatch(self.value):
                raise InvalidDecisionError(
                    "EAN13 value must be exactly 13 digits",
                    context={"value": self.value},
                )
            expected = compute_ean13_check_digit(self.value[:12])
            if int(self.value[12]) != expected:
                raise InvalidDecisionError(
                    "EAN13 value has an invalid check digit",
                    context={"value": self.value, "expected": expected},
                )
        if not self.label:
            # frozen: bypass __setattr__ for the derived default
            object.__setattr__(self, "label", self.kind.localized_name("en"))

    def to_dict(self) -> Dict[str, Any]:
        dct: Dict[str, Any] = asdict(self)
        dct["kind"] = self.kind.value
        dct["schema_version"] = self.schema_version
        return dct

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BarcodeDecision":
        d = dict(d)
        if "schema_version" in d and d["schema_version"] != cls.schema_version:
            logger.warning(
                "Schema version mismatch (expected %s, got %s)",
                cls.schema_version,
                d["schema_version"],
            )
        d.pop("schema_version", None)
        return cls(
            kind=BarcodeKind(d["kind"]),
            value=d["value"],
            label=d.get("label", ""),
        )

    def __str__(self) -> str:
        datashow: str = self.value[:16] + ("..." if len(self.value) > 16 else "")
        return f"BarcodeDecision({self.kind.value}, value={datashow})"


@dataclass(frozen=True)
class Decision:
    """Classification settled the kind and value."""

    decision: BarcodeDecision


@dataclass(frozen=True)
class Ambiguous:
    """Caller must pick CODE128 or QRCODE for ``value``."""

    value: str


@dataclass(frozen=True)
class Rejected:
    """Generation is impossible for ``value``."""

    reason: RejectReason
    value: str


ClassifyResult = Union[Decision, Ambiguous, Rejected]
