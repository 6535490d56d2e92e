"""
RU: Классификатор ввода: выбирает тип штрихкода и нормализует значение.
EN: Input classifier: picks the barcode kind and normalizes the value.

Every input lands in exactly one branch:
    - exactly 12 ASCII digits -> EAN13 with the check digit appended
    - exactly 13 ASCII digits -> EAN13 if the check digit is valid, else rejected
    - anything else           -> ambiguous, the caller chooses CODE128 or QRCODE

Lengths are matched exactly: "0012345678901" is a 13-digit candidate,
11- and 14-digit strings are ambiguous.

Example:
    >>> classify("012345678905")
    Decision(decision=BarcodeDecision(kind=<BarcodeKind.EAN13: 'ean13'>, value='0123456789050', label='EAN13'))
    >>> classify("hello")
    Ambiguous(value='hello')
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from barcodesnap.core.checksum import (
    EAN13_BASE_PATTERN,
    EAN13_FULL_PATTERN,
    compute_ean13_check_digit,
)
from barcodesnap.exceptions import InvalidChecksumError, NoInputError
from barcodesnap.model.decision import (
    Ambiguous,
    BarcodeDecision,
    ClassifyResult,
    Decision,
    Rejected,
)
from barcodesnap.model.enums import AMBIGUOUS_CHOICES, BarcodeKind, RejectReason

logger = logging.getLogger(__name__)

__all__ = [
    "Chooser",
    "prepare_input",
    "classify",
    "resolve",
]

# Receives the ambiguous value, returns CODE128/QRCODE or None to abandon.
Chooser = Callable[[str], Optional[BarcodeKind]]


def prepare_input(raw: Optional[str]) -> str:
    """
    Trim surrounding whitespace.

    Raises:
        NoInputError: if nothing is left.
    """
    value = (raw or "").strip()
    if not value:
        raise NoInputError()
    return value


def classify(value: str) -> ClassifyResult:
    """
    Classify a trimmed, non-empty value.

    Returns:
        Decision, Ambiguous or Rejected. Domain outcomes never raise.

    Raises:
        TypeError: if ``value`` is not a string.
        NoInputError: if ``value`` is empty.
    """
    if not isinstance(value, str):
        raise TypeError(f"value must be str, got {type(value)!r}")
    if not value:
        raise NoInputError()

    if EAN13_BASE_PATTERN.fullmatch(value):
        completed = f"{value}{compute_ean13_check_digit(value)}"
        logger.debug("12-digit input completed to EAN13 %s", completed)
        return Decision(BarcodeDecision(BarcodeKind.EAN13, completed))

    if EAN13_FULL_PATTERN.fullmatch(value):
        expected = compute_ean13_check_digit(value[:12])
        if int(value[12]) != expected:
            logger.debug(
                "EAN13 %s rejected: expected check digit %d", value, expected
            )
            return Rejected(RejectReason.INVALID_CHECKSUM, value)
        return Decision(BarcodeDecision(BarcodeKind.EAN13, value))

    return Ambiguous(value)


def resolve(
    result: ClassifyResult,
    chooser: Optional[Chooser] = None,
    lang: str = "en",
) -> Optional[BarcodeDecision]:
    """
    Turn a classification result into a decision.

    Args:
        result: Output of :func:`classify`.
        chooser: Called with the value when the result is ambiguous.
        lang: Label language ("ru" or "en") of the returned decision.

    Returns:
        The decision, or None when the chooser declined (operation abandoned).

    Raises:
        InvalidChecksumError: for a rejected 13-digit value.
        ValueError: if the chooser is missing or picks a kind other than
            CODE128/QRCODE.
    """
    label_lang = "ru" if lang == "ru" else "en"
    if isinstance(result, Decision):
        decision = result.decision
        return replace(decision, label=decision.kind.localized_name(label_lang))

    if isinstance(result, Rejected):
        expected = compute_ean13_check_digit(result.value[:12])
        raise InvalidChecksumError(result.value, expected, int(result.value[12]))

    if isinstance(result, Ambiguous):
        if chooser is None:
            raise ValueError("Ambiguous input requires a chooser")
        picked = chooser(result.value)
        if picked is None:
            logger.info("Barcode format choice cancelled; nothing generated")
            return None
        if picked not in AMBIGUOUS_CHOICES:
            raise ValueError(
                f"Ambiguous input can only be encoded as CODE128 or QRCODE, got {picked!r}"
            )
        return BarcodeDecision(
            picked, result.value, picked.localized_name(label_lang)
        )

    raise TypeError(f"Unexpected classification result {result!r}")
