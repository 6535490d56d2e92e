"""
core

Pure, synchronous logic with no rendering or UI dependency:
EAN13 check digit, input classification and PDF page fitting.
"""

from barcodesnap.core.checksum import compute_ean13_check_digit, is_valid_ean13
from barcodesnap.core.page_fitter import (
    A4_HEIGHT_PT,
    A4_WIDTH_PT,
    DEFAULT_MARGIN_PT,
    PageLayout,
    fit,
    fit_a4,
)
from barcodesnap.core.classifier import Chooser, classify, prepare_input, resolve

__all__ = [
    "compute_ean13_check_digit",
    "is_valid_ean13",
    "A4_WIDTH_PT",
    "A4_HEIGHT_PT",
    "DEFAULT_MARGIN_PT",
    "PageLayout",
    "fit",
    "fit_a4",
    "Chooser",
    "classify",
    "prepare_input",
    "resolve",
]
