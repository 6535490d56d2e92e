from barcodesnap.model.enums import AMBIGUOUS_CHOICES, BarcodeKind, RejectReason
from barcodesnap.model.decision import (
    Ambiguous,
    BarcodeDecision,
    ClassifyResult,
    Decision,
    Rejected,
)

__all__ = [
    "AMBIGUOUS_CHOICES",
    "BarcodeKind",
    "RejectReason",
    "Ambiguous",
    "BarcodeDecision",
    "ClassifyResult",
    "Decision",
    "Rejected",
]
