"""Dispatch a BarcodeDecision to the matching generator and collect PNG output."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Mapping, Optional

from PIL import Image

from barcodesnap.barcodegen.barcode_generator import BarcodeGenerator
from barcodesnap.barcodegen.matrix2d_generator import Matrix2DCodeGenerator
from barcodesnap.model.decision import BarcodeDecision

logger = logging.getLogger(__name__)

__all__ = ["RenderedBarcode", "render_decision"]


@dataclass(frozen=True)
class RenderedBarcode:
    """PNG raster of a decision together with its pixel size."""

    decision: BarcodeDecision
    png: bytes
    width: int
    height: int


def render_decision(
    decision: BarcodeDecision, config: Optional[Mapping[str, Any]] = None
) -> RenderedBarcode:
    """
    Render ``decision`` to PNG.

    Raises:
        RenderError: if the underlying library fails.
    """
    img: Image.Image
    if decision.kind.is_linear:
        img = BarcodeGenerator(decision.kind, decision.value, config).render_image()
    else:
        img = Matrix2DCodeGenerator(decision.value, config).render_image()

    buf = BytesIO()
    img.save(buf, format="PNG")
    logger.debug(
        "Rendered %s as %dx%d PNG (%d bytes)",
        decision.kind.name,
        img.width,
        img.height,
        buf.getbuffer().nbytes,
    )
    return RenderedBarcode(decision, buf.getvalue(), img.width, img.height)
