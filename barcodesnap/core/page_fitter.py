"""
Module: core.page_fitter

Purpose:
    Compute where a raster image is drawn on a fixed PDF page: centered,
    aspect ratio preserved, fitted inside the margins and never enlarged
    beyond 1:1.

Key Functions:
    - fit(): layout for arbitrary page size and margin
    - fit_a4(): layout on A4 portrait with the default 36pt margin

Used By:
    - export.pdf_export: PDF page composition
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Final

from barcodesnap.exceptions import DegenerateImageError, InvalidPageError

logger = logging.getLogger(__name__)

__all__ = [
    "A4_WIDTH_PT",
    "A4_HEIGHT_PT",
    "DEFAULT_MARGIN_PT",
    "PageLayout",
    "fit",
    "fit_a4",
]

# A4 portrait in PDF user-space units (points)
A4_WIDTH_PT: Final[float] = 595.28
A4_HEIGHT_PT: Final[float] = 841.89
DEFAULT_MARGIN_PT: Final[float] = 36.0


@dataclass(frozen=True)
class PageLayout:
    """
    Draw rectangle on the page, origin at the bottom-left corner.

    Attributes:
        x: Left edge in points
        y: Bottom edge in points
        draw_width: Width in points
        draw_height: Height in points
        scale: Applied scale factor (<= 1.0)
    """

    x: float
    y: float
    draw_width: float
    draw_height: float
    scale: float = 1.0


def fit(
    page_width: float,
    page_height: float,
    margin: float,
    source_width: float,
    source_height: float,
) -> PageLayout:
    """
    Fit a ``source_width`` x ``source_height`` image onto the page.

    Args:
        page_width: Page width in points
        page_height: Page height in points
        margin: Margin on all four sides in points
        source_width: Image width in pixels
        source_height: Image height in pixels

    Returns:
        Centered PageLayout.

    Raises:
        DegenerateImageError: if a source dimension is not a positive finite number.
        InvalidPageError: if the page or margin is not finite or leaves no drawable area.

    Example:
        >>> layout = fit(595.28, 841.89, 36, 100, 50)
        >>> (layout.draw_width, layout.draw_height, layout.scale)
        (100.0, 50.0, 1.0)
    """
    if not (
        source_width > 0
        and source_height > 0
        and math.isfinite(source_width)
        and math.isfinite(source_height)
    ):
        raise DegenerateImageError(source_width, source_height)
    # NaN fails every comparison, so test for the valid range
    if not (
        page_width > 0
        and page_height > 0
        and margin >= 0
        and math.isfinite(page_width)
        and math.isfinite(page_height)
        and math.isfinite(margin)
    ):
        raise InvalidPageError(
            f"Invalid page {page_width}x{page_height} with margin {margin}"
        )

    max_width = page_width - margin * 2
    max_height = page_height - margin * 2
    if max_width <= 0 or max_height <= 0:
        raise InvalidPageError(
            f"Margin {margin} leaves no drawable area on {page_width}x{page_height} page",
            context={"max_width": max_width, "max_height": max_height},
        )

    scale = min(max_width / source_width, max_height / source_height, 1.0)
    draw_width = source_width * scale
    draw_height = source_height * scale
    layout = PageLayout(
        x=(page_width - draw_width) / 2,
        y=(page_height - draw_height) / 2,
        draw_width=draw_width,
        draw_height=draw_height,
        scale=scale,
    )
    logger.debug(
        "Fitted %sx%s source at scale %.4f -> %s", source_width, source_height, scale, layout
    )
    return layout


def fit_a4(source_width: float, source_height: float) -> PageLayout:
    """Fit onto A4 portrait with the default margin."""
    return fit(A4_WIDTH_PT, A4_HEIGHT_PT, DEFAULT_MARGIN_PT, source_width, source_height)
