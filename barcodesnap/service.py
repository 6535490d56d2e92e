"""
BarcodeService: связывает классификатор, рендеринг и экспорт.

Чистое ядро (classify/fit) не знает о вводе-выводе; выбор формата для
неоднозначного ввода передаётся как зависимость (chooser).

Example:
    >>> svc = BarcodeService(load_config(), chooser=lambda value: BarcodeKind.QRCODE)
    >>> rendered = svc.generate_from_selection("  hello world  ")
    >>> svc.export_pdf(rendered, Path("barcode.pdf"))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from barcodesnap.barcodegen.renderer import RenderedBarcode, render_decision
from barcodesnap.config import DEFAULT_CONFIG
from barcodesnap.core.classifier import Chooser, classify, prepare_input, resolve
from barcodesnap.export.pdf_export import export_pdf, png_bytes_from_data_url
from barcodesnap.export.preview import render_preview_html
from barcodesnap.model.decision import BarcodeDecision, ClassifyResult

logger = logging.getLogger(__name__)

__all__ = ["BarcodeService"]


class BarcodeService:
    """
    Generation pipeline for one text value: classify, resolve, render, export.

    Args:
        config: Settings mapping (defaults for missing keys).
        chooser: Default chooser for ambiguous input; may be overridden per call.
    """

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        chooser: Optional[Chooser] = None,
    ) -> None:
        self.config: Dict[str, Any] = {**DEFAULT_CONFIG, **(config or {})}
        self.chooser = chooser

    @property
    def language(self) -> str:
        return "ru" if self.config.get("language") == "ru" else "en"

    def check(self, raw: Optional[str]) -> ClassifyResult:
        """Classify trimmed input without resolving or rendering."""
        return classify(prepare_input(raw))

    def resolve(
        self, raw: Optional[str], chooser: Optional[Chooser] = None
    ) -> Optional[BarcodeDecision]:
        """
        Decide the barcode for ``raw``.

        Returns:
            The decision, or None if the format choice was cancelled.

        Raises:
            NoInputError: empty input.
            InvalidChecksumError: 13 digits with a wrong check digit.
        """
        value = prepare_input(raw)
        result = classify(value)
        decision = resolve(result, chooser or self.chooser, lang=self.language)
        if decision is None:
            return None
        if decision.value != value:
            logger.info("EAN13 generated with check digit: %s", decision.value)
        else:
            logger.info("Barcode resolved: %s", decision)
        return decision

    def render(self, decision: BarcodeDecision) -> RenderedBarcode:
        return render_decision(decision, self.config)

    def generate_from_selection(
        self, raw: Optional[str], chooser: Optional[Chooser] = None
    ) -> Optional[RenderedBarcode]:
        """Resolve and render; None when the format choice was cancelled."""
        decision = self.resolve(raw, chooser)
        if decision is None:
            return None
        return self.render(decision)

    def preview_html(self, rendered: RenderedBarcode) -> str:
        return render_preview_html(rendered)

    def export_pdf(
        self, source: Union[RenderedBarcode, bytes], output_path: Union[str, Path]
    ) -> Path:
        """Export a rendered barcode (or raw PNG bytes) to a one-page PDF."""
        png = source.png if isinstance(source, RenderedBarcode) else source
        return export_pdf(
            png,
            output_path,
            page_width=float(self.config["page_width_pt"]),
            page_height=float(self.config["page_height_pt"]),
            margin=float(self.config["page_margin_pt"]),
        )

    def export_pdf_from_data_url(
        self, data_url: str, output_path: Union[str, Path]
    ) -> Path:
        """
        Export a ``data:image/png;base64,`` URL to PDF.

        Raises:
            InvalidImageDataError: if the URL is not a base64 PNG.
        """
        return self.export_pdf(png_bytes_from_data_url(data_url), output_path)

    def default_pdf_path(self, directory: Optional[Path] = None) -> Path:
        return (directory or Path.cwd()) / str(self.config["default_pdf_name"])
