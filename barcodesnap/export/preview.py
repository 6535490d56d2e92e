# RU: Автономная HTML-страница предпросмотра штрихкода (PNG встроен как data URL).
# EN: Standalone HTML preview page with the PNG inlined as a data URL.

import html
import logging
from pathlib import Path
from typing import Union

from barcodesnap.barcodegen.renderer import RenderedBarcode
from barcodesnap.export.pdf_export import png_to_data_url

logger = logging.getLogger(__name__)

__all__ = ["render_preview_html", "write_preview_html"]

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>Barcode Preview: {label}</title>
  <style>
    body {{
      margin: 0;
      padding: 24px;
      font-family: ui-sans-serif, -apple-system, Segoe UI, Helvetica, Arial, sans-serif;
      background: #f6f7fb;
      color: #1d2430;
    }}
    .container {{
      max-width: 860px;
      margin: 0 auto;
      background: #ffffff;
      border: 1px solid #d8deea;
      border-radius: 16px;
      padding: 24px;
    }}
    h1 {{ margin: 0 0 8px; font-size: 1.4rem; }}
    p {{ margin: 0; color: #5f6b7a; }}
    #barcode-zone {{
      margin-top: 26px;
      padding: 18px;
      border: 1px dashed #d8deea;
      border-radius: 12px;
      display: grid;
      justify-items: center;
    }}
    code {{ word-break: break-all; }}
  </style>
</head>
<body>
  <div class="container">
    <h1>{label} Preview</h1>
    <p>Selected value rendered as a barcode: <code>{value}</code></p>
    <div id="barcode-zone">
      <img src="{src}" alt="{label}" width="{width}" height="{height}" />
    </div>
  </div>
</body>
</html>
"""


def render_preview_html(rendered: RenderedBarcode) -> str:
    """Build the preview page; label and value are HTML-escaped."""
    decision = rendered.decision
    return _PAGE_TEMPLATE.format(
        label=html.escape(decision.label, quote=True),
        value=html.escape(decision.value, quote=True),
        src=png_to_data_url(rendered.png),
        width=rendered.width,
        height=rendered.height,
    )


def write_preview_html(rendered: RenderedBarcode, output_path: Union[str, Path]) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_preview_html(rendered), encoding="utf-8")
    logger.info("Preview written: %s", path)
    return path
