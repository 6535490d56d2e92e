"""Root CLI group for barcodesnap: generate, check and export barcodes from text."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click

from barcodesnap import __version__, check_dependencies
from barcodesnap.app_context import AppContext
from barcodesnap.core.classifier import Chooser
from barcodesnap.exceptions import BarcodeSnapError
from barcodesnap.export.preview import write_preview_html
from barcodesnap.model.decision import Ambiguous, Decision, Rejected
from barcodesnap.model.enums import BarcodeKind

logger = logging.getLogger(__name__)

_KIND_CHOICES = [BarcodeKind.CODE128.value, BarcodeKind.QRCODE.value]


def _read_text(text: str) -> str:
    if text == "-":
        with click.open_file("-") as stream:
            return stream.read()
    return text


def _make_chooser(kind: Optional[str], interactive: bool) -> Chooser:
    if kind is not None:
        picked = BarcodeKind.from_string(kind)
        return lambda value: picked

    def prompt(value: str) -> Optional[BarcodeKind]:
        if not interactive:
            return None
        answer = click.prompt(
            "Choose barcode format (selected content is not EAN13 numeric)",
            type=click.Choice(_KIND_CHOICES, case_sensitive=False),
        )
        return BarcodeKind.from_string(answer)

    return prompt


def _set_verbose() -> None:
    root = logging.getLogger("barcodesnap")
    root.setLevel(logging.DEBUG)
    for handler in root.handlers:
        handler.setLevel(logging.DEBUG)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="barcodesnap")
@click.option("-c", "--config", "config_path", default=None, type=click.Path(path_type=Path), help="Override config file path.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--no-interact", is_flag=True, help="Non-interactive mode (no prompts).")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    verbose: bool,
    no_interact: bool,
) -> None:
    """barcodesnap: turn text into EAN13, Code 128 or QR barcodes."""
    if verbose:
        _set_verbose()
    ctx.obj = AppContext(config_path=config_path, interactive=not no_interact)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("text")
@click.option(
    "--kind",
    type=click.Choice(_KIND_CHOICES, case_sensitive=False),
    default=None,
    help="Format for non-EAN13 input (skips the prompt).",
)
@click.option("--png", "png_path", type=click.Path(path_type=Path), default=None, help="Write the barcode image.")
@click.option("--pdf", "pdf_path", type=click.Path(path_type=Path), default=None, help="Export a one-page A4 PDF.")
@click.option("--html", "html_path", type=click.Path(path_type=Path), default=None, help="Write an HTML preview page.")
@click.pass_obj
def generate(
    app: AppContext,
    text: str,
    kind: Optional[str],
    png_path: Optional[Path],
    pdf_path: Optional[Path],
    html_path: Optional[Path],
) -> None:
    """Generate a barcode from TEXT ('-' reads stdin)."""
    chooser = _make_chooser(kind, interactive=app.interactive)
    try:
        rendered = app.barcodes.generate_from_selection(_read_text(text), chooser)
        if rendered is None:
            raise click.ClickException("No barcode format chosen; nothing generated.")

        decision = rendered.decision
        click.echo(f"{decision.label}: {decision.value}")

        if png_path is not None:
            png_path.parent.mkdir(parents=True, exist_ok=True)
            png_path.write_bytes(rendered.png)
            click.echo(f"PNG written: {png_path}")
        if html_path is not None:
            write_preview_html(rendered, html_path)
            click.echo(f"Preview written: {html_path}")
        if pdf_path is not None:
            written = app.barcodes.export_pdf(rendered, pdf_path)
            click.echo(f"PDF exported: {written}")
    except BarcodeSnapError as e:
        raise click.ClickException(e.message) from e
    except OSError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.argument("text")
@click.pass_obj
def check(app: AppContext, text: str) -> None:
    """Show how TEXT would be classified, without rendering."""
    try:
        result = app.barcodes.check(_read_text(text))
    except BarcodeSnapError as e:
        raise click.ClickException(e.message) from e

    lang = app.barcodes.language
    if isinstance(result, Decision):
        decision = result.decision
        click.echo(f"{decision.kind.localized_name(lang)}: {decision.value}")
    elif isinstance(result, Rejected):
        raise click.ClickException(
            f"{result.reason.localized_name(lang)}: {result.value}"
        )
    elif isinstance(result, Ambiguous):
        click.echo(f"Ambiguous: choose {' or '.join(_KIND_CHOICES)} for {result.value!r}")


@cli.command()
def deps() -> None:
    """Report availability of third-party dependencies."""
    for name, available in check_dependencies().items():
        click.echo(f"{name}: {'ok' if available else 'missing'}")


def main() -> None:
    cli()
