import json
from pathlib import Path

import pytest

from barcodesnap.app_context import AppContext, get_app_context, reset_app_context
from barcodesnap.model.enums import BarcodeKind
from barcodesnap.service import BarcodeService


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BARCODESNAP_CONFIG", raising=False)
    reset_app_context()
    yield
    reset_app_context()


def test_defaults() -> None:
    ctx = AppContext()
    assert isinstance(ctx.barcodes, BarcodeService)
    assert ctx.config["qr_width_px"] == 280
    assert ctx.interactive is True
    assert ctx.services == {}


def test_explicit_config_wins(tmp_path: Path) -> None:
    cfg_file = tmp_path / "barcodesnap.json"
    cfg_file.write_text(json.dumps({"qr_width_px": 99}), encoding="utf-8")
    ctx = AppContext(config={"qr_width_px": 50})
    assert ctx.barcodes.config["qr_width_px"] == 50


def test_config_path(tmp_path: Path) -> None:
    cfg_file = tmp_path / "custom.json"
    cfg_file.write_text(json.dumps({"page_margin_pt": 10.0}), encoding="utf-8")
    ctx = AppContext(config_path=cfg_file)
    assert ctx.config["page_margin_pt"] == 10.0


def test_register_and_get_service() -> None:
    ctx = AppContext()
    marker = object()
    ctx.register_service("printer", marker)
    assert ctx.get_service("printer") is marker
    with pytest.raises(KeyError):
        ctx.get_service("missing")


def test_reload_config_keeps_chooser(tmp_path: Path) -> None:
    chooser = lambda value: BarcodeKind.QRCODE  # noqa: E731
    ctx = AppContext(chooser=chooser)
    (tmp_path / "barcodesnap.json").write_text(
        json.dumps({"qr_width_px": 64}), encoding="utf-8"
    )
    ctx.reload_config()
    assert ctx.config["qr_width_px"] == 64
    assert ctx.barcodes.config["qr_width_px"] == 64
    assert ctx.barcodes.chooser is chooser


def test_singleton() -> None:
    first = get_app_context(config={"qr_width_px": 10})
    second = get_app_context(config={"qr_width_px": 20})
    assert first is second
    assert second.config["qr_width_px"] == 10
    reset_app_context()
    assert get_app_context() is not first
