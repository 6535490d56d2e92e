from pathlib import Path
from typing import Any, Dict, Optional

from barcodesnap.config import load_config
from barcodesnap.core.classifier import Chooser
from barcodesnap.service import BarcodeService


class AppContext:
    """
    Dependency Injection context (singleton) for barcodesnap.
    Централизует конфигурацию, сервис генерации и дополнительные сервисы.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        config_path: Optional[Path] = None,
        chooser: Optional[Chooser] = None,
        interactive: bool = True,
    ) -> None:
        # Explicit config wins over the file
        self.config: Dict[str, Any] = (
            config if config is not None else load_config(config_path)
        )

        # Core service: classify/render/export
        self.barcodes: BarcodeService = BarcodeService(self.config, chooser=chooser)

        # CLI prompts allowed for ambiguous input
        self.interactive: bool = interactive

        # Extendable services dictionary for any future needs
        self.services: Dict[str, Any] = {}

    def register_service(self, name: str, service: Any) -> None:
        """Register a service by name (extendable)."""
        self.services[name] = service

    def get_service(self, name: str) -> Any:
        """Retrieve a registered service by name."""
        return self.services[name]

    def reload_config(self, config_path: Optional[Path] = None) -> None:
        """Re-read the config file and rebuild the barcode service, keeping its chooser."""
        self.config = load_config(config_path)
        self.barcodes = BarcodeService(self.config, chooser=self.barcodes.chooser)


_ctx: Optional[AppContext] = None


def get_app_context(
    config: Optional[Dict[str, Any]] = None,
    config_path: Optional[Path] = None,
    chooser: Optional[Chooser] = None,
) -> AppContext:
    """
    Returns global app context (singleton!). Arguments apply only on first call.
    """
    global _ctx
    if _ctx is None:
        _ctx = AppContext(config=config, config_path=config_path, chooser=chooser)
    return _ctx


def reset_app_context() -> None:
    """Drop the global context (tests, config switch)."""
    global _ctx
    _ctx = None
