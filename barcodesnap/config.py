"""
Конфигурация barcodesnap.

Настройки загружаются из JSON-файла и накладываются поверх значений
по умолчанию. Ошибки чтения или разбора файла не фатальны: в лог пишется
предупреждение и используются значения по умолчанию.

Пример:
    >>> from barcodesnap.config import load_config
    >>> config = load_config()
    >>> config["page_margin_pt"]
    36.0
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Final, Optional

logger = logging.getLogger(__name__)

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_CONFIG",
    "load_config",
]

CONFIG_ENV_VAR: Final[str] = "BARCODESNAP_CONFIG"
DEFAULT_CONFIG_NAME: Final[str] = "barcodesnap.json"

# Значения конфигурации по умолчанию
DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "log_level": "INFO",
    "language": "en",
    # PDF export (A4 portrait, points)
    "page_width_pt": 595.28,
    "page_height_pt": 841.89,
    "page_margin_pt": 36.0,
    "default_pdf_name": "barcode.pdf",
    # QR
    "qr_width_px": 280,
    "qr_border_modules": 1,
    # Linear barcodes (python-barcode ImageWriter)
    "min_raster_width_px": 640,
    "min_raster_height_px": 180,
    "linear_module_width_mm": 0.4,
    "linear_module_height_mm": 21.0,
    "linear_quiet_zone_mm": 1.8,
    "linear_font_size": 10,
    "linear_text_distance_mm": 5.0,
    "linear_dpi": 144,
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить конфигурацию из JSON-файла или использовать значения по умолчанию.

    Порядок поиска файла: аргумент ``config_path``, переменная окружения
    BARCODESNAP_CONFIG, ``barcodesnap.json`` в текущем каталоге.

    Аргументы:
        config_path: Опциональный путь к файлу конфигурации.

    Возвращает:
        Новый словарь со всеми ключами по умолчанию; значения из файла
        переопределяют значения по умолчанию.

    Пример:
        >>> custom = load_config(Path("settings/barcodesnap.json"))
        >>> custom.get("qr_width_px", 280)
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        config_path = Path(env_path) if env_path else Path(DEFAULT_CONFIG_NAME)

    config = dict(DEFAULT_CONFIG)

    if not config_path.exists():
        logger.debug(
            "Config file %s not found, using defaults", config_path
        )
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)

        if not isinstance(user_config, dict):
            raise ValueError(
                f"Config file must contain a JSON object, "
                f"got {type(user_config).__name__}"
            )

        unknown = sorted(set(user_config) - set(DEFAULT_CONFIG))
        if unknown:
            logger.warning("Unknown config keys ignored: %s", ", ".join(unknown))
        config.update({k: v for k, v in user_config.items() if k in DEFAULT_CONFIG})

        logger.info("Config loaded from %s", config_path)
        logger.debug("Config: %s", config)

    except json.JSONDecodeError as e:
        logger.warning(
            "Could not parse %s: invalid JSON at line %d, column %d. Using defaults.",
            config_path,
            e.lineno,
            e.colno,
        )
    except OSError as e:
        logger.warning("Could not read %s: %s. Using defaults.", config_path, e)
    except ValueError as e:
        logger.warning("Invalid config format: %s. Using defaults.", e)

    return config
