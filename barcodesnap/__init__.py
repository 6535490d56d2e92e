"""
Пакет barcodesnap
=================

Генерация штрихкодов (EAN13, Code 128, QR) из текстового значения
с предпросмотром и экспортом в PDF.

Этот пакет предоставляет:
    - Классификацию ввода: EAN13 (с расчётом/проверкой контрольной цифры)
      или выбор между Code 128 и QR для прочих строк
    - Расчёт размещения изображения на странице PDF (A4, поля 36pt)
    - Рендеринг через python-barcode и qrcode
    - Экспорт в PDF через ReportLab и HTML-предпросмотр
    - CLI на базе click

Пример базового использования:
    >>> from barcodesnap import BarcodeService, BarcodeKind, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> svc = BarcodeService(chooser=lambda value: BarcodeKind.QRCODE)
    >>> rendered = svc.generate_from_selection("012345678905")
    >>> rendered.decision.value
    '0123456789050'
    >>> svc.export_pdf(rendered, "barcode.pdf")

Управление конфигурацией:
    >>> import os
    >>> os.environ['BARCODESNAP_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from barcodesnap import load_config
    >>> config = load_config()
    >>> config['qr_width_px']
    280

Версия: 0.1.0
Лицензия: MIT
Python: 3.11+
"""

import importlib.util
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Dict

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__description__ = "Turn text into EAN13, Code 128 or QR barcodes with PDF export"
__license__ = "MIT"
__python_requires__ = ">=3.11"

# Компоненты семантической версии
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

LOG_LEVEL_ENV_VAR = "BARCODESNAP_LOG_LEVEL"
LOG_DIR_ENV_VAR = "BARCODESNAP_LOG_DIR"

# Имена собственных обработчиков пакета
CONSOLE_HANDLER_NAME = "barcodesnap.console"
FILE_HANDLER_NAME = "barcodesnap.file"

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета "barcodesnap" с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком для всех уровней, если задана
      переменная окружения BARCODESNAP_LOG_DIR
    - Форматом с временной меткой, уровнем, модулем и сообщением

    Уровень логирования задаётся переменной окружения
    BARCODESNAP_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL.

    Функция идемпотентна - повторные вызовы не имеют эффекта.
    """
    log_level_str = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    # Избегаем дублирования конфигурации; чужие обработчики (например,
    # pytest LogCaptureHandler) не считаются нашей настройкой
    package_logger = logging.getLogger("barcodesnap")
    if any(h.get_name() == CONSOLE_HANDLER_NAME for h in package_logger.handlers):
        return

    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Консольный обработчик (stderr) - WARNING и выше
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    package_logger.addHandler(console_handler)

    log_dir_str = os.environ.get(LOG_DIR_ENV_VAR)
    if log_dir_str:
        try:
            log_dir = Path(log_dir_str)
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / "barcodesnap.log",
                maxBytes=5 * 1024 * 1024,  # 5 МБ
                backupCount=3,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            file_handler.set_name(FILE_HANDLER_NAME)
            package_logger.addHandler(file_handler)
        except OSError as e:
            package_logger.warning(
                "File logging unavailable (%s), console only", e
            )

    package_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён 'barcodesnap'.

    Аргументы:
        module_name: Обычно `__name__`.

    Пример:
        >>> logger = get_logger(__name__)
        >>> logger.info("Начинается генерация штрихкода")
    """
    if module_name.startswith("barcodesnap"):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger("barcodesnap.main")
    return logging.getLogger(f"barcodesnap.{module_name.lstrip('.')}")


def check_dependencies() -> Dict[str, bool]:
    """
    Проверить, установлены ли сторонние зависимости.

    Возвращает:
        Словарь: имя пакета -> доступность.

    Пример:
        >>> deps = check_dependencies()
        >>> if not deps['reportlab']:
        ...     print("PDF export unavailable")
    """
    modules = {
        "pillow": "PIL",
        "python-barcode": "barcode",
        "qrcode": "qrcode",
        "reportlab": "reportlab",
        "click": "click",
    }
    return {
        name: importlib.util.find_spec(module) is not None
        for name, module in modules.items()
    }


# Сначала настраиваем логирование (перед любой другой инициализацией)
_setup_logging()

# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================

# core before model: model.decision imports core.checksum
from barcodesnap.exceptions import (  # noqa: E402
    BarcodeSnapError,
    DegenerateImageError,
    ExportError,
    InputError,
    InvalidChecksumError,
    InvalidDecisionError,
    InvalidImageDataError,
    InvalidPageError,
    NoInputError,
    PreconditionError,
    RenderError,
)
from barcodesnap.config import DEFAULT_CONFIG, load_config  # noqa: E402
from barcodesnap.core import (  # noqa: E402
    A4_HEIGHT_PT,
    A4_WIDTH_PT,
    DEFAULT_MARGIN_PT,
    PageLayout,
    classify,
    compute_ean13_check_digit,
    fit,
    fit_a4,
    is_valid_ean13,
    prepare_input,
    resolve,
)
from barcodesnap.model import (  # noqa: E402
    Ambiguous,
    BarcodeDecision,
    BarcodeKind,
    ClassifyResult,
    Decision,
    Rejected,
    RejectReason,
)
from barcodesnap.barcodegen import RenderedBarcode, render_decision  # noqa: E402
from barcodesnap.service import BarcodeService  # noqa: E402

__all__ = [
    # Метаданные версии
    "__version__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "load_config",
    "check_dependencies",
    "DEFAULT_CONFIG",
    # Ядро
    "classify",
    "prepare_input",
    "resolve",
    "compute_ean13_check_digit",
    "is_valid_ean13",
    "fit",
    "fit_a4",
    "PageLayout",
    "A4_WIDTH_PT",
    "A4_HEIGHT_PT",
    "DEFAULT_MARGIN_PT",
    # Модель
    "BarcodeKind",
    "BarcodeDecision",
    "ClassifyResult",
    "Decision",
    "Ambiguous",
    "Rejected",
    "RejectReason",
    # Рендеринг и сервис
    "RenderedBarcode",
    "render_decision",
    "BarcodeService",
    # Исключения
    "BarcodeSnapError",
    "InputError",
    "NoInputError",
    "InvalidChecksumError",
    "PreconditionError",
    "DegenerateImageError",
    "InvalidPageError",
    "InvalidDecisionError",
    "RenderError",
    "ExportError",
    "InvalidImageDataError",
]

_logger = get_logger(__name__)
_logger.debug("barcodesnap v%s initialized from %s", __version__, Path(__file__).parent)
