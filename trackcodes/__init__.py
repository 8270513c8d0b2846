"""
Пакет trackcodes
================

Генерация и распознавание кодов отслеживания товаров.

Этот пакет предоставляет:
    - Детерминированный штрихкод UPC-A из SKU (с контрольной цифрой)
    - RFID-идентификатор EPC SGTIN со случайным серийным номером
    - NFC-ссылку на карточку товара
    - QR-код с каноническим JSON-payload товара
    - Классификацию произвольной отсканированной строки по технологии
    - Пакетную генерацию с ограниченным параллелизмом

Пример базового использования:
    >>> from trackcodes import generate_tracking_codes, parse_tracking_code
    >>>
    >>> codes = generate_tracking_codes("ELEC-100")
    >>> codes.barcode
    '123000001009'
    >>> result = parse_tracking_code(codes.barcode)
    >>> result.type, result.is_valid
    (<CodeType.BARCODE: 'barcode'>, True)

Управление конфигурацией:
    >>> import os
    >>> os.environ['TRACKCODES_LOG_LEVEL'] = 'DEBUG'
    >>> os.environ['APP_BASE_URL'] = 'https://shop.example.com'
    >>>
    >>> from trackcodes import load_config, get_logger
    >>> config = load_config()
    >>> logger = get_logger(__name__)
    >>> logger.debug("Base URL: %s", config.nfc_base_url)

Версия: 0.1.0
Лицензия: MIT
Python: 3.10+
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "trackcodes Development Team"
__description__ = "Inventory tracking codes: QR, UPC-A barcode, RFID EPC and NFC"
__license__ = "MIT"
__python_requires__ = ">=3.10"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

if sys.version_info < (3, 10):
    raise RuntimeError(
        f"trackcodes требует Python 3.10 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

LOGGER_NAMESPACE = "trackcodes"


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком, если задана переменная
      окружения TRACKCODES_LOG_DIR
    - Форматом: [временная_метка] УРОВЕНЬ [модуль.функция:строка] сообщение

    Уровень задаётся переменной окружения TRACKCODES_LOG_LEVEL
    (DEBUG, INFO, WARNING, ERROR, CRITICAL; по умолчанию INFO).

    Идемпотентна: повторные вызовы не добавляют обработчики.
    """
    log_level_str = os.environ.get("TRACKCODES_LOG_LEVEL", "INFO").upper()
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_dir_env = os.environ.get("TRACKCODES_LOG_DIR")
    if log_dir_env:
        try:
            log_dir = Path(log_dir_env)
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / "trackcodes.log",
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(
                "Не удалось инициализировать файловое логирование: %s. "
                "Используется только консоль.",
                e,
            )

    root_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён пакета ('trackcodes.<module_name>').

    Аргументы:
        module_name: Обычно ``__name__``.

    Пример:
        >>> logger = get_logger(__name__)
        >>> logger.info("Generating codes for %d SKUs", 42)
    """
    if module_name == LOGGER_NAMESPACE or module_name.startswith(
        LOGGER_NAMESPACE + "."
    ):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger(f"{LOGGER_NAMESPACE}.main")
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{module_name.lstrip('.')}")


# Сначала настраиваем логирование (перед любой другой инициализацией)
_setup_logging()

# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================

from .api import (  # noqa: E402
    generate_barcode,
    generate_batch_tracking_codes,
    generate_batch_tracking_codes_async,
    generate_nfc_code,
    generate_qr_code,
    generate_rfid_code,
    generate_tracking_codes,
    parse_tracking_code,
    validate_barcode,
    validate_nfc_code,
    validate_qr_code,
    validate_rfid_code,
)
from .app_context import AppContext, get_app_context, reset_app_context  # noqa: E402
from .barcodegen.checksum import compute_check_digit, verify_check_digit  # noqa: E402
from .batch import BatchCoordinator, BatchOutcome, BatchReport  # noqa: E402
from .classifier import classify, detect_code_type  # noqa: E402
from .config import TrackingConfig, load_config  # noqa: E402
from .exceptions import (  # noqa: E402
    BarcodeGenError,
    ConfigError,
    ContractViolation,
    GenerationFailure,
    InvalidInput,
    QRCodeGenError,
    TrackingCodeError,
)
from .generator import TrackingCodeGenerator  # noqa: E402
from .model import (  # noqa: E402
    CodeType,
    ErrorKind,
    ParseResult,
    TrackingCodeSet,
    ValidationResult,
)
from .scan import ProductCatalog, ScanOutcome, resolve_scan  # noqa: E402

__all__ = [
    # Метаданные версии
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "load_config",
    "TrackingConfig",
    # Публичные операции
    "generate_tracking_codes",
    "generate_batch_tracking_codes",
    "generate_batch_tracking_codes_async",
    "parse_tracking_code",
    "generate_barcode",
    "generate_rfid_code",
    "generate_nfc_code",
    "generate_qr_code",
    "validate_barcode",
    "validate_rfid_code",
    "validate_nfc_code",
    "validate_qr_code",
    "compute_check_digit",
    "verify_check_digit",
    "classify",
    "detect_code_type",
    "resolve_scan",
    # Классы
    "AppContext",
    "get_app_context",
    "reset_app_context",
    "BatchCoordinator",
    "BatchOutcome",
    "BatchReport",
    "TrackingCodeGenerator",
    "ProductCatalog",
    "ScanOutcome",
    # Модель
    "CodeType",
    "ErrorKind",
    "ParseResult",
    "TrackingCodeSet",
    "ValidationResult",
    # Исключения
    "TrackingCodeError",
    "ContractViolation",
    "InvalidInput",
    "ConfigError",
    "GenerationFailure",
    "BarcodeGenError",
    "QRCodeGenError",
]

_logger = get_logger(__name__)
_logger.debug("trackcodes v%s initialized", __version__)
