"""
Конфигурация генерации кодов отслеживания.

Источники (по возрастанию приоритета):
    1. Значения по умолчанию (_DEFAULT_CONFIG)
    2. JSON-файл (trackcodes.json, переменная TRACKCODES_CONFIG или явный путь)
    3. Переменные окружения (APP_BASE_URL, TRACKCODES_*)

Company prefixes shipped here are placeholders. A real deployment sets the
registrar-assigned values through the file or the environment.

Example:
    >>> config = load_config()
    >>> config.barcode_company_prefix
    '123'
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Final, Mapping, Optional
from urllib.parse import urlsplit

from trackcodes.exceptions import ConfigError
from trackcodes.model.enums import QRErrorCorrection

logger = logging.getLogger(__name__)

__all__ = [
    "TrackingConfig",
    "load_config",
    "DEFAULT_CONFIG_FILENAME",
]

DEFAULT_CONFIG_FILENAME: Final[str] = "trackcodes.json"

# UPC-A payload before the check digit
UPCA_BASE_LENGTH: Final[int] = 11
RFID_COMPANY_PREFIX_LENGTH: Final[int] = 7
MIN_QR_SIZE: Final[int] = 21
MAX_QR_SIZE: Final[int] = 4096
MAX_QR_MARGIN: Final[int] = 20

_DEFAULT_CONFIG: Dict[str, Any] = {
    "barcode_company_prefix": "123",
    "rfid_company_prefix": "0123456",
    "nfc_base_url": "https://inventory.app",
    "qr_size": 256,
    "qr_margin": 1,
    "qr_error_correction": "M",
    "batch_size": 10,
    "max_workers": None,
}

# env var -> (config key, converter)
_ENV_OVERRIDES: Final[Dict[str, tuple]] = {
    "APP_BASE_URL": ("nfc_base_url", str),
    "TRACKCODES_BARCODE_PREFIX": ("barcode_company_prefix", str),
    "TRACKCODES_RFID_PREFIX": ("rfid_company_prefix", str),
    "TRACKCODES_BATCH_SIZE": ("batch_size", int),
}

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class TrackingConfig:
    """
    Immutable generation settings.

    Attributes:
        barcode_company_prefix: UPC-A company prefix (1-10 digits); the product
            code fills the remaining ``11 - len(prefix)`` digits.
        rfid_company_prefix: EPC SGTIN company prefix (exactly 7 digits).
        nfc_base_url: Base of the product-detail links written to NFC tags.
        qr_size: Fixed QR image side in pixels.
        qr_margin: Quiet zone in modules.
        qr_error_correction: QR error-correction level (L/M/Q/H).
        batch_size: Chunk size for bulk generation.
        max_workers: Thread pool size for bulk generation (None = chunk size).
    """

    barcode_company_prefix: str = _DEFAULT_CONFIG["barcode_company_prefix"]
    rfid_company_prefix: str = _DEFAULT_CONFIG["rfid_company_prefix"]
    nfc_base_url: str = _DEFAULT_CONFIG["nfc_base_url"]
    qr_size: int = _DEFAULT_CONFIG["qr_size"]
    qr_margin: int = _DEFAULT_CONFIG["qr_margin"]
    qr_error_correction: str = _DEFAULT_CONFIG["qr_error_correction"]
    batch_size: int = _DEFAULT_CONFIG["batch_size"]
    max_workers: Optional[int] = _DEFAULT_CONFIG["max_workers"]

    def __post_init__(self) -> None:
        prefix = self.barcode_company_prefix
        if (
            not isinstance(prefix, str)
            or not _DIGITS.fullmatch(prefix)
            or len(prefix) >= UPCA_BASE_LENGTH
        ):
            raise ConfigError(
                f"barcode_company_prefix must be 1-{UPCA_BASE_LENGTH - 1} digits, "
                f"got {prefix!r}"
            )
        rfid_prefix = self.rfid_company_prefix
        if (
            not isinstance(rfid_prefix, str)
            or not _DIGITS.fullmatch(rfid_prefix)
            or len(rfid_prefix) != RFID_COMPANY_PREFIX_LENGTH
        ):
            raise ConfigError(
                f"rfid_company_prefix must be exactly {RFID_COMPANY_PREFIX_LENGTH} "
                f"digits, got {rfid_prefix!r}"
            )
        if not isinstance(self.nfc_base_url, str):
            raise ConfigError("nfc_base_url must be a string")
        parts = urlsplit(self.nfc_base_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigError(
                f"nfc_base_url must be an http(s) URL, got {self.nfc_base_url!r}"
            )
        if not _is_int(self.qr_size) or not (MIN_QR_SIZE <= self.qr_size <= MAX_QR_SIZE):
            raise ConfigError(
                f"qr_size must be between {MIN_QR_SIZE} and {MAX_QR_SIZE}, "
                f"got {self.qr_size!r}"
            )
        if not _is_int(self.qr_margin) or not (0 <= self.qr_margin <= MAX_QR_MARGIN):
            raise ConfigError(
                f"qr_margin must be between 0 and {MAX_QR_MARGIN}, got {self.qr_margin!r}"
            )
        try:
            QRErrorCorrection(self.qr_error_correction)
        except ValueError as e:
            raise ConfigError(
                f"qr_error_correction must be one of L, M, Q, H, "
                f"got {self.qr_error_correction!r}"
            ) from e
        if not _is_int(self.batch_size) or self.batch_size < 1:
            raise ConfigError(f"batch_size must be >= 1, got {self.batch_size!r}")
        if self.max_workers is not None and (
            not _is_int(self.max_workers) or self.max_workers < 1
        ):
            raise ConfigError(
                f"max_workers must be None or >= 1, got {self.max_workers!r}"
            )

    @property
    def product_code_width(self) -> int:
        """Digits left for the SKU-derived product code in a UPC-A base."""
        return UPCA_BASE_LENGTH - len(self.barcode_company_prefix)

    @property
    def error_correction(self) -> QRErrorCorrection:
        return QRErrorCorrection(self.qr_error_correction)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "TrackingConfig":
        """Build from a mapping, ignoring (and logging) unknown keys."""
        known = {k: v for k, v in d.items() if k in _DEFAULT_CONFIG}
        unknown = sorted(set(d) - set(known))
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
        return cls(**known)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    """Read a JSON config object; any failure falls back to an empty overlay."""
    if not config_path.exists():
        logger.debug("Config file %s not found, using defaults", config_path)
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)

        if not isinstance(user_config, dict):
            raise ValueError(
                f"config file must contain a JSON object, "
                f"got {type(user_config).__name__}"
            )

        logger.info("Configuration loaded from %s", config_path)
        return user_config

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
        logger.warning("Invalid configuration format: %s. Using defaults.", e)
    return {}


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> TrackingConfig:
    """
    Load configuration from defaults, an optional JSON file and the environment.

    Args:
        config_path: Explicit JSON file. Defaults to ``$TRACKCODES_CONFIG`` or
            ``trackcodes.json`` in the current directory.
        environ: Environment mapping (``os.environ`` when None).

    Returns:
        Validated TrackingConfig.

    Raises:
        ConfigError: when a supplied value is invalid (bad prefix, bad URL, ...).
    """
    env = os.environ if environ is None else environ

    if config_path is None:
        config_path = Path(env.get("TRACKCODES_CONFIG", DEFAULT_CONFIG_FILENAME))

    config: Dict[str, Any] = dict(_DEFAULT_CONFIG)
    config.update(_read_config_file(Path(config_path)))

    for var, (key, convert) in _ENV_OVERRIDES.items():
        raw = env.get(var)
        if raw is None or raw == "":
            continue
        try:
            config[key] = convert(raw)
        except ValueError as e:
            raise ConfigError(f"{var} has an invalid value: {raw!r}") from e

    result = TrackingConfig.from_dict(config)
    logger.debug("Active configuration: %s", result.to_dict())
    return result
