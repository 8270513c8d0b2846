"""
Централизованные исключения пакета trackcodes.

Исключения описывают только программные ошибки и сбои генерации.
Плохие данные сканирования (неверная длина, неверная контрольная цифра,
неизвестный формат) исключениями НЕ являются: они возвращаются как
``is_valid=False`` с типизированной причиной.

Иерархия:
    TrackingCodeError (базовое)
    ├── ContractViolation      (TypeError)
    ├── InvalidInput           (ValueError)
    ├── ConfigError            (ValueError)
    └── GenerationFailure
        ├── BarcodeGenError
        └── QRCodeGenError

Example:
    >>> from trackcodes.exceptions import TrackingCodeError
    >>> try:
    ...     generate_tracking_codes(None)
    ... except TrackingCodeError as e:
    ...     logger.error("Tracking code call failed: %s", e)
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__: list[str] = [
    "TrackingCodeError",
    "ContractViolation",
    "InvalidInput",
    "ConfigError",
    "GenerationFailure",
    "BarcodeGenError",
    "QRCodeGenError",
]


class TrackingCodeError(Exception):
    """
    Базовое исключение для всех ошибок trackcodes.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        code_type: Технология ("qr", "barcode", "rfid", "nfc"), если известна
        context: Дополнительный контекст для отладки (опционально)
    """

    def __init__(
        self,
        message: str,
        *,
        code_type: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code_type = code_type
        self.context = context or {}

    def __str__(self) -> str:
        parts = [self.__class__.__name__, ": ", self.message]

        if self.code_type:
            parts.append(f" [code_type={self.code_type}]")

        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f" ({ctx_str})")

        return "".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code_type={self.code_type!r}, "
            f"context={self.context!r})"
        )


class ContractViolation(TrackingCodeError, TypeError):
    """
    Caller passed a non-string, None or otherwise type-invalid argument.

    The only fatal class: it signals a bug in the caller, not a bad scan.
    """


class InvalidInput(TrackingCodeError, ValueError):
    """Value-level precondition of a low-level helper was not met."""


class ConfigError(TrackingCodeError, ValueError):
    """Invalid configuration value (prefix, base URL, sizes)."""


class GenerationFailure(TrackingCodeError):
    """
    One technology failed to produce a code for one SKU.

    Isolated by ``generate_tracking_codes``: the field is omitted and the
    failure is logged, sibling technologies are unaffected.
    """


class BarcodeGenError(GenerationFailure):
    """Barcode generation/rendering error."""


class QRCodeGenError(GenerationFailure):
    """QR code generation error (Ошибка генерации QR-кода)."""
