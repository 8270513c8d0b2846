"""
validation.py: проверка формата кодов отслеживания по технологиям.

Четыре независимых предиката. Каждый принимает строку и возвращает
ValidationResult; плохие данные никогда не вызывают исключение.
Only a non-string argument (a caller bug) raises ContractViolation.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable, Dict, Final
from urllib.parse import urlsplit

from trackcodes.barcodegen.checksum import verify_check_digit
from trackcodes.barcodegen.epc import parse_sgtin
from trackcodes.barcodegen.nfc import sku_from_nfc_uri
from trackcodes.barcodegen.qr_generator import QR_PAYLOAD_TYPE
from trackcodes.exceptions import ContractViolation
from trackcodes.model.enums import CodeType, ErrorKind
from trackcodes.model.tracking import ValidationResult

__all__ = [
    "validate_barcode",
    "validate_rfid_code",
    "validate_nfc_code",
    "validate_qr_code",
    "VALIDATORS",
    "BARCODE_LENGTH_ERROR",
    "BARCODE_CHECKSUM_ERROR",
]

BARCODE_LENGTH_ERROR: Final[str] = "Barcode must be 12 digits"
BARCODE_CHECKSUM_ERROR: Final[str] = "Invalid barcode check digit"
RFID_FORMAT_ERROR: Final[str] = "Invalid RFID EPC format"
NFC_FORMAT_ERROR: Final[str] = "Invalid NFC URL format"
NFC_SCHEME_ERROR: Final[str] = "NFC code must be a valid HTTP(S) URL"
QR_FORMAT_ERROR: Final[str] = "Invalid QR code format"
QR_TYPE_ERROR: Final[str] = "Invalid QR code type"
QR_SKU_ERROR: Final[str] = "Missing SKU in QR code"

_TWELVE_DIGITS: Final = re.compile(r"[0-9]{12}")
# whitespace, C0 controls and DEL never occur in a valid URI
_FORBIDDEN_URI_CHARS: Final = re.compile(r"[\s\x00-\x1f\x7f]")


def _require_str(value: Any, code_type: CodeType) -> None:
    if not isinstance(value, str):
        raise ContractViolation(
            f"Code must be a string, got {type(value).__name__}",
            code_type=code_type.value,
        )


def validate_barcode(code: str) -> ValidationResult:
    """UPC-A: 12 ASCII digits and a matching check digit."""
    _require_str(code, CodeType.BARCODE)
    if not _TWELVE_DIGITS.fullmatch(code):
        return ValidationResult.fail(BARCODE_LENGTH_ERROR)
    if not verify_check_digit(code):
        return ValidationResult.fail(BARCODE_CHECKSUM_ERROR, ErrorKind.CHECKSUM_MISMATCH)
    return ValidationResult.ok(code)


def validate_rfid_code(code: str) -> ValidationResult:
    """EPC SGTIN URI; structural only, EPC carries no checksum in this scheme."""
    _require_str(code, CodeType.RFID)
    sgtin = parse_sgtin(code)
    if sgtin is None:
        return ValidationResult.fail(RFID_FORMAT_ERROR)
    return ValidationResult.ok(sgtin)


def validate_nfc_code(code: str) -> ValidationResult:
    """Any syntactically valid http/https URI with a host."""
    _require_str(code, CodeType.NFC)
    if not code or _FORBIDDEN_URI_CHARS.search(code):
        return ValidationResult.fail(NFC_FORMAT_ERROR)
    try:
        parts = urlsplit(code)
        # port parsing is lazy and raises on garbage such as "host:abc"
        parts.port
    except ValueError:
        return ValidationResult.fail(NFC_FORMAT_ERROR)
    if not parts.scheme:
        return ValidationResult.fail(NFC_FORMAT_ERROR)
    if parts.scheme.lower() not in ("http", "https"):
        return ValidationResult.fail(NFC_SCHEME_ERROR)
    if not parts.hostname:
        return ValidationResult.fail(NFC_FORMAT_ERROR)
    return ValidationResult.ok(sku_from_nfc_uri(code))


def validate_qr_code(payload: str) -> ValidationResult:
    """
    Product QR payload: a JSON object with ``type == "product"`` and a
    non-empty ``sku``. Unknown extra keys are tolerated.
    """
    _require_str(payload, CodeType.QR)
    try:
        parsed = json.loads(payload)
    except (ValueError, RecursionError):
        # RecursionError: pathologically nested arrays or objects
        return ValidationResult.fail(QR_FORMAT_ERROR)
    if not isinstance(parsed, dict):
        return ValidationResult.fail(QR_FORMAT_ERROR)
    if parsed.get("type") != QR_PAYLOAD_TYPE:
        return ValidationResult.fail(QR_TYPE_ERROR)
    sku = parsed.get("sku")
    if not isinstance(sku, str) or not sku:
        return ValidationResult.fail(QR_SKU_ERROR)
    return ValidationResult.ok(sku)


VALIDATORS: Final[Dict[CodeType, Callable[[str], ValidationResult]]] = {
    CodeType.QR: validate_qr_code,
    CodeType.BARCODE: validate_barcode,
    CodeType.RFID: validate_rfid_code,
    CodeType.NFC: validate_nfc_code,
}
