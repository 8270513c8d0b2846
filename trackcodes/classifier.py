"""
Classification of scanned strings of unknown origin.

Ordered structural triage, first match wins. The order matters because the
formats overlap in character set (a QR payload may contain digits, an NFC link
may contain ``urn:``):

    1. "{" or "data:image" prefix  -> qr
    2. exactly 12 ASCII digits      -> barcode
    3. "urn:epc:id:sgtin:" prefix   -> rfid
    4. "http" prefix                -> nfc
    5. anything else                -> unknown (terminal)

Malformed or corrupted scans are an expected outcome (``is_valid=False``),
never an exception.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, Final, Optional

from trackcodes.barcodegen.epc import EPC_SGTIN_PREFIX, SGTIN
from trackcodes.exceptions import ContractViolation
from trackcodes.model.enums import CodeType, ErrorKind
from trackcodes.model.tracking import ParseResult, ValidationResult
from trackcodes.validation import VALIDATORS

logger = logging.getLogger(__name__)

__all__ = [
    "classify",
    "detect_code_type",
    "parse_tracking_code",
    "UNRECOGNIZED_FORMAT_ERROR",
]

UNRECOGNIZED_FORMAT_ERROR: Final[str] = "unrecognized format"

QR_PREFIXES: Final = ("{", "data:image")
NFC_PREFIX: Final[str] = "http"

_TWELVE_DIGITS: Final = re.compile(r"[0-9]{12}")


def detect_code_type(raw: str) -> CodeType:
    """Structural triage only: which technology the string looks like."""
    if raw.startswith(QR_PREFIXES):
        return CodeType.QR
    if _TWELVE_DIGITS.fullmatch(raw):
        return CodeType.BARCODE
    if raw.startswith(EPC_SGTIN_PREFIX):
        return CodeType.RFID
    if raw.startswith(NFC_PREFIX):
        return CodeType.NFC
    return CodeType.UNKNOWN


def _qr_data(raw: str, value: Any) -> Dict[str, Any]:
    return {"sku": value}


def _barcode_data(raw: str, value: Any) -> Dict[str, Any]:
    return {"barcode": raw}


def _rfid_data(raw: str, value: Any) -> Dict[str, Any]:
    sgtin: SGTIN = value
    return {
        "rfid": raw,
        "company_prefix": sgtin.company_prefix,
        "item_reference": sgtin.item_reference,
        "serial": sgtin.serial,
    }


def _nfc_data(raw: str, value: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {"nfc": raw}
    if value:
        data["sku"] = value
    return data


_DATA_EXTRACTORS: Final[Dict[CodeType, Callable[[str, Any], Dict[str, Any]]]] = {
    CodeType.QR: _qr_data,
    CodeType.BARCODE: _barcode_data,
    CodeType.RFID: _rfid_data,
    CodeType.NFC: _nfc_data,
}

# adding a technology without a validator and an extractor fails at import
_missing = set(CodeType.scannable()) - (set(VALIDATORS) & set(_DATA_EXTRACTORS))
if _missing:
    raise RuntimeError(
        f"No classifier branch for: {', '.join(sorted(t.value for t in _missing))}"
    )


def _wrap(code_type: CodeType, raw: str, result: ValidationResult) -> ParseResult:
    if not result.is_valid:
        return ParseResult(
            type=code_type,
            is_valid=False,
            error=result.error,
            error_kind=result.error_kind,
        )
    return ParseResult(
        type=code_type,
        is_valid=True,
        data=_DATA_EXTRACTORS[code_type](raw, result.value),
    )


def classify(raw: str, expected: Optional[CodeType] = None) -> ParseResult:
    """
    Classify one scanned string and validate it as the detected technology.

    Args:
        raw: Scanned string of unknown origin.
        expected: Skip triage and validate as this technology.

    Returns:
        ParseResult carrying type, validity, extracted data or error.

    Raises:
        ContractViolation: ``raw`` is not a string.

    Example:
        >>> classify("123000001009").to_dict()
        {'type': 'barcode', 'isValid': True, 'data': {'barcode': '123000001009'}}
    """
    if not isinstance(raw, str):
        raise ContractViolation(
            f"Scanned code must be a string, got {type(raw).__name__}"
        )
    if expected is None:
        code_type = detect_code_type(raw)
    else:
        try:
            code_type = CodeType(expected)
        except ValueError as e:
            raise ContractViolation(f"Unknown code type: {expected!r}") from e

    if code_type is CodeType.UNKNOWN:
        logger.debug("Unrecognized code format (%d chars)", len(raw))
        return ParseResult(
            type=CodeType.UNKNOWN,
            is_valid=False,
            error=UNRECOGNIZED_FORMAT_ERROR,
            error_kind=ErrorKind.UNRECOGNIZED_FORMAT,
        )

    parsed = _wrap(code_type, raw, VALIDATORS[code_type](raw))
    logger.debug("Classified scan as %s", parsed)
    return parsed


parse_tracking_code = classify
