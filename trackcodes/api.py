"""
Module-level public API backed by the process-wide AppContext.

Callers that already know the expected technology can use the validators
directly and skip triage.
"""

from __future__ import annotations

from typing import Dict, Iterable

from trackcodes.app_context import get_app_context
from trackcodes.classifier import classify
from trackcodes.model.tracking import ParseResult, TrackingCodeSet
from trackcodes.validation import (
    validate_barcode,
    validate_nfc_code,
    validate_qr_code,
    validate_rfid_code,
)

__all__ = [
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
]


def generate_tracking_codes(sku: str) -> TrackingCodeSet:
    return get_app_context().generator.generate_tracking_codes(sku)


def generate_batch_tracking_codes(skus: Iterable[str]) -> Dict[str, TrackingCodeSet]:
    return get_app_context().batch.generate_batch(skus)


async def generate_batch_tracking_codes_async(
    skus: Iterable[str],
) -> Dict[str, TrackingCodeSet]:
    return await get_app_context().batch.generate_batch_async(skus)


def parse_tracking_code(raw: str) -> ParseResult:
    return classify(raw)


def generate_barcode(sku: str) -> str:
    return get_app_context().generator.generate_barcode(sku)


def generate_rfid_code(sku: str) -> str:
    return get_app_context().generator.generate_rfid_code(sku)


def generate_nfc_code(sku: str) -> str:
    return get_app_context().generator.generate_nfc_code(sku)


def generate_qr_code(sku: str) -> str:
    return get_app_context().generator.generate_qr_code(sku)
