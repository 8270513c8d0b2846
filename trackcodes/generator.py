"""
generator.py

Fan-out of the four per-technology generators for one SKU.

A failure of one technology never aborts the others: that field is left out
of the resulting TrackingCodeSet and the failure is logged. Only a caller bug
(non-string or empty SKU) is raised.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, Optional, Tuple

from trackcodes.barcodegen.barcode_generator import UPCABarcodeGenerator
from trackcodes.barcodegen.epc import EPCGenerator
from trackcodes.barcodegen.nfc import NFCGenerator
from trackcodes.barcodegen.qr_generator import QRCodeGenerator
from trackcodes.config import TrackingConfig
from trackcodes.exceptions import ContractViolation
from trackcodes.model.enums import CodeType
from trackcodes.model.tracking import TrackingCodeSet
from trackcodes.validation import VALIDATORS

logger = logging.getLogger(__name__)

__all__ = [
    "TrackingCodeGenerator",
    "require_sku",
]


def require_sku(sku: object) -> str:
    """Return ``sku`` if it is a non-empty string, else raise ContractViolation."""
    if not isinstance(sku, str):
        raise ContractViolation(f"SKU must be a string, got {type(sku).__name__}")
    if not sku.strip():
        raise ContractViolation("SKU must be a non-empty string")
    return sku


class TrackingCodeGenerator:
    """
    Produces one code per technology for a SKU.

    Args:
        config: Generation settings; TrackingConfig() by default.
        clock: Time source for QR payload timestamps.
        rng: Byte source for RFID serials.
        self_check: Validate every produced code and drop the ones that fail.
        qr_image: Put the PNG data URL in the ``qr`` field (default); when
            False the field holds the JSON payload itself.

    Example:
        >>> gen = TrackingCodeGenerator()
        >>> codes = gen.generate_tracking_codes("ELEC-100")
        >>> codes.barcode
        '123000001009'
    """

    def __init__(
        self,
        config: Optional[TrackingConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
        rng: Optional[Callable[[int], bytes]] = None,
        self_check: bool = False,
        qr_image: bool = True,
    ) -> None:
        self.config = config or TrackingConfig()
        self.self_check = self_check
        self.qr_image = qr_image
        self.barcode = UPCABarcodeGenerator(self.config)
        self.epc = EPCGenerator(self.config, rng=rng)
        self.nfc = NFCGenerator(self.config)
        self.qr = QRCodeGenerator(self.config, clock=clock)

    def generate_barcode(self, sku: str) -> str:
        return self.barcode.generate(require_sku(sku))

    def generate_rfid_code(self, sku: str) -> str:
        return self.epc.generate(require_sku(sku))

    def generate_nfc_code(self, sku: str) -> str:
        return self.nfc.generate(require_sku(sku))

    def generate_qr_code(self, sku: str) -> str:
        """PNG data URL of the product QR payload."""
        return self.qr.generate(require_sku(sku))

    def _produce(self, code_type: CodeType, sku: str) -> Tuple[str, str]:
        """
        Return ``(code, content)``, where content is what a scanner reads back.
        For QR that is the JSON payload encoded into the image.
        """
        if code_type is CodeType.QR:
            payload = self.qr.build_payload(sku)
            code = self.qr.to_data_url(payload) if self.qr_image else payload
            return code, payload
        generate: Dict[CodeType, Callable[[str], str]] = {
            CodeType.BARCODE: self.barcode.generate,
            CodeType.RFID: self.epc.generate,
            CodeType.NFC: self.nfc.generate,
        }
        code = generate[code_type](sku)
        return code, code

    def _passes_self_check(self, code_type: CodeType, sku: str, content: str) -> bool:
        result = VALIDATORS[code_type](content)
        if not result.is_valid:
            logger.error(
                "Self-check failed for %s code of SKU %r: %s",
                code_type.value,
                sku,
                result.error,
            )
        return result.is_valid

    def generate_tracking_codes(self, sku: str) -> TrackingCodeSet:
        """
        Generate all four tracking codes for ``sku``.

        Raises:
            ContractViolation: ``sku`` is not a non-empty string.
        """
        require_sku(sku)
        codes: Dict[str, str] = {}
        for code_type in CodeType.scannable():
            try:
                code, content = self._produce(code_type, sku)
            except Exception as e:
                logger.error(
                    "Failed to generate %s code for SKU %r: %s", code_type.value, sku, e
                )
                continue
            if self.self_check and not self._passes_self_check(code_type, sku, content):
                continue
            codes[code_type.value] = code

        logger.debug(
            "Generated tracking codes for SKU %r: %s", sku, ", ".join(sorted(codes))
        )
        return TrackingCodeSet(**codes)
