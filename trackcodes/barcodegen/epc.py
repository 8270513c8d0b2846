"""
RFID tag identifiers in EPC SGTIN pure-identity URI form.

    urn:epc:id:sgtin:<company prefix>.<item reference>.<serial>

- company prefix: 7 digits (configured)
- item reference: 5 ASCII alphanumerics derived from the SKU
- serial: 8 uppercase hex characters from 4 random bytes, so every
  physical tag gets its own serial even for the same SKU
"""

from __future__ import annotations

import logging
import re
import secrets
from dataclasses import dataclass
from typing import Callable, Final, Optional

from trackcodes.config import TrackingConfig
from trackcodes.exceptions import ContractViolation, GenerationFailure

logger = logging.getLogger(__name__)

__all__ = [
    "SGTIN",
    "EPCGenerator",
    "EPC_SGTIN_PREFIX",
    "EPC_SGTIN_PATTERN",
    "derive_item_reference",
    "parse_sgtin",
]

EPC_SGTIN_PREFIX: Final[str] = "urn:epc:id:sgtin:"
EPC_SGTIN_PATTERN: Final = re.compile(
    r"urn:epc:id:sgtin:(?P<company_prefix>[0-9]{7})"
    r"\.(?P<item_reference>[A-Za-z0-9]{5})"
    r"\.(?P<serial>[A-F0-9]{8})"
)

ITEM_REFERENCE_LENGTH: Final[int] = 5
SERIAL_BYTES: Final[int] = 4

_NON_ALNUM: Final = re.compile(r"[^0-9A-Za-z]")


@dataclass(frozen=True)
class SGTIN:
    company_prefix: str
    item_reference: str
    serial: str

    def to_uri(self) -> str:
        return f"{EPC_SGTIN_PREFIX}{self.company_prefix}.{self.item_reference}.{self.serial}"


def derive_item_reference(sku: str) -> str:
    """ASCII alphanumerics of the SKU, zero-padded on the left, first 5 kept."""
    return (
        _NON_ALNUM.sub("", sku)
        .rjust(ITEM_REFERENCE_LENGTH, "0")[:ITEM_REFERENCE_LENGTH]
    )


def parse_sgtin(code: str) -> Optional[SGTIN]:
    """Split an SGTIN URI into its segments, or None if it does not match."""
    match = EPC_SGTIN_PATTERN.fullmatch(code)
    if match is None:
        return None
    return SGTIN(**match.groupdict())


class EPCGenerator:
    """
    Args:
        config: Generation settings (RFID company prefix).
        rng: Byte source for serials; ``secrets.token_bytes`` by default.
            Uniqueness is what matters, any source of >= 32 bits works.
    """

    def __init__(
        self,
        config: Optional[TrackingConfig] = None,
        rng: Optional[Callable[[int], bytes]] = None,
    ) -> None:
        self.config = config or TrackingConfig()
        self.rng = rng or secrets.token_bytes

    def new_serial(self) -> str:
        raw = self.rng(SERIAL_BYTES)
        if len(raw) != SERIAL_BYTES:
            raise GenerationFailure(
                f"Serial source returned {len(raw)} bytes, expected {SERIAL_BYTES}",
                code_type="rfid",
            )
        return raw.hex().upper()

    def generate(self, sku: str) -> str:
        if not isinstance(sku, str):
            raise ContractViolation(
                f"SKU must be a string, got {type(sku).__name__}", code_type="rfid"
            )
        sgtin = SGTIN(
            company_prefix=self.config.rfid_company_prefix,
            item_reference=derive_item_reference(sku),
            serial=self.new_serial(),
        )
        return sgtin.to_uri()
