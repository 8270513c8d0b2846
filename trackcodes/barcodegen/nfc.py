"""NFC tags carry a plain product-detail link: ``<base URL>/product/<sku>``."""

from __future__ import annotations

import re
from typing import Final, Optional
from urllib.parse import quote, unquote, urlsplit

from trackcodes.config import TrackingConfig
from trackcodes.exceptions import ContractViolation

__all__ = [
    "NFCGenerator",
    "sku_from_nfc_uri",
]

_PRODUCT_PATH: Final = re.compile(r".*/product/(?P<sku>[^/]+)/?")


def sku_from_nfc_uri(uri: str) -> Optional[str]:
    """SKU from a ``.../product/<sku>`` link, None for any other path."""
    match = _PRODUCT_PATH.fullmatch(urlsplit(uri).path)
    if match is None:
        return None
    return unquote(match.group("sku"))


class NFCGenerator:
    def __init__(self, config: Optional[TrackingConfig] = None) -> None:
        self.config = config or TrackingConfig()

    @property
    def base_url(self) -> str:
        return self.config.nfc_base_url.rstrip("/")

    def generate(self, sku: str) -> str:
        if not isinstance(sku, str):
            raise ContractViolation(
                f"SKU must be a string, got {type(sku).__name__}", code_type="nfc"
            )
        # one path segment; URL-safe SKUs such as "ELEC-100" pass through unchanged
        return f"{self.base_url}/product/{quote(sku, safe='')}"
