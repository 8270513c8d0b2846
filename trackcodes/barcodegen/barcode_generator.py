from __future__ import annotations

import logging
import re
from io import BytesIO
from typing import Any, Dict, Final, Optional, TypedDict

from barcode.upc import UniversalProductCodeA
from barcode.errors import BarcodeError
from barcode.writer import ImageWriter
from PIL import Image

from trackcodes.config import TrackingConfig
from trackcodes.exceptions import BarcodeGenError, ContractViolation

from .checksum import compute_check_digit

logger = logging.getLogger(__name__)

__all__ = [
    "UPCABarcodeGenerator",
    "BarcodeRenderOptions",
    "derive_product_code",
]

_NON_DIGITS: Final = re.compile(r"[^0-9]")


class BarcodeRenderOptions(TypedDict, total=False):
    """Типобезопасные опции рендеринга штрихкода."""

    module_width: float
    module_height: float
    font_size: int
    dpi: int
    text_distance: float
    quiet_zone: float
    write_text: bool


class _UPCASymbol(UniversalProductCodeA):
    """UPC-A symbol whose check digit comes from ``compute_check_digit``."""

    def calculate_checksum(self) -> int:
        return compute_check_digit(self.upc[:11])


def derive_product_code(sku: str, width: int) -> str:
    """
    Digits-only product code: strip every non-digit, left-pad with zeros,
    keep the first ``width`` digits.

    Example:
        >>> derive_product_code("ELEC-100", 8)
        '00000100'
    """
    return _NON_DIGITS.sub("", sku).rjust(width, "0")[:width]


class UPCABarcodeGenerator:
    """
    Deterministic UPC-A barcodes derived from SKUs.

    Args:
        config: Generation settings (company prefix). Defaults to TrackingConfig().

    Examples:
        >>> gen = UPCABarcodeGenerator()
        >>> gen.generate("ELEC-100")
        '123000001009'
        >>> img = gen.render_image("123000001009")
    """

    def __init__(self, config: Optional[TrackingConfig] = None) -> None:
        self.config = config or TrackingConfig()

    def base(self, sku: str) -> str:
        """11-digit payload: company prefix + SKU-derived product code."""
        if not isinstance(sku, str):
            raise ContractViolation(
                f"SKU must be a string, got {type(sku).__name__}", code_type="barcode"
            )
        prefix = self.config.barcode_company_prefix
        return prefix + derive_product_code(sku, self.config.product_code_width)

    def generate(self, sku: str) -> str:
        base = self.base(sku)
        code = f"{base}{compute_check_digit(base)}"
        logger.debug("Barcode for SKU %r: %s", sku, code)
        return code

    def render_image(
        self,
        code: str,
        options: Optional[BarcodeRenderOptions] = None,
        strict: bool = True,
    ) -> Image.Image:
        """
        Рендеринг изображения штрихкода UPC-A для печати этикетки.

        Args:
            code: 12-digit UPC-A code (as returned by ``generate``).
            options: Rendering options (module_width, dpi и т.д.).
            strict: If True raise BarcodeGenError on failure; otherwise log a
                warning and return a white placeholder image.

        Returns:
            PIL Image (RGB).

        Raises:
            BarcodeGenError: if strict and rendering failed.
        """
        try:
            # the symbol appends its own check digit to the 11-digit base
            barcode_inst = _UPCASymbol(code[:11], writer=ImageWriter())
            if barcode_inst.get_fullcode() != code:
                raise BarcodeGenError(
                    f"Not a valid UPC-A code: {code!r}", code_type="barcode"
                )
            writer_options: Dict[str, Any] = {
                "module_width": 0.2,
                "font_size": 12,
                "dpi": 144,
                "text_distance": 1,
                "quiet_zone": 2,
                "write_text": True,
                **(options or {}),
            }
            img = barcode_inst.render(writer_options=writer_options)
            if not isinstance(img, Image.Image):
                raise BarcodeGenError(
                    "Barcode output is not an Image.Image object", code_type="barcode"
                )
            return img.convert("RGB")
        except BarcodeGenError as e:
            if strict:
                raise
            logger.warning("%s; returning placeholder", e.message)
        except (BarcodeError, ValueError, TypeError, OSError) as e:
            msg = f"Barcode image generation failed for {code!r}"
            if strict:
                raise BarcodeGenError(msg, code_type="barcode") from e
            logger.warning("%s: %s; returning placeholder", msg, e)
        return Image.new("RGB", (400, 120), "white")

    def render_bytes(
        self, code: str, options: Optional[BarcodeRenderOptions] = None
    ) -> bytes:
        img = self.render_image(code, options=options)
        buf = BytesIO()
        img.save(buf, format="PNG")
        buf.seek(0)
        return buf.read()
