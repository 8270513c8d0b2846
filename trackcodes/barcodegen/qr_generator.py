"""
RU: Генерация QR-кодов товара: канонический JSON-payload и PNG-изображение (data URL)
EN: Product QR codes: canonical JSON payload rendered to a PNG data URL

Payload (compact JSON, fixed key order):
    {"type":"product","sku":"<sku>","timestamp":"<ISO-8601 UTC>","version":"1.0"}

Downstream validation inspects the JSON shape, never the image encoding.

Requirements: Pillow, qrcode
"""

from __future__ import annotations

import base64
import json
import logging
from datetime import datetime, timezone
from io import BytesIO
from typing import Any, Callable, Dict, Final, Optional

import qrcode
import qrcode.image.pil
from PIL import Image
from qrcode.exceptions import DataOverflowError

from trackcodes.config import TrackingConfig
from trackcodes.exceptions import ContractViolation, QRCodeGenError

logger = logging.getLogger(__name__)

__all__ = [
    "QRCodeGenerator",
    "QR_PAYLOAD_TYPE",
    "QR_PAYLOAD_VERSION",
    "DATA_URL_PREFIX",
]

QR_PAYLOAD_TYPE: Final[str] = "product"
QR_PAYLOAD_VERSION: Final[str] = "1.0"
DATA_URL_PREFIX: Final[str] = "data:image/png;base64,"

# Размер модуля до масштабирования до фиксированного размера
QR_BOX_SIZE: Final[int] = 10


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (
        moment.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class QRCodeGenerator:
    """QR code generator for product payloads.

    Args:
        config: Rendering settings (size, margin, error correction).
        clock: Source of the generation instant; aware UTC ``now`` by default.

    Examples:
        >>> gen = QRCodeGenerator()
        >>> gen.build_payload("ELEC-100")
        '{"type":"product","sku":"ELEC-100","timestamp":"...","version":"1.0"}'
        >>> gen.generate("ELEC-100")[:22]
        'data:image/png;base64,'
    """

    def __init__(
        self,
        config: Optional[TrackingConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.config = config or TrackingConfig()
        self.clock = clock or _utc_now

    def build_payload(self, sku: str) -> str:
        """Serialize the canonical product payload for ``sku``."""
        if not isinstance(sku, str):
            raise ContractViolation(
                f"SKU must be a string, got {type(sku).__name__}", code_type="qr"
            )
        payload: Dict[str, Any] = {
            "type": QR_PAYLOAD_TYPE,
            "sku": sku,
            "timestamp": format_timestamp(self.clock()),
            "version": QR_PAYLOAD_VERSION,
        }
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))

    def render_image(self, payload: str) -> Image.Image:
        """
        Render payload as a square black-on-white PIL image of ``config.qr_size``.

        Raises:
            QRCodeGenError: if the payload does not fit or rendering failed.
        """
        if not isinstance(payload, str) or not payload:
            raise QRCodeGenError("QR payload must be a non-empty string", code_type="qr")
        try:
            qr = qrcode.QRCode(
                version=None,
                error_correction=self.config.error_correction.qrcode_constant,
                box_size=QR_BOX_SIZE,
                border=self.config.qr_margin,
            )
            qr.add_data(payload.encode("utf-8"))
            qr.make(fit=True)
            qr_img = qr.make_image(
                fill_color="black",
                back_color="white",
                image_factory=qrcode.image.pil.PilImage,
            )
        except (ValueError, DataOverflowError) as e:
            logger.error("QR encoding failed for %d-byte payload: %r", len(payload), e)
            raise QRCodeGenError(f"QR encoding failed: {e}", code_type="qr") from e

        if hasattr(qr_img, "get_image"):
            qr_img = qr_img.get_image()
        if not isinstance(qr_img, Image.Image):
            logger.error("QR code did not produce a PIL.Image")
            raise QRCodeGenError(
                "QR code rendering did not produce a valid image", code_type="qr"
            )
        size = self.config.qr_size
        img = qr_img.convert("RGB").resize(
            (size, size), resample=Image.Resampling.NEAREST
        )
        logger.debug("QR code rendered: %d chars -> %dx%d", len(payload), size, size)
        return img

    def render_bytes(self, payload: str) -> bytes:
        """PNG-encoded QR image."""
        img = self.render_image(payload)
        buf = BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    def to_data_url(self, payload: str) -> str:
        b64 = base64.b64encode(self.render_bytes(payload)).decode("ascii")
        return DATA_URL_PREFIX + b64

    def generate(self, sku: str) -> str:
        """Build the payload for ``sku`` and return it as a PNG data URL."""
        return self.to_data_url(self.build_payload(sku))
