"""
barcodegen

Генераторы кодов отслеживания: по одному на технологию.

Public API:
    - compute_check_digit / verify_check_digit: контрольная цифра UPC-A
    - UPCABarcodeGenerator: детерминированный штрихкод UPC-A из SKU (+ рендеринг)
    - EPCGenerator: RFID EPC SGTIN URI со случайным серийным номером
    - NFCGenerator: ссылка на карточку товара для NFC-метки
    - QRCodeGenerator: JSON-payload товара в QR-изображении (data URL)

Зависимости:
    Pillow, qrcode, python-barcode
"""

from trackcodes.barcodegen.barcode_generator import (
    BarcodeRenderOptions,
    UPCABarcodeGenerator,
    derive_product_code,
)
from trackcodes.barcodegen.checksum import compute_check_digit, verify_check_digit
from trackcodes.barcodegen.epc import (
    EPC_SGTIN_PATTERN,
    EPC_SGTIN_PREFIX,
    SGTIN,
    EPCGenerator,
    derive_item_reference,
    parse_sgtin,
)
from trackcodes.barcodegen.nfc import NFCGenerator, sku_from_nfc_uri
from trackcodes.barcodegen.qr_generator import QRCodeGenerator

__all__ = [
    "BarcodeRenderOptions",
    "UPCABarcodeGenerator",
    "derive_product_code",
    "compute_check_digit",
    "verify_check_digit",
    "EPC_SGTIN_PATTERN",
    "EPC_SGTIN_PREFIX",
    "SGTIN",
    "EPCGenerator",
    "derive_item_reference",
    "parse_sgtin",
    "NFCGenerator",
    "sku_from_nfc_uri",
    "QRCodeGenerator",
]
