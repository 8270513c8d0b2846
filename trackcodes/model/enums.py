"""
model/enums.py

(Краткое RU: Перечисления доменной модели кодов отслеживания.)

EN: Domain enums for inventory tracking codes.

- CodeType: closed set of encoding technologies, plus terminal UNKNOWN.
- ErrorKind: typed reason for a failed validation/classification.
- QRErrorCorrection: QR error-correction levels accepted by configuration.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Literal, Tuple


class CodeType(str, Enum):
    QR = "qr"
    BARCODE = "barcode"
    RFID = "rfid"
    NFC = "nfc"
    UNKNOWN = "unknown"  # terminal, nothing further is attempted

    @property
    def is_known(self) -> bool:
        return self is not CodeType.UNKNOWN

    @classmethod
    def scannable(cls) -> Tuple["CodeType", ...]:
        """Real technologies in classification priority order."""
        return (cls.QR, cls.BARCODE, cls.RFID, cls.NFC)

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            CodeType.QR: "QR-код",
            CodeType.BARCODE: "Штрихкод UPC-A",
            CodeType.RFID: "RFID-метка (EPC)",
            CodeType.NFC: "NFC-метка",
            CodeType.UNKNOWN: "Неизвестный формат",
        }
        names_en = {
            CodeType.QR: "QR code",
            CodeType.BARCODE: "UPC-A barcode",
            CodeType.RFID: "RFID tag (EPC)",
            CodeType.NFC: "NFC tag",
            CodeType.UNKNOWN: "Unknown format",
        }
        return names_ru[self] if lang == "ru" else names_en[self]


class ErrorKind(str, Enum):
    MALFORMED_INPUT = "malformed_input"  # wrong length, charset or prefix
    CHECKSUM_MISMATCH = "checksum_mismatch"  # well-formed, check digit wrong
    UNRECOGNIZED_FORMAT = "unrecognized_format"


class QRErrorCorrection(str, Enum):
    L = "L"
    M = "M"
    Q = "Q"
    H = "H"

    @property
    def qrcode_constant(self) -> int:
        """Matching ``qrcode.constants.ERROR_CORRECT_*`` value."""
        from qrcode import constants

        return {
            QRErrorCorrection.L: constants.ERROR_CORRECT_L,
            QRErrorCorrection.M: constants.ERROR_CORRECT_M,
            QRErrorCorrection.Q: constants.ERROR_CORRECT_Q,
            QRErrorCorrection.H: constants.ERROR_CORRECT_H,
        }[self]


DEFAULT_QR_ERROR_CORRECTION: Final[QRErrorCorrection] = QRErrorCorrection.M


__all__ = [
    "CodeType",
    "ErrorKind",
    "QRErrorCorrection",
    "DEFAULT_QR_ERROR_CORRECTION",
]
