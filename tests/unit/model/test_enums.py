import pytest
from qrcode import constants

from trackcodes.model.enums import (
    DEFAULT_QR_ERROR_CORRECTION,
    CodeType,
    ErrorKind,
    QRErrorCorrection,
)


def test_codetype_values_and_known() -> None:
    assert [t.value for t in CodeType] == ["qr", "barcode", "rfid", "nfc", "unknown"]
    assert all(t.is_known for t in CodeType.scannable())
    assert not CodeType.UNKNOWN.is_known
    assert CodeType.UNKNOWN not in CodeType.scannable()


def test_codetype_priority_order() -> None:
    assert CodeType.scannable() == (
        CodeType.QR,
        CodeType.BARCODE,
        CodeType.RFID,
        CodeType.NFC,
    )


def test_codetype_is_str() -> None:
    assert CodeType("rfid") is CodeType.RFID
    assert CodeType.NFC == "nfc"


@pytest.mark.parametrize("code_type", list(CodeType))
def test_codetype_localized_name(code_type: CodeType) -> None:
    assert code_type.localized_name("ru")
    assert code_type.localized_name("en")
    assert code_type.localized_name("ru") != code_type.localized_name("en")


def test_error_kind_values() -> None:
    assert ErrorKind.CHECKSUM_MISMATCH.value == "checksum_mismatch"
    assert {k.value for k in ErrorKind} == {
        "malformed_input",
        "checksum_mismatch",
        "unrecognized_format",
    }


def test_qr_error_correction_constants() -> None:
    assert QRErrorCorrection.L.qrcode_constant == constants.ERROR_CORRECT_L
    assert QRErrorCorrection.M.qrcode_constant == constants.ERROR_CORRECT_M
    assert QRErrorCorrection.Q.qrcode_constant == constants.ERROR_CORRECT_Q
    assert QRErrorCorrection.H.qrcode_constant == constants.ERROR_CORRECT_H
    assert DEFAULT_QR_ERROR_CORRECTION is QRErrorCorrection.M


def test_qr_error_correction_invalid() -> None:
    with pytest.raises(ValueError):
        QRErrorCorrection("X")
