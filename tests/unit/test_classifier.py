import pytest

from trackcodes.barcodegen.qr_generator import QRCodeGenerator
from trackcodes.classifier import (
    UNRECOGNIZED_FORMAT_ERROR,
    classify,
    detect_code_type,
    parse_tracking_code,
)
from trackcodes.exceptions import ContractViolation
from trackcodes.generator import TrackingCodeGenerator
from trackcodes.model.enums import CodeType, ErrorKind


class TestDetectCodeType:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ('{"type":"product"}', CodeType.QR),
            ("{", CodeType.QR),
            ("data:image/png;base64,AAAA", CodeType.QR),
            ("123000001009", CodeType.BARCODE),
            ("123456789012", CodeType.BARCODE),
            ("urn:epc:id:sgtin:0123456.ELEC1.0ABCDEF1", CodeType.RFID),
            ("urn:epc:id:sgtin:garbage", CodeType.RFID),
            ("https://inventory.app/product/A", CodeType.NFC),
            ("httpfoo", CodeType.NFC),
            ("12300000100", CodeType.UNKNOWN),
            ("1230000010090", CodeType.UNKNOWN),
            ("urn:epc:id:sgln:1", CodeType.UNKNOWN),
            ("ftp://inventory.app", CodeType.UNKNOWN),
            ("", CodeType.UNKNOWN),
        ],
    )
    def test_triage(self, raw: str, expected: CodeType) -> None:
        assert detect_code_type(raw) is expected


class TestClassify:
    def test_valid_barcode(self) -> None:
        result = classify("123000001009")
        assert result.type is CodeType.BARCODE
        assert result.is_valid
        assert result.data == {"barcode": "123000001009"}

    def test_barcode_with_wrong_check_digit(self) -> None:
        result = classify("123456789012")
        assert result.type is CodeType.BARCODE
        assert not result.is_valid
        assert result.error == "Invalid barcode check digit"
        assert result.error_kind is ErrorKind.CHECKSUM_MISMATCH
        assert result.data is None

    def test_rfid_data(self) -> None:
        result = classify("urn:epc:id:sgtin:0123456.ELEC1.0ABCDEF1")
        assert result.is_valid
        assert result.data == {
            "rfid": "urn:epc:id:sgtin:0123456.ELEC1.0ABCDEF1",
            "company_prefix": "0123456",
            "item_reference": "ELEC1",
            "serial": "0ABCDEF1",
        }

    def test_malformed_rfid(self) -> None:
        result = classify("urn:epc:id:sgtin:garbage")
        assert result.type is CodeType.RFID
        assert not result.is_valid
        assert result.error == "Invalid RFID EPC format"

    def test_nfc_data(self) -> None:
        result = classify("https://inventory.app/product/ELEC-100")
        assert result.is_valid
        assert result.data == {
            "nfc": "https://inventory.app/product/ELEC-100",
            "sku": "ELEC-100",
        }
        assert result.sku == "ELEC-100"

    def test_nfc_other_path_has_no_sku(self) -> None:
        result = classify("https://inventory.app/")
        assert result.is_valid
        assert result.data == {"nfc": "https://inventory.app/"}

    def test_qr_payload(self) -> None:
        result = classify(QRCodeGenerator().build_payload("ELEC-100"))
        assert result.type is CodeType.QR
        assert result.is_valid
        assert result.data == {"sku": "ELEC-100"}

    def test_qr_image_is_recognized_but_not_decoded(self) -> None:
        result = classify("data:image/png;base64,iVBORw0KGgo=")
        assert result.type is CodeType.QR
        assert not result.is_valid
        assert result.error == "Invalid QR code format"

    def test_deeply_nested_qr_payload_does_not_raise(self) -> None:
        result = classify('{"a":' + "[" * 100000 + "]" * 100000 + "}")
        assert result.type is CodeType.QR
        assert not result.is_valid
        assert result.error == "Invalid QR code format"

    def test_nfc_with_control_character(self) -> None:
        result = classify("https://a\x00b/")
        assert result.type is CodeType.NFC
        assert not result.is_valid
        assert result.error == "Invalid NFC URL format"

    def test_qr_wrong_type(self) -> None:
        result = classify('{"type":"order","sku":"A"}')
        assert result.type is CodeType.QR
        assert result.error == "Invalid QR code type"

    @pytest.mark.parametrize("raw", ["not-a-code-at-all", "", "   ", "12345", "\x00\xff"])
    def test_unknown(self, raw: str) -> None:
        result = classify(raw)
        assert result.type is CodeType.UNKNOWN
        assert not result.is_valid
        assert result.error == UNRECOGNIZED_FORMAT_ERROR
        assert result.error_kind is ErrorKind.UNRECOGNIZED_FORMAT
        assert result.data is None

    def test_expected_type_skips_triage(self) -> None:
        result = classify("12300000100", expected=CodeType.BARCODE)
        assert result.type is CodeType.BARCODE
        assert result.error == "Barcode must be 12 digits"

    def test_expected_type_as_string(self) -> None:
        assert classify("123000001009", expected="barcode").is_valid  # type: ignore[arg-type]

    def test_expected_type_invalid(self) -> None:
        with pytest.raises(ContractViolation):
            classify("123000001009", expected="ean")  # type: ignore[arg-type]

    @pytest.mark.parametrize("raw", [None, 123000001009, b"123000001009"])
    def test_non_string(self, raw: object) -> None:
        with pytest.raises(ContractViolation):
            classify(raw)  # type: ignore[arg-type]

    def test_alias(self) -> None:
        assert parse_tracking_code is classify


class TestGeneratedCodesClassifyBack:
    @pytest.fixture(scope="class")
    def gen(self) -> TrackingCodeGenerator:
        return TrackingCodeGenerator()

    @pytest.mark.parametrize("sku", ["ELEC-100", "SKU-001", "A", "weird sku/1"])
    def test_disambiguation(self, gen: TrackingCodeGenerator, sku: str) -> None:
        assert classify(gen.generate_barcode(sku)).type is CodeType.BARCODE
        assert classify(gen.generate_rfid_code(sku)).type is CodeType.RFID
        assert classify(gen.generate_nfc_code(sku)).type is CodeType.NFC
        assert classify(gen.qr.build_payload(sku)).type is CodeType.QR
        for code in (
            gen.generate_barcode(sku),
            gen.generate_rfid_code(sku),
            gen.generate_nfc_code(sku),
            gen.qr.build_payload(sku),
        ):
            assert classify(code).is_valid

    def test_nfc_and_qr_carry_the_sku(self, gen: TrackingCodeGenerator) -> None:
        assert classify(gen.generate_nfc_code("weird sku/1")).sku == "weird sku/1"
        assert classify(gen.qr.build_payload("weird sku/1")).sku == "weird sku/1"
