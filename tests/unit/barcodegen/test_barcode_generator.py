from io import BytesIO

import pytest
from PIL import Image

from trackcodes.barcodegen.barcode_generator import (
    UPCABarcodeGenerator,
    derive_product_code,
)
from trackcodes.config import TrackingConfig
from trackcodes.exceptions import BarcodeGenError, ContractViolation
from trackcodes.validation import validate_barcode


class TestDeriveProductCode:
    @pytest.mark.parametrize(
        "sku,expected",
        [
            ("ELEC-100", "00000100"),
            ("SKU-001", "00000001"),
            ("ABC", "00000000"),
            ("", "00000000"),
            ("1234567890", "12345678"),
            ("A1-B2-C3", "00000123"),
        ],
    )
    def test_derive(self, sku: str, expected: str) -> None:
        assert derive_product_code(sku, 8) == expected

    def test_custom_width(self) -> None:
        assert derive_product_code("ELEC-100", 5) == "00100"


class TestUPCABarcodeGenerator:
    @pytest.fixture
    def gen(self) -> UPCABarcodeGenerator:
        return UPCABarcodeGenerator()

    # === Generation ===
    def test_conformance_vector(self, gen: UPCABarcodeGenerator) -> None:
        assert gen.base("ELEC-100") == "12300000100"
        assert gen.generate("ELEC-100") == "123000001009"

    def test_deterministic(self, gen: UPCABarcodeGenerator) -> None:
        assert gen.generate("SKU-001") == gen.generate("SKU-001")

    def test_digitless_skus_collide(self, gen: UPCABarcodeGenerator) -> None:
        assert gen.generate("ABC") == gen.generate("XYZ")

    @pytest.mark.parametrize(
        "sku", ["ELEC-100", "SKU-001", "ABC", "", "99999999999999", "ТОВАР-7", "a/b?c"]
    )
    def test_round_trip(self, gen: UPCABarcodeGenerator, sku: str) -> None:
        code = gen.generate(sku)
        assert len(code) == 12 and code.isdigit()
        assert validate_barcode(code).is_valid

    def test_custom_prefix(self) -> None:
        gen = UPCABarcodeGenerator(TrackingConfig(barcode_company_prefix="0614141"))
        code = gen.generate("ELEC-100")
        assert code.startswith("06141410100")
        assert validate_barcode(code).is_valid

    def test_non_string_sku(self, gen: UPCABarcodeGenerator) -> None:
        with pytest.raises(ContractViolation):
            gen.generate(100)  # type: ignore[arg-type]

    # === Rendering ===
    def test_render_image(self, gen: UPCABarcodeGenerator) -> None:
        img = gen.render_image(gen.generate("ELEC-100"))
        assert isinstance(img, Image.Image)
        assert img.mode == "RGB"
        assert img.width > 0 and img.height > 0

    def test_render_bytes_is_png(self, gen: UPCABarcodeGenerator) -> None:
        data = gen.render_bytes("123000001009")
        assert data[:8] == b"\x89PNG\r\n\x1a\n"
        assert Image.open(BytesIO(data)).format == "PNG"

    def test_render_rejects_wrong_check_digit(self, gen: UPCABarcodeGenerator) -> None:
        with pytest.raises(BarcodeGenError, match="Not a valid UPC-A"):
            gen.render_image("123000001008")

    def test_render_rejects_garbage(self, gen: UPCABarcodeGenerator) -> None:
        with pytest.raises(BarcodeGenError):
            gen.render_image("not-a-code")

    def test_render_non_strict_placeholder(self, gen: UPCABarcodeGenerator) -> None:
        img = gen.render_image("not-a-code", strict=False)
        assert img.size == (400, 120)
        assert img.getpixel((0, 0)) == (255, 255, 255)
