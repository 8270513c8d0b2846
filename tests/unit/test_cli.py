import json
from pathlib import Path
from unittest.mock import patch

import pytest

from trackcodes.__main__ import main
from trackcodes.barcodegen.qr_generator import QRCodeGenerator
from trackcodes.classifier import classify


def run(capsys: pytest.CaptureFixture, *argv: str) -> tuple:
    code = main(list(argv))
    out = capsys.readouterr().out
    return code, json.loads(out) if out.strip() else None


class TestGenerate:
    def test_generate(self, capsys: pytest.CaptureFixture, tmp_path: Path) -> None:
        code, out = run(
            capsys, "generate", "ELEC-100", "ELEC-100", "--config", str(tmp_path / "none.json")
        )
        assert code == 0
        assert list(out) == ["ELEC-100"]
        assert out["ELEC-100"]["barcode"] == "123000001009"
        assert out["ELEC-100"]["qr"].startswith("data:image/png;base64,")

    def test_generate_payload_only(
        self, capsys: pytest.CaptureFixture, tmp_path: Path
    ) -> None:
        with patch.object(
            QRCodeGenerator, "build_payload", autospec=True, side_effect=QRCodeGenerator.build_payload
        ) as build, patch.object(QRCodeGenerator, "to_data_url") as encode:
            code, out = run(
                capsys, "generate", "A", "--no-qr-image", "--config", str(tmp_path / "none.json")
            )
        assert code == 0
        assert json.loads(out["A"]["qr"])["sku"] == "A"
        assert classify(out["A"]["qr"]).is_valid
        encode.assert_not_called()
        assert build.call_count == 1

    def test_generate_with_config(
        self, capsys: pytest.CaptureFixture, tmp_path: Path
    ) -> None:
        path = tmp_path / "trackcodes.json"
        path.write_text(json.dumps({"nfc_base_url": "https://shop.example.com"}), encoding="utf-8")
        code, out = run(capsys, "generate", "A", "--config", str(path))
        assert code == 0
        assert out["A"]["nfc"] == "https://shop.example.com/product/A"

    def test_bad_config_exits_2(
        self, capsys: pytest.CaptureFixture, tmp_path: Path
    ) -> None:
        path = tmp_path / "trackcodes.json"
        path.write_text(json.dumps({"qr_size": 1}), encoding="utf-8")
        assert main(["generate", "A", "--config", str(path)]) == 2
        assert "qr_size" in capsys.readouterr().err


class TestParse:
    def test_valid(self, capsys: pytest.CaptureFixture) -> None:
        code, out = run(capsys, "parse", "123000001009")
        assert code == 0
        assert out == {"type": "barcode", "isValid": True, "data": {"barcode": "123000001009"}}

    def test_invalid(self, capsys: pytest.CaptureFixture) -> None:
        code, out = run(capsys, "parse", "not-a-code-at-all")
        assert code == 1
        assert out["type"] == "unknown"
        assert out["error"] == "unrecognized format"


class TestValidate:
    def test_valid(self, capsys: pytest.CaptureFixture) -> None:
        code, out = run(capsys, "validate", "rfid", "urn:epc:id:sgtin:0123456.ELEC1.0ABCDEF1")
        assert code == 0
        assert out["isValid"] is True

    def test_invalid(self, capsys: pytest.CaptureFixture) -> None:
        code, out = run(capsys, "validate", "barcode", "123456789012")
        assert code == 1
        assert out["errorKind"] == "checksum_mismatch"

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(SystemExit):
            main(["validate", "ean", "1"])
