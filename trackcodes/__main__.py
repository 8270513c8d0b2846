"""trackcodes command line entry point.

    python -m trackcodes generate SKU [SKU ...] [--config PATH]
    python -m trackcodes parse CODE
    python -m trackcodes validate {qr,barcode,rfid,nfc} CODE

Output is JSON on stdout. ``parse`` and ``validate`` exit with 1 for an
invalid code.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from trackcodes.batch import BatchCoordinator
from trackcodes.classifier import classify
from trackcodes.config import load_config
from trackcodes.exceptions import TrackingCodeError
from trackcodes.generator import TrackingCodeGenerator
from trackcodes.model.enums import CodeType
from trackcodes.validation import VALIDATORS


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trackcodes",
        description="Generate and recognize inventory tracking codes.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="generate codes for one or more SKUs")
    gen.add_argument("skus", nargs="+", metavar="SKU")
    gen.add_argument("--config", type=Path, default=None, help="JSON config file")
    gen.add_argument(
        "--no-qr-image",
        action="store_true",
        help="print the QR JSON payload instead of the PNG data URL",
    )

    parse = sub.add_parser("parse", help="classify and validate a scanned string")
    parse.add_argument("code")

    val = sub.add_parser("validate", help="validate a code of a known type")
    val.add_argument("type", choices=[t.value for t in CodeType.scannable()])
    val.add_argument("code")
    return parser


def _dump(obj: Any) -> None:
    json.dump(obj, sys.stdout, ensure_ascii=False, indent=2, default=str)
    sys.stdout.write("\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point; returns the process exit code."""
    args = _build_parser().parse_args(argv)

    try:
        if args.command == "generate":
            config = load_config(args.config)
            generator = TrackingCodeGenerator(config, qr_image=not args.no_qr_image)
            batch = BatchCoordinator(
                generator, chunk_size=config.batch_size, max_workers=config.max_workers
            )
            results = batch.generate_batch(args.skus)
            _dump({sku: codes.to_dict() for sku, codes in results.items()})
            return 0

        if args.command == "parse":
            result = classify(args.code)
            _dump(result.to_dict())
            return 0 if result.is_valid else 1

        check = VALIDATORS[CodeType(args.type)](args.code)
        _dump(
            {
                "type": args.type,
                "isValid": check.is_valid,
                "error": check.error,
                "errorKind": check.error_kind.value if check.error_kind else None,
            }
        )
        return 0 if check.is_valid else 1
    except TrackingCodeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
