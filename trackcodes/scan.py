"""
Scan lookup contract between the classifier, the product catalog and the
HTTP layer.

    invalid scan                      -> 400 with the parse error
    valid scan, no matching product   -> 404
    catalog or core failure           -> 500
    otherwise                         -> 200 with the product

The catalog is an external collaborator; anything implementing
``ProductCatalog`` can be plugged in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict, Optional, Protocol

from trackcodes.classifier import classify
from trackcodes.exceptions import TrackingCodeError
from trackcodes.model.enums import CodeType
from trackcodes.model.tracking import ParseResult

logger = logging.getLogger(__name__)

__all__ = [
    "ProductCatalog",
    "ScanOutcome",
    "resolve_scan",
]


class ProductCatalog(Protocol):
    """Read side of the product catalog used after a scan is classified."""

    def get_product_by_sku(self, sku: str) -> Optional[Any]: ...

    def find_by_tracking_code(self, code: str, code_type: CodeType) -> Optional[Any]: ...


@dataclass(frozen=True)
class ScanOutcome:
    status: HTTPStatus
    parse_result: Optional[ParseResult] = None
    product: Any = None
    error: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == HTTPStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready response body."""
        body: Dict[str, Any] = {"success": self.ok}
        if self.ok:
            body["data"] = self.product
            if self.parse_result is not None:
                body["codeType"] = self.parse_result.type.value
        else:
            body["error"] = self.error
            body["message"] = self.message
        return body


def _lookup(catalog: ProductCatalog, raw: str, parsed: ParseResult) -> Optional[Any]:
    if parsed.sku is not None:
        return catalog.get_product_by_sku(parsed.sku)
    # detected type first, then the rest: stored codes may predate a format change
    order = [parsed.type] + [t for t in CodeType.scannable() if t is not parsed.type]
    for code_type in order:
        product = catalog.find_by_tracking_code(raw, code_type)
        if product is not None:
            return product
    return None


def resolve_scan(raw: str, catalog: ProductCatalog) -> ScanOutcome:
    """
    Classify ``raw`` and look the product up in ``catalog``.

    Never raises: every failure is mapped to a status.
    """
    try:
        parsed = classify(raw)
    except TrackingCodeError as e:
        logger.error("Scan rejected by contract check: %s", e)
        return ScanOutcome(
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            error="Failed to scan product",
            message=e.message,
        )

    if not parsed.is_valid:
        return ScanOutcome(
            status=HTTPStatus.BAD_REQUEST,
            parse_result=parsed,
            error="Invalid tracking code",
            message=parsed.error,
        )

    try:
        product = _lookup(catalog, raw, parsed)
    except Exception as e:
        logger.error("Catalog lookup failed for %s scan: %s", parsed.type.value, e)
        return ScanOutcome(
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            parse_result=parsed,
            error="Failed to scan product",
            message=str(e),
        )

    if product is None:
        return ScanOutcome(
            status=HTTPStatus.NOT_FOUND,
            parse_result=parsed,
            error="Product not found",
            message="No product found with the provided tracking code",
        )
    return ScanOutcome(status=HTTPStatus.OK, parse_result=parsed, product=product)
