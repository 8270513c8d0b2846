# RU: Доменные модели кодов отслеживания: набор кодов товара, результат проверки и результат разбора скана.
# EN: Tracking-code domain records: per-SKU code set, validator result and scan parse result (all immutable).

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, Optional

from trackcodes.exceptions import ContractViolation

from .enums import CodeType, ErrorKind

__all__ = [
    "TrackingCodeSet",
    "ValidationResult",
    "ParseResult",
]


@dataclass(frozen=True)
class TrackingCodeSet:
    """
    One code per technology for a single SKU.

    Every field is independently optional: a failed QR render does not
    invalidate the barcode. The set is never mutated; regenerate to replace it.

    Examples:
        codes = TrackingCodeSet(barcode="123000001009")
        codes.to_dict()  # {"barcode": "123000001009"}
    """

    qr: Optional[str] = None
    barcode: Optional[str] = None
    rfid: Optional[str] = None
    nfc: Optional[str] = None

    def get(self, code_type: CodeType) -> Optional[str]:
        if not code_type.is_known:
            return None
        return getattr(self, code_type.value)

    def present_types(self) -> List[CodeType]:
        return [t for t in CodeType.scannable() if self.get(t) is not None]

    @property
    def is_empty(self) -> bool:
        return not self.present_types()

    def to_dict(self) -> Dict[str, str]:
        """Wire shape: absent technologies are omitted, not null."""
        return {t.value: self.get(t) for t in self.present_types()}  # type: ignore[misc]

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "TrackingCodeSet":
        """
        Build a set from a stored/submitted mapping.

        Raises:
            ContractViolation: on unknown keys or non-string values.
        """
        if not isinstance(d, Mapping):
            raise ContractViolation(
                f"Tracking codes must be a mapping, got {type(d).__name__}"
            )
        allowed = {f.name for f in fields(cls)}
        unknown = set(d) - allowed
        if unknown:
            raise ContractViolation(
                f"Unknown tracking code field(s): {', '.join(sorted(map(str, unknown)))}"
            )
        values: Dict[str, Optional[str]] = {}
        for key, value in d.items():
            if value is not None and not isinstance(value, str):
                raise ContractViolation(
                    f"Tracking code '{key}' must be a string",
                    code_type=key,
                )
            values[key] = value
        return cls(**values)


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of one format predicate.

    Attributes:
        is_valid: True when the code passed every structural/checksum rule.
        error: Human-readable reason, only when invalid.
        error_kind: Typed reason, only when invalid.
        value: Extracted content on success (QR sku, parsed SGTIN, NFC sku).
    """

    is_valid: bool
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    value: Any = None

    def __post_init__(self) -> None:
        if self.is_valid and (self.error is not None or self.error_kind is not None):
            raise ValueError("A valid result cannot carry an error")
        if not self.is_valid and not self.error:
            raise ValueError("An invalid result must carry an error message")

    @classmethod
    def ok(cls, value: Any = None) -> "ValidationResult":
        return cls(is_valid=True, value=value)

    @classmethod
    def fail(
        cls, error: str, kind: ErrorKind = ErrorKind.MALFORMED_INPUT
    ) -> "ValidationResult":
        return cls(is_valid=False, error=error, error_kind=kind)


@dataclass(frozen=True)
class ParseResult:
    """
    Tagged result of classifying one scanned string.

    Invariants (checked on construction):
        - is_valid implies error is None
        - data is present only when is_valid
        - an invalid result always carries an error
    """

    type: CodeType
    is_valid: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, CodeType):
            raise ValueError(f"Invalid code type: {self.type!r}")
        if self.is_valid:
            if self.error is not None or self.error_kind is not None:
                raise ValueError("A valid parse result cannot carry an error")
            if not self.type.is_known:
                raise ValueError("An unknown code can never be valid")
        else:
            if self.data is not None:
                raise ValueError("An invalid parse result cannot carry data")
            if not self.error:
                raise ValueError("An invalid parse result must carry an error")

    @property
    def sku(self) -> Optional[str]:
        """SKU embedded in the code itself (QR payload, NFC product link)."""
        if self.data is None:
            return None
        sku = self.data.get("sku")
        return sku if isinstance(sku, str) else None

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape used by the HTTP collaborator."""
        dct: Dict[str, Any] = {"type": self.type.value, "isValid": self.is_valid}
        if self.data is not None:
            dct["data"] = dict(self.data)
        if self.error is not None:
            dct["error"] = self.error
        if self.error_kind is not None:
            dct["errorKind"] = self.error_kind.value
        return dct

    def __str__(self) -> str:
        state = "valid" if self.is_valid else f"invalid: {self.error}"
        return f"ParseResult({self.type.value}, {state})"
