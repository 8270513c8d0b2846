"""Domain model: code types, error kinds and immutable result records."""

from .enums import CodeType, ErrorKind, QRErrorCorrection
from .tracking import ParseResult, TrackingCodeSet, ValidationResult

__all__ = [
    "CodeType",
    "ErrorKind",
    "QRErrorCorrection",
    "ParseResult",
    "TrackingCodeSet",
    "ValidationResult",
]
