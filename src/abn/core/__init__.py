"""Core ABN validation: types, pure checks and the `validate` entry point."""

from .types import ABN, Invalid, InvalidABNError, Reason, Result, Trusted, Valid
from .validation import format_abn, is_valid, validate
from .validators import WEIGHTS, checksum, checksum_ok, classify, format_canonical, sanitize

__all__ = [
    "ABN",
    "Invalid",
    "InvalidABNError",
    "Reason",
    "Result",
    "Trusted",
    "Valid",
    "WEIGHTS",
    "checksum",
    "checksum_ok",
    "classify",
    "format_abn",
    "format_canonical",
    "is_valid",
    "sanitize",
    "validate",
]
