"""abn: validate and format Australian Business Numbers."""

from .core import (
    ABN,
    Invalid,
    InvalidABNError,
    Reason,
    Result,
    Trusted,
    Valid,
    format_abn,
    is_valid,
    validate,
)

__version__ = "0.3.0"

__all__ = [
    "ABN",
    "Invalid",
    "InvalidABNError",
    "Reason",
    "Result",
    "Trusted",
    "Valid",
    "format_abn",
    "is_valid",
    "validate",
    "__version__",
]
