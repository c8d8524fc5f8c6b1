"""
Result types returned by the validator.

A validation call produces exactly one of two frozen records:

- `Valid`   -> carries the validated `ABN` (core digits + optional group suffix)
- `Invalid` -> carries a machine-readable `Reason` and a human-readable message

Both are truthy/falsy according to the outcome, so callers that only care about
"is it an ABN?" can write `if validate(x): ...` while callers that need the
failure reason can branch on `result.reason`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Reason(str, Enum):
    """Why a value is not an ABN. Listed in detection order."""
    EMPTY_INPUT = "EmptyInput"
    INVALID_CHARACTERS = "InvalidCharacters"
    INVALID_LENGTH = "InvalidLength"
    INVALID_GROUP_NUMBER = "InvalidGroupNumber"
    CHECKSUM_MISMATCH = "ChecksumMismatch"


@dataclass(frozen=True)
class ABN:
    """
    A validated Australian Business Number.

    Attributes:
        core:  The 11 checksum-bearing digits, no separators.
        group: Optional 3-digit group suffix (never "000").

    Instances are trusted: rendering never re-runs the checksum. Build them with
    `ABN.parse` or `validate`, not by hand.
    """
    core: str
    group: Optional[str] = None

    @property
    def canonical(self) -> str:
        from .validators import format_canonical
        return format_canonical(self.core, self.group)

    @property
    def is_group(self) -> bool:
        return self.group is not None

    def __str__(self) -> str:
        return self.canonical

    @staticmethod
    def validate(raw: object) -> "Result":
        """Static spelling of `abn.validate`."""
        from .validation import validate
        return validate(raw)

    @classmethod
    def parse(cls, raw: object) -> "ABN":
        """
        Validate `raw` and return the ABN, raising on failure.

        Raises:
            InvalidABNError: if `raw` is not a valid ABN.
        """
        from .validation import validate
        result = validate(raw)
        if isinstance(result, Invalid):
            raise InvalidABNError(result)
        return result.abn


@dataclass(frozen=True)
class Trusted:
    """Marks an `ABN` as already validated so `validate` can skip the checksum."""
    abn: ABN


@dataclass(frozen=True)
class Valid:
    abn: ABN

    ok = True
    reason = None

    @property
    def canonical(self) -> str:
        return self.abn.canonical

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    """
    A rejected value.

    Attributes:
        reason:  Which check failed.
        message: Short explanation suitable for display.
        length:  Observed digit count, when the failure concerns length.
    """
    reason: Reason
    message: str
    length: Optional[int] = None

    ok = False
    canonical = None

    def __bool__(self) -> bool:
        return False


Result = Union[Valid, Invalid]


class InvalidABNError(ValueError):
    """Raised by the exception-style adapters; wraps the `Invalid` result."""

    def __init__(self, result: Invalid) -> None:
        super().__init__(result.message)
        self.result = result

    @property
    def reason(self) -> Reason:
        return self.result.reason
