"""
Pure building blocks for ABN validation.

Why this file exists
--------------------
An ABN is self-checking: the ATO publishes a weighted mod-89 checksum that rejects
nearly all typos, including every swap of two adjacent (different) digits. The
functions here implement each stage separately so they can be tested on their own
and composed by `abn.core.validation.validate`.

Design principles
-----------------
- **Pure functions**: no globals besides the constant weight table.
- **Cheap rejection**: the character check is a single compiled regex, and digits
  are only turned into integers once the length is known to be right.
- **Typed failures**: stages return an `Invalid` record instead of raising, so the
  caller can short-circuit on the first failure.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple, Union

from .types import Invalid, Reason

# Weighting factors from the ATO ABN format description, index-for-index.
WEIGHTS: Tuple[int, ...] = (10, 1, 3, 5, 7, 9, 11, 13, 15, 17, 19)

MODULUS = 89
CORE_LENGTH = 11
GROUP_LENGTH = CORE_LENGTH + 3

# ASCII only: no Unicode digits or exotic whitespace.
_ALLOWED = re.compile(r"[0-9\s]*", re.ASCII)
_WHITESPACE = re.compile(r"\s+", re.ASCII)


def sanitize(value: object) -> Union[str, Invalid]:
    """
    Turn an untrusted value into a pure digit string.

    Examples:
      ' 31 103 572 158 ' -> '31103572158'
      '31\\t103 572158'   -> '31103572158'
      None / 42 / '   '  -> Invalid(EmptyInput)
      '31-103-572-158'   -> Invalid(InvalidCharacters)
    """
    if not isinstance(value, str) or not value.strip():
        return Invalid(Reason.EMPTY_INPUT, "ABN is empty")

    if _ALLOWED.fullmatch(value) is None:
        return Invalid(Reason.INVALID_CHARACTERS, "ABN contains invalid characters")

    return _WHITESPACE.sub("", value)


def classify(digits: str, allow_group: bool = True) -> Union[Tuple[str, Optional[str]], Invalid]:
    """
    Split a digit string into (core, group).

    11 digits are a plain ABN. 14 digits are a group ABN whose last three digits
    number the group member; numbering starts at 001, so "000" is rejected.
    """
    n = len(digits)
    if n == CORE_LENGTH:
        return digits, None

    if allow_group and n == GROUP_LENGTH:
        core, group = digits[:CORE_LENGTH], digits[CORE_LENGTH:]
        if group == "000":
            return Invalid(Reason.INVALID_GROUP_NUMBER, "ABN group number cannot be 000")
        return core, group

    expected = f"{CORE_LENGTH} or {GROUP_LENGTH}" if allow_group else str(CORE_LENGTH)
    return Invalid(
        Reason.INVALID_LENGTH,
        f"ABNs are {expected} digits, not {n}",
        length=n,
    )


def checksum(core: str) -> int:
    """
    Return the ABN check remainder for an 11-digit core (0 means valid).

    Steps:
      1) Subtract 1 from the leftmost digit (0 becomes -1; the sign is kept).
      2) Multiply each digit by its weight from `WEIGHTS`.
      3) Sum the 11 products.
      4) Take the sum modulo 89. Python's % already lands in [0, 89).

    Raises:
        ValueError: if `core` is not exactly 11 ASCII digits.
    """
    if len(core) != CORE_LENGTH or not core.isascii() or not core.isdigit():
        raise ValueError(f"expected {CORE_LENGTH} digits, got {core!r}")

    digits = [ord(ch) - 48 for ch in core]  # '0' -> 48
    digits[0] -= 1

    total = sum(d * w for d, w in zip(digits, WEIGHTS))
    return total % MODULUS


def checksum_ok(core: str) -> bool:
    return checksum(core) == 0


def format_canonical(core: str, group: Optional[str] = None) -> str:
    """
    Render a validated core as 'DD DDD DDD DDD', plus ' GGG' for a group suffix.

    No checks are made here; callers pass digits that already passed `checksum_ok`.
    """
    text = f"{core[0:2]} {core[2:5]} {core[5:8]} {core[8:11]}"
    if group is not None:
        text = f"{text} {group}"
    return text
