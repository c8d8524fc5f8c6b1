"""
The single validation entry point and its convenience adapters.

Every public way of checking an ABN (`validate`, `is_valid`, `format_abn`,
`ABN.parse`, `ABN.validate`) goes through `validate` below, so identical input
always gives an identical outcome no matter how it is called.
"""

from __future__ import annotations

import logging
from typing import Optional

from .types import ABN, Invalid, Reason, Result, Trusted, Valid
from .validators import checksum_ok, classify, sanitize

logger = logging.getLogger(__name__)


def validate(raw: object, *, allow_group: bool = True) -> Result:
    """
    Validate and normalise a candidate ABN.

    Order of operations:
      1) sanitize  -> reject empty/non-text input and foreign characters
      2) classify  -> 11 digits, or 14 digits with a non-zero group suffix
      3) checksum  -> weighted sum of the 11-digit core modulo 89 must be 0
      4) format    -> canonical 'DD DDD DDD DDD[ GGG]' via the returned `ABN`

    Never raises. A `Trusted` wrapper is returned as `Valid` without re-running
    the checksum, unless it holds a group ABN and `allow_group` is False.

    Args:
        raw: Anything. Only `str` values can be valid.
        allow_group: Accept the 14-digit group form.

    Returns:
        `Valid(abn)` on success, otherwise `Invalid(reason, message)`.
    """
    if isinstance(raw, Trusted):
        if raw.abn.is_group and not allow_group:
            return _reject(classify(raw.abn.core + raw.abn.group, allow_group=False))
        return Valid(raw.abn)

    digits = sanitize(raw)
    if isinstance(digits, Invalid):
        return _reject(digits)

    parts = classify(digits, allow_group=allow_group)
    if isinstance(parts, Invalid):
        return _reject(parts)
    core, group = parts

    if not checksum_ok(core):
        return _reject(Invalid(Reason.CHECKSUM_MISMATCH, "ABN checksum does not match"))

    return Valid(ABN(core=core, group=group))


def _reject(result: Invalid) -> Invalid:
    logger.debug("ABN rejected: %s", result.reason.value)
    return result


def is_valid(raw: object, *, allow_group: bool = True) -> bool:
    return validate(raw, allow_group=allow_group).ok


def format_abn(raw: object, *, allow_group: bool = True) -> Optional[str]:
    """Return the canonical ABN string, or None if `raw` is not a valid ABN."""
    return validate(raw, allow_group=allow_group).canonical
