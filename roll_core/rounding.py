"""Rounding rules used to compare accumulated substat values."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Optional

from .errors import InvalidTargetError


class RoundingMode(Enum):
    """Precision an accumulated substat value is displayed with."""

    ONE_DECIMAL = "one-decimal"
    WHOLE_NUMBER = "whole-number"

    @property
    def quantum(self) -> Decimal:
        return Decimal("0.1") if self is RoundingMode.ONE_DECIMAL else Decimal("1")


def round_value(value: Decimal, mode: RoundingMode) -> Decimal:
    """Round ``value`` half away from zero to the precision of ``mode``.

    Raises ``decimal.InvalidOperation`` when the result needs more digits than
    the current decimal context allows.
    """

    return value.quantize(mode.quantum, rounding=ROUND_HALF_UP)


def _parse_decimal(value: object) -> Optional[Decimal]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float, str)):
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not parsed.is_finite():
        return None
    return parsed


def coerce_target(value: object, kind: Optional[str] = None) -> Decimal:
    """Convert an observed amount into an exact decimal.

    Parameters
    ----------
    value:
        Number or numeric string as stored by the caller, e.g. ``"12.8"``.
    kind:
        Optional substat kind, only used to label the error.

    Raises
    ------
    InvalidTargetError
        If the value is not a finite number.
    """

    parsed = _parse_decimal(value)
    if parsed is None:
        raise InvalidTargetError(value, kind)
    return parsed


def coerce_candidate(value: object) -> Decimal:
    """Convert a candidate roll value into an exact, non-negative decimal."""

    parsed = _parse_decimal(value)
    if parsed is None:
        raise ValueError(f"Candidate roll {value!r} is not a finite number.")
    if parsed < 0:
        raise ValueError(f"Candidate roll {value!r} must be non-negative.")
    return parsed
