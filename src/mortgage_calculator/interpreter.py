"""Price interpretation.

Users type prices in shorthand: "450" means 450 000, "450.5" means
450.5 million, "450000" is taken literally.  The rules below are business
logic and must stay exactly as they are.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

from .config import (
    MILLIONS_MULTIPLIER,
    SHORTHAND_PRICE_CEILING,
    THOUSANDS_MULTIPLIER,
    THOUSANDS_SHORTHAND_FLOOR,
    ZERO,
)


def parse_decimal(raw: str) -> Optional[Decimal]:
    """Return *raw* as a finite Decimal, or None if it is not a number.

    Underscore digit grouping ("1_000") is not a number here.
    """
    if isinstance(raw, str) and "_" in raw:
        return None
    try:
        value = Decimal(raw.strip())
    except (InvalidOperation, AttributeError):
        return None
    if not value.is_finite():
        return None
    return value


def interpret_price(raw: str) -> Decimal:
    """Return the canonical currency amount for a raw price string.

    Unparsable input yields 0.
    """
    value = parse_decimal(raw)
    if value is None:
        return ZERO

    if value < SHORTHAND_PRICE_CEILING:
        if "." in raw:
            return value * MILLIONS_MULTIPLIER
        if value >= THOUSANDS_SHORTHAND_FLOOR:
            return value * THOUSANDS_MULTIPLIER
    return value
