"""Mortgage insurance premium, sized from loan-to-value."""
from __future__ import annotations

from decimal import Decimal

from .config import (
    HUNDRED,
    INSURANCE_FALLBACK_RATE,
    INSURANCE_FREE_DOWN_PAYMENT,
    INSURANCE_TIERS,
    ZERO,
)


def loan_to_value(down_payment_percent: Decimal) -> Decimal:
    """Fraction of the price financed, e.g. 0.9 for a 10% down payment."""
    return (HUNDRED - down_payment_percent) / HUNDRED


def insurance_rate(down_payment_percent: Decimal) -> Decimal:
    """Premium rate for the down payment tier.

    Anything below the lowest tier falls through to the 4% rate.
    """
    for floor, rate in INSURANCE_TIERS:
        if down_payment_percent >= floor:
            return rate
    return INSURANCE_FALLBACK_RATE


def calculate_insurance_premium(price: Decimal, down_payment_percent: Decimal) -> Decimal:
    """Return the one-off insurance premium, or 0 when none is required."""
    if down_payment_percent >= INSURANCE_FREE_DOWN_PAYMENT:
        return ZERO
    return price * loan_to_value(down_payment_percent) * insurance_rate(down_payment_percent)
