"""Loan parameters and input validation.

Rules are checked in order and the first failure wins:
1. interpreted price within [MIN_PROPERTY_PRICE, MAX_PROPERTY_PRICE]
2. down payment percentage parses and meets the price-dependent minimum
3. interest rate parses and lies strictly between 0 and MAX_INTEREST_RATE_PERCENT

Failures are returned as values, never raised, so callers can render the
message without exception plumbing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar, Optional

from .config import (
    AMORTIZATION_YEAR_OPTIONS,
    DEFAULT_AMORTIZATION_YEARS,
    JUMBO_PRICE_THRESHOLD,
    MAX_DOWN_PAYMENT_PERCENT,
    MAX_INTEREST_RATE_PERCENT,
    MAX_PROPERTY_PRICE,
    MIN_DOWN_PAYMENT_PERCENT,
    MIN_DOWN_PAYMENT_PERCENT_JUMBO,
    MIN_PROPERTY_PRICE,
    ZERO,
)
from .frequency import PaymentFrequency
from .interpreter import interpret_price, parse_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoanParameters:
    """Raw user-supplied values for one calculation request."""
    property_price: str
    down_payment_percentage: str
    interest_rate: str
    property_tax_rate: str = ""
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    amortization_years: int = DEFAULT_AMORTIZATION_YEARS

    def __post_init__(self) -> None:
        if self.amortization_years not in AMORTIZATION_YEAR_OPTIONS:
            raise ValueError(
                f"amortization_years must be one of "
                f"{', '.join(str(y) for y in AMORTIZATION_YEAR_OPTIONS)}"
            )


@dataclass(frozen=True)
class ValidationError:
    """Base for tagged validation failures."""
    reason: str

    label: ClassVar[str] = "Invalid input"

    @property
    def message(self) -> str:
        return f"{self.label}: {self.reason}"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class InvalidPrice(ValidationError):
    label: ClassVar[str] = "Invalid price"


@dataclass(frozen=True)
class InvalidDownPayment(ValidationError):
    label: ClassVar[str] = "Invalid down payment"


@dataclass(frozen=True)
class InvalidInterestRate(ValidationError):
    label: ClassVar[str] = "Invalid interest rate"


def validate(params: LoanParameters) -> Optional[ValidationError]:
    """Return the first failing rule for *params*, or None if all pass."""
    error = _check(params)
    if error is not None:
        logger.debug("Validation failed: %s", error.message)
    return error


def _check(params: LoanParameters) -> Optional[ValidationError]:
    price = interpret_price(params.property_price)
    if price < MIN_PROPERTY_PRICE:
        return InvalidPrice(f"Price must be at least ${MIN_PROPERTY_PRICE:,}")
    if price > MAX_PROPERTY_PRICE:
        return InvalidPrice(f"Price cannot exceed ${MAX_PROPERTY_PRICE:,}")

    down_payment = parse_decimal(params.down_payment_percentage)
    if down_payment is None:
        return InvalidDownPayment("Invalid down payment percentage")
    minimum = (
        MIN_DOWN_PAYMENT_PERCENT_JUMBO
        if price >= JUMBO_PRICE_THRESHOLD
        else MIN_DOWN_PAYMENT_PERCENT
    )
    if down_payment < minimum:
        return InvalidDownPayment(f"Minimum down payment is {minimum}% for this price")
    if down_payment > MAX_DOWN_PAYMENT_PERCENT:
        return InvalidDownPayment(f"Down payment cannot exceed {MAX_DOWN_PAYMENT_PERCENT}%")

    rate = parse_decimal(params.interest_rate)
    if rate is None or not ZERO < rate < MAX_INTEREST_RATE_PERCENT:
        return InvalidInterestRate(
            f"Interest rate must be between 0% and {MAX_INTEREST_RATE_PERCENT}%"
        )

    return None
