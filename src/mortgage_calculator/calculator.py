"""Amortization engine.

All monetary values use decimal.Decimal — float is forbidden.
The schedule is kept at full precision; rounding to cents happens only when
a value is displayed or exported.  Drift left on the final balance is
expected and is not corrected.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .config import HUNDRED, ZERO
from .frequency import PaymentFrequency

# Accelerated payments spread the monthly-equivalent amount over the year
_MONTHS_PER_YEAR = Decimal(12)


@dataclass(frozen=True)
class AmortizationEntry:
    payment_number: int
    payment: Decimal
    principal_paid: Decimal
    interest_paid: Decimal
    remaining_balance: Decimal
    cumulative_interest: Decimal


@dataclass(frozen=True)
class AmortizationResult:
    periodic_payment: Decimal
    total_interest: Decimal
    schedule: tuple[AmortizationEntry, ...]


def periodic_rate(annual_rate_percent: Decimal, frequency: PaymentFrequency) -> Decimal:
    """Annual percentage rate → rate applied once per scheduled payment."""
    return annual_rate_percent / HUNDRED / Decimal(frequency.payments_per_year)


def compute_periodic_payment(
    principal: Decimal,
    annual_rate_percent: Decimal,
    years: int,
    frequency: PaymentFrequency,
) -> Decimal:
    """Return the payment made every period.

    Uses the standard reducing-balance formula:
        payment = P * r * (1 + r)^n / ((1 + r)^n - 1)

    Special case: if the rate is 0, payment = P / n.
    Accelerated frequencies start from the monthly payment and scale it by
    12 / payments_per_year.
    """
    if years <= 0:
        raise ValueError("years must be > 0")
    if principal < ZERO:
        raise ValueError("principal must be >= 0")
    if annual_rate_percent < ZERO:
        raise ValueError("annual_rate_percent must be >= 0")

    basis = PaymentFrequency.MONTHLY if frequency.is_accelerated else frequency
    r = periodic_rate(annual_rate_percent, basis)
    n = years * basis.payments_per_year

    if r == ZERO:
        payment = principal / Decimal(n)
    else:
        factor = (1 + r) ** n
        payment = principal * (r * factor) / (factor - 1)

    if frequency.is_accelerated:
        payment = payment * _MONTHS_PER_YEAR / Decimal(frequency.payments_per_year)
    return payment


def build_amortization_schedule(
    principal: Decimal,
    payment: Decimal,
    rate_per_period: Decimal,
    number_of_payments: int,
) -> list[AmortizationEntry]:
    """Build the full payment-by-payment schedule for a fixed payment."""
    rows: list[AmortizationEntry] = []
    balance = principal
    cumulative_interest = ZERO

    for number in range(1, number_of_payments + 1):
        interest = balance * rate_per_period
        principal_component = payment - interest
        balance -= principal_component
        cumulative_interest += interest

        rows.append(
            AmortizationEntry(
                payment_number=number,
                payment=payment,
                principal_paid=principal_component,
                interest_paid=interest,
                remaining_balance=balance,
                cumulative_interest=cumulative_interest,
            )
        )

    return rows


def compute_amortization(
    principal: Decimal,
    annual_rate_percent: Decimal,
    years: int,
    frequency: PaymentFrequency,
) -> AmortizationResult:
    """Compute the periodic payment, total interest and full schedule.

    total_interest comes from the nominal payment (payment * n - principal),
    not from summing the schedule; the two differ slightly for accelerated
    frequencies.
    """
    payment = compute_periodic_payment(principal, annual_rate_percent, years, frequency)
    n = years * frequency.payments_per_year
    schedule = build_amortization_schedule(
        principal, payment, periodic_rate(annual_rate_percent, frequency), n
    )
    return AmortizationResult(
        periodic_payment=payment,
        total_interest=payment * Decimal(n) - principal,
        schedule=tuple(schedule),
    )
