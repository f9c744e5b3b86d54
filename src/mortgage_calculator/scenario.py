"""Scenario calculation, A/B comparison and rate stress testing.

Every call is a pure transformation of its LoanParameters: nothing is cached
and no state is shared between scenarios.  Comparison and stress testing are
just repeated calls into the same pipeline.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from .calculator import AmortizationEntry, compute_amortization, compute_periodic_payment
from .config import HUNDRED, INSURANCE_FREE_DOWN_PAYMENT, STRESS_RATE_OFFSETS, ZERO
from .frequency import PaymentFrequency
from .insurance import calculate_insurance_premium
from .interpreter import interpret_price, parse_decimal
from .validator import LoanParameters, ValidationError, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BreakdownSlice:
    name: str
    value: Decimal
    percentage: Optional[int]  # None when every slice is zero


@dataclass(frozen=True)
class ScenarioResult:
    # Inputs echoed back
    property_price: Decimal
    down_payment: Decimal
    principal: Decimal
    annual_interest_rate: Decimal
    payment_frequency: PaymentFrequency
    amortization_years: int
    # Outputs
    periodic_payment: Decimal
    total_interest: Decimal
    mortgage_insurance: Decimal     # one-off premium, 0 when not required
    annual_property_tax: Decimal
    schedule: tuple[AmortizationEntry, ...]

    @property
    def number_of_payments(self) -> int:
        return self.amortization_years * self.payment_frequency.payments_per_year

    @property
    def total_cost(self) -> Decimal:
        return self.periodic_payment * Decimal(self.number_of_payments)

    @property
    def periodic_property_tax(self) -> Decimal:
        return self.annual_property_tax / Decimal(self.payment_frequency.payments_per_year)

    @property
    def total_periodic_payment(self) -> Decimal:
        """Loan payment plus the property tax share of each period."""
        return self.periodic_payment + self.periodic_property_tax

    def breakdown(self) -> list[BreakdownSlice]:
        """Numeric data for a principal / interest / tax / insurance chart."""
        parts = [
            ("Principal", self.principal),
            ("Interest", self.total_interest),
            ("Property Tax", self.annual_property_tax * Decimal(self.amortization_years)),
            ("Insurance", self.mortgage_insurance),
        ]
        total = sum((value for _, value in parts), ZERO)
        return [
            BreakdownSlice(
                name=name,
                value=value,
                percentage=_share(value, total) if total > ZERO else None,
            )
            for name, value in parts
        ]


def _share(value: Decimal, total: Decimal) -> int:
    """Whole-percent share of *total*, rounded half away from zero."""
    return int((value / total * HUNDRED).quantize(Decimal(1), rounding=ROUND_HALF_UP))


ScenarioOutcome = Union[ScenarioResult, ValidationError]


@dataclass(frozen=True)
class ScenarioComparison:
    scenario_a: ScenarioOutcome
    scenario_b: ScenarioOutcome

    @property
    def both_succeeded(self) -> bool:
        return isinstance(self.scenario_a, ScenarioResult) and isinstance(
            self.scenario_b, ScenarioResult
        )

    @property
    def payment_difference(self) -> Optional[Decimal]:
        """Periodic payment of B minus A, or None if either failed."""
        if not self.both_succeeded:
            return None
        return self.scenario_b.periodic_payment - self.scenario_a.periodic_payment  # type: ignore[union-attr]

    @property
    def interest_difference(self) -> Optional[Decimal]:
        """Total interest of B minus A, or None if either failed."""
        if not self.both_succeeded:
            return None
        return self.scenario_b.total_interest - self.scenario_a.total_interest  # type: ignore[union-attr]


@dataclass(frozen=True)
class StressScenario:
    label: str
    rate: Decimal
    periodic_payment: Decimal


def _numbers(params: LoanParameters) -> tuple[Decimal, Decimal, Decimal]:
    """(price, down payment %, annual rate %) of already validated params."""
    down_payment_percent = parse_decimal(params.down_payment_percentage)
    rate = parse_decimal(params.interest_rate)
    if down_payment_percent is None or rate is None:
        raise ValueError("parameters must pass validate() first")
    return interpret_price(params.property_price), down_payment_percent, rate


def _principal(price: Decimal, down_payment_percent: Decimal) -> Decimal:
    return price - price * down_payment_percent / HUNDRED


def run_scenario(params: LoanParameters) -> ScenarioOutcome:
    """Validate *params* and compute the full result.

    Returns the ValidationError instead of raising it.
    """
    error = validate(params)
    if error is not None:
        return error

    price, down_payment_percent, rate = _numbers(params)
    tax_rate = parse_decimal(params.property_tax_rate) or ZERO

    down_payment = price * down_payment_percent / HUNDRED
    principal = _principal(price, down_payment_percent)
    if down_payment_percent < INSURANCE_FREE_DOWN_PAYMENT:
        premium = calculate_insurance_premium(price, down_payment_percent)
    else:
        premium = ZERO

    logger.debug(
        "Running scenario: price=%s principal=%s rate=%s%% years=%d frequency=%s",
        price, principal, rate, params.amortization_years, params.payment_frequency.label,
    )
    amortization = compute_amortization(
        principal, rate, params.amortization_years, params.payment_frequency
    )
    logger.debug("Periodic payment: %s", amortization.periodic_payment)

    return ScenarioResult(
        property_price=price,
        down_payment=down_payment,
        principal=principal,
        annual_interest_rate=rate,
        payment_frequency=params.payment_frequency,
        amortization_years=params.amortization_years,
        periodic_payment=amortization.periodic_payment,
        total_interest=amortization.total_interest,
        mortgage_insurance=premium,
        annual_property_tax=price * tax_rate / HUNDRED,
        schedule=amortization.schedule,
    )


def compare_scenarios(params_a: LoanParameters, params_b: LoanParameters) -> ScenarioComparison:
    """Run two independent scenarios side by side."""
    return ScenarioComparison(
        scenario_a=run_scenario(params_a),
        scenario_b=run_scenario(params_b),
    )


def _stress_label(offset: Decimal) -> str:
    if offset == ZERO:
        return "Current Rate"
    if offset <= Decimal(2):
        return f"Stress Test Rate (+{offset}%)"
    return f"High Rate (+{offset}%)"


def stress_test(
    params: LoanParameters,
    offsets: tuple[Decimal, ...] = STRESS_RATE_OFFSETS,
) -> Union[tuple[StressScenario, ...], ValidationError]:
    """Periodic payment at the base rate plus each offset, all else fixed.

    The base parameters are validated once; stressed rates may exceed the
    validation ceiling.
    """
    error = validate(params)
    if error is not None:
        return error

    price, down_payment_percent, base_rate = _numbers(params)
    principal = _principal(price, down_payment_percent)

    scenarios = []
    for offset in offsets:
        rate = base_rate + offset
        payment = compute_periodic_payment(
            principal, rate, params.amortization_years, params.payment_frequency
        )
        scenarios.append(StressScenario(label=_stress_label(offset), rate=rate, periodic_payment=payment))
    return tuple(scenarios)
