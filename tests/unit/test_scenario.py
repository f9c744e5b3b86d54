"""Unit tests for scenario.py — single scenario, comparison and stress test."""
from decimal import Decimal

import pytest

from mortgage_calculator.calculator import compute_periodic_payment
from mortgage_calculator.frequency import PaymentFrequency
from mortgage_calculator.scenario import (
    ScenarioResult,
    StressScenario,
    compare_scenarios,
    run_scenario,
    stress_test,
)
from mortgage_calculator.validator import (
    InvalidDownPayment,
    InvalidInterestRate,
    InvalidPrice,
    LoanParameters,
)

ZERO = Decimal("0")


def _params(**kwargs) -> LoanParameters:
    defaults = dict(
        property_price="400000",
        down_payment_percentage="20",
        interest_rate="5",
        amortization_years=25,
        payment_frequency=PaymentFrequency.MONTHLY,
    )
    defaults.update(kwargs)
    return LoanParameters(**defaults)


class TestRunScenario:
    def test_end_to_end_monthly(self):
        result = run_scenario(_params())
        assert isinstance(result, ScenarioResult)
        assert result.property_price == Decimal("400000")
        assert result.down_payment == Decimal("80000")
        assert result.principal == Decimal("320000")
        assert float(result.periodic_payment) == pytest.approx(1870.69, abs=0.01)
        assert result.total_interest == result.periodic_payment * 300 - Decimal("320000")
        assert result.mortgage_insurance == ZERO
        assert len(result.schedule) == 300

    def test_shorthand_price(self):
        result = run_scenario(_params(property_price="400"))
        assert result.property_price == Decimal("400000")

    def test_insurance_applied_below_twenty_percent(self):
        result = run_scenario(_params(property_price="500000", down_payment_percentage="10"))
        assert result.mortgage_insurance == Decimal("13950")
        assert result.principal == Decimal("450000")

    @pytest.mark.parametrize("frequency", list(PaymentFrequency))
    def test_schedule_length_per_frequency(self, frequency):
        result = run_scenario(_params(payment_frequency=frequency, amortization_years=10))
        assert len(result.schedule) == 10 * frequency.payments_per_year
        assert result.number_of_payments == len(result.schedule)

    @pytest.mark.parametrize("overrides,error_type", [
        (dict(property_price="5000"), InvalidPrice),
        (dict(property_price="500000", down_payment_percentage="4"), InvalidDownPayment),
        (dict(property_price="1500000", down_payment_percentage="15"), InvalidDownPayment),
        (dict(interest_rate="31"), InvalidInterestRate),
    ])
    def test_validation_errors_are_returned(self, overrides, error_type):
        outcome = run_scenario(_params(**overrides))
        assert isinstance(outcome, error_type)

    def test_idempotent(self):
        params = _params(payment_frequency=PaymentFrequency.ACCELERATED_WEEKLY, property_tax_rate="1.1")
        assert run_scenario(params) == run_scenario(params)


class TestScenarioResultDerived:
    def test_total_cost_uses_payment_count(self):
        result = run_scenario(_params(payment_frequency=PaymentFrequency.BIWEEKLY))
        assert result.total_cost == result.periodic_payment * 650

    def test_property_tax(self):
        result = run_scenario(_params(property_tax_rate="1.2"))
        assert result.annual_property_tax == Decimal("4800")
        assert result.periodic_property_tax == Decimal("400")
        assert result.total_periodic_payment == result.periodic_payment + Decimal("400")

    @pytest.mark.parametrize("tax_rate", ["", "n/a"])
    def test_missing_property_tax_is_zero(self, tax_rate):
        result = run_scenario(_params(property_tax_rate=tax_rate))
        assert result.annual_property_tax == ZERO
        assert result.total_periodic_payment == result.periodic_payment

    def test_breakdown(self):
        result = run_scenario(_params(property_tax_rate="1.2"))
        slices = result.breakdown()
        assert [s.name for s in slices] == ["Principal", "Interest", "Property Tax", "Insurance"]
        assert slices[0].value == Decimal("320000")
        assert slices[2].value == Decimal("120000")  # 4800 * 25 years
        assert slices[3].value == ZERO
        # 320000, ≈241206 and 120000 of ≈681206
        assert [s.percentage for s in slices] == [47, 35, 18, 0]

    def test_breakdown_shares(self):
        slices = run_scenario(_params()).breakdown()
        # principal 320000 of ≈ 561206 total
        assert slices[0].percentage == 57
        # interest share is 42.98% → rounds up
        assert slices[1].percentage == 43


class TestCompareScenarios:
    def test_independent_results(self):
        a, b = _params(), _params(interest_rate="6")
        comparison = compare_scenarios(a, b)
        assert comparison.both_succeeded
        assert comparison.scenario_a == run_scenario(a)
        assert comparison.scenario_b == run_scenario(b)
        assert comparison.payment_difference > ZERO
        assert comparison.interest_difference > ZERO

    def test_identical_scenarios(self):
        comparison = compare_scenarios(_params(), _params())
        assert comparison.payment_difference == ZERO
        assert comparison.interest_difference == ZERO

    def test_one_side_invalid(self):
        comparison = compare_scenarios(_params(), _params(interest_rate="abc"))
        assert isinstance(comparison.scenario_a, ScenarioResult)
        assert isinstance(comparison.scenario_b, InvalidInterestRate)
        assert not comparison.both_succeeded
        assert comparison.payment_difference is None
        assert comparison.interest_difference is None


class TestStressTest:
    def test_three_scenarios(self):
        scenarios = stress_test(_params())
        assert [s.label for s in scenarios] == [
            "Current Rate",
            "Stress Test Rate (+2%)",
            "High Rate (+5%)",
        ]
        assert [s.rate for s in scenarios] == [Decimal("5"), Decimal("7"), Decimal("10")]

    def test_base_matches_run_scenario(self):
        params = _params(payment_frequency=PaymentFrequency.ACCELERATED_BIWEEKLY)
        base = stress_test(params)[0]
        assert base.periodic_payment == run_scenario(params).periodic_payment

    def test_principal_matches_run_scenario(self):
        params = _params(property_price="333333", down_payment_percentage="12.5")
        result = run_scenario(params)
        expected = compute_periodic_payment(result.principal, Decimal("5"), 25, PaymentFrequency.MONTHLY)
        assert stress_test(params)[0].periodic_payment == expected

    def test_payments_follow_engine(self):
        scenarios = stress_test(_params())
        for s in scenarios:
            expected = compute_periodic_payment(
                Decimal("320000"), s.rate, 25, PaymentFrequency.MONTHLY
            )
            assert s.periodic_payment == expected
        assert scenarios[0].periodic_payment < scenarios[1].periodic_payment < scenarios[2].periodic_payment

    def test_stressed_rate_may_exceed_ceiling(self):
        scenarios = stress_test(_params(interest_rate="27"))
        assert scenarios[-1].rate == Decimal("32")
        assert scenarios[-1].periodic_payment > ZERO

    def test_custom_offsets(self):
        scenarios = stress_test(_params(), offsets=(Decimal("1"),))
        assert scenarios == (
            StressScenario(
                label="Stress Test Rate (+1%)",
                rate=Decimal("6"),
                periodic_payment=compute_periodic_payment(
                    Decimal("320000"), Decimal("6"), 25, PaymentFrequency.MONTHLY
                ),
            ),
        )

    def test_invalid_base(self):
        assert isinstance(stress_test(_params(interest_rate="0")), InvalidInterestRate)
