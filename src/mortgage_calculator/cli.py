"""Interactive CLI — click entry point + interactive action loop.

Session startup:
  1. Prompt for mandatory fields (price, down payment %, interest rate %)
     unless they were given as options.
  2. Run the scenario and show the payment summary.
  3. Enter the interactive action loop.

Action loop:
  - Show the schedule, breakdown, stress test or current parameters.
  - Export the schedule as CSV.
  - Compare against a second scenario.
  - Update any field and recalculate, or exit.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import AMORTIZATION_YEAR_OPTIONS, DEFAULT_AMORTIZATION_YEARS
from .export import write_schedule_csv
from .frequency import PaymentFrequency
from .interpreter import interpret_price
from .scenario import (
    ScenarioComparison,
    ScenarioOutcome,
    ScenarioResult,
    StressScenario,
    compare_scenarios,
    run_scenario,
    stress_test,
)
from .validator import LoanParameters, ValidationError

console = Console()
err_console = Console(stderr=True, style="bold red")

# ──────────────────────────────────────────────────────────────────────────────
# Formatting helpers
# ──────────────────────────────────────────────────────────────────────────────

def _fmt_money(value) -> str:
    return f"{value:,.2f}"


def _fmt_pct(value) -> str:
    return f"{value:.2f}%"


def _fmt_term(years: int, frequency: PaymentFrequency) -> str:
    return f"{years} years ({years * frequency.payments_per_year} {frequency.label.lower()} payments)"


# ──────────────────────────────────────────────────────────────────────────────
# Result display
# ──────────────────────────────────────────────────────────────────────────────

def display_error(error: ValidationError) -> None:
    console.print(Panel(f"[bold red]Cannot calculate[/bold red]\n{error.message}", expand=False))


def display_result(result: ScenarioResult) -> None:
    console.print()
    console.print(Panel(
        f"[bold green]Payment Summary[/bold green] — "
        f"{result.payment_frequency.label} / {_fmt_term(result.amortization_years, result.payment_frequency)}",
        expand=False,
    ))

    t = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    t.add_column("Field", style="cyan")
    t.add_column("Value", justify="right")

    t.add_row("Interpreted price", _fmt_money(result.property_price))
    t.add_row("Down payment", _fmt_money(result.down_payment))
    t.add_row("Loan principal", _fmt_money(result.principal))
    t.add_row("Interest rate", _fmt_pct(result.annual_interest_rate))
    t.add_row(f"{result.payment_frequency.label} payment", _fmt_money(result.periodic_payment))
    if result.annual_property_tax:
        t.add_row("  └ with property tax", _fmt_money(result.total_periodic_payment))
    t.add_row("Total interest", _fmt_money(result.total_interest))
    if result.mortgage_insurance:
        t.add_row("Mortgage insurance", _fmt_money(result.mortgage_insurance))
    t.add_row("Total cost", _fmt_money(result.total_cost))
    console.print(t)


def display_amortization(result: ScenarioResult) -> None:
    t = Table(title="Amortization Schedule", box=box.MINIMAL_HEAVY_HEAD)
    for col in ("Payment", "Amount", "Principal", "Interest", "Balance", "Total Interest"):
        t.add_column(col, justify="right")

    for entry in result.schedule:
        t.add_row(
            str(entry.payment_number),
            _fmt_money(entry.payment),
            _fmt_money(entry.principal_paid),
            _fmt_money(entry.interest_paid),
            _fmt_money(entry.remaining_balance),
            _fmt_money(entry.cumulative_interest),
        )
    console.print(t)


def display_breakdown(result: ScenarioResult) -> None:
    t = Table(title="Payment Breakdown", box=box.SIMPLE_HEAVY)
    t.add_column("Component", style="cyan")
    t.add_column("Amount", justify="right")
    t.add_column("Share", justify="right")

    for part in result.breakdown():
        share = f"{part.percentage}%" if part.percentage is not None else "—"
        t.add_row(part.name, _fmt_money(part.value), share)
    console.print(t)


def display_stress(scenarios: tuple[StressScenario, ...], frequency: PaymentFrequency) -> None:
    t = Table(title="Payment Stress Test", box=box.SIMPLE_HEAVY)
    t.add_column("Scenario", style="cyan")
    t.add_column("Rate", justify="right")
    t.add_column(f"{frequency.label} payment", justify="right")

    for s in scenarios:
        t.add_row(s.label, _fmt_pct(s.rate), _fmt_money(s.periodic_payment))
    console.print(t)


def _outcome_cells(outcome: ScenarioOutcome) -> list[str]:
    if isinstance(outcome, ValidationError):
        return [f"[red]{outcome.message}[/red]", "", "", ""]
    return [
        _fmt_money(outcome.periodic_payment),
        _fmt_money(outcome.total_interest),
        _fmt_money(outcome.mortgage_insurance),
        _fmt_money(outcome.total_cost),
    ]


def display_comparison(comparison: ScenarioComparison) -> None:
    t = Table(title="Compare Scenarios", box=box.SIMPLE_HEAVY)
    t.add_column("", style="cyan")
    t.add_column("Scenario A", justify="right")
    t.add_column("Scenario B", justify="right")
    t.add_column("B − A", justify="right")

    a = _outcome_cells(comparison.scenario_a)
    b = _outcome_cells(comparison.scenario_b)
    diffs = ["", "", "", ""]
    if comparison.both_succeeded:
        diffs[0] = _fmt_money(comparison.payment_difference)
        diffs[1] = _fmt_money(comparison.interest_difference)

    for i, label in enumerate(("Payment", "Total interest", "Insurance", "Total cost")):
        t.add_row(label, a[i], b[i], diffs[i])
    console.print(t)


def display_params(params: LoanParameters) -> None:
    t = Table(title="Current Parameters", box=box.SIMPLE, show_header=True, padding=(0, 2))
    t.add_column("Parameter", style="cyan")
    t.add_column("Value", justify="right")
    t.add_column("Interpreted", style="dim")

    t.add_row("price", params.property_price, _fmt_money(interpret_price(params.property_price)))
    t.add_row("down_payment", params.down_payment_percentage, "%")
    t.add_row("rate", params.interest_rate, "% per year")
    t.add_row("tax_rate", params.property_tax_rate or "—", "% per year")
    t.add_row("frequency", params.payment_frequency.label)
    t.add_row("years", str(params.amortization_years))
    console.print(t)


# ──────────────────────────────────────────────────────────────────────────────
# Input helpers
# ──────────────────────────────────────────────────────────────────────────────

def _prompt_text(prompt: str, default: Optional[str] = None) -> str:
    suffix = f" [dim]\\[{default}][/dim]" if default else ""
    raw = console.input(f"[bold]{prompt}[/bold]{suffix} ").strip()
    if not raw and default is not None:
        return default
    return raw


def _prompt_frequency(default: PaymentFrequency) -> PaymentFrequency:
    console.print("  Frequencies: " + ", ".join(f.name.lower() for f in PaymentFrequency))
    while True:
        raw = _prompt_text("Payment frequency:", default.name.lower())
        try:
            return PaymentFrequency.from_label(raw)
        except ValueError as exc:
            err_console.print(f"  {exc}")


def _prompt_years(default: int) -> int:
    options = ", ".join(str(y) for y in AMORTIZATION_YEAR_OPTIONS)
    while True:
        raw = _prompt_text(f"Amortization years ({options}):", str(default))
        try:
            value = int(raw)
        except ValueError:
            err_console.print(f"  Invalid integer: '{raw}'")
            continue
        if value not in AMORTIZATION_YEAR_OPTIONS:
            err_console.print(f"  Choose one of {options}.")
            continue
        return value


# ──────────────────────────────────────────────────────────────────────────────
# Calculation runner
# ──────────────────────────────────────────────────────────────────────────────

def run_calculation(params: LoanParameters) -> Optional[ScenarioResult]:
    """Run one scenario. Prints the validation error and returns None on failure."""
    outcome = run_scenario(params)
    if isinstance(outcome, ValidationError):
        display_error(outcome)
        return None
    display_result(outcome)
    return outcome


def _prompt_scenario_b(base: LoanParameters) -> LoanParameters:
    console.print("  Scenario B (press Enter to keep scenario A's value)")
    return replace(
        base,
        property_price=_prompt_text("Property price:", base.property_price),
        down_payment_percentage=_prompt_text("Down payment %:", base.down_payment_percentage),
        interest_rate=_prompt_text("Interest rate %:", base.interest_rate),
        amortization_years=_prompt_years(base.amortization_years),
    )


def _export(result: ScenarioResult) -> None:
    raw = _prompt_text("Export path:", "amortization_schedule.csv")
    try:
        path = write_schedule_csv(result.schedule, Path(raw))
    except OSError as exc:
        err_console.print(f"  Export failed: {exc}")
        return
    console.print(f"  [green]Wrote {len(result.schedule)} payments to {path}[/green]")


# ──────────────────────────────────────────────────────────────────────────────
# Interactive action loop
# ──────────────────────────────────────────────────────────────────────────────

_UPDATABLE_FIELDS = {"price", "down_payment", "rate", "tax_rate", "frequency", "years"}


def interactive_loop(params: LoanParameters) -> None:
    last_result = run_calculation(params)

    while True:
        console.print()
        console.print(
            "[bold]Actions:[/bold] "
            "[cyan]update[/cyan] · [cyan]schedule[/cyan] · [cyan]export[/cyan] · "
            "[cyan]breakdown[/cyan] · [cyan]stress[/cyan] · [cyan]compare[/cyan] · "
            "[cyan]params[/cyan] · [cyan]exit[/cyan]"
        )
        action = console.input("[bold]> [/bold]").strip().lower()

        if action in ("exit", "quit", "q"):
            console.print("Goodbye.")
            break

        elif action == "params":
            display_params(params)

        elif action in ("schedule", "export", "breakdown"):
            if last_result is None:
                err_console.print("Run a successful calculation first.")
            elif action == "schedule":
                display_amortization(last_result)
            elif action == "export":
                _export(last_result)
            else:
                display_breakdown(last_result)

        elif action == "stress":
            outcome = stress_test(params)
            if isinstance(outcome, ValidationError):
                display_error(outcome)
            else:
                display_stress(outcome, params.payment_frequency)

        elif action == "compare":
            display_comparison(compare_scenarios(params, _prompt_scenario_b(params)))

        elif action == "update":
            console.print(f"  Fields: {', '.join(sorted(_UPDATABLE_FIELDS))}")
            field = console.input("[bold]Field to update: [/bold]").strip().lower()
            if field not in _UPDATABLE_FIELDS:
                err_console.print(f"  Unknown field '{field}'.")
                continue
            params = _apply_update(field, params)
            last_result = run_calculation(params)

        else:
            err_console.print(f"  Unknown action '{action}'.")


def _apply_update(field: str, params: LoanParameters) -> LoanParameters:
    try:
        if field == "price":
            return replace(params, property_price=_prompt_text("New property price:"))
        elif field == "down_payment":
            return replace(params, down_payment_percentage=_prompt_text("New down payment %:"))
        elif field == "rate":
            return replace(params, interest_rate=_prompt_text("New interest rate %:"))
        elif field == "tax_rate":
            return replace(params, property_tax_rate=_prompt_text("New property tax rate %:"))
        elif field == "frequency":
            return replace(params, payment_frequency=_prompt_frequency(params.payment_frequency))
        elif field == "years":
            return replace(params, amortization_years=_prompt_years(params.amortization_years))
    except (KeyboardInterrupt, EOFError):
        console.print("\n  Update cancelled.")
    return params


# ──────────────────────────────────────────────────────────────────────────────
# Click entry point
# ──────────────────────────────────────────────────────────────────────────────

def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.command()
@click.option("--price", type=str, default=None, help='Property price; shorthand allowed ("450" = 450 000, "1.2" = 1.2 million)')
@click.option("--down-payment", type=str, default=None, help="Down payment in percent of the price")
@click.option("--rate", type=str, default=None, help="Annual interest rate in percent")
@click.option("--tax-rate", type=str, default="", help="Annual property tax rate in percent")
@click.option(
    "--frequency",
    type=click.Choice([f.name.lower() for f in PaymentFrequency]),
    default=PaymentFrequency.MONTHLY.name.lower(),
    show_default=True,
)
@click.option(
    "--years",
    type=click.Choice([str(y) for y in AMORTIZATION_YEAR_OPTIONS]),
    default=str(DEFAULT_AMORTIZATION_YEARS),
    show_default=True,
    help="Amortization period in years",
)
@click.option("--verbose", is_flag=True, help="Log calculation details")
def main(
    price: Optional[str],
    down_payment: Optional[str],
    rate: Optional[str],
    tax_rate: str,
    frequency: str,
    years: str,
    verbose: bool,
) -> None:
    """Interactive mortgage payment calculator."""
    _configure_logging(verbose)
    console.print(Panel("[bold blue]Mortgage Calculator[/bold blue]", expand=False))

    try:
        if price is None:
            price = _prompt_text("Property price?")
        if down_payment is None:
            down_payment = _prompt_text("Down payment %?")
        if rate is None:
            rate = _prompt_text("Interest rate %?")
    except (KeyboardInterrupt, EOFError):
        err_console.print("\nMissing mandatory input.")
        sys.exit(1)

    params = LoanParameters(
        property_price=price,
        down_payment_percentage=down_payment,
        interest_rate=rate,
        property_tax_rate=tax_rate,
        payment_frequency=PaymentFrequency.from_label(frequency),
        amortization_years=int(years),
    )

    try:
        interactive_loop(params)
    except (KeyboardInterrupt, EOFError):
        console.print("\nSession ended.")
