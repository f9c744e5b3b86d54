"""Application-wide constants and configuration defaults.

All tuneable defaults live here so there is a single place to adjust them.
"""
from __future__ import annotations

from decimal import Decimal

# ── Price interpretation ──────────────────────────────────────────────────────

SHORTHAND_PRICE_CEILING = Decimal("1000")      # below this, the input is shorthand
THOUSANDS_SHORTHAND_FLOOR = Decimal("100")     # "450" → 450 000
MILLIONS_MULTIPLIER = Decimal("1000000")
THOUSANDS_MULTIPLIER = Decimal("1000")

# ── Validation bounds ─────────────────────────────────────────────────────────

MIN_PROPERTY_PRICE = Decimal("10000")
MAX_PROPERTY_PRICE = Decimal("100000000")

JUMBO_PRICE_THRESHOLD = Decimal("1000000")     # price ≥ this → stricter down payment
MIN_DOWN_PAYMENT_PERCENT = Decimal("5")
MIN_DOWN_PAYMENT_PERCENT_JUMBO = Decimal("20")
MAX_DOWN_PAYMENT_PERCENT = Decimal("100")

MAX_INTEREST_RATE_PERCENT = Decimal("30")      # exclusive; lower bound is > 0

# ── Mortgage insurance ────────────────────────────────────────────────────────

INSURANCE_FREE_DOWN_PAYMENT = Decimal("20")    # down payment ≥ this → no premium

# (minimum down payment %, premium rate) — first matching tier wins
INSURANCE_TIERS: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal("15"), Decimal("0.028")),
    (Decimal("10"), Decimal("0.031")),
)
INSURANCE_FALLBACK_RATE = Decimal("0.04")

# ── Amortization ──────────────────────────────────────────────────────────────

AMORTIZATION_YEAR_OPTIONS: tuple[int, ...] = (5, 10, 15, 20, 25, 30)
DEFAULT_AMORTIZATION_YEARS: int = 25

# ── Stress testing ────────────────────────────────────────────────────────────

STRESS_RATE_OFFSETS: tuple[Decimal, ...] = (Decimal("0"), Decimal("2"), Decimal("5"))

# ── Numeric convenience ───────────────────────────────────────────────────────

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")
