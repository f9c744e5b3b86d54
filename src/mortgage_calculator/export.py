"""CSV export of an amortization schedule."""
from __future__ import annotations

import csv
import io
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Iterable

from .calculator import AmortizationEntry
from .config import CENT

CSV_HEADER = ("Payment Number", "Principal", "Interest", "Remaining Balance", "Cumulative Interest")


def _plain(value: Decimal) -> str:
    rounded = value.quantize(CENT, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = rounded.copy_abs()  # no "-0.00" from final-balance drift
    return f"{rounded:f}"


def schedule_to_csv(entries: Iterable[AmortizationEntry]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for entry in entries:
        writer.writerow((
            entry.payment_number,
            _plain(entry.principal_paid),
            _plain(entry.interest_paid),
            _plain(entry.remaining_balance),
            _plain(entry.cumulative_interest),
        ))
    return buffer.getvalue()


def write_schedule_csv(entries: Iterable[AmortizationEntry], path: Path) -> Path:
    """Write the schedule to *path* and return it."""
    path.write_text(schedule_to_csv(entries), encoding="utf-8")
    return path
