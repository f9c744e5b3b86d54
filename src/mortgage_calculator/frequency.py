"""Payment frequency variants."""
from __future__ import annotations

from enum import Enum


class PaymentFrequency(Enum):
    """How often a payment is made.

    Accelerated variants pay the monthly-equivalent amount split across the
    more frequent periods; the number of payments is not shortened.
    """

    MONTHLY = ("Monthly", 12, False)
    BIWEEKLY = ("Bi-weekly", 26, False)
    ACCELERATED_BIWEEKLY = ("Accelerated Bi-weekly", 26, True)
    WEEKLY = ("Weekly", 52, False)
    ACCELERATED_WEEKLY = ("Accelerated Weekly", 52, True)

    def __init__(self, label: str, payments_per_year: int, is_accelerated: bool) -> None:
        self.label = label
        self.payments_per_year = payments_per_year
        self.is_accelerated = is_accelerated

    @classmethod
    def from_label(cls, raw: str) -> "PaymentFrequency":
        """Resolve a display label ("Bi-weekly") or member name ("biweekly")."""
        key = raw.strip().lower()
        for member in cls:
            if key in (member.label.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown payment frequency '{raw}'.")
