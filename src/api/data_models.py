"""Data models shared across the revenue data API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(slots=True)
class SeriesPoint:
    """One quarterly value of a company's series."""

    year: int
    quarter: str
    amount: float
    amount_hundred_million: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "year": self.year,
            "quarter": self.quarter,
            "amount": self.amount,
            "amountHundredMillion": self.amount_hundred_million,
        }
