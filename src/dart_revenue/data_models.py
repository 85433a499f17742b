"""
Data models for DART financial-statement reconciliation.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Optional, Union


Amount = Union[int, float]


class ReportPeriod(str, Enum):
    """Directly filed, cumulative report periods of a fiscal year."""

    Q1 = "Q1"
    H1 = "H1"
    Q3 = "Q3"
    FY = "FY"


class Metric(str, Enum):
    """Income-statement lines tracked by the reconciler."""

    REVENUE = "revenue"
    OPERATING_INCOME = "operatingIncome"


# Key order of every persisted year record.
OUTPUT_PERIOD_KEYS = ("Q1", "Q2", "Q3", "Q4", "H1", "FY")


@dataclass(frozen=True)
class AmountParse:
    """Outcome of parsing a reported amount string."""

    value: Optional[Amount] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def parse(cls, text: str) -> "AmountParse":
        """Parse a thousands-separated amount such as ``"1,234,000"``."""
        cleaned = (text or "").replace(",", "").strip()
        if not cleaned:
            return cls(error="empty amount")

        try:
            number = Decimal(cleaned)
        except InvalidOperation:
            return cls(error=f"not a number: {text!r}")

        if not number.is_finite():
            return cls(error=f"not a finite number: {text!r}")

        try:
            float(number)
        except OverflowError:
            return cls(error=f"amount out of range: {text!r}")

        if number == number.to_integral_value():
            return cls(value=int(number))
        return cls(value=float(number))


@dataclass(frozen=True)
class FiledRow:
    """One decoded line of a filing extract."""

    entity_code: str
    entity_name: str
    account_id: str
    account_label: str
    amount: Amount


@dataclass(frozen=True)
class AccountCandidate:
    """Winning account line for one company within one filing."""

    account_id: str
    amount: Amount
    priority: int
    sequence: int = 0  # application order of the source filing
    source: Optional[str] = None


@dataclass
class CompanyYearRecord:
    """Reconciled amounts for one company, one year and one metric."""

    entity_code: str
    year: int
    metric: Metric
    account_id: Optional[str] = None
    q1: Optional[Amount] = None
    q2: Optional[Amount] = None
    q3: Optional[Amount] = None
    q4: Optional[Amount] = None
    h1: Optional[Amount] = None
    fy: Optional[Amount] = None

    def set_period(self, period: ReportPeriod, amount: Optional[Amount]) -> None:
        setattr(self, period.value.lower(), amount)

    def to_dict(self) -> Dict[str, Optional[Amount]]:
        """Serialize with every period key present, ``None`` when unresolved."""
        return {key: getattr(self, key.lower()) for key in OUTPUT_PERIOD_KEYS}


@dataclass
class RunSummary:
    """Operator-facing statistics for one extraction run."""

    company_count: int = 0
    revenue_period_count: int = 0
    operating_income_period_count: int = 0


@dataclass
class ExtractionResult:
    """Result of one full extraction run."""

    payload: Dict[str, Dict[str, Any]]
    summary: RunSummary
    files_processed: int = 0
    files_failed: int = 0
    warnings: List[str] = field(default_factory=list)
