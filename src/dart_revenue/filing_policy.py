"""
Filing selection policy.

Extract file names encode what they contain::

    {year}_{report type}_{statement code}_{statement label}_{category}_...

e.g. ``2024_반기보고서_03_포괄손익계산서_연결_20240814.txt``. The policy
turns the tracked (year, period) pairs into an explicit, ordered list of
filings so that later filings overwrite earlier ones deterministically.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .data_models import ReportPeriod


logger = logging.getLogger(__name__)


REPORT_TYPE_LABELS: Dict[ReportPeriod, str] = {
    ReportPeriod.Q1: "1분기보고서",
    ReportPeriod.H1: "반기보고서",
    ReportPeriod.Q3: "3분기보고서",
    ReportPeriod.FY: "사업보고서",
}


class FilingCategory(Enum):
    """Consolidation groupings in application order (general case last)."""

    BANK = "은행_연결"
    SECURITIES = "증권_연결"
    INSURANCE = "보험_연결"
    OTHER_FINANCIAL = "금융기타_연결"
    GENERAL = "연결"

    @property
    def label(self) -> str:
        return self.value


class StatementType(Enum):
    """Income-statement variants; the comprehensive statement is applied last."""

    INCOME = ("02", "손익계산서")
    COMPREHENSIVE = ("03", "포괄손익계산서")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]


CATEGORY_ORDER: Tuple[FilingCategory, ...] = tuple(FilingCategory)
STATEMENT_ORDER: Tuple[StatementType, ...] = (StatementType.INCOME, StatementType.COMPREHENSIVE)


@dataclass(frozen=True)
class FilingSlot:
    """One (year, period, category, statement type) combination."""

    year: int
    period: ReportPeriod
    category: FilingCategory
    statement: StatementType

    @property
    def name_prefix(self) -> str:
        return "_".join(
            [
                str(self.year),
                REPORT_TYPE_LABELS[self.period],
                self.statement.code,
                self.statement.label,
                self.category.label,
                "",
            ]
        )

    def matches(self, file_name: str) -> bool:
        return file_name.startswith(self.name_prefix)


@dataclass(frozen=True)
class PlannedFiling:
    """A concrete file scheduled for application, in policy order."""

    sequence: int
    slot: FilingSlot
    path: Path

    @property
    def year(self) -> int:
        return self.slot.year

    @property
    def period(self) -> ReportPeriod:
        return self.slot.period


def iter_slots(tracked: Iterable[Tuple[int, ReportPeriod]]) -> Iterator[FilingSlot]:
    """Yield slots for each tracked (year, period) in application order."""
    for year, period in tracked:
        for category in CATEGORY_ORDER:
            for statement in STATEMENT_ORDER:
                yield FilingSlot(year=year, period=period, category=category, statement=statement)


class FilingSelectionPolicy:
    """Locate on-disk filings and order them for application."""

    def __init__(self, data_dir: Path | str, file_names: Optional[Sequence[str]] = None):
        """
        Args:
            data_dir: Directory holding the extract files
            file_names: Optional explicit listing, mainly for tests; defaults
                to the regular files found in ``data_dir``
        """
        self.data_dir = Path(data_dir)
        self._file_names = sorted(file_names) if file_names is not None else None

    def list_files(self) -> List[str]:
        if self._file_names is None:
            if not self.data_dir.is_dir():
                logger.warning("Filing directory does not exist: %s", self.data_dir)
                self._file_names = []
            else:
                self._file_names = sorted(
                    entry.name for entry in self.data_dir.iterdir() if entry.is_file()
                )
        return list(self._file_names)

    def files_for_slot(self, slot: FilingSlot) -> List[Path]:
        return [self.data_dir / name for name in self.list_files() if slot.matches(name)]

    def plan(self, tracked: Iterable[Tuple[int, ReportPeriod]]) -> List[PlannedFiling]:
        """
        Build the ordered application plan.

        Args:
            tracked: (year, period) pairs in the order they are processed

        Returns:
            Filings ordered by (year, period) then category precedence,
            then statement type (comprehensive after income statement)
        """
        planned: List[PlannedFiling] = []
        for slot in iter_slots(tracked):
            matches = self.files_for_slot(slot)
            if not matches:
                continue
            for path in matches:
                planned.append(PlannedFiling(sequence=len(planned), slot=slot, path=path))

        logger.info("Planned %d filings from %s", len(planned), self.data_dir)
        return planned
