"""Configuration for an extraction run."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .data_models import ReportPeriod
from .row_decoder import DEFAULT_ENCODING


DEFAULT_YEARS: Tuple[int, ...] = (2024, 2025)
DEFAULT_PERIODS: Tuple[ReportPeriod, ...] = (
    ReportPeriod.Q1,
    ReportPeriod.H1,
    ReportPeriod.Q3,
    ReportPeriod.FY,
)


@dataclass
class ExtractionConfig:
    """Inputs, outputs and tracked periods of one extraction run."""

    data_dir: Path = Path("data")
    output_path: Path = Path("data/revenue-data.json")
    years: Tuple[int, ...] = DEFAULT_YEARS
    periods: Tuple[ReportPeriod, ...] = DEFAULT_PERIODS
    encoding: str = DEFAULT_ENCODING
    long_table_path: Optional[Path] = None
    file_names: Optional[List[str]] = field(default=None, repr=False)

    def __post_init__(self):
        self.data_dir = Path(self.data_dir)
        self.output_path = Path(self.output_path)
        if self.long_table_path is not None:
            self.long_table_path = Path(self.long_table_path)
        if not self.years:
            raise ValueError("At least one fiscal year must be tracked")

    def tracked_periods(self) -> List[Tuple[int, ReportPeriod]]:
        """Explicit (year, period) enumeration in processing order."""
        periods = [period for period in DEFAULT_PERIODS if period in self.periods]
        return [(year, period) for year in sorted(set(self.years)) for period in periods]
