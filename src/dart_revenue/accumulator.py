"""Per-run accumulation of account candidates across filings."""

from __future__ import annotations

from collections import defaultdict
from typing import DefaultDict, Dict, Iterator, List, Tuple

from .data_models import AccountCandidate, Metric, ReportPeriod
from .file_aggregator import FileAggregate


CompanyYear = Tuple[str, int]
PeriodCandidates = Dict[ReportPeriod, List[AccountCandidate]]


class ReconciliationContext:
    """
    Candidate lists owned by a single extraction run.

    Candidates are only ever appended, in filing application order; the
    choice between them is made later by the reconciler, once every filing
    for a company/year has been applied.
    """

    def __init__(self) -> None:
        self._candidates: Dict[Metric, DefaultDict[CompanyYear, PeriodCandidates]] = {
            metric: defaultdict(lambda: defaultdict(list)) for metric in Metric
        }
        self.company_names: Dict[str, str] = {}

    def apply(self, aggregate: FileAggregate, year: int, period: ReportPeriod) -> None:
        """Append one filing's winners to the (company, year, period) lists."""
        for code, name in aggregate.company_names.items():
            self.company_names.setdefault(code, name)

        for metric in Metric:
            bucket = self._candidates[metric]
            for code, candidate in aggregate.for_metric(metric).items():
                bucket[(code, year)][period].append(candidate)

    def candidates(self, metric: Metric, entity_code: str, year: int) -> PeriodCandidates:
        bucket = self._candidates[metric]
        if (entity_code, year) not in bucket:
            return {}
        return {period: list(items) for period, items in bucket[(entity_code, year)].items()}

    def iter_company_years(self, metric: Metric) -> Iterator[Tuple[CompanyYear, PeriodCandidates]]:
        bucket = self._candidates[metric]
        for key in sorted(bucket):
            yield key, bucket[key]
