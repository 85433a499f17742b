"""Collapse the candidate rows of one filing into one winner per company."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

import pandas as pd

from .account_classifier import classify_row
from .data_models import AccountCandidate, FiledRow, Metric


logger = logging.getLogger(__name__)


@dataclass
class FileAggregate:
    """Per-company winners extracted from a single filing."""

    revenue: Dict[str, AccountCandidate]
    operating_income: Dict[str, AccountCandidate]
    company_names: Dict[str, str]
    row_count: int = 0

    def for_metric(self, metric: Metric) -> Dict[str, AccountCandidate]:
        if metric is Metric.REVENUE:
            return self.revenue
        return self.operating_income


def _select_winners(
    accepted: List[Tuple[FiledRow, int]],
    metric: Metric,
    sequence: int,
    source: str | None,
) -> Dict[str, AccountCandidate]:
    if not accepted:
        return {}

    frame = pd.DataFrame.from_records(
        [
            {
                "row_index": index,
                "entity_code": row.entity_code,
                "priority": priority,
                "rank_amount": float(row.amount),
            }
            for index, (row, priority) in enumerate(accepted)
        ],
        columns=["row_index", "entity_code", "priority", "rank_amount"],
    )

    # Operating losses are negative, so magnitude decides between them.
    if metric is Metric.OPERATING_INCOME:
        frame["rank_amount"] = frame["rank_amount"].abs()

    winners = frame.sort_values(
        ["priority", "rank_amount", "row_index"],
        ascending=[False, False, True],
    ).drop_duplicates(subset="entity_code", keep="first")

    result: Dict[str, AccountCandidate] = {}
    for row_index in sorted(winners["row_index"].tolist()):
        row, priority = accepted[int(row_index)]
        result[row.entity_code] = AccountCandidate(
            account_id=row.account_id,
            amount=row.amount,
            priority=priority,
            sequence=sequence,
            source=source,
        )
    return result


def aggregate_rows(
    rows: Iterable[FiledRow],
    sequence: int = 0,
    source: str | None = None,
) -> FileAggregate:
    """
    Reduce all rows of one filing to per-company account candidates.

    Revenue and operating income are reduced independently: strictly higher
    priority wins first, then the larger amount (revenue) or the larger
    absolute amount (operating income). Full ties keep the earlier row.

    Args:
        rows: Decoded rows of one filing, in file order
        sequence: Application order of this filing within the run
        source: Filing name recorded on the candidates for diagnostics

    Returns:
        FileAggregate with winners keyed by entity code
    """
    revenue_rows: List[Tuple[FiledRow, int]] = []
    operating_rows: List[Tuple[FiledRow, int]] = []
    company_names: Dict[str, str] = {}
    row_count = 0

    for row in rows:
        row_count += 1
        if row.entity_name:
            company_names.setdefault(row.entity_code, row.entity_name)

        revenue_hit = classify_row(row, Metric.REVENUE)
        if revenue_hit is not None:
            revenue_rows.append(revenue_hit)

        operating_hit = classify_row(row, Metric.OPERATING_INCOME)
        if operating_hit is not None:
            operating_rows.append(operating_hit)

    aggregate = FileAggregate(
        revenue=_select_winners(revenue_rows, Metric.REVENUE, sequence, source),
        operating_income=_select_winners(
            operating_rows, Metric.OPERATING_INCOME, sequence, source
        ),
        company_names=company_names,
        row_count=row_count,
    )
    logger.debug(
        "Aggregated %d rows from %s: %d revenue, %d operating income companies",
        row_count,
        source or "<rows>",
        len(aggregate.revenue),
        len(aggregate.operating_income),
    )
    return aggregate
