"""
Cross-period reconciliation of account candidates.

A company's revenue for one year must come from a single account
identifier across Q1, H1, Q3 and FY; otherwise a standalone revenue line
in Q1 and a segment line in Q3 would be mixed and the derived quarters
would be meaningless.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, List, Mapping, Optional, Sequence

from .account_classifier import revenue_priority
from .data_models import AccountCandidate, CompanyYearRecord, Metric, ReportPeriod


logger = logging.getLogger(__name__)

PERIOD_ORDER: Sequence[ReportPeriod] = (
    ReportPeriod.Q1,
    ReportPeriod.H1,
    ReportPeriod.Q3,
    ReportPeriod.FY,
)


def _observed_periods(
    candidates: Mapping[ReportPeriod, List[AccountCandidate]],
) -> List[ReportPeriod]:
    return [period for period in PERIOD_ORDER if candidates.get(period)]


def _account_ids(items: List[AccountCandidate]) -> List[str]:
    return list(dict.fromkeys(candidate.account_id for candidate in items))


def account_pool(candidates: Mapping[ReportPeriod, List[AccountCandidate]]) -> List[str]:
    """
    Build the pool of account identifiers eligible to represent a year.

    The pool is the set of identifiers present in every observed period.
    When no identifier is shared, it falls back to the identifiers seen in
    the largest number of periods, keeping ties. Order follows first
    appearance (Q1, H1, Q3, FY).
    """
    periods = _observed_periods(candidates)
    if not periods:
        return []

    per_period = [_account_ids(candidates[period]) for period in periods]

    shared = [
        account_id
        for account_id in per_period[0]
        if all(account_id in ids for ids in per_period[1:])
    ]
    if shared:
        return shared

    counts: Counter = Counter()
    for ids in per_period:
        counts.update(ids)
    best = max(counts.values())
    return [account_id for account_id, count in counts.items() if count == best]


def choose_account_id(candidates: Mapping[ReportPeriod, List[AccountCandidate]]) -> Optional[str]:
    """Pick the highest-priority identifier from the pool; first seen wins ties."""
    pool = account_pool(candidates)
    if not pool:
        return None
    return max(pool, key=lambda account_id: revenue_priority(account_id, ""))


def _latest_largest(items: List[AccountCandidate]) -> Optional[AccountCandidate]:
    # Later filings overwrite earlier ones; amount only breaks ties.
    if not items:
        return None
    return max(items, key=lambda candidate: (candidate.sequence, candidate.amount))


def reconcile_revenue(
    entity_code: str,
    year: int,
    candidates: Mapping[ReportPeriod, List[AccountCandidate]],
) -> Optional[CompanyYearRecord]:
    """
    Resolve Q1, H1, Q3 and FY revenue for one company/year.

    Args:
        entity_code: Company entity code
        year: Fiscal year
        candidates: Accumulated candidates per directly-filed period

    Returns:
        Record with the directly-filed periods populated, or None when no
        period carried any candidate
    """
    account_id = choose_account_id(candidates)
    if account_id is None:
        return None

    record = CompanyYearRecord(
        entity_code=entity_code,
        year=year,
        metric=Metric.REVENUE,
        account_id=account_id,
    )
    for period in PERIOD_ORDER:
        matching = [
            candidate
            for candidate in candidates.get(period, [])
            if candidate.account_id == account_id
        ]
        chosen = _latest_largest(matching)
        record.set_period(period, chosen.amount if chosen else None)

    logger.debug(
        "Reconciled revenue for %s/%s using %s", entity_code, year, account_id
    )
    return record


def reconcile_operating_income(
    entity_code: str,
    year: int,
    candidates: Mapping[ReportPeriod, List[AccountCandidate]],
) -> Optional[CompanyYearRecord]:
    """Resolve operating income per period by largest absolute value."""
    if not _observed_periods(candidates):
        return None

    record = CompanyYearRecord(
        entity_code=entity_code,
        year=year,
        metric=Metric.OPERATING_INCOME,
    )
    chosen_ids: Dict[ReportPeriod, str] = {}
    for period in PERIOD_ORDER:
        items = candidates.get(period, [])
        if not items:
            continue
        chosen = max(items, key=lambda candidate: abs(candidate.amount))
        record.set_period(period, chosen.amount)
        chosen_ids[period] = chosen.account_id

    if len(set(chosen_ids.values())) == 1:
        record.account_id = next(iter(chosen_ids.values()))
    return record
