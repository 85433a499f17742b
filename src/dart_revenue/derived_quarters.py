"""Derive Q2 and Q4 from cumulative half-year and full-year figures."""

from __future__ import annotations

import logging
from typing import List, Optional

from .data_models import Amount, CompanyYearRecord, Metric


logger = logging.getLogger(__name__)


def _subtract(later: Optional[Amount], earlier: Optional[Amount]) -> Optional[Amount]:
    if later is None or earlier is None:
        return None
    return later - earlier


def _derive_revenue_quarter(
    record: CompanyYearRecord,
    quarter: str,
    cumulative: Optional[Amount],
    prior: Optional[Amount],
    warnings: List[str],
) -> Optional[Amount]:
    if not cumulative or not prior:
        return None

    derived = cumulative - prior
    if derived > 0:
        return derived

    message = (
        f"Rejected derived {quarter} revenue for {record.entity_code}/{record.year}: "
        f"{cumulative} - {prior} = {derived}"
    )
    logger.warning(
        "Rejected derived %s revenue for %s/%s (cumulative=%s, prior=%s, derived=%s)",
        quarter,
        record.entity_code,
        record.year,
        cumulative,
        prior,
        derived,
    )
    warnings.append(message)
    return None


def apply_derived_quarters(record: CompanyYearRecord) -> List[str]:
    """
    Fill Q2 (H1 - Q1) and Q4 (FY - Q3) on ``record`` in place.

    Revenue derivations must be strictly positive; anything else points at
    a Q1/H1 or Q3/FY account mismatch or a restated filing and is nulled
    out with a warning. Operating income may be zero or negative in any
    quarter, so its derivations are accepted whenever both operands exist.

    Returns:
        Warning messages for rejected derivations
    """
    warnings: List[str] = []

    if record.metric is Metric.REVENUE:
        record.q2 = _derive_revenue_quarter(record, "Q2", record.h1, record.q1, warnings)
        record.q4 = _derive_revenue_quarter(record, "Q4", record.fy, record.q3, warnings)
    else:
        record.q2 = _subtract(record.h1, record.q1)
        record.q4 = _subtract(record.fy, record.q3)

    return warnings
