"""
Account classification for revenue and operating-income lines.

Filers mix IFRS and DART-specific taxonomies, and some only tag the line
with a free-text label. Revenue candidates therefore carry a priority so
the "real" revenue line wins over segment or label-only lines.
"""

from enum import IntEnum
from typing import Optional, Tuple

from .data_models import FiledRow, Metric


class AccountPriority(IntEnum):
    """Ranking tiers for account candidates (higher wins)."""

    DEFAULT = 0
    LABEL = 10
    FALLBACK = 20
    PREFIX = 30
    EXACT = 40


PRIMARY_REVENUE_ID = "ifrs-full_Revenue"
FALLBACK_REVENUE_IDS = ("dart_OperatingRevenue", "dart_Revenue")
REVENUE_IDS = (PRIMARY_REVENUE_ID,) + FALLBACK_REVENUE_IDS
REVENUE_LABEL_KEYWORD = "매출"

OPERATING_INCOME_IDS = (
    "dart_OperatingIncomeLoss",
    "ifrs-full_ProfitLossFromOperatingActivities",
)
OPERATING_INCOME_LABEL_KEYWORDS = ("영업이익", "영업손익")


def is_revenue_account(account_id: str, account_label: str = "") -> bool:
    if account_id in REVENUE_IDS:
        return True
    if any(account_id.startswith(prefix) for prefix in REVENUE_IDS):
        return True
    return REVENUE_LABEL_KEYWORD in (account_label or "")


def is_operating_income_account(account_id: str, account_label: str = "") -> bool:
    if account_id in OPERATING_INCOME_IDS:
        return True
    if any(account_id.startswith(prefix) for prefix in OPERATING_INCOME_IDS):
        return True
    label = account_label or ""
    return any(keyword in label for keyword in OPERATING_INCOME_LABEL_KEYWORDS)


def revenue_priority(account_id: str, account_label: str = "") -> int:
    """
    Score a revenue account identifier.

    Args:
        account_id: Taxonomy identifier of the line
        account_label: Free-text label; pass "" to score identifiers only

    Returns:
        Integer priority from :class:`AccountPriority`
    """
    if account_id == PRIMARY_REVENUE_ID:
        return int(AccountPriority.EXACT)
    if account_id.startswith(PRIMARY_REVENUE_ID):
        return int(AccountPriority.PREFIX)
    if account_id in FALLBACK_REVENUE_IDS:
        return int(AccountPriority.FALLBACK)
    if REVENUE_LABEL_KEYWORD in (account_label or ""):
        return int(AccountPriority.LABEL)
    return int(AccountPriority.DEFAULT)


def operating_income_priority(account_id: str, account_label: str = "") -> int:
    """Score an operating-income identifier with the same tier scheme."""
    if account_id in OPERATING_INCOME_IDS:
        return int(AccountPriority.EXACT)
    if any(account_id.startswith(prefix) for prefix in OPERATING_INCOME_IDS):
        return int(AccountPriority.PREFIX)
    if any(keyword in (account_label or "") for keyword in OPERATING_INCOME_LABEL_KEYWORDS):
        return int(AccountPriority.LABEL)
    return int(AccountPriority.DEFAULT)


def classify_row(row: FiledRow, metric: Metric) -> Optional[Tuple[FiledRow, int]]:
    """
    Decide whether ``row`` is a usable candidate for ``metric``.

    Zero revenue is treated as an extraction failure and dropped; zero
    operating income is a legitimate value and kept.

    Returns:
        ``(row, priority)`` for accepted rows, otherwise None
    """
    if metric is Metric.REVENUE:
        if not is_revenue_account(row.account_id, row.account_label):
            return None
        if row.amount == 0:
            return None
        return row, revenue_priority(row.account_id, row.account_label)

    if not is_operating_income_account(row.account_id, row.account_label):
        return None
    return row, operating_income_priority(row.account_id, row.account_label)
