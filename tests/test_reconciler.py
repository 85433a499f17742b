"""Tests for cross-period account selection and reconciliation."""

from src.dart_revenue import (
    AccountCandidate,
    Metric,
    ReportPeriod,
    account_pool,
    choose_account_id,
    reconcile_operating_income,
    reconcile_revenue,
)


def _candidate(account_id: str, amount, priority: int = 0, sequence: int = 0) -> AccountCandidate:
    return AccountCandidate(account_id=account_id, amount=amount, priority=priority, sequence=sequence)


def test_pool_is_intersection_of_observed_periods():
    candidates = {
        ReportPeriod.Q1: [_candidate("ifrs-full_Revenue", 10), _candidate("dart_Revenue", 12)],
        ReportPeriod.H1: [_candidate("dart_Revenue", 25), _candidate("ifrs-full_Revenue", 20)],
        ReportPeriod.Q3: [_candidate("ifrs-full_Revenue", 30)],
        ReportPeriod.FY: [],
    }

    assert account_pool(candidates) == ["ifrs-full_Revenue"]


def test_pool_falls_back_to_most_frequent_ids():
    candidates = {
        ReportPeriod.Q1: [_candidate("entity_SalesA", 10)],
        ReportPeriod.H1: [_candidate("entity_SalesA", 20)],
        ReportPeriod.Q3: [_candidate("dart_Revenue", 30)],
        ReportPeriod.FY: [_candidate("dart_OperatingRevenue", 40)],
    }

    assert account_pool(candidates) == ["entity_SalesA"]


def test_frequency_ties_are_broken_by_priority():
    candidates = {
        ReportPeriod.Q1: [_candidate("entity_SalesA", 10), _candidate("ifrs-full_Revenue", 11)],
        ReportPeriod.H1: [_candidate("entity_SalesA", 20)],
        ReportPeriod.Q3: [_candidate("ifrs-full_Revenue", 31), _candidate("dart_Revenue", 30)],
    }

    assert account_pool(candidates) == ["entity_SalesA", "ifrs-full_Revenue"]
    assert choose_account_id(candidates) == "ifrs-full_Revenue"


def test_priority_ties_keep_first_seen_identifier():
    candidates = {
        ReportPeriod.Q1: [_candidate("dart_Revenue", 10), _candidate("dart_OperatingRevenue", 11)],
        ReportPeriod.H1: [_candidate("dart_OperatingRevenue", 21), _candidate("dart_Revenue", 20)],
    }

    assert choose_account_id(candidates) == "dart_Revenue"


def test_reconcile_revenue_uses_one_account_id_for_every_period():
    candidates = {
        ReportPeriod.Q1: [_candidate("ifrs-full_Revenue", 100), _candidate("entity_Segment", 900)],
        ReportPeriod.H1: [_candidate("ifrs-full_Revenue", 250)],
        ReportPeriod.Q3: [_candidate("entity_Segment", 950), _candidate("ifrs-full_Revenue", 400)],
        ReportPeriod.FY: [_candidate("entity_Segment", 990)],
    }

    record = reconcile_revenue("005930", 2024, candidates)

    assert record.account_id == "ifrs-full_Revenue"
    assert record.metric is Metric.REVENUE
    assert (record.q1, record.h1, record.q3, record.fy) == (100, 250, 400, None)


def test_reconcile_revenue_prefers_latest_applied_filing():
    candidates = {
        ReportPeriod.Q1: [
            _candidate("ifrs-full_Revenue", 900, sequence=0),
            _candidate("ifrs-full_Revenue", 100, sequence=4),
        ],
    }

    record = reconcile_revenue("005930", 2024, candidates)

    assert record.q1 == 100


def test_reconcile_revenue_skips_years_without_candidates():
    assert reconcile_revenue("005930", 2024, {}) is None
    assert reconcile_revenue("005930", 2024, {ReportPeriod.Q1: []}) is None


def test_reconcile_operating_income_picks_largest_absolute_value():
    candidates = {
        ReportPeriod.Q1: [_candidate("dart_OperatingIncomeLoss", 30), _candidate("entity_Op", -50)],
        ReportPeriod.H1: [_candidate("dart_OperatingIncomeLoss", -80)],
    }

    record = reconcile_operating_income("000660", 2024, candidates)

    assert record.metric is Metric.OPERATING_INCOME
    assert record.q1 == -50
    assert record.h1 == -80
    assert record.q3 is None
    assert record.account_id is None
