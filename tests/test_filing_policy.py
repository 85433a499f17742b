"""Tests for the ordered filing selection policy."""

from pathlib import Path

from src.dart_revenue import FilingCategory, FilingSelectionPolicy, FilingSlot, ReportPeriod, StatementType

from filing_helpers import filing_name


def test_slot_prefix_encodes_file_naming_convention():
    slot = FilingSlot(
        year=2024,
        period=ReportPeriod.H1,
        category=FilingCategory.BANK,
        statement=StatementType.COMPREHENSIVE,
    )

    assert slot.name_prefix == "2024_반기보고서_03_포괄손익계산서_은행_연결_"
    assert slot.matches("2024_반기보고서_03_포괄손익계산서_은행_연결_20240814.txt")
    assert not slot.matches("2024_반기보고서_02_손익계산서_은행_연결_20240814.txt")


def test_general_category_does_not_match_financial_categories():
    slot = FilingSlot(
        year=2024,
        period=ReportPeriod.Q1,
        category=FilingCategory.GENERAL,
        statement=StatementType.INCOME,
    )

    assert slot.matches(filing_name(2024, "1분기보고서"))
    assert not slot.matches(filing_name(2024, "1분기보고서", category="은행_연결"))


def test_plan_orders_categories_then_statement_types():
    names = [
        filing_name(2024, "1분기보고서", category="연결", statement="03_포괄손익계산서"),
        filing_name(2024, "1분기보고서", category="연결", statement="02_손익계산서"),
        filing_name(2024, "1분기보고서", category="보험_연결"),
        filing_name(2024, "1분기보고서", category="은행_연결"),
        "unrelated.txt",
    ]
    policy = FilingSelectionPolicy(Path("/unused"), file_names=names)

    plan = policy.plan([(2024, ReportPeriod.Q1)])

    categories = [(item.slot.category, item.slot.statement) for item in plan]
    assert categories == [
        (FilingCategory.BANK, StatementType.INCOME),
        (FilingCategory.INSURANCE, StatementType.INCOME),
        (FilingCategory.GENERAL, StatementType.INCOME),
        (FilingCategory.GENERAL, StatementType.COMPREHENSIVE),
    ]
    assert [item.sequence for item in plan] == [0, 1, 2, 3]


def test_plan_follows_tracked_period_order():
    names = [
        filing_name(2024, "사업보고서"),
        filing_name(2024, "반기보고서"),
        filing_name(2024, "1분기보고서"),
        filing_name(2025, "1분기보고서"),
    ]
    policy = FilingSelectionPolicy(Path("/unused"), file_names=names)

    plan = policy.plan(
        [
            (2024, ReportPeriod.Q1),
            (2024, ReportPeriod.H1),
            (2024, ReportPeriod.Q3),
            (2024, ReportPeriod.FY),
            (2025, ReportPeriod.Q1),
        ]
    )

    assert [(item.year, item.period) for item in plan] == [
        (2024, ReportPeriod.Q1),
        (2024, ReportPeriod.H1),
        (2024, ReportPeriod.FY),
        (2025, ReportPeriod.Q1),
    ]


def test_missing_directory_yields_empty_plan(tmp_path):
    policy = FilingSelectionPolicy(tmp_path / "missing")

    assert policy.plan([(2024, ReportPeriod.Q1)]) == []


def test_directory_listing_is_sorted(write_filing):
    write_filing(filing_name(2024, "1분기보고서").replace("20250101", "b"), [])
    write_filing(filing_name(2024, "1분기보고서").replace("20250101", "a"), [])

    policy = FilingSelectionPolicy(write_filing.data_dir)
    plan = policy.plan([(2024, ReportPeriod.Q1)])

    assert [item.path.name for item in plan] == [
        "2024_1분기보고서_02_손익계산서_연결_a.txt",
        "2024_1분기보고서_02_손익계산서_연결_b.txt",
    ]
