"""Tests for the extract_revenue command-line entry point."""

from __future__ import annotations

import argparse
import json

import pytest

import extract_revenue
from src.dart_revenue import ReportPeriod

from filing_helpers import filing_name, make_line


def test_parse_years_and_periods():
    assert extract_revenue.parse_years("2024, 2025") == [2024, 2025]
    assert extract_revenue.parse_periods("q1,fy") == [ReportPeriod.Q1, ReportPeriod.FY]

    with pytest.raises(argparse.ArgumentTypeError):
        extract_revenue.parse_years("twenty")
    with pytest.raises(argparse.ArgumentTypeError):
        extract_revenue.parse_periods("Q2")


def test_main_writes_artifact_and_long_table(write_filing, tmp_path, capsys):
    write_filing(
        filing_name(2024, "1분기보고서"),
        [make_line("[005930]", "삼성전자", "ifrs-full_Revenue", "매출액", "1,000,000")],
    )
    out = tmp_path / "revenue-data.json"
    long_table = tmp_path / "series.csv"

    exit_code = extract_revenue.main(
        [
            "--data-dir",
            str(write_filing.data_dir),
            "--out",
            str(out),
            "--years",
            "2024",
            "--long-table",
            str(long_table),
        ]
    )

    assert exit_code == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["005930"]["revenue"]["2024"]["Q1"] == 1_000_000
    assert long_table.exists()
    assert "Saved 1 companies" in capsys.readouterr().out


def test_main_returns_non_zero_when_output_cannot_be_written(write_filing, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")

    exit_code = extract_revenue.main(
        [
            "--data-dir",
            str(write_filing.data_dir),
            "--out",
            str(blocker / "revenue-data.json"),
        ]
    )

    assert exit_code == 1
