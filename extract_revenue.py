#!/usr/bin/env python3
"""
Reconcile quarterly revenue and operating income from DART extracts.

Usage Examples:
    # Reconcile every extract under ./data into data/revenue-data.json
    python extract_revenue.py

    # Track specific years and also export a long-format table
    python extract_revenue.py --data-dir ./extracts --years 2023,2024,2025 \\
        --long-table output/series.parquet
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from src.dart_revenue import ExtractionConfig, ExtractionError, ReportPeriod, run_extraction
from src.dart_revenue.config import DEFAULT_YEARS

logger = logging.getLogger(__name__)


def parse_years(value: str) -> List[int]:
    """Parse comma-separated fiscal years."""
    try:
        years = [int(token) for token in value.split(",") if token.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid year list: {value}")
    if not years:
        raise argparse.ArgumentTypeError("At least one year is required")
    return years


def parse_periods(value: str) -> List[ReportPeriod]:
    """Parse comma-separated report periods (Q1, H1, Q3, FY)."""
    try:
        return [ReportPeriod(token.strip().upper()) for token in value.split(",") if token.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid period list: {value}. Use any of Q1, H1, Q3, FY"
        )


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reconcile quarterly revenue/operating income from DART statement extracts",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path("data"),
        help="Directory containing the tab-delimited extracts (default: data)",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("data/revenue-data.json"),
        help="Output JSON path (default: data/revenue-data.json)",
    )
    parser.add_argument(
        "--years",
        type=parse_years,
        default=list(DEFAULT_YEARS),
        help="Comma-separated fiscal years to track (default: %(default)s)",
    )
    parser.add_argument(
        "--periods",
        type=parse_periods,
        default=list(ReportPeriod),
        help="Comma-separated report periods to read (default: Q1,H1,Q3,FY)",
    )
    parser.add_argument(
        "--encoding",
        default="cp949",
        help="Source encoding of the extracts (default: cp949)",
    )
    parser.add_argument(
        "--long-table",
        type=Path,
        help="Optional CSV or .parquet path for a long-format export",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def build_config(args: argparse.Namespace) -> ExtractionConfig:
    return ExtractionConfig(
        data_dir=args.data_dir,
        output_path=args.out,
        years=tuple(args.years),
        periods=tuple(args.periods),
        encoding=args.encoding,
        long_table_path=args.long_table,
    )


def main(argv: Optional[list[str]] = None) -> int:
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        result = run_extraction(build_config(args))
    except ExtractionError as exc:
        logger.error("Extraction failed: %s", exc)
        return 1

    print(f"✅ Saved {result.summary.company_count} companies to {args.out}")
    print(
        f"   {result.summary.revenue_period_count} revenue periods, "
        f"{result.summary.operating_income_period_count} operating income periods"
    )
    if result.files_failed:
        print(f"   {result.files_failed} filing(s) could not be read")

    if result.warnings:
        print("\nWarnings:")
        for warning in result.warnings:
            print(f"  - {warning}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
