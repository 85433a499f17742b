"""
DART revenue reconciliation package.

Turns tab-delimited financial-statement extracts into a per-company,
per-year quarterly revenue and operating-income series.
"""

from .data_models import (
    AccountCandidate,
    AmountParse,
    CompanyYearRecord,
    ExtractionResult,
    FiledRow,
    Metric,
    ReportPeriod,
    RunSummary,
)
from .exceptions import ExtractionError, OutputWriteError
from .row_decoder import decode_line, iter_filing_rows
from .account_classifier import (
    AccountPriority,
    classify_row,
    is_operating_income_account,
    is_revenue_account,
    revenue_priority,
)
from .file_aggregator import FileAggregate, aggregate_rows
from .filing_policy import (
    FilingCategory,
    FilingSelectionPolicy,
    FilingSlot,
    PlannedFiling,
    StatementType,
)
from .accumulator import ReconciliationContext
from .reconciler import account_pool, choose_account_id, reconcile_operating_income, reconcile_revenue
from .derived_quarters import apply_derived_quarters
from .output_writer import (
    assemble_payload,
    build_series_dataframe,
    export_series_table,
    summarize_payload,
    write_payload,
)
from .config import ExtractionConfig
from .pipeline import RevenuePipeline, run_extraction

__all__ = [
    "AccountCandidate",
    "AmountParse",
    "CompanyYearRecord",
    "ExtractionResult",
    "FiledRow",
    "Metric",
    "ReportPeriod",
    "RunSummary",
    "ExtractionError",
    "OutputWriteError",
    "decode_line",
    "iter_filing_rows",
    "AccountPriority",
    "classify_row",
    "is_operating_income_account",
    "is_revenue_account",
    "revenue_priority",
    "FileAggregate",
    "aggregate_rows",
    "FilingCategory",
    "FilingSelectionPolicy",
    "FilingSlot",
    "PlannedFiling",
    "StatementType",
    "ReconciliationContext",
    "account_pool",
    "choose_account_id",
    "reconcile_operating_income",
    "reconcile_revenue",
    "apply_derived_quarters",
    "assemble_payload",
    "build_series_dataframe",
    "export_series_table",
    "summarize_payload",
    "write_payload",
    "ExtractionConfig",
    "RevenuePipeline",
    "run_extraction",
]
