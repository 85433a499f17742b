"""
End-to-end reconciliation of DART income-statement extracts.

Filings are applied strictly sequentially in the order produced by the
:class:`FilingSelectionPolicy`; reconciliation only starts once every
filing has been accumulated.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .accumulator import ReconciliationContext
from .config import ExtractionConfig
from .data_models import CompanyYearRecord, ExtractionResult, Metric
from .derived_quarters import apply_derived_quarters
from .file_aggregator import aggregate_rows
from .filing_policy import FilingSelectionPolicy, PlannedFiling
from .output_writer import (
    assemble_payload,
    build_series_dataframe,
    export_series_table,
    summarize_payload,
    write_payload,
)
from .reconciler import reconcile_operating_income, reconcile_revenue
from .row_decoder import iter_filing_rows


logger = logging.getLogger(__name__)


class RevenuePipeline:
    """Accumulate, reconcile and assemble one extraction run."""

    def __init__(self, config: ExtractionConfig, policy: Optional[FilingSelectionPolicy] = None):
        self.config = config
        self.policy = policy or FilingSelectionPolicy(config.data_dir, config.file_names)
        self.context = ReconciliationContext()
        self.files_processed = 0
        self.files_failed = 0

    def accumulate(self) -> List[PlannedFiling]:
        plan = self.policy.plan(self.config.tracked_periods())
        for filing in plan:
            self._apply_filing(filing)
        return plan

    def _apply_filing(self, filing: PlannedFiling) -> None:
        logger.info(
            "Reading %s (%s %s, %s)",
            filing.path.name,
            filing.year,
            filing.period.value,
            filing.slot.category.name.lower(),
        )
        try:
            aggregate = aggregate_rows(
                iter_filing_rows(filing.path, self.config.encoding),
                sequence=filing.sequence,
                source=filing.path.name,
            )
        except (OSError, UnicodeError) as exc:
            self.files_failed += 1
            logger.error("Failed to read %s: %s", filing.path, exc)
            return
        except Exception as exc:
            self.files_failed += 1
            logger.error("Failed to aggregate %s: %s", filing.path, exc)
            return

        self.context.apply(aggregate, filing.year, filing.period)
        self.files_processed += 1

    def reconcile(self) -> tuple[List[CompanyYearRecord], List[str]]:
        records: List[CompanyYearRecord] = []
        warnings: List[str] = []

        reconcilers = {
            Metric.REVENUE: reconcile_revenue,
            Metric.OPERATING_INCOME: reconcile_operating_income,
        }
        for metric, reconcile in reconcilers.items():
            for (code, year), candidates in self.context.iter_company_years(metric):
                try:
                    record = reconcile(code, year, candidates)
                    if record is None:
                        continue
                    warnings.extend(apply_derived_quarters(record))
                except Exception as exc:
                    logger.error(
                        "Failed to reconcile %s for %s/%s: %s", metric.value, code, year, exc
                    )
                    continue
                records.append(record)

        return records, warnings

    def run(self, write: bool = True) -> ExtractionResult:
        """
        Execute the run and, when ``write`` is set, persist the artifact.

        Raises:
            OutputWriteError: If the artifact (or long table) cannot be written
        """
        self.accumulate()
        records, warnings = self.reconcile()

        payload = assemble_payload(records, self.context.company_names)
        summary = summarize_payload(payload)

        if write:
            write_payload(payload, self.config.output_path)
            if self.config.long_table_path is not None:
                export_series_table(
                    build_series_dataframe(payload), self.config.long_table_path
                )

        logger.info(
            "Extracted %d companies: %d revenue periods, %d operating income periods",
            summary.company_count,
            summary.revenue_period_count,
            summary.operating_income_period_count,
        )
        if warnings:
            logger.info("%d derived quarters were rejected", len(warnings))

        return ExtractionResult(
            payload=payload,
            summary=summary,
            files_processed=self.files_processed,
            files_failed=self.files_failed,
            warnings=warnings,
        )


def run_extraction(config: ExtractionConfig, write: bool = True) -> ExtractionResult:
    """Convenience wrapper running a fresh :class:`RevenuePipeline`."""
    return RevenuePipeline(config).run(write=write)
