"""Assemble and persist the reconciled per-company time series."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

import pandas as pd

from .data_models import OUTPUT_PERIOD_KEYS, CompanyYearRecord, Metric, RunSummary
from .exceptions import OutputWriteError


logger = logging.getLogger(__name__)

SERIES_COLUMNS = ["entity_code", "company_name", "metric", "year", "period", "amount"]


def assemble_payload(
    records: Iterable[CompanyYearRecord],
    company_names: Mapping[str, str],
) -> Dict[str, Dict[str, Any]]:
    """
    Fold reconciled records into the persisted structure::

        {code: {"companyName": ..., "revenue": {year: {...}},
                "operatingIncome": {year: {...}}}}

    Companies, years and period keys are emitted in a fixed order so the
    same inputs always serialize to the same bytes.
    """
    payload: Dict[str, Dict[str, Any]] = {}
    ordered = sorted(records, key=lambda record: (record.entity_code, record.year))

    for record in ordered:
        company = payload.setdefault(
            record.entity_code,
            {
                "companyName": company_names.get(record.entity_code, ""),
                Metric.REVENUE.value: {},
                Metric.OPERATING_INCOME.value: {},
            },
        )
        company[record.metric.value][str(record.year)] = record.to_dict()

    # A year reconciled for one metric carries an all-null record for the other.
    for company in payload.values():
        years = set(company[Metric.REVENUE.value]) | set(company[Metric.OPERATING_INCOME.value])
        for metric in Metric:
            series = company[metric.value]
            for year in sorted(years - set(series)):
                series[year] = {key: None for key in OUTPUT_PERIOD_KEYS}
            company[metric.value] = {year: series[year] for year in sorted(series)}

    return {code: payload[code] for code in sorted(payload)}


def summarize_payload(payload: Mapping[str, Mapping[str, Any]]) -> RunSummary:
    summary = RunSummary(company_count=len(payload))
    for company in payload.values():
        for year_values in company.get(Metric.REVENUE.value, {}).values():
            summary.revenue_period_count += sum(
                1 for value in year_values.values() if value is not None
            )
        for year_values in company.get(Metric.OPERATING_INCOME.value, {}).values():
            summary.operating_income_period_count += sum(
                1 for value in year_values.values() if value is not None
            )
    return summary


def serialize_payload(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def write_payload(payload: Mapping[str, Any], output_path: Path | str) -> Path:
    """
    Atomically replace ``output_path`` with the serialized payload.

    The document is written to a temporary file in the destination
    directory and moved into place, so readers never see a partial file.

    Raises:
        OutputWriteError: If the artifact cannot be written
    """
    target = Path(output_path)
    content = serialize_payload(payload)
    temp_name: Optional[str] = None

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, target)
    except OSError as exc:
        if temp_name and os.path.exists(temp_name):
            os.unlink(temp_name)
        raise OutputWriteError(f"Failed to write {target}: {exc}") from exc

    logger.info("Wrote reconciled series to %s", target)
    return target


def build_series_dataframe(payload: Mapping[str, Mapping[str, Any]]) -> pd.DataFrame:
    """Flatten the payload into one row per non-null (metric, year, period)."""

    records: list[dict] = []
    for code, company in payload.items():
        for metric in Metric:
            for year, values in company.get(metric.value, {}).items():
                for period in OUTPUT_PERIOD_KEYS:
                    amount = values.get(period)
                    if amount is None:
                        continue
                    records.append(
                        {
                            "entity_code": code,
                            "company_name": company.get("companyName", ""),
                            "metric": metric.value,
                            "year": int(year),
                            "period": period,
                            "amount": amount,
                        }
                    )

    return pd.DataFrame.from_records(records, columns=SERIES_COLUMNS)


def export_series_table(df: pd.DataFrame, path: Path | str) -> Path:
    """Write the long-format table as parquet (``.parquet``) or CSV."""
    target = Path(path)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        if target.suffix.lower() == ".parquet":
            df.to_parquet(target, index=False)
        else:
            df.to_csv(target, index=False, encoding="utf-8")
    except ImportError as exc:  # pragma: no cover - dependent on optional engine
        raise OutputWriteError(
            "pyarrow or fastparquet is required to write parquet outputs"
        ) from exc
    except OSError as exc:
        raise OutputWriteError(f"Failed to write {target}: {exc}") from exc

    logger.info("Wrote %d series rows to %s", len(df), target)
    return target
