"""Lookup service over the persisted revenue artifact."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from src.dart_revenue.data_models import OUTPUT_PERIOD_KEYS, Metric

from .data_models import SeriesPoint


logger = logging.getLogger(__name__)

HUNDRED_MILLION = 100_000_000
QUARTER_KEYS = ("Q1", "Q2", "Q3", "Q4")
_ENTITY_CODE_PATTERN = re.compile(r"^\d{6}$")


class DataRetrievalError(Exception):
    """Raised when the lookup service cannot satisfy a request."""


class ArtifactNotFoundError(DataRetrievalError):
    """Raised when the reconciled artifact has not been produced yet."""


@dataclass(slots=True)
class _ArtifactCache:
    payload: Dict[str, Dict[str, Any]]
    loaded_at: datetime
    mtime: float


def normalize_entity_code(value: str) -> str:
    """Reduce ``005930`` / ``005930.KS`` / ``[005930]`` to ``005930``."""
    cleaned = value.strip().replace("[", "").replace("]", "")
    cleaned = cleaned.split(".", 1)[0]
    if not _ENTITY_CODE_PATTERN.match(cleaned):
        raise DataRetrievalError(f"Invalid entity code '{value}'. Expected six digits")
    return cleaned


def resolve_metric(metric: str) -> Metric:
    for candidate in Metric:
        if metric in (candidate.value, candidate.name, candidate.name.lower()):
            return candidate
    allowed = ", ".join(candidate.value for candidate in Metric)
    raise DataRetrievalError(f"Unsupported metric '{metric}'. Allowed values: {allowed}")


def resolve_period(period: str) -> str:
    resolved = period.upper()
    if resolved not in OUTPUT_PERIOD_KEYS:
        raise DataRetrievalError(
            f"Unsupported period '{period}'. Allowed values: {', '.join(OUTPUT_PERIOD_KEYS)}"
        )
    return resolved


class RevenueDataService:
    """Serve amounts from the reconciled JSON artifact."""

    def __init__(
        self,
        artifact_path: Path | str = Path("data/revenue-data.json"),
        cache_ttl: timedelta | int | float = timedelta(minutes=5),
    ) -> None:
        """
        Initialize the service.

        Args:
            artifact_path: Path of the JSON document written by the extractor.
            cache_ttl: Duration to keep the parsed artifact in memory. Provide
                seconds as int/float or a :class:`datetime.timedelta`.
        """
        self.artifact_path = Path(artifact_path)
        self._cache: Optional[_ArtifactCache] = None
        if isinstance(cache_ttl, (int, float)):
            cache_ttl = timedelta(seconds=float(cache_ttl))
        if cache_ttl.total_seconds() < 0:
            raise ValueError("cache_ttl must be non-negative")
        self._cache_ttl = cache_ttl

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get_company(self, entity_code: str) -> Optional[Dict[str, Any]]:
        """Return the raw record for ``entity_code`` or None."""
        payload = self._load_payload()
        return payload.get(normalize_entity_code(entity_code))

    def get_amount(
        self,
        entity_code: str,
        year: int,
        period: str,
        metric: str | Metric = Metric.REVENUE,
    ) -> Optional[float]:
        """
        Return the raw amount for one company/year/period.

        Missing companies, years or periods yield None, never zero.
        """
        resolved_metric = metric if isinstance(metric, Metric) else resolve_metric(metric)
        resolved_period = resolve_period(period)

        company = self.get_company(entity_code)
        if company is None:
            return None

        year_values = (company.get(resolved_metric.value) or {}).get(str(year))
        if not year_values:
            return None

        return year_values.get(resolved_period)

    def get_quarterly_series(
        self,
        entity_code: str,
        years: Iterable[int],
        metric: str | Metric = Metric.REVENUE,
    ) -> List[SeriesPoint]:
        """Non-null Q1..Q4 values expressed in hundred-million (억) units."""
        resolved_metric = metric if isinstance(metric, Metric) else resolve_metric(metric)
        points: List[SeriesPoint] = []
        for year in sorted(set(years)):
            for quarter in QUARTER_KEYS:
                amount = self.get_amount(entity_code, year, quarter, resolved_metric)
                if amount is None:
                    continue
                points.append(
                    SeriesPoint(
                        year=year,
                        quarter=quarter,
                        amount=amount,
                        amount_hundred_million=amount / HUNDRED_MILLION,
                    )
                )
        return points

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _load_payload(self) -> Dict[str, Dict[str, Any]]:
        if not self.artifact_path.exists():
            raise ArtifactNotFoundError(f"Revenue artifact not found: {self.artifact_path}")

        mtime = self.artifact_path.stat().st_mtime
        now = datetime.utcnow()
        if (
            self._cache is not None
            and self._cache.mtime == mtime
            and now - self._cache.loaded_at <= self._cache_ttl
        ):
            return self._cache.payload

        try:
            with self.artifact_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as exc:
            raise DataRetrievalError(
                f"Failed to load revenue artifact {self.artifact_path}: {exc}"
            ) from exc

        self._cache = _ArtifactCache(payload=payload, loaded_at=now, mtime=mtime)
        logger.info(
            "Loaded %d companies from %s", len(payload), self.artifact_path
        )
        return payload
