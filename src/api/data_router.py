"""FastAPI router exposing the `/revenue` endpoints."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from .data_service import (
    ArtifactNotFoundError,
    DataRetrievalError,
    RevenueDataService,
    normalize_entity_code,
    resolve_metric,
)


router = APIRouter(prefix="/revenue", tags=["revenue"])
_revenue_service = RevenueDataService()
logger = logging.getLogger(__name__)


def get_revenue_service() -> RevenueDataService:
    return _revenue_service


@router.get("/{entity_code}")
def get_company_series(
    entity_code: str,
    years: Optional[List[int]] = Query(None, alias="year"),
    metric: str = Query("revenue"),
    service: RevenueDataService = Depends(get_revenue_service),
):
    """Return the quarterly series for ``entity_code``."""

    logger.info("Fetching %s series for entity=%s years=%s", metric, entity_code, years)
    try:
        code = normalize_entity_code(entity_code)
        resolved_metric = resolve_metric(metric)
        company = service.get_company(code)
    except ArtifactNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except DataRetrievalError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if company is None:
        raise HTTPException(status_code=404, detail=f"No data for entity {code}")

    requested_years = years or [int(year) for year in company.get(resolved_metric.value) or {}]
    points = service.get_quarterly_series(code, requested_years, resolved_metric)

    logger.info("Returning %d points for entity=%s", len(points), code)
    return {
        "entityCode": code,
        "companyName": company.get("companyName"),
        "metric": resolved_metric.value,
        "count": len(points),
        "points": [point.to_dict() for point in points],
    }


@router.get("/{entity_code}/{year}/{period}")
def get_period_amount(
    entity_code: str,
    year: int,
    period: str,
    metric: str = Query("revenue"),
    service: RevenueDataService = Depends(get_revenue_service),
):
    """Return a single amount; ``amount`` is null when not available."""

    try:
        code = normalize_entity_code(entity_code)
        resolved_metric = resolve_metric(metric)
        amount = service.get_amount(code, year, period, resolved_metric)
    except ArtifactNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except DataRetrievalError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return {
        "entityCode": code,
        "year": year,
        "period": period.upper(),
        "metric": resolved_metric.value,
        "amount": amount,
        "available": amount is not None,
    }
