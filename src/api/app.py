"""Application factory for the revenue data API."""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path
from typing import Optional

from fastapi import FastAPI

from .data_router import get_revenue_service, router
from .data_service import RevenueDataService


ARTIFACT_ENV_VAR = "DART_REVENUE_DATA"


def create_app(
    artifact_path: Optional[Path | str] = None,
    cache_ttl: timedelta | int | float = timedelta(minutes=5),
) -> FastAPI:
    """
    Create the FastAPI application serving one reconciled artifact.

    Args:
        artifact_path: JSON document written by ``extract_revenue.py``. When
            omitted, the router's default service (``data/revenue-data.json``)
            answers requests.
        cache_ttl: How long the parsed artifact stays in memory.
    """

    app = FastAPI(
        title="DART Revenue Data API",
        version="0.1.0",
        description=(
            "Read-only lookups over the reconciled quarterly revenue and "
            "operating-income series produced by extract_revenue.py."
        ),
    )
    app.include_router(router)

    if artifact_path is not None:
        service = RevenueDataService(artifact_path, cache_ttl=cache_ttl)
        app.state.revenue_service = service
        app.dependency_overrides[get_revenue_service] = lambda: service

    return app


app = create_app(os.environ.get(ARTIFACT_ENV_VAR))
