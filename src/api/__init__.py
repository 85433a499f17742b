"""API package exposing lookups over the reconciled revenue artifact."""

from .app import app, create_app
from .data_service import ArtifactNotFoundError, DataRetrievalError, RevenueDataService
from .data_models import SeriesPoint

__all__ = [
    "app",
    "create_app",
    "ArtifactNotFoundError",
    "DataRetrievalError",
    "RevenueDataService",
    "SeriesPoint",
]
