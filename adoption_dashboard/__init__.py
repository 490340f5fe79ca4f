"""
Data pipeline behind the AI adoption dashboard.

Parses uploaded CSV text, filters it by country and year, and aggregates it
into the series and counts the charts render.
"""

from adoption_dashboard.core.errors import (
    ColumnNotFoundError,
    CoercionFailure,
    DashboardError,
    DatasetNotLoadedError,
    ParseError,
)
from adoption_dashboard.core.models import AggregationRequest, Dataset, DashboardView, FilterParams, Record
from adoption_dashboard.pipeline import DashboardPipeline

__version__ = "0.1.0"

__all__ = [
    "AggregationRequest",
    "CoercionFailure",
    "ColumnNotFoundError",
    "DashboardError",
    "DashboardPipeline",
    "DashboardView",
    "Dataset",
    "DatasetNotLoadedError",
    "FilterParams",
    "ParseError",
    "Record",
]
