"""
Core data models for the dashboard data pipeline.

All models use Pydantic for runtime validation and are frozen once built.
"""

from .aggregate import (
    CategoryCount,
    CountryTotal,
    CrossTab,
    DashboardView,
    FilterOptions,
    GroupSeries,
    SeriesPoint,
)
from .params import ALL_COUNTRIES, NO_YEAR_CEILING, AggregationRequest, FilterParams
from .record import Dataset, FieldValue, Record

__all__ = [
    "ALL_COUNTRIES",
    "NO_YEAR_CEILING",
    "AggregationRequest",
    "CategoryCount",
    "CountryTotal",
    "CrossTab",
    "DashboardView",
    "Dataset",
    "FieldValue",
    "FilterOptions",
    "FilterParams",
    "GroupSeries",
    "Record",
    "SeriesPoint",
]
