"""
Record filters and the pipeline that composes them.
"""

from .base_filter import BaseFilter
from .filter_pipeline import FilterPipeline
from .record_filters import CountryFilter, MetricPresenceFilter, YearCeilingFilter

__all__ = [
    "BaseFilter",
    "CountryFilter",
    "FilterPipeline",
    "MetricPresenceFilter",
    "YearCeilingFilter",
]
