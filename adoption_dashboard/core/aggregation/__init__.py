"""
Aggregations over filtered datasets.
"""

from .aggregator import Aggregator, group_sort_key, split_tokens
from .running_mean import RunningMean

__all__ = [
    "Aggregator",
    "RunningMean",
    "group_sort_key",
    "split_tokens",
]
