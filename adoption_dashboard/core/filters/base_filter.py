"""
Base filter interface for record filters.

All filters inherit from BaseFilter and implement matches().
"""

from abc import ABC, abstractmethod

from adoption_dashboard.core.models import Dataset, Record


class BaseFilter(ABC):
    """
    Abstract base class for record filters.

    A filter is a pure predicate over one record. Filters never reorder or
    modify records, so any set of them can be combined in any order.
    """

    def __init__(self, field_name: str):
        """
        Initialize filter.

        Args:
            field_name: Column the predicate reads
        """
        self.field_name = field_name

    def check_columns(self, dataset: Dataset) -> None:
        """
        Ensure the dataset has the column this filter reads.

        Raises:
            ColumnNotFoundError: If the column is missing
        """
        dataset.require_column(self.field_name)

    @abstractmethod
    def matches(self, record: Record) -> bool:
        """Return True to keep the record."""

    @property
    @abstractmethod
    def filter_name(self) -> str:
        """Return the filter identifier used in logs and metrics."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name})"
