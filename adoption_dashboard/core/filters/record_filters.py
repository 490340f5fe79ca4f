"""
Concrete record filters: country, year ceiling, and metric presence.
"""

from adoption_dashboard.core.models import ALL_COUNTRIES, Record

from .base_filter import BaseFilter


class CountryFilter(BaseFilter):
    """
    Keeps records whose country equals the selection exactly.

    "All" keeps every record.
    """

    def __init__(self, country: str, field_name: str = "Country"):
        super().__init__(field_name)
        self.country = country

    @property
    def selects_all(self) -> bool:
        return self.country == ALL_COUNTRIES

    def matches(self, record: Record) -> bool:
        if self.selects_all:
            return True
        return record.text(self.field_name) == self.country

    @property
    def filter_name(self) -> str:
        return "country"


class YearCeilingFilter(BaseFilter):
    """
    Keeps records whose year is at most max_year.

    A year that is not an integer fails the filter.
    """

    def __init__(self, max_year: int, field_name: str = "Year"):
        super().__init__(field_name)
        self.max_year = max_year

    def matches(self, record: Record) -> bool:
        year = record.year(self.field_name)
        return year is not None and year <= self.max_year

    @property
    def filter_name(self) -> str:
        return "year"


class MetricPresenceFilter(BaseFilter):
    """Keeps records whose metric column holds a number."""

    def matches(self, record: Record) -> bool:
        return record.number(self.field_name) is not None

    @property
    def filter_name(self) -> str:
        return "metric_presence"
