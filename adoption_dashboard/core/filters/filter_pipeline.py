"""
Filter pipeline composing record filters into one filtered view.
"""

from adoption_dashboard.core.models import Dataset, FilterParams
from adoption_dashboard.observability.logger import get_logger
from adoption_dashboard.observability.metrics import increment_counter, records_filtered_out_total

from .base_filter import BaseFilter
from .record_filters import CountryFilter, MetricPresenceFilter, YearCeilingFilter


logger = get_logger(__name__)


class FilterPipeline:
    """
    Applies country, year-ceiling and optional metric-presence filters.

    Filters combine by intersection. The result keeps the original relative
    order of the records, so it does not depend on the order filters are
    listed in.
    """

    def __init__(self, country_column: str = "Country", year_column: str = "Year"):
        """
        Initialize the filter pipeline.

        Args:
            country_column: Column compared against FilterParams.country
            year_column: Column compared against FilterParams.max_year
        """
        self.country_column = country_column
        self.year_column = year_column

    def build_filters(self, params: FilterParams, metric: str | None = None) -> list[BaseFilter]:
        """Instantiate the filters a parameter set calls for."""
        filters: list[BaseFilter] = [
            CountryFilter(params.country, field_name=self.country_column),
            YearCeilingFilter(params.max_year, field_name=self.year_column),
        ]
        if metric is not None:
            filters.append(MetricPresenceFilter(metric))
        return filters

    def apply(self, dataset: Dataset, params: FilterParams, metric: str | None = None) -> Dataset:
        """
        Filter a dataset.

        Args:
            dataset: Records to filter
            params: Country and year selection
            metric: When given, also drop records whose metric is not numeric

        Returns:
            Dataset with the same header holding the surviving records

        Raises:
            ColumnNotFoundError: If a filter's column is missing
        """
        return self.apply_filters(dataset, self.build_filters(params, metric))

    def apply_filters(self, dataset: Dataset, filters: list[BaseFilter]) -> Dataset:
        """Keep the records every filter matches, in their original order."""
        active = [f for f in filters if not (isinstance(f, CountryFilter) and f.selects_all)]
        for record_filter in active:
            record_filter.check_columns(dataset)

        kept = []
        rejected = {record_filter.filter_name: 0 for record_filter in active}
        for record in dataset:
            failed = [f.filter_name for f in active if not f.matches(record)]
            for name in failed:
                rejected[name] += 1
            if not failed:
                kept.append(record)

        for name, count in rejected.items():
            increment_counter(records_filtered_out_total, count, filter=name)

        logger.debug(
            f"Filtered {len(dataset)} records down to {len(kept)}",
            extra={"rejected": rejected},
        )
        return dataset.with_records(kept)
