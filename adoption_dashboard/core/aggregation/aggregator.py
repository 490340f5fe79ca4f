"""
Aggregations feeding the dashboard charts.

Every method is a pure function of the (already filtered) dataset and its
arguments. Distinct values are collected in first-seen order and then
sorted where a sorted result is promised, so output is reproducible.
"""

from adoption_dashboard.core.coercion import parse_number
from adoption_dashboard.core.errors import CoercionFailure
from adoption_dashboard.core.models import (
    ALL_COUNTRIES,
    CategoryCount,
    CountryTotal,
    CrossTab,
    Dataset,
    FilterOptions,
    GroupSeries,
    SeriesPoint,
)
from adoption_dashboard.observability.metrics import aggregation_duration_seconds, track_duration

from .running_mean import RunningMean


def group_sort_key(key: str) -> tuple:
    """
    Ascending order for group keys.

    Keys that read as numbers sort numerically and come first; the rest
    sort lexically.
    """
    try:
        return (0, parse_number(key), key)
    except CoercionFailure:
        return (1, 0.0, key)


def split_tokens(cell: str, separator: str = ",") -> list[str]:
    """Split a multi-valued cell, trimming tokens and dropping empty ones."""
    return [token.strip() for token in cell.split(separator) if token.strip()]


class Aggregator:
    """
    Derives grouped summaries from a dataset.

    Column names default to the AI-adoption CSV layout and can be overridden
    for other files with the same shape.
    """

    def __init__(
        self,
        year_column: str = "Year",
        country_column: str = "Country",
        industry_column: str = "Industry",
    ):
        self.year_column = year_column
        self.country_column = country_column
        self.industry_column = industry_column

    def group_keys(self, dataset: Dataset, group_by: str) -> list[str]:
        """Distinct values of the grouping column as text, sorted ascending."""
        dataset.require_column(group_by)
        keys = dict.fromkeys(record.text(group_by) for record in dataset)
        return sorted(keys, key=group_sort_key)

    def series_by_group(
        self,
        dataset: Dataset,
        group_by: str,
        metric: str,
        group_keys: list[str] | None = None,
    ) -> list[GroupSeries]:
        """
        Mean of a metric per year, for every group.

        Records with a non-numeric metric or year are skipped; they do not
        count as zero. Several records for the same (group, year) are folded
        into a running mean.

        Args:
            dataset: Filtered records
            group_by: Grouping column
            metric: Numeric column to average
            group_keys: Groups to report; defaults to the groups present in
                ``dataset``. Pass the unfiltered dataset's keys to keep
                groups the filters emptied (they get an empty series).

        Returns:
            One GroupSeries per key, points ordered by year

        Raises:
            ColumnNotFoundError: If a column is missing
        """
        dataset.require_column(metric)
        dataset.require_column(self.year_column)
        keys = group_keys if group_keys is not None else self.group_keys(dataset, group_by)
        dataset.require_column(group_by)

        with track_duration(aggregation_duration_seconds, mode="series"):
            by_group: dict[str, dict[int, RunningMean]] = {key: {} for key in keys}
            for record in dataset:
                key = record.text(group_by)
                if key not in by_group:
                    continue
                value = record.number(metric)
                year = record.year(self.year_column)
                if value is None or year is None:
                    continue
                by_group[key].setdefault(year, RunningMean()).add(value)

            return [
                GroupSeries(
                    key=key,
                    points=[
                        SeriesPoint(year=year, value=mean.value, count=mean.count)
                        for year, mean in sorted(by_group[key].items())
                    ],
                )
                for key in keys
            ]

    def category_count(self, dataset: Dataset, column: str, separator: str = ",") -> list[CategoryCount]:
        """
        Frequency of every token in a multi-valued category column.

        Returns:
            (token, count) pairs by descending count; ties keep first-seen order
        """
        dataset.require_column(column)

        with track_duration(aggregation_duration_seconds, mode="category_count"):
            counts: dict[str, int] = {}
            for record in dataset:
                for token in split_tokens(record.text(column), separator):
                    counts[token] = counts.get(token, 0) + 1

            ranked = sorted(counts.items(), key=lambda item: -item[1])
            return [CategoryCount(token=token, count=count) for token, count in ranked]

    def cross_tab(self, dataset: Dataset, row_field: str, column_field: str) -> CrossTab:
        """
        Count records for every pair of row and column values.

        Both axes are sorted ascending; missing combinations are zero.
        """
        row_keys = self.group_keys(dataset, row_field)
        column_keys = self.group_keys(dataset, column_field)

        with track_duration(aggregation_duration_seconds, mode="cross_tab"):
            row_index = {key: i for i, key in enumerate(row_keys)}
            column_index = {key: j for j, key in enumerate(column_keys)}
            counts = [[0] * len(column_keys) for _ in row_keys]
            for record in dataset:
                i = row_index[record.text(row_field)]
                j = column_index[record.text(column_field)]
                counts[i][j] += 1

        return CrossTab(
            row_field=row_field,
            column_field=column_field,
            row_keys=row_keys,
            column_keys=column_keys,
            counts=counts,
        )

    def metric_by_country(self, dataset: Dataset, metric: str) -> list[CountryTotal]:
        """
        Sum a metric per country over the records where it is numeric and
        non-zero. A country whose values are all zero or absent is left out.

        Returns:
            Totals by descending value; ties keep first-seen order
        """
        dataset.require_column(metric)
        dataset.require_column(self.country_column)

        with track_duration(aggregation_duration_seconds, mode="country_totals"):
            totals: dict[str, float] = {}
            for record in dataset:
                value = record.number(metric)
                if not value:
                    continue
                country = record.text(self.country_column)
                totals[country] = totals.get(country, 0.0) + value

            ranked = sorted(totals.items(), key=lambda item: -item[1])
            return [CountryTotal(country=country, total=total) for country, total in ranked]

    def filter_options(self, dataset: Dataset) -> FilterOptions:
        """Countries, industries and years a filter control can offer."""
        countries = []
        if self.country_column in dataset.headers:
            countries = [ALL_COUNTRIES, *dict.fromkeys(r.text(self.country_column) for r in dataset)]

        industries = []
        if self.industry_column in dataset.headers:
            industries = list(dict.fromkeys(r.text(self.industry_column) for r in dataset))

        years = []
        if self.year_column in dataset.headers:
            years = sorted({y for y in (r.year(self.year_column) for r in dataset) if y is not None})

        return FilterOptions(
            countries=countries,
            industries=industries,
            years=years,
            min_year=years[0] if years else None,
            max_year=years[-1] if years else None,
        )
