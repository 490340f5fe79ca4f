"""
Aggregate result models consumed by the charting front end.

All of these are recomputed from scratch for every view; none carries
identity across recomputation.
"""

from pydantic import BaseModel, ConfigDict, Field

from .params import AggregationRequest


class SeriesPoint(BaseModel):
    """Mean of a metric for one (group, year) pair."""

    model_config = ConfigDict(frozen=True)

    year: int
    value: float
    count: int = Field(1, ge=1)


class GroupSeries(BaseModel):
    """
    Line series for one GroupKey, points sorted by year.

    A group with no numeric observations keeps an empty ``points`` list.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    points: list[SeriesPoint] = Field(default_factory=list)

    def as_pairs(self) -> list[tuple[int, float]]:
        return [(point.year, point.value) for point in self.points]


class CategoryCount(BaseModel):
    """Occurrences of one token across comma-separated category cells."""

    model_config = ConfigDict(frozen=True)

    token: str
    count: int = Field(..., ge=1)


class CrossTab(BaseModel):
    """
    Record counts for every (row value, column value) pair, zero-filled.

    ``counts[i][j]`` is the number of records with ``row_field`` equal to
    ``row_keys[i]`` and ``column_field`` equal to ``column_keys[j]``.
    """

    model_config = ConfigDict(frozen=True)

    row_field: str
    column_field: str
    row_keys: list[str] = Field(default_factory=list)
    column_keys: list[str] = Field(default_factory=list)
    counts: list[list[int]] = Field(default_factory=list)

    def count(self, row: str, column: str) -> int:
        return self.counts[self.row_keys.index(row)][self.column_keys.index(column)]

    def rows(self) -> list[dict[str, str | int]]:
        """One dict per row key, shaped for a stacked bar chart."""
        return [
            {self.row_field: row_key, **{col: n for col, n in zip(self.column_keys, row_counts)}}
            for row_key, row_counts in zip(self.row_keys, self.counts)
        ]

    @property
    def is_empty(self) -> bool:
        return not self.row_keys


class CountryTotal(BaseModel):
    """Sum of a metric over one country's records."""

    model_config = ConfigDict(frozen=True)

    country: str
    total: float


class FilterOptions(BaseModel):
    """Values the filter controls can offer for a dataset."""

    model_config = ConfigDict(frozen=True)

    countries: list[str] = Field(default_factory=list)
    industries: list[str] = Field(default_factory=list)
    years: list[int] = Field(default_factory=list)
    min_year: int | None = None
    max_year: int | None = None


class DashboardView(BaseModel):
    """
    Everything one render of the dashboard needs.

    Attributes:
        request: Selection the view was computed for
        record_count: Records left after filtering
        series: Mean metric per year, per group
        top_tools: Frequencies of "Top AI Tools Used" tokens
        regulation_status: Frequencies of "Regulation Status" tokens
        cross_tab: Industry x group-by record counts
        country_totals: Metric summed per country, largest first
        options: Choices for the filter controls
    """

    model_config = ConfigDict(frozen=True)

    request: AggregationRequest
    record_count: int = Field(..., ge=0)
    series: list[GroupSeries] = Field(default_factory=list)
    top_tools: list[CategoryCount] = Field(default_factory=list)
    regulation_status: list[CategoryCount] = Field(default_factory=list)
    cross_tab: CrossTab | None = None
    country_totals: list[CountryTotal] = Field(default_factory=list)
    options: FilterOptions = Field(default_factory=FilterOptions)

    @property
    def is_empty(self) -> bool:
        """True when the filters left no records to aggregate."""
        return self.record_count == 0
