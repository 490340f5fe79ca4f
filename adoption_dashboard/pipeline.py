"""
Dashboard pipeline orchestration.

Coordinates the flow: parse → filter → aggregate → view
"""

from pathlib import Path

from adoption_dashboard.config import DashboardSettings
from adoption_dashboard.core.aggregation import Aggregator
from adoption_dashboard.core.errors import DatasetNotLoadedError
from adoption_dashboard.core.filters import FilterPipeline
from adoption_dashboard.core.models import AggregationRequest, Dataset, DashboardView
from adoption_dashboard.observability.logger import get_logger, log_operation
from adoption_dashboard.readers import FileReader


logger = get_logger(__name__)


class DashboardPipeline:
    """
    Holds the current dataset and computes views of it.

    Flow:
    1. Load CSV text, bytes or a file into a Dataset (replacing any previous one)
    2. Filter by country and year ceiling
    3. Aggregate: series by group, category counts, cross-tab, country totals
    4. Return one immutable DashboardView per request

    Every view is recomputed from the filtered dataset; nothing is cached
    between requests.
    """

    def __init__(self, settings: DashboardSettings | None = None):
        """
        Initialize dashboard pipeline.

        Args:
            settings: Dashboard configuration (defaults when omitted)
        """
        self.settings = settings or DashboardSettings()
        columns = self.settings.columns

        self.file_reader = FileReader(policy=self.settings.coercion_policy)
        self.filter_pipeline = FilterPipeline(country_column=columns.country, year_column=columns.year)
        self.aggregator = Aggregator(
            year_column=columns.year,
            country_column=columns.country,
            industry_column=columns.industry,
        )
        self.dataset: Dataset | None = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_text(self, text: str, source_name: str | None = None) -> Dataset:
        """
        Parse CSV text and make it the current dataset.

        Raises:
            ParseError: If the text cannot be parsed; the previous dataset is kept
        """
        dataset = self.file_reader.csv_parser.parse(text, source_name=source_name)
        return self._replace(dataset)

    def load_bytes(self, data: bytes, source_name: str | None = None) -> Dataset:
        """Decode and parse an uploaded payload and make it current."""
        return self._replace(self.file_reader.read_bytes(data, source_name=source_name))

    def load_file(self, file_path: str | Path) -> Dataset:
        """Read a CSV file and make it current."""
        return self._replace(self.file_reader.read(file_path))

    def clear(self) -> None:
        self.dataset = None

    def _replace(self, dataset: Dataset) -> Dataset:
        previous = len(self.dataset) if self.dataset is not None else None
        self.dataset = dataset
        logger.info(
            f"Loaded dataset with {len(dataset)} records",
            extra={"source": dataset.source_name, "replaced_records": previous},
        )
        return dataset

    def require_dataset(self) -> Dataset:
        if self.dataset is None:
            raise DatasetNotLoadedError("No CSV has been loaded")
        return self.dataset

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def filtered(self, request: AggregationRequest) -> Dataset:
        """Current dataset narrowed by the request's country and year filters."""
        return self.filter_pipeline.apply(self.require_dataset(), request.filters)

    def build_view(self, request: AggregationRequest | None = None) -> DashboardView:
        """
        Compute every aggregate for one selection.

        An empty filter result produces an empty view, not an error.

        Args:
            request: Selection; the configured defaults when omitted

        Returns:
            DashboardView for the request

        Raises:
            DatasetNotLoadedError: If nothing has been loaded
            ColumnNotFoundError: If the metric or a grouping column is missing
        """
        dataset = self.require_dataset()
        request = request or self.settings.default_request()
        columns = self.settings.columns
        separator = self.settings.category_separator

        for column in (request.metric, request.group_by, request.cross_tab_by):
            dataset.require_column(column)

        with log_operation("build_view", logger=logger, metric=request.metric, group_by=request.group_by):
            filtered = self.filter_pipeline.apply(dataset, request.filters)

            # Groups come from the whole dataset so filtered-out groups keep an empty series
            series = self.aggregator.series_by_group(
                filtered,
                group_by=request.group_by,
                metric=request.metric,
                group_keys=self.aggregator.group_keys(dataset, request.group_by),
            )

            top_tools = []
            if columns.top_tools in dataset.headers:
                top_tools = self.aggregator.category_count(filtered, columns.top_tools, separator)

            regulation_status = []
            if columns.regulation_status in dataset.headers:
                regulation_status = self.aggregator.category_count(
                    filtered, columns.regulation_status, separator
                )

            cross_tab = None
            if columns.industry in dataset.headers:
                cross_tab = self.aggregator.cross_tab(filtered, columns.industry, request.cross_tab_by)

            country_totals = []
            if columns.country in dataset.headers:
                country_totals = self.aggregator.metric_by_country(filtered, request.metric)

            view = DashboardView(
                request=request,
                record_count=len(filtered),
                series=series,
                top_tools=top_tools,
                regulation_status=regulation_status,
                cross_tab=cross_tab,
                country_totals=country_totals,
                options=self.aggregator.filter_options(dataset),
            )

        if view.is_empty:
            logger.info("Filters left no records", extra={"filters": request.filters.model_dump()})
        return view
