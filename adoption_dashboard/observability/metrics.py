"""
Prometheus metrics for adoption-dashboard

Counts parsed records, coercion failures and filtered records, and times
aggregations. Metrics live in a private registry so importing the package
never touches the global default one.
"""
from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)


REGISTRY = CollectorRegistry()


# =======================
# PARSE METRICS
# =======================

records_parsed_total = Counter(
    name="dashboard_records_parsed_total",
    documentation="Total number of CSV data rows parsed into records",
    labelnames=["policy"],  # policy: eager, lazy
    registry=REGISTRY,
)

parse_failures_total = Counter(
    name="dashboard_parse_failures_total",
    documentation="Total number of CSV inputs rejected by the parser",
    labelnames=["reason"],
    registry=REGISTRY,
)

coercion_failures_total = Counter(
    name="dashboard_coercion_failures_total",
    documentation="Fields that could not be read as numbers",
    labelnames=["column"],
    registry=REGISTRY,
)

# =======================
# FILTER / AGGREGATION METRICS
# =======================

records_filtered_out_total = Counter(
    name="dashboard_records_filtered_out_total",
    documentation="Records removed by a filter",
    labelnames=["filter"],  # filter: country, year, metric_presence
    registry=REGISTRY,
)

aggregation_duration_seconds = Histogram(
    name="dashboard_aggregation_duration_seconds",
    documentation="Time spent computing an aggregation",
    labelnames=["mode"],  # mode: series, category_count, cross_tab, country_totals
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
    registry=REGISTRY,
)


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(aggregation_duration_seconds, mode="series"):
            ...
    """

    def __init__(self, histogram: Histogram, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    if value:
        counter.labels(**labels).inc(value)
