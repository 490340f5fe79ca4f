"""
Exceptions raised by the dashboard data pipeline.
"""


class DashboardError(Exception):
    """Base class for every error raised by adoption_dashboard."""


class ParseError(DashboardError):
    """Raised when CSV input is empty, lacks a header, or is otherwise unreadable."""

    def __init__(self, message: str, line_number: int | None = None):
        self.message = message
        self.line_number = line_number
        location = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"{message}{location}")


class CoercionFailure(DashboardError, ValueError):
    """
    Raised by the strict number parser when a field is not numeric.

    The lenient path never lets this escape: it reads the field as an
    absent number instead.
    """

    def __init__(self, value: object, column: str | None = None):
        self.value = value
        self.column = column
        where = f" in column '{column}'" if column else ""
        super().__init__(f"Cannot read {value!r} as a number{where}")


class ColumnNotFoundError(DashboardError, KeyError):
    """Raised when a requested metric or grouping column is not in the header."""

    def __init__(self, column: str, available: list[str] | tuple[str, ...]):
        self.column = column
        self.available = list(available)
        super().__init__(column)

    def __str__(self) -> str:
        return f"Column '{self.column}' not found. Available: {', '.join(self.available)}"


class DatasetNotLoadedError(DashboardError):
    """Raised when a view is requested before any CSV has been loaded."""


class ConfigError(DashboardError):
    """Raised when dashboard configuration is missing or invalid."""
