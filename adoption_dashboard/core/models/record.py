"""
Record and Dataset models: the parsed, in-memory form of an uploaded CSV.
"""

from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator

from adoption_dashboard.core.coercion import CoercionPolicy, to_number, to_year
from adoption_dashboard.core.errors import ColumnNotFoundError


FieldValue = str | int | float


class Record(BaseModel):
    """
    One parsed CSV data row, keyed by column name.

    Records are immutable. Values are strings, or numbers when the dataset
    was parsed with the eager coercion policy. Numeric reads go through
    ``number()`` and display reads through ``text()`` so both policies look
    the same to a consumer.

    Attributes:
        values: Column name -> stored value, in header order
        raw: Column name -> source text, for fields stored as numbers
    """

    model_config = ConfigDict(frozen=True)

    values: dict[str, FieldValue]
    raw: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_raw_columns(self) -> "Record":
        unknown = [column for column in self.raw if column not in self.values]
        if unknown:
            raise ValueError(f"raw text given for unknown columns {unknown}")
        return self

    def __getitem__(self, column: str) -> FieldValue:
        try:
            return self.values[column]
        except KeyError:
            raise ColumnNotFoundError(column, list(self.values)) from None

    def __contains__(self, column: object) -> bool:
        return column in self.values

    def get(self, column: str, default: Any = None) -> Any:
        return self.values.get(column, default)

    def keys(self) -> list[str]:
        return list(self.values)

    def number(self, column: str) -> float | None:
        """Numeric value of a column, or None when it is absent or not numeric."""
        return to_number(self[column], column)

    def year(self, column: str = "Year") -> int | None:
        """Integer value of the year column, or None."""
        return to_year(self[column])

    def text(self, column: str) -> str:
        """
        Value of a column as display text.

        Fields parsed from a file read back exactly as they were written
        ("007" stays "007" under either policy). Numbers with no source
        text render without a trailing ".0".
        """
        value = self[column]
        if column in self.raw:
            return self.raw[column]
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    def as_dict(self) -> dict[str, FieldValue]:
        return dict(self.values)


class Dataset(BaseModel):
    """
    Ordered sequence of Records sharing one header.

    Row order is the order of the source file. A filtered view is also a
    Dataset and may hold zero records; the header is never empty.

    Attributes:
        headers: Column names in file order; the first one is the key column
        records: Parsed rows
        policy: Coercion policy the records were parsed with
        source_name: Name of the uploaded file, if known
    """

    model_config = ConfigDict(frozen=True)

    headers: tuple[str, ...] = Field(..., min_length=1)
    records: tuple[Record, ...] = ()
    policy: CoercionPolicy = CoercionPolicy.EAGER
    source_name: str | None = None

    @model_validator(mode="after")
    def check_consistent_headers(self) -> "Dataset":
        """Every record must carry exactly the header's keys, in order."""
        expected = list(self.headers)
        for index, record in enumerate(self.records):
            if record.keys() != expected:
                raise ValueError(
                    f"record {index} has columns {record.keys()}, expected {expected}"
                )
        return self

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:  # type: ignore[override]
        return iter(self.records)

    def __getitem__(self, index: int) -> Record:
        return self.records[index]

    @property
    def key_column(self) -> str:
        return self.headers[0]

    @property
    def is_empty(self) -> bool:
        return not self.records

    def require_column(self, column: str) -> str:
        """
        Check that a column exists.

        Raises:
            ColumnNotFoundError: If the column is not in the header
        """
        if column not in self.headers:
            raise ColumnNotFoundError(column, self.headers)
        return column

    def with_records(self, records: list[Record] | tuple[Record, ...]) -> "Dataset":
        """Same header and provenance, different rows (used by filters)."""
        return self.model_copy(update={"records": tuple(records)})

    def distinct(self, column: str) -> list[str]:
        """Distinct display values of a column in first-seen order."""
        self.require_column(column)
        return list(dict.fromkeys(record.text(column) for record in self.records))
