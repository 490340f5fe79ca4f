"""
Serializes a Dataset back to the naive CSV format the parser reads.
"""

from adoption_dashboard.core.models import Dataset


class CsvWriter:
    """
    Writes a header line and one line per record.

    Fields are written as their display text, so a parsed file is written
    back as it was read under either coercion policy.
    """

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter

    def write(self, dataset: Dataset) -> str:
        """
        Render a Dataset as CSV text.

        Raises:
            ValueError: If a header or value contains the delimiter or a
                newline, which the naive format cannot represent
        """
        lines = [self._join(dataset.headers)]
        for record in dataset:
            lines.append(self._join(record.text(column) for column in dataset.headers))
        return "\n".join(lines) + "\n"

    def _join(self, values) -> str:
        values = list(values)
        for value in values:
            if self.delimiter in value or "\n" in value:
                raise ValueError(f"Value {value!r} cannot be written without quoting")
        return self.delimiter.join(values)


def to_csv(dataset: Dataset) -> str:
    """Render a Dataset as comma-delimited text."""
    return CsvWriter().write(dataset)
