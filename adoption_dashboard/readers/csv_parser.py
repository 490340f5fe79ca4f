"""
CSV parser turning uploaded text into a Dataset.

Splitting is deliberately naive: one record per line, one field per comma.
Quoted fields that contain the delimiter are not recognised; the quotes stay
in the value and the field is split at the comma.
"""

from adoption_dashboard.core.coercion import CoercionPolicy, coerce_field
from adoption_dashboard.core.errors import ParseError
from adoption_dashboard.core.models import Dataset, Record
from adoption_dashboard.observability.logger import get_logger, log_operation
from adoption_dashboard.observability.metrics import (
    increment_counter,
    parse_failures_total,
    records_parsed_total,
)


logger = get_logger(__name__)


class CsvParser:
    """
    Parses delimited text with a header row into Records.
    """

    def __init__(self, policy: CoercionPolicy = CoercionPolicy.EAGER, delimiter: str = ","):
        """
        Initialize CSV parser.

        Args:
            policy: When non-key columns are coerced to numbers
            delimiter: Field delimiter
        """
        if not delimiter or delimiter == "\n":
            raise ValueError(f"Invalid delimiter: {delimiter!r}")
        self.policy = CoercionPolicy(policy)
        self.delimiter = delimiter

    def parse(self, text: str, source_name: str | None = None) -> Dataset:
        """
        Parse CSV text into a Dataset.

        The whole text and every header and field are trimmed. Blank lines
        are skipped. Rows shorter than the header get "" for the missing
        trailing fields; values beyond the header are dropped.

        Args:
            text: Raw CSV text
            source_name: Optional file name kept on the Dataset

        Returns:
            Dataset with one Record per non-blank data line, in file order

        Raises:
            ParseError: If the text is empty or the header is unusable
        """
        if not isinstance(text, str):
            self._fail("not_text", f"CSV input must be text, got {type(text).__name__}")

        stripped = text.strip()
        if not stripped:
            self._fail("empty", "CSV input is empty")

        with log_operation("parse_csv", logger=logger, source=source_name or "<text>"):
            lines = stripped.split("\n")
            headers = self._parse_header(lines[0])

            records = []
            for line in lines[1:]:
                if not line.strip():
                    continue
                records.append(self._parse_line(line, headers))

            dataset = Dataset(
                headers=tuple(headers),
                records=tuple(records),
                policy=self.policy,
                source_name=source_name,
            )

        increment_counter(records_parsed_total, len(records), policy=self.policy.value)
        logger.info(
            f"Parsed {len(records)} records with {len(headers)} columns",
            extra={"source": source_name, "policy": self.policy.value},
        )
        return dataset

    def _parse_header(self, line: str) -> list[str]:
        headers = [name.strip() for name in line.split(self.delimiter)]

        if any(not name for name in headers):
            self._fail("blank_header", "Header row contains an empty column name", line_number=1)

        seen = set()
        for name in headers:
            if name in seen:
                self._fail("duplicate_header", f"Duplicate column name '{name}' in header", line_number=1)
            seen.add(name)

        return headers

    def _parse_line(self, line: str, headers: list[str]) -> Record:
        raw_values = line.split(self.delimiter)
        values = {}
        source = {}
        for index, column in enumerate(headers):
            raw = raw_values[index].strip() if index < len(raw_values) else ""
            value = coerce_field(raw, column, is_key=index == 0, policy=self.policy)
            values[column] = value
            if not isinstance(value, str):
                source[column] = raw
        return Record(values=values, raw=source)

    def _fail(self, reason: str, message: str, line_number: int | None = None) -> None:
        increment_counter(parse_failures_total, reason=reason)
        logger.warning(message, extra={"reason": reason, "line_number": line_number})
        raise ParseError(message, line_number=line_number)


def parse_csv(
    text: str,
    policy: CoercionPolicy = CoercionPolicy.EAGER,
    source_name: str | None = None,
) -> Dataset:
    """Parse CSV text with the default comma delimiter."""
    return CsvParser(policy=policy).parse(text, source_name=source_name)
