"""
Reads uploaded CSV files from disk or from raw bytes.
"""

from pathlib import Path

from adoption_dashboard.core.coercion import CoercionPolicy
from adoption_dashboard.core.errors import ParseError
from adoption_dashboard.core.models import Dataset

from .csv_parser import CsvParser


SUPPORTED_FORMATS = ("csv",)


class FileReader:
    """
    Loads a CSV upload into a Dataset.
    """

    def __init__(self, policy: CoercionPolicy = CoercionPolicy.EAGER, encoding: str = "utf-8-sig"):
        """
        Initialize file reader.

        Args:
            policy: Coercion policy passed to the parser
            encoding: Text encoding; the default also drops a UTF-8 BOM
        """
        self.encoding = encoding
        self.csv_parser = CsvParser(policy=policy)

    def read(self, file_path: str | Path, file_format: str | None = None) -> Dataset:
        """
        Read a file into a Dataset.

        Args:
            file_path: Path to file
            file_format: Format; inferred from the suffix when omitted

        Returns:
            Parsed Dataset

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file format is unsupported
            ParseError: If the content cannot be parsed
        """
        path = Path(file_path)
        fmt = (file_format or path.suffix.lstrip(".") or "csv").lower()
        if fmt not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported file format: {fmt}")

        return self.read_bytes(path.read_bytes(), source_name=path.name)

    def read_bytes(self, data: bytes, source_name: str | None = None) -> Dataset:
        """
        Decode and parse an uploaded payload.

        Raises:
            ParseError: If the bytes are not valid text or not parseable CSV
        """
        try:
            text = data.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise ParseError(f"Upload is not valid {self.encoding} text: {e.reason}") from e
        return self.csv_parser.parse(text, source_name=source_name)
