"""
CSV readers and writer.
"""

from .csv_parser import CsvParser, parse_csv
from .csv_writer import CsvWriter, to_csv
from .file_reader import FileReader

__all__ = [
    "CsvParser",
    "CsvWriter",
    "FileReader",
    "parse_csv",
    "to_csv",
]
