"""
Import module for CSV parsing.
"""
from recordcsv.importers.csv_parser import (
    parse_csv,
    CsvError,
    FormatInvalid,
    MalformedCSVError,
)
from recordcsv.importers.sources import UploadedFile, read_input

__all__ = [
    "parse_csv",
    "CsvError",
    "FormatInvalid",
    "MalformedCSVError",
    "UploadedFile",
    "read_input",
]
