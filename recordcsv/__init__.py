"""
CSV import and export for record-like objects.

Exports objects to CSV bytes in a target encoding and parses uploaded CSV
documents back into field mappings, using localized attribute names as
headers.
"""
import logging

from recordcsv.core.logging_config import setup_logger
from recordcsv.export import export_csv
from recordcsv.fields import (
    AttributeNameCatalog,
    ExtendedField,
    FieldLayout,
    FieldLayoutConflict,
    LayoutLoader,
    NameResolver,
)
from recordcsv.importers import (
    CsvError,
    FormatInvalid,
    MalformedCSVError,
    UploadedFile,
    parse_csv,
)
from recordcsv.models import CsvModel

# Handlers are the host application's choice; see setup_logger
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "setup_logger",
    "export_csv",
    "parse_csv",
    "AttributeNameCatalog",
    "ExtendedField",
    "FieldLayout",
    "FieldLayoutConflict",
    "LayoutLoader",
    "NameResolver",
    "CsvError",
    "FormatInvalid",
    "MalformedCSVError",
    "UploadedFile",
    "CsvModel",
]
