"""
CSV parser - turns an uploaded CSV document into field mappings.

Headers are the model's localized attribute names. Only document columns
that match a declared field are read; the rest are ignored. Extended fields
are grouped per attribute into nested {key: value} mappings.

Pandas-based implementation:
- read_csv(header=None, dtype=str, keep_default_na=False, skip_blank_lines=True)
- Quote structure checked up front; pandas would repair stray quotes
- Every cell is a string; cells missing from a short row are None
- Tokenizer errors surface as MalformedCSVError
"""
import io
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from recordcsv.fields.layout import (
    ExtendedField,
    ExtendedFieldLike,
    check_conflicts,
    coerce_extended_fields,
    match_extended_fields,
    match_fields,
)
from recordcsv.fields.names import NameResolver
from recordcsv.importers.sources import CsvInput, read_input

logger = logging.getLogger(__name__)


ParsedRow = Dict[str, Any]
RowHandler = Callable[[ParsedRow], Any]


class CsvError(Exception):
    """Base class for CSV parsing errors."""

    pass


class FormatInvalid(CsvError):
    """Raised when required fields have no matching column in the document."""

    def __init__(self, missing_fields: Sequence[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(f"Required columns missing for fields: {self.missing_fields}")


class MalformedCSVError(CsvError):
    """Raised when the document is not valid CSV."""

    pass


def parse_csv(
    input: CsvInput,
    fields: Sequence[str],
    model: NameResolver,
    encoding: Optional[str] = None,
    required_fields: Iterable[str] = (),
    extended_fields: Optional[Iterable[ExtendedFieldLike]] = None,
    row_handler: Optional[RowHandler] = None,
) -> Optional[List[ParsedRow]]:
    """
    Parse a CSV document into one mapping per data row.

    Args:
        input: Text, bytes, UploadedFile, or an object with read()
        fields: Field ids to read; headers are model.human_attribute_name(field)
        model: Name resolver for field headers
        encoding: Encoding of byte input (default: settings.IMPORT_ENCODING)
        required_fields: Field ids whose column must be present
        extended_fields: (header, attribute, key) triples
        row_handler: Called once per row; when given, nothing is returned

    Returns:
        Parsed rows, or None when a row_handler is given

    Raises:
        FormatInvalid: A required field has no column in the document
        MalformedCSVError: The document is not valid CSV
    """
    extended = coerce_extended_fields(extended_fields)
    check_conflicts(fields, extended)

    text = read_input(input, encoding)
    document_headers, records = _read_table(text)

    field_map = match_fields(document_headers, fields, model)
    extended_map = match_extended_fields(document_headers, extended)

    uploaded_fields = {field for _header, field in field_map}
    missing = [field for field in required_fields if field not in uploaded_fields]
    if missing:
        raise FormatInvalid(missing)

    if logger.isEnabledFor(logging.DEBUG):
        used = {header for header, _field in field_map} | {ef.name for ef in extended_map}
        ignored = [h for h in document_headers if h not in used]
        if ignored:
            logger.debug(f"Ignoring unmatched columns: {ignored}")

    results = [_transform_row(record, field_map, extended_map) for record in records]
    logger.debug(f"Parsed {len(results)} rows ({len(field_map)} fields, {len(extended_map)} extended)")

    if row_handler is not None:
        for result in results:
            row_handler(result)
        return None

    return results


def _check_quoting(text: str) -> None:
    """
    Reject quoting the tokenizer would silently repair.

    A quote may only open a field, and a closing quote must be followed by
    a delimiter, a line break or the end of the document.
    """
    line = 1
    at_field_start = True
    in_quotes = False
    i = 0
    end = len(text)
    while i < end:
        char = text[i]
        if in_quotes:
            if char == '"':
                if i + 1 < end and text[i + 1] == '"':
                    i += 2
                    continue
                in_quotes = False
                if i + 1 < end and text[i + 1] not in ",\r\n":
                    raise MalformedCSVError(f"Any value after quoted field isn't allowed in line {line}")
            elif char == "\n":
                line += 1
        elif char == '"':
            if not at_field_start:
                raise MalformedCSVError(f"Illegal quoting in line {line}")
            in_quotes = True
        elif char == "\n":
            line += 1
        at_field_start = char in ",\r\n" and not in_quotes
        i += 1

    if in_quotes:
        raise MalformedCSVError(f"Unclosed quoted field in line {line}")


def _read_table(text: str) -> Tuple[List[str], List[Dict[str, Any]]]:
    """
    Read CSV text into (headers, records).

    The header row is read as data so repeated headers keep their literal
    text; each header maps to its first column.
    """
    _check_quoting(text)

    try:
        frame = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return [], []
    except pd.errors.ParserError as e:
        raise MalformedCSVError(str(e)) from e

    if not isinstance(frame.index, pd.RangeIndex):
        raise MalformedCSVError("Data row has more fields than the header row")

    rows = [
        [None if pd.isna(value) else value for value in row]
        for row in frame.itertuples(index=False, name=None)
    ]
    headers = ["" if h is None else h for h in rows[0]]

    positions: Dict[str, int] = {}
    for position, header in enumerate(headers):
        positions.setdefault(header, position)

    records = [
        {header: row[position] for header, position in positions.items()}
        for row in rows[1:]
    ]
    return headers, records


def _transform_row(
    record: Dict[str, Any],
    field_map: List[Tuple[str, str]],
    extended_map: List[ExtendedField],
) -> ParsedRow:
    """Map one record's cells onto field ids and grouped extended attributes."""
    result: ParsedRow = {field: record[header] for header, field in field_map}

    grouped: Dict[str, Dict[str, Any]] = {}
    for ef in extended_map:
        grouped.setdefault(ef.attribute, {})[ef.key] = record[ef.name]
    result.update(grouped)

    return result
