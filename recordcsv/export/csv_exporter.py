"""
CSV exporter - renders objects into a CSV document in a target encoding.

Polars-based implementation:
- write_csv(include_header=False, separator=',', line_terminator='\n')
- quote_style='always' when quotes are forced, 'necessary' otherwise
- All cells cast to Utf8, None written as an empty cell
- Encoded to the target encoding with unmappable characters replaced by '?'
"""
import itertools
import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence

import polars as pl

from recordcsv.core.config import settings
from recordcsv.fields.layout import (
    ExtendedFieldLike,
    check_conflicts,
    coerce_extended_fields,
    export_headers,
    row_values,
)
from recordcsv.fields.names import NameResolver

logger = logging.getLogger(__name__)


RowFn = Callable[[Any], Sequence[Any]]


def export_csv(
    objects: Optional[Iterable[Any]],
    fields: Optional[Sequence[str]] = None,
    extended_fields: Optional[Iterable[ExtendedFieldLike]] = None,
    headers: Optional[Sequence[str]] = None,
    force_quotes: Optional[bool] = None,
    encoding: Optional[str] = None,
    row_fn: Optional[RowFn] = None,
    model: Optional[NameResolver] = None,
) -> bytes:
    """
    Export objects as CSV.

    Args:
        objects: Objects to export (None exports headers only)
        fields: Attribute names, one column each
        extended_fields: (header, attribute, key) triples read as obj.attribute[key]
        headers: Explicit header row; derived from fields when empty
        force_quotes: Quote every field (default: settings.FORCE_QUOTES)
        encoding: Output encoding (default: settings.EXPORT_ENCODING)
        row_fn: Produces the cells for one object, replacing field reads
        model: Name resolver used to turn fields into headers

    Returns:
        CSV document as bytes
    """
    if force_quotes is None:
        force_quotes = settings.FORCE_QUOTES
    encoding = encoding or settings.EXPORT_ENCODING

    extended = coerce_extended_fields(extended_fields)
    check_conflicts(fields, extended)

    if not headers:
        headers = export_headers(fields, extended, model)

    rows: List[List[str]] = []
    if headers:
        rows.append([_render(h) for h in headers])

    for obj in objects or ():
        if row_fn is not None:
            cells = row_fn(obj)
        else:
            cells = row_values(obj, fields, extended)
        rows.append([_render(cell) for cell in cells])

    text = _write_rows(rows, quote_style="always" if force_quotes else "necessary")

    logger.debug(
        f"Exported {len(rows) - (1 if headers else 0)} rows, "
        f"{len(headers or ())} columns as {encoding}"
    )

    return text.encode(encoding, errors="replace")


def _render(value: Any) -> str:
    """Cell text for a value; None is an empty cell."""
    if value is None:
        return ""
    return str(value)


def _write_rows(rows: List[List[str]], quote_style: str) -> str:
    """
    Write rows as CSV text.

    Consecutive rows of equal width share one frame; a row_fn may return
    rows of any width, and each row is written with exactly its own cells.
    """
    parts = []
    for width, group in itertools.groupby(rows, key=len):
        block = list(group)
        if width == 0:
            parts.append("\n" * len(block))
            continue

        frame = pl.DataFrame(
            block,
            schema=[(f"column_{i}", pl.Utf8) for i in range(width)],
            orient="row",
        )
        parts.append(
            frame.write_csv(
                include_header=False,
                separator=",",
                quote_style=quote_style,
                line_terminator="\n",
            )
        )

    return "".join(parts)
