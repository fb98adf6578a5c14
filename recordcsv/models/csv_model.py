"""
Mixin that gives a model class CSV import and export.

The class itself acts as the name resolver, so headers come from its
human_attribute_name classmethod:

    class User(CsvModel):
        attribute_names = {"name": "氏名", "email": "メールアドレス"}

    rows = User.parse_csv(upload, fields=["name", "email"], required_fields=["email"])
    data = User.export_csv(users, fields=["name", "email"])
"""
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Sequence

from recordcsv.export.csv_exporter import RowFn, export_csv
from recordcsv.fields.layout import ExtendedFieldLike, FieldLayout
from recordcsv.fields.names import humanize
from recordcsv.importers.csv_parser import ParsedRow, RowHandler, parse_csv
from recordcsv.importers.sources import CsvInput


class CsvModel:
    """CSV parsing and export as class methods of a model."""

    attribute_names: ClassVar[Dict[str, str]] = {}

    # Source line of a record built from a parsed row; set by the consumer
    line_no: Optional[int] = None

    @classmethod
    def human_attribute_name(cls, field: str) -> str:
        return cls.attribute_names.get(field) or humanize(field)

    @classmethod
    def parse_csv(
        cls,
        input: CsvInput,
        fields: Sequence[str],
        encoding: Optional[str] = None,
        required_fields: Iterable[str] = (),
        extended_fields: Optional[Iterable[ExtendedFieldLike]] = None,
        row_handler: Optional[RowHandler] = None,
    ) -> Optional[List[ParsedRow]]:
        return parse_csv(
            input,
            fields=fields,
            model=cls,
            encoding=encoding,
            required_fields=required_fields,
            extended_fields=extended_fields,
            row_handler=row_handler,
        )

    @classmethod
    def parse_csv_layout(
        cls,
        input: CsvInput,
        layout: FieldLayout,
        encoding: Optional[str] = None,
        row_handler: Optional[RowHandler] = None,
    ) -> Optional[List[ParsedRow]]:
        """Parse with the fields of a loaded layout."""
        return cls.parse_csv(
            input,
            fields=layout.fields,
            encoding=encoding,
            required_fields=layout.required_fields,
            extended_fields=layout.extended_fields,
            row_handler=row_handler,
        )

    @classmethod
    def export_csv(
        cls,
        objects: Optional[Iterable[Any]],
        fields: Optional[Sequence[str]] = None,
        extended_fields: Optional[Iterable[ExtendedFieldLike]] = None,
        headers: Optional[Sequence[str]] = None,
        force_quotes: Optional[bool] = None,
        encoding: Optional[str] = None,
        row_fn: Optional[RowFn] = None,
    ) -> bytes:
        return export_csv(
            objects,
            fields=fields,
            extended_fields=extended_fields,
            headers=headers,
            force_quotes=force_quotes,
            encoding=encoding,
            row_fn=row_fn,
            model=cls,
        )
