"""
Field layouts and header resolution shared by export and import.
"""
from recordcsv.fields.names import (
    NameResolver,
    AttributeNameCatalog,
    ModelAttributeNames,
    humanize,
)
from recordcsv.fields.layout import (
    ExtendedField,
    FieldLayout,
    FieldLayoutConflict,
    read_attribute,
    export_headers,
    match_fields,
    match_extended_fields,
)
from recordcsv.fields.loader import LayoutLoader

__all__ = [
    "NameResolver",
    "AttributeNameCatalog",
    "ModelAttributeNames",
    "humanize",
    "ExtendedField",
    "FieldLayout",
    "FieldLayoutConflict",
    "read_attribute",
    "export_headers",
    "match_fields",
    "match_extended_fields",
    "LayoutLoader",
]
