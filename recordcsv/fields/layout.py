"""
Field layouts - which attributes a CSV carries and under which headers.

A layout has two kinds of columns:
- Flat fields: one attribute per column, headed by the model's localized
  attribute name.
- Extended fields: (header, attribute, sub_key) triples. The column value
  lives under sub_key inside a mapping held by the attribute, so several
  columns can share one attribute.

Header resolution is shared by the exporter and the parser so that the
Nth header always lines up with the Nth cell.
"""
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from recordcsv.fields.names import NameResolver


class FieldLayoutConflict(ValueError):
    """Raised when a layout's field declarations contradict each other."""

    pass


@dataclass(frozen=True)
class ExtendedField:
    """A column that maps to one key inside a nested attribute value."""

    name: str  # Display header
    attribute: str
    key: str

    @classmethod
    def coerce(cls, value: Union["ExtendedField", Sequence[str]]) -> "ExtendedField":
        """Accept an ExtendedField or a plain (name, attribute, key) triple."""
        if isinstance(value, cls):
            return value
        name, attribute, key = value
        return cls(name=name, attribute=attribute, key=key)


ExtendedFieldLike = Union[ExtendedField, Sequence[str]]


def coerce_extended_fields(
    extended_fields: Optional[Iterable[ExtendedFieldLike]],
) -> List[ExtendedField]:
    return [ExtendedField.coerce(ef) for ef in (extended_fields or ())]


@dataclass
class FieldLayout:
    """Flat fields, extended fields and required fields for one CSV shape."""

    fields: List[str] = field(default_factory=list)
    extended_fields: List[ExtendedField] = field(default_factory=list)
    required_fields: List[str] = field(default_factory=list)
    model: Optional[str] = None  # Key into the attribute name catalog

    def __post_init__(self):
        self.extended_fields = coerce_extended_fields(self.extended_fields)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldLayout":
        """Parse a layout from a YAML dict."""
        return cls(
            fields=list(data.get("fields") or []),
            extended_fields=[tuple(ef) for ef in data.get("extended_fields") or []],
            required_fields=list(data.get("required_fields") or []),
            model=data.get("model"),
        )

    def validate(self) -> None:
        """
        Validate the layout.

        Checks:
        - No attribute is both a flat field and an extended attribute
        - Every required field is declared as a flat field
        """
        check_conflicts(self.fields, self.extended_fields)

        undeclared = [f for f in self.required_fields if f not in self.fields]
        if undeclared:
            raise FieldLayoutConflict(
                f"Required fields not declared in fields: {undeclared}"
            )


def check_conflicts(
    fields: Optional[Iterable[str]],
    extended_fields: Iterable[ExtendedField],
) -> None:
    """Reject ids used both as a flat field and as an extended attribute."""
    flat = set(fields or ())
    clashing = sorted({ef.attribute for ef in extended_fields if ef.attribute in flat})
    if clashing:
        raise FieldLayoutConflict(
            f"Attributes used as both flat and extended fields: {clashing}"
        )


def read_attribute(obj: Any, name: str) -> Any:
    """Read an attribute by name; mappings are read by key."""
    if isinstance(obj, Mapping):
        return obj[name]
    return getattr(obj, name)


def export_headers(
    fields: Optional[Sequence[str]],
    extended_fields: Sequence[ExtendedField],
    model: Optional[NameResolver] = None,
) -> List[str]:
    """
    Build the header row for an export.

    Flat field names are only resolved when both fields and a name resolver
    are given; extended fields contribute their display names.
    """
    headers: List[str] = []
    if fields and model is not None:
        headers.extend(model.human_attribute_name(f) for f in fields)
    headers.extend(ef.name for ef in extended_fields)
    return headers


def row_values(
    obj: Any,
    fields: Optional[Sequence[str]],
    extended_fields: Sequence[ExtendedField],
) -> List[Any]:
    """Read one object's cells in header order."""
    values = [read_attribute(obj, f) for f in fields or ()]
    values.extend(read_attribute(obj, ef.attribute)[ef.key] for ef in extended_fields)
    return values


def match_fields(
    document_headers: Sequence[str],
    fields: Sequence[str],
    model: NameResolver,
) -> List[Tuple[str, str]]:
    """Return (header, field_id) pairs for fields present in the document."""
    present = set(document_headers)
    pairs = [(model.human_attribute_name(f), f) for f in fields]
    return [(header, f) for header, f in pairs if header in present]


def match_extended_fields(
    document_headers: Sequence[str],
    extended_fields: Sequence[ExtendedField],
) -> List[ExtendedField]:
    """Return the extended fields whose header is present in the document."""
    present = set(document_headers)
    return [ef for ef in extended_fields if ef.name in present]
