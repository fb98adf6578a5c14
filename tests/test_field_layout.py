"""
Tests for field layouts and header resolution.

Validates:
- Extended field coercion from triples
- Conflict detection
- Export header order (flat names, then extended names)
- Header matching against document headers
- YAML layout loading
"""
from types import SimpleNamespace

import pytest

from recordcsv.fields.layout import (
    ExtendedField,
    FieldLayout,
    FieldLayoutConflict,
    export_headers,
    match_extended_fields,
    match_fields,
    read_attribute,
    row_values,
)
from recordcsv.fields.loader import LayoutLoader


def test_extended_field_from_triple():
    """Test that plain triples become ExtendedField values."""
    ef = ExtendedField.coerce(("Twitter", "social", "twitter"))

    assert ef == ExtendedField(name="Twitter", attribute="social", key="twitter")
    assert ExtendedField.coerce(ef) is ef


def test_layout_coerces_extended_fields():
    """Test that layouts accept triples for extended fields."""
    layout = FieldLayout(fields=["name"], extended_fields=[("Twitter", "social", "twitter")])

    assert layout.extended_fields == [ExtendedField("Twitter", "social", "twitter")]


def test_layout_validate_conflict():
    """Test that an attribute used as flat and extended is rejected."""
    layout = FieldLayout(fields=["social"], extended_fields=[("Twitter", "social", "twitter")])

    with pytest.raises(FieldLayoutConflict, match="social"):
        layout.validate()


def test_layout_validate_undeclared_required():
    """Test that required fields must be declared."""
    layout = FieldLayout(fields=["name"], required_fields=["email"])

    with pytest.raises(FieldLayoutConflict, match="email"):
        layout.validate()


def test_export_headers_order(user_model):
    """Test flat display names first, then extended display names."""
    headers = export_headers(
        ["id", "name"],
        [ExtendedField("Twitter", "social", "twitter")],
        user_model,
    )

    assert headers == ["ID", "氏名", "Twitter"]


def test_export_headers_without_resolver():
    """Test that flat fields are skipped without a name resolver."""
    assert export_headers(["id"], [ExtendedField("T", "social", "t")]) == ["T"]
    assert export_headers(None, []) == []


def test_row_values_follow_header_order():
    """Test that cells come out in the same order as headers."""
    obj = SimpleNamespace(id=1, name="a", social={"twitter": "@a", "github": "a"})
    values = row_values(
        obj,
        ["id", "name"],
        [ExtendedField("GitHub", "social", "github"), ExtendedField("Twitter", "social", "twitter")],
    )

    assert values == [1, "a", "a", "@a"]


def test_read_attribute_object_and_mapping():
    """Test attribute reads on objects and mappings."""
    assert read_attribute(SimpleNamespace(name="a"), "name") == "a"
    assert read_attribute({"name": "b"}, "name") == "b"

    with pytest.raises(AttributeError):
        read_attribute(SimpleNamespace(), "name")


def test_match_fields(user_model):
    """Test that only fields with a matching document header are kept."""
    pairs = match_fields(["氏名", "部署", "ID"], ["id", "name", "email"], user_model)

    assert pairs == [("ID", "id"), ("氏名", "name")]


def test_match_extended_fields():
    """Test that extended fields are matched on their display name."""
    extended = [ExtendedField("A.k1", "attr", "k1"), ExtendedField("A.k2", "attr", "k2")]

    assert match_extended_fields(["A.k2", "B"], extended) == [extended[1]]


def test_layout_loader(fixtures_dir):
    """Test that layouts load from YAML into FieldLayout objects."""
    loader = LayoutLoader(fixtures_dir / "layouts.yaml")
    layout = loader.get_layout("users")

    assert layout.model == "user"
    assert layout.fields == ["id", "name", "email"]
    assert layout.required_fields == ["email"]
    assert layout.extended_fields == [
        ExtendedField("Twitter", "social", "twitter"),
        ExtendedField("GitHub", "social", "github"),
    ]
    assert loader.get_layout("companies").extended_fields == []


def test_layout_loader_caches(fixtures_dir):
    """Test that loaded layouts are cached until a forced reload."""
    loader = LayoutLoader(fixtures_dir / "layouts.yaml")

    first = loader.load()
    assert loader.load() is first
    assert loader.load(force_reload=True) is not first


def test_layout_loader_unknown_layout(fixtures_dir):
    """Test that unknown layout names raise ValueError."""
    loader = LayoutLoader(fixtures_dir / "layouts.yaml")

    with pytest.raises(ValueError, match="orders"):
        loader.get_layout("orders")


def test_layout_loader_rejects_invalid_layout(tmp_path):
    """Test that layouts are validated on load."""
    path = tmp_path / "layouts.yaml"
    path.write_text(
        "layouts:\n"
        "  broken:\n"
        "    fields: [social]\n"
        "    extended_fields:\n"
        "      - [Twitter, social, twitter]\n",
        encoding="utf-8",
    )

    with pytest.raises(FieldLayoutConflict, match="broken"):
        LayoutLoader(path).load()
