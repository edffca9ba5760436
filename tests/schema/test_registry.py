"""Tests for the schema registry."""

from dataclasses import FrozenInstanceError

import pytest

from catalog_search.schema.registry import SchemaRegistry, build_field


def test_registry_resources(registry: SchemaRegistry):
    assert registry.resources() == ("items", "collections")
    assert registry.has_resource("items")
    assert not registry.has_resource("widgets")


def test_field_lookup_by_dotted_path(registry: SchemaRegistry):
    field = registry.field("items", "temporal.begin")

    assert field is not None
    assert field.date is True
    assert field.facetable is True
    assert field.facet_modifier is None


def test_field_lookup_attaches_modifier_without_mutating_schema(registry: SchemaRegistry):
    modified = registry.field("items", "date", "year")
    stored = registry.field("items", "date")

    assert modified is not None and stored is not None
    assert modified.facet_modifier == "year"
    assert stored.facet_modifier is None


def test_field_lookup_unknown(registry: SchemaRegistry):
    assert registry.field("items", "nonexistent") is None
    assert registry.field("widgets", "id") is None


def test_fields_are_immutable(registry: SchemaRegistry):
    field = registry.field("items", "id")
    assert field is not None
    with pytest.raises(FrozenInstanceError):
        field.facetable = False  # type: ignore[misc]


def test_parent_field_has_subfields(registry: SchemaRegistry):
    spatial = registry.field("items", "spatial")

    assert spatial is not None
    assert spatial.type == "object"
    assert spatial.facetable is False
    assert [sub.name for sub in spatial.subfields] == [
        "spatial.name",
        "spatial.city",
        "spatial.state",
        "spatial.country",
        "spatial.coordinates",
    ]


def test_geo_point_field(registry: SchemaRegistry):
    field = registry.field("items", "spatial.coordinates")

    assert field is not None
    assert field.geo_point is True
    assert field.analyzed is False


def test_multi_field_string_has_not_analyzed_variant():
    field = build_field(
        "title",
        {
            "type": "multi_field",
            "fields": {
                "title": {"type": "string"},
                "raw": {"type": "string", "index": "not_analyzed"},
            },
            "facet": True,
        },
    )

    assert field.analyzed is True
    assert field.multi_field_date is False
    assert field.not_analyzed_field is not None
    assert field.not_analyzed_field.name == "title.raw"


def test_multi_field_date(registry: SchemaRegistry):
    field = registry.field("items", "created")

    assert field is not None
    assert field.multi_field_date is True
    assert field.is_date_like is True
    assert field.is_string is False


def test_not_analyzed_string():
    field = build_field("format", {"type": "string", "index": "not_analyzed", "facet": True})

    assert field.analyzed is False
    assert field.not_analyzed_field is None
    assert field.is_string is True


def test_all_mapped_field_names_span_resources(registry: SchemaRegistry):
    names = registry.all_mapped_field_names()

    assert "spatial.coordinates" in names
    assert "ingestDate" in names
    assert "itemCount" in names
    assert "spatial" in names


def test_all_mapped_field_names_include_query_extensions(registry: SchemaRegistry):
    names = registry.all_mapped_field_names()

    assert {"date.before", "date.after", "temporal.begin.before", "spatial.distance"} <= names
    assert "format.before" not in names
    assert "spatial.name.raw" not in names
