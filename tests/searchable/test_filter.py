"""Tests for filter clause building."""

import pytest

from catalog_search.core.exceptions import BadRequestError
from catalog_search.core.models import SearchRequest
from catalog_search.schema.registry import SchemaRegistry
from catalog_search.searchable.filter import FilterBuilder, date_bounds


@pytest.fixture
def builder(registry: SchemaRegistry) -> FilterBuilder:
    return FilterBuilder(registry)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("1900", ("1900-01-01", "1900-12-31")),
        ("1900-02", ("1900-02-01", "1900-02-28")),
        ("2000-02", ("2000-02-01", "2000-02-29")),
        ("1969-07-20", ("1969-07-20", "1969-07-20")),
    ],
)
def test_date_bounds(value: str, expected: tuple[str, str]):
    assert date_bounds(value) == expected


@pytest.mark.parametrize("value", ["", "19", "1900-13", "1900-02-30", "July 1969", "1900/01"])
def test_date_bounds_rejects_invalid_dates(value: str):
    with pytest.raises(BadRequestError, match="Invalid date value"):
        date_bounds(value)


def test_date_equality_filter(builder: FilterBuilder):
    request = SearchRequest()

    assert builder.build_all(request, "items", {"date": "1900-05"}) is True
    assert request.filters == [{"range": {"date": {"gte": "1900-05-01", "lte": "1900-05-31"}}}]


def test_date_before_and_after_filters(builder: FilterBuilder):
    request = SearchRequest()

    builder.build_all(
        request, "items", {"temporal.begin.after": "1900", "temporal.end.before": "1950"}
    )

    assert request.filters == [
        {"range": {"temporal.begin": {"gte": "1900-01-01"}}},
        {"range": {"temporal.end": {"lte": "1950-12-31"}}},
    ]


def test_multi_field_date_filter(builder: FilterBuilder):
    request = SearchRequest()

    builder.build_all(request, "items", {"created.after": "2001-09"})

    assert request.filters == [{"range": {"created": {"gte": "2001-09-01"}}}]


def test_geo_distance_filter_default_distance(builder: FilterBuilder):
    request = SearchRequest()

    builder.build_all(request, "items", {"spatial.coordinates": "42.3, -71"})

    assert request.filters == [
        {"geo_distance": {"distance": "20mi", "spatial.coordinates": {"lat": 42.3, "lon": -71.0}}}
    ]


def test_geo_distance_filter_with_distance(builder: FilterBuilder):
    request = SearchRequest()

    builder.build_all(
        request, "items", {"spatial.coordinates": "42.3,-71", "spatial.distance": "5km"}
    )

    assert request.filters[0]["geo_distance"]["distance"] == "5km"
    assert len(request.filters) == 1


def test_distance_without_coordinates_is_rejected(builder: FilterBuilder):
    with pytest.raises(BadRequestError, match="spatial.distance requires"):
        builder.build_all(SearchRequest(), "items", {"spatial.distance": "5km"})


@pytest.mark.parametrize("coordinates", ["42.3", "north,west", "91,0", "0,181", "1,2,3"])
def test_invalid_coordinates_are_rejected(builder: FilterBuilder, coordinates: str):
    with pytest.raises(BadRequestError, match="oordinates"):
        builder.build_all(SearchRequest(), "items", {"spatial.coordinates": coordinates})


@pytest.mark.parametrize("distance", ["far", "10", "10 parsecs", "-5mi"])
def test_invalid_distance_is_rejected(builder: FilterBuilder, distance: str):
    with pytest.raises(BadRequestError, match="Invalid distance value"):
        builder.build_all(
            SearchRequest(),
            "items",
            {"spatial.coordinates": "42,-71", "spatial.distance": distance},
        )


def test_integer_filter(builder: FilterBuilder):
    request = SearchRequest()

    builder.build_all(request, "collections", {"itemCount": "12"})

    assert request.filters == [{"term": {"itemCount": 12}}]


def test_integer_filter_rejects_non_numeric(builder: FilterBuilder):
    with pytest.raises(BadRequestError, match="Invalid integer value for field itemCount"):
        builder.build_all(SearchRequest(), "collections", {"itemCount": "many"})


def test_date_extension_on_non_date_field_is_rejected(builder: FilterBuilder):
    with pytest.raises(BadRequestError, match="Invalid field.+ query: format.before"):
        builder.build_all(SearchRequest(), "items", {"format.before": "1900"})


def test_text_fields_are_left_alone(builder: FilterBuilder):
    request = SearchRequest()

    assert builder.build_all(request, "items", {"q": "whale", "title": "Moby"}) is False
    assert request.filters == []
