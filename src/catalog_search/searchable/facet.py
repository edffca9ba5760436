"""Facet resolution: which aggregation applies to a field, and with what parameters."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import Any

from catalog_search.core.constants import (
    CENTURY_RANGE_YEARS,
    DATE_HISTOGRAM_INTERVALS,
    DATE_HISTOGRAM_MIN_DOC_COUNT,
    DECADE_RANGE_YEARS,
    DEFAULT_DATE_INTERVAL,
    DEFAULT_GEO_DISTANCE_UNIT,
    GEO_DISTANCE_BUCKET_COUNT,
    RANGE_DATE_INTERVALS,
    TERMS_FACET_SIZE,
    VALID_DISTANCE_UNITS,
)
from catalog_search.core.exceptions import BadRequestError
from catalog_search.core.logging import get_logger
from catalog_search.core.models import FacetRequest, FacetType, Field, SearchRequest
from catalog_search.schema.registry import SchemaRegistry
from catalog_search.searchable.field_names import parse_facet_name
from catalog_search.searchable.filter import check_coordinates

logger = get_logger(__name__)

FacetParams = dict[str, Any]

_GEO_BUCKET_WIDTH = re.compile(r"^(?P<width>\d+(?:\.\d+)?)(?P<unit>[a-z]*)$")


# Ordered: the first matching predicate decides the facet type.
FACET_TYPE_RULES: tuple[tuple[Callable[[Field], bool], FacetType], ...] = (
    (lambda field: field.geo_point, FacetType.GEO_DISTANCE),
    (
        lambda field: field.is_date_like and field.facet_modifier not in RANGE_DATE_INTERVALS,
        FacetType.DATE_HISTOGRAM,
    ),
    (
        lambda field: field.is_date_like and field.facet_modifier in RANGE_DATE_INTERVALS,
        FacetType.RANGE,
    ),
)


def facet_type(field: Field) -> FacetType:
    """Pick the facet algorithm for a field."""
    for matches, kind in FACET_TYPE_RULES:
        if matches(field):
            return kind
    return FacetType.TERMS


def facet_field_name(field: Field) -> str:
    """Name of the index field the aggregation runs against.

    Analyzed text cannot be aggregated exactly, so non-date fields use their
    not-analyzed variant when the schema declares one.
    """
    if field.is_date_like:
        return field.name
    if field.not_analyzed_field is not None:
        return field.not_analyzed_field.name
    return field.name


def facet_display_name(field: Field) -> str:
    """Key under which the facet is returned to the caller."""
    if field.is_date_like and field.facet_modifier:
        return f"{field.name}.{field.facet_modifier}"
    return field.name


def _number(value: str) -> int | float:
    number = float(value)
    return int(number) if number.is_integer() else number


def geo_distance_ranges(width: int | float) -> list[dict[str, int | float]]:
    """Fixed distance histogram: one bucket per ``width`` plus an open-ended tail."""
    ranges: list[dict[str, int | float]] = [{"to": width}]
    for i in range(1, GEO_DISTANCE_BUCKET_COUNT):
        ranges.append({"from": i * width, "to": (i + 1) * width})
    ranges.append({"from": GEO_DISTANCE_BUCKET_COUNT * width})
    return ranges


def _terms_params(field: Field) -> tuple[str, FacetParams]:
    return facet_field_name(field), {"size": TERMS_FACET_SIZE, "order": {"_count": "desc"}}


def _geo_distance_params(field: Field) -> tuple[str, FacetParams]:
    if not field.facet_modifier:
        raise BadRequestError(
            f"Geo distance facet requires an origin and bucket size: "
            f"{field.name}:<lat>:<lng>:<size>"
        )

    parts = field.facet_modifier.split(":")
    if len(parts) != 3:
        raise BadRequestError(f"Invalid geo distance facet modifier: {field.facet_modifier}")
    lat, lng, bucket = parts

    check_coordinates(lat, lng, f"{lat}, {lng}")

    match = _GEO_BUCKET_WIDTH.match(bucket)
    if match is None:
        raise BadRequestError(f"Invalid geo distance facet modifier: {field.facet_modifier}")

    unit = match.group("unit") or DEFAULT_GEO_DISTANCE_UNIT
    if unit not in VALID_DISTANCE_UNITS:
        raise BadRequestError(f"Invalid geo distance facet unit: {unit}")

    width = _number(match.group("width"))
    if not width:
        raise BadRequestError(f"Invalid geo distance facet modifier: {field.facet_modifier}")

    return field.name, {
        "origin": f"{lat}, {lng}",
        "unit": unit,
        "ranges": geo_distance_ranges(width),
    }


def _date_histogram_params(field: Field) -> tuple[str, FacetParams]:
    interval = field.facet_modifier or DEFAULT_DATE_INTERVAL
    if interval not in DATE_HISTOGRAM_INTERVALS:
        raise BadRequestError(f"Invalid date facet interval: {field.name}:{interval}")
    return facet_field_name(field), {
        "interval": interval,
        "order": {"_key": "desc"},
        "min_doc_count": DATE_HISTOGRAM_MIN_DOC_COUNT,
    }


def calendar_ranges(interval: str) -> list[dict[str, str]]:
    """Calendar-aligned year buckets for a century or decade facet, newest first."""
    if interval == "century":
        (start, end), step = CENTURY_RANGE_YEARS, 100
    else:
        (start, end), step = DECADE_RANGE_YEARS, 10

    return [
        {"key": str(year), "from": str(year), "to": str(year + step)}
        for year in range(end - step, start - 1, -step)
    ]


def _range_params(field: Field) -> tuple[str, FacetParams]:
    return facet_field_name(field), {
        "format": "yyyy",
        "ranges": calendar_ranges(field.facet_modifier or ""),
    }


FACET_PARAM_BUILDERS: dict[FacetType, Callable[[Field], tuple[str, FacetParams]]] = {
    FacetType.TERMS: _terms_params,
    FacetType.GEO_DISTANCE: _geo_distance_params,
    FacetType.DATE_HISTOGRAM: _date_histogram_params,
    FacetType.RANGE: _range_params,
}


def build_facet_params(field: Field) -> tuple[FacetType, str, FacetParams]:
    """Return (algorithm, index field name, engine parameters) for a field."""
    kind = facet_type(field)
    index_field_name, params = FACET_PARAM_BUILDERS[kind](field)
    return kind, index_field_name, params


def _split_names(facets_param: str | Iterable[str] | None) -> list[str]:
    if not facets_param:
        return []
    tokens = facets_param.split(",") if isinstance(facets_param, str) else facets_param
    return [token.strip() for token in tokens if token and token.strip()]


class FacetBuilder:
    """Attaches facet aggregations to a search request."""

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry

    def expand_facet_fields(self, resource: str, names: Iterable[str]) -> list[str]:
        """Replace non-facetable parent fields with their facetable subfields.

        Geo subfields are skipped: they can only be faceted with an explicit
        origin, so they are never expanded to implicitly.
        """
        expanded: dict[str, None] = {}
        for name in names:
            field = self.registry.field(resource, name)
            if field is None or field.facetable:
                expanded[name] = None
                continue

            subfields = [sub.name for sub in field.subfields if sub.facetable and not sub.geo_point]
            for sub_name in subfields or [name]:
                expanded[sub_name] = None

        return list(expanded)

    def resolve(self, resource: str, names: Iterable[str]) -> list[Field]:
        """Resolve expanded facet names to facetable fields or raise BadRequestError."""
        fields: list[Field] = []
        for name in names:
            field = parse_facet_name(self.registry, resource, name)
            if field is None:
                raise BadRequestError(f"Invalid field(s) specified in facets parameter: {name}")
            if not field.facetable:
                raise BadRequestError(f"Non-facetable field specified in facets parameter: {name}")
            fields.append(field)
        return fields

    def build(self, field: Field) -> FacetRequest:
        kind, index_field_name, params = build_facet_params(field)
        return FacetRequest(
            field=field,
            facet_type=kind,
            index_field_name=index_field_name,
            params=params,
        )

    def build_all(
        self,
        request: SearchRequest,
        resource: str,
        facets_param: str | Iterable[str] | None,
        allow_empty_query: bool = False,
    ) -> bool:
        """Attach every requested facet to ``request``.

        Nothing is attached unless every requested facet resolves.

        Args:
            request: The request being compiled.
            resource: Resource type being searched.
            facets_param: Comma-separated facet names (or a list of them).
            allow_empty_query: Mark the request ``match_all`` when it carries
                facets but no query or filter.

        Returns:
            bool: True if at least one facet was attached.
        """
        names = self.expand_facet_fields(resource, _split_names(facets_param))
        if not names:
            return False

        facets = {
            facet_display_name(field): self.build(field) for field in self.resolve(resource, names)
        }
        for display_name, facet in facets.items():
            request.add_facet(display_name, facet)

        logger.debug("Attached facets for %s: %s", resource, ", ".join(facets))

        if allow_empty_query:
            request.match_all = True
        return True
