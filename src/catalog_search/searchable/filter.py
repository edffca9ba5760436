"""Exact-match, date range and geo distance filter clauses."""

from __future__ import annotations

import calendar
import re
from collections.abc import Mapping
from datetime import date
from typing import Any

from catalog_search.core.constants import (
    DATE_AFTER_SUFFIX,
    DATE_BEFORE_SUFFIX,
    DEFAULT_FILTER_DISTANCE,
    DISTANCE_PARAM,
    VALID_DISTANCE_UNITS,
)
from catalog_search.core.exceptions import BadRequestError
from catalog_search.core.logging import get_logger
from catalog_search.core.models import SearchRequest
from catalog_search.schema.registry import SchemaRegistry
from catalog_search.searchable.params import DISTANCE_SUFFIX, FieldParam, field_params
from catalog_search.searchable.query import is_query_field

logger = get_logger(__name__)

_DATE = re.compile(r"^(?P<year>\d{4})(?:-(?P<month>\d{2})(?:-(?P<day>\d{2}))?)?$")
_DISTANCE = re.compile(r"^(?P<amount>\d+(?:\.\d+)?)(?P<unit>[a-z]+)$")


def date_bounds(value: str) -> tuple[str, str]:
    """First and last calendar day covered by ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD``.

    Raises:
        BadRequestError: If the value is not one of those forms or not a real date.
    """
    match = _DATE.match(value.strip())
    if match is None:
        raise BadRequestError(f"Invalid date value: {value}")

    year = int(match.group("year"))
    month = match.group("month")
    day = match.group("day")
    try:
        if month is None:
            start, end = date(year, 1, 1), date(year, 12, 31)
        elif day is None:
            last_day = calendar.monthrange(year, int(month))[1]
            start, end = date(year, int(month), 1), date(year, int(month), last_day)
        else:
            start = end = date(year, int(month), int(day))
    except ValueError as exc:
        raise BadRequestError(f"Invalid date value: {value}") from exc

    return start.isoformat(), end.isoformat()


def date_clause(param: FieldParam) -> dict[str, Any]:
    start, end = date_bounds(param.value)
    if param.suffix == DATE_BEFORE_SUFFIX:
        bounds = {"lte": end}
    elif param.suffix == DATE_AFTER_SUFFIX:
        bounds = {"gte": start}
    else:
        bounds = {"gte": start, "lte": end}
    return {"range": {param.field.name: bounds}}


def parse_coordinates(value: str) -> tuple[float, float]:
    """Parse ``"<lat>,<lng>"`` into a validated pair of floats."""
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2:
        raise BadRequestError(f"Invalid coordinates value: {value}")
    return check_coordinates(parts[0], parts[1], value)


def check_coordinates(lat: str, lng: str, value: str) -> tuple[float, float]:
    """Convert a latitude and longitude pair, rejecting non-finite or out of range values."""
    try:
        lat_value, lng_value = float(lat), float(lng)
    except ValueError as exc:
        raise BadRequestError(f"Invalid coordinates value: {value}") from exc
    if not (-90 <= lat_value <= 90 and -180 <= lng_value <= 180):
        raise BadRequestError(f"Coordinates out of range: {value}")
    return lat_value, lng_value


def validate_distance(value: str) -> str:
    match = _DISTANCE.match(value.strip())
    if match is None or match.group("unit") not in VALID_DISTANCE_UNITS:
        raise BadRequestError(f"Invalid distance value: {value}")
    return f"{match.group('amount')}{match.group('unit')}"


def geo_distance_clause(param: FieldParam, distance: str) -> dict[str, Any]:
    lat, lng = parse_coordinates(param.value)
    return {
        "geo_distance": {
            "distance": validate_distance(distance),
            param.field.name: {"lat": lat, "lon": lng},
        }
    }


def integer_clause(param: FieldParam) -> dict[str, Any]:
    try:
        value = int(param.value)
    except ValueError as exc:
        raise BadRequestError(
            f"Invalid integer value for field {param.key}: {param.value}"
        ) from exc
    return {"term": {param.field.name: value}}


class FilterBuilder:
    """Attaches filter clauses for date, geo and integer field parameters."""

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry

    def build_all(self, request: SearchRequest, resource: str, params: Mapping[str, Any]) -> bool:
        """Attach a filter clause for every filterable field parameter.

        Returns:
            bool: True if any filter clause was attached.
        """
        got_filters = False
        resolved = list(field_params(self.registry, resource, params))
        has_coordinates = any(p.field.geo_point and p.suffix is None for p in resolved)

        for param in resolved:
            field = param.field
            if param.suffix == DISTANCE_SUFFIX:
                if not has_coordinates:
                    raise BadRequestError(
                        f"{DISTANCE_PARAM} requires a {field.name} parameter"
                    )
                continue
            if param.suffix is None and is_query_field(field):
                continue

            if field.is_date_like:
                clause = date_clause(param)
            elif field.geo_point:
                distance = str(params.get(DISTANCE_PARAM) or DEFAULT_FILTER_DISTANCE)
                clause = geo_distance_clause(param, distance)
            elif field.is_integer:
                clause = integer_clause(param)
            else:
                raise BadRequestError(f"Field cannot be filtered: {param.key}")

            request.add_filter(clause)
            got_filters = True

        if got_filters:
            logger.debug("Filter clauses for %s: %s", resource, request.filters)
        return got_filters
