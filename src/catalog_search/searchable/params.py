"""Mapping of raw search parameters onto schema fields."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from catalog_search.core.constants import (
    BASE_QUERY_PARAMS,
    DATE_AFTER_SUFFIX,
    DATE_BEFORE_SUFFIX,
    DISTANCE_PARAM,
)
from catalog_search.core.exceptions import BadRequestError
from catalog_search.core.models import Field
from catalog_search.schema.registry import SchemaRegistry

DISTANCE_SUFFIX = "distance"


@dataclass(frozen=True)
class FieldParam:
    """A search parameter resolved against a resource's schema."""

    key: str
    field: Field
    value: str
    suffix: str | None = None


def _geo_field(registry: SchemaRegistry, resource: str) -> Field | None:
    for field in registry.fields(resource):
        for candidate in (field, *field.subfields):
            if candidate.geo_point:
                return candidate
    return None


def resolve_field_param(
    registry: SchemaRegistry, resource: str, key: str
) -> tuple[Field, str | None]:
    """Find the field a parameter key refers to.

    Plain field paths win over query extensions (``date.before``,
    ``spatial.distance``).

    Raises:
        BadRequestError: If the key names no field of ``resource``.
    """
    field = registry.field(resource, key)
    if field is not None:
        return field, None

    if key == DISTANCE_PARAM:
        geo = _geo_field(registry, resource)
        if geo is not None:
            return geo, DISTANCE_SUFFIX

    base, _, suffix = key.rpartition(".")
    if suffix in (DATE_BEFORE_SUFFIX, DATE_AFTER_SUFFIX):
        field = registry.field(resource, base)
        if field is not None and field.is_date_like:
            return field, suffix

    raise BadRequestError(f"Invalid field(s) specified in query: {key}")


def field_params(
    registry: SchemaRegistry, resource: str, params: Mapping[str, Any]
) -> Iterator[FieldParam]:
    """Yield every non-base parameter resolved to its field."""
    for key, value in params.items():
        if key in BASE_QUERY_PARAMS:
            continue
        field, suffix = resolve_field_param(registry, resource, key)
        text = "" if value is None else str(value)
        yield FieldParam(key=key, field=field, value=text, suffix=suffix)
