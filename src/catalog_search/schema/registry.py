"""Read-only field schema for each searchable resource."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import Any

from catalog_search.core.constants import (
    DATE_AFTER_SUFFIX,
    DATE_BEFORE_SUFFIX,
    DISTANCE_PARAM,
)
from catalog_search.core.logging import get_logger
from catalog_search.core.models import Field
from catalog_search.schema.mappings import MAPPINGS

logger = get_logger(__name__)


def build_field(name: str, mapping: Mapping[str, Any]) -> Field:
    """Build a Field (and its subfields) from one engine mapping entry.

    Args:
        name: Full dotted path of the field.
        mapping: The engine mapping declared for that path.

    Returns:
        Field: The classified field.
    """
    facetable = bool(mapping.get("facet", False))

    if "properties" in mapping:
        subfields = tuple(
            build_field(f"{name}.{key}", sub_mapping)
            for key, sub_mapping in mapping["properties"].items()
        )
        return Field(name=name, type="object", facetable=facetable, subfields=subfields)

    field_type = mapping.get("type", "string")

    if field_type == "multi_field":
        variants: Mapping[str, Any] = mapping.get("fields", {})
        primary = variants.get(name.rsplit(".", 1)[-1], {})
        not_analyzed = None
        for key, variant in variants.items():
            if variant.get("index") == "not_analyzed":
                not_analyzed = Field(
                    name=f"{name}.{key}",
                    facetable=True,
                    analyzed=False,
                )
                break
        return Field(
            name=name,
            type=field_type,
            facetable=facetable,
            analyzed=primary.get("type", "string") == "string"
            and primary.get("index") != "not_analyzed",
            multi_field_date=primary.get("type") == "date",
            not_analyzed_field=not_analyzed,
        )

    return Field(
        name=name,
        type=field_type,
        facetable=facetable,
        analyzed=field_type == "string" and mapping.get("index") != "not_analyzed",
        date=field_type == "date",
        geo_point=field_type == "geo_point",
    )


def _walk(fields: tuple[Field, ...]) -> Iterator[Field]:
    for field in fields:
        yield field
        yield from _walk(field.subfields)


def _extension_names(field: Field) -> list[str]:
    """Parameter names accepted for querying a field beyond its own name."""
    if field.is_date_like:
        return [f"{field.name}.{DATE_BEFORE_SUFFIX}", f"{field.name}.{DATE_AFTER_SUFFIX}"]
    if field.geo_point:
        return [DISTANCE_PARAM]
    return []


class SchemaRegistry:
    """Immutable lookup of mapped fields per resource.

    Built once from the engine mappings and safe to share between concurrent
    requests: every table is a read-only proxy and every Field is frozen.
    """

    def __init__(self, mappings: Mapping[str, Mapping[str, Any]]):
        resources: dict[str, Mapping[str, Field]] = {}
        top_level: dict[str, tuple[Field, ...]] = {}
        mapped_names: set[str] = set()

        for resource, mapping in mappings.items():
            roots = tuple(build_field(name, entry) for name, entry in mapping.items())
            by_name = {field.name: field for field in _walk(roots)}
            resources[resource] = MappingProxyType(by_name)
            top_level[resource] = roots
            for field in by_name.values():
                mapped_names.add(field.name)
                mapped_names.update(_extension_names(field))

        self._resources: Mapping[str, Mapping[str, Field]] = MappingProxyType(resources)
        self._top_level: Mapping[str, tuple[Field, ...]] = MappingProxyType(top_level)
        self._mapped_names = frozenset(mapped_names)

        logger.info(
            "Schema registry initialized: %s (%s mapped names)",
            ", ".join(sorted(self._resources)),
            len(self._mapped_names),
        )

    @classmethod
    def default(cls) -> SchemaRegistry:
        """Registry for the built-in items and collections mappings."""
        return cls(MAPPINGS)

    def resources(self) -> tuple[str, ...]:
        return tuple(self._resources)

    def has_resource(self, resource: str) -> bool:
        return resource in self._resources

    def fields(self, resource: str) -> tuple[Field, ...]:
        """Top-level fields of a resource, in mapping order."""
        return self._top_level.get(resource, ())

    def field(self, resource: str, name: str, modifier: str | None = None) -> Field | None:
        """Look up a field by its full dotted path.

        Args:
            resource: Resource type, e.g. ``items``.
            name: Dotted field path without any facet modifier.
            modifier: Optional facet modifier to attach to the returned field.

        Returns:
            Field | None: The field (carrying ``modifier``), or None when unknown.
        """
        field = self._resources.get(resource, {}).get(name)
        if field is None or modifier is None:
            return field
        return replace(field, facet_modifier=modifier)

    def all_mapped_field_names(self) -> frozenset[str]:
        """Every field name, plus query extensions, across all resources."""
        return self._mapped_names
