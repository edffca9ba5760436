"""Domain models for schema fields and compiled search requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Field:
    """A mapped schema field of one resource.

    ``name`` is the full dotted path (``temporal.begin``). ``facet_modifier`` is
    never part of the stored schema; it is attached to a copy at lookup time.
    """

    name: str
    type: str = "string"
    facetable: bool = False
    analyzed: bool = True
    date: bool = False
    geo_point: bool = False
    multi_field_date: bool = False
    not_analyzed_field: Field | None = None
    subfields: tuple[Field, ...] = ()
    facet_modifier: str | None = None

    @property
    def is_date_like(self) -> bool:
        return self.date or self.multi_field_date

    @property
    def is_string(self) -> bool:
        return self.type in ("string", "multi_field") and not self.is_date_like

    @property
    def is_integer(self) -> bool:
        return self.type == "integer"


class FacetType(str, Enum):
    """Facet algorithm names as understood by the search engine."""

    GEO_DISTANCE = "geo_distance"
    DATE_HISTOGRAM = "date_histogram"
    RANGE = "range"
    TERMS = "terms"


@dataclass(frozen=True)
class FacetRequest:
    """A resolved facet: field, algorithm and engine parameters."""

    field: Field
    facet_type: FacetType
    index_field_name: str
    params: dict[str, Any]

    def to_aggregation(self) -> dict[str, Any]:
        return {self.facet_type.value: {"field": self.index_field_name, **self.params}}


@dataclass
class SearchRequest:
    """Engine request compiled for a single search call."""

    queries: list[dict[str, Any]] = field(default_factory=list)
    filters: list[dict[str, Any]] = field(default_factory=list)
    facets: dict[str, FacetRequest] = field(default_factory=dict)
    from_: int = 0
    size: int = 10
    sort: tuple[str, str] | None = None
    source_fields: list[str] | None = None
    match_all: bool = False

    @property
    def is_empty(self) -> bool:
        return not (self.queries or self.filters or self.facets)

    def add_query(self, clause: dict[str, Any]) -> None:
        self.queries.append(clause)

    def add_filter(self, clause: dict[str, Any]) -> None:
        self.filters.append(clause)

    def add_facet(self, display_name: str, facet: FacetRequest) -> None:
        self.facets[display_name] = facet

    def to_body(self) -> dict[str, Any]:
        """Render the JSON body sent to the engine's ``_search`` endpoint."""
        body: dict[str, Any] = {"from": self.from_, "size": self.size}

        if self.queries or self.filters:
            bool_query: dict[str, Any] = {}
            if self.queries:
                bool_query["must"] = list(self.queries)
            if self.filters:
                bool_query["filter"] = list(self.filters)
            body["query"] = {"bool": bool_query}
        elif self.match_all:
            body["query"] = {"match_all": {}}

        if self.facets:
            body["aggs"] = {name: facet.to_aggregation() for name, facet in self.facets.items()}

        if self.sort is not None:
            sort_field, order = self.sort
            body["sort"] = [{sort_field: {"order": order}}]

        if self.source_fields:
            body["_source"] = list(self.source_fields)

        return body
