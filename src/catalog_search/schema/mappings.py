"""Engine index mappings for the searchable resources.

Mappings follow the engine's mapping syntax with one extension: ``"facet": True``
marks a field that may be requested in the ``facets`` parameter. String fields
meant for exact aggregation are either ``not_analyzed`` or declared as
``multi_field`` with a ``not_analyzed`` variant.
"""

from typing import Any

from catalog_search.core.constants import RESOURCE_COLLECTIONS, RESOURCE_ITEMS

NOT_ANALYZED_STRING: dict[str, Any] = {"type": "string", "index": "not_analyzed"}


def _multi_field(name: str, primary_type: str = "string") -> dict[str, Any]:
    """Mapping for a field indexed both in its primary form and as a raw string."""
    return {
        "type": "multi_field",
        "fields": {
            name: {"type": primary_type},
            "raw": NOT_ANALYZED_STRING,
        },
        "facet": True,
    }


ITEMS_MAPPING: dict[str, Any] = {
    "id": {**NOT_ANALYZED_STRING, "facet": True},
    "title": {"type": "string"},
    "description": {"type": "string"},
    "creator": {"type": "string"},
    "rights": {"type": "string"},
    "publisher": _multi_field("publisher"),
    "format": {**NOT_ANALYZED_STRING, "facet": True},
    "type": {**NOT_ANALYZED_STRING, "facet": True},
    "date": {"type": "date", "facet": True},
    "created": _multi_field("created", primary_type="date"),
    "temporal": {
        "properties": {
            "begin": {"type": "date", "facet": True},
            "end": {"type": "date", "facet": True},
        }
    },
    "subject": {"properties": {"name": _multi_field("name")}},
    "language": {
        "properties": {
            "name": _multi_field("name"),
            "iso639": {**NOT_ANALYZED_STRING, "facet": True},
        }
    },
    "spatial": {
        "properties": {
            "name": _multi_field("name"),
            "city": _multi_field("city"),
            "state": _multi_field("state"),
            "country": _multi_field("country"),
            "coordinates": {"type": "geo_point", "facet": True},
        }
    },
    "isPartOf": {
        "properties": {
            "name": _multi_field("name"),
        }
    },
    "provider": {
        "properties": {
            "name": _multi_field("name"),
        }
    },
    "pageCount": {"type": "integer", "facet": True},
}

COLLECTIONS_MAPPING: dict[str, Any] = {
    "id": {**NOT_ANALYZED_STRING, "facet": True},
    "title": _multi_field("title"),
    "description": {"type": "string"},
    "ingestDate": {"type": "date", "facet": True},
    "provider": {
        "properties": {
            "name": _multi_field("name"),
        }
    },
    "itemCount": {"type": "integer", "facet": True},
}

MAPPINGS: dict[str, dict[str, Any]] = {
    RESOURCE_ITEMS: ITEMS_MAPPING,
    RESOURCE_COLLECTIONS: COLLECTIONS_MAPPING,
}
