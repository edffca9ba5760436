"""Parsing of facet request tokens into schema fields."""

from catalog_search.core.constants import VALID_DATE_INTERVALS
from catalog_search.core.models import Field
from catalog_search.schema.registry import SchemaRegistry


def split_facet_name(token: str) -> tuple[str, str | None]:
    """Split a facet token into its base field path and optional modifier.

    A colon always wins: ``spatial.coordinates:42.3:-71:20mi`` splits at the
    first colon and keeps the rest verbatim. Without a colon, a trailing date
    interval (``temporal.begin.year``) is the modifier. Anything else is a plain
    field path, compound names such as ``spatial.coordinates`` included.
    """
    if ":" in token:
        base, modifier = token.split(":", 1)
        return base, modifier

    base, dot, last = token.rpartition(".")
    if dot and last in VALID_DATE_INTERVALS:
        return base, last

    return token, None


def parse_facet_name(registry: SchemaRegistry, resource: str, token: str) -> Field | None:
    """Resolve a facet token to a Field carrying its facet modifier.

    Returns:
        Field | None: The field, or None when the base path is not mapped.
    """
    base, modifier = split_facet_name(token)
    return registry.field(resource, base, modifier)
