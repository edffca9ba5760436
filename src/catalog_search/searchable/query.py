"""Full-text query clauses."""

from collections.abc import Mapping
from typing import Any

from catalog_search.core.exceptions import BadRequestError
from catalog_search.core.logging import get_logger
from catalog_search.core.models import Field, SearchRequest
from catalog_search.schema.registry import SchemaRegistry
from catalog_search.searchable.params import FieldParam, field_params

logger = get_logger(__name__)


def is_query_field(field: Field) -> bool:
    """True for fields searched as text rather than filtered."""
    return field.type == "object" or field.is_string


def _string_subfields(field: Field) -> list[str]:
    return [sub.name for sub in field.subfields if sub.is_string]


def query_string_clause(q: str) -> dict[str, Any]:
    return {"query_string": {"query": q, "default_operator": "AND", "lenient": True}}


def field_clause(param: FieldParam) -> dict[str, Any]:
    """Text clause for one field parameter.

    A parent field is searched across its string subfields.
    """
    if not param.value.strip():
        raise BadRequestError(f"Empty value specified for field: {param.key}")

    field = param.field
    if field.type == "object":
        subfields = _string_subfields(field)
        if not subfields:
            raise BadRequestError(f"Field cannot be searched as text: {param.key}")
        return {"multi_match": {"query": param.value, "fields": subfields, "operator": "and"}}

    return {"match": {field.name: {"query": param.value, "operator": "and"}}}


class QueryBuilder:
    """Attaches the free-text query and per-field text queries."""

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry

    def build_all(self, request: SearchRequest, resource: str, params: Mapping[str, Any]) -> bool:
        """Attach query clauses for ``q`` and every text field parameter.

        Returns:
            bool: True if any query clause was attached.
        """
        got_queries = False

        q = params.get("q")
        if q is not None and str(q).strip():
            request.add_query(query_string_clause(str(q)))
            got_queries = True

        for param in field_params(self.registry, resource, params):
            if param.suffix is None and is_query_field(param.field):
                request.add_query(field_clause(param))
                got_queries = True

        if got_queries:
            logger.debug("Query clauses for %s: %s", resource, request.queries)
        return got_queries
