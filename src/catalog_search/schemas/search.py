"""Search and fetch response schemas."""

from typing import Any

from pydantic import BaseModel, Field


class SearchResponse(BaseModel):
    """Result envelope returned for a search."""

    count: int = Field(..., description="Total number of matching documents", ge=0)
    start: int = Field(..., description="Offset of the first returned document", ge=0)
    limit: int = Field(..., description="Page size used for the search", ge=1)
    docs: list[dict[str, Any]] = Field(
        default_factory=list, description="Stored documents, each with its relevance score"
    )
    facets: dict[str, Any] = Field(
        default_factory=dict, description="Facet aggregations as returned by the engine"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "count": 1,
                    "start": 0,
                    "limit": 10,
                    "docs": [{"id": "abc123", "title": "Boston Harbor", "score": 1.42}],
                    "facets": {},
                }
            ]
        }
    }


class FetchResponse(BaseModel):
    """Documents fetched by id."""

    count: int = Field(..., description="Number of documents found", ge=0)
    docs: list[dict[str, Any]] = Field(default_factory=list, description="Stored documents")
