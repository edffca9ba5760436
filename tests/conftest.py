# conftest.py
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from catalog_search.config import Settings
from catalog_search.schema.registry import SchemaRegistry

RESOURCE = "test_resource"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        search_endpoint="http://search.test",
        search_index="test-catalog",
        repository_endpoint="http://repository.test",
        repository_database="test-catalog",
    )


@pytest.fixture(scope="session")
def registry() -> SchemaRegistry:
    """The built-in items/collections schema."""
    return SchemaRegistry.default()


@pytest.fixture(scope="session")
def test_registry() -> SchemaRegistry:
    """A small schema exercising every field kind under one resource."""
    return SchemaRegistry(
        {
            RESOURCE: {
                "id": {"type": "string", "index": "not_analyzed", "facet": True},
                "description": {"type": "string"},
                "format": {"type": "string", "index": "not_analyzed", "facet": True},
                "date": {"type": "date", "facet": True},
                "temporal": {
                    "properties": {
                        "begin": {"type": "date", "facet": True},
                        "end": {"type": "date", "facet": True},
                    }
                },
                "somefield": {
                    "properties": {
                        "sub2a": {"type": "string", "index": "not_analyzed", "facet": True},
                        "sub2a_geo": {"type": "geo_point", "facet": True},
                        "notes": {"type": "string"},
                    }
                },
                "spatial": {
                    "properties": {
                        "name": {
                            "type": "multi_field",
                            "fields": {
                                "name": {"type": "string"},
                                "raw": {"type": "string", "index": "not_analyzed"},
                            },
                            "facet": True,
                        },
                        "coordinates": {"type": "geo_point", "facet": True},
                    }
                },
            }
        }
    )


@pytest.fixture
def client() -> Iterator[TestClient]:
    from catalog_search.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
