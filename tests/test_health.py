"""Tests for health check endpoint."""

from fastapi.testclient import TestClient


def test_health_check(client: TestClient):
    """Test the health endpoint."""
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "0.1.0"
    assert "environment" in data


def test_health_check_lists_resources(client: TestClient):
    """Health reports the searchable resources from the schema registry."""
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["resources"] == ["items", "collections"]
