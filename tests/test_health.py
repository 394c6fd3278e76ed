"""Smoke tests for health and app wiring."""

from httpx import AsyncClient

from phaseboard.infrastructure.persistence.database import dispose_engine


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"


async def test_ready_reports_database_and_redis(client: AsyncClient) -> None:
    """GET /api/v1/health/ready answers once the database responds; Redis is off by default."""
    try:
        response = await client.get("/api/v1/health/ready")
    finally:
        await dispose_engine()
    assert response.status_code == 200
    assert response.json()["redis"] is False
