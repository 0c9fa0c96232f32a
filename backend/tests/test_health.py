"""Health endpoint smoke test."""

import pytest
from httpx import ASGITransport, AsyncClient

from service_booking.main import app


@pytest.mark.asyncio
async def test_healthcheck_returns_ok() -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["service"] == "Vehicle Service Booking API"
    assert response.headers["X-Request-ID"]
    assert response.headers["X-Content-Type-Options"] == "nosniff"


@pytest.mark.asyncio
async def test_readiness_reports_database(app_context: dict[str, object]) -> None:
    client = app_context["client"]
    response = await client.get("/api/v1/health/ready")  # type: ignore[attr-defined]
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}
