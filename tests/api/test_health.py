"""
Tests for the health check endpoint.
"""

from league_registry.config import Settings, get_settings
from league_registry.main import app


def test_health_check_returns_200(client):
    """
    Verify the health endpoint responds with HTTP 200.

    If this fails, nothing else will work.
    """
    response = client.get("/health")
    assert response.status_code == 200


def test_health_check_returns_service_name(client):
    response = client.get("/health")
    data = response.json()
    assert data["service"] == "league-registry"


def test_health_check_reports_database_status(client):
    response = client.get("/health")
    data = response.json()
    assert data["database"] == "healthy"
    assert data["status"] == "healthy"


def test_health_check_reports_unconfigured_gateway(client):
    """
    Registration keeps working without Stripe, so a missing key
    is reported rather than treated as unhealthy.
    """
    settings = Settings()
    settings.STRIPE_SECRET_KEY = ""
    app.dependency_overrides[get_settings] = lambda: settings

    data = client.get("/health").json()
    assert data["payment_gateway"] == "not_configured"
    assert data["status"] == "healthy"


def test_health_check_reports_configured_gateway(client):
    settings = Settings()
    settings.STRIPE_SECRET_KEY = "sk_test_123"
    app.dependency_overrides[get_settings] = lambda: settings

    data = client.get("/health").json()
    assert data["payment_gateway"] == "configured"
