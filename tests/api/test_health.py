"""
Tests for the health check endpoint.
"""


def test_health_check_returns_200(client):
    response = client.get("/health")
    assert response.status_code == 200


def test_health_check_returns_service_name(client):
    """
    Monitoring systems parse this field, so a change to it
    is a breaking change.
    """
    data = client.get("/health").json()
    assert data["service"] == "account-ledger"


def test_health_check_reports_healthy_database(client):
    data = client.get("/health").json()
    assert data["database"] == "healthy"
    assert data["status"] == "healthy"
