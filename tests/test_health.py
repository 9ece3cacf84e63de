from fastapi.testclient import TestClient


class TestHealthChecks:
    def test_basic_health_endpoint(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "booking-api"}

    def test_liveness_endpoint(self, client: TestClient):
        assert client.get("/health/live").status_code == 200

    def test_database_health_check(self, client: TestClient):
        response = client.get("/health/db")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness_endpoint(self, client: TestClient):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"]["database"] == "healthy"
