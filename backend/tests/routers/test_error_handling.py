# tests/routers/test_error_handling.py
"""
Tests for the global exception handlers and error response format.

Every error is rendered as ErrorDetail (error, message, details), and
request validation failures as ValidationErrorDetail with one entry per
invalid field.
"""

from fastapi.testclient import TestClient


class TestErrorResponseStructure:

    def test_not_found_format(self, client: TestClient):
        response = client.get("/assets/12")

        assert response.status_code == 404
        data = response.json()
        assert set(data) == {"error", "message", "details"}
        assert data["message"] == "Asset 12 not found"

    def test_unknown_route_uses_error_format(self, client: TestClient):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "NotFoundError"

    def test_method_not_allowed(self, client: TestClient):
        response = client.put("/portfolio/")

        assert response.status_code == 405
        assert response.json()["error"] == "MethodNotAllowedError"


class TestValidationErrors:

    def test_validation_error_format(self, client: TestClient):
        response = client.post("/assets/", json={"category": "ETF"})

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "ValidationError"
        assert data["message"] == "Request validation failed"
        assert any(d["field"] == "body.name" for d in data["details"])

    def test_multiple_fields(self, client: TestClient):
        response = client.post("/transactions/", json={
            "asset_id": 1,
            "transaction_type": "BUY",
            "date": "2024-01-01",
            "quantity": "-1",
            "price": "-1",
        })

        assert response.status_code == 422
        fields = {d["field"] for d in response.json()["details"]}
        assert {"body.quantity", "body.price"} <= fields

    def test_nan_quantity(self, client: TestClient):
        response = client.post("/transactions/", json={
            "asset_id": 1,
            "transaction_type": "BUY",
            "date": "2024-01-01",
            "quantity": "NaN",
            "price": "1",
        })

        assert response.status_code == 422

    def test_invalid_query_parameter(self, client: TestClient):
        response = client.get("/portfolio/summary", params={"as_of": "yesterday"})

        assert response.status_code == 422


class TestHealthCheck:

    def test_health_check_success(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "test"
        assert data["checks"]["database"]["status"] == "healthy"

    def test_liveness(self, client: TestClient):
        assert client.get("/health/live").json() == {"status": "alive"}

    def test_readiness(self, client: TestClient):
        assert client.get("/health/ready").json() == {"status": "ready"}

    def test_root_endpoint(self, client: TestClient):
        data = client.get("/").json()

        assert data["docs"] == "/docs"
        assert "Welcome" in data["message"]
