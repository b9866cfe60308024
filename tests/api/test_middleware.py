"""Tests for API middleware and error envelopes."""

from fastapi.testclient import TestClient


class TestRequestIdMiddleware:
    """Tests for request ID correlation middleware."""

    def test_generates_request_id_if_not_provided(self, client: TestClient) -> None:
        """Should generate request ID if not in request headers."""
        response = client.get("/health")
        assert response.status_code == 200
        # UUID format
        assert len(response.headers["X-Request-ID"]) == 36

    def test_uses_provided_request_id(self, client: TestClient) -> None:
        """Should use request ID from request headers."""
        custom_id = "custom-request-id-12345"
        response = client.get("/health", headers={"X-Request-ID": custom_id})
        assert response.headers["X-Request-ID"] == custom_id

    def test_failure_envelope_carries_request_id(self, client: TestClient) -> None:
        response = client.post(
            "/api/products",
            json={"itemsPerPage": -5},
            headers={"X-Request-ID": "trace-1"},
        )

        assert response.status_code == 400
        assert response.json()["requestId"] == "trace-1"


class TestErrorEnvelope:
    """Tests for framework errors using the failure envelope."""

    def test_unknown_route(self, client: TestClient) -> None:
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "Not Found"

    def test_wrong_method(self, client: TestClient) -> None:
        response = client.put("/api/products", json={})

        assert response.status_code == 405
        assert response.json()["success"] is False
