# Gateway API Tests
"""Tests for the FastAPI host running requests through the pipeline."""

from unittest.mock import patch

from request_pipeline.errors import StageFault
from request_pipeline.pipeline import PipelineBuilder
from request_pipeline.routing import Router


class TestHealth:
    """Test health endpoint (served outside the pipeline)."""

    def test_health_lists_stages(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["service"] == "request-pipeline"
        assert [s["name"] for s in body["stages"]] == [
            "secure_transport",
            "authentication",
            "blocked_paths",
            "input_validation",
            "async_processing",
            "security_logging",
        ]


class TestGateway:
    """Test requests flowing through the security pipeline."""

    def test_insecure_request_forbidden(self, client):
        response = client.get("/api/data")

        assert response.status_code == 403
        assert response.text == "Simulated HTTPS required."

    def test_root_passes_without_authentication(self, client):
        response = client.get("/", params={"secure": "true"})

        assert response.status_code == 200
        assert response.text == "Middleware Security Demo - All checks passed!"

    def test_test_endpoint_exempt(self, client):
        response = client.get("/test", params={"secure": "true"})

        assert response.status_code == 200
        assert response.text == "Test endpoint reached successfully!"

    def test_api_requires_authentication(self, client):
        response = client.get("/api/secure", params={"secure": "true"})

        assert response.status_code == 401
        assert response.text == "Authentication required."

    def test_authenticated_api_request(self, client):
        response = client.get("/api/data", params={"secure": "true", "authenticated": "true"})

        assert response.status_code == 200
        assert response.text == "API Data endpoint - All security checks passed!"

    def test_blocked_prefix(self, client):
        response = client.get("/unauthorized/panel", params={"secure": "true", "authenticated": "true"})

        assert response.status_code == 401
        assert response.text == "Unauthorized Access."

    def test_script_input_rejected(self, client):
        response = client.get("/", params={"secure": "true", "input": "<script>alert(1)</script>"})

        assert response.status_code == 400
        assert response.text == "Invalid Input."

    def test_unknown_path_not_found(self, client):
        response = client.get("/nowhere", params={"secure": "true", "authenticated": "true"})

        assert response.status_code == 404
        assert response.text == "Not Found"

    def test_repeated_authentication_marker_rejected(self, client):
        response = client.get("/api/data?authenticated=false&secure=true&authenticated=true")

        assert response.status_code == 401
        assert response.text == "Authentication required."

    def test_repeated_transport_marker_rejected(self, client):
        response = client.get("/?secure=false&secure=true")

        assert response.status_code == 403

    def test_insecure_post_runs_stages(self, client):
        response = client.post("/api/data")

        assert response.status_code == 403
        assert response.text == "Simulated HTTPS required."

    def test_secure_post_to_get_endpoint_not_allowed(self, client):
        response = client.post("/", params={"secure": "true"})

        assert response.status_code == 405
        assert response.text == "Method Not Allowed"

    def test_response_is_plain_text(self, client):
        response = client.get("/", params={"secure": "true"})

        assert response.headers["content-type"].startswith("text/plain")

    def test_correlation_id_round_trip(self, client):
        response = client.get("/", params={"secure": "true"}, headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["X-Correlation-ID"] == "abc-123"

    def test_correlation_id_generated(self, client):
        response = client.get("/api/data")

        assert response.headers.get("X-Correlation-ID")

    def test_stage_fault_maps_to_server_error(self, client):
        with patch("request_pipeline.api.v1.routers.gateway.pipeline_factory") as mock_factory:
            mock_factory.get.return_value.execute.side_effect = StageFault("broken", 0, "boom")

            response = client.get("/", params={"secure": "true"})

        assert response.status_code == 500
        assert response.text == "Internal Server Error"

    def test_binary_body_written_unchanged(self, client):
        router = Router()
        router.add_route("/img", lambda exchange: b"\x89PNG\xff\xfe")
        pipeline = PipelineBuilder().build(router)

        with patch("request_pipeline.api.v1.routers.gateway.pipeline_factory") as mock_factory:
            mock_factory.get.return_value = pipeline

            response = client.get("/img")

        assert response.status_code == 200
        assert response.content == b"\x89PNG\xff\xfe"
