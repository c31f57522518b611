"""HTTP tests for app-level routes and error rendering."""

from unittest.mock import AsyncMock

from usergate.domain.shared import PersistenceError
from usergate.presentation.api.dependencies import get_user_repository


class TestAppRoutes:
    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "version": "1.0.0",
            "environment": "production",
        }

    def test_root_lists_endpoints(self, test_client, api_v1_prefix):
        response = test_client.get("/")

        assert response.status_code == 200
        assert response.json()["api_base"] == api_v1_prefix

    def test_unknown_route(self, test_client):
        response = test_client.get("/api/v1/nothing-here")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Route not found: GET /api/v1/nothing-here",
            "code": "ROUTE_NOT_FOUND",
        }


class TestServerFaults:
    """Store faults render a generic 500; details only in development."""

    def _failing_repository(self):
        repo = AsyncMock()
        repo.find_by_username.side_effect = PersistenceError(
            "find_by_username",
            ConnectionError("connection reset"),
        )
        return repo

    def test_production_hides_details(self, test_client, api_v1_prefix):
        test_client.app.dependency_overrides[get_user_repository] = (
            self._failing_repository
        )

        response = test_client.post(
            f"{api_v1_prefix}/auth/login",
            json={"username": "alice", "password": "secret1"},
        )

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "An error occurred. Please try again later.",
            "code": "DATABASE_ERROR",
        }

    def test_development_includes_details(self, make_client, api_settings, api_v1_prefix):
        settings = api_settings.model_copy(update={"environment": "development"})
        client = make_client(settings)
        client.app.dependency_overrides[get_user_repository] = self._failing_repository

        response = client.post(
            f"{api_v1_prefix}/auth/login",
            json={"username": "alice", "password": "secret1"},
        )

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "An error occurred. Please try again later."
        assert body["details"]["operation"] == "find_by_username"
        assert "connection reset" in body["details"]["error"]

    def test_unhandled_exception_is_generic(
        self,
        make_client,
        api_settings,
        api_v1_prefix,
    ):
        client = make_client(api_settings, raise_server_exceptions=False)

        def _broken_repository():
            repo = AsyncMock()
            repo.find_by_username.side_effect = RuntimeError("boom")
            return repo

        client.app.dependency_overrides[get_user_repository] = _broken_repository

        response = client.post(
            f"{api_v1_prefix}/auth/login",
            json={"username": "alice", "password": "secret1"},
        )

        assert response.status_code == 500
        assert response.json()["code"] == "INTERNAL_ERROR"
        assert "boom" not in response.text
