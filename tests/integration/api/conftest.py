"""Pytest fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from usergate.presentation.api.app import API_V1_PREFIX, create_app
from usergate.presentation.api.config import get_api_settings
from usergate.presentation.api.dependencies import get_session_maker
from usergate_auth import JWTService
from usergate_config.settings import Settings

TEST_JWT_SECRET = "test-jwt-secret-for-testing-only"


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings(database_url) -> Settings:
    """Test API settings pointing at the per-test SQLite database."""
    return Settings(
        jwt_secret_key=SecretStr(TEST_JWT_SECRET),
        postgres_password=SecretStr("test-password"),
        database_url_override=database_url,
        environment="production",
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        jwt_expires_in="1h",
        bcrypt_rounds=4,
    )


@pytest.fixture
def make_client(session_maker):
    """Build a test client for the given settings."""

    def _make(settings: Settings, **client_kwargs) -> TestClient:
        app = create_app(settings=settings)
        app.dependency_overrides[get_api_settings] = lambda: settings
        app.dependency_overrides[get_session_maker] = lambda: session_maker
        return TestClient(app, **client_kwargs)

    return _make


@pytest.fixture
def test_client(make_client, api_settings) -> TestClient:
    """Create a test client with a temporary database."""
    return make_client(api_settings)


@pytest.fixture
def registered_user_data() -> dict:
    return {
        "username": "alice",
        "email": "alice@x.com",
        "password": "secret1",
        "dob": "1990-04-01",
        "phone": "555-0100",
    }


@pytest.fixture
def registered_user_id(test_client, registered_user_data, api_v1_prefix) -> int:
    response = test_client.post(f"{api_v1_prefix}/users", json=registered_user_data)
    assert response.status_code == 201
    return response.json()["userId"]


@pytest.fixture
def auth_headers(
    test_client,
    registered_user_id,
    registered_user_data,
    api_v1_prefix,
) -> dict:
    """Log the registered user in and return bearer headers."""
    response = test_client.post(
        f"{api_v1_prefix}/auth/login",
        json={
            "username": registered_user_data["username"],
            "password": registered_user_data["password"],
        },
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def jwt_service(api_settings) -> JWTService:
    """A JWTService that issues tokens the test app accepts."""
    return JWTService(
        secret_key=api_settings.jwt_secret_key.get_secret_value(),
        issuer=api_settings.jwt_issuer,
        audience=api_settings.jwt_audience,
        expires_in=api_settings.jwt_expires_in,
    )
