"""REST API presentation layer for UserGate.

Structure:
    api/
    ├── app.py                # FastAPI application factory
    ├── config.py             # API configuration
    ├── dependencies.py       # Dependency injection
    ├── exception_handlers.py # Uniform error responses
    ├── routers/              # API route handlers
    └── schemas/              # Pydantic request/response schemas
"""

from usergate.presentation.api.app import create_app

__all__ = ["create_app"]
