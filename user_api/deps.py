from __future__ import annotations

from fastapi import Request
from fastapi.security import HTTPBearer

from user_api.settings import Settings
from user_api.user_store import InMemoryUserStore

# Documents the bearer scheme in OpenAPI (the docs "Authorize" button).
# Enforcement happens in the auth gate middleware, so it never errors itself.
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings_dep(request: Request) -> Settings:
    """FastAPI dependency for settings.

    Returns the Settings the application was built with in create_app().
    """
    return request.app.state.settings


def get_user_store(request: Request) -> InMemoryUserStore:
    """FastAPI dependency for the registry.

    One registry per application instance; create_app() owns it. Tests can
    swap it out through ``app.dependency_overrides``.
    """
    return request.app.state.user_store
