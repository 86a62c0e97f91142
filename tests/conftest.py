"""
Fixtures for the procedure routers and the in-memory database.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.db import close_db, init_db
from app.deps import get_optional_user
from app.errors import register_exception_handlers
from app.routers import (
    admin,
    auth,
    billing,
    booking,
    customer,
    hotel,
    notification,
    pages,
    user,
    venue,
)

from .factories import make_admin, make_customer, make_owner

# ---------------------------------------------------------------------------
# App builder shared by the client fixtures
# ---------------------------------------------------------------------------


def build_app(current_user) -> FastAPI:
    """
    Fresh FastAPI app whose session lookup returns `current_user`
    unconditionally (None means an anonymous caller).

    Only the session layer is overridden: the authenticated / hotel / role
    tiers still run for real, so 401 and 403 paths are exercised as-is.
    """
    app = FastAPI()
    register_exception_handlers(app)
    for module in (
        auth,
        user,
        booking,
        customer,
        hotel,
        venue,
        billing,
        notification,
        admin,
    ):
        app.include_router(module.router)
    app.include_router(auth.http_router)
    app.include_router(pages.router)

    async def _user():
        return current_user

    app.dependency_overrides[get_optional_user] = _user
    return app


# ---------------------------------------------------------------------------
# Reusable client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def customer_client():
    return TestClient(build_app(make_customer()), raise_server_exceptions=True)


@pytest.fixture()
def owner_client():
    return TestClient(build_app(make_owner()), raise_server_exceptions=True)


@pytest.fixture()
def admin_client():
    return TestClient(build_app(make_admin()), raise_server_exceptions=True)


@pytest.fixture()
def anon_client():
    """No session at all. Use it to assert the 401 paths and page redirects."""
    return TestClient(
        build_app(None), raise_server_exceptions=True, follow_redirects=False
    )


@pytest.fixture()
def client_factory():
    def _make(current_user, **kwargs) -> TestClient:
        return TestClient(
            build_app(current_user), raise_server_exceptions=True, **kwargs
        )

    return _make


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture()
async def db():
    """Fresh in-memory SQLite schema per test."""
    await init_db(db_url="sqlite://:memory:", generate_schemas=True)
    yield
    await close_db()
