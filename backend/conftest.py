"""
Root conftest.py: shared fixtures for the entire test suite.

Provides:
  - ``api_client`` fixture returning a DRF ``APIClient``.
  - ``store`` fixture, parametrised over the in-memory and the relational
    ``CaseStore`` and installed as the process store.
  - ``create_user`` factory fixture for creating staff users.
  - ``auth_header`` fixture for authenticated requests (JWT).

Every test starts from an empty in-memory store, so endpoint tests never
see each other's cases.
"""

from __future__ import annotations

import pytest
from django.apps import apps
from rest_framework.test import APIClient

from core.storage.database import DatabaseCaseStore
from core.storage.memory import InMemoryCaseStore


def _install(monkeypatch, store):
    monkeypatch.setattr(apps.get_app_config("core"), "store", store)
    return store


@pytest.fixture(autouse=True)
def _fresh_store(monkeypatch):
    """Replace the process store with an empty in-memory one."""
    return _install(monkeypatch, InMemoryCaseStore())


@pytest.fixture()
def api_client() -> APIClient:
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture(params=["memory", "database"])
def store(request, monkeypatch):
    """
    The active ``CaseStore``, once per implementation.

    Tests using this fixture run twice; both runs must observe identical
    results.  The relational run gets database access automatically.
    """
    if request.param == "database":
        request.getfixturevalue("db")
        return _install(monkeypatch, DatabaseCaseStore())
    return _install(monkeypatch, InMemoryCaseStore())


@pytest.fixture()
def create_user():
    """
    Factory fixture that creates a staff user in the active store.

    Usage::

        def test_something(create_user):
            user = create_user(username="alice")
            # or with all fields:
            user = create_user(
                username="bob",
                password="Str0ng!Pass",
                full_name="Bob Cruz",
                position="Social Worker",
                office="MSWD",
                role="administrator",
            )
    """
    from core.storage import get_store

    _counter = 0

    def _factory(
        *,
        username: str | None = None,
        password: str = "TestPass123!",
        full_name: str | None = None,
        position: str | None = "Social Worker",
        office: str | None = "Municipal Social Welfare Department",
        role: str = "editor",
    ):
        nonlocal _counter
        _counter += 1
        if username is None:
            username = f"testuser{_counter}"
        if full_name is None:
            full_name = f"Test User {_counter}"
        return get_store().create_user(
            username=username,
            password=password,
            full_name=full_name,
            position=position,
            office=office,
            role=role,
        )

    return _factory


@pytest.fixture()
def auth_header(create_user):
    """
    Returns a helper function that creates a user and returns an
    ``Authorization`` header dict with a valid bearer token.

    Usage::

        def test_protected(auth_header, api_client):
            header = auth_header(username="alice")
            api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])
            resp = api_client.get("/api/dashboard")
            assert resp.status_code != 401

    The returned dict looks like::

        {"Authorization": "Bearer eyJ..."}
    """
    from accounts.services import AuthenticationService

    def _make(
        *,
        username: str | None = None,
        role: str = "editor",
        **user_kwargs,
    ) -> dict[str, str]:
        user = create_user(username=username, role=role, **user_kwargs)
        token = AuthenticationService.generate_token(user)
        return {"Authorization": f"Bearer {token}"}

    return _make
