"""
Integration tests for the staff authentication endpoints.

Endpoints under test
--------------------
POST /api/auth/login    (accounts:login)
POST /api/auth/logout   (accounts:logout)
GET  /api/auth/me       (accounts:me)

Success response:  HTTP 200 ``{"user": {...}, "token": "<jwt>"}``
Failure response:  HTTP 401 ``{"message": "Invalid username or password"}``
                   for both unknown usernames and wrong passwords.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from django.conf import settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIRequestFactory
from rest_framework_simplejwt.tokens import AccessToken

from accounts.authentication import BearerTokenAuthentication, StaffTokenUser
from accounts.services import AuthenticationService
from core.storage import get_store

# ── Constants ────────────────────────────────────────────────────────────────
_PASSWORD = "Str0ng!Pass99"

_USER_FIELDS = {
    "username": "jdelacruz",
    "full_name": "Juan Dela Cruz",
    "position": "VAWC Coordinator",
    "office": "Municipal Social Welfare Department",
    "role": "editor",
}


@pytest.fixture()
def staff_user(create_user):
    return create_user(password=_PASSWORD, **_USER_FIELDS)


def _login(client, username, password, **extra):
    return client.post(
        reverse("accounts:login"),
        {"username": username, "password": password, **extra},
        format="json",
    )


# ── Login ────────────────────────────────────────────────────────────────────


def test_login_returns_profile_and_token(store, api_client, staff_user):
    resp = _login(api_client, "jdelacruz", _PASSWORD)

    assert resp.status_code == status.HTTP_200_OK, resp.data
    assert resp.data["user"] == {
        "id": staff_user.id,
        "username": "jdelacruz",
        "fullName": "Juan Dela Cruz",
        "position": "VAWC Coordinator",
        "office": "Municipal Social Welfare Department",
        "role": "editor",
    }
    assert "password" not in resp.data["user"]

    token = AccessToken(resp.data["token"])
    assert int(token["id"]) == staff_user.id
    assert token["username"] == "jdelacruz"
    assert token["fullName"] == "Juan Dela Cruz"
    assert token["role"] == "editor"


def test_login_sets_session_cookie(api_client, staff_user):
    resp = _login(api_client, "jdelacruz", _PASSWORD)

    assert settings.SESSION_COOKIE_NAME in resp.cookies


def test_remember_me_extends_session(api_client, staff_user):
    resp = _login(api_client, "jdelacruz", _PASSWORD, rememberMe=True)

    cookie = resp.cookies[settings.SESSION_COOKIE_NAME]
    assert int(cookie["max-age"]) > settings.SESSION_COOKIE_AGE
    assert int(cookie["max-age"]) > 29 * 24 * 60 * 60


def test_wrong_password_is_rejected_without_token(store, api_client, staff_user):
    resp = _login(api_client, "jdelacruz", "wrong-password")

    assert resp.status_code == status.HTTP_401_UNAUTHORIZED
    assert resp.data == {"message": "Invalid username or password"}
    assert "token" not in resp.data


def test_unknown_username_gets_the_same_answer(api_client, staff_user):
    resp = _login(api_client, "nobody", _PASSWORD)

    assert resp.status_code == status.HTTP_401_UNAUTHORIZED
    assert resp.data == {"message": "Invalid username or password"}


@pytest.mark.parametrize("payload", [{}, {"username": "jdelacruz"}, {"password": "x"}])
def test_incomplete_credentials_are_a_validation_error(api_client, payload):
    resp = api_client.post(reverse("accounts:login"), payload, format="json")

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert resp.data["message"] == "Validation error"


# ── Me ───────────────────────────────────────────────────────────────────────


def test_me_returns_current_user(store, api_client, staff_user):
    token = _login(api_client, "jdelacruz", _PASSWORD).data["token"]
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    resp = api_client.get(reverse("accounts:me"))

    assert resp.status_code == status.HTTP_200_OK
    assert resp.data["id"] == staff_user.id
    assert resp.data["fullName"] == "Juan Dela Cruz"


def test_me_without_token_is_unauthorized(api_client):
    resp = api_client.get(reverse("accounts:me"))

    assert resp.status_code == status.HTTP_401_UNAUTHORIZED
    assert resp.data == {"message": "Unauthorized: No token provided"}


def test_me_with_tampered_token_is_forbidden(api_client):
    api_client.credentials(HTTP_AUTHORIZATION="Bearer not.a.token")

    resp = api_client.get(reverse("accounts:me"))

    assert resp.status_code == status.HTTP_403_FORBIDDEN
    assert resp.data == {"message": "Forbidden: Invalid token"}


def test_me_with_expired_token_is_forbidden(api_client, staff_user):
    token = AccessToken()
    token["id"] = staff_user.id
    token.set_exp(lifetime=-timedelta(seconds=1))
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    resp = api_client.get(reverse("accounts:me"))

    assert resp.status_code == status.HTTP_403_FORBIDDEN
    assert resp.data == {"message": "Forbidden: Invalid token"}


def test_token_user_id_is_an_integer(store, staff_user):
    token = AuthenticationService.generate_token(staff_user)
    request = APIRequestFactory().get("/", HTTP_AUTHORIZATION=f"Bearer {token}")

    user, _ = BearerTokenAuthentication().authenticate(request)

    assert isinstance(user, StaffTokenUser)
    assert isinstance(user.id, int)
    assert user.id == staff_user.id
    assert user.role == "editor"
    assert get_store().get_user(user.id).username == "jdelacruz"


def test_me_for_user_that_no_longer_exists(api_client, staff_user, monkeypatch):
    token = _login(api_client, "jdelacruz", _PASSWORD).data["token"]
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    monkeypatch.setattr(get_store(), "get_user", lambda user_id: None)

    resp = api_client.get(reverse("accounts:me"))

    assert resp.status_code == status.HTTP_404_NOT_FOUND
    assert resp.data == {"message": "User not found"}


# ── Logout ───────────────────────────────────────────────────────────────────


def test_logout_clears_session(api_client, auth_header):
    api_client.credentials(HTTP_AUTHORIZATION=auth_header()["Authorization"])

    resp = api_client.post(reverse("accounts:logout"))

    assert resp.status_code == status.HTTP_200_OK
    assert resp.data == {"message": "Logged out successfully"}
    assert resp.cookies[settings.SESSION_COOKIE_NAME].value == ""


def test_logout_requires_token(api_client):
    resp = api_client.post(reverse("accounts:logout"))

    assert resp.status_code == status.HTTP_401_UNAUTHORIZED
