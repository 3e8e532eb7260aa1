"""
Smoke tests: verify that Django boots, URL routing resolves, and the
shared domain helpers behave.

None of these tests touch the database or the case data; they only
prove the plumbing works.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from django.urls import resolve, reverse


# ════════════════════════════════════════════════════════════════════
#  URL Routing Smoke Tests
# ════════════════════════════════════════════════════════════════════

class TestURLRouting:
    """Ensure every named API route reverses to its documented path."""

    EXPECTED_URLS = [
        # (url_name, args, expected_path)
        ("accounts:login",       [],  "/api/auth/login"),
        ("accounts:logout",      [],  "/api/auth/logout"),
        ("accounts:me",          [],  "/api/auth/me"),
        ("core:dashboard-stats", [],  "/api/dashboard"),
        ("core:reports",         [],  "/api/reports"),
        ("case-list",            [],  "/api/cases"),
        ("case-detail",          [1], "/api/cases/1"),
        ("case-notes",           [1], "/api/cases/1/notes"),
        ("case-services",        [1], "/api/cases/1/services"),
    ]

    @pytest.mark.parametrize("url_name,args,expected_path", EXPECTED_URLS)
    def test_url_reverses(self, url_name: str, args: list, expected_path: str):
        """Named URL reverses to the exact path, without a trailing slash."""
        assert reverse(url_name, args=args) == expected_path

    @pytest.mark.parametrize("url_name,args,expected_path", EXPECTED_URLS)
    def test_path_resolves_to_view(self, url_name: str, args: list, expected_path: str):
        """Path resolves to a view function (not a 404)."""
        match = resolve(expected_path)
        assert match.func is not None


# ════════════════════════════════════════════════════════════════════
#  Exception Behaviour Tests
# ════════════════════════════════════════════════════════════════════

class TestDomainExceptions:
    """Unit tests for domain exception classes and their HTTP mapping."""

    def test_inheritance_chain(self):
        from core.domain import exceptions
        from core.domain.exceptions import Conflict, DomainError, NotFound

        assert issubclass(Conflict, DomainError)
        assert not hasattr(exceptions, "PermissionDenied")
        assert issubclass(NotFound, DomainError)

    def test_domain_error_message(self):
        from core.domain.exceptions import DomainError

        err = DomainError("test message")
        assert str(err) == "test message"
        assert err.message == "test message"

    @pytest.mark.parametrize(
        "exc_name,expected_status",
        [
            ("DomainError", 400),
            ("NotFound", 404),
            ("Conflict", 409),
        ],
    )
    def test_handler_maps_domain_exceptions(self, exc_name, expected_status):
        from core.domain import exceptions
        from core.domain.exception_handler import domain_exception_handler

        exc = getattr(exceptions, exc_name)("Something happened")
        response = domain_exception_handler(exc, {"view": None})

        assert response.status_code == expected_status
        assert response.data == {"message": "Something happened"}

    def test_handler_renders_role_rejection_as_403(self):
        from rest_framework.exceptions import PermissionDenied

        from core.domain.exception_handler import domain_exception_handler

        response = domain_exception_handler(PermissionDenied(), {"view": None})

        assert response.status_code == 403
        assert response.data == {
            "message": "You do not have permission to perform this action.",
        }

    def test_handler_hides_unexpected_errors(self):
        from core.domain.exception_handler import domain_exception_handler

        response = domain_exception_handler(RuntimeError("db password is x"), {"view": None})

        assert response.status_code == 500
        assert response.data == {"message": "Internal server error"}

    def test_handler_wraps_validation_errors(self):
        from rest_framework.exceptions import ValidationError

        from core.domain.exception_handler import domain_exception_handler

        response = domain_exception_handler(
            ValidationError({"victimName": ["This field is required."]}), {"view": None},
        )

        assert response.status_code == 400
        assert response.data["message"] == "Validation error"
        assert "victimName" in response.data["errors"]


# ════════════════════════════════════════════════════════════════════
#  Access Helper Unit Tests
# ════════════════════════════════════════════════════════════════════

class TestAccessHelpers:
    """Unit tests for core.domain.access helpers."""

    def test_get_user_role_name(self):
        from core.domain.access import get_user_role_name

        user = MagicMock(is_authenticated=True, role="administrator")
        assert get_user_role_name(user) == "administrator"

    def test_anonymous_user_has_no_role(self):
        from core.domain.access import get_user_role_name

        user = MagicMock(is_authenticated=False, role="administrator")
        assert get_user_role_name(user) is None
        assert get_user_role_name(None) is None

    def test_has_role_permission(self):
        from core.domain.access import HasRole

        permission = HasRole.of("administrator")()
        admin = MagicMock(user=MagicMock(is_authenticated=True, role="administrator"))
        editor = MagicMock(user=MagicMock(is_authenticated=True, role="editor"))

        assert permission.has_permission(admin, view=None) is True
        assert permission.has_permission(editor, view=None) is False
