"""
Bearer-token authentication for the API.

Tokens are verified statelessly: the signed claims (``id``, ``username``,
``fullName``, ``position``, ``office``, ``role``) are trusted for the
lifetime of the token, and no store lookup happens per request.  The
resulting ``request.user`` is a ``StaffTokenUser`` whose attributes read
straight from the claims (``request.user.role``).

A request *without* a token reaches the permission check anonymous and
is rejected with 401.  A request with a malformed, tampered or expired
token is rejected here with 403.
"""

from __future__ import annotations

from django.utils.functional import cached_property
from rest_framework.exceptions import AuthenticationFailed, PermissionDenied
from rest_framework_simplejwt.authentication import JWTStatelessUserAuthentication
from rest_framework_simplejwt.models import TokenUser
from rest_framework_simplejwt.settings import api_settings

INVALID_TOKEN_MESSAGE = "Forbidden: Invalid token"


class StaffTokenUser(TokenUser):
    """
    ``TokenUser`` whose ``id`` is an ``int``.

    simplejwt serialises the user id claim as a string; store lookups and
    note authorship are keyed by integer ids.
    """

    @cached_property
    def id(self) -> int:
        return int(self.token[api_settings.USER_ID_CLAIM])


class BearerTokenAuthentication(JWTStatelessUserAuthentication):
    """``Authorization: Bearer <token>`` authentication without a user lookup."""

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except AuthenticationFailed:
            # ``InvalidToken`` subclasses ``AuthenticationFailed``.
            raise PermissionDenied(INVALID_TOKEN_MESSAGE)
