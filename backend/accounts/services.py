"""
Accounts app service layer.

Credential checking and token issuance.  Views call these methods and
only shape the HTTP response; no credential logic lives in the views.
Users are read through the active ``CaseStore`` so the same login flow
works for the in-memory and the relational backend.
"""

from __future__ import annotations

import logging

from rest_framework_simplejwt.tokens import AccessToken

from core.domain.exceptions import NotFound
from core.storage.base import CaseStore
from core.storage.records import UserRecord

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  Authentication Service
# ═══════════════════════════════════════════════════════════════════


class AuthenticationService:
    """
    Handles username/password login and bearer-token generation.
    """

    def __init__(self, store: CaseStore) -> None:
        self.store = store

    def authenticate(self, username: str, password: str) -> UserRecord | None:
        """
        Validate credentials and return the user if successful.

        Parameters
        ----------
        username : str
        password : str
            The raw password.  It is never logged.

        Returns
        -------
        UserRecord or None
            ``None`` both for an unknown username and for a wrong
            password; callers must not tell the two apart.
        """
        user = self.store.validate_user(username, password)
        if user is None:
            logger.warning("Failed login attempt for username '%s'", username)
            return None
        logger.info("User '%s' logged in", username)
        return user

    @staticmethod
    def generate_token(user: UserRecord) -> str:
        """
        Issue a signed access token for ``user``.

        The token lifetime comes from ``SIMPLE_JWT['ACCESS_TOKEN_LIFETIME']``
        (24 hours).  Besides the ``id`` claim it carries the profile
        fields the frontend displays without a round trip.
        """
        token = AccessToken.for_user(user)
        token["username"] = user.username
        token["fullName"] = user.full_name
        token["position"] = user.position
        token["office"] = user.office
        token["role"] = user.role
        return str(token)


# ═══════════════════════════════════════════════════════════════════
#  Current User Service
# ═══════════════════════════════════════════════════════════════════


class CurrentUserService:
    """Resolves the authenticated principal to its stored profile."""

    def __init__(self, store: CaseStore) -> None:
        self.store = store

    def get_profile(self, user_id: int) -> UserRecord:
        """
        Return the stored user behind a token.

        Raises
        ------
        core.domain.exceptions.NotFound
            If the user no longer exists (the token outlived it).
        """
        user = self.store.get_user(user_id)
        if user is None:
            raise NotFound("User not found")
        return user
