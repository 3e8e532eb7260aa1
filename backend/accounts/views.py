"""
Accounts app views.

All views follow the **Thin View** pattern: validate input via
serializers, delegate to the service layer, and return the result
wrapped in a DRF ``Response``.  **No business logic** resides here.

View Map
--------
- ``LoginView``  : POST /api/auth/login
- ``LogoutView`` : POST /api/auth/logout
- ``MeView``     : GET  /api/auth/me
"""

from __future__ import annotations

from datetime import timedelta

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from drf_spectacular.utils import OpenApiResponse, extend_schema

from core.storage import get_store

from .serializers import (
    LoginRequestSerializer,
    LoginResponseSerializer,
    MessageSerializer,
    UserSerializer,
)
from .services import AuthenticationService, CurrentUserService

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"
REMEMBER_ME_AGE = timedelta(days=30)


# ═══════════════════════════════════════════════════════════════════
#  Authentication Views
# ═══════════════════════════════════════════════════════════════════


class LoginView(APIView):
    """
    POST /api/auth/login

    Public endpoint.  Authenticates a staff member by username and
    password.

    Request body  → ``LoginRequestSerializer``
    Response body → ``{"user": UserSerializer, "token": "<jwt>"}`` (200 OK)

    Flow:
        1. Validate input via ``LoginRequestSerializer``.
        2. Delegate to ``AuthenticationService.authenticate()``.
        3. If authentication fails, return 401 with a generic message.
        4. Issue the bearer token and record the user in the session.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Log in",
        request=LoginRequestSerializer,
        responses={
            200: OpenApiResponse(response=LoginResponseSerializer, description="Authenticated."),
            400: OpenApiResponse(description="Validation error."),
            401: OpenApiResponse(response=MessageSerializer, description="Invalid username or password."),
        },
        tags=["Auth"],
    )
    def post(self, request: Request) -> Response:
        serializer = LoginRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        service = AuthenticationService(get_store())
        user = service.authenticate(data["username"], data["password"])
        if user is None:
            return Response(
                {"message": INVALID_CREDENTIALS_MESSAGE},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        token = service.generate_token(user)

        request.session["user"] = {
            "id": user.id,
            "username": user.username,
            "fullName": user.full_name,
        }
        if data["rememberMe"]:
            request.session.set_expiry(REMEMBER_ME_AGE)

        return Response(
            {"user": UserSerializer(user).data, "token": token},
            status=status.HTTP_200_OK,
        )


class LogoutView(APIView):
    """
    POST /api/auth/logout

    Clears the server-side session and its cookie.  The bearer token is
    stateless and stays valid until it expires; the client discards it.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Log out",
        request=None,
        responses={200: OpenApiResponse(response=MessageSerializer, description="Logged out.")},
        tags=["Auth"],
    )
    def post(self, request: Request) -> Response:
        request.session.flush()
        response = Response(
            {"message": "Logged out successfully"},
            status=status.HTTP_200_OK,
        )
        response.delete_cookie(settings.SESSION_COOKIE_NAME)
        return response


# ═══════════════════════════════════════════════════════════════════
#  Current User ("Me") View
# ═══════════════════════════════════════════════════════════════════


class MeView(APIView):
    """
    GET /api/auth/me → Profile of the user the bearer token was issued to.

    Returns 404 when the token is valid but the user no longer exists.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Current user",
        responses={
            200: OpenApiResponse(response=UserSerializer, description="Profile."),
            404: OpenApiResponse(response=MessageSerializer, description="User not found."),
        },
        tags=["Auth"],
    )
    def get(self, request: Request) -> Response:
        user = CurrentUserService(get_store()).get_profile(request.user.id)
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)
