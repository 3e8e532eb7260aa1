"""
Cases app ViewSets.

Architecture: Views are intentionally thin.
Every view follows the strict three-step pattern:

    1. Parse / validate input via a serializer.
    2. Delegate all business logic to the appropriate service class.
    3. Serialize the result and return a DRF ``Response``.

No storage access, side-effect logic, or aggregation lives here.

ViewSets
--------
- ``CaseViewSet``: The single ViewSet for all case-related endpoints.
  ``notes`` and ``services`` are @action sub-resources so the URL
  structure stays ``/api/cases/{id}/notes`` and ``/api/cases/{id}/services``.
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from core.domain.exceptions import DomainError
from core.serializers import (
    CaseDetailSerializer,
    CaseSerializer,
    NoteSerializer,
    ServiceSerializer,
)
from core.storage import get_store

from .serializers import (
    CaseWriteSerializer,
    NoteCreateSerializer,
    ServiceCreateSerializer,
)
from .services import CaseLifecycleService, CaseNoteService, CaseSupportService

logger = logging.getLogger(__name__)


class CaseViewSet(viewsets.ViewSet):
    """
    Central ViewSet for the cases app.

    Uses ``viewsets.ViewSet`` (not ``ModelViewSet``) so every action is
    explicitly defined; the cases are not ORM-backed when the in-memory
    store is active.

    Permission Strategy
    -------------------
    Every action requires a valid bearer token (``IsAuthenticated``).
    Administrators and editors have the same case permissions.
    """

    permission_classes = [IsAuthenticated]

    # ── Helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _parse_pk(pk) -> int:
        """Return ``pk`` as an int.  Raises HTTP 400 for non-numeric ids."""
        try:
            return int(pk)
        except (TypeError, ValueError):
            raise DomainError("Invalid case ID")

    # ── Standard CRUD ────────────────────────────────────────────────
    @extend_schema(
        summary="List cases",
        description="List all cases, newest first.",
        responses={
            200: OpenApiResponse(response=CaseSerializer(many=True), description="All cases."),
        },
        tags=["Cases"],
    )
    def list(self, request: Request) -> Response:
        """
        GET /api/cases
        """
        cases = CaseLifecycleService(get_store()).list_cases()
        serializer = CaseSerializer(cases, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Create a new case",
        description=(
            "Create a case from the case form.  Selected services, "
            "``otherServices`` and ``caseNotes`` are recorded as service "
            "and note rows."
        ),
        request=CaseWriteSerializer,
        responses={
            201: OpenApiResponse(response=CaseSerializer, description="Case created successfully."),
            400: OpenApiResponse(description="Validation error."),
        },
        tags=["Cases"],
    )
    def create(self, request: Request) -> Response:
        """
        POST /api/cases

        Steps
        -----
        1. Validate with ``CaseWriteSerializer``.
        2. Delegate to ``CaseLifecycleService.create_case``.
        3. Return HTTP 201 with the created case (not expanded).
        """
        serializer = CaseWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        case = CaseLifecycleService(get_store()).create_case(
            serializer.validated_data, request.user.id,
        )
        return Response(CaseSerializer(case).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Retrieve case details",
        description="Return the case with its services and author-resolved notes.",
        responses={
            200: OpenApiResponse(response=CaseDetailSerializer, description="Full case detail."),
            400: OpenApiResponse(description="Invalid case ID."),
            404: OpenApiResponse(description="Case not found."),
        },
        tags=["Cases"],
    )
    def retrieve(self, request: Request, pk=None) -> Response:
        """
        GET /api/cases/{id}
        """
        details = CaseLifecycleService(get_store()).get_case_with_details(
            self._parse_pk(pk),
        )
        return Response(CaseDetailSerializer(details).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Update case",
        description=(
            "Partially update a case: only submitted fields change.  Newly "
            "selected service types are added; ``caseNotes`` adds a note."
        ),
        request=CaseWriteSerializer,
        responses={
            200: OpenApiResponse(response=CaseSerializer, description="Case updated."),
            400: OpenApiResponse(description="Validation error."),
            404: OpenApiResponse(description="Case not found."),
        },
        tags=["Cases"],
    )
    def update(self, request: Request, pk=None) -> Response:
        """
        PUT /api/cases/{id}

        Steps
        -----
        1. Validate with ``CaseWriteSerializer(partial=True)``.
        2. Delegate to ``CaseLifecycleService.update_case``.
        3. Return HTTP 200 with the updated case.
        """
        case_id = self._parse_pk(pk)
        serializer = CaseWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        case = CaseLifecycleService(get_store()).update_case(
            case_id, serializer.validated_data, request.user.id,
        )
        return Response(CaseSerializer(case).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Update case (PATCH)",
        description="Same as PUT; updates are always partial.",
        request=CaseWriteSerializer,
        responses={
            200: OpenApiResponse(response=CaseSerializer, description="Case updated."),
            400: OpenApiResponse(description="Validation error."),
            404: OpenApiResponse(description="Case not found."),
        },
        tags=["Cases"],
    )
    def partial_update(self, request: Request, pk=None) -> Response:
        """
        PATCH /api/cases/{id}
        """
        return self.update(request, pk=pk)

    @extend_schema(
        summary="Delete a case",
        description="Delete a case together with its services and notes.",
        responses={
            200: OpenApiResponse(description="Case deleted."),
            404: OpenApiResponse(description="Case not found."),
        },
        tags=["Cases"],
    )
    def destroy(self, request: Request, pk=None) -> Response:
        """
        DELETE /api/cases/{id}
        """
        CaseLifecycleService(get_store()).delete_case(self._parse_pk(pk))
        return Response(
            {"message": "Case deleted successfully"},
            status=status.HTTP_200_OK,
        )

    # ── Sub-resource @actions ─────────────────────────────────────────

    @action(
        detail=True,
        methods=["get", "post"],
        url_path="notes",
    )
    @extend_schema(
        summary="List or add case notes",
        description=(
            "GET: the case's notes, newest first. "
            "POST: add a note authored by the caller."
        ),
        request=NoteCreateSerializer,
        responses={
            200: OpenApiResponse(response=NoteSerializer(many=True), description="Notes."),
            201: OpenApiResponse(response=NoteSerializer, description="Note added."),
            400: OpenApiResponse(description="Validation error."),
            404: OpenApiResponse(description="Case not found."),
        },
        tags=["Case Notes"],
    )
    def notes(self, request: Request, pk=None) -> Response:
        """
        GET  /api/cases/{id}/notes: list notes.
        POST /api/cases/{id}/notes: add a note; returns it with its author.
        """
        case_id = self._parse_pk(pk)
        service = CaseNoteService(get_store())

        if request.method == "GET":
            notes = service.list_notes(case_id)
            return Response(NoteSerializer(notes, many=True).data, status=status.HTTP_200_OK)

        # POST
        serializer = NoteCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        note = service.add_note(
            case_id, request.user.id, serializer.validated_data["content"],
        )
        return Response(NoteSerializer(note).data, status=status.HTTP_201_CREATED)

    @action(
        detail=True,
        methods=["get", "post"],
        url_path="services",
    )
    @extend_schema(
        summary="List or add support services",
        description=(
            "GET: the case's services, newest dateProvided first. "
            "POST: record a service rendered for the case."
        ),
        request=ServiceCreateSerializer,
        responses={
            200: OpenApiResponse(response=ServiceSerializer(many=True), description="Services."),
            201: OpenApiResponse(response=ServiceSerializer, description="Service added."),
            400: OpenApiResponse(description="Validation error."),
            404: OpenApiResponse(description="Case not found."),
        },
        tags=["Case Services"],
    )
    def services(self, request: Request, pk=None) -> Response:
        """
        GET  /api/cases/{id}/services: list services.
        POST /api/cases/{id}/services: add a service.
        """
        case_id = self._parse_pk(pk)
        support = CaseSupportService(get_store())

        if request.method == "GET":
            services = support.list_services(case_id)
            return Response(ServiceSerializer(services, many=True).data, status=status.HTTP_200_OK)

        # POST
        serializer = ServiceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        service = support.add_service(case_id, serializer.validated_data)
        return Response(ServiceSerializer(service).data, status=status.HTTP_201_CREATED)
