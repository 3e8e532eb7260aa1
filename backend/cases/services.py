"""
Cases app Service Layer.

This module is the **single source of truth** for all business logic
in the ``cases`` app.  Views must remain thin: validate input via
serializers, call a service method, and return the result wrapped in
a DRF ``Response``.

Architecture
------------
- ``CaseLifecycleService`` : Create / update / delete cases, including
                              the service and note rows the case form
                              implies.
- ``CaseNoteService``      : Notes on an existing case.
- ``CaseSupportService``   : Support services on an existing case.

Every service receives the active ``CaseStore``; none of them touches
ORM models, so both storage backends behave the same.

Side-effect writes
------------------
Creating or updating a case writes the case row first, then one
``Service`` row per selected service type, then an optional ``Note``.
Those follow-up writes are best-effort: a failure is logged with its
traceback and the remaining writes continue.  The case row is never
rolled back because of them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from django.utils import timezone

from core.domain.exceptions import NotFound
from core.storage.base import CaseStore
from core.storage.records import (
    UNKNOWN_AUTHOR,
    CaseRecord,
    CaseWithDetails,
    NoteWithAuthor,
    ServiceRecord,
)

from .serializers import AUXILIARY_FIELDS

logger = logging.getLogger(__name__)

CASE_NOT_FOUND_MESSAGE = "Case not found"


def _require_case(store: CaseStore, case_id: int) -> CaseRecord:
    case = store.get_case(case_id)
    if case is None:
        raise NotFound(CASE_NOT_FOUND_MESSAGE)
    return case


# ═══════════════════════════════════════════════════════════════════
#  Case Lifecycle Service
# ═══════════════════════════════════════════════════════════════════


class CaseLifecycleService:
    """
    Case CRUD plus the side effects of the case form.

    The form carries three fields that are not case attributes:

    ``services``
        ``[{"type": ..., "selected": bool}, ...]``; every selected type
        becomes a ``Service`` dated now, provided by the case's encoder.
    ``otherServices``
        Free text; when non-blank it becomes one more service type.
    ``caseNotes``
        When non-blank, recorded as a new ``Note`` by the acting user.
    """

    def __init__(self, store: CaseStore) -> None:
        self.store = store

    # ── Reads ───────────────────────────────────────────────────────

    def list_cases(self) -> list[CaseRecord]:
        """All cases, newest first."""
        return self.store.list_cases()

    def get_case_with_details(self, case_id: int) -> CaseWithDetails:
        """
        Raises
        ------
        core.domain.exceptions.NotFound
        """
        details = self.store.get_case_with_details(case_id)
        if details is None:
            raise NotFound(CASE_NOT_FOUND_MESSAGE)
        return details

    # ── Writes ──────────────────────────────────────────────────────

    def create_case(
        self,
        validated_data: Mapping[str, Any],
        acting_user_id: int,
    ) -> CaseRecord:
        """
        Persist a case from validated form data, then record the
        selected services and the initial note.

        Parameters
        ----------
        validated_data : Mapping
            ``CaseWriteSerializer.validated_data``.
        acting_user_id : int
            The authenticated caller; author of the initial note.

        Returns
        -------
        CaseRecord
            The created case (not expanded).
        """
        case_data, selections, other_services, case_notes = self._split(validated_data)

        case = self.store.create_case(case_data)
        logger.info("Case #%s created by user #%s", case.id, acting_user_id)

        self._record_services(
            case,
            self._selected_types(selections, other_services),
            existing_types=set(),
        )
        self._record_note(case.id, acting_user_id, case_notes)
        return case

    def update_case(
        self,
        case_id: int,
        validated_data: Mapping[str, Any],
        acting_user_id: int,
    ) -> CaseRecord:
        """
        Apply a partial update, then record newly selected services and
        an additional note.

        Service types the case already has are not inserted again; the
        comparison is by ``type`` only.  ``caseNotes`` always adds a new
        note, it never replaces an earlier one.

        Raises
        ------
        core.domain.exceptions.NotFound
        """
        case_data, selections, other_services, case_notes = self._split(validated_data)

        case = self.store.update_case(case_id, case_data)
        if case is None:
            raise NotFound(CASE_NOT_FOUND_MESSAGE)
        logger.info(
            "Case #%s updated by user #%s (fields: %s)",
            case_id,
            acting_user_id,
            ", ".join(sorted(case_data)) or "none",
        )

        types = self._selected_types(selections, other_services)
        if types:
            existing = {s.type for s in self.store.list_case_services(case_id)}
            self._record_services(case, types, existing_types=existing)
        self._record_note(case_id, acting_user_id, case_notes)
        return case

    def delete_case(self, case_id: int) -> None:
        """
        Delete a case with its services and notes.

        Raises
        ------
        core.domain.exceptions.NotFound
        """
        if not self.store.delete_case(case_id):
            raise NotFound(CASE_NOT_FOUND_MESSAGE)
        logger.info("Case #%s deleted", case_id)

    # ── Private helpers ─────────────────────────────────────────────

    @staticmethod
    def _split(validated_data: Mapping[str, Any]):
        """Separate case attributes from the form-only fields."""
        case_data = {
            key: value
            for key, value in validated_data.items()
            if key not in AUXILIARY_FIELDS
        }
        return (
            case_data,
            validated_data.get("services") or [],
            validated_data.get("otherServices"),
            validated_data.get("caseNotes"),
        )

    @staticmethod
    def _selected_types(
        selections: Iterable[Mapping[str, Any]],
        other_services: str | None,
    ) -> list[str]:
        types = [s["type"] for s in selections if s.get("selected")]
        other = (other_services or "").strip()
        if other:
            types.append(other)
        return types

    def _record_services(
        self,
        case: CaseRecord,
        service_types: list[str],
        *,
        existing_types: set[str],
    ) -> None:
        now = timezone.now()
        for service_type in service_types:
            if service_type in existing_types:
                continue
            try:
                self.store.add_service(
                    case_id=case.id,
                    type=service_type,
                    date_provided=now,
                    provider=case.encoder_name,
                )
            except Exception:
                logger.exception(
                    "Could not record service '%s' for case #%s",
                    service_type,
                    case.id,
                )
                continue
            existing_types.add(service_type)

    def _record_note(self, case_id: int, author_id: int, content: str | None) -> None:
        content = (content or "").strip()
        if not content:
            return
        try:
            self.store.add_note(case_id=case_id, author_id=author_id, content=content)
        except Exception:
            logger.exception("Could not record note for case #%s", case_id)


# ═══════════════════════════════════════════════════════════════════
#  Notes
# ═══════════════════════════════════════════════════════════════════


class CaseNoteService:
    """Add and list notes on an existing case."""

    def __init__(self, store: CaseStore) -> None:
        self.store = store

    def list_notes(self, case_id: int) -> list[NoteWithAuthor]:
        _require_case(self.store, case_id)
        notes = self.store.list_case_notes(case_id)
        authors = self.store.resolve_authors(n.author_id for n in notes)
        return [NoteWithAuthor.from_note(n, authors[n.author_id]) for n in notes]

    def add_note(self, case_id: int, author_id: int, content: str) -> NoteWithAuthor:
        """
        Record a note by ``author_id`` and return it with its author
        resolved (``{0, "Unknown"}`` if the author record is gone).

        Raises
        ------
        core.domain.exceptions.NotFound
            If the case does not exist.
        """
        _require_case(self.store, case_id)
        note = self.store.add_note(case_id=case_id, author_id=author_id, content=content)
        author = self.store.resolve_authors([author_id]).get(author_id, UNKNOWN_AUTHOR)
        return NoteWithAuthor.from_note(note, author)


# ═══════════════════════════════════════════════════════════════════
#  Support services
# ═══════════════════════════════════════════════════════════════════


class CaseSupportService:
    """Add and list the support services rendered for an existing case."""

    def __init__(self, store: CaseStore) -> None:
        self.store = store

    def list_services(self, case_id: int) -> list[ServiceRecord]:
        _require_case(self.store, case_id)
        return self.store.list_case_services(case_id)

    def add_service(self, case_id: int, validated_data: Mapping[str, Any]) -> ServiceRecord:
        """
        Raises
        ------
        core.domain.exceptions.NotFound
            If the case does not exist.
        """
        _require_case(self.store, case_id)
        return self.store.add_service(
            case_id=case_id,
            type=validated_data["type"],
            date_provided=validated_data["date_provided"],
            provider=validated_data["provider"],
            notes=validated_data.get("notes"),
        )
