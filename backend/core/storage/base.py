"""
core.storage.base: The storage contract every backend implements.

``CaseStore`` declares the primitive persistence operations as abstract
methods and implements the two composite reads (``get_case_with_details``
and ``get_dashboard_stats``) once, on top of those primitives.  Keeping
the composition here means the in-memory and relational backends cannot
drift apart in how they resolve note authors, order recent activity, or
count cases.

Ordering contract (all backends)
--------------------------------
- ``list_cases``          newest ``created_at`` first
- ``list_case_services``  newest ``date_provided`` first
- ``list_case_notes``     newest ``created_at`` first
- ``list_recent_notes``   newest ``created_at`` first, across all cases

Ties are broken by descending ``id`` so the result is deterministic.
"""

from __future__ import annotations

import abc
import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from django.contrib.auth.hashers import check_password, make_password

from .records import (
    CASE_FIELDS,
    DEFAULT_PRIORITY,
    UNKNOWN_AUTHOR,
    AuthorRef,
    CaseRecord,
    CaseWithDetails,
    DashboardStats,
    NoteRecord,
    NoteWithAuthor,
    ServiceRecord,
    StaffActivity,
    UserRecord,
)

logger = logging.getLogger(__name__)


class CaseStore(abc.ABC):
    """Abstract persistence port for users, cases, services, and notes."""

    #: Maximum number of expanded cases on the dashboard.
    RECENT_CASES_LIMIT = 5
    #: Maximum number of staff activity entries on the dashboard.
    RECENT_ACTIVITY_LIMIT = 5
    NOTE_ACTIVITY_ACTION = "Added case note"

    # ═══════════════════════════════════════════════════════════════════
    #  Users
    # ═══════════════════════════════════════════════════════════════════

    @abc.abstractmethod
    def get_user(self, user_id: int) -> UserRecord | None:
        ...

    @abc.abstractmethod
    def get_user_by_username(self, username: str) -> UserRecord | None:
        ...

    @abc.abstractmethod
    def create_user(
        self,
        *,
        username: str,
        password: str,
        full_name: str,
        position: str | None = None,
        office: str | None = None,
        role: str = "editor",
    ) -> UserRecord:
        """
        Persist a new user.  ``password`` is plaintext and is hashed
        before storage.

        Raises
        ------
        core.domain.exceptions.Conflict
            If ``username`` is already taken.
        """

    @abc.abstractmethod
    def has_users(self) -> bool:
        ...

    def validate_user(self, username: str, password: str) -> UserRecord | None:
        """
        Return the user when ``password`` matches the stored hash.

        Returns ``None`` for an unknown username, a wrong password, or a
        hash that cannot be checked.  Never raises.
        """
        user = self.get_user_by_username(username)
        if user is None:
            # Hash anyway so unknown usernames cost the same as wrong passwords.
            make_password(password)
            return None
        try:
            matched = check_password(password, user.password)
        except (TypeError, ValueError):
            logger.exception("Password check failed for user '%s'", username)
            return None
        return user if matched else None

    # ═══════════════════════════════════════════════════════════════════
    #  Cases
    # ═══════════════════════════════════════════════════════════════════

    @abc.abstractmethod
    def create_case(self, data: Mapping[str, Any]) -> CaseRecord:
        """Persist a case.  ``data`` is keyed by ``CASE_FIELDS`` names."""

    @abc.abstractmethod
    def get_case(self, case_id: int) -> CaseRecord | None:
        ...

    @abc.abstractmethod
    def list_cases(self) -> list[CaseRecord]:
        ...

    @abc.abstractmethod
    def update_case(
        self, case_id: int, changes: Mapping[str, Any],
    ) -> CaseRecord | None:
        """
        Apply a partial update and refresh ``updated_at``.  Attributes
        absent from ``changes`` are left untouched.  Returns ``None`` when
        the case does not exist.
        """

    @abc.abstractmethod
    def delete_case(self, case_id: int) -> bool:
        """
        Delete a case together with its services and notes.  Returns
        ``False`` when nothing was deleted.
        """

    # ═══════════════════════════════════════════════════════════════════
    #  Services and notes
    # ═══════════════════════════════════════════════════════════════════

    @abc.abstractmethod
    def add_service(
        self,
        *,
        case_id: int,
        type: str,
        date_provided: datetime,
        provider: str,
        notes: str | None = None,
    ) -> ServiceRecord:
        ...

    @abc.abstractmethod
    def list_case_services(self, case_id: int) -> list[ServiceRecord]:
        ...

    @abc.abstractmethod
    def add_note(
        self, *, case_id: int, author_id: int, content: str,
    ) -> NoteRecord:
        ...

    @abc.abstractmethod
    def list_case_notes(self, case_id: int) -> list[NoteRecord]:
        ...

    @abc.abstractmethod
    def list_recent_notes(self, limit: int) -> list[NoteRecord]:
        ...

    @abc.abstractmethod
    def clear(self) -> None:
        """Remove every record.  Used by ``seed_data --reset``."""

    # ═══════════════════════════════════════════════════════════════════
    #  Composite reads
    # ═══════════════════════════════════════════════════════════════════

    def get_case_with_details(self, case_id: int) -> CaseWithDetails | None:
        """Return the case with its services and author-resolved notes."""
        case = self.get_case(case_id)
        if case is None:
            return None

        services = self.list_case_services(case_id)
        notes = self.list_case_notes(case_id)
        authors = self.resolve_authors(note.author_id for note in notes)
        return CaseWithDetails.from_case(
            case,
            services=services,
            notes=[
                NoteWithAuthor.from_note(note, authors[note.author_id])
                for note in notes
            ],
        )

    def get_dashboard_stats(self) -> DashboardStats:
        """
        Build the dashboard snapshot.

        Counts cover every case.  ``recent_cases`` holds up to
        ``RECENT_CASES_LIMIT`` of the newest cases, expanded; a case that
        disappears mid-read is dropped rather than failing the request.
        ``staff_activities`` holds one entry per recent note, up to
        ``RECENT_ACTIVITY_LIMIT``.
        """
        cases = self.list_cases()
        counts = Counter(case.status for case in cases)

        recent_cases = []
        for case in cases[: self.RECENT_CASES_LIMIT]:
            details = self.get_case_with_details(case.id)
            if details is not None:
                recent_cases.append(details)

        recent_notes = self.list_recent_notes(self.RECENT_ACTIVITY_LIMIT)
        authors = self.resolve_authors(note.author_id for note in recent_notes)
        cases_by_id: dict[int, CaseRecord | None] = {}
        activities = []
        for note in recent_notes:
            if note.case_id not in cases_by_id:
                cases_by_id[note.case_id] = self.get_case(note.case_id)
            case = cases_by_id[note.case_id]
            activities.append(
                StaffActivity(
                    author_id=note.author_id,
                    author_name=authors[note.author_id].full_name,
                    action=self.NOTE_ACTIVITY_ACTION,
                    timestamp=note.created_at,
                    case_id=note.case_id,
                    victim_name=case.victim_name if case else None,
                )
            )

        return DashboardStats(
            total_cases=len(cases),
            active_cases=counts.get("active", 0),
            pending_cases=counts.get("pending", 0),
            closed_cases=counts.get("closed", 0),
            recent_cases=recent_cases,
            staff_activities=activities,
        )

    # ── Helpers ─────────────────────────────────────────────────────

    def resolve_authors(self, author_ids: Iterable[int]) -> dict[int, AuthorRef]:
        """Look up each distinct author once; missing users become Unknown."""
        resolved: dict[int, AuthorRef] = {}
        for author_id in author_ids:
            if author_id in resolved:
                continue
            user = self.get_user(author_id)
            resolved[author_id] = (
                AuthorRef(id=user.id, full_name=user.full_name)
                if user is not None
                else UNKNOWN_AUTHOR
            )
        return resolved

    @staticmethod
    def _case_values(data: Mapping[str, Any], *, partial: bool) -> dict[str, Any]:
        """
        Restrict ``data`` to writable case attributes.

        On creation the optional attributes default to ``None`` and the
        priority to ``Medium``.
        """
        unknown = set(data) - set(CASE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown case attributes: {sorted(unknown)}")
        values = dict(data)
        if not partial:
            for name in CASE_FIELDS:
                values.setdefault(name, None)
            if values["priority"] is None:
                values["priority"] = DEFAULT_PRIORITY
        return values
