"""
core.storage.memory: Process-local store backed by dictionaries.

Used for development and tests.  Nothing survives a restart and there is
no locking: the store assumes the single-threaded development server.
Every read returns a copy so callers cannot mutate stored state.
"""

from __future__ import annotations

import itertools
from dataclasses import replace
from typing import Any, Mapping

from django.contrib.auth.hashers import make_password
from django.utils import timezone

from core.domain.exceptions import Conflict

from .base import CaseStore
from .records import CaseRecord, NoteRecord, ServiceRecord, UserRecord


def _newest_first(records, attr):
    return sorted(
        records,
        key=lambda record: (getattr(record, attr), record.id),
        reverse=True,
    )


class InMemoryCaseStore(CaseStore):

    def __init__(self):
        self.clear()

    def clear(self) -> None:
        self._users: dict[int, UserRecord] = {}
        self._cases: dict[int, CaseRecord] = {}
        self._services: dict[int, ServiceRecord] = {}
        self._notes: dict[int, NoteRecord] = {}
        self._user_ids = itertools.count(1)
        self._case_ids = itertools.count(1)
        self._service_ids = itertools.count(1)
        self._note_ids = itertools.count(1)

    # ── Users ───────────────────────────────────────────────────────

    def get_user(self, user_id):
        user = self._users.get(user_id)
        return replace(user) if user else None

    def get_user_by_username(self, username):
        for user in self._users.values():
            if user.username == username:
                return replace(user)
        return None

    def create_user(
        self,
        *,
        username,
        password,
        full_name,
        position=None,
        office=None,
        role="editor",
    ):
        if self.get_user_by_username(username) is not None:
            raise Conflict(f"Username '{username}' is already taken")
        user = UserRecord(
            id=next(self._user_ids),
            username=username,
            password=make_password(password),
            full_name=full_name,
            position=position,
            office=office,
            role=role,
            created_at=timezone.now(),
        )
        self._users[user.id] = user
        return replace(user)

    def has_users(self):
        return bool(self._users)

    # ── Cases ───────────────────────────────────────────────────────

    def create_case(self, data: Mapping[str, Any]):
        now = timezone.now()
        case = CaseRecord(
            id=next(self._case_ids),
            created_at=now,
            updated_at=now,
            **self._case_values(data, partial=False),
        )
        self._cases[case.id] = case
        return replace(case)

    def get_case(self, case_id):
        case = self._cases.get(case_id)
        return replace(case) if case else None

    def list_cases(self):
        return [replace(c) for c in _newest_first(self._cases.values(), "created_at")]

    def update_case(self, case_id, changes):
        case = self._cases.get(case_id)
        if case is None:
            return None
        updated = replace(
            case,
            updated_at=timezone.now(),
            **self._case_values(changes, partial=True),
        )
        self._cases[case_id] = updated
        return replace(updated)

    def delete_case(self, case_id):
        if self._cases.pop(case_id, None) is None:
            return False
        self._services = {
            pk: s for pk, s in self._services.items() if s.case_id != case_id
        }
        self._notes = {
            pk: n for pk, n in self._notes.items() if n.case_id != case_id
        }
        return True

    # ── Services and notes ──────────────────────────────────────────

    def add_service(self, *, case_id, type, date_provided, provider, notes=None):
        service = ServiceRecord(
            id=next(self._service_ids),
            type=type,
            date_provided=date_provided,
            provider=provider,
            notes=notes,
            case_id=case_id,
            created_at=timezone.now(),
        )
        self._services[service.id] = service
        return replace(service)

    def list_case_services(self, case_id):
        services = (s for s in self._services.values() if s.case_id == case_id)
        return [replace(s) for s in _newest_first(services, "date_provided")]

    def add_note(self, *, case_id, author_id, content):
        note = NoteRecord(
            id=next(self._note_ids),
            content=content,
            author_id=author_id,
            case_id=case_id,
            created_at=timezone.now(),
        )
        self._notes[note.id] = note
        return replace(note)

    def list_case_notes(self, case_id):
        notes = (n for n in self._notes.values() if n.case_id == case_id)
        return [replace(n) for n in _newest_first(notes, "created_at")]

    def list_recent_notes(self, limit):
        notes = _newest_first(self._notes.values(), "created_at")
        return [replace(n) for n in notes[:limit]]
