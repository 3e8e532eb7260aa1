"""
core.storage.database: Relational store on the Django ORM.

Models are resolved lazily through ``apps.get_model`` so the core app
never imports from ``accounts`` or ``cases`` at module level.  ORM
instances are converted to the plain records of ``core.storage.records``
before they leave this module.
"""

from __future__ import annotations

import logging

from django.apps import apps
from django.db import IntegrityError, transaction

from core.domain.exceptions import Conflict

from .base import CaseStore
from .records import CASE_FIELDS, CaseRecord, NoteRecord, ServiceRecord, UserRecord

logger = logging.getLogger(__name__)


def _user_model():
    return apps.get_model("accounts", "User")


def _case_model():
    return apps.get_model("cases", "Case")


def _service_model():
    return apps.get_model("cases", "Service")


def _note_model():
    return apps.get_model("cases", "Note")


# ── ORM → record conversion ─────────────────────────────────────────

def _to_user(obj) -> UserRecord:
    return UserRecord(
        id=obj.pk,
        username=obj.username,
        password=obj.password,
        full_name=obj.full_name,
        position=obj.position,
        office=obj.office,
        role=obj.role,
        created_at=obj.created_at,
    )


def _to_case(obj) -> CaseRecord:
    return CaseRecord(
        id=obj.pk,
        created_at=obj.created_at,
        updated_at=obj.updated_at,
        **{name: getattr(obj, name) for name in CASE_FIELDS},
    )


def _to_service(obj) -> ServiceRecord:
    return ServiceRecord(
        id=obj.pk,
        type=obj.type,
        date_provided=obj.date_provided,
        provider=obj.provider,
        notes=obj.notes,
        case_id=obj.case_id,
        created_at=obj.created_at,
    )


def _to_note(obj) -> NoteRecord:
    return NoteRecord(
        id=obj.pk,
        content=obj.content,
        author_id=obj.author_id,
        case_id=obj.case_id,
        created_at=obj.created_at,
    )


class DatabaseCaseStore(CaseStore):

    # ── Users ───────────────────────────────────────────────────────

    def get_user(self, user_id):
        user = _user_model().objects.filter(pk=user_id).first()
        return _to_user(user) if user else None

    def get_user_by_username(self, username):
        user = _user_model().objects.filter(username=username).first()
        return _to_user(user) if user else None

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
        User = _user_model()
        if User.objects.filter(username=username).exists():
            raise Conflict(f"Username '{username}' is already taken")
        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=username,
                    password=password,
                    full_name=full_name,
                    position=position,
                    office=office,
                    role=role,
                )
        except IntegrityError:
            raise Conflict(f"Username '{username}' is already taken")
        return _to_user(user)

    def has_users(self):
        return _user_model().objects.exists()

    # ── Cases ───────────────────────────────────────────────────────

    def create_case(self, data):
        case = _case_model().objects.create(**self._case_values(data, partial=False))
        return _to_case(case)

    def get_case(self, case_id):
        case = _case_model().objects.filter(pk=case_id).first()
        return _to_case(case) if case else None

    def list_cases(self):
        return [
            _to_case(case)
            for case in _case_model().objects.order_by("-created_at", "-id")
        ]

    def update_case(self, case_id, changes):
        values = self._case_values(changes, partial=True)
        with transaction.atomic():
            case = (
                _case_model().objects
                .select_for_update()
                .filter(pk=case_id)
                .first()
            )
            if case is None:
                return None
            for name, value in values.items():
                setattr(case, name, value)
            # Full save so ``auto_now`` refreshes ``updated_at``.
            case.save()
        return _to_case(case)

    def delete_case(self, case_id):
        Case = _case_model()
        with transaction.atomic():
            if not Case.objects.filter(pk=case_id).exists():
                return False
            # Children first, explicitly, so no orphan survives a backend
            # without enforced foreign keys.
            _service_model().objects.filter(case_id=case_id).delete()
            _note_model().objects.filter(case_id=case_id).delete()
            deleted, _ = Case.objects.filter(pk=case_id).delete()
        return deleted > 0

    # ── Services and notes ──────────────────────────────────────────

    def add_service(self, *, case_id, type, date_provided, provider, notes=None):
        service = _service_model().objects.create(
            case_id=case_id,
            type=type,
            date_provided=date_provided,
            provider=provider,
            notes=notes,
        )
        return _to_service(service)

    def list_case_services(self, case_id):
        return [
            _to_service(service)
            for service in _service_model().objects
            .filter(case_id=case_id)
            .order_by("-date_provided", "-id")
        ]

    def add_note(self, *, case_id, author_id, content):
        note = _note_model().objects.create(
            case_id=case_id,
            author_id=author_id,
            content=content,
        )
        return _to_note(note)

    def list_case_notes(self, case_id):
        return [
            _to_note(note)
            for note in _note_model().objects
            .filter(case_id=case_id)
            .order_by("-created_at", "-id")
        ]

    def list_recent_notes(self, limit):
        return [
            _to_note(note)
            for note in _note_model().objects.order_by("-created_at", "-id")[:limit]
        ]

    def clear(self):
        with transaction.atomic():
            _note_model().objects.all().delete()
            _service_model().objects.all().delete()
            _case_model().objects.all().delete()
            _user_model().objects.all().delete()
        logger.info("Relational store cleared")
