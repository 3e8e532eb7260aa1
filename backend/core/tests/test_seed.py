"""
Tests for the bootstrap data and the ``seed_data`` management command.
"""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from core.seed import SEED_CASES, SEED_USERS, seed_store
from core.storage.memory import InMemoryCaseStore


def test_seed_populates_store(store):
    assert seed_store(store) is True

    assert store.validate_user("admin", "admin123").role == "administrator"
    assert store.validate_user("editor", "editor123").role == "editor"
    cases = store.list_cases()
    assert len(cases) == len(SEED_CASES)

    maria = next(c for c in cases if c.victim_name == "Maria Santos")
    assert maria.encoder_name == "Admin User"
    assert maria.priority == "High"
    assert [s.type for s in store.list_case_services(maria.id)] == ["Medical assistance"]

    sophia = next(c for c in cases if c.victim_name == "Sophia Cruz")
    details = store.get_case_with_details(sophia.id)
    assert {n.author.full_name for n in details.notes} == {"Rose Manalo", "Admin User"}


def test_seed_is_idempotent(store):
    seed_store(store)

    assert seed_store(store) is False
    assert len(store.list_cases()) == len(SEED_CASES)


@pytest.mark.django_db
def test_seed_command_fills_relational_store(monkeypatch):
    from django.apps import apps

    from core.storage.database import DatabaseCaseStore

    store = DatabaseCaseStore()
    monkeypatch.setattr(apps.get_app_config("core"), "store", store)
    out = StringIO()

    call_command("seed_data", stdout=out)
    call_command("seed_data", stdout=out)

    assert f"{len(SEED_USERS)} user(s)" in out.getvalue()
    assert "nothing seeded" in out.getvalue()
    assert len(store.list_cases()) == len(SEED_CASES)


@pytest.mark.django_db
def test_seed_command_reset(monkeypatch):
    from django.apps import apps

    from core.storage.database import DatabaseCaseStore

    store = DatabaseCaseStore()
    monkeypatch.setattr(apps.get_app_config("core"), "store", store)
    seed_store(store)
    store.create_case({
        **SEED_CASES[0]["case"],
        "victim_name": "Extra",
        "encoder_name": "Admin User",
    })

    call_command("seed_data", "--reset", stdout=StringIO())

    assert len(store.list_cases()) == len(SEED_CASES)
    assert "Extra" not in {c.victim_name for c in store.list_cases()}


def test_reset_is_refused_for_memory_store():
    with pytest.raises(CommandError):
        call_command("seed_data", "--reset", stdout=StringIO())


def test_memory_store_starts_empty():
    assert InMemoryCaseStore().has_users() is False
