"""
core.storage: Pluggable persistence for users, cases, services, and notes.

Modules
-------
records    Plain dataclasses returned by every store.
base       ``CaseStore``: the abstract contract plus shared composite reads.
memory     ``InMemoryCaseStore``: dictionaries, for development and tests.
database   ``DatabaseCaseStore``: the Django ORM.

The active store is built once by ``CoreConfig.ready`` from
``settings.CASE_STORE_BACKEND`` and fetched with :func:`get_store`.
"""

from __future__ import annotations

from django.apps import apps
from django.utils.module_loading import import_string

from .base import CaseStore


def build_store(backend_path: str) -> CaseStore:
    """Instantiate the store class named by its dotted path."""
    store_class = import_string(backend_path)
    if not issubclass(store_class, CaseStore):
        raise TypeError(f"{backend_path} is not a CaseStore")
    return store_class()


def get_store() -> CaseStore:
    """Return the process-wide store selected at startup."""
    return apps.get_app_config("core").store
