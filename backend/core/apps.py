import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core"

    #: The process-wide ``CaseStore``; see ``core.storage.get_store``.
    store = None

    def ready(self):
        from .seed import seed_store
        from .storage import build_store
        from .storage.memory import InMemoryCaseStore

        self.store = build_store(settings.CASE_STORE_BACKEND)
        logger.info("Using %s", type(self.store).__name__)

        # The relational store is seeded explicitly with ``seed_data``.
        if isinstance(self.store, InMemoryCaseStore) and settings.CASE_STORE_SEED:
            seed_store(self.store)
