"""
Management command: seed_data
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Seeds the configured store with the bootstrap staff accounts and the
five sample cases (with their services and notes).

The command is **idempotent**: nothing is written when any user already
exists.  ``--reset`` wipes notes, services, cases and users first; it is
refused for the in-memory store, whose contents die with the process.

Usage::

    python manage.py migrate
    python manage.py seed_data [--reset]
"""

from django.core.management.base import BaseCommand, CommandError

from core.seed import SEED_CASES, SEED_USERS, seed_store
from core.storage import get_store
from core.storage.database import DatabaseCaseStore


class Command(BaseCommand):
    help = (
        "Seeds the configured store with bootstrap users and sample cases.  "
        "Skipped when users already exist; pass --reset to start over."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete all notes, services, cases and users before seeding "
                 "(relational store only).",
        )

    def handle(self, *args, **options):
        store = get_store()
        self.stdout.write(self.style.MIGRATE_HEADING(
            f"\n  Seeding {type(store).__name__}\n"
        ))

        if options["reset"]:
            if not isinstance(store, DatabaseCaseStore):
                raise CommandError("--reset requires the relational store.")
            store.clear()
            self.stdout.write(self.style.WARNING("  Existing data deleted."))

        if not seed_store(store):
            self.stdout.write(self.style.WARNING(
                "  Users already exist, nothing seeded.  "
                "Use --reset to start over."
            ))
            return

        self.stdout.write(self.style.SUCCESS(
            f"  Done!  {len(SEED_USERS)} user(s) and "
            f"{len(SEED_CASES)} case(s) created.\n"
        ))
