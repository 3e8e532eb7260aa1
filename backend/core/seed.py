"""
core.seed: Bootstrap users and sample cases.

``seed_store`` works against any ``CaseStore``, so the same data backs
the in-memory development store and a fresh relational database.
Seeding is idempotent: it does nothing when any user already exists.
"""

from __future__ import annotations

import logging
from datetime import datetime

from django.utils import timezone

from .storage.base import CaseStore

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"

SEED_USERS = [
    {
        "username": ADMIN_USERNAME,
        "password": "admin123",
        "full_name": "Admin User",
        "position": "System Administrator",
        "office": "VAWC Office",
        "role": "administrator",
    },
    {
        "username": "editor",
        "password": "editor123",
        "full_name": "Editor User",
        "position": "Case Encoder",
        "office": "VAWC Office",
        "role": "editor",
    },
    {
        "username": "jdelacruz",
        "password": "password",
        "full_name": "Juan Dela Cruz",
        "position": "VAWC Coordinator",
        "office": "Municipal Social Welfare Department",
        "role": "editor",
    },
    {
        "username": "rmanalo",
        "password": "password",
        "full_name": "Rose Manalo",
        "position": "Social Worker",
        "office": "Municipal Social Welfare Department",
        "role": "editor",
    },
]


def _date(year, month, day) -> datetime:
    return timezone.make_aware(datetime(year, month, day))


# Each entry names its encoder by username; ``encoder_name`` is filled in
# from that user's full name, and note authors are resolved the same way.
SEED_CASES = [
    {
        "encoder": ADMIN_USERNAME,
        "case": {
            "victim_name": "Maria Santos",
            "victim_age": 32,
            "victim_gender": "Female",
            "barangay": "Barangay Poblacion",
            "incident_date": _date(2023, 12, 15),
            "incident_type": "Physical abuse",
            "incident_location": "Residence",
            "perpetrator_name": "Pedro Santos",
            "perpetrator_relationship": "Husband",
            "status": "active",
            "priority": "High",
        },
        "services": [
            ("Medical assistance", _date(2023, 12, 17), "Municipal Health Office",
             "Initial medical examination conducted"),
        ],
        "notes": [
            (ADMIN_USERNAME,
             "Victim reported multiple physical abuse incidents in the past 3 months"),
        ],
    },
    {
        "encoder": "jdelacruz",
        "case": {
            "victim_name": "Ana Reyes",
            "victim_age": 28,
            "victim_gender": "Female",
            "barangay": "Barangay San Jose",
            "incident_date": _date(2023, 12, 10),
            "incident_type": "Verbal abuse",
            "incident_location": "Workplace",
            "perpetrator_name": "Roberto Garcia",
            "perpetrator_relationship": "Ex-boyfriend",
            "status": "pending",
            "priority": "Medium",
        },
        "services": [
            ("Legal assistance", _date(2023, 12, 12), "Municipal Legal Office",
             "Provided legal advice and assisted in filing protection order"),
            ("Counseling", _date(2023, 12, 13), "DSWD Counselor",
             "Initial psychological assessment conducted"),
        ],
        "notes": [
            ("jdelacruz", "Victim seeking protection order against ex-partner"),
        ],
    },
    {
        "encoder": "rmanalo",
        "case": {
            "victim_name": "Sophia Cruz",
            "victim_age": 35,
            "victim_gender": "Female",
            "barangay": "Barangay Santa Clara",
            "incident_date": _date(2023, 11, 5),
            "incident_type": "Economic abuse",
            "incident_location": "Residence",
            "perpetrator_name": "Miguel Cruz",
            "perpetrator_relationship": "Husband",
            "status": "closed",
            "priority": "Low",
        },
        "services": [
            ("Temporary shelter", _date(2023, 11, 5), "Municipal VAWC Shelter",
             "Provided temporary housing for 7 days"),
        ],
        "notes": [
            ("rmanalo",
             "Case resolved through family mediation. Victim reconciled with "
             "partner after counseling."),
            (ADMIN_USERNAME, "Follow-up visit conducted. Situation remains stable."),
        ],
    },
    {
        "encoder": "jdelacruz",
        "case": {
            "victim_name": "Jasmine Martinez",
            "victim_age": 22,
            "victim_gender": "Female",
            "barangay": "Barangay Mabuhay",
            "incident_date": _date(2023, 12, 28),
            "incident_type": "Workplace harassment",
            "incident_location": "Office building",
            "perpetrator_name": "Antonio Reyes",
            "perpetrator_relationship": "Employer",
            "status": "active",
            "priority": "High",
        },
        "services": [
            ("Medical assistance", _date(2023, 12, 28), "Provincial Hospital",
             "Treated for injuries and provided medical certificate"),
        ],
        "notes": [
            ("jdelacruz",
             "Victim reported physical and verbal abuse by employer. "
             "Filed police report."),
        ],
    },
    {
        "encoder": "rmanalo",
        "case": {
            "victim_name": "Lilia Mendoza",
            "victim_age": 29,
            "victim_gender": "Female",
            "barangay": "Barangay Bagong Silang",
            "incident_date": _date(2023, 12, 20),
            "incident_type": "Physical and emotional abuse",
            "incident_location": "Residence",
            "perpetrator_name": "Eduardo Mendoza",
            "perpetrator_relationship": "Spouse",
            "status": "pending",
            "priority": "Medium",
        },
        "services": [
            ("Counseling", _date(2023, 12, 22), "Municipal Psychologist",
             "Initial counseling session provided"),
            ("Financial assistance", _date(2023, 12, 23), "DSWD",
             "Emergency financial assistance provided for basic needs"),
        ],
        "notes": [
            ("rmanalo",
             "Victim seeking separation from spouse due to recurring "
             "domestic violence"),
        ],
    },
]


def seed_store(store: CaseStore) -> bool:
    """
    Populate ``store`` with the bootstrap users and sample cases.

    Returns ``False`` (and writes nothing) when the store already holds
    users.
    """
    if store.has_users():
        logger.info("Users already exist, skipping seed")
        return False

    users = {profile["username"]: store.create_user(**profile) for profile in SEED_USERS}

    for entry in SEED_CASES:
        encoder = users[entry["encoder"]]
        case = store.create_case({**entry["case"], "encoder_name": encoder.full_name})
        for service_type, date_provided, provider, notes in entry["services"]:
            store.add_service(
                case_id=case.id,
                type=service_type,
                date_provided=date_provided,
                provider=provider,
                notes=notes,
            )
        for author, content in entry["notes"]:
            store.add_note(case_id=case.id, author_id=users[author].id, content=content)

    logger.info(
        "Seeded %d users and %d cases", len(SEED_USERS), len(SEED_CASES),
    )
    return True
