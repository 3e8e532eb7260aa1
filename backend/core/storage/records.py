"""
core.storage.records: Plain value objects returned by every store.

Both storage implementations hand these dataclasses to the service
layer, never ORM instances, so that callers observe identical results
whichever backend is configured.  Serializers read them by attribute.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime

#: Writable ``Case`` attributes, i.e. everything but the identity and the
#: store-managed timestamps.
CASE_FIELDS: tuple[str, ...] = (
    "victim_name",
    "victim_age",
    "victim_gender",
    "barangay",
    "incident_date",
    "incident_type",
    "incident_location",
    "perpetrator_name",
    "perpetrator_relationship",
    "encoder_name",
    "status",
    "priority",
    "case_notes",
)

DEFAULT_PRIORITY = "Medium"


@dataclass
class UserRecord:
    """A staff member.  ``password`` holds the salted hash, never plaintext."""

    id: int
    username: str
    password: str
    full_name: str
    position: str | None = None
    office: str | None = None
    role: str = "editor"
    created_at: datetime | None = None

    # DRF permission classes and simplejwt treat the record as a principal.
    is_authenticated = True
    is_anonymous = False
    is_active = True


@dataclass
class CaseRecord:
    id: int
    victim_name: str
    incident_date: datetime
    incident_type: str
    perpetrator_name: str
    encoder_name: str
    status: str
    victim_age: int | None = None
    victim_gender: str | None = None
    barangay: str | None = None
    incident_location: str | None = None
    perpetrator_relationship: str | None = None
    priority: str | None = DEFAULT_PRIORITY
    case_notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class ServiceRecord:
    id: int
    type: str
    date_provided: datetime
    provider: str
    case_id: int
    notes: str | None = None
    created_at: datetime | None = None


@dataclass
class NoteRecord:
    id: int
    content: str
    author_id: int
    case_id: int
    created_at: datetime | None = None


@dataclass(frozen=True)
class AuthorRef:
    """The ``{id, fullName}`` pair a note's author is resolved to."""

    id: int
    full_name: str


UNKNOWN_AUTHOR = AuthorRef(id=0, full_name="Unknown")


@dataclass
class NoteWithAuthor(NoteRecord):
    author: AuthorRef = UNKNOWN_AUTHOR

    @classmethod
    def from_note(cls, note: NoteRecord, author: AuthorRef) -> NoteWithAuthor:
        return cls(
            **{f.name: getattr(note, f.name) for f in fields(NoteRecord)},
            author=author,
        )


@dataclass
class CaseWithDetails(CaseRecord):
    """
    A case plus its services (newest ``date_provided`` first) and its
    author-resolved notes (newest first).  Derived, never persisted.
    """

    services: list[ServiceRecord] = field(default_factory=list)
    notes: list[NoteWithAuthor] = field(default_factory=list)

    @classmethod
    def from_case(
        cls,
        case: CaseRecord,
        services: list[ServiceRecord],
        notes: list[NoteWithAuthor],
    ) -> CaseWithDetails:
        return cls(
            **{f.name: getattr(case, f.name) for f in fields(CaseRecord)},
            services=services,
            notes=notes,
        )


@dataclass
class StaffActivity:
    author_id: int
    author_name: str
    action: str
    timestamp: datetime
    case_id: int | None = None
    victim_name: str | None = None


@dataclass
class DashboardStats:
    total_cases: int
    active_cases: int
    pending_cases: int
    closed_cases: int
    recent_cases: list[CaseWithDetails] = field(default_factory=list)
    staff_activities: list[StaffActivity] = field(default_factory=list)
