"""
Cases app models.

Relational schema behind ``core.storage.database.DatabaseCaseStore``:
one ``Case`` per incident handled by the office, the support
``Service`` rows rendered for it, and the caseworkers' ``Note`` rows.
Services and notes hold a non-nullable ``case_id`` that cascades on
delete.
"""

from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class CaseStatus(models.TextChoices):
    """
    Case status.  Any status may move to any other through an update;
    there is no enforced transition graph.
    """

    ACTIVE = "active", "Active"
    PENDING = "pending", "Pending"
    CLOSED = "closed", "Closed"


class CasePriority(models.TextChoices):
    HIGH = "High", "High"
    MEDIUM = "Medium", "Medium"
    LOW = "Low", "Low"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class Case(TimeStampedModel):
    """
    One incident record.

    ``encoder_name`` is a display snapshot of the staff member who filed
    the case, copied at encoding time.  It is intentionally not a foreign
    key and is not kept in sync with the user's profile.

    ``case_notes`` mirrors the case form's scratch field.  The API records
    that text as ``Note`` rows and leaves this column empty.
    """

    victim_name = models.CharField(
        max_length=255,
        verbose_name="Victim Name",
    )
    victim_age = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name="Victim Age",
    )
    victim_gender = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        verbose_name="Victim Gender",
    )
    barangay = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        verbose_name="Barangay",
        db_index=True,
    )

    # ── When / what / where ─────────────────────────────────────────
    incident_date = models.DateTimeField(
        verbose_name="Incident Date",
    )
    incident_type = models.CharField(
        max_length=255,
        verbose_name="Incident Type",
    )
    incident_location = models.CharField(
        max_length=500,
        null=True,
        blank=True,
        verbose_name="Incident Location",
    )

    # ── Perpetrator ─────────────────────────────────────────────────
    perpetrator_name = models.CharField(
        max_length=255,
        verbose_name="Perpetrator Name",
    )
    perpetrator_relationship = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        verbose_name="Relationship to Victim",
    )

    # ── Bookkeeping ─────────────────────────────────────────────────
    encoder_name = models.CharField(
        max_length=255,
        verbose_name="Encoder Name",
    )
    status = models.CharField(
        max_length=20,
        choices=CaseStatus.choices,
        verbose_name="Status",
        db_index=True,
    )
    priority = models.CharField(
        max_length=10,
        choices=CasePriority.choices,
        null=True,
        blank=True,
        default=CasePriority.MEDIUM,
        verbose_name="Priority",
    )
    case_notes = models.TextField(
        null=True,
        blank=True,
        verbose_name="Case Notes (scratch)",
    )

    class Meta:
        db_table = "cases"
        verbose_name = "Case"
        verbose_name_plural = "Cases"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Case #{self.pk} - {self.victim_name} ({self.status})"


class Service(models.Model):
    """One support service (medical, legal, counseling, …) rendered for a case."""

    type = models.CharField(
        max_length=255,
        verbose_name="Service Type",
    )
    date_provided = models.DateTimeField(
        verbose_name="Date Provided",
    )
    provider = models.CharField(
        max_length=255,
        verbose_name="Provider",
        help_text="Name of the person or organisation that rendered the service.",
    )
    notes = models.TextField(
        null=True,
        blank=True,
        verbose_name="Notes",
    )
    case = models.ForeignKey(
        Case,
        on_delete=models.CASCADE,
        related_name="services",
        verbose_name="Case",
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )

    class Meta:
        db_table = "services"
        verbose_name = "Service"
        verbose_name_plural = "Services"
        ordering = ["-date_provided", "-id"]

    def __str__(self):
        return f"{self.type} for case #{self.case_id}"


class Note(models.Model):
    """
    A timestamped annotation on a case, authored by a staff member.

    Notes are immutable.  The earliest note of a case is shown as the
    "case opened" entry by the UI; nothing is stored to mark it.
    """

    content = models.TextField(
        verbose_name="Content",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="authored_notes",
        verbose_name="Author",
    )
    case = models.ForeignKey(
        Case,
        on_delete=models.CASCADE,
        related_name="notes",
        verbose_name="Case",
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )

    class Meta:
        db_table = "notes"
        verbose_name = "Note"
        verbose_name_plural = "Notes"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["case", "created_at"], name="notes_case_created_idx"),
        ]

    def __str__(self):
        return f"Note #{self.pk} on case #{self.case_id}"
