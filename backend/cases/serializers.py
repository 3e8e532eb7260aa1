"""
Cases app serializers.

**Request** serializers for the Cases API.  They handle field
definitions and field-level validation only; what happens with the
validated data (service rows, notes) lives in ``services.py``.  Response
payloads are rendered by the record serializers in ``core.serializers``.

Field names follow the frontend's camelCase.  Persisted case attributes
declare ``source=`` so ``validated_data`` is keyed by the snake_case
attribute names the store accepts.  The auxiliary form fields
(``services``, ``otherServices``, ``caseNotes``) keep their camelCase
keys; the service layer pops and interprets them before persisting.

Structure
---------
1. Field types
2. Case write serializer
3. Sub-resource serializers (notes, services)
"""

from __future__ import annotations

from rest_framework import serializers

from .models import CasePriority, CaseStatus

#: Accepted ``incidentDate`` / ``dateProvided`` formats.
DATE_INPUT_FORMATS = ["iso-8601", "%Y-%m-%d"]

#: Keys of the case form that are never persisted on the case row.
AUXILIARY_FIELDS = ("services", "otherServices", "caseNotes")


# ═══════════════════════════════════════════════════════════════════
#  1. Field types
# ═══════════════════════════════════════════════════════════════════


class StrictCharField(serializers.CharField):
    """
    ``CharField`` that rejects numbers instead of coercing them.

    DRF's ``CharField`` turns ``42`` into ``"42"``; the case form's
    required text fields must arrive as JSON strings.
    """

    default_error_messages = {
        "invalid": "Expected a string.",
    }

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail("invalid")
        return super().to_internal_value(data)


# ═══════════════════════════════════════════════════════════════════
#  2. Case write serializer
# ═══════════════════════════════════════════════════════════════════


class ServiceSelectionSerializer(serializers.Serializer):
    """One checkbox of the case form's service list."""

    type = StrictCharField(max_length=255)
    selected = serializers.BooleanField()


class CaseWriteSerializer(serializers.Serializer):
    """
    Validates the case form for ``POST /api/cases`` and, instantiated
    with ``partial=True``, for ``PUT``/``PATCH /api/cases/{id}``.

    On a partial update only the submitted fields are validated and no
    defaults are applied, so absent attributes stay unchanged.
    """

    # ── Victim ───────────────────────────────────────────────────────
    victimName = StrictCharField(source="victim_name", max_length=255)
    victimAge = serializers.IntegerField(
        source="victim_age",
        min_value=0,
        required=False,
        allow_null=True,
    )
    victimGender = serializers.CharField(
        source="victim_gender",
        max_length=50,
        required=False,
        allow_blank=True,
        allow_null=True,
    )
    barangay = serializers.CharField(
        max_length=255,
        required=False,
        allow_blank=True,
        allow_null=True,
    )

    # ── Incident ─────────────────────────────────────────────────────
    incidentDate = serializers.DateTimeField(
        source="incident_date",
        input_formats=DATE_INPUT_FORMATS,
        help_text="When the incident happened (distinct from createdAt).",
    )
    incidentType = StrictCharField(source="incident_type", max_length=255)
    incidentLocation = serializers.CharField(
        source="incident_location",
        max_length=500,
        required=False,
        allow_blank=True,
        allow_null=True,
    )

    # ── Perpetrator ──────────────────────────────────────────────────
    perpetratorName = StrictCharField(source="perpetrator_name", max_length=255)
    perpetratorRelationship = serializers.CharField(
        source="perpetrator_relationship",
        max_length=255,
        required=False,
        allow_blank=True,
        allow_null=True,
    )

    # ── Bookkeeping ──────────────────────────────────────────────────
    encoderName = StrictCharField(source="encoder_name", max_length=255)
    status = serializers.ChoiceField(choices=CaseStatus.choices)
    priority = serializers.ChoiceField(
        choices=CasePriority.choices,
        default=CasePriority.MEDIUM,
    )

    # ── Form-only fields ─────────────────────────────────────────────
    services = ServiceSelectionSerializer(many=True, required=False)
    otherServices = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        help_text="Free-text service not covered by the checkboxes.",
    )
    caseNotes = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        help_text="Recorded as a new note authored by the caller.",
    )


# ═══════════════════════════════════════════════════════════════════
#  3. Sub-resource serializers
# ═══════════════════════════════════════════════════════════════════


class NoteCreateSerializer(serializers.Serializer):
    """Request body for ``POST /api/cases/{id}/notes``."""

    content = StrictCharField(
        error_messages={"required": "Note content is required"},
    )


class ServiceCreateSerializer(serializers.Serializer):
    """Request body for ``POST /api/cases/{id}/services``."""

    type = StrictCharField(max_length=255)
    provider = StrictCharField(max_length=255)
    dateProvided = serializers.DateTimeField(
        source="date_provided",
        input_formats=DATE_INPUT_FORMATS,
    )
    notes = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
    )
