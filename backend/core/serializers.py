"""
Core app serializers.

**Response-only** serializers for the records produced by
``core.storage``.  They render the attribute-style dataclasses as the
camelCase JSON the frontend consumes, and are shared by the ``cases``
views (case, service and note payloads) and the core views (dashboard
and reports).

Architectural note
------------------
These serializers never import models.  They read plain records and
dicts produced by the service layer, so the same schema is emitted
whichever storage backend is active.
"""

from __future__ import annotations

from rest_framework import serializers


# ════════════════════════════════════════════════════════════════════
#  Case records
# ════════════════════════════════════════════════════════════════════

class CaseSerializer(serializers.Serializer):
    """
    A single case row.

    Example::

        {
            "id": 1,
            "victimName": "Maria Santos",
            "incidentDate": "2023-12-15T00:00:00Z",
            "status": "active",
            "priority": "High",
            ...
        }
    """

    id = serializers.IntegerField(read_only=True)
    victimName = serializers.CharField(source="victim_name")
    victimAge = serializers.IntegerField(source="victim_age", allow_null=True)
    victimGender = serializers.CharField(source="victim_gender", allow_null=True)
    barangay = serializers.CharField(allow_null=True)
    incidentDate = serializers.DateTimeField(source="incident_date")
    incidentType = serializers.CharField(source="incident_type")
    incidentLocation = serializers.CharField(
        source="incident_location", allow_null=True,
    )
    perpetratorName = serializers.CharField(source="perpetrator_name")
    perpetratorRelationship = serializers.CharField(
        source="perpetrator_relationship", allow_null=True,
    )
    encoderName = serializers.CharField(
        source="encoder_name",
        help_text="Display snapshot of the staff member who filed the case.",
    )
    status = serializers.CharField()
    priority = serializers.CharField(allow_null=True)
    caseNotes = serializers.CharField(source="case_notes", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class ServiceSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    type = serializers.CharField()
    dateProvided = serializers.DateTimeField(source="date_provided")
    provider = serializers.CharField()
    notes = serializers.CharField(allow_null=True)
    caseId = serializers.IntegerField(source="case_id")
    createdAt = serializers.DateTimeField(source="created_at")


class AuthorSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    fullName = serializers.CharField(source="full_name")


class NoteSerializer(serializers.Serializer):
    """A note with its author resolved to ``{id, fullName}``."""

    id = serializers.IntegerField(read_only=True)
    content = serializers.CharField()
    authorId = serializers.IntegerField(source="author_id")
    caseId = serializers.IntegerField(source="case_id")
    createdAt = serializers.DateTimeField(source="created_at")
    author = AuthorSerializer()


class CaseDetailSerializer(CaseSerializer):
    """A case expanded with its services and notes, both newest first."""

    services = ServiceSerializer(many=True)
    notes = NoteSerializer(many=True)


# ════════════════════════════════════════════════════════════════════
#  Dashboard Statistics
# ════════════════════════════════════════════════════════════════════

class StaffActivitySerializer(serializers.Serializer):
    """
    A single entry of the dashboard's recent staff activity feed.

    Example::

        {
            "authorId": 1,
            "authorName": "Admin User",
            "action": "Added case note",
            "timestamp": "2024-01-02T09:15:00Z",
            "caseId": 3,
            "victimName": "Sophia Cruz"
        }
    """

    authorId = serializers.IntegerField(source="author_id")
    authorName = serializers.CharField(source="author_name")
    action = serializers.CharField()
    timestamp = serializers.DateTimeField()
    caseId = serializers.IntegerField(source="case_id", allow_null=True)
    victimName = serializers.CharField(source="victim_name", allow_null=True)


class DashboardStatsSerializer(serializers.Serializer):
    """
    Dashboard snapshot.  ``totalCases`` always equals the sum of the
    three status counts.
    """

    totalCases = serializers.IntegerField(source="total_cases")
    activeCases = serializers.IntegerField(source="active_cases")
    pendingCases = serializers.IntegerField(source="pending_cases")
    closedCases = serializers.IntegerField(source="closed_cases")
    recentCases = CaseDetailSerializer(source="recent_cases", many=True)
    staffActivities = StaffActivitySerializer(source="staff_activities", many=True)


# ════════════════════════════════════════════════════════════════════
#  Reports
# ════════════════════════════════════════════════════════════════════

class ReportQuerySerializer(serializers.Serializer):
    """Validates the ``GET /api/reports`` query parameters."""

    type = serializers.ChoiceField(
        choices=["incident", "status", "barangay"],
        default="incident",
    )
    timeframe = serializers.ChoiceField(
        choices=["all", "month", "quarter", "year"],
        default="all",
    )
    barangay = serializers.CharField(default="all", allow_blank=False)


class DistributionBucketSerializer(serializers.Serializer):
    name = serializers.CharField()
    value = serializers.IntegerField()


class CaseReportSerializer(serializers.Serializer):
    reportType = serializers.CharField(source="report_type")
    timeframe = serializers.CharField()
    barangay = serializers.CharField()
    totalCases = serializers.IntegerField(source="total_cases")
    activeCases = serializers.IntegerField(source="active_cases")
    pendingCases = serializers.IntegerField(source="pending_cases")
    closedCases = serializers.IntegerField(source="closed_cases")
    distribution = DistributionBucketSerializer(many=True)
    barangays = serializers.ListField(child=serializers.CharField())
    cases = CaseSerializer(many=True)
