"""
Request validation for the case form.

Endpoint under test:  POST /api/cases, PUT /api/cases/{id}
Failure response:     HTTP 400 ``{"message": "Validation error", "errors": {...}}``
"""

from __future__ import annotations

import pytest
from django.urls import reverse
from rest_framework import status

from cases.serializers import CaseWriteSerializer
from core.storage import get_store

# ── Constants ────────────────────────────────────────────────────────────────

_VALID_PAYLOAD = {
    "victimName": "Maria Santos",
    "victimAge": 32,
    "victimGender": "Female",
    "barangay": "Barangay Poblacion",
    "incidentDate": "2023-12-15",
    "incidentType": "Physical abuse",
    "incidentLocation": "Residence",
    "perpetratorName": "Pedro Santos",
    "perpetratorRelationship": "Husband",
    "encoderName": "Admin User",
    "status": "active",
    "priority": "High",
}


@pytest.fixture()
def authed_client(api_client, auth_header):
    api_client.credentials(HTTP_AUTHORIZATION=auth_header()["Authorization"])
    return api_client


def _payload(**overrides):
    data = dict(_VALID_PAYLOAD)
    data.update(overrides)
    return data


# ── Serializer-level checks ──────────────────────────────────────────────────


def test_valid_payload_maps_to_store_attributes():
    serializer = CaseWriteSerializer(data=_payload())

    assert serializer.is_valid(), serializer.errors
    data = serializer.validated_data
    assert data["victim_name"] == "Maria Santos"
    assert data["perpetrator_relationship"] == "Husband"
    assert data["incident_date"].year == 2023
    assert "victimName" not in data


def test_priority_defaults_to_medium_on_create():
    payload = _payload()
    del payload["priority"]
    serializer = CaseWriteSerializer(data=payload)

    assert serializer.is_valid(), serializer.errors
    assert serializer.validated_data["priority"] == "Medium"


@pytest.mark.parametrize(
    "missing",
    ["victimName", "incidentDate", "incidentType", "perpetratorName", "encoderName", "status"],
)
def test_required_fields(missing):
    payload = _payload()
    del payload[missing]
    serializer = CaseWriteSerializer(data=payload)

    assert not serializer.is_valid()
    assert missing in serializer.errors


def test_numeric_victim_name_is_rejected():
    serializer = CaseWriteSerializer(data=_payload(victimName=42))

    assert not serializer.is_valid()
    assert "victimName" in serializer.errors


def test_unknown_status_is_rejected():
    serializer = CaseWriteSerializer(data=_payload(status="archived"))

    assert not serializer.is_valid()
    assert "status" in serializer.errors


def test_negative_age_is_rejected():
    serializer = CaseWriteSerializer(data=_payload(victimAge=-1))

    assert not serializer.is_valid()
    assert "victimAge" in serializer.errors


@pytest.mark.parametrize("bad_date", ["2023-13-45", "not a date", ""])
def test_unparseable_incident_date_is_rejected(bad_date):
    serializer = CaseWriteSerializer(data=_payload(incidentDate=bad_date))

    assert not serializer.is_valid()
    assert "incidentDate" in serializer.errors


def test_partial_update_applies_no_defaults():
    serializer = CaseWriteSerializer(data={"status": "closed"}, partial=True)

    assert serializer.is_valid(), serializer.errors
    assert dict(serializer.validated_data) == {"status": "closed"}


# ── Endpoint-level checks ────────────────────────────────────────────────────


def test_create_with_missing_fields_returns_validation_envelope(authed_client):
    resp = authed_client.post(
        reverse("case-list"), {"victimName": "Maria"}, format="json",
    )

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert resp.data["message"] == "Validation error"
    assert "incidentType" in resp.data["errors"]
    assert get_store().list_cases() == []


def test_update_with_invalid_status_leaves_case_untouched(authed_client):
    created = authed_client.post(reverse("case-list"), _payload(), format="json")
    case_id = created.data["id"]

    resp = authed_client.put(
        reverse("case-detail", args=[case_id]), {"status": "archived"}, format="json",
    )

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert get_store().get_case(case_id).status == "active"


def test_note_without_content_is_rejected(authed_client):
    created = authed_client.post(reverse("case-list"), _payload(), format="json")

    resp = authed_client.post(
        reverse("case-notes", args=[created.data["id"]]), {}, format="json",
    )

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert "content" in resp.data["errors"]


def test_service_requires_provider_and_date(authed_client):
    created = authed_client.post(reverse("case-list"), _payload(), format="json")

    resp = authed_client.post(
        reverse("case-services", args=[created.data["id"]]),
        {"type": "Counseling"},
        format="json",
    )

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert set(resp.data["errors"]) == {"provider", "dateProvided"}


def test_create_with_impossible_date_writes_nothing(store, authed_client):
    resp = authed_client.post(
        reverse("case-list"), _payload(incidentDate="2023-13-45"), format="json",
    )

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert resp.data["message"] == "Validation error"
    assert "incidentDate" in resp.data["errors"]
    assert store.list_cases() == []
