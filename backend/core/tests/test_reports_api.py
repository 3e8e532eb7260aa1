"""
Tests for the administrator case report.

Endpoint under test:  GET /api/reports (core:reports)
Service under test:   core.services.CaseReportService
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from core.seed import seed_store
from core.services import CaseReportService, subtract_months
from core.storage import get_store


def _token_for(username):
    from accounts.services import AuthenticationService

    return AuthenticationService.generate_token(get_store().get_user_by_username(username))


@pytest.fixture()
def seeded():
    seed_store(get_store())
    return get_store()


@pytest.fixture()
def admin_client(api_client, seeded):
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {_token_for('admin')}")
    return api_client


# ── Access ───────────────────────────────────────────────────────────────────


def test_editor_is_forbidden(api_client, seeded):
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {_token_for('editor')}")

    resp = api_client.get(reverse("core:reports"))

    assert resp.status_code == status.HTTP_403_FORBIDDEN


def test_anonymous_is_unauthorized(api_client):
    resp = api_client.get(reverse("core:reports"))

    assert resp.status_code == status.HTTP_401_UNAUTHORIZED


# ── Endpoint ─────────────────────────────────────────────────────────────────


def test_default_report_is_incident_over_all_time(admin_client):
    resp = admin_client.get(reverse("core:reports"))

    assert resp.status_code == status.HTTP_200_OK
    data = resp.data
    assert (data["reportType"], data["timeframe"], data["barangay"]) == (
        "incident", "all", "all",
    )
    assert data["totalCases"] == 5
    assert (data["activeCases"], data["pendingCases"], data["closedCases"]) == (2, 2, 1)
    assert len(data["cases"]) == 5
    assert [b["name"] for b in data["distribution"]] == [
        "Physical and emotional abuse",
        "Workplace harassment",
        "Economic abuse",
        "Verbal abuse",
        "Physical abuse",
    ]
    assert data["barangays"] == sorted(data["barangays"])
    assert len(data["barangays"]) == 5


def test_status_report_lists_every_status(admin_client):
    data = admin_client.get(reverse("core:reports"), {"type": "status"}).data

    assert data["distribution"] == [
        {"name": "active", "value": 2},
        {"name": "pending", "value": 2},
        {"name": "closed", "value": 1},
    ]


def test_barangay_filter(admin_client):
    data = admin_client.get(
        reverse("core:reports"),
        {"type": "barangay", "barangay": "Barangay San Jose"},
    ).data

    assert data["totalCases"] == 1
    assert data["cases"][0]["victimName"] == "Ana Reyes"
    assert data["distribution"] == [{"name": "Barangay San Jose", "value": 1}]
    assert len(data["barangays"]) == 5


@pytest.mark.parametrize("params", [{"type": "weekly"}, {"timeframe": "decade"}])
def test_invalid_parameters(admin_client, params):
    resp = admin_client.get(reverse("core:reports"), params)

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert resp.data["message"] == "Validation error"


# ── Service ──────────────────────────────────────────────────────────────────


def test_timeframe_window_uses_creation_time(seeded):
    service = CaseReportService(seeded)

    current = service.build_report(timeframe="month")
    later = service.build_report(
        timeframe="year", now=timezone.now() + timedelta(days=400),
    )

    assert current["total_cases"] == 5
    assert later["total_cases"] == 0
    assert len(later["barangays"]) == 5


def test_barangay_distribution_groups_missing_as_unknown(store):
    for barangay in [None, "Poblacion", None, ""]:
        store.create_case({
            "victim_name": "V",
            "incident_date": timezone.now(),
            "incident_type": "Physical abuse",
            "perpetrator_name": "P",
            "encoder_name": "E",
            "status": "active",
            "barangay": barangay,
        })

    report = CaseReportService(store).build_report(report_type="barangay")

    assert report["distribution"] == [
        {"name": "Unknown", "value": 3},
        {"name": "Poblacion", "value": 1},
    ]
    assert report["barangays"] == ["Poblacion"]


@pytest.mark.parametrize(
    ("moment", "months", "expected"),
    [
        (datetime(2024, 3, 31), 1, datetime(2024, 2, 29)),
        (datetime(2023, 3, 31), 1, datetime(2023, 2, 28)),
        (datetime(2024, 1, 15), 3, datetime(2023, 10, 15)),
        (datetime(2024, 5, 10), 12, datetime(2023, 5, 10)),
    ],
)
def test_subtract_months(moment, months, expected):
    assert subtract_months(moment, months) == expected
