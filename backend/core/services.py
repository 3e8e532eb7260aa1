"""
Core app services: **Service Layer**.

Cross-cutting read models: the dashboard snapshot and the administrator
case reports.  Views delegate here and only serialise the result.

Services receive the active ``CaseStore`` through their constructor and
never touch ORM models directly; whichever backend ``CoreConfig``
selected at startup is the one they read.
"""

from __future__ import annotations

import calendar
import logging
from collections import Counter
from datetime import datetime
from typing import Any

from django.utils import timezone

from .storage.base import CaseStore
from .storage.records import CaseRecord, DashboardStats

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════
#  Dashboard
# ════════════════════════════════════════════════════════════════════

class DashboardAggregationService:
    """
    Produces the dashboard snapshot consumed by
    ``DashboardStatsSerializer``.

    The snapshot is the same for every authenticated user: status counts
    over all cases, the newest cases expanded with services and notes,
    and a feed of the latest notes written by staff.
    """

    def __init__(self, store: CaseStore) -> None:
        self.store = store

    def get_stats(self) -> DashboardStats:
        """Return the dashboard statistics for the whole office."""
        return self.store.get_dashboard_stats()


# ════════════════════════════════════════════════════════════════════
#  Reports
# ════════════════════════════════════════════════════════════════════

def subtract_months(moment: datetime, months: int) -> datetime:
    """
    Step ``moment`` back by whole calendar months.

    The day of month is clamped to the length of the target month, so
    31 March minus one month is 28 (or 29) February.
    """
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month_zero = divmod(month_index, 12)
    month = month_zero + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


class CaseReportService:
    """
    Builds the administrator case report.

    A report filters the case list by creation timeframe and barangay,
    then summarises the remaining cases by status and by one chosen
    dimension (incident type, status, or barangay).

    Report types
    ------------
    ``incident``
        One bucket per ``incident_type`` in first-seen order of the
        (newest-first) case list.
    ``status``
        Always the three statuses, in the order active, pending, closed.
    ``barangay``
        One bucket per barangay (missing values grouped as
        ``"Unknown"``), largest bucket first.
    """

    REPORT_TYPES = ("incident", "status", "barangay")

    #: Timeframe → how many calendar months back the window starts.
    TIMEFRAME_MONTHS: dict[str, int | None] = {
        "all": None,
        "month": 1,
        "quarter": 3,
        "year": 12,
    }

    ALL_BARANGAYS = "all"
    UNKNOWN_BARANGAY = "Unknown"
    STATUS_ORDER = ("active", "pending", "closed")

    def __init__(self, store: CaseStore) -> None:
        self.store = store

    def build_report(
        self,
        *,
        report_type: str = "incident",
        timeframe: str = "all",
        barangay: str = ALL_BARANGAYS,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """
        Build the report payload.

        Parameters
        ----------
        report_type : str
            One of ``REPORT_TYPES``.
        timeframe : str
            One of the ``TIMEFRAME_MONTHS`` keys.
        barangay : str
            Exact barangay to keep, or ``"all"``.
        now : datetime, optional
            Reference time for the timeframe window.  Defaults to the
            current time.

        Returns
        -------
        dict
            Consumed by ``CaseReportSerializer``.
        """
        all_cases = self.store.list_cases()
        cases = self._filter_cases(
            all_cases,
            timeframe=timeframe,
            barangay=barangay,
            now=now or timezone.now(),
        )
        statuses = Counter(case.status for case in cases)

        return {
            "report_type": report_type,
            "timeframe": timeframe,
            "barangay": barangay,
            "total_cases": len(cases),
            "active_cases": statuses.get("active", 0),
            "pending_cases": statuses.get("pending", 0),
            "closed_cases": statuses.get("closed", 0),
            "distribution": self._distribution(report_type, cases),
            "barangays": sorted({c.barangay for c in all_cases if c.barangay}),
            "cases": cases,
        }

    # ── Private helpers ─────────────────────────────────────────────

    def _filter_cases(
        self,
        cases: list[CaseRecord],
        *,
        timeframe: str,
        barangay: str,
        now: datetime,
    ) -> list[CaseRecord]:
        if barangay and barangay != self.ALL_BARANGAYS:
            cases = [case for case in cases if case.barangay == barangay]

        months = self.TIMEFRAME_MONTHS[timeframe]
        if months is not None:
            since = subtract_months(now, months)
            cases = [case for case in cases if case.created_at >= since]
        return cases

    def _distribution(
        self, report_type: str, cases: list[CaseRecord],
    ) -> list[dict[str, Any]]:
        if report_type == "status":
            counts = Counter(case.status for case in cases)
            return [
                {"name": status, "value": counts.get(status, 0)}
                for status in self.STATUS_ORDER
            ]

        if report_type == "barangay":
            counts = Counter(
                case.barangay or self.UNKNOWN_BARANGAY for case in cases
            )
            # Stable sort keeps first-seen order among equal counts.
            return [
                {"name": name, "value": value}
                for name, value in sorted(
                    counts.items(), key=lambda item: item[1], reverse=True,
                )
            ]

        # Counter preserves insertion order, i.e. first-seen order.
        counts = Counter(case.incident_type for case in cases)
        return [{"name": name, "value": value} for name, value in counts.items()]
