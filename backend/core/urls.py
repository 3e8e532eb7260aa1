"""
Core app URL configuration.

Read-only aggregation endpoints that serve the frontend dashboard and
the administrator reports page.

URL prefix (registered in ``backend/urls.py``)::

    path('api/', include('core.urls'))

Endpoint summary
----------------
GET  /api/dashboard    Dashboard snapshot (any authenticated staff member).
GET  /api/reports      Case report (administrators only).
"""

from django.urls import path

from . import views

app_name = "core"

urlpatterns = [
    path(
        "dashboard",
        views.DashboardStatsView.as_view(),
        name="dashboard-stats",
    ),
    path(
        "reports",
        views.ReportView.as_view(),
        name="reports",
    ),
]
