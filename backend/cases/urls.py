"""
Cases app URL configuration.

All routes are registered under the ``/api/cases`` prefix, without
trailing slashes.

Route Hierarchy
---------------
  /api/cases                 → list / create
  /api/cases/{id}            → retrieve / update / partial_update / destroy

  ── Sub-resource @actions ───────────────────────────────────────
  GET  /api/cases/{id}/notes
  POST /api/cases/{id}/notes

  GET  /api/cases/{id}/services
  POST /api/cases/{id}/services
"""

from rest_framework.routers import DefaultRouter

from .views import CaseViewSet

router = DefaultRouter(trailing_slash=False)
router.register(
    prefix=r"cases",
    viewset=CaseViewSet,
    basename="case",
)

urlpatterns = router.urls
