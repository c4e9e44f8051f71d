"""
Evidence app URL configuration.

Route Hierarchy
---------------
  /api/evidence/                            → list / register
  /api/evidence/{id}/                       → retrieve

  ── Custody @actions ────────────────────────────────────────────
  POST /api/evidence/{id}/notes/
  POST /api/evidence/{id}/transfer/
  POST /api/evidence/{id}/seal/
  POST /api/evidence/{id}/link-report/
  POST /api/evidence/{id}/unlink-report/
  POST /api/evidence/{id}/tags/
  GET  /api/evidence/{id}/chain-of-custody/
"""

from rest_framework.routers import DefaultRouter

from .views import EvidenceViewSet

router = DefaultRouter()
router.register(prefix=r"evidence", viewset=EvidenceViewSet, basename="evidence")

urlpatterns = router.urls
