"""
Dispatch app URL configuration.

Route Hierarchy
---------------
  GET  /api/calls/?limit=             → dispatch feed (newest first)
  GET  /api/calls/{id}/               → one call with its timeline
  POST /api/calls/test/               → seed a test call

  ── Workflow @actions ───────────────────────────────────────────
  POST /api/calls/{id}/accept/
  POST /api/calls/{id}/status/
  POST /api/calls/{id}/notes/
  POST /api/calls/{id}/close/
"""

from rest_framework.routers import DefaultRouter

from .views import DispatchCallViewSet

router = DefaultRouter()
router.register(prefix=r"calls", viewset=DispatchCallViewSet, basename="call")

urlpatterns = router.urls
