"""
Units app URL configuration.

Route Hierarchy
---------------
  /api/units/                         → list / request a unit
  /api/units/{id}/                    → retrieve
  POST /api/units/{id}/members/       → add a member
  POST /api/units/{id}/remove-member/ → remove a member
  POST /api/units/{id}/status/        → available / unavailable

  /api/roster/                        → list / register an officer
  /api/roster/{cid}/                  → retrieve
  POST /api/roster/{cid}/duty/        → toggle duty
"""

from rest_framework.routers import DefaultRouter

from .views import RosterViewSet, UnitViewSet

router = DefaultRouter()
router.register(prefix=r"units", viewset=UnitViewSet, basename="unit")
router.register(prefix=r"roster", viewset=RosterViewSet, basename="officer")

urlpatterns = router.urls
