"""
BOLO app URL configuration.

Route Hierarchy
---------------
  /api/bolos/                       → list / create
  /api/bolos/{id}/                  → retrieve
  POST /api/bolos/{id}/status/      → active / suspended / closed
  POST /api/bolos/{id}/sightings/   → record a sighting
"""

from rest_framework.routers import DefaultRouter

from .views import BoloViewSet

router = DefaultRouter()
router.register(prefix=r"bolos", viewset=BoloViewSet, basename="bolo")

urlpatterns = router.urls
