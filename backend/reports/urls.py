"""
Reports app URL configuration.

Route Hierarchy
---------------
  GET/PUT /api/tags/                 → tag catalog
  /api/reports/                      → list / create
  /api/reports/{id}/                 → retrieve / partial_update (save draft)
  POST /api/reports/{id}/submit/     → submit and lock

  GET /api/persons/?query=           → people mentioned in records
  GET /api/persons/{cid}/
  GET /api/vehicles/?query=          → plates mentioned in records
  GET /api/vehicles/{plate}/
"""

from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import PersonLookupViewSet, ReportViewSet, TagCatalogView, VehicleLookupViewSet

router = DefaultRouter()
router.register(prefix=r"reports", viewset=ReportViewSet, basename="report")
router.register(prefix=r"persons", viewset=PersonLookupViewSet, basename="person")
router.register(prefix=r"vehicles", viewset=VehicleLookupViewSet, basename="vehicle")

urlpatterns = [
    path("tags/", TagCatalogView.as_view(), name="tag-catalog"),
] + router.urls
