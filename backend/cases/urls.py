"""
Cases app URL configuration.

Route Hierarchy
---------------
  /api/case-requests/                    → list / request
  /api/case-requests/{id}/               → retrieve
  POST /api/case-requests/{id}/approve/
  POST /api/case-requests/{id}/reject/

  /api/cases/                            → list / open directly
  /api/cases/{id}/                       → retrieve
  POST /api/cases/{id}/links/
  POST /api/cases/{id}/status/
"""

from rest_framework.routers import DefaultRouter

from .views import CaseRequestViewSet, CaseViewSet

router = DefaultRouter()
router.register(prefix=r"case-requests", viewset=CaseRequestViewSet, basename="case-request")
router.register(prefix=r"cases", viewset=CaseViewSet, basename="case")

urlpatterns = router.urls
