"""
Reports app views.

Views are intentionally thin: validate input with a serializer, delegate
to a service class, serialize the result.

Views
-----
- ``TagCatalogView``    — read / replace the tag catalog.
- ``ReportViewSet``     — reports, edits and submission.
- ``PersonLookupViewSet`` / ``VehicleLookupViewSet`` — read-only
  projections over reports and BOLOs.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    LookupFilterSerializer,
    PersonDetailSerializer,
    PersonSummarySerializer,
    ReportCreateSerializer,
    ReportDetailSerializer,
    ReportFilterSerializer,
    ReportListSerializer,
    ReportSubmitSerializer,
    ReportUpdateSerializer,
    TagCatalogSerializer,
    VehicleDetailSerializer,
    VehicleSummarySerializer,
)
from .services import (
    PersonLookupService,
    ReportQueryService,
    ReportService,
    TagCatalogService,
    VehicleLookupService,
)

_LOOKUP_PARAMS = [
    OpenApiParameter(name="query", type=str, location=OpenApiParameter.QUERY, description="Free-text filter."),
    OpenApiParameter(name="limit", type=int, location=OpenApiParameter.QUERY, description="Maximum number of results."),
]


class TagCatalogView(APIView):
    """GET / PUT /api/tags/"""

    @extend_schema(summary="Get the tag catalog", responses={200: TagCatalogSerializer}, tags=["Reports"])
    def get(self, request: Request) -> Response:
        return Response({"tags": TagCatalogService.get_tag_catalog()})

    @extend_schema(
        summary="Replace the tag catalog",
        request=TagCatalogSerializer,
        responses={200: TagCatalogSerializer},
        tags=["Reports"],
    )
    def put(self, request: Request) -> Response:
        serializer = TagCatalogSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tags = TagCatalogService.set_tag_catalog(serializer.validated_data["tags"])
        return Response({"tags": tags})


class ReportViewSet(viewsets.ViewSet):
    """
    Reports.  ``partial_update`` saves a draft; ``submit`` locks it.
    Every write after submission returns 409 ``REPORT_LOCKED``.
    """

    @extend_schema(
        summary="List reports",
        parameters=[
            OpenApiParameter(name="query", type=str, location=OpenApiParameter.QUERY, description="Free-text search."),
            OpenApiParameter(name="tag", type=str, location=OpenApiParameter.QUERY, description="Only reports carrying this tag."),
            OpenApiParameter(name="type", type=str, location=OpenApiParameter.QUERY, description="Report type."),
            OpenApiParameter(name="limit", type=int, location=OpenApiParameter.QUERY, description="Defaults to 200."),
        ],
        responses={200: ReportListSerializer(many=True)},
        tags=["Reports"],
    )
    def list(self, request: Request) -> Response:
        filters = ReportFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        data = filters.validated_data
        reports = ReportQueryService.list_reports(
            query=data.get("query"),
            tag=data.get("tag"),
            report_type=data.get("type"),
            limit=data.get("limit"),
        )
        return Response(ReportListSerializer(reports, many=True).data)

    @extend_schema(
        summary="Create a report",
        request=ReportCreateSerializer,
        responses={201: ReportDetailSerializer, 400: OpenApiResponse(description="Validation error.")},
        tags=["Reports"],
    )
    def create(self, request: Request) -> Response:
        serializer = ReportCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        report = ReportService.create_report(
            report_type=data["type"],
            title=data["title"],
            location=data.get("location"),
            tags=data.get("tags"),
            involved=data.get("involved"),
            vehicles=data.get("vehicles"),
            full_text=data.get("full_text"),
            actor=serializer.get_actor(),
        )
        return Response(ReportDetailSerializer(report).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Retrieve a report", responses={200: ReportDetailSerializer}, tags=["Reports"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(ReportDetailSerializer(ReportQueryService.get_report(pk)).data)

    @extend_schema(
        summary="Save a draft report",
        request=ReportUpdateSerializer,
        responses={200: ReportDetailSerializer, 409: OpenApiResponse(description="Report locked.")},
        tags=["Reports"],
    )
    def partial_update(self, request: Request, pk: str = None) -> Response:
        serializer = ReportUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        report = ReportService.update_report(
            pk,
            serializer.get_actor(),
            full_text=data.get("full_text"),
            tags=data.get("tags"),
            involved=data.get("involved"),
            vehicles=data.get("vehicles"),
        )
        return Response(ReportDetailSerializer(report).data)

    @extend_schema(
        summary="Submit a report",
        request=ReportSubmitSerializer,
        responses={200: ReportDetailSerializer, 409: OpenApiResponse(description="Already submitted.")},
        tags=["Reports"],
    )
    @action(detail=True, methods=["post"], url_path="submit")
    def submit(self, request: Request, pk: str = None) -> Response:
        serializer = ReportSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        report = ReportService.submit_report(pk, serializer.get_actor())
        return Response(ReportDetailSerializer(report).data)


class PersonLookupViewSet(viewsets.ViewSet):
    lookup_field = "cid"
    lookup_value_regex = r"\d+"

    @extend_schema(
        summary="Search people",
        parameters=_LOOKUP_PARAMS,
        responses={200: PersonSummarySerializer(many=True)},
        tags=["Lookups"],
    )
    def list(self, request: Request) -> Response:
        filters = LookupFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        people = PersonLookupService.search_person(**filters.validated_data)
        return Response(PersonSummarySerializer(people, many=True).data)

    @extend_schema(summary="Person record", responses={200: PersonDetailSerializer}, tags=["Lookups"])
    def retrieve(self, request: Request, cid: str = None) -> Response:
        return Response(PersonDetailSerializer(PersonLookupService.get_person(cid)).data)


class VehicleLookupViewSet(viewsets.ViewSet):
    lookup_field = "plate"
    lookup_value_regex = r"[^/]+"

    @extend_schema(
        summary="Search vehicles",
        parameters=_LOOKUP_PARAMS,
        responses={200: VehicleSummarySerializer(many=True)},
        tags=["Lookups"],
    )
    def list(self, request: Request) -> Response:
        filters = LookupFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        vehicles = VehicleLookupService.search_vehicle(**filters.validated_data)
        return Response(VehicleSummarySerializer(vehicles, many=True).data)

    @extend_schema(summary="Vehicle record", responses={200: VehicleDetailSerializer}, tags=["Lookups"])
    def retrieve(self, request: Request, plate: str = None) -> Response:
        return Response(VehicleDetailSerializer(VehicleLookupService.get_vehicle(plate)).data)
