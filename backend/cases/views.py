"""
Cases app ViewSets.

Architecture: Views are intentionally thin.
Every view follows the strict three-step pattern:

    1. Parse / validate input via a serializer.
    2. Delegate all business logic to the appropriate service class.
    3. Serialize the result and return a DRF ``Response``.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from .serializers import (
    ApprovalResultSerializer,
    CaseCreateSerializer,
    CaseDecisionSerializer,
    CaseDetailSerializer,
    CaseFilterSerializer,
    CaseLinkSerializer,
    CaseListSerializer,
    CaseRequestCreateSerializer,
    CaseRequestFilterSerializer,
    CaseRequestSerializer,
    CaseStatusSerializer,
)
from .services import CaseIntakeService, CaseQueryService, CaseRegistryService

_DECIDED = OpenApiResponse(description="REQUEST_DECIDED: the request is no longer pending.")


class CaseRequestViewSet(viewsets.ViewSet):
    """
    Case intake queue.

    ``approve`` opens a numbered case and decides the request in one
    transaction; ``reject`` only decides the request.
    """

    @extend_schema(
        summary="List case requests",
        parameters=[
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, description="pending, approved or rejected."),
        ],
        responses={200: CaseRequestSerializer(many=True)},
        tags=["Case Intake"],
    )
    def list(self, request: Request) -> Response:
        filters = CaseRequestFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        qs = CaseIntakeService.list_requests(status=filters.validated_data.get("status"))
        return Response(CaseRequestSerializer(qs, many=True).data)

    @extend_schema(
        summary="Request a case from a report",
        request=CaseRequestCreateSerializer,
        responses={201: CaseRequestSerializer},
        tags=["Case Intake"],
    )
    def create(self, request: Request) -> Response:
        serializer = CaseRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        case_request = CaseIntakeService.request_case(
            data["report_id"],
            serializer.get_actor(),
            report_title=data.get("report_title"),
            note=data.get("note"),
        )
        return Response(CaseRequestSerializer(case_request).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Retrieve a case request", responses={200: CaseRequestSerializer}, tags=["Case Intake"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(CaseRequestSerializer(CaseIntakeService.get_request(pk)).data)

    @extend_schema(
        summary="Approve a case request",
        request=CaseDecisionSerializer,
        responses={200: ApprovalResultSerializer, 409: _DECIDED},
        tags=["Case Intake"],
    )
    @action(detail=True, methods=["post"], url_path="approve")
    def approve(self, request: Request, pk: str = None) -> Response:
        serializer = CaseDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        case, case_request = CaseIntakeService.approve(pk, serializer.get_actor())
        return Response(ApprovalResultSerializer({"case": case, "request": case_request}).data)

    @extend_schema(
        summary="Reject a case request",
        request=CaseDecisionSerializer,
        responses={200: CaseRequestSerializer, 409: _DECIDED},
        tags=["Case Intake"],
    )
    @action(detail=True, methods=["post"], url_path="reject")
    def reject(self, request: Request, pk: str = None) -> Response:
        serializer = CaseDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        case_request = CaseIntakeService.reject(
            pk, serializer.get_actor(), reason=serializer.validated_data.get("reason"),
        )
        return Response(CaseRequestSerializer(case_request).data)


class CaseViewSet(viewsets.ViewSet):
    """Case registry."""

    @extend_schema(
        summary="List cases",
        parameters=[
            OpenApiParameter(name="query", type=str, location=OpenApiParameter.QUERY, description="Search number, title, description, location."),
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, description="Case status."),
        ],
        responses={200: CaseListSerializer(many=True)},
        tags=["Cases"],
    )
    def list(self, request: Request) -> Response:
        filters = CaseFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        qs = CaseQueryService.list_cases(**filters.validated_data)
        return Response(CaseListSerializer(qs, many=True).data)

    @extend_schema(summary="Open a case directly", request=CaseCreateSerializer, responses={201: CaseDetailSerializer}, tags=["Cases"])
    def create(self, request: Request) -> Response:
        serializer = CaseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        case = CaseRegistryService.create_case(
            title=data["title"],
            description=data.get("description"),
            priority=data.get("priority"),
            location=data.get("location"),
            tags=data.get("tags"),
            actor=serializer.get_actor(),
        )
        return Response(CaseDetailSerializer(case).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Retrieve a case", responses={200: CaseDetailSerializer}, tags=["Cases"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(CaseDetailSerializer(CaseQueryService.get_case(pk)).data)

    @extend_schema(
        summary="Link reports, evidence and BOLOs",
        request=CaseLinkSerializer,
        responses={200: CaseDetailSerializer, 404: OpenApiResponse(description="Unknown record id.")},
        tags=["Cases"],
    )
    @action(detail=True, methods=["post"], url_path="links")
    def link_records(self, request: Request, pk: str = None) -> Response:
        serializer = CaseLinkSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        case = CaseRegistryService.link_records(
            pk,
            serializer.get_actor(),
            report_ids=data.get("report_ids"),
            evidence_ids=data.get("evidence_ids"),
            bolo_ids=data.get("bolo_ids"),
        )
        return Response(CaseDetailSerializer(case).data)

    @extend_schema(
        summary="Change case status",
        request=CaseStatusSerializer,
        responses={200: CaseDetailSerializer, 409: OpenApiResponse(description="CASE_CLOSED.")},
        tags=["Cases"],
    )
    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request: Request, pk: str = None) -> Response:
        serializer = CaseStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        case = CaseRegistryService.update_case_status(
            pk,
            serializer.validated_data["status"],
            serializer.get_actor(),
            note=serializer.validated_data.get("note"),
        )
        return Response(CaseDetailSerializer(case).data)
