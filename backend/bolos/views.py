"""
BOLO app ViewSets.

Views are intentionally thin: validate input with a serializer, delegate
to ``BoloService`` / ``BoloQueryService``, serialize the result.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from .serializers import (
    BoloCreateSerializer,
    BoloDetailSerializer,
    BoloFilterSerializer,
    BoloListSerializer,
    BoloSightingSerializer,
    BoloStatusSerializer,
)
from .services import BoloQueryService, BoloService


class BoloViewSet(viewsets.ViewSet):
    """BOLO alerts, their status and sightings."""

    @extend_schema(
        summary="List BOLOs",
        parameters=[
            OpenApiParameter(name="query", type=str, location=OpenApiParameter.QUERY, description="Free-text search."),
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, description="active, suspended or closed."),
            OpenApiParameter(name="type", type=str, location=OpenApiParameter.QUERY, description="person, vehicle or general."),
            OpenApiParameter(name="priority", type=str, location=OpenApiParameter.QUERY, description="low, medium, high or critical."),
            OpenApiParameter(name="actionable_only", type=bool, location=OpenApiParameter.QUERY, description="Only active, unexpired alerts."),
            OpenApiParameter(name="limit", type=int, location=OpenApiParameter.QUERY, description="Defaults to 200."),
        ],
        responses={200: BoloListSerializer(many=True)},
        tags=["BOLO"],
    )
    def list(self, request: Request) -> Response:
        filters = BoloFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        data = filters.validated_data
        bolos = BoloQueryService.get_bolos(
            query=data.get("query"),
            status=data.get("status"),
            bolo_type=data.get("type"),
            priority=data.get("priority"),
            actionable_only=data["actionable_only"],
            limit=data.get("limit"),
        )
        return Response(BoloListSerializer(bolos, many=True).data)

    @extend_schema(
        summary="Create a BOLO",
        request=BoloCreateSerializer,
        responses={201: BoloDetailSerializer, 400: OpenApiResponse(description="Validation error.")},
        tags=["BOLO"],
    )
    def create(self, request: Request) -> Response:
        serializer = BoloCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        bolo = BoloService.create_bolo(
            bolo_type=data["type"],
            priority=data["priority"],
            title=data["title"],
            description=data["description"],
            tags=data.get("tags"),
            people=data.get("people"),
            vehicles=data.get("vehicles"),
            report_ids=data.get("report_ids"),
            expires_in_minutes=data.get("expires_in_minutes"),
            actor=serializer.get_actor(),
        )
        return Response(BoloDetailSerializer(bolo).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Retrieve a BOLO", responses={200: BoloDetailSerializer}, tags=["BOLO"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(BoloDetailSerializer(BoloQueryService.get_bolo(pk)).data)

    @extend_schema(
        summary="Change BOLO status",
        request=BoloStatusSerializer,
        responses={200: BoloDetailSerializer, 409: OpenApiResponse(description="BOLO_CLOSED.")},
        tags=["BOLO"],
    )
    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request: Request, pk: str = None) -> Response:
        serializer = BoloStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        bolo = BoloService.update_status(pk, serializer.validated_data["status"], serializer.get_actor())
        return Response(BoloDetailSerializer(bolo).data)

    @extend_schema(
        summary="Record a sighting",
        request=BoloSightingSerializer,
        responses={200: BoloDetailSerializer},
        tags=["BOLO"],
    )
    @action(detail=True, methods=["post"], url_path="sightings")
    def record_sighting(self, request: Request, pk: str = None) -> Response:
        serializer = BoloSightingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        bolo = BoloService.record_sighting(
            pk, serializer.get_actor(), note=serializer.validated_data.get("note"),
        )
        return Response(BoloDetailSerializer(bolo).data)
