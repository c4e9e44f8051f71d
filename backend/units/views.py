"""
Units app ViewSets.

Views are intentionally thin: validate input with a serializer, delegate
to a service class, serialize the result.

ViewSets
--------
- ``UnitViewSet``   — units, membership and availability.
- ``RosterViewSet`` — officer registration and duty state.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from .serializers import (
    OfficerDutySerializer,
    OfficerRegisterSerializer,
    OfficerSerializer,
    UnitCreateSerializer,
    UnitDetailSerializer,
    UnitMembershipSerializer,
    UnitSerializer,
    UnitStatusSerializer,
)
from .services import OfficerRosterService, UnitQueryService, UnitRosterService


class UnitViewSet(viewsets.ViewSet):
    """
    Patrol units.

    ``viewsets.ViewSet`` keeps every route explicit; no generic CRUD is
    exposed beyond what is declared here.
    """

    @extend_schema(
        summary="List units",
        responses={200: UnitSerializer(many=True)},
        tags=["Units"],
    )
    def list(self, request: Request) -> Response:
        units = UnitQueryService.list_units()
        return Response(UnitSerializer(units, many=True).data)

    @extend_schema(
        summary="Request a unit",
        description="Create a unit under a free callsign. Returns 409 CALLSIGN_TAKEN when it is in use.",
        request=UnitCreateSerializer,
        responses={
            201: UnitDetailSerializer,
            409: OpenApiResponse(description="Callsign already taken."),
        },
        tags=["Units"],
    )
    def create(self, request: Request) -> Response:
        serializer = UnitCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        unit = UnitRosterService.request_unit(
            callsign=serializer.validated_data["callsign"],
            label=serializer.validated_data.get("label"),
            actor=serializer.get_actor(),
        )
        unit = UnitQueryService.get_unit(unit.pk)
        return Response(UnitDetailSerializer(unit).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Retrieve a unit",
        responses={200: UnitDetailSerializer, 404: OpenApiResponse(description="Not found.")},
        tags=["Units"],
    )
    def retrieve(self, request: Request, pk: str = None) -> Response:
        unit = UnitQueryService.get_unit(pk)
        return Response(UnitDetailSerializer(unit).data)

    @extend_schema(
        summary="Add a member",
        description=(
            "Put an officer into the unit, leaving their previous unit. "
            "Returns 409 SQUAD_FULL when the unit is at capacity."
        ),
        request=UnitMembershipSerializer,
        responses={200: UnitDetailSerializer, 409: OpenApiResponse(description="Unit full.")},
        tags=["Units"],
    )
    @action(detail=True, methods=["post"], url_path="members")
    def add_member(self, request: Request, pk: str = None) -> Response:
        serializer = UnitMembershipSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        UnitRosterService.add_member(
            unit_id=pk,
            cid=serializer.validated_data["cid"],
            actor=serializer.get_actor(),
        )
        return Response(UnitDetailSerializer(UnitQueryService.get_unit(pk)).data)

    @extend_schema(
        summary="Remove a member",
        request=UnitMembershipSerializer,
        responses={200: UnitDetailSerializer},
        tags=["Units"],
    )
    @action(detail=True, methods=["post"], url_path="remove-member")
    def remove_member(self, request: Request, pk: str = None) -> Response:
        serializer = UnitMembershipSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        UnitRosterService.remove_member(
            unit_id=pk,
            cid=serializer.validated_data["cid"],
            actor=serializer.get_actor(),
        )
        return Response(UnitDetailSerializer(UnitQueryService.get_unit(pk)).data)

    @extend_schema(
        summary="Set unit availability",
        request=UnitStatusSerializer,
        responses={200: UnitDetailSerializer},
        tags=["Units"],
    )
    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request: Request, pk: str = None) -> Response:
        serializer = UnitStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        UnitRosterService.set_status(
            unit_id=pk,
            status=serializer.validated_data["status"],
            actor=serializer.get_actor(),
        )
        return Response(UnitDetailSerializer(UnitQueryService.get_unit(pk)).data)


class RosterViewSet(viewsets.ViewSet):
    """Officer roster keyed by cid."""

    lookup_field = "cid"
    lookup_value_regex = r"\d+"

    @extend_schema(summary="List officers", responses={200: OfficerSerializer(many=True)}, tags=["Roster"])
    def list(self, request: Request) -> Response:
        return Response(OfficerSerializer(OfficerRosterService.get_roster(), many=True).data)

    @extend_schema(
        summary="Register an officer",
        description="Create the officer or refresh their name and duty flag.",
        request=OfficerRegisterSerializer,
        responses={200: OfficerSerializer},
        tags=["Roster"],
    )
    def create(self, request: Request) -> Response:
        serializer = OfficerRegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        officer = OfficerRosterService.register_officer(**serializer.validated_data)
        return Response(OfficerSerializer(officer).data)

    @extend_schema(summary="Retrieve an officer", responses={200: OfficerSerializer}, tags=["Roster"])
    def retrieve(self, request: Request, cid: str = None) -> Response:
        officer = OfficerRosterService.get_officer(int(cid))
        return Response(OfficerSerializer(officer).data)

    @extend_schema(
        summary="Set duty state",
        request=OfficerDutySerializer,
        responses={200: OfficerSerializer},
        tags=["Roster"],
    )
    @action(detail=True, methods=["post"], url_path="duty")
    def set_duty(self, request: Request, cid: str = None) -> Response:
        serializer = OfficerDutySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        officer = OfficerRosterService.set_duty(int(cid), serializer.validated_data["on_duty"])
        return Response(OfficerSerializer(officer).data)
