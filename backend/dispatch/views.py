"""
Dispatch app ViewSets.

Views are intentionally thin: validate input with a serializer, delegate
to ``DispatchWorkflowService`` / ``DispatchQueryService``, serialize the
result.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from .serializers import (
    AcceptCallSerializer,
    CallNoteSerializer,
    CallStatusSerializer,
    CloseCallSerializer,
    DispatchCallSerializer,
    DispatchFeedFilterSerializer,
    SeedCallSerializer,
)
from .services import DispatchQueryService, DispatchWorkflowService


class DispatchCallViewSet(viewsets.ViewSet):
    """The dispatch feed and the per-call workflow."""

    @extend_schema(
        summary="Dispatch feed",
        parameters=[
            OpenApiParameter(name="limit", type=int, location=OpenApiParameter.QUERY, description="Defaults to 80."),
        ],
        responses={200: DispatchCallSerializer(many=True)},
        tags=["Dispatch"],
    )
    def list(self, request: Request) -> Response:
        filters = DispatchFeedFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        calls = DispatchQueryService.get_dispatch_feed(limit=filters.validated_data.get("limit"))
        return Response(DispatchCallSerializer(calls, many=True).data)

    @extend_schema(summary="Retrieve a call", responses={200: DispatchCallSerializer}, tags=["Dispatch"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        return Response(DispatchCallSerializer(DispatchQueryService.get_call(pk)).data)

    @extend_schema(
        summary="Seed a test call",
        description="Creates a new call raised by DISPATCH. Defaults: 10-38, Teszt riasztás, Vinewood Blvd.",
        request=SeedCallSerializer,
        responses={201: DispatchCallSerializer},
        tags=["Dispatch"],
    )
    @action(detail=False, methods=["post"], url_path="test")
    def test_dispatch(self, request: Request) -> Response:
        serializer = SeedCallSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        call = DispatchWorkflowService.test_dispatch(**serializer.validated_data)
        return Response(DispatchCallSerializer(call).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Accept a call",
        request=AcceptCallSerializer,
        responses={
            200: DispatchCallSerializer,
            409: OpenApiResponse(description="CALL_CLOSED or CALL_ASSIGNED."),
        },
        tags=["Dispatch"],
    )
    @action(detail=True, methods=["post"], url_path="accept")
    def accept(self, request: Request, pk: str = None) -> Response:
        serializer = AcceptCallSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        call = DispatchWorkflowService.accept_call(
            pk, serializer.validated_data["unit_id"], serializer.get_actor(),
        )
        return Response(DispatchCallSerializer(call).data)

    @extend_schema(
        summary="Update call status",
        description="Only en_route and on_scene are accepted, and only once a unit holds the call.",
        request=CallStatusSerializer,
        responses={200: DispatchCallSerializer, 409: OpenApiResponse(description="CALL_CLOSED or CALL_UNASSIGNED.")},
        tags=["Dispatch"],
    )
    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request: Request, pk: str = None) -> Response:
        serializer = CallStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        call = DispatchWorkflowService.update_status(
            pk,
            serializer.validated_data["status"],
            serializer.get_actor(),
            note=serializer.validated_data.get("note"),
        )
        return Response(DispatchCallSerializer(call).data)

    @extend_schema(summary="Add a note", request=CallNoteSerializer, responses={200: DispatchCallSerializer}, tags=["Dispatch"])
    @action(detail=True, methods=["post"], url_path="notes")
    def add_note(self, request: Request, pk: str = None) -> Response:
        serializer = CallNoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        call = DispatchWorkflowService.add_note(
            pk, serializer.get_actor(), serializer.validated_data["note"],
        )
        return Response(DispatchCallSerializer(call).data)

    @extend_schema(
        summary="Close a call",
        description="Closes the call and writes a draft dispatch report from the closing text.",
        request=CloseCallSerializer,
        responses={200: DispatchCallSerializer},
        tags=["Dispatch"],
    )
    @action(detail=True, methods=["post"], url_path="close")
    def close(self, request: Request, pk: str = None) -> Response:
        serializer = CloseCallSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        call = DispatchWorkflowService.close_call(
            pk, serializer.get_actor(), serializer.validated_data["report"],
        )
        return Response(DispatchCallSerializer(call).data)
