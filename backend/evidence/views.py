"""
Evidence app ViewSets.

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
    ChainOfCustodyEntrySerializer,
    EvidenceActionSerializer,
    EvidenceCreateSerializer,
    EvidenceDetailSerializer,
    EvidenceFilterSerializer,
    EvidenceListSerializer,
    EvidenceNoteSerializer,
    EvidenceTagsSerializer,
    EvidenceTransferSerializer,
    LinkReportSerializer,
)
from .services import ChainOfCustodyService, EvidenceLedgerService, EvidenceQueryService

_SEALED = OpenApiResponse(description="SEALED: the item is sealed.")


class EvidenceViewSet(viewsets.ViewSet):
    """
    Evidence ledger.

    Uses ``viewsets.ViewSet`` (not ``ModelViewSet``) so every action is
    explicitly defined; there is no update or delete, only the custody
    actions below.
    """

    @extend_schema(
        summary="List evidence",
        parameters=[
            OpenApiParameter(name="query", type=str, location=OpenApiParameter.QUERY, description="Search id, label, description, holder, report."),
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, description="open or sealed."),
            OpenApiParameter(name="type", type=str, location=OpenApiParameter.QUERY, description="Evidence type."),
            OpenApiParameter(name="report_id", type=str, location=OpenApiParameter.QUERY, description="Linked report."),
            OpenApiParameter(name="case_id", type=str, location=OpenApiParameter.QUERY, description="Linked case."),
        ],
        responses={200: EvidenceListSerializer(many=True)},
        tags=["Evidence"],
    )
    def list(self, request: Request) -> Response:
        filters = EvidenceFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        qs = EvidenceQueryService.get_filtered_queryset(filters.validated_data)
        return Response(EvidenceListSerializer(qs, many=True).data)

    @extend_schema(
        summary="Register evidence",
        request=EvidenceCreateSerializer,
        responses={201: EvidenceDetailSerializer, 404: OpenApiResponse(description="Unknown report or case.")},
        tags=["Evidence"],
    )
    def create(self, request: Request) -> Response:
        serializer = EvidenceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        item = EvidenceLedgerService.create_evidence(
            label=data["label"],
            holder=data.get("holder"),
            report_id=data.get("report_id"),
            case_id=data.get("case_id"),
            evidence_type=data.get("type"),
            description=data.get("description"),
            tags=data.get("tags"),
            actor=serializer.get_actor(),
        )
        return Response(EvidenceDetailSerializer(item).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Retrieve evidence", responses={200: EvidenceDetailSerializer}, tags=["Evidence"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        item = EvidenceQueryService.get_evidence_detail(pk)
        return Response(EvidenceDetailSerializer(item).data)

    @extend_schema(summary="Add a note", request=EvidenceNoteSerializer, responses={200: EvidenceDetailSerializer}, tags=["Evidence"])
    @action(detail=True, methods=["post"], url_path="notes")
    def add_note(self, request: Request, pk: str = None) -> Response:
        serializer = EvidenceNoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = EvidenceLedgerService.add_note(pk, serializer.validated_data["note"], serializer.get_actor())
        return Response(EvidenceDetailSerializer(item).data)

    @extend_schema(
        summary="Transfer custody",
        request=EvidenceTransferSerializer,
        responses={200: EvidenceDetailSerializer, 409: _SEALED},
        tags=["Evidence"],
    )
    @action(detail=True, methods=["post"], url_path="transfer")
    def transfer(self, request: Request, pk: str = None) -> Response:
        serializer = EvidenceTransferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = EvidenceLedgerService.transfer_holder(
            pk,
            serializer.validated_data["holder"],
            serializer.get_actor(),
            note=serializer.validated_data.get("note"),
        )
        return Response(EvidenceDetailSerializer(item).data)

    @extend_schema(summary="Seal", request=EvidenceActionSerializer, responses={200: EvidenceDetailSerializer, 409: _SEALED}, tags=["Evidence"])
    @action(detail=True, methods=["post"], url_path="seal")
    def seal(self, request: Request, pk: str = None) -> Response:
        serializer = EvidenceActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = EvidenceLedgerService.seal(pk, serializer.get_actor())
        return Response(EvidenceDetailSerializer(item).data)

    @extend_schema(
        summary="Link to a report",
        request=LinkReportSerializer,
        responses={200: EvidenceDetailSerializer, 404: OpenApiResponse(description="Unknown report."), 409: _SEALED},
        tags=["Evidence"],
    )
    @action(detail=True, methods=["post"], url_path="link-report")
    def link_report(self, request: Request, pk: str = None) -> Response:
        serializer = LinkReportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = EvidenceLedgerService.link_to_report(
            pk, serializer.validated_data["report_id"], serializer.get_actor(),
        )
        return Response(EvidenceDetailSerializer(item).data)

    @extend_schema(
        summary="Unlink from its report",
        request=EvidenceActionSerializer,
        responses={200: EvidenceDetailSerializer, 409: OpenApiResponse(description="SEALED or NOT_LINKED.")},
        tags=["Evidence"],
    )
    @action(detail=True, methods=["post"], url_path="unlink-report")
    def unlink_report(self, request: Request, pk: str = None) -> Response:
        serializer = EvidenceActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = EvidenceLedgerService.unlink_from_report(pk, serializer.get_actor())
        return Response(EvidenceDetailSerializer(item).data)

    @extend_schema(summary="Replace tags", request=EvidenceTagsSerializer, responses={200: EvidenceDetailSerializer, 409: _SEALED}, tags=["Evidence"])
    @action(detail=True, methods=["post"], url_path="tags")
    def set_tags(self, request: Request, pk: str = None) -> Response:
        serializer = EvidenceTagsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = EvidenceLedgerService.set_tags(pk, serializer.validated_data["tags"], serializer.get_actor())
        return Response(EvidenceDetailSerializer(item).data)

    @extend_schema(
        summary="Chain of custody",
        description="Every event on the item, oldest first, with the holder in effect after it.",
        responses={200: ChainOfCustodyEntrySerializer(many=True)},
        tags=["Evidence"],
    )
    @action(detail=True, methods=["get"], url_path="chain-of-custody")
    def chain_of_custody(self, request: Request, pk: str = None) -> Response:
        item = EvidenceQueryService.get_evidence_detail(pk)
        trail = ChainOfCustodyService.get_custody_trail(item)
        return Response(ChainOfCustodyEntrySerializer(trail, many=True).data)
