"""
Integration tests for the dispatch call state machine and call closure.
"""

from __future__ import annotations

from unittest import mock

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.domain.actors import Actor
from core.domain.exceptions import DomainError
from core.models import AuditAction
from dispatch.models import CallStatus, DispatchCall
from dispatch.services import DispatchQueryService, DispatchWorkflowService
from reports.models import Report, ReportStatus, ReportType
from units.services import UnitRosterService

ACTOR = {"actor_cid": 101, "actor_name": "Kovács Béla"}


class TestDispatchWorkflowApi(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.unit = UnitRosterService.request_unit("A-01")
        cls.other_unit = UnitRosterService.request_unit("B-02")

    def setUp(self):
        self.client = APIClient()

    def _seed(self, **payload):
        response = self.client.post(reverse("call-test-dispatch"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response.data

    def _post(self, name: str, call_id: str, payload: dict):
        return self.client.post(
            reverse(name, kwargs={"pk": call_id}), {**payload, **ACTOR}, format="json",
        )

    def _accept(self, call_id: str, unit_id: str | None = None):
        return self._post("call-accept", call_id, {"unit_id": unit_id or self.unit.pk})

    def test_seed_uses_defaults_and_system_actor(self):
        call = self._seed()
        self.assertEqual(call["code"], "10-38")
        self.assertEqual(call["title"], "Teszt riasztás")
        self.assertEqual(call["location"], "Vinewood Blvd")
        self.assertEqual(call["status"], CallStatus.NEW)
        self.assertIsNone(call["assigned_unit_id"])
        event = call["timeline"][0]
        self.assertEqual(event["action"], AuditAction.CALL_RECEIVED)
        self.assertEqual((event["cid"], event["name"]), (0, "DISPATCH"))

    def test_accept_assigns_unit(self):
        call = self._seed()
        response = self._accept(call["id"])
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], CallStatus.ACCEPTED)
        self.assertEqual(response.data["assigned_unit_id"], self.unit.pk)
        self.assertEqual(response.data["timeline"][0]["action"], AuditAction.CALL_ACCEPTED)
        self.assertEqual(response.data["timeline"][0]["note"], "A-01")

    def test_second_accept_conflicts(self):
        call = self._seed()
        self._accept(call["id"])
        response = self._accept(call["id"], self.other_unit.pk)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "CALL_ASSIGNED")
        self.assertEqual(DispatchCall.objects.get(pk=call["id"]).assigned_unit_id, self.unit.pk)

    def test_accept_unknown_unit_is_404(self):
        call = self._seed()
        response = self._accept(call["id"], "UNIT-MISSING")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_status_requires_assignment(self):
        call = self._seed()
        response = self._post("call-update-status", call["id"], {"status": "en_route"})
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "CALL_UNASSIGNED")

    def test_status_moves_between_field_statuses(self):
        call = self._seed()
        self._accept(call["id"])
        response = self._post("call-update-status", call["id"], {"status": "on_scene", "note": "Megérkeztünk"})
        self.assertEqual(response.data["status"], CallStatus.ON_SCENE)
        response = self._post("call-update-status", call["id"], {"status": "en_route"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], CallStatus.EN_ROUTE)
        self.assertEqual(response.data["timeline"][0]["details"]["status"], "en_route")

    def test_status_rejects_non_field_targets(self):
        call = self._seed()
        self._accept(call["id"])
        for target in ("closed", "accepted", "new"):
            response = self._post("call-update-status", call["id"], {"status": target})
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, target)

    def test_empty_note_rejected(self):
        call = self._seed()
        response = self._post("call-add-note", call["id"], {"note": "   "})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_close_creates_draft_report(self):
        call = self._seed()
        self._accept(call["id"])

        response = self._post("call-close", call["id"], {"report": "Rendben.\nNincs <b>sérült</b>."})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], CallStatus.CLOSED)
        self.assertEqual(response.data["timeline"][0]["action"], AuditAction.CLOSED)
        report = Report.objects.get(pk=response.data["report_id"])
        self.assertEqual(report.status, ReportStatus.DRAFT)
        self.assertEqual(report.report_type, ReportType.DISPATCH)
        self.assertEqual(report.title, "10-38 • Teszt riasztás")
        self.assertEqual(report.location, "Vinewood Blvd")
        self.assertEqual(report.full_text, "<p>Rendben.<br/>Nincs &lt;b&gt;sérült&lt;/b&gt;.</p>")
        self.assertEqual(response.data["report_summary"], report.summary)

    def test_closed_call_rejects_everything(self):
        call = self._seed()
        self._accept(call["id"])
        self._post("call-close", call["id"], {"report": "Kész."})

        for name, payload in (
            ("call-close", {"report": "Még egyszer."}),
            ("call-update-status", {"status": "en_route"}),
            ("call-add-note", {"note": "Utólag"}),
            ("call-accept", {"unit_id": self.other_unit.pk}),
        ):
            response = self._post(name, call["id"], payload)
            self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, name)
            self.assertEqual(response.data["code"], "CALL_CLOSED", name)
        self.assertEqual(Report.objects.count(), 1)

    def test_close_unassigned_call_is_rejected(self):
        call = self._seed()
        response = self._post("call-close", call["id"], {"report": "Kész."})
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "CALL_UNASSIGNED")
        self.assertFalse(Report.objects.exists())

    def test_feed_is_newest_first_and_limited(self):
        first = self._seed(code="10-10")["id"]
        second = self._seed(code="10-20")["id"]
        response = self.client.get(reverse("call-list"), {"limit": 1})
        self.assertEqual([c["id"] for c in response.data], [second])
        response = self.client.get(reverse("call-list"))
        self.assertEqual([c["id"] for c in response.data], [second, first])


class TestDispatchCloseAtomicity(TestCase):

    def test_failed_report_leaves_call_open(self):
        actor = Actor(cid=101, name="Kovács Béla")
        unit = UnitRosterService.request_unit("A-01")
        call = DispatchWorkflowService.test_dispatch()
        DispatchWorkflowService.accept_call(call.pk, unit.pk, actor)

        with mock.patch(
            "dispatch.services.ReportService.create_dispatch_draft",
            side_effect=DomainError("boom"),
        ):
            with self.assertRaises(DomainError):
                DispatchWorkflowService.close_call(call.pk, actor, "Kész.")

        call = DispatchQueryService.get_call(call.pk)
        self.assertEqual(call.status, CallStatus.ACCEPTED)
        self.assertIsNone(call.report_id)
