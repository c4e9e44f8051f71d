"""
End-to-end workflow scenarios across apps, driven through the HTTP API.

Test map
--------
  1  A-01 capacity: a fifth officer cannot join a full squad
  2  10-38 close: closing an accepted call writes a draft dispatch report
  3  Submit then update: a submitted report is locked
  4  Seal then transfer: a sealed exhibit keeps its holder
  5  Approve twice: only one case is ever opened per request
"""

from __future__ import annotations

import pytest
from django.urls import reverse

from cases.models import Case
from core.models import AuditAction
from units.models import Officer


@pytest.mark.django_db
class TestSquadCapacity:

    def test_fifth_member_is_rejected(self, api_client, actor_payload, create_officer, create_unit):
        unit = create_unit(callsign="A-01")
        officers = [create_officer() for _ in range(5)]
        url = reverse("unit-add-member", kwargs={"pk": unit.pk})

        for officer in officers[:4]:
            response = api_client.post(url, {"cid": officer.cid, **actor_payload}, format="json")
            assert response.status_code == 200, response.data

        response = api_client.post(url, {"cid": officers[4].cid, **actor_payload}, format="json")

        assert response.status_code == 409
        assert response.data["code"] == "SQUAD_FULL"
        assert Officer.objects.filter(unit_id=unit.pk).count() == 4
        assert Officer.objects.get(pk=officers[4].cid).unit_id is None

    def test_officer_moves_between_units(self, api_client, actor_payload, create_officer, create_unit):
        first, second = create_unit(), create_unit()
        officer = create_officer()

        api_client.post(reverse("unit-add-member", kwargs={"pk": first.pk}), {"cid": officer.cid, **actor_payload}, format="json")
        response = api_client.post(reverse("unit-add-member", kwargs={"pk": second.pk}), {"cid": officer.cid, **actor_payload}, format="json")

        assert [m["cid"] for m in response.data["members"]] == [officer.cid]
        first_detail = api_client.get(reverse("unit-detail", kwargs={"pk": first.pk})).data
        assert first_detail["members"] == []
        assert first_detail["timeline"][0]["action"] == AuditAction.MEMBER_REMOVED


@pytest.mark.django_db
class TestCallClosure:

    def test_close_writes_draft_report(self, api_client, actor_payload, create_unit):
        unit = create_unit()
        call = api_client.post(reverse("call-test-dispatch"), {}, format="json").data
        assert call["code"] == "10-38"

        api_client.post(
            reverse("call-accept", kwargs={"pk": call["id"]}),
            {"unit_id": unit.pk, **actor_payload},
            format="json",
        )
        response = api_client.post(
            reverse("call-close", kwargs={"pk": call["id"]}),
            {"report": "Gyanús személy\nelhagyta a helyszínt.", **actor_payload},
            format="json",
        )

        assert response.status_code == 200, response.data
        closed = response.data
        assert closed["status"] == "closed"
        assert closed["report_id"]
        assert closed["timeline"][0]["action"] == AuditAction.CLOSED

        report = api_client.get(reverse("report-detail", kwargs={"pk": closed["report_id"]})).data
        assert report["type"] == "dispatch"
        assert report["status"] == "draft"
        assert "10-38" in report["title"]
        assert "<br/>" in report["full_text"]

        response = api_client.post(
            reverse("call-close", kwargs={"pk": call["id"]}),
            {"report": "Még egyszer", **actor_payload},
            format="json",
        )
        assert response.status_code == 409
        assert response.data["code"] == "CALL_CLOSED"


@pytest.mark.django_db
class TestReportLock:

    def test_submit_then_update(self, api_client, actor_payload):
        report = api_client.post(
            reverse("report-list"),
            {"type": "incident", "title": "Verekedés", "full_text": "<p>Két fél.</p>", "tags": ["Erőszak"], **actor_payload},
            format="json",
        ).data
        detail_url = reverse("report-detail", kwargs={"pk": report["id"]})

        response = api_client.post(reverse("report-submit", kwargs={"pk": report["id"]}), actor_payload, format="json")
        assert response.status_code == 200
        assert response.data["status"] == "submitted"

        response = api_client.patch(detail_url, {"full_text": "<p>Átírva.</p>", "tags": ["Drog"], **actor_payload}, format="json")
        assert response.status_code == 409
        assert response.data["code"] == "REPORT_LOCKED"
        after = api_client.get(detail_url).data
        assert after["full_text"] == "<p>Két fél.</p>"
        assert after["tags"] == ["Erőszak"]


@pytest.mark.django_db
class TestEvidenceSeal:

    def test_seal_then_transfer(self, api_client, actor_payload):
        item = api_client.post(
            reverse("evidence-list"), {"label": "Telefon", **actor_payload}, format="json",
        ).data

        api_client.post(reverse("evidence-seal", kwargs={"pk": item["id"]}), actor_payload, format="json")
        response = api_client.post(
            reverse("evidence-transfer", kwargs={"pk": item["id"]}),
            {"holder": "Labor", **actor_payload},
            format="json",
        )

        assert response.status_code == 409
        assert response.data["code"] == "SEALED"
        detail = api_client.get(reverse("evidence-detail", kwargs={"pk": item["id"]})).data
        assert detail["holder"] == "Rendőrség"
        assert [e["action"] for e in detail["events"]] == [AuditAction.SEALED, AuditAction.CREATED]


@pytest.mark.django_db
class TestCaseApproval:

    def test_approve_twice(self, api_client, actor_payload):
        case_request = api_client.post(
            reverse("case-request-list"), {"report_id": "RPT-77", **actor_payload}, format="json",
        ).data
        url = reverse("case-request-approve", kwargs={"pk": case_request["id"]})

        first = api_client.post(url, actor_payload, format="json")
        second = api_client.post(url, actor_payload, format="json")

        assert first.status_code == 200
        assert second.status_code == 409
        assert second.data["code"] == "REQUEST_DECIDED"
        assert Case.objects.count() == 1
        case = Case.objects.get()
        assert case.linked_report_ids == ["RPT-77"]
        assert first.data["request"]["case_id"] == case.pk
