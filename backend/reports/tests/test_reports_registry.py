"""
Integration tests for the report registry: creation rules, the
submission lock, free-text search and the tag catalog.
"""

from __future__ import annotations

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.models import AuditAction
from reports.models import Report, ReportStatus, ReportType
from reports.services import TagCatalogService

ACTOR = {"actor_cid": 101, "actor_name": "Kovács Béla"}


class TestReportRegistryApi(TestCase):

    def setUp(self):
        self.client = APIClient()

    def _create(self, **overrides):
        payload = {
            "type": ReportType.INCIDENT,
            "title": "Bolti lopás",
            "location": "Grove Street",
            "tags": ["Drog", "Ismeretlen", "Drog"],
            "involved": [
                {"cid": 7, "name": "John Doe", "role": "suspect"},
                {"cid": 8, "name": "Jane Roe", "role": "bystander"},
                {"cid": 7, "name": "John Q. Doe", "role": "witness"},
            ],
            "vehicles": ["abc 123", "ABC 123", "xyz-9"],
            "full_text": "<p>A gyanúsított elmenekült.</p>",
            **ACTOR,
        }
        payload.update(overrides)
        return self.client.post(reverse("report-list"), payload, format="json")

    def test_create_normalizes_fields(self):
        response = self._create()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        data = response.data
        self.assertTrue(data["id"].startswith("RPT-"))
        self.assertEqual(data["status"], ReportStatus.DRAFT)
        self.assertEqual(data["tags"], ["Drog"])
        self.assertEqual(
            data["involved"],
            [
                {"cid": 7, "name": "John Q. Doe", "role": "witness"},
                {"cid": 8, "name": "Jane Roe", "role": "other"},
            ],
        )
        self.assertEqual(data["vehicles"], ["ABC 123", "XYZ-9"])
        self.assertEqual(data["summary"], "A gyanúsított elmenekült.")
        self.assertEqual(len(data["timeline"]), 1)
        self.assertEqual(data["timeline"][0]["action"], AuditAction.CREATED)

    def test_create_defaults(self):
        response = self.client.post(
            reverse("report-list"),
            {"type": ReportType.OTHER, "title": "Jegyzet", **ACTOR},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["location"], "—")
        self.assertEqual(response.data["full_text"], "<p></p>")
        self.assertEqual(response.data["summary"], "")

    def test_create_rejects_bad_input(self):
        self.assertEqual(self._create(title="  ").status_code, status.HTTP_400_BAD_REQUEST)
        response = self._create(involved=[{"cid": 0, "name": "Nobody"}])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "INVALID_CID")
        response = self._create(vehicles=["!!!"])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "INVALID_PLATE")
        self.assertFalse(Report.objects.exists())

    def test_create_rejects_oversized_cids(self):
        response = self._create(actor_cid=10**30)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("actor_cid", response.data)

        response = self._create(involved=[{"cid": 10**30, "name": "John Doe"}])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "INVALID_CID")
        self.assertFalse(Report.objects.exists())

    def test_update_records_changes(self):
        report_id = self._create().data["id"]

        response = self.client.patch(
            reverse("report-detail", kwargs={"pk": report_id}),
            {"full_text": "<p>Hosszabb leírás.</p>", "tags": ["Fegyver"], **ACTOR},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["tags"], ["Fegyver"])
        self.assertEqual(response.data["vehicles"], ["ABC 123", "XYZ-9"])
        latest = response.data["timeline"][0]
        self.assertEqual(latest["action"], AuditAction.SAVED)
        self.assertEqual(latest["note"], "tagek, tartalom (32→23 karakter)")

    def test_update_without_changes_notes_dash(self):
        report_id = self._create().data["id"]
        response = self.client.patch(
            reverse("report-detail", kwargs={"pk": report_id}), ACTOR, format="json",
        )
        self.assertEqual(response.data["timeline"][0]["note"], "—")

    def test_submit_then_update_is_locked(self):
        report_id = self._create().data["id"]
        submit_url = reverse("report-submit", kwargs={"pk": report_id})

        response = self.client.post(submit_url, ACTOR, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], ReportStatus.SUBMITTED)
        self.assertIsNotNone(response.data["submitted_at"])
        self.assertEqual(response.data["timeline"][0]["action"], AuditAction.SUBMITTED)

        response = self.client.patch(
            reverse("report-detail", kwargs={"pk": report_id}),
            {"full_text": "<p>x</p>", **ACTOR},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "REPORT_LOCKED")
        self.assertEqual(Report.objects.get(pk=report_id).full_text, "<p>A gyanúsított elmenekült.</p>")

        response = self.client.post(submit_url, ACTOR, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "REPORT_LOCKED")

    def test_unknown_report_is_404(self):
        response = self.client.get(reverse("report-detail", kwargs={"pk": "RPT-MISSING"}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "NOT_FOUND")

    def test_list_search_and_filters(self):
        first = self._create().data["id"]
        self._create(title="Igazoltatás", type=ReportType.IDENTITY_CHECK, involved=[], vehicles=[], tags=["Igazoltatás"], full_text="<p>Rendben.</p>")

        def ids(**params):
            response = self.client.get(reverse("report-list"), params)
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            return [r["id"] for r in response.data]

        self.assertEqual(len(ids()), 2)
        self.assertEqual(ids(query="jane"), [first])
        self.assertEqual(ids(query="xyz"), [first])
        self.assertEqual(ids(query="elmenekült"), [first])
        self.assertEqual(ids(tag="Drog"), [first])
        self.assertEqual(len(ids(type=ReportType.IDENTITY_CHECK)), 1)
        self.assertEqual(len(ids(limit=1)), 1)


class TestTagCatalog(TestCase):

    def setUp(self):
        self.client = APIClient()

    def test_default_catalog_is_seeded(self):
        response = self.client.get(reverse("tag-catalog"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("Igazoltatás", response.data["tags"])
        self.assertIn("BOLO", response.data["tags"])

    def test_replace_catalog(self):
        response = self.client.put(
            reverse("tag-catalog"),
            {"tags": [" Dispatch ", "Drog", "Dispatch", ""]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["tags"], ["Dispatch", "Drog"])
        self.assertEqual(TagCatalogService.filter_tags(["Fegyver", "Dispatch"]), ["Dispatch"])

    def test_catalog_is_capped(self):
        tags = TagCatalogService.set_tag_catalog([f"tag-{i}" for i in range(100)])
        self.assertEqual(len(tags), 80)
