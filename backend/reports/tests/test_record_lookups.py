"""
Integration tests for the person and vehicle lookups over reports and BOLOs.
"""

from __future__ import annotations

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from bolos.services import BoloService
from core.domain.actors import Actor
from reports.services import ReportService


class TestRecordLookups(TestCase):

    @classmethod
    def setUpTestData(cls):
        actor = Actor(cid=101, name="Kovács Béla")
        cls.report = ReportService.create_report(
            report_type="incident",
            title="Garázdaság",
            involved=[
                {"cid": 7, "name": "John Doe", "role": "suspect"},
                {"cid": 17, "name": "Anna Smith", "role": "witness"},
            ],
            vehicles=["ABC 123"],
            actor=actor,
        )
        cls.bolo = BoloService.create_bolo(
            bolo_type="person",
            priority="high",
            title="Keresett személy",
            description="Utoljára a kikötőben látták.",
            people=[7, 99],
            vehicles=["ZZZ 999"],
            actor=actor,
        )

    def setUp(self):
        self.client = APIClient()

    def test_get_person_joins_reports_and_bolos(self):
        response = self.client.get(reverse("person-detail", kwargs={"cid": 7}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["name"], "John Doe")
        self.assertEqual([r["id"] for r in response.data["reports"]], [self.report.pk])
        self.assertEqual(response.data["reports"][0]["role"], "suspect")
        self.assertEqual([b["id"] for b in response.data["bolos"]], [self.bolo.pk])

    def test_person_known_only_from_bolo(self):
        response = self.client.get(reverse("person-detail", kwargs={"cid": 99}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["name"], "—")
        self.assertEqual(response.data["reports"], [])

    def test_unreferenced_person_is_404(self):
        response = self.client.get(reverse("person-detail", kwargs={"cid": 1}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_cid_lookup_is_exact(self):
        response = self.client.get(reverse("person-detail", kwargs={"cid": 1}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        response = self.client.get(reverse("person-detail", kwargs={"cid": 17}))
        self.assertEqual(response.data["name"], "Anna Smith")
        self.assertEqual(response.data["bolos"], [])

    def test_search_person(self):
        response = self.client.get(reverse("person-list"), {"query": "anna"})
        self.assertEqual([p["cid"] for p in response.data], [17])

        response = self.client.get(reverse("person-list"))
        people = {p["cid"]: p for p in response.data}
        self.assertEqual(set(people), {7, 17, 99})
        self.assertEqual((people[7]["report_count"], people[7]["bolo_count"]), (1, 1))

    def test_vehicle_lookups(self):
        response = self.client.get(reverse("vehicle-detail", kwargs={"plate": "abc 123"}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["plate"], "ABC 123")
        self.assertEqual([r["id"] for r in response.data["reports"]], [self.report.pk])

        response = self.client.get(reverse("vehicle-list"), {"query": "zzz"})
        self.assertEqual([v["plate"] for v in response.data], ["ZZZ 999"])

        response = self.client.get(reverse("vehicle-detail", kwargs={"plate": "NOPE 1"}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
