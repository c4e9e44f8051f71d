"""
Integration tests for units: callsigns, membership capacity and moves.
"""

from __future__ import annotations

from unittest import mock

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.domain.actors import Actor
from core.domain.exceptions import CapacityError, Conflict, NotFound
from core.domain.transactions import lock_for_update, lock_many_for_update
from core.models import AuditAction, AuditEvent, EntityType
from units.models import Officer, Unit, UnitStatus
from units.services import OfficerRosterService, UnitRosterService

ACTOR = {"actor_cid": 101, "actor_name": "Kovács Béla"}


class TestUnitRosterApi(TestCase):

    @classmethod
    def setUpTestData(cls):
        for cid in range(101, 107):
            OfficerRosterService.register_officer(cid, f"Officer {cid}")

    def setUp(self):
        self.client = APIClient()

    def _request_unit(self, callsign: str, **extra):
        return self.client.post(
            reverse("unit-list"),
            {"callsign": callsign, **extra, **ACTOR},
            format="json",
        )

    def _add(self, unit_id: str, cid: int):
        return self.client.post(
            reverse("unit-add-member", kwargs={"pk": unit_id}),
            {"cid": cid, **ACTOR},
            format="json",
        )

    def test_request_unit_normalizes_callsign_and_default_label(self):
        response = self._request_unit("  a-01 ")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["callsign"], "A-01")
        self.assertEqual(response.data["label"], "A-01 / Egység")
        self.assertEqual(response.data["status"], UnitStatus.AVAILABLE)
        self.assertTrue(response.data["id"].startswith("UNIT-"))
        self.assertEqual(response.data["timeline"][0]["action"], AuditAction.CREATED)

    def test_duplicate_callsign_conflicts(self):
        self._request_unit("A-01")
        response = self._request_unit("a-01")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "CALLSIGN_TAKEN")

    def test_empty_callsign_rejected(self):
        response = self._request_unit("   ")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_fifth_member_is_rejected(self):
        unit_id = self._request_unit("A-01").data["id"]
        for cid in range(101, 105):
            self.assertEqual(self._add(unit_id, cid).status_code, status.HTTP_200_OK)

        response = self._add(unit_id, 105)

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "SQUAD_FULL")
        unit = self.client.get(reverse("unit-detail", kwargs={"pk": unit_id})).data
        self.assertEqual([m["cid"] for m in unit["members"]], [101, 102, 103, 104])
        self.assertIsNone(Officer.objects.get(pk=105).unit_id)

    def test_member_moves_between_units(self):
        first = self._request_unit("A-01").data["id"]
        second = self._request_unit("B-02").data["id"]
        self._add(first, 101)

        response = self._add(second, 101)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([m["cid"] for m in response.data["members"]], [101])
        first_unit = self.client.get(reverse("unit-detail", kwargs={"pk": first})).data
        self.assertEqual(first_unit["members"], [])
        self.assertEqual(first_unit["timeline"][0]["action"], AuditAction.MEMBER_REMOVED)

    def test_re_adding_existing_member_is_noop(self):
        unit_id = self._request_unit("A-01").data["id"]
        self._add(unit_id, 101)
        events_before = AuditEvent.objects.filter(entity_type=EntityType.UNIT, entity_id=unit_id).count()

        response = self._add(unit_id, 101)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([m["cid"] for m in response.data["members"]], [101])
        self.assertEqual(
            AuditEvent.objects.filter(entity_type=EntityType.UNIT, entity_id=unit_id).count(),
            events_before,
        )

    def test_unknown_unit_or_officer_is_404(self):
        unit_id = self._request_unit("A-01").data["id"]
        self.assertEqual(self._add("UNIT-MISSING", 101).status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self._add(unit_id, 999).status_code, status.HTTP_404_NOT_FOUND)

    def test_remove_member_and_set_status(self):
        unit_id = self._request_unit("A-01").data["id"]
        self._add(unit_id, 101)

        response = self.client.post(
            reverse("unit-remove-member", kwargs={"pk": unit_id}),
            {"cid": 101, **ACTOR},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["members"], [])

        response = self.client.post(
            reverse("unit-set-status", kwargs={"pk": unit_id}),
            {"status": "unavailable", **ACTOR},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], UnitStatus.UNAVAILABLE)

    def test_missing_actor_is_rejected(self):
        response = self.client.post(reverse("unit-list"), {"callsign": "A-01"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class TestOfficerRosterApi(TestCase):

    def setUp(self):
        self.client = APIClient()

    def test_register_then_toggle_duty(self):
        response = self.client.post(
            reverse("officer-list"),
            {"cid": 42, "name": "Nagy Anna"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["on_duty"])

        response = self.client.post(
            reverse("officer-set-duty", kwargs={"cid": 42}),
            {"on_duty": False},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["on_duty"])

    def test_register_refreshes_name(self):
        OfficerRosterService.register_officer(42, "Nagy Anna")
        OfficerRosterService.register_officer(42, "Nagy Anna Mária", on_duty=False)
        officer = Officer.objects.get(pk=42)
        self.assertEqual(officer.name, "Nagy Anna Mária")
        self.assertFalse(officer.on_duty)


class TestUnitRosterService(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.actor = Actor(cid=101, name="Kovács Béla")
        for cid in range(101, 106):
            OfficerRosterService.register_officer(cid, f"Officer {cid}")

    def test_capacity_follows_engine_setting(self):
        unit = UnitRosterService.request_unit("A-01", actor=self.actor)
        with self.settings(RECORDS_ENGINE={"MAX_SQUAD_MEMBERS": 2}):
            UnitRosterService.add_member(unit.pk, 101, self.actor)
            UnitRosterService.add_member(unit.pk, 102, self.actor)
            with self.assertRaises(CapacityError):
                UnitRosterService.add_member(unit.pk, 103, self.actor)

    def test_request_unit_defaults_to_system_actor(self):
        unit = UnitRosterService.request_unit("C-03")
        event = AuditEvent.objects.get(entity_type=EntityType.UNIT, entity_id=unit.pk)
        self.assertEqual(event.actor_cid, 0)
        self.assertEqual(event.actor_name, "DISPATCH")

    def test_capacity_error_is_a_conflict(self):
        self.assertTrue(issubclass(CapacityError, Conflict))

    def test_remove_non_member_is_not_found(self):
        unit = UnitRosterService.request_unit("D-04", actor=self.actor)
        with self.assertRaises(NotFound):
            UnitRosterService.remove_member(unit.pk, 101, self.actor)

    def test_membership_changes_lock_officer_before_unit(self):
        first = UnitRosterService.request_unit("E-05", actor=self.actor)
        second = UnitRosterService.request_unit("F-06", actor=self.actor)
        UnitRosterService.add_member(first.pk, 101, self.actor)

        locked = []

        def record_one(model, pk):
            locked.append(model)
            return lock_for_update(model, pk)

        def record_many(model, pks):
            locked.append(model)
            return lock_many_for_update(model, pks)

        with mock.patch("units.services.lock_for_update", side_effect=record_one), \
                mock.patch("units.services.lock_many_for_update", side_effect=record_many):
            UnitRosterService.add_member(second.pk, 101, self.actor)
            self.assertEqual(locked, [Officer, Unit])

            locked.clear()
            UnitRosterService.remove_member(second.pk, 101, self.actor)
            self.assertEqual(locked, [Officer, Unit])
