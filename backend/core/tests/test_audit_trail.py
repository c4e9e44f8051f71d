"""
Unit tests for ``core.domain.audit.AuditTrail``.
"""

from __future__ import annotations

from datetime import timedelta
from unittest import mock

from django.test import TestCase
from django.utils import timezone

from core.domain.actors import Actor
from core.domain.audit import AuditTrail
from core.models import AuditAction, EntityType


class TestAuditTrail(TestCase):

    def setUp(self):
        self.actor = Actor(cid=42, name="Tóth Péter")

    def test_sequence_is_gapless_per_aggregate(self):
        for _ in range(3):
            AuditTrail.append(EntityType.BOLO, "BOLO-A", self.actor, AuditAction.UPDATED)
        AuditTrail.append(EntityType.BOLO, "BOLO-B", self.actor, AuditAction.CREATED)

        seqs = list(AuditTrail.timeline(EntityType.BOLO, "BOLO-A").values_list("seq", flat=True))

        self.assertEqual(seqs, [3, 2, 1])
        self.assertEqual(AuditTrail.latest(EntityType.BOLO, "BOLO-B").seq, 1)

    def test_same_id_different_entity_types_are_separate(self):
        AuditTrail.append(EntityType.CASE, "X-1", self.actor, AuditAction.CREATED)
        event = AuditTrail.append(EntityType.CASE_REQUEST, "X-1", self.actor, AuditAction.CREATED)

        self.assertEqual(event.seq, 1)

    def test_timestamp_never_goes_backwards(self):
        first = AuditTrail.append(EntityType.CALL, "CALL-1", self.actor, AuditAction.CALL_RECEIVED)
        earlier = first.ts - timedelta(minutes=5)

        with mock.patch("core.domain.audit.timezone.now", return_value=earlier):
            second = AuditTrail.append(EntityType.CALL, "CALL-1", self.actor, AuditAction.NOTE, note="x")

        self.assertEqual(second.ts, first.ts)
        self.assertGreater(second.seq, first.seq)

    def test_details_drop_none_and_note_is_stripped(self):
        event = AuditTrail.append(
            EntityType.EVIDENCE, "EV-1", self.actor, AuditAction.TRANSFERRED,
            note="  átadva  ", holder="Labor", report_id=None,
        )

        self.assertEqual(event.note, "átadva")
        self.assertEqual(event.details, {"holder": "Labor"})
        self.assertEqual(event.actor_cid, 42)
        self.assertEqual(event.actor_name, "Tóth Péter")

    def test_system_actor(self):
        event = AuditTrail.append(EntityType.CALL, "CALL-2", Actor.system(), AuditAction.CALL_RECEIVED)

        self.assertEqual(event.actor_cid, 0)
        self.assertEqual(event.actor_name, "DISPATCH")
        self.assertLessEqual(event.ts, timezone.now())
