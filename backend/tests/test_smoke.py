"""
Smoke tests — verify that Django boots, URL routing resolves, the domain
exceptions map to the right HTTP statuses, and the shared helpers behave.

These tests require a DB only where marked; they do NOT require real
data — they just prove the plumbing works.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from django.urls import resolve, reverse


# ════════════════════════════════════════════════════════════════════
#  URL Routing Smoke Tests
# ════════════════════════════════════════════════════════════════════

class TestURLRouting:
    """Ensure every app's list route reverses and resolves."""

    EXPECTED_URLS = [
        # (url_name, expected_path)
        ("unit-list",          "/api/units/"),
        ("officer-list",       "/api/roster/"),
        ("call-list",          "/api/calls/"),
        ("report-list",        "/api/reports/"),
        ("tag-catalog",        "/api/tags/"),
        ("person-list",        "/api/persons/"),
        ("vehicle-list",       "/api/vehicles/"),
        ("bolo-list",          "/api/bolos/"),
        ("evidence-list",      "/api/evidence/"),
        ("case-request-list",  "/api/case-requests/"),
        ("case-list",          "/api/cases/"),
        ("schema",             "/api/schema/"),
    ]

    @pytest.mark.parametrize("url_name,expected_path", EXPECTED_URLS)
    def test_url_reverses(self, url_name: str, expected_path: str):
        assert reverse(url_name) == expected_path

    @pytest.mark.parametrize("url_name,expected_path", EXPECTED_URLS)
    def test_url_resolves_to_view(self, url_name: str, expected_path: str):
        match = resolve(expected_path)
        assert match.func is not None
        assert match.url_name == url_name

    def test_detail_actions_reverse(self):
        assert reverse("call-close", kwargs={"pk": "CALL-1"}) == "/api/calls/CALL-1/close/"
        assert reverse("evidence-chain-of-custody", kwargs={"pk": "EV-1"}) == (
            "/api/evidence/EV-1/chain-of-custody/"
        )
        assert reverse("case-request-approve", kwargs={"pk": "CRQ-1"}) == (
            "/api/case-requests/CRQ-1/approve/"
        )
        assert reverse("vehicle-detail", kwargs={"plate": "ABC 123"}) == "/api/vehicles/ABC%20123/"


# ════════════════════════════════════════════════════════════════════
#  Exception Behaviour Tests
# ════════════════════════════════════════════════════════════════════

class TestDomainExceptions:

    def test_hierarchy(self):
        from core.domain.exceptions import (
            CapacityError,
            Conflict,
            DomainError,
            InvalidTransition,
            NotFound,
        )
        assert issubclass(InvalidTransition, Conflict)
        assert issubclass(CapacityError, Conflict)
        assert issubclass(Conflict, DomainError)
        assert issubclass(NotFound, DomainError)

    def test_default_codes(self):
        from core.domain.exceptions import Conflict, DomainError, NotFound
        assert DomainError("x").code == "INVALID"
        assert NotFound("x").code == "NOT_FOUND"
        assert Conflict("x", code="SEALED").code == "SEALED"

    def test_invalid_transition_structured(self):
        from core.domain.exceptions import InvalidTransition
        err = InvalidTransition(current="closed", target="active", reason="terminal", code="BOLO_CLOSED")
        assert "closed" in str(err)
        assert "active" in str(err)
        assert "terminal" in str(err)
        assert err.code == "BOLO_CLOSED"

    def test_invalid_transition_plain_message(self):
        from core.domain.exceptions import InvalidTransition
        err = InvalidTransition("Cannot close call.")
        assert str(err) == "Cannot close call."


class TestExceptionHandler:

    @pytest.mark.parametrize("exc_path,status_code", [
        ("DomainError", 400),
        ("NotFound", 404),
        ("Conflict", 409),
        ("InvalidTransition", 409),
        ("CapacityError", 409),
    ])
    def test_status_mapping(self, exc_path: str, status_code: int):
        from core.domain import exceptions
        from core.domain.exception_handler import domain_exception_handler

        exc = getattr(exceptions, exc_path)("boom", code="X_CODE")
        response = domain_exception_handler(exc, {"view": MagicMock()})

        assert response.status_code == status_code
        assert response.data == {"detail": "boom", "code": "X_CODE"}

    def test_unknown_exception_propagates(self):
        from core.domain.exception_handler import domain_exception_handler
        assert domain_exception_handler(RuntimeError("boom"), {}) is None


# ════════════════════════════════════════════════════════════════════
#  Shared Helper Tests
# ════════════════════════════════════════════════════════════════════

class TestActors:

    def test_system_actor(self):
        from core.domain.actors import Actor
        system = Actor.system()
        assert system.cid == 0
        assert system.name == "DISPATCH"
        assert system.is_system

    def test_actor_requires_name(self):
        from core.domain.actors import Actor
        from core.domain.exceptions import DomainError
        with pytest.raises(DomainError):
            Actor(cid=5, name="  ")


class TestIds:

    def test_prefix_and_shape(self):
        from core.domain import ids
        value = ids.new_id(ids.EVIDENCE)
        prefix, _, suffix = value.partition("-")
        assert prefix == "EV"
        assert len(suffix) == 16
        assert suffix == suffix.upper()
        assert ids.new_id(ids.EVIDENCE) != value


@pytest.mark.django_db
class TestEngineSettings:

    def test_override(self, settings):
        from core.constants import engine_setting
        assert engine_setting("MAX_SQUAD_MEMBERS") == 4
        settings.RECORDS_ENGINE = {"MAX_SQUAD_MEMBERS": 6}
        assert engine_setting("MAX_SQUAD_MEMBERS") == 6
