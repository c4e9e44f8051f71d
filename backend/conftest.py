"""
Root conftest.py — shared fixtures for the entire test suite.

Provides:
  - ``api_client`` fixture returning a DRF ``APIClient``.
  - ``actor`` / ``actor_payload`` for the acting officer.
  - ``create_officer`` and ``create_unit`` factory fixtures.
"""

from __future__ import annotations

import pytest
from rest_framework.test import APIClient

from core.domain.actors import Actor


@pytest.fixture()
def api_client() -> APIClient:
    """DRF test client.  Identity travels in the payload, not in headers."""
    return APIClient()


@pytest.fixture()
def actor() -> Actor:
    return Actor(cid=101, name="Kovács Béla")


@pytest.fixture()
def actor_payload(actor) -> dict:
    """
    The actor fields every mutating request carries.

    Usage::

        api_client.post(url, {"note": "…", **actor_payload}, format="json")
    """
    return {"actor_cid": actor.cid, "actor_name": actor.name}


@pytest.fixture()
def create_officer(db):
    """
    Factory fixture that registers an officer on the roster.

    Usage::

        def test_something(create_officer):
            officer = create_officer()            # cid 1001, 1002 …
            officer = create_officer(cid=7, name="Szabó Gergő")
    """
    from units.services import OfficerRosterService

    _counter = 1000

    def _factory(*, cid: int | None = None, name: str | None = None, on_duty: bool = True):
        nonlocal _counter
        _counter += 1
        if cid is None:
            cid = _counter
        if name is None:
            name = f"Járőr {cid}"
        return OfficerRosterService.register_officer(cid, name, on_duty=on_duty)

    return _factory


@pytest.fixture()
def create_unit(db):
    """
    Factory fixture that opens a unit under a fresh callsign.

    Usage::

        unit = create_unit()                # A-01, A-02 …
        unit = create_unit(callsign="K-9")
    """
    from units.services import UnitRosterService

    _counter = 0

    def _factory(*, callsign: str | None = None, label: str | None = None):
        nonlocal _counter
        _counter += 1
        if callsign is None:
            callsign = f"A-{_counter:02d}"
        return UnitRosterService.request_unit(callsign, label=label)

    return _factory
