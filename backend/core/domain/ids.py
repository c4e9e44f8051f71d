"""
core.domain.ids — Opaque identifier generation.

Identifiers are ``<PREFIX>-<16 upper-case hex chars>`` built from a
random UUID, so they are globally unique and never reused.
"""

from __future__ import annotations

import uuid

UNIT = "UNIT"
CALL = "CALL"
REPORT = "RPT"
BOLO = "BOLO"
EVIDENCE = "EV"
CASE_REQUEST = "CRQ"
CASE = "CASE"


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:16].upper()}"
