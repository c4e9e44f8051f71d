"""
core.domain.normalize — Input normalisation shared by the registries.

All helpers are pure: they take raw client input and return cleaned,
de-duplicated, order-preserving lists, raising ``DomainError`` for
values that are present but malformed.  Blank entries are dropped.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from core.constants import MAX_CID, MAX_LIST_ITEMS
from core.domain.exceptions import DomainError

PLATE_RE = re.compile(r"^[A-Z0-9][A-Z0-9 \-]{0,11}$")

INVOLVED_ROLES = ("suspect", "witness", "victim", "other")


def _as_list(values: Any) -> list:
    if values is None:
        return []
    if isinstance(values, (str, bytes)):
        return [values]
    return list(values)


def _dedupe(items: Iterable) -> list:
    seen = set()
    out = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def clean_text(value: Any) -> str:
    return str(value if value is not None else "").strip()


def normalize_strings(values: Any, limit: int = MAX_LIST_ITEMS) -> list[str]:
    """Strip, drop blanks, de-duplicate."""
    cleaned = [clean_text(v) for v in _as_list(values)]
    return _dedupe(v for v in cleaned if v)[:limit]


def normalize_tags(values: Any, catalog: Iterable[str], limit: int = MAX_LIST_ITEMS) -> list[str]:
    """
    Keep only tags present in ``catalog``.

    Unknown tags are dropped silently rather than rejected.
    """
    allowed = set(catalog)
    candidates = normalize_strings(values, limit=len(_as_list(values)))
    return [t for t in candidates if t in allowed][:limit]


def normalize_plate(value: Any) -> str:
    plate = clean_text(value).upper()
    if not PLATE_RE.match(plate):
        raise DomainError(f"Invalid licence plate: '{value}'.", code="INVALID_PLATE")
    return plate


def normalize_plates(values: Any, limit: int = MAX_LIST_ITEMS) -> list[str]:
    """Upper-case and validate plates, de-duplicated."""
    plates = [normalize_plate(v) for v in _as_list(values) if clean_text(v)]
    return _dedupe(plates)[:limit]


def normalize_cid(value: Any) -> int:
    try:
        cid = int(value)
    except (TypeError, ValueError):
        raise DomainError(f"Invalid cid: '{value}'.", code="INVALID_CID")
    if isinstance(value, float) and value != cid:
        raise DomainError(f"Invalid cid: '{value}'.", code="INVALID_CID")
    if cid <= 0:
        raise DomainError(f"cid must be a positive integer, got {cid}.", code="INVALID_CID")
    if cid > MAX_CID:
        raise DomainError(f"cid {cid} is out of range.", code="INVALID_CID")
    return cid


def normalize_cids(values: Any, limit: int = MAX_LIST_ITEMS) -> list[int]:
    cids = [normalize_cid(v) for v in _as_list(values) if clean_text(v)]
    return _dedupe(cids)[:limit]


def normalize_involved(values: Any, limit: int = MAX_LIST_ITEMS) -> list[dict[str, Any]]:
    """
    Validate ``[{cid, name, role}]`` entries and de-duplicate by cid.

    When the same cid appears twice the later entry wins but keeps the
    position of the first.  Unknown roles fall back to ``other``.
    """
    by_cid: dict[int, dict[str, Any]] = {}
    for raw in _as_list(values):
        if not isinstance(raw, dict):
            raise DomainError("Involved parties must be objects with cid, name and role.")
        cid = normalize_cid(raw.get("cid"))
        name = clean_text(raw.get("name"))
        if not name:
            raise DomainError(f"Involved party {cid} needs a name.")
        role = clean_text(raw.get("role")).lower()
        if role not in INVOLVED_ROLES:
            role = "other"
        by_cid[cid] = {"cid": cid, "name": name, "role": role}
    return list(by_cid.values())[:limit]


# ── Reference keys ──────────────────────────────────────────────────
# Records that mention people or vehicles store ``|cid:<n>|plate:<P>|``
# so exact lookups can use a plain ``contains`` query on any backend.

def cid_key(cid: int) -> str:
    return f"|cid:{cid}|"


def plate_key(plate: str) -> str:
    return f"|plate:{plate}|"


def build_ref_keys(cids: Iterable[int] = (), plates: Iterable[str] = ()) -> str:
    keys = [f"cid:{c}" for c in cids] + [f"plate:{p}" for p in plates]
    if not keys:
        return ""
    return "|" + "|".join(keys) + "|"
