"""
Core constants — **Single Source of Truth** for engine-wide magic numbers.

Any business rule that references a numeric limit or a default label
should import it from here instead of hardcoding.  Deployments can
override individual values through the ``RECORDS_ENGINE`` settings dict;
read them with :func:`engine_setting`.
"""

from typing import Any

from django.conf import settings

# ── Identities ──────────────────────────────────────────────────────
# cids live in positive integer columns.
MAX_CID: int = 2**31 - 1

# ── Unit roster ─────────────────────────────────────────────────────
MAX_SQUAD_MEMBERS: int = 4

# ── Dispatch ────────────────────────────────────────────────────────
DISPATCH_FEED_LIMIT: int = 80
SYSTEM_ACTOR_CID: int = 0
SYSTEM_ACTOR_NAME: str = "DISPATCH"
TEST_DISPATCH_DEFAULTS: dict[str, str] = {
    "code": "10-38",
    "title": "Teszt riasztás",
    "location": "Vinewood Blvd",
}

# ── Reports ─────────────────────────────────────────────────────────
REPORT_LIST_LIMIT: int = 200
REPORT_SUMMARY_LENGTH: int = 160
MAX_LIST_ITEMS: int = 30          # tags / involved / vehicles / people per record
MAX_TAG_CATALOG_SIZE: int = 80
DEFAULT_TAG_CATALOG: tuple[str, ...] = (
    "Igazoltatás",
    "Közlekedés",
    "Fegyver",
    "Drog",
    "Erőszak",
    "Kiemelt",
    "Tanú",
    "BOLO",
)
DEFAULT_LOCATION: str = "—"
LOOKUP_LIMIT: int = 25
UNKNOWN_PERSON_NAME: str = "—"

# ── BOLO ────────────────────────────────────────────────────────────
BOLO_LIST_LIMIT: int = 200
MAX_BOLO_EXPIRY_MINUTES: int = 60 * 24 * 365

# ── Evidence ────────────────────────────────────────────────────────
DEFAULT_EVIDENCE_HOLDER: str = "Rendőrség"

# ── Case intake ─────────────────────────────────────────────────────
# Case numbers look like ``HPX-2025-000001``.
CASE_NUMBER_PREFIX: str = "HPX"
CASE_NUMBER_WIDTH: int = 6


def engine_setting(name: str) -> Any:
    """
    Return ``settings.RECORDS_ENGINE[name]`` if configured, otherwise
    the module-level default of the same name.
    """
    overrides = getattr(settings, "RECORDS_ENGINE", {}) or {}
    if name in overrides:
        return overrides[name]
    return globals()[name]
