"""
core.domain — Shared domain utilities for cross-app service layers.

Modules
-------
exceptions         Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler  DRF handler rendering domain exceptions as ``{detail, code}``.
transactions       Helpers for ``transaction.atomic`` + ``select_for_update``.
audit              Append-only per-aggregate timelines (``AuditTrail``).
actors             The acting officer (``Actor``) stamped into every event.
ids                Opaque identifier generation.
normalize          Cleaning of tags, plates, cids and involved parties.

Usage from any app::

    from core.domain.exceptions import DomainError, Conflict, NotFound
    from core.domain.transactions import lock_for_update
    from core.domain.audit import AuditTrail
    from core.domain.actors import Actor
"""
