"""
core.domain.exceptions — Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service layers.
They are deliberately **not** DRF exceptions so that the domain layer stays
framework-agnostic.  ``core.domain.exception_handler`` maps them to HTTP
responses at the API boundary.

Mapping cheatsheet
------------------
┌─────────────────────┬──────────────────────────────┬──────┐
│ Domain Exception    │ Meaning                      │ Code │
├─────────────────────┼──────────────────────────────┼──────┤
│ DomainError         │ missing / malformed input    │ 400  │
│ NotFound            │ unknown aggregate id         │ 404  │
│ Conflict            │ lifecycle invariant violated │ 409  │
│ InvalidTransition   │ illegal status change        │ 409  │
│ CapacityError       │ bounded collection is full   │ 409  │
└─────────────────────┴──────────────────────────────┴──────┘

Every ``Conflict`` carries a machine-readable ``code`` (``REPORT_LOCKED``,
``SEALED``, ``CALL_CLOSED`` …) so clients can branch on the failure kind
without parsing the message.

Recommended usage inside a service::

    from core.domain.exceptions import Conflict

    if report.is_locked:
        raise Conflict("Report has been submitted.", code="REPORT_LOCKED")
"""

from __future__ import annotations


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    Raised directly for input validation failures (empty title, non-positive
    cid, malformed plate).  Validation always happens before any mutation,
    so a ``DomainError`` never leaves partial state behind.
    """

    default_code = "INVALID"

    def __init__(
        self,
        message: str = "A business rule was violated.",
        *,
        code: str | None = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)


class NotFound(DomainError):
    """The referenced aggregate id does not exist.  Maps to HTTP 404."""

    default_code = "NOT_FOUND"

    def __init__(
        self,
        message: str = "The requested resource was not found.",
        *,
        code: str | None = None,
    ) -> None:
        super().__init__(message, code=code)


class Conflict(DomainError):
    """
    The operation conflicts with the current state of the resource.

    Typical usage: editing a submitted report, transferring sealed
    evidence, deciding an already decided request, duplicate callsign.
    Maps to HTTP 409.
    """

    default_code = "CONFLICT"

    def __init__(
        self,
        message: str = "The operation conflicts with the current state.",
        *,
        code: str | None = None,
    ) -> None:
        super().__init__(message, code=code)


class InvalidTransition(Conflict):
    """
    A state-machine transition that is not allowed from the current status.

    Example::

        raise InvalidTransition(
            current="closed",
            target="active",
            reason="A closed BOLO cannot be reopened.",
            code="BOLO_CLOSED",
        )
    """

    default_code = "INVALID_TRANSITION"

    def __init__(
        self,
        message: str | None = None,
        *,
        current: str | None = None,
        target: str | None = None,
        reason: str | None = None,
        code: str | None = None,
    ) -> None:
        if message is None:
            parts = ["Invalid state transition"]
            if current and target:
                parts.append(f"from '{current}' to '{target}'")
            if reason:
                parts.append(f"({reason})")
            message = " ".join(parts) + "."
        super().__init__(message, code=code)
        self.current = current
        self.target = target
        self.reason = reason


class CapacityError(Conflict):
    """A capacity-bounded collection (e.g. a squad) is already full."""

    default_code = "CAPACITY_EXCEEDED"
