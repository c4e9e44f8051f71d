"""
core.domain.actors — The acting officer passed into every mutating call.

Identity and sessions are resolved upstream; the engine only ever sees an
already-authenticated ``cid`` plus the display name to stamp into audit
timelines.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.constants import SYSTEM_ACTOR_CID, SYSTEM_ACTOR_NAME
from core.domain.exceptions import DomainError


@dataclass(frozen=True)
class Actor:
    cid: int
    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.cid, int) or isinstance(self.cid, bool) or self.cid < 0:
            raise DomainError("Actor cid must be a non-negative integer.")
        if not str(self.name or "").strip():
            raise DomainError("Actor name is required.")
        object.__setattr__(self, "name", str(self.name).strip())

    @property
    def is_system(self) -> bool:
        return self.cid == SYSTEM_ACTOR_CID

    @classmethod
    def system(cls) -> "Actor":
        return cls(cid=SYSTEM_ACTOR_CID, name=SYSTEM_ACTOR_NAME)
