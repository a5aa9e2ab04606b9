"""Principal resolution for the requesting caller."""
from __future__ import annotations

from dataclasses import dataclass

from shutter_stage.models import User


@dataclass(frozen=True)
class Principal:
    """Identity of the caller as seen by listing and visibility rules."""

    id: int | None
    is_admin: bool = False

    @property
    def is_anonymous(self) -> bool:
        return self.id is None


ANONYMOUS_PRINCIPAL = Principal(id=None, is_admin=False)


def principal_for(user: User | None) -> Principal:
    """Build a principal from a user row, or the anonymous principal for None."""
    if user is None:
        return ANONYMOUS_PRINCIPAL
    return Principal(id=user.id, is_admin=bool(user.is_admin))
