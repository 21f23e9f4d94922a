"""Domain entity representing a user."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    """Roles a user can hold inside the claims workflow."""

    ADMIN = "ADMIN"
    CLAIM_TEAM = "CLAIM_TEAM"
    CLEANER = "CLEANER"


CLAIM_RECIPIENT_ROLES: frozenset[UserRole] = frozenset(
    {UserRole.CLAIM_TEAM, UserRole.ADMIN}
)


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    role: UserRole
    phone: str | None = None
    is_active: bool = True


__all__ = ["CLAIM_RECIPIENT_ROLES", "User", "UserRole"]
