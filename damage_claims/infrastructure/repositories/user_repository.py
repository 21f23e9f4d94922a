"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from damage_claims.domain.entities import User, UserRole
from damage_claims.infrastructure.models import UserModel


class UserRepository:
    """Provide read access to user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_active_by_roles(self, roles: Iterable[UserRole]) -> Sequence[User]:
        """Return active users holding any of ``roles``, queried fresh every call."""

        wanted = list({UserRole(role) for role in roles})
        if not wanted:
            return []
        query = (
            self.session.query(UserModel)
            .filter(UserModel.is_active.is_(True))
            .filter(UserModel.role.in_(wanted))
            .order_by(UserModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=UserRole(model.role),
            phone=model.phone,
            is_active=model.is_active,
        )


__all__ = ["UserRepository"]
