"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from mindmend.domain.entities import User
from mindmend.infrastructure.models import UserModel
from mindmend.utils import from_utc_naive_datetime, to_utc_naive_datetime


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def exists(self, user_id: int) -> bool:
        return self.session.get(UserModel, user_id) is not None

    def create(self, user: User) -> User:
        model = UserModel(
            name=user.name,
            email=user.email.strip().lower(),
            password=user.password,
            role=user.role,
        )
        if user.created_at is not None:
            model.created_at = to_utc_naive_datetime(user.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            role=model.role,
            created_at=from_utc_naive_datetime(model.created_at),
        )


__all__ = ["UserRepository"]
