"""Use case for authenticating a user."""

from sqlalchemy.orm import Session

from mindmend.domain.entities import User
from mindmend.infrastructure.repositories import UserRepository
from mindmend.infrastructure.security import verify_password


def authenticate_user(session: Session, email: str, password: str) -> User | None:
    """Return the user matching the credentials, or ``None``."""

    user = UserRepository(session).get_by_email(email)
    if user is None:
        return None
    if not verify_password(password, user.password):
        return None
    return user
