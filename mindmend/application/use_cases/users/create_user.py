"""Use case for registering users."""

from sqlalchemy.orm import Session

from mindmend.domain.entities import USER_ROLES, User
from mindmend.infrastructure.repositories import UserRepository
from mindmend.infrastructure.security import get_password_hash
from mindmend.utils import now_in_app_timezone


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str,
) -> User:
    """Create a patient or therapist account ensuring unique email addresses."""

    repository = UserRepository(session)

    normalized_email = email.strip().lower()
    if "@" not in normalized_email:
        raise ValueError("A valid email address is required")
    if repository.get_by_email(normalized_email):
        raise ValueError("Email is already registered")
    if role not in USER_ROLES:
        raise ValueError(f"Role must be one of: {', '.join(USER_ROLES)}")

    user = User(
        id=None,
        name=name.strip(),
        email=normalized_email,
        password=get_password_hash(password),
        role=role,
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
