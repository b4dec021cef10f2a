"""Shared fixtures: a throwaway SQLite database and fresh connection channels."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "mindmend_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["REMINDER_INTERVAL_SECONDS"] = "0"
os.environ["APP_TIMEZONE"] = "UTC"

from mindmend.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from mindmend.domain.entities import User  # noqa: E402
from mindmend.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from mindmend.infrastructure.notifications import connection_registry  # noqa: E402
from mindmend.infrastructure.repositories import UserRepository  # noqa: E402
from mindmend.infrastructure.security import create_access_token  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure every test starts from empty tables and no live channels."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    connection_registry.clear()
    yield
    connection_registry.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def app_timezone(monkeypatch):
    """Switch ``APP_TIMEZONE`` for one test; call the fixture with a zone name."""

    def _switch(name: str) -> None:
        monkeypatch.setenv("APP_TIMEZONE", name)
        reset_settings_cache()

    yield _switch
    monkeypatch.undo()
    reset_settings_cache()


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


def create_test_user(*, name: str, email: str, role: str = "patient") -> User:
    """Insert a user directly; the stored password is not a usable hash."""

    with SessionLocal() as db:
        return UserRepository(db).create(
            User(
                id=None,
                name=name,
                email=email,
                password="not-a-real-hash",
                role=role,
                created_at=None,
            )
        )


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token({"sub": user.email, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def patient() -> User:
    return create_test_user(name="Pat Patient", email="patient@example.com")


@pytest.fixture()
def therapist() -> User:
    return create_test_user(
        name="Theo Therapist", email="therapist@example.com", role="therapist"
    )
