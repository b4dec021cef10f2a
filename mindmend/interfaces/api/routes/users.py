"""User registration and profile endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from mindmend.application.use_cases.users import create_user
from mindmend.domain.entities import User
from mindmend.infrastructure.database import get_db
from mindmend.interfaces.api.dependencies import get_current_user
from mindmend.interfaces.api.schemas import UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


def _user_to_schema(user: User) -> UserRead:
    return UserRead(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
    )


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(payload: UserCreate, db: Session = Depends(get_db)) -> UserRead:
    try:
        user = create_user(
            db,
            name=payload.name,
            email=payload.email,
            password=payload.password,
            role=payload.role,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _user_to_schema(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return _user_to_schema(current_user)
