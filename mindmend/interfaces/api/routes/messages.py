"""Direct chat message endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from mindmend.application.use_cases.messages import (
    MessagePermissionError,
    list_conversation,
    send_message,
    send_prescription,
)
from mindmend.domain.entities import User
from mindmend.infrastructure.database import get_db
from mindmend.interfaces.api.dependencies import get_current_user
from mindmend.interfaces.api.schemas import (
    ChatMessageCreate,
    ChatMessageRead,
    PrescriptionCreate,
)

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("/", response_model=ChatMessageRead, status_code=status.HTTP_201_CREATED)
def post_message(
    payload: ChatMessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ChatMessageRead:
    try:
        message = send_message(
            db,
            sender=current_user,
            recipient_id=payload.recipient_id,
            content=payload.content,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ChatMessageRead.model_validate(message)


@router.post(
    "/prescriptions", response_model=ChatMessageRead, status_code=status.HTTP_201_CREATED
)
def post_prescription(
    payload: PrescriptionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ChatMessageRead:
    """Send a prescription to a patient. Therapists only."""

    try:
        message = send_prescription(
            db,
            therapist=current_user,
            recipient_id=payload.recipient_id,
            prescription=payload.model_dump(exclude={"recipient_id"}),
        )
    except MessagePermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ChatMessageRead.model_validate(message)


@router.get("/{user_id}", response_model=list[ChatMessageRead])
def get_conversation(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ChatMessageRead]:
    """Return the messages exchanged with ``user_id``, oldest first."""

    messages = list_conversation(db, user=current_user, other_user_id=user_id)
    return [ChatMessageRead.model_validate(message) for message in messages]
