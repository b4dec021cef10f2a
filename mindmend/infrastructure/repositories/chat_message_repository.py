"""Persistence helpers for chat messages."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from mindmend.domain.entities import ChatMessage
from mindmend.infrastructure.models import ChatMessageModel
from mindmend.utils import from_utc_naive_datetime


class ChatMessageRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, message: ChatMessage) -> ChatMessage:
        model = ChatMessageModel(
            sender_id=message.sender_id,
            recipient_id=message.recipient_id,
            content=message.content,
            message_type=message.message_type,
            prescription=dict(message.prescription) if message.prescription else None,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_conversation(
        self, user_id: int, other_user_id: int, *, limit: int = 200
    ) -> Sequence[ChatMessage]:
        """Return the messages exchanged by both users, oldest first."""

        query = (
            self.session.query(ChatMessageModel)
            .filter(
                or_(
                    and_(
                        ChatMessageModel.sender_id == user_id,
                        ChatMessageModel.recipient_id == other_user_id,
                    ),
                    and_(
                        ChatMessageModel.sender_id == other_user_id,
                        ChatMessageModel.recipient_id == user_id,
                    ),
                )
            )
            .order_by(ChatMessageModel.created_at.desc(), ChatMessageModel.id.desc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in reversed(query.all())]

    @staticmethod
    def _to_entity(model: ChatMessageModel) -> ChatMessage:
        return ChatMessage(
            id=model.id,
            sender_id=model.sender_id,
            recipient_id=model.recipient_id,
            content=model.content,
            created_at=from_utc_naive_datetime(model.created_at),
            message_type=model.message_type,
            prescription=dict(model.prescription) if model.prescription else None,
        )


__all__ = ["ChatMessageRepository"]
