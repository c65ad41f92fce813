"""Persistence-facing conversation operations."""
from typing import List

import structlog
from sqlalchemy.exc import SQLAlchemyError

from api.features.messages.models import ConversationSummary, MessageModel
from api.features.messages.projection import group_conversations
from api.features.messages.repository import MessageRepository
from api.shared.exceptions import PersistenceError
from infra.resources import DatabaseResource

logger = structlog.get_logger("messaging.messages.store")


class ConversationStore:
    """Lists a user's conversations and appends new messages."""

    def __init__(self, database: DatabaseResource):
        self.database = database

    async def list_conversations(self, user_id: str) -> List[ConversationSummary]:
        """One summary per counterpart, most recent conversation first."""
        try:
            async with self.database.get_session() as session:
                entities = await MessageRepository(session).latest_per_counterpart(user_id)
                messages = [MessageModel.from_entity(e) for e in entities]
        except SQLAlchemyError as e:
            logger.error("Failed to load conversations", user_id=user_id, error=str(e))
            raise PersistenceError(
                "Failed to load conversations", {"user_id": user_id}
            ) from e
        return group_conversations(messages, user_id)

    async def append_message(
        self, from_user_id: str, to_user_id: str, content: str
    ) -> MessageModel:
        """Durably record a message.

        Identifiers are not checked here; referential integrity is left to
        the database.
        """
        async with self.database.get_session() as session:
            try:
                entity = await MessageRepository(session).append(
                    from_user_id, to_user_id, content
                )
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(
                    "Failed to send message",
                    sender_id=from_user_id,
                    recipient_id=to_user_id,
                    error=str(e),
                )
                raise PersistenceError(
                    "Failed to send message",
                    {"sender_id": from_user_id, "recipient_id": to_user_id},
                ) from e
            message = MessageModel.from_entity(entity)

        logger.info("Message sent", message_id=message.id, recipient_id=to_user_id)
        return message
