"""Models for the Messages feature."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from api.features.messages.entities.message import Message as MessageEntity
from api.features.users.models import UserModel


class MessageModel(BaseModel):
    """Domain model for Message."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Message identifier")
    sender_id: str = Field(description="Author of the message")
    recipient_id: str = Field(description="Addressee of the message")
    content: str = Field(description="Message text")
    time_sent: datetime = Field(description="Server-assigned send time")

    @classmethod
    def from_entity(cls, entity: MessageEntity) -> "MessageModel":
        """Create model from database entity."""
        return cls(
            id=entity.id,
            sender_id=entity.sender_id,
            recipient_id=entity.recipient_id,
            content=entity.content,
            time_sent=entity.time_sent,
        )


class ConversationSummary(BaseModel):
    """Latest message exchanged with one counterpart."""

    model_config = ConfigDict(frozen=True)

    message_id: int = Field(description="Identifier of the latest message")
    author_id: str = Field(description="Sender of the latest message")
    other_id: str = Field(description="The counterpart of the conversation")
    content: str = Field(description="Text of the latest message")
    time_sent: datetime = Field(description="Send time of the latest message")


class EnrichedConversation(BaseModel):
    """Conversation summary joined with user records and a relative time."""

    message_id: int
    author_id: str
    other_id: str
    content: str
    time_sent: str = Field(description="Send time relative to now, e.g. '3 hours ago'")
    sent_at: datetime = Field(description="Absolute send time")
    other: Optional[UserModel] = Field(default=None, description="Counterpart, None if unknown")
    author: Optional[UserModel] = Field(default=None, description="Author, None if unknown")


class ConversationView(BaseModel):
    """The two participants needed to open a conversation."""

    user: UserModel
    other: UserModel
