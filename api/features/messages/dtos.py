"""DTOs for the Messages feature."""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from api.features.users.dtos import UserDTO
from api.shared.dtos import BaseDTO


class ConversationDTO(BaseDTO):
    """Conversation list entry."""

    message_id: int = Field(description="Identifier of the latest message")
    author_id: str = Field(description="Sender of the latest message")
    other_id: str = Field(description="The counterpart of the conversation")
    content: str = Field(description="Text of the latest message")
    time_sent: str = Field(description="Send time relative to now")
    sent_at: datetime = Field(description="Absolute send time")
    other: Optional[UserDTO] = Field(default=None, description="Counterpart, null if unknown")
    author: Optional[UserDTO] = Field(default=None, description="Author, null if unknown")


class ConversationListResponse(BaseDTO):
    """Conversations of the current user."""

    user: UserDTO = Field(description="The current user")
    conversations: List[ConversationDTO] = Field(description="Most recent first")
    total: int = Field(description="Number of conversations")


class ConversationViewResponse(BaseDTO):
    """Participants of an opened conversation."""

    user: UserDTO = Field(description="The current user")
    other: UserDTO = Field(description="The counterpart")
