"""Controller for the Messages feature."""
from typing import Optional

from api.features.messages.dtos import (
    ConversationDTO,
    ConversationListResponse,
    ConversationViewResponse,
)
from api.features.messages.models import EnrichedConversation, MessageModel
from api.features.messages.service import MessagingService
from api.features.users.dtos import UserDTO
from api.shared.models import RequestContext


class MessagingController:
    """Controller shaping messaging results into response DTOs."""

    def __init__(self, messaging_service: MessagingService):
        self.messaging_service = messaging_service

    async def list_conversations(self, context: RequestContext) -> ConversationListResponse:
        conversations = await self.messaging_service.list_conversations(context)
        items = [self._conversation_dto(c) for c in conversations]
        return ConversationListResponse(
            user=UserDTO.from_model(context.user),
            conversations=items,
            total=len(items),
        )

    async def open_conversation(
        self, context: RequestContext, other_id: str
    ) -> ConversationViewResponse:
        view = await self.messaging_service.open_conversation(context, other_id)
        return ConversationViewResponse(
            user=UserDTO.from_model(view.user), other=UserDTO.from_model(view.other)
        )

    async def send_message(
        self, session_user_id: Optional[str], other_id: str, content: str
    ) -> MessageModel:
        return await self.messaging_service.send_message(session_user_id, other_id, content)

    @staticmethod
    def _conversation_dto(conversation: EnrichedConversation) -> ConversationDTO:
        return ConversationDTO(
            message_id=conversation.message_id,
            author_id=conversation.author_id,
            other_id=conversation.other_id,
            content=conversation.content,
            time_sent=conversation.time_sent,
            sent_at=conversation.sent_at,
            other=UserDTO.from_model(conversation.other) if conversation.other else None,
            author=UserDTO.from_model(conversation.author) if conversation.author else None,
        )
