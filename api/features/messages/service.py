"""Service layer for the Messages feature."""
from typing import List, Optional

import structlog

from api.features.messages.enricher import ConversationEnricher
from api.features.messages.exceptions import CounterpartNotFound
from api.features.messages.models import ConversationView, EnrichedConversation, MessageModel
from api.features.messages.store import ConversationStore
from api.features.users.identity import IdentityResolver
from api.shared.exceptions import Unauthenticated
from api.shared.models import RequestContext

logger = structlog.get_logger("messaging.messages.service")


class MessagingService:
    """Orchestrates listing, opening and sending direct messages."""

    def __init__(
        self,
        store: ConversationStore,
        enricher: ConversationEnricher,
        identity_resolver: IdentityResolver,
    ):
        self.store = store
        self.enricher = enricher
        self.identity_resolver = identity_resolver

    async def list_conversations(self, context: RequestContext) -> List[EnrichedConversation]:
        if context.user is None:
            raise Unauthenticated()
        summaries = await self.store.list_conversations(context.user.id)
        return await self.enricher.enrich_all(summaries)

    async def open_conversation(
        self, context: RequestContext, other_id: str
    ) -> ConversationView:
        if context.user is None:
            raise Unauthenticated()
        other = await self.identity_resolver.resolve(other_id)
        if other is None:
            logger.info("Conversation counterpart not found", other_id=other_id)
            raise CounterpartNotFound(other_id)
        return ConversationView(user=context.user, other=other)

    async def send_message(
        self, session_user_id: Optional[str], other_id: str, content: str
    ) -> MessageModel:
        """Send ``content`` from the session's user to ``other_id``.

        The sender is taken from the raw session value; no resolved identity
        is required.
        """
        return await self.store.append_message(session_user_id, other_id, content)
