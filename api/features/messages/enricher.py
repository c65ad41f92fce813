"""Joins conversation summaries with user records for display."""
import asyncio
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

import humanize
import structlog

from api.features.messages.exceptions import EnrichmentError
from api.features.messages.models import ConversationSummary, EnrichedConversation
from api.features.users.models import UserModel
from api.features.users.service import UserService

logger = structlog.get_logger("messaging.messages.enricher")

Clock = Callable[[], datetime]
T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # naive timestamps come back from backends without time zone support
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def relative_time(timestamp: datetime, now: datetime) -> str:
    """Render ``timestamp`` relative to ``now``, e.g. ``"3 hours ago"``."""
    return humanize.naturaltime(_as_utc(now) - _as_utc(timestamp))


async def gather_or_cancel(*aws: Awaitable[T]) -> List[T]:
    """Like ``asyncio.gather``, but the first failure cancels and awaits the rest."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class ConversationEnricher:
    """Resolves both participants of each summary and renders its send time.

    A participant that no longer exists becomes None. A lookup that raises
    fails the whole batch with EnrichmentError; lookups still running at that
    point are cancelled first.
    """

    def __init__(
        self,
        user_service: UserService,
        concurrency: int = 8,
        clock: Optional[Clock] = None,
    ):
        self.user_service = user_service
        self.concurrency = concurrency
        self.clock = clock or utcnow

    async def enrich(self, summary: ConversationSummary) -> EnrichedConversation:
        other, author = await gather_or_cancel(
            self.user_service.get_user(summary.other_id),
            self.user_service.get_user(summary.author_id),
        )
        return self._build(summary, other, author)

    async def enrich_all(
        self, summaries: Sequence[ConversationSummary]
    ) -> List[EnrichedConversation]:
        """Enrich every summary concurrently, keeping the input order."""
        semaphore = asyncio.Semaphore(self.concurrency)

        async def _bounded(summary: ConversationSummary) -> EnrichedConversation:
            async with semaphore:
                return await self.enrich(summary)

        try:
            return await gather_or_cancel(*(_bounded(s) for s in summaries))
        except Exception as e:
            logger.error("Conversation enrichment failed", error=str(e))
            raise EnrichmentError(
                "Failed to load conversation participants",
                {"conversations": len(summaries)},
            ) from e

    def _build(
        self,
        summary: ConversationSummary,
        other: Optional[UserModel],
        author: Optional[UserModel],
    ) -> EnrichedConversation:
        return EnrichedConversation(
            message_id=summary.message_id,
            author_id=summary.author_id,
            other_id=summary.other_id,
            content=summary.content,
            time_sent=relative_time(summary.time_sent, self.clock()),
            sent_at=summary.time_sent,
            other=other,
            author=author,
        )
