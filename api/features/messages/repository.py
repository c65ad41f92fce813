"""Repository for message persistence operations."""
from typing import List

from sqlalchemy import case, func, or_, select

from api.features.messages.entities.message import Message
from api.shared.base import BaseRepository


class MessageRepository(BaseRepository[Message]):
    """Repository for message entities."""

    model = Message

    async def latest_per_counterpart(self, user_id: str) -> List[Message]:
        """The newest message ``user_id`` exchanged with each other user.

        Messages a user sent to themselves are left out. Results come newest
        first, ties broken by id.
        """
        counterpart = case(
            (Message.sender_id == user_id, Message.recipient_id),
            else_=Message.sender_id,
        )
        ranked = (
            select(
                Message.id.label("id"),
                func.row_number()
                .over(
                    partition_by=counterpart,
                    order_by=(Message.time_sent.desc(), Message.id.desc()),
                )
                .label("position"),
            )
            .where(
                or_(Message.sender_id == user_id, Message.recipient_id == user_id),
                Message.sender_id != Message.recipient_id,
            )
            .subquery()
        )
        stmt = (
            select(Message)
            .join(ranked, Message.id == ranked.c.id)
            .where(ranked.c.position == 1)
            .order_by(Message.time_sent.desc(), Message.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def append(self, sender_id: str, recipient_id: str, content: str) -> Message:
        """Insert a new message; the caller owns the transaction."""
        return await self.create(
            Message(sender_id=sender_id, recipient_id=recipient_id, content=content)
        )
