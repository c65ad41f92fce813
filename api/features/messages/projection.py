"""Read-side projection from the message log to conversation summaries."""
from typing import Dict, Iterable, List

from api.features.messages.models import ConversationSummary, MessageModel


def counterpart_of(message: MessageModel, user_id: str) -> str:
    """Return the participant of ``message`` that is not ``user_id``."""
    return message.recipient_id if message.sender_id == user_id else message.sender_id


def group_conversations(
    messages: Iterable[MessageModel], user_id: str
) -> List[ConversationSummary]:
    """Group ``user_id``'s messages into one summary per counterpart.

    Conversations are keyed by the unordered participant pair. Each summary is
    built from the pair's most recent message and the result is ordered
    most-recent-first, ties broken by the higher message id. Messages that do
    not involve ``user_id`` and self-addressed messages are ignored.
    """
    relevant = [
        m for m in messages
        if user_id in (m.sender_id, m.recipient_id) and m.sender_id != m.recipient_id
    ]
    relevant.sort(key=lambda m: (m.time_sent, m.id), reverse=True)

    latest: Dict[str, ConversationSummary] = {}
    for message in relevant:
        other_id = counterpart_of(message, user_id)
        if other_id in latest:
            continue
        latest[other_id] = ConversationSummary(
            message_id=message.id,
            author_id=message.sender_id,
            other_id=other_id,
            content=message.content,
            time_sent=message.time_sent,
        )
    # dicts keep insertion order, which is already most-recent-first
    return list(latest.values())
