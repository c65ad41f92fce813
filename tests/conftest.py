"""Shared fixtures: in-memory fakes for the persistence collaborators."""
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest
import pytest_asyncio
from sqlalchemy import insert

from api.features.messages.models import MessageModel
from api.features.messages.projection import group_conversations
from api.features.users.models import UserModel
from api.shared.entities.registry import BaseEntity, User
from api.shared.exceptions import PersistenceError
from infra.resources import DatabaseResource

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

ALICE = UserModel(id="u1", name="Alice", email="alice@example.com")
BOB = UserModel(id="u2", name="Bob", email="bob@example.com")
CAROL = UserModel(id="u3", name="Carol")


def make_message(
    message_id: int, sender_id: str, recipient_id: str, minutes_ago: int, content: str = "hi"
) -> MessageModel:
    return MessageModel(
        id=message_id,
        sender_id=sender_id,
        recipient_id=recipient_id,
        content=content,
        time_sent=NOW - timedelta(minutes=minutes_ago),
    )


class FakeUserService:
    """Dictionary-backed stand-in for UserService."""

    def __init__(self, users: Optional[List[UserModel]] = None, failing: bool = False):
        self.users = {u.id: u for u in users or []}
        self.failing = failing
        self.calls: List[Optional[str]] = []

    async def get_user(self, user_id: Optional[str]) -> Optional[UserModel]:
        self.calls.append(user_id)
        if self.failing:
            raise RuntimeError("database unavailable")
        if user_id is None:
            return None
        return self.users.get(str(user_id))

    async def list_users(self, *, offset: int = 0, limit: int = 100):
        users = sorted(self.users.values(), key=lambda u: u.name)
        return users[offset:offset + limit], len(users)


class FakeConversationStore:
    """List-backed stand-in for ConversationStore."""

    def __init__(self, messages: Optional[List[MessageModel]] = None, failing: bool = False):
        self.messages = list(messages or [])
        self.failing = failing
        self.listed: List[str] = []
        self.sent: List[tuple] = []

    async def list_conversations(self, user_id: str):
        self.listed.append(user_id)
        if self.failing:
            raise PersistenceError("Failed to load conversations", {"user_id": user_id})
        return group_conversations(self.messages, user_id)

    async def append_message(self, from_user_id, to_user_id, content) -> MessageModel:
        self.sent.append((from_user_id, to_user_id, content))
        if from_user_id is None:
            raise PersistenceError("Failed to send message")
        message = MessageModel(
            id=len(self.messages) + 1,
            sender_id=from_user_id,
            recipient_id=to_user_id,
            content=content,
            time_sent=NOW,
        )
        self.messages.append(message)
        return message


@pytest.fixture
def user_service() -> FakeUserService:
    return FakeUserService([ALICE, BOB, CAROL])


@pytest.fixture
def store() -> FakeConversationStore:
    return FakeConversationStore()


@pytest_asyncio.fixture
async def database(tmp_path):
    """A SQLite database with the schema created and three users seeded."""
    db = DatabaseResource(f"sqlite+aiosqlite:///{tmp_path / 'messaging.db'}")
    await db.init()
    async with db.engine.begin() as conn:
        await conn.run_sync(BaseEntity.metadata.create_all)
        await conn.execute(
            insert(User),
            [
                {"id": u.id, "name": u.name, "email": u.email}
                for u in (ALICE, BOB, CAROL)
            ],
        )
    yield db
    await db.shutdown()
