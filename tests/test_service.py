from datetime import timedelta

import pytest

from api.features.messages.enricher import ConversationEnricher
from api.features.messages.exceptions import CounterpartNotFound
from api.features.messages.service import MessagingService
from api.features.users.identity import IdentityResolver
from api.shared.exceptions import PersistenceError, Unauthenticated
from api.shared.models import RequestContext

from conftest import ALICE, BOB, NOW, FakeConversationStore, make_message


@pytest.fixture
def service(user_service, store):
    return MessagingService(
        store=store,
        enricher=ConversationEnricher(user_service, clock=lambda: NOW),
        identity_resolver=IdentityResolver(user_service),
    )


def logged_in(user=ALICE) -> RequestContext:
    return RequestContext(session_user_id=user.id, user=user)


async def test_list_conversations_enriches_the_callers_summaries(service, store):
    store.messages.append(make_message(1, "u1", "u2", minutes_ago=180, content="hello"))

    conversations = await service.list_conversations(logged_in())

    assert store.listed == ["u1"]
    assert len(conversations) == 1
    assert conversations[0].other_id == "u2"
    assert conversations[0].other == BOB
    assert conversations[0].time_sent == "3 hours ago"
    assert conversations[0].sent_at == NOW - timedelta(hours=3)


async def test_list_conversations_requires_identity(service, store):
    with pytest.raises(Unauthenticated):
        await service.list_conversations(RequestContext(session_user_id="u1", user=None))
    assert store.listed == []


async def test_list_conversations_propagates_persistence_errors(user_service):
    service = MessagingService(
        store=FakeConversationStore(failing=True),
        enricher=ConversationEnricher(user_service, clock=lambda: NOW),
        identity_resolver=IdentityResolver(user_service),
    )

    with pytest.raises(PersistenceError):
        await service.list_conversations(logged_in())


async def test_open_conversation_returns_both_participants(service):
    view = await service.open_conversation(logged_in(), "u2")

    assert view.user == ALICE
    assert view.other == BOB


async def test_open_conversation_with_unknown_counterpart(service):
    with pytest.raises(CounterpartNotFound) as exc_info:
        await service.open_conversation(logged_in(), "u404")

    assert exc_info.value.status_code == 401
    assert exc_info.value.details == {"other_id": "u404"}


async def test_send_message_appends_with_the_raw_session_sender(service, store):
    message = await service.send_message("u1", "u2", "hi")

    assert store.sent == [("u1", "u2", "hi")]
    assert message.sender_id == "u1"
    assert message.recipient_id == "u2"


async def test_sent_message_is_visible_to_both_participants(service, store):
    await service.send_message("u1", "u2", "hi")

    mine = await service.list_conversations(logged_in(ALICE))
    theirs = await service.list_conversations(logged_in(BOB))

    assert [c.other_id for c in mine] == ["u2"]
    assert [c.other_id for c in theirs] == ["u1"]
    assert theirs[0].author == ALICE
