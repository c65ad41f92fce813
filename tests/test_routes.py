"""HTTP behaviour of the session, users and messages routes."""
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from api.features.messages.enricher import ConversationEnricher
from api.main import app

from conftest import NOW, FakeConversationStore, FakeUserService, make_message


@pytest.fixture
def client(user_service, store):
    services = app.container.services
    enricher = ConversationEnricher(user_service, clock=lambda: NOW)
    with services.user_service.override(providers.Object(user_service)), \
            services.conversation_store.override(providers.Object(store)), \
            services.conversation_enricher.override(providers.Object(enricher)):
        yield TestClient(app)


def login(client: TestClient, user_id: str = "u1") -> None:
    response = client.get(f"/login/{user_id}", follow_redirects=False)
    assert response.status_code == 302


@pytest.mark.parametrize("path", ["/messages", "/messages/u2"])
def test_guarded_routes_reject_requests_without_a_session(client, store, path):
    response = client.get(path)

    assert response.status_code == 401
    assert response.json()["error"] == "UNAUTHENTICATED"
    assert store.listed == []


def test_guarded_routes_reject_a_session_for_a_deleted_user(client, store, user_service):
    login(client, "u3")
    del user_service.users["u3"]

    response = client.get("/messages")

    assert response.status_code == 401
    assert store.listed == []


def test_failing_user_lookup_does_not_break_request_handling(client, store, user_service):
    login(client, "u1")
    user_service.failing = True

    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/", follow_redirects=False).status_code == 302

    response = client.get("/messages")
    assert response.status_code == 401
    assert response.json()["error"] == "UNAUTHENTICATED"
    assert client.get("/messages/u2").status_code == 401
    assert store.listed == []

    assert client.get("/logout", follow_redirects=False).status_code == 302


def test_list_conversations_for_logged_in_user(client, store):
    store.messages.append(make_message(1, "u1", "u2", minutes_ago=180, content="hello"))
    login(client, "u1")

    response = client.get("/messages")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["id"] == "u1"
    assert data["total"] == 1
    conversation = data["conversations"][0]
    assert conversation["other_id"] == "u2"
    assert conversation["other"]["name"] == "Bob"
    assert conversation["author"]["id"] == "u1"
    assert conversation["time_sent"] == "3 hours ago"


def test_list_conversations_reports_storage_failure(user_service):
    store = FakeConversationStore(failing=True)
    services = app.container.services
    with services.user_service.override(providers.Object(user_service)), \
            services.conversation_store.override(providers.Object(store)):
        client = TestClient(app)
        login(client, "u1")
        response = client.get("/messages")

    assert response.status_code == 500
    assert response.json()["error"] == "PERSISTENCE_ERROR"


def test_list_conversations_reports_enrichment_failure(user_service, store):
    store.messages.append(make_message(1, "u1", "u2", minutes_ago=1))
    enricher = ConversationEnricher(FakeUserService(failing=True), clock=lambda: NOW)
    services = app.container.services
    with services.user_service.override(providers.Object(user_service)), \
            services.conversation_store.override(providers.Object(store)), \
            services.conversation_enricher.override(providers.Object(enricher)):
        client = TestClient(app)
        login(client, "u1")
        response = client.get("/messages")

    assert response.status_code == 500
    assert response.json()["error"] == "ENRICHMENT_ERROR"


def test_open_conversation(client):
    login(client, "u1")

    response = client.get("/messages/u2")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["id"] == "u1"
    assert data["other"]["name"] == "Bob"


def test_open_conversation_with_unknown_user_is_401(client):
    login(client, "u1")

    response = client.get("/messages/u404")

    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "COUNTERPART_NOT_FOUND"
    assert body["detail"] == "User not found"


def test_send_message_persists_and_redirects(client, store):
    login(client, "u1")

    response = client.post("/messages/u2", data={"message": "hi"}, follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "/messages/u2"
    assert store.sent == [("u1", "u2", "hi")]


def test_send_message_is_not_guarded(client, store):
    response = client.post("/messages/u2", data={"message": "hi"}, follow_redirects=False)

    # reaches the store with no sender; the store refuses it
    assert store.sent == [(None, "u2", "hi")]
    assert response.status_code == 500
    assert response.json()["error"] == "PERSISTENCE_ERROR"


def test_send_message_requires_a_message_field(client, store):
    login(client, "u1")

    response = client.post("/messages/u2", data={}, follow_redirects=False)

    assert response.status_code == 422
    assert store.sent == []


def test_logout_clears_the_session(client):
    login(client, "u1")
    assert client.get("/messages").status_code == 200

    response = client.get("/logout", follow_redirects=False)

    assert response.status_code == 302
    assert client.get("/messages").status_code == 401


def test_login_with_unknown_user_is_404(client):
    response = client.get("/login/u404", follow_redirects=False)

    assert response.status_code == 404
    assert response.json()["error"] == "NOT_FOUND"


def test_root_redirects_to_messages(client):
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "/messages"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_get_user(client):
    response = client.get("/api/users/u2")

    assert response.status_code == 200
    assert response.json()["data"] == {"id": "u2", "name": "Bob", "email": "bob@example.com"}


def test_get_unknown_user_is_404(client):
    response = client.get("/api/users/u404")

    assert response.status_code == 404
    assert response.json()["error"] == "NOT_FOUND"


def test_list_users(client):
    response = client.get("/api/users/", params={"limit": 2})

    assert response.status_code == 200
    page = response.json()["data"]
    assert page["total"] == 3
    assert [u["name"] for u in page["items"]] == ["Alice", "Bob"]
    assert page["has_next"] is True
