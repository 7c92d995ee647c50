import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlmodel import select

from chat_backend.db.store import ChatStore
from chat_backend.errors import StoreUnavailableError
from chat_backend.main import create_app
from chat_backend.models import Chat, Turn
from chat_backend.services import chat_service
from tests.helpers import auth_headers


def test_store_lifecycle():
    store = ChatStore("sqlite://")
    assert not store.healthy
    with pytest.raises(StoreUnavailableError):
        with store.session():
            pass

    assert store.connect() is True
    assert store.healthy
    assert store.health()["connected"] is True
    with store.session() as session:
        assert session.exec(select(Chat)).all() == []

    store.disconnect()
    assert not store.healthy
    assert store.health()["connected_at"] is None


def test_failed_connect_is_not_fatal(tmp_path):
    store = ChatStore(f"sqlite:///{tmp_path}/missing/dir/chat.db")
    assert store.connect() is False
    assert not store.healthy
    assert store.last_error


@pytest.fixture
def offline_client(tmp_path, settings, upload_issuer):
    store = ChatStore(f"sqlite:///{tmp_path}/missing/dir/chat.db")
    app = create_app(settings=settings, store=store, upload_issuer=upload_issuer)
    with TestClient(app) as test_client:
        yield test_client


def test_requests_fail_while_store_is_down(offline_client):
    response = offline_client.get("/api/userchats", headers=auth_headers("user_u"))
    assert response.status_code == 503
    assert response.json() == {"error": "Store unavailable"}

    # the process keeps serving routes that do not need the store
    assert offline_client.get("/").status_code == 200
    assert offline_client.get("/api/upload").status_code == 200


def test_health_reports_store_state(client, offline_client):
    assert client.get("/health").json()["status"] == "healthy"

    body = offline_client.get("/health").json()
    assert body["status"] == "degraded"
    assert body["store"]["connected"] is False


def test_unauthenticated_wins_over_store_outage(offline_client):
    response = offline_client.get("/api/userchats")
    assert response.status_code == 401


def test_failed_create_leaves_nothing_behind(client, store, monkeypatch):
    def broken_summary(**kwargs):
        raise SQLAlchemyError("index write failed")

    monkeypatch.setattr(chat_service, "ChatSummary", broken_summary)
    response = client.post("/api/chats", json={"text": "doomed"}, headers=auth_headers("user_u"))
    assert response.status_code == 500
    assert response.json() == {"error": "Error creating chat!"}
    monkeypatch.undo()

    assert client.get("/api/userchats", headers=auth_headers("user_u")).json() == []
    with store.session() as session:
        assert session.exec(select(Chat)).all() == []
        assert session.exec(select(Turn)).all() == []


def test_create_after_failure_still_works(client, monkeypatch):
    def broken_summary(**kwargs):
        raise SQLAlchemyError("index write failed")

    monkeypatch.setattr(chat_service, "ChatSummary", broken_summary)
    client.post("/api/chats", json={"text": "doomed"}, headers=auth_headers("user_u"))
    monkeypatch.undo()

    response = client.post("/api/chats", json={"text": "second try"}, headers=auth_headers("user_u"))
    assert response.status_code == 201
    summaries = client.get("/api/userchats", headers=auth_headers("user_u")).json()
    assert summaries == [{"_id": response.json(), "title": "second try"}]


def test_append_lookup_failure_reports_append(client, monkeypatch):
    chat_id = client.post(
        "/api/chats", json={"text": "hello"}, headers=auth_headers("user_u")
    ).json()

    def broken_select(*args, **kwargs):
        raise OperationalError("SELECT chats", {}, Exception("database is gone"))

    monkeypatch.setattr(chat_service, "select", broken_select)
    response = client.put(
        f"/api/chats/{chat_id}", json={"answer": "hi"}, headers=auth_headers("user_u")
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Error adding conversation!"}


def test_failed_startup_connection_is_final(offline_client):
    store = offline_client.app.state.store
    for _ in range(2):
        response = offline_client.get("/api/userchats", headers=auth_headers("user_u"))
        assert response.status_code == 503
    assert not store.healthy


def test_shutdown_disposes_engine(app, store):
    with TestClient(app) as test_client:
        assert test_client.get("/health").json()["status"] == "healthy"
        assert store.healthy
    assert not store.healthy
    assert store.engine is None
