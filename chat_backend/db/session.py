"""FastAPI dependencies for store access."""
from typing import Generator

from fastapi import Depends, Request
from sqlmodel import Session

from chat_backend.db.store import ChatStore


def get_store(request: Request) -> ChatStore:
    """The store instance owned by the running application."""
    return request.app.state.store


def get_session(store: ChatStore = Depends(get_store)) -> Generator[Session, None, None]:
    """Dependency for getting database sessions."""
    with store.session() as session:
        yield session
