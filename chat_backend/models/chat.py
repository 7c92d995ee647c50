"""
Chat Model

A chat is one conversation thread owned by a single user. Its turns live in
the chat_turns table and are only ever appended.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Chat(SQLModel, table=True):
    """Conversation header: identity, owner and timestamps."""
    __tablename__ = "chats"

    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True, max_length=32)
    user_id: str = Field(index=True, max_length=255)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
