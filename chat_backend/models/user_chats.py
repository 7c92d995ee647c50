"""
User chat index

Per-user directory of chat summaries used to list chats without loading
their histories. One UserChats row per owner, created with the owner's
first chat; entries are appended in creation order.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from chat_backend.models.chat import utcnow

TITLE_LENGTH = 40


def make_title(text: str) -> str:
    """Title shown in the chat list: the first 40 characters of the opening message."""
    return text[:TITLE_LENGTH]


class UserChats(SQLModel, table=True):
    __tablename__ = "user_chats"

    user_id: str = Field(primary_key=True, max_length=255)
    created_at: datetime = Field(default_factory=utcnow)


class ChatSummary(SQLModel, table=True):
    __tablename__ = "user_chat_entries"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="user_chats.user_id", index=True, max_length=255)
    chat_id: str = Field(foreign_key="chats.id", max_length=32)
    title: str = Field(max_length=TITLE_LENGTH)
