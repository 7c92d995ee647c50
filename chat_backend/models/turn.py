"""
Turn Model

One message unit in a chat. Turns are immutable once written; the
autoincrement key preserves conversation order.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, String
from sqlmodel import SQLModel, Field, Column

from chat_backend.models.chat import utcnow


class TurnRole(str, Enum):
    """Turn author"""
    USER = "user"
    MODEL = "model"


class Turn(SQLModel, table=True):
    __tablename__ = "chat_turns"

    id: Optional[int] = Field(default=None, primary_key=True)
    chat_id: str = Field(foreign_key="chats.id", index=True, max_length=32)
    role: str = Field(sa_column=Column(String(16), nullable=False))  # TurnRole value
    parts: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    img: Optional[str] = Field(default=None, max_length=1024)
    created_at: datetime = Field(default_factory=utcnow)
