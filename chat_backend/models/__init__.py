"""Table models. Importing this package registers every table on SQLModel.metadata."""

from chat_backend.models.chat import Chat
from chat_backend.models.turn import Turn, TurnRole
from chat_backend.models.user_chats import ChatSummary, UserChats, make_title

__all__ = ["Chat", "ChatSummary", "Turn", "TurnRole", "UserChats", "make_title"]
