"""Database access."""

from chat_backend.db.store import ChatStore

__all__ = ["ChatStore"]
