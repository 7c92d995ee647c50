"""Routers for the chat backend API."""

from .chats import router as chats_router
from .upload import router as upload_router

__all__ = ["chats_router", "upload_router"]
