"""
Chat API Router

Creates chats, lists the caller's chats, reads one chat and appends
exchanges to it. Every route requires a verified identity and only ever
touches the caller's own chats.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from chat_backend.db.session import get_session
from chat_backend.middleware.auth import CurrentUser, get_current_user
from chat_backend.schemas.chat import (
    AppendTurnsRequest,
    ChatResponse,
    ChatSummaryResponse,
    CreateChatRequest,
    TurnResponse,
    UpdateResult,
)
from chat_backend.services.chat_service import ChatService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chats"])  # No prefix since main.py adds /api prefix


def get_chat_service(db: Session = Depends(get_session)) -> ChatService:
    """Dependency for getting ChatService instance."""
    return ChatService(db)


@router.post("/chats", response_model=str, status_code=status.HTTP_201_CREATED)
def create_chat(
    request: CreateChatRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    """
    Start a chat from the opening user message.

    Returns the new chat id.
    """
    chat = service.create_chat(current_user.user_id, request.text)
    return chat.id


@router.get("/userchats", response_model=List[ChatSummaryResponse])
def get_user_chats(
    current_user: CurrentUser = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    """List the caller's chats as {_id, title}, oldest first."""
    summaries = service.get_user_chats(current_user.user_id)
    return [
        ChatSummaryResponse(id=summary.chat_id, title=summary.title)
        for summary in summaries
    ]


@router.get("/chats/{chat_id}", response_model=Optional[ChatResponse])
def get_chat(
    chat_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    """
    Get one chat with its full history.

    Answers null when the id does not exist or belongs to someone else.
    """
    chat = service.get_chat(chat_id, current_user.user_id)
    if chat is None:
        return None

    history = [
        TurnResponse(role=turn.role, parts=turn.parts, img=turn.img)
        for turn in service.get_history(chat.id)
    ]
    return ChatResponse(
        id=chat.id,
        user_id=chat.user_id,
        history=history,
        created_at=chat.created_at,
        updated_at=chat.updated_at,
    )


@router.put("/chats/{chat_id}", response_model=UpdateResult)
def append_to_chat(
    chat_id: str,
    request: AppendTurnsRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    """Append the optional question and the model's answer to a chat."""
    matched, modified = service.append_turns(
        chat_id,
        current_user.user_id,
        answer=request.answer,
        question=request.question,
        img=request.img,
    )
    return UpdateResult(matched_count=matched, modified_count=modified)
