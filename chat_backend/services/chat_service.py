"""
Chat Service

Persistence operations for chats, their turns and the per-user chat index.

Every query is scoped to the owner, so another user's chat id behaves as if
it did not exist. Turns and index entries are append-only.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from chat_backend.errors import StoreError
from chat_backend.models.chat import Chat
from chat_backend.models.turn import Turn, TurnRole
from chat_backend.models.user_chats import ChatSummary, UserChats, make_title

logger = logging.getLogger(__name__)


class ChatService:
    """Service for managing chats and the user chat index"""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _store_errors(self, message: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{message} {str(e)}", exc_info=True)
            raise StoreError(message) from e

    def create_chat(self, user_id: str, text: str) -> Chat:
        """
        Create a chat whose history is the opening user message, and record
        it in the owner's chat index.

        The chat, its first turn and the index entry are committed together;
        if any write fails none of them is kept.
        """
        with self._store_errors("Error creating chat!"):
            chat = Chat(user_id=user_id)
            self.db.add(chat)
            self.db.flush()

            self.db.add(Turn(
                chat_id=chat.id,
                role=TurnRole.USER.value,
                parts=[{"text": text}],
            ))

            if self.db.get(UserChats, user_id) is None:
                self.db.add(UserChats(user_id=user_id))
                self.db.flush()

            self.db.add(ChatSummary(
                user_id=user_id,
                chat_id=chat.id,
                title=make_title(text),
            ))

            self.db.commit()
            self.db.refresh(chat)
            logger.info(f"Created chat {chat.id} for user {user_id}")
            return chat

    def get_user_chats(self, user_id: str) -> List[ChatSummary]:
        """Owner's chat summaries in creation order; empty when they have none."""
        with self._store_errors("Error fetching userchats!"):
            statement = select(ChatSummary).where(
                ChatSummary.user_id == user_id
            ).order_by(ChatSummary.id)
            return list(self.db.exec(statement).all())

    def get_chat(self, chat_id: str, user_id: str) -> Optional[Chat]:
        """Get chat ensuring ownership"""
        with self._store_errors("Error fetching chat!"):
            statement = select(Chat).where(
                Chat.id == chat_id,
                Chat.user_id == user_id
            )
            return self.db.exec(statement).first()

    def get_history(self, chat_id: str) -> List[Turn]:
        """Turns of a chat in conversation order"""
        with self._store_errors("Error fetching chat!"):
            statement = select(Turn).where(
                Turn.chat_id == chat_id
            ).order_by(Turn.id)
            return list(self.db.exec(statement).all())

    def append_turns(
        self,
        chat_id: str,
        user_id: str,
        answer: str,
        question: Optional[str] = None,
        img: Optional[str] = None,
    ) -> Tuple[int, int]:
        """
        Append one exchange to a chat: a user turn when a question is given
        (carrying the image reference, if any) followed by the model turn.

        No existence check is reported to the caller as an error: when no chat
        matches id and owner nothing is written.

        Returns:
            (matched_count, modified_count)
        """
        with self._store_errors("Error adding conversation!"):
            statement = select(Chat).where(
                Chat.id == chat_id,
                Chat.user_id == user_id
            )
            chat = self.db.exec(statement).first()
            if chat is None:
                logger.info(f"Append matched no chat {chat_id} for user {user_id}")
                return 0, 0

            turns = []
            if question:
                turns.append(Turn(
                    chat_id=chat.id,
                    role=TurnRole.USER.value,
                    parts=[{"text": question}],
                    img=img or None,
                ))
            turns.append(Turn(
                chat_id=chat.id,
                role=TurnRole.MODEL.value,
                parts=[{"text": answer}],
            ))

            self.db.add_all(turns)
            chat.updated_at = datetime.now(timezone.utc)
            self.db.add(chat)
            self.db.commit()
            return 1, 1
