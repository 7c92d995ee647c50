"""Chat request/response schemas.

Response field names follow the document shape the web client reads
(``_id``, ``userId``, ``createdAt``...).
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateChatRequest(BaseModel):
    """Opening message of a new chat."""
    text: str = Field(..., min_length=1)


class AppendTurnsRequest(BaseModel):
    """One exchange: the optional follow-up question and the model's answer."""
    question: Optional[str] = None
    answer: str
    img: Optional[str] = None


class Part(BaseModel):
    text: str


class TurnResponse(BaseModel):
    role: str
    parts: List[Part]
    img: Optional[str] = None


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    user_id: str = Field(..., alias="userId")
    history: List[TurnResponse]
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class ChatSummaryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    title: str


class UpdateResult(BaseModel):
    """Outcome of an append: matched_count is 0 when no chat matched id and owner."""
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    matched_count: int = Field(..., alias="matchedCount")
    modified_count: int = Field(..., alias="modifiedCount")
