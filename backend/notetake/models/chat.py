from typing import Literal

from pydantic import BaseModel

from notetake.models.notes import NoteContext


class ChatMessageIn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    messages: list[ChatMessageIn] | None = None
    notes: list[NoteContext] | None = None


class ChatResponse(BaseModel):
    reply: str
