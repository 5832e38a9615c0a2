from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from notetake.api.deps import get_chat_client
from notetake.models.chat import ChatRequest, ChatResponse
from notetake.services.groq_chat import GroqChatClient
from notetake.utils.logging import get_logger

router = APIRouter(prefix="/api", tags=["chat"])
logger = get_logger(__name__)


@router.post("/chat", response_model=ChatResponse)
async def chat(payload: ChatRequest, client: GroqChatClient = Depends(get_chat_client)):
    # errors answer with a "reply" too so the chat panel can show them as-is
    if not payload.messages:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"reply": "Please include a valid message array."},
        )

    messages = [m.model_dump() for m in payload.messages]
    notes = [n.model_dump() for n in payload.notes] if payload.notes is not None else None
    try:
        reply = await client.complete(messages, notes)
    except Exception as err:
        logger.error("Groq error", extra={"error": str(err)})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"reply": "Error contacting Groq."},
        )

    return ChatResponse(reply=reply)
