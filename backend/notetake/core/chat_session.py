import asyncio
from typing import Callable, Iterable, Protocol

from notetake.core.errors import ChatFailed, CollaboratorError
from notetake.core.records import ChatMessage, ResolvedNote
from notetake.utils.logging import get_logger

logger = get_logger(__name__)

REVEAL_INTERVAL_SECONDS = 0.02


class ChatBackend(Protocol):
    async def chat(self, messages: Iterable[ChatMessage], notes: Iterable[ResolvedNote]) -> str: ...


class ChatSession:
    """Transcript of one open chat panel.

    Replies are revealed one character at a time; ``stop()`` ends the reveal
    early but cannot cancel a request that is already in flight.
    """

    def __init__(
        self,
        backend: ChatBackend,
        reveal_interval: float = REVEAL_INTERVAL_SECONDS,
        on_update: Callable[[list[ChatMessage]], None] | None = None,
    ):
        self.backend = backend
        self.reveal_interval = reveal_interval
        self.on_update = on_update
        self.messages: list[ChatMessage] = []
        self.is_generating = False
        self._stopped = False

    async def send(self, text: str, notes: Iterable[ResolvedNote]) -> ChatMessage | None:
        if not text.strip() or self.is_generating:
            return None

        self.messages.append(ChatMessage(role="user", content=text))
        self._changed()
        self.is_generating = True
        try:
            try:
                reply = await self.backend.chat(list(self.messages), list(notes))
            except CollaboratorError as err:
                logger.error("Chat request failed", extra={"error": str(err)})
                if isinstance(err, ChatFailed):
                    raise
                raise ChatFailed(str(err), err.status_code) from err

            self.messages.append(ChatMessage(role="assistant", content=""))
            self._changed()
            # stop() only applies to the reveal, not to the request before it
            self._stopped = False
            await self._reveal(reply)
        finally:
            self.is_generating = False
        return self.messages[-1]

    def stop(self) -> None:
        if self.is_generating:
            self._stopped = True

    async def _reveal(self, reply: str) -> None:
        for index in range(1, len(reply) + 1):
            if self._stopped:
                return
            await asyncio.sleep(self.reveal_interval)
            if self._stopped:
                return
            self.messages[-1] = ChatMessage(role="assistant", content=reply[:index])
            self._changed()

    def _changed(self) -> None:
        if self.on_update is not None:
            self.on_update(list(self.messages))
