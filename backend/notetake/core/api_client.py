from typing import Any, Iterable

import httpx

from notetake.core.errors import (
    ChatFailed,
    CollaboratorError,
    DeleteFailed,
    ExportFailed,
    UploadFailed,
)
from notetake.core.records import ChatMessage, ImageAttachment, ResolvedNote

DEFAULT_BASE_URL = "http://localhost:3001"


def _error_text(resp: httpx.Response) -> str | None:
    # the server explains failures in "reply" (chat) or "detail" (everything else)
    try:
        body = resp.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    text = body.get("reply") or body.get("detail")
    return text if isinstance(text, str) else None


def _fields(error_cls: type[CollaboratorError], resp: httpx.Response, *keys: str) -> dict[str, Any]:
    """Pick ``keys`` out of a JSON body, raising ``error_cls`` if any is missing."""
    try:
        body = resp.json()
        return {key: body[key] for key in keys}
    except (KeyError, TypeError, ValueError) as err:
        request = resp.request
        raise error_cls(
            f"{request.method} {request.url.path} returned an unexpected body", resp.status_code
        ) from err


class NotetakeApiClient:
    """Async client for the backend's collaborator endpoints.

    No timeout is applied: a hung request stays pending until the server
    answers or the connection drops.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=None)

    async def __aenter__(self) -> "NotetakeApiClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def upload(self, filename: str, content: bytes, content_type: str) -> ImageAttachment:
        resp = await self._send(
            UploadFailed,
            "POST",
            "/api/upload",
            files={"file": (filename, content, content_type)},
        )
        body = _fields(UploadFailed, resp, "url", "public_id")
        return ImageAttachment(url=body["url"], public_id=body["public_id"])

    async def delete(self, public_id: str) -> None:
        await self._send(DeleteFailed, "DELETE", "/api/delete-image", json={"public_id": public_id})

    async def export_pdf(self, html: str) -> bytes:
        resp = await self._send(ExportFailed, "POST", "/api/export-pdf", json={"html": html})
        return resp.content

    async def chat(self, messages: Iterable[ChatMessage], notes: Iterable[ResolvedNote]) -> str:
        resp = await self._send(
            ChatFailed,
            "POST",
            "/api/chat",
            json={
                "messages": [m.to_dict() for m in messages],
                "notes": [n.to_dict() for n in notes],
            },
        )
        return _fields(ChatFailed, resp, "reply")["reply"]

    async def _send(
        self, error_cls: type[CollaboratorError], method: str, url: str, **kwargs: Any
    ) -> httpx.Response:
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as err:
            raise error_cls(f"{method} {url} failed: {err}") from err
        if resp.is_error:
            message = _error_text(resp) or f"{method} {url} returned {resp.status_code}"
            raise error_cls(message, resp.status_code)
        return resp
