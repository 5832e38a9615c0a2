import os
import re
from typing import Any, Sequence

import httpx

GROQ_CHAT_URL = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_GROQ_MODEL = "qwen/qwen3-32b"

SYSTEM_PROMPT = (
    "You are an AI assistant built into a note-taking app. Use the user's notes along with "
    "your general knowledge to answer questions clearly and helpfully. Keep your responses "
    "short and focused unless the user specifically asks for more detail. In that case, "
    "provide a slightly more in-depth explanation."
)

_THINK_RE = re.compile(r"^Bot: <think>[\s\S]*?</think>\s*|<think>[\s\S]*?</think>\s*")


def _api_key() -> str:
    s = os.getenv("GROQ_API_KEY", "")
    if not s:
        raise RuntimeError("GROQ_API_KEY is not set")
    return s


def _model() -> str:
    return os.getenv("GROQ_MODEL", DEFAULT_GROQ_MODEL)


def build_notes_text(notes: Sequence[dict[str, Any]] | None) -> str:
    if notes is None:
        return "No notes provided."
    return "\n".join(f"- {n.get('title', '')}: {n.get('markdown', '')}" for n in notes)


def build_user_prompt(messages: Sequence[dict[str, Any]], notes: Sequence[dict[str, Any]] | None) -> str:
    # only the latest message is asked about; earlier turns are not replayed
    latest = messages[-1].get("content", "") if messages else ""
    return (
        f"The user has the following notes:\n{build_notes_text(notes)}\n\n"
        f'Based on the notes, answer the following question:\n"{latest}"'
    )


def strip_reasoning(reply: str) -> str:
    return _THINK_RE.sub("", reply).strip()


class GroqChatClient:
    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GROQ_MODEL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.transport = transport

    @classmethod
    def from_env(cls) -> "GroqChatClient":
        return cls(api_key=_api_key(), model=_model())

    async def complete(
        self,
        messages: Sequence[dict[str, Any]],
        notes: Sequence[dict[str, Any]] | None,
    ) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(messages, notes)},
            ],
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        async with httpx.AsyncClient(transport=self.transport, timeout=None) as client:
            resp = await client.post(GROQ_CHAT_URL, headers=headers, json=payload)
        resp.raise_for_status()
        choices = resp.json().get("choices") or [{}]
        content = (choices[0].get("message") or {}).get("content") or ""
        return strip_reasoning(content) or "No response."
