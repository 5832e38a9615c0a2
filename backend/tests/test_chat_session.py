import asyncio

import httpx
import pytest

from notetake.core.api_client import NotetakeApiClient
from notetake.core.chat_session import ChatSession
from notetake.core.errors import ChatFailed
from notetake.core.records import ChatMessage, ResolvedNote


class StubBackend:
    def __init__(self, reply="hi there", fail=False):
        self.reply = reply
        self.fail = fail
        self.requests = []

    async def chat(self, messages, notes):
        self.requests.append((messages, notes))
        if self.fail:
            raise ChatFailed("POST /api/chat returned 500", 500)
        return self.reply


NOTE = ResolvedNote(id="n1", title="Recipes", markdown="flour, eggs")


def test_send_reveals_reply_progressively():
    backend = StubBackend(reply="abc")
    snapshots = []
    session = ChatSession(backend, reveal_interval=0, on_update=snapshots.append)

    final = asyncio.run(session.send("what do I cook?", [NOTE]))

    assert final == ChatMessage("assistant", "abc")
    assert session.messages == [ChatMessage("user", "what do I cook?"), ChatMessage("assistant", "abc")]
    assert [s[-1].content for s in snapshots if s[-1].role == "assistant"] == ["", "a", "ab", "abc"]
    assert session.is_generating is False


def test_whole_transcript_and_notes_are_sent():
    backend = StubBackend()
    session = ChatSession(backend, reveal_interval=0)

    asyncio.run(session.send("first", [NOTE]))
    asyncio.run(session.send("second", [NOTE]))

    messages, notes = backend.requests[1]
    assert [m.content for m in messages] == ["first", "hi there", "second"]
    assert notes == [NOTE]


def test_blank_input_is_ignored():
    backend = StubBackend()
    session = ChatSession(backend, reveal_interval=0)

    assert asyncio.run(session.send("   ", [])) is None
    assert backend.requests == []
    assert session.messages == []


def test_stop_halts_the_reveal():
    backend = StubBackend(reply="a long answer")

    async def scenario():
        session = ChatSession(backend, reveal_interval=0.001)

        def stop_after_two(messages):
            if messages[-1].role == "assistant" and len(messages[-1].content) == 2:
                session.stop()

        session.on_update = stop_after_two
        await session.send("q", [])
        return session

    session = asyncio.run(scenario())
    assert session.messages[-1].content == "a "
    assert session.is_generating is False


def test_sending_while_generating_is_ignored():
    backend = StubBackend(reply="slow reply")

    async def scenario():
        session = ChatSession(backend, reveal_interval=0.001)
        first = asyncio.create_task(session.send("one", []))
        await asyncio.sleep(0.003)
        second = await session.send("two", [])
        await first
        return session, second

    session, second = asyncio.run(scenario())
    assert second is None
    assert [m.content for m in session.messages if m.role == "user"] == ["one"]


def test_failure_is_raised_and_reenables_input():
    session = ChatSession(StubBackend(fail=True), reveal_interval=0)

    with pytest.raises(ChatFailed):
        asyncio.run(session.send("q", []))
    assert session.is_generating is False
    assert session.messages == [ChatMessage("user", "q")]


def test_malformed_reply_body_reenables_input():
    transport = httpx.MockTransport(lambda r: httpx.Response(200, json={"error": "x"}))

    async def scenario():
        async with NotetakeApiClient("http://testserver", transport=transport) as api:
            session = ChatSession(api, reveal_interval=0)
            with pytest.raises(ChatFailed):
                await session.send("hi", [])
            return session

    session = asyncio.run(scenario())
    assert session.is_generating is False


def test_unexpected_backend_error_reenables_input():
    class BrokenBackend:
        async def chat(self, messages, notes):
            raise RuntimeError("boom")

    session = ChatSession(BrokenBackend(), reveal_interval=0)

    with pytest.raises(RuntimeError):
        asyncio.run(session.send("q", []))
    assert session.is_generating is False
