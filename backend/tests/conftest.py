import pytest
from fastapi.testclient import TestClient

from notetake.api.deps import get_chat_client, get_image_host, get_pdf_renderer
from notetake.core.attachments import AttachmentManager
from notetake.core.errors import DeleteFailed, UploadFailed
from notetake.core.records import ImageAttachment
from notetake.main import app
from notetake.storage.kv_store import JsonFileStore
from notetake.storage.notes_store import NoteRepository
from notetake.storage.pending_uploads import PendingUploads
from notetake.storage.tags_store import TagRegistry


class FakeImageHost:
    """Image host that hands out u1/p1, u2/p2, ... and records deletes."""

    def __init__(self):
        self.uploads: list[ImageAttachment] = []
        self.deleted: list[str] = []
        self.fail_upload = False
        self.fail_delete: set[str] = set()

    async def upload(self, filename: str, content: bytes, content_type: str) -> ImageAttachment:
        if self.fail_upload:
            raise UploadFailed("upload refused", 400)
        n = len(self.uploads) + 1
        image = ImageAttachment(url=f"u{n}", public_id=f"p{n}")
        self.uploads.append(image)
        return image

    async def delete(self, public_id: str) -> None:
        if public_id in self.fail_delete:
            raise DeleteFailed("delete refused", 500)
        self.deleted.append(public_id)


class FakeChatClient:
    def __init__(self, reply: str = "Here is what your notes say."):
        self.reply = reply
        self.calls: list[tuple[list, list | None]] = []
        self.fail = False

    async def complete(self, messages, notes):
        if self.fail:
            raise RuntimeError("groq down")
        self.calls.append((messages, notes))
        return self.reply


class FakePdfRenderer:
    def __init__(self):
        self.rendered: list[str] = []
        self.fail = False

    async def render(self, html: str) -> bytes:
        if self.fail:
            raise RuntimeError("browser crashed")
        self.rendered.append(html)
        return b"%PDF-1.4 fake"


@pytest.fixture()
def store(tmp_path):
    return JsonFileStore(tmp_path / "storage")


@pytest.fixture()
def tags(store):
    return TagRegistry(store)


@pytest.fixture()
def notes(store, tags):
    return NoteRepository(store, tags)


@pytest.fixture()
def pending(store):
    return PendingUploads(store)


@pytest.fixture()
def image_host():
    return FakeImageHost()


@pytest.fixture()
def attachments(image_host, pending):
    return AttachmentManager(image_host, pending)


@pytest.fixture()
def chat_client():
    return FakeChatClient()


@pytest.fixture()
def pdf_renderer():
    return FakePdfRenderer()


@pytest.fixture()
def client(image_host, chat_client, pdf_renderer):
    # third-party services are replaced for every router test
    app.dependency_overrides[get_image_host] = lambda: image_host
    app.dependency_overrides[get_chat_client] = lambda: chat_client
    app.dependency_overrides[get_pdf_renderer] = lambda: pdf_renderer
    yield TestClient(app)
    app.dependency_overrides.clear()
