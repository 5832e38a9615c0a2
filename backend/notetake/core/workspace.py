from pathlib import Path
from typing import Iterable

from notetake.core.api_client import NotetakeApiClient
from notetake.core.attachments import AttachmentManager
from notetake.core.chat_session import ChatSession
from notetake.core.editor import NoteEditor
from notetake.core.errors import ExportFailed
from notetake.core.export import export_filename, render_note_html
from notetake.core.listing import filter_notes
from notetake.core.records import ResolvedNote
from notetake.storage.kv_store import JsonFileStore
from notetake.storage.notes_store import NoteRepository
from notetake.storage.pending_uploads import PendingUploads
from notetake.storage.tags_store import TagRegistry
from notetake.utils.logging import get_logger

logger = get_logger(__name__)


class Workspace:
    """One user's notes, tags and pending uploads, wired to the backend."""

    def __init__(self, data_dir: Path, api: NotetakeApiClient):
        self.store = JsonFileStore(data_dir)
        self.api = api
        self.tags = TagRegistry(self.store)
        self.notes = NoteRepository(self.store, self.tags)
        self.pending = PendingUploads(self.store)
        self.attachments = AttachmentManager(api, self.pending)

    def list_notes(self, title: str = "", tag_ids: Iterable[str] = ()) -> list[ResolvedNote]:
        return filter_notes(self.notes.list_resolved(), title, tag_ids)

    def get_note(self, note_id: str) -> ResolvedNote | None:
        return self.notes.get(note_id)

    async def open_editor(self, note_id: str | None = None) -> NoteEditor | None:
        """Mounted editor for a new note, or for ``note_id``; None if that note is gone."""
        note = None
        if note_id is not None:
            note = self.notes.get(note_id)
            if note is None:
                return None
        editor = NoteEditor(self.notes, self.tags, self.attachments, note)
        await editor.mount()
        return editor

    def delete_note(self, note_id: str) -> bool:
        return self.notes.delete(note_id)

    def rename_tag(self, tag_id: str, label: str) -> None:
        self.tags.update(tag_id, label)

    def delete_tag(self, tag_id: str) -> None:
        self.tags.remove(tag_id)

    async def export_pdf(self, note_id: str, base_href: str = "") -> tuple[str, bytes] | None:
        note = self.notes.get(note_id)
        if note is None or not note.markdown:
            return None
        try:
            pdf = await self.api.export_pdf(render_note_html(note, base_href))
        except ExportFailed as err:
            logger.error("Export PDF failed", extra={"note_id": note_id, "error": str(err)})
            raise
        return export_filename(note), pdf

    def chat(self, **kwargs) -> ChatSession:
        return ChatSession(self.api, **kwargs)
