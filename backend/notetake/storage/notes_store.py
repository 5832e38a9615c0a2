import uuid
from typing import Iterable

from notetake.core.records import Note, NoteData, ResolvedNote, Tag
from notetake.storage.kv_store import JsonFileStore
from notetake.storage.tags_store import TagRegistry

NOTES_KEY = "NOTES"


def resolve_notes(notes: Iterable[Note], tags: Iterable[Tag]) -> list[ResolvedNote]:
    """Attach Tag objects to every note.

    Tags keep the registry's order. Ids with no matching tag (deleted tags)
    are dropped silently.
    """
    tags = list(tags)
    out: list[ResolvedNote] = []
    for note in notes:
        wanted = set(note.tag_ids)
        out.append(
            ResolvedNote(
                id=note.id,
                title=note.title,
                markdown=note.markdown,
                tags=tuple(t for t in tags if t.id in wanted),
                images=note.images,
            )
        )
    return out


def _note_from_data(note_id: str, data: NoteData) -> Note:
    return Note(
        id=note_id,
        title=data.title,
        markdown=data.markdown,
        tag_ids=tuple(t.id for t in data.tags),
        images=tuple(data.images),
    )


class NoteRepository:
    def __init__(self, store: JsonFileStore, tags: TagRegistry):
        self.store = store
        self.tags = tags

    def list_raw(self) -> list[Note]:
        return [Note.from_dict(raw) for raw in self.store.get(NOTES_KEY, [])]

    def list_resolved(self) -> list[ResolvedNote]:
        return resolve_notes(self.list_raw(), self.tags.list_tags())

    def get(self, note_id: str) -> ResolvedNote | None:
        for note in self.list_resolved():
            if note.id == note_id:
                return note
        return None

    def create(self, data: NoteData) -> Note:
        note = _note_from_data(str(uuid.uuid4()), data)
        notes = self.list_raw()
        notes.append(note)
        self._save(notes)
        return note

    def update(self, note_id: str, data: NoteData) -> Note | None:
        notes = self.list_raw()
        for i, existing in enumerate(notes):
            if existing.id == note_id:
                updated = _note_from_data(existing.id, data)
                notes[i] = updated
                self._save(notes)
                return updated
        return None

    def delete(self, note_id: str) -> bool:
        notes = self.list_raw()
        remaining = [n for n in notes if n.id != note_id]
        if len(remaining) == len(notes):
            return False
        self._save(remaining)
        return True

    def _save(self, notes: list[Note]) -> None:
        # whole collection in one write
        self.store.set(NOTES_KEY, [n.to_dict() for n in notes])
