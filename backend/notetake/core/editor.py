from typing import Iterable

from notetake.core.attachments import AttachmentManager
from notetake.core.records import Draft, ImageAttachment, Note, NoteData, ResolvedNote, Tag
from notetake.storage.notes_store import NoteRepository
from notetake.storage.tags_store import TagRegistry

UNSAVED_WORK_WARNING = "You have unsaved changes. Are you sure you want to leave?"


class NoteEditor:
    """Form state for creating a note or editing an existing one.

    Works on a local draft; nothing reaches the repository until submit().
    """

    def __init__(
        self,
        notes: NoteRepository,
        tags: TagRegistry,
        attachments: AttachmentManager,
        note: ResolvedNote | None = None,
    ):
        self.notes = notes
        self.tags = tags
        self.attachments = attachments
        self.note = note
        self.saved_markdown = note.markdown if note else ""
        self.draft = Draft(
            title=note.title if note else "",
            markdown=self.saved_markdown,
            tags=list(note.tags) if note else [],
            images=list(note.images) if note else [],
        )

    async def mount(self) -> list[str]:
        return await self.attachments.cleanup_abandoned()

    @property
    def available_tags(self) -> list[Tag]:
        return self.tags.list_tags()

    def set_title(self, title: str) -> None:
        self.draft.title = title

    def set_markdown(self, markdown: str) -> None:
        self.draft.markdown = markdown

    def select_tags(self, tags: Iterable[Tag]) -> None:
        self.draft.tags = list(tags)

    def create_tag(self, label: str) -> Tag:
        tag = self.tags.create(label)
        self.draft.tags.append(tag)
        return tag

    async def insert_image(
        self,
        filename: str,
        content: bytes,
        content_type: str,
        selection: tuple[int, int] | None = None,
    ) -> ImageAttachment:
        return await self.attachments.attach(self.draft, filename, content, content_type, selection)

    async def delete_image(self, public_id: str) -> bool:
        return await self.attachments.detach(self.draft, public_id)

    def has_unsaved_work(self) -> bool:
        return self.draft.markdown != self.saved_markdown or bool(self.attachments.pending)

    def before_unload(self) -> str | None:
        # advisory only: the caller decides whether to show it
        return UNSAVED_WORK_WARNING if self.has_unsaved_work() else None

    async def submit(self) -> Note | None:
        if not self.draft.title:
            raise ValueError("Title is required")
        if not self.draft.markdown:
            raise ValueError("Body is required")

        referenced = await self.attachments.reconcile(self.draft)
        data = NoteData(
            title=self.draft.title,
            markdown=self.draft.markdown,
            tags=tuple(self.draft.tags),
            images=tuple(referenced),
        )
        if self.note is None:
            saved = self.notes.create(data)
        else:
            # None when the note was deleted elsewhere while editing
            saved = self.notes.update(self.note.id, data)
        self.attachments.commit()
        self.draft.images = list(referenced)
        self.saved_markdown = self.draft.markdown
        return saved
