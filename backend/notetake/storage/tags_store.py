import uuid
from notetake.core.records import Tag
from notetake.storage.kv_store import JsonFileStore

TAGS_KEY = "TAGS"


class TagRegistry:
    def __init__(self, store: JsonFileStore):
        self.store = store

    def list_tags(self) -> list[Tag]:
        return [Tag.from_dict(raw) for raw in self.store.get(TAGS_KEY, [])]

    def get(self, tag_id: str) -> Tag | None:
        for tag in self.list_tags():
            if tag.id == tag_id:
                return tag
        return None

    def add(self, tag: Tag) -> Tag:
        # labels are not unique; only ids identify a tag
        tags = self.list_tags()
        tags.append(tag)
        self._save(tags)
        return tag

    def create(self, label: str) -> Tag:
        return self.add(Tag(id=str(uuid.uuid4()), label=label))

    def update(self, tag_id: str, label: str) -> None:
        tags = self.list_tags()
        if not any(t.id == tag_id for t in tags):
            return
        self._save([Tag(id=t.id, label=label) if t.id == tag_id else t for t in tags])

    def remove(self, tag_id: str) -> None:
        # notes keep the dangling id; resolution drops it at read time
        tags = self.list_tags()
        remaining = [t for t in tags if t.id != tag_id]
        if len(remaining) == len(tags):
            return
        self._save(remaining)

    def _save(self, tags: list[Tag]) -> None:
        self.store.set(TAGS_KEY, [t.to_dict() for t in tags])
