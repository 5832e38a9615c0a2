from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Tag:
    id: str
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Tag":
        return cls(id=raw["id"], label=raw["label"])


@dataclass(frozen=True)
class ImageAttachment:
    url: str
    public_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "public_id": self.public_id}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ImageAttachment":
        return cls(url=raw["url"], public_id=raw["public_id"])


@dataclass(frozen=True)
class Note:
    """Stored form of a note: tags are kept as ids only."""

    id: str
    title: str
    markdown: str
    tag_ids: tuple[str, ...] = ()
    images: tuple[ImageAttachment, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "markdown": self.markdown,
            "tagIds": list(self.tag_ids),
            "images": [img.to_dict() for img in self.images],
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Note":
        # notes saved before attachments existed carry no "images" field
        return cls(
            id=raw["id"],
            title=raw["title"],
            markdown=raw["markdown"],
            tag_ids=tuple(raw.get("tagIds") or ()),
            images=tuple(ImageAttachment.from_dict(i) for i in raw.get("images") or ()),
        )


@dataclass(frozen=True)
class ResolvedNote:
    """View form of a note: tag ids replaced by the Tag objects they point to."""

    id: str
    title: str
    markdown: str
    tags: tuple[Tag, ...] = ()
    images: tuple[ImageAttachment, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "markdown": self.markdown,
            "tags": [t.to_dict() for t in self.tags],
            "images": [img.to_dict() for img in self.images],
        }


@dataclass(frozen=True)
class NoteData:
    title: str
    markdown: str
    tags: tuple[Tag, ...] = ()
    images: tuple[ImageAttachment, ...] = ()


@dataclass
class Draft:
    """Editable copy of a note held by the editor until save."""

    title: str = ""
    markdown: str = ""
    tags: list[Tag] = field(default_factory=list)
    images: list[ImageAttachment] = field(default_factory=list)


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "user" or "assistant"
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}
