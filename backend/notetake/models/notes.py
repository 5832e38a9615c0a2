from pydantic import BaseModel


class TagOut(BaseModel):
    id: str
    label: str


class ImageOut(BaseModel):
    url: str
    public_id: str


class NoteContext(BaseModel):
    """A resolved note as the client sends it along with a chat request."""

    id: str = ""
    title: str = ""
    markdown: str = ""
    tags: list[TagOut] = []
    images: list[ImageOut] = []
