"""Keeps a draft's image attachments consistent with its markdown.

Images are uploaded as soon as they are attached, so an edit that is never
saved leaves files behind in the image host. Every upload is therefore
recorded in the persisted pending list until the note is saved; at save time
only images still referenced by the markdown are kept and the rest are
deleted.
"""
import asyncio
import re
from typing import Iterable, Protocol

from notetake.core.errors import CollaboratorError, UploadFailed
from notetake.core.records import Draft, ImageAttachment
from notetake.storage.pending_uploads import PendingUploads
from notetake.utils.logging import get_logger

logger = get_logger(__name__)


class ImageHost(Protocol):
    async def upload(self, filename: str, content: bytes, content_type: str) -> ImageAttachment: ...

    async def delete(self, public_id: str) -> None: ...


def image_markdown(alt: str, url: str) -> str:
    return f"![{alt}]({url})"


def insert_image_reference(
    markdown: str,
    snippet: str,
    selection: tuple[int, int] | None = None,
) -> str:
    if selection is None:
        return markdown + "\n" + snippet
    start, end = selection
    return markdown[:start] + "\n\n" + snippet + "\n\n" + markdown[end:]


def strip_image_reference(markdown: str, url: str) -> str:
    # exact url followed by ")" so "a.png" never matches "a.png2" or "ba.png"
    pattern = re.compile(r"!\[[^\]]*\]\(" + re.escape(url) + r"\)\n?")
    return pattern.sub("", markdown)


def partition_images(
    markdown: str, images: Iterable[ImageAttachment]
) -> tuple[list[ImageAttachment], list[ImageAttachment]]:
    referenced: list[ImageAttachment] = []
    unreferenced: list[ImageAttachment] = []
    for image in images:
        (referenced if image.url in markdown else unreferenced).append(image)
    return referenced, unreferenced


class AttachmentManager:
    def __init__(self, host: ImageHost, pending: PendingUploads):
        self.host = host
        self.pending = pending

    async def attach(
        self,
        draft: Draft,
        filename: str,
        content: bytes,
        content_type: str,
        selection: tuple[int, int] | None = None,
    ) -> ImageAttachment:
        try:
            image = await self.host.upload(filename, content, content_type)
        except CollaboratorError as err:
            logger.error("Image upload failed", extra={"upload_filename": filename, "error": str(err)})
            if isinstance(err, UploadFailed):
                raise
            raise UploadFailed(str(err), err.status_code) from err

        draft.images.append(image)
        self.pending.add(image.public_id)
        draft.markdown = insert_image_reference(
            draft.markdown, image_markdown(filename, image.url), selection
        )
        return image

    async def detach(self, draft: Draft, public_id: str) -> bool:
        image = next((i for i in draft.images if i.public_id == public_id), None)
        if image is None:
            return False
        try:
            await self.host.delete(public_id)
        except CollaboratorError as err:
            logger.error("Failed to delete image", extra={"public_id": public_id, "error": str(err)})
            return False

        draft.images = [i for i in draft.images if i.public_id != public_id]
        draft.markdown = strip_image_reference(draft.markdown, image.url)
        self.pending.discard(public_id)
        return True

    async def reconcile(self, draft: Draft) -> list[ImageAttachment]:
        """Delete images the markdown no longer mentions; return the rest."""
        referenced, unreferenced = partition_images(draft.markdown, draft.images)
        await self._delete_all(i.public_id for i in unreferenced)
        return referenced

    def commit(self) -> None:
        self.pending.clear()

    async def cleanup_abandoned(self) -> list[str]:
        public_ids = self.pending.list()
        if not public_ids:
            return []
        await self._delete_all(public_ids)
        self.pending.clear()
        logger.info("Orphaned images cleaned up", extra={"count": len(public_ids)})
        return public_ids

    async def _delete_all(self, public_ids: Iterable[str]) -> None:
        public_ids = list(public_ids)
        results = await asyncio.gather(
            *(self.host.delete(p) for p in public_ids), return_exceptions=True
        )
        for public_id, result in zip(public_ids, results):
            if isinstance(result, Exception):
                logger.warning(
                    "Background image delete failed",
                    extra={"public_id": public_id, "error": str(result)},
                )
