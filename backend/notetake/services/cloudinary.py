import asyncio
import os

import cloudinary
import cloudinary.uploader

from notetake.core.records import ImageAttachment

UPLOAD_FOLDER = "uploads"
ALLOWED_FORMATS = ["jpg", "png", "jpeg", "gif"]


def _required_env(name: str) -> str:
    value = os.getenv(name, "")
    if not value:
        raise RuntimeError(f"{name} is not set")
    return value


def public_id_for(filename: str) -> str:
    # "photo.final.png" -> "photo"
    return filename.split(".")[0]


class CloudinaryImageHost:
    """Image host backed by the Cloudinary SDK.

    The SDK is configured globally and its calls block, so each one runs in a
    worker thread.
    """

    def __init__(self, folder: str = UPLOAD_FOLDER):
        self.folder = folder

    @classmethod
    def from_env(cls) -> "CloudinaryImageHost":
        cloudinary.config(
            cloud_name=_required_env("CLOUDINARY_CLOUD_NAME"),
            api_key=_required_env("CLOUDINARY_API_KEY"),
            api_secret=_required_env("CLOUDINARY_API_SECRET"),
        )
        return cls()

    async def upload(self, filename: str, content: bytes, content_type: str) -> ImageAttachment:
        result = await asyncio.to_thread(
            cloudinary.uploader.upload,
            content,
            folder=self.folder,
            public_id=public_id_for(filename),
            allowed_formats=ALLOWED_FORMATS,
        )
        return ImageAttachment(url=result["secure_url"], public_id=result["public_id"])

    async def delete(self, public_id: str) -> None:
        # an unknown public_id answers {"result": "not found"}; not an error
        await asyncio.to_thread(cloudinary.uploader.destroy, public_id)
