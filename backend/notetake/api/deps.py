"""Third-party collaborators handed to the routers.

Built lazily on first use so the app starts without credentials; tests swap
them out through ``app.dependency_overrides``.
"""
from functools import lru_cache

from notetake.services.cloudinary import CloudinaryImageHost
from notetake.services.groq_chat import GroqChatClient
from notetake.services.pdf_renderer import PlaywrightPdfRenderer


@lru_cache(maxsize=1)
def get_image_host() -> CloudinaryImageHost:
    return CloudinaryImageHost.from_env()


@lru_cache(maxsize=1)
def get_chat_client() -> GroqChatClient:
    return GroqChatClient.from_env()


@lru_cache(maxsize=1)
def get_pdf_renderer() -> PlaywrightPdfRenderer:
    return PlaywrightPdfRenderer()
