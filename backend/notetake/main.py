import os

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notetake.api import chat, export, media
from notetake.utils.logging import setup_logging


def _cors_origins() -> list[str]:
    return [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


def _port() -> int:
    try:
        return int(os.getenv("PORT", "3001"))
    except ValueError:
        return 3001


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(title="Notetake API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(media.router)
    app.include_router(export.router)
    app.include_router(chat.router)

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    uvicorn.run("notetake.main:app", host="0.0.0.0", port=_port())
