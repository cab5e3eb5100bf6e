from __future__ import annotations

import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv

from persistence import AsyncDocumentStorage, DocumentStorage, FilesystemStorage

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    storage = app.state.storage.storage
    root = getattr(storage, "root", None)
    logger.info("Serving documents from %s", root if root is not None else type(storage).__name__)
    yield


def create_app(storage: DocumentStorage | None = None) -> FastAPI:
    load_dotenv("local.env")

    from endpoints.storage_endpoints import router as storage_router
    from settings import get_settings

    if storage is None:
        storage = FilesystemStorage(get_settings().root)

    app = FastAPI(title="kvdocs", lifespan=lifespan)
    app.state.storage = AsyncDocumentStorage(storage)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(storage_router)

    return app


app = create_app()
