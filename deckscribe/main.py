from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deckscribe.api import decklists_router, health_router
from deckscribe.config import settings
from deckscribe.services.collection_store import collection_store


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    if settings.collection.directory is not None:
        collection_store.sync()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("deckscribe"),
    lifespan=lifespan,
)

app.include_router(decklists_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
