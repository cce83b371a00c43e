from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taggerlink.api import features_router, health_router, tags_router
from taggerlink.config import settings
from taggerlink.db.database import init_db
from taggerlink.tagger.frame import close_frames


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    yield
    await close_frames()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("taggerlink"),
    lifespan=lifespan,
)

app.include_router(features_router)
app.include_router(health_router)
app.include_router(tags_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["https://scryfall.com"],
    allow_credentials=False,
    allow_methods=["GET", "PUT"],
    allow_headers=["*"],
)
