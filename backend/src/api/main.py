"""FastAPI application main entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .middleware import register_error_handlers
from .routes import search
from ..services.config import get_config
from ..services.database import close_mongo_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release the shared store client on shutdown."""
    config = get_config()
    logger.info(
        "Dictionary search API starting",
        extra={"db_name": config.db_name, "collection": config.entries_collection},
    )
    yield
    close_mongo_client()
    logger.info("Dictionary search API stopped")


app = FastAPI(
    title="Dictionary Search API",
    description="Search multilingual dictionary entries",
    version="0.1.0",
    lifespan=lifespan,
)

register_error_handlers(app)
app.include_router(search.router, tags=["search"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


__all__ = ["app"]
