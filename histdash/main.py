"""histdash FastAPI application entry point."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from histdash import __version__, config
from histdash.errors import HistoryReadError
from histdash.history_store import history_store
from histdash.routers.history import history_router

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger("histdash")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    logger.info("histdash API starting up")
    try:
        overview = history_store.get_analysis().overview()
        logger.info("Loaded %d commands in %d sessions", overview.totalCommands, overview.sessionCount)
    except HistoryReadError as exc:
        # Endpoints report the error per request until the file appears.
        logger.warning("%s", exc)
    yield
    logger.info("histdash API shutting down")


app = FastAPI(
    title="histdash API",
    description="Read-only analytics over a shell command history",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        config.FRONTEND_ORIGIN,
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(history_router)


@app.get("/api/health")
def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "historyFile": str(history_store.history_path),
        "historyFileExists": history_store.history_path.exists(),
    }
