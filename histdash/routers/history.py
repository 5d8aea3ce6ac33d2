"""History analytics API router."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from histdash.categories import summarize_categories
from histdash.errors import HistoryReadError
from histdash.history_store import history_store
from histdash.services.patterns import session_summaries
from histdash.services.query_engine import QueryEngine, to_jsonable


history_router = APIRouter(prefix="/api/history", tags=["history"])


def _get_engine() -> QueryEngine:
    try:
        return history_store.get_engine()
    except HistoryReadError as exc:
        status = 404 if exc.missing else 500
        raise HTTPException(status_code=status, detail=str(exc)) from exc


@history_router.get("/overview")
async def get_overview():
    engine = _get_engine()
    return to_jsonable(engine.analysis.overview())


@history_router.get("/sessions")
async def get_sessions():
    engine = _get_engine()
    return to_jsonable(session_summaries(engine.analysis.sessions))


@history_router.get("/categories")
async def get_categories():
    engine = _get_engine()
    analysis = engine.analysis
    return to_jsonable(summarize_categories(analysis.categories, analysis.total))


@history_router.get("/queries")
async def list_queries():
    engine = _get_engine()
    return {"queries": engine.names()}


@history_router.get("/query/{name}")
async def run_query(
    name: str,
    args: list[str] = Query(default=[], description="Positional query arguments"),
):
    engine = _get_engine()
    try:
        result = engine.run(name, *args)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"query": name, "args": list(args), "result": to_jsonable(result)}


@history_router.post("/reload")
async def reload_history():
    history_store.invalidate()
    overview = _get_engine().analysis.overview()
    return {"status": "ok", "path": str(history_store.history_path), "overview": to_jsonable(overview)}
