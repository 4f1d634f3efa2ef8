"""Meta/system API routes."""

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool

from yield_reports import __version__

router = APIRouter(tags=["meta"])


@router.get("/health")
async def health(request: Request) -> dict:
    """Health check endpoint.

    Always returns 200; `database` reports whether the summary database
    could be opened.
    """
    store = request.app.state.store
    available = await run_in_threadpool(store.is_available)
    return {
        "status": "healthy",
        "database": "available" if available else "unavailable",
        "version": __version__,
    }
