"""
Projects API
------------
Serves the primary source the feed reads from:

    GET /api/projects       live fetch from GitHub, same document as a snapshot
    GET /api/projects.json  the static snapshot file, when one is configured
    GET /api/health         liveness check

The fetcher is injected, so tests drive the app through httpx's ASGI
transport with a fake IRepoFetcher and never touch GitHub.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Awaitable, Callable

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse

from portfolio_feed.domain.errors import GitHubAPIError
from portfolio_feed.domain.interfaces import IRepoFetcher
from portfolio_feed.infrastructure.github_client import build_snapshot

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def _rfc3339(moment: datetime) -> str:
    return moment.isoformat(timespec="seconds").replace("+00:00", "Z")


def create_app(
    fetcher: IRepoFetcher,
    username: str,
    snapshot_path: Path | None = None,
    clock: Callable[[], datetime] = _utcnow,
    on_shutdown: Callable[[], Awaitable[None]] | None = None,
) -> FastAPI:
    """
    Build the API. `on_shutdown` lets the caller close resources it
    created for the fetcher (the httpx client) when the server stops.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("API ready | user=%s | snapshot=%s", username, snapshot_path)
        yield
        if on_shutdown is not None:
            await on_shutdown()

    app = FastAPI(title="Portfolio Projects API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.get("/api/projects")
    async def get_projects():
        log.info("📡 Fetching repositories for user: %s", username)
        try:
            repos = await fetcher.fetch_user_repos(username)
        except (GitHubAPIError, httpx.RequestError) as exc:
            log.error("❌ Error fetching repositories: %s", exc)
            return PlainTextResponse(f"Error fetching repositories: {exc}", status_code=500)

        log.info("✅ Successfully fetched %d repositories", len(repos))
        return JSONResponse(build_snapshot(repos, now=clock()))

    @app.get("/api/projects.json")
    async def get_snapshot():
        if snapshot_path is None or not snapshot_path.is_file():
            return PlainTextResponse("Not Found", status_code=404)
        return FileResponse(snapshot_path, media_type="application/json")

    @app.get("/api/health")
    async def health():
        return {"status": "healthy", "time": _rfc3339(clock())}

    return app
