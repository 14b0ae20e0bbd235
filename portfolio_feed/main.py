"""
main.py — Dependency Wiring (Composition Root)
------------------------------------------------
This file has ONE job: wire the pieces together and run a command.

It does NOT contain any pipeline logic. It just:
  1. Reads configuration from environment variables and flags
  2. Creates the httpx client and the concrete infrastructure classes
  3. Injects them into the application classes
  4. Runs the command and reports the result

Dependency graph:
                      main.py  (wires everything)
                         │
           ┌─────────────┴──────────────┐
           ▼                            ▼
      ProjectFeed                GitHubRestClient
           │                    (snapshot, serve)
           ▼
   SourceChainResolver
           │
           ▼
   HttpSourceAttempter ── httpx.AsyncClient
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

import httpx
import uvicorn

# Application layer
from portfolio_feed.application.projector import ProjectFeed, default_sources
from portfolio_feed.application.source_chain import SourceChainResolver
from portfolio_feed.domain.entities import Succeeded
from portfolio_feed.domain.errors import GitHubAPIError

# Infrastructure layer
from portfolio_feed.infrastructure.github_client import GitHubRestClient, build_snapshot, write_snapshot
from portfolio_feed.infrastructure.http_source import HttpSourceAttempter
from portfolio_feed.presentation import render_view
from portfolio_feed.server import create_app

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_SNAPSHOT = Path("api") / "projects.json"
DEFAULT_HOST     = "0.0.0.0"
DEFAULT_PORT     = 8080


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )


def _require(value: str | None, name: str) -> str:
    """Fail fast with a clear error if a required setting is missing."""
    if not value:
        log.error("%s is required (flag or environment variable)", name)
        sys.exit(1)
    return value


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

async def run_fetch(base_url: str, client: httpx.AsyncClient | None = None) -> int:
    """
    One activation of the project feed. Returns the process exit code.

    Pass `client` to reuse a caller-owned client; otherwise one is created
    and closed here.
    """
    owns_client = client is None
    client = client or httpx.AsyncClient()

    try:
        resolver = SourceChainResolver(attempter=HttpSourceAttempter(client))
        feed     = ProjectFeed(resolver=resolver, sources=default_sources(base_url))

        outcome = await feed.activate()
        print(render_view(feed.view()))

        if isinstance(outcome, Succeeded):
            log.info("✅ Loaded %d projects from %s", len(outcome.collection.records), base_url)
            return 0
        log.error("❌ Failed | %s: %s", outcome.reason.kind.value, outcome.reason.message)
        return 1
    finally:
        if owns_client:
            await client.aclose()


async def run_snapshot(username: str, token: str | None, output: Path) -> int:
    """Write the static fallback document from the GitHub REST API."""
    async with httpx.AsyncClient() as client:
        github = GitHubRestClient(client=client, token=token)
        try:
            repos = await github.fetch_user_repos(username)
        except (GitHubAPIError, httpx.RequestError) as exc:
            log.error("❌ Error fetching repositories: %s", exc)
            return 1

    write_snapshot(build_snapshot(repos), output)
    log.info("✅ Snapshot of %d repositories written to %s", len(repos), output)
    return 0


def run_serve(username: str, token: str | None, snapshot: Path, host: str, port: int) -> None:
    """Serve /api/projects live from GitHub, with the snapshot as /api/projects.json."""
    client = httpx.AsyncClient()
    app    = create_app(
        fetcher       = GitHubRestClient(client=client, token=token),
        username      = username,
        snapshot_path = snapshot,
        on_shutdown   = client.aclose,
    )
    log.info("🚀 Serving on http://%s:%d (GET /api/projects, /api/projects.json, /api/health)", host, port)
    uvicorn.run(app, host=host, port=port)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portfolio-feed",
        description="Load portfolio project metadata from the API or its static fallback",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    fetch = commands.add_parser("fetch", help="Run the project feed once and print the cards")
    fetch.add_argument(
        "--base-url",
        default = os.environ.get("PORTFOLIO_BASE_URL", DEFAULT_BASE_URL),
        help    = f"Host serving /api/projects (default: $PORTFOLIO_BASE_URL or {DEFAULT_BASE_URL})",
    )

    snapshot = commands.add_parser("snapshot", help="Write the static projects.json fallback")
    snapshot.add_argument(
        "--username",
        default = os.environ.get("GITHUB_USERNAME"),
        help    = "GitHub user whose repositories are listed (default: $GITHUB_USERNAME)",
    )
    snapshot.add_argument(
        "--output",
        type    = Path,
        default = DEFAULT_SNAPSHOT,
        help    = f"Where to write the document (default: {DEFAULT_SNAPSHOT})",
    )

    serve = commands.add_parser("serve", help="Serve the projects API the feed reads from")
    serve.add_argument(
        "--username",
        default = os.environ.get("GITHUB_USERNAME"),
        help    = "GitHub user whose repositories are served (default: $GITHUB_USERNAME)",
    )
    serve.add_argument(
        "--snapshot",
        type    = Path,
        default = DEFAULT_SNAPSHOT,
        help    = f"Static document served as /api/projects.json (default: {DEFAULT_SNAPSHOT})",
    )
    serve.add_argument("--host", default=os.environ.get("PORTFOLIO_HOST", DEFAULT_HOST))
    serve.add_argument("--port", type=int, default=int(os.environ.get("PORTFOLIO_PORT", DEFAULT_PORT)))
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "fetch":
        return asyncio.run(run_fetch(args.base_url))

    username = _require(args.username, "GITHUB_USERNAME")
    if args.command == "serve":
        run_serve(username, os.environ.get("GITHUB_TOKEN"), args.snapshot, args.host, args.port)
        return 0

    return asyncio.run(run_snapshot(username, os.environ.get("GITHUB_TOKEN"), args.output))


if __name__ == "__main__":
    sys.exit(main())
