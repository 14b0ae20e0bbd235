from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import httpx

from portfolio_feed.application.validator import coerce_record
from portfolio_feed.domain.entities import RepositoryRecord
from portfolio_feed.domain.errors import GitHubAPIError
from portfolio_feed.domain.interfaces import IRepoFetcher

log = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
PER_PAGE       = 100
TIMEOUT_SECS   = 10.0
USER_AGENT     = "GitHub-Portfolio-API/1.0"


class GitHubRestClient(IRepoFetcher):
    """
    Concrete IRepoFetcher for GitHub's REST API.

    The constructor receives an httpx.AsyncClient (injected) rather than
    creating one internally. This lets callers control the client lifecycle
    and makes testing trivial — just pass in a client with a MockTransport.
    """

    def __init__(self, client: httpx.AsyncClient, token: str | None = None) -> None:
        self._client = client
        self._headers = {
            "Accept":     "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }
        if token:
            self._headers["Authorization"] = f"token {token}"
            log.info("Using GitHub token for authentication")
        else:
            log.info("No GitHub token found, using unauthenticated requests (rate limited)")

    async def fetch_user_repos(self, username: str) -> list[RepositoryRecord]:
        """
        Fetch one page (up to 100) of the user's repos, most recently
        updated first. The user's own `<username>.github.io` site repo is
        dropped since it is the portfolio itself.
        """
        response = await self._client.get(
            f"{GITHUB_API_URL}/users/{username}/repos",
            params={"sort": "updated", "per_page": PER_PAGE},
            headers=self._headers,
            timeout=TIMEOUT_SECS,
        )
        if response.status_code != 200:
            log.warning("GitHub API response: %s", response.text)
            raise GitHubAPIError(response.status_code, response.text)

        nodes = response.json()
        if not isinstance(nodes, list):
            raise GitHubAPIError(response.status_code, "expected a JSON array of repositories")

        site_repo = f"{username}.github.io"
        repos = [coerce_record(node) for node in nodes]
        repos = [r for r in repos if r.name != site_repo]

        log.info("Fetched %d repositories for %s (%d after filtering)", len(nodes), username, len(repos))
        return repos


# ---------------------------------------------------------------------------
# Snapshot document — the static fallback served as /api/projects.json
# ---------------------------------------------------------------------------

def encode_record(record: RepositoryRecord) -> dict:
    """Inverse of the validator's field mapping: domain → wire."""
    return {
        "id":               record.id,
        "name":             record.name,
        "full_name":        record.full_name,
        "description":      record.description,
        "html_url":         record.url,
        "language":         record.primary_language,
        "stargazers_count": record.star_count,
        "forks_count":      record.fork_count,
        "created_at":       record.created_at,
        "updated_at":       record.updated_at,
        "topics":           list(record.topics),
    }


def build_snapshot(records: list[RepositoryRecord], now: datetime | None = None) -> dict:
    now = now or datetime.now(tz=timezone.utc)
    return {
        "projects":    [encode_record(r) for r in records],
        "lastUpdated": now.isoformat(timespec="seconds").replace("+00:00", "Z"),
    }


def write_snapshot(document: dict, output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)
        f.write("\n")
    log.info("Wrote %d projects to %s", len(document["projects"]), output)
