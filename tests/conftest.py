from __future__ import annotations

import json

import httpx
import pytest

from portfolio_feed.domain.entities import SourceDescriptor
from portfolio_feed.domain.errors import SourceAttemptError
from portfolio_feed.domain.interfaces import ISourceAttempter

BASE_URL = "http://portfolio.test"

VALID_BODY = json.dumps({
    "projects": [{
        "id": 1, "name": "x", "full_name": "u/x", "description": "d",
        "html_url": "h", "language": "Go", "stargazers_count": 3,
        "forks_count": 1, "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-06-01T00:00:00Z", "topics": [],
    }],
    "lastUpdated": "2025-01-01",
})


class FakeSourceAttempter(ISourceAttempter):
    """Answers each source label from a script: a body string or an error message."""

    def __init__(self, script: dict[str, str | Exception]) -> None:
        self._script = script
        self.calls: list[str] = []

    async def attempt(self, source: SourceDescriptor) -> str:
        self.calls.append(source.label)
        answer = self._script[source.label]
        if isinstance(answer, Exception):
            raise SourceAttemptError(source.label, str(answer))
        return answer


def mock_client(routes: dict[str, httpx.Response | Exception], seen: list[str] | None = None) -> httpx.AsyncClient:
    """AsyncClient whose transport answers by URL path; unknown paths are 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request.url.path)
        answer = routes.get(request.url.path, httpx.Response(404, text="not found"))
        if isinstance(answer, Exception):
            raise answer
        return answer

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def valid_body() -> str:
    return VALID_BODY
