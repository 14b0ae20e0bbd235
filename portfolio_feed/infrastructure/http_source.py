from __future__ import annotations

import logging

import httpx

from portfolio_feed.domain.entities import SourceDescriptor
from portfolio_feed.domain.errors import SourceAttemptError
from portfolio_feed.domain.interfaces import ISourceAttempter

log = logging.getLogger(__name__)


class HttpSourceAttempter(ISourceAttempter):
    """
    Concrete ISourceAttempter backed by an injected httpx.AsyncClient.

    Exactly one GET per call: no retries, no timeout override. The client's
    own default timeout is the only bound on the request.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def attempt(self, source: SourceDescriptor) -> str:
        try:
            response = await self._client.get(source.url)
        except httpx.RequestError as exc:
            log.warning("Source %s unreachable (%s): %s", source.label, source.url, exc)
            raise SourceAttemptError(
                source.label,
                f"{source.label} source unreachable: {exc.__class__.__name__}: {exc}",
            ) from exc

        if not response.is_success:
            log.warning("Source %s returned HTTP %d", source.label, response.status_code)
            raise SourceAttemptError(
                source.label,
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )

        log.info("Source %s answered HTTP %d (%d bytes)",
                 source.label, response.status_code, len(response.content))
        return response.text
