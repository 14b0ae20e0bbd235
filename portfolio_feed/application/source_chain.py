from __future__ import annotations
import logging
from typing import Sequence
from portfolio_feed.domain.entities import SourceDescriptor
from portfolio_feed.domain.errors import SourceAttemptError, SourcesExhausted
from portfolio_feed.domain.interfaces import ISourceAttempter

log = logging.getLogger(__name__)


class SourceChainResolver:
    """
    Tries an ordered list of sources, stopping at the first success.

    Strictly sequential: a source is attempted once, and only after the
    previous one has failed. Never contacts a source after a success.
    """

    def __init__(self, attempter: ISourceAttempter) -> None:
        self._attempter = attempter

    async def resolve(self, sources: Sequence[SourceDescriptor]) -> str:
        """Return the first successful raw body, or raise SourcesExhausted."""
        last_error: SourceAttemptError | None = None

        for position, source in enumerate(sources, start=1):
            log.info("Trying source %d/%d: %s (%s)", position, len(sources), source.label, source.url)
            try:
                body = await self._attempter.attempt(source)
            except SourceAttemptError as exc:
                last_error = exc
                continue
            log.info("Using %s source", source.label)
            return body

        if last_error is None:
            raise SourcesExhausted("No sources configured", attempts=0)

        log.error("All %d sources failed, last error from %s: %s",
                  len(sources), last_error.label, last_error.message)
        raise SourcesExhausted(
            f"All sources failed; last error ({last_error.label}): {last_error.message}",
            attempts=len(sources),
        )
