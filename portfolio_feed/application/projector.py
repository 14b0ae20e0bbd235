from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from portfolio_feed.domain.entities import (
    FailureKind,
    FailureReason,
    Failed,
    FeedView,
    Pending,
    PipelineOutcome,
    ProjectCollection,
    SourceDescriptor,
    Succeeded,
)
from portfolio_feed.domain.errors import ActivationError, PipelineError
from .decoder import decode
from .sanitizer import sanitize
from .source_chain import SourceChainResolver
from .validator import validate

log = logging.getLogger(__name__)


class ProjectFeed:
    """
    One activation of the acquisition pipeline.

    Owns the single PipelineOutcome: it starts as Pending, is written once
    by whichever stage terminates, and is read-only afterwards. A fresh
    activation means a fresh ProjectFeed.

    Receives the resolver and sources via injection, so tests can run the
    whole state machine against a fake attempter.
    """

    def __init__(self, resolver: SourceChainResolver, sources: Sequence[SourceDescriptor]) -> None:
        self._resolver  = resolver
        self._sources   = tuple(sources)
        self._outcome: PipelineOutcome = Pending()
        self._task: asyncio.Task[ProjectCollection] | None = None
        self._activated   = False
        self._deactivated = False

    @property
    def outcome(self) -> PipelineOutcome:
        return self._outcome

    async def _run(self) -> ProjectCollection:
        raw = await self._resolver.resolve(self._sources)
        return validate(decode(sanitize(raw)))

    def _settle(self, outcome: PipelineOutcome) -> PipelineOutcome:
        """Write the terminal outcome. Only the first write sticks."""
        if isinstance(self._outcome, Pending):
            self._outcome = outcome
        return self._outcome

    @staticmethod
    def _cancelled() -> Failed:
        return Failed(FailureReason(FailureKind.CANCELLED, "Loading was cancelled"))

    async def activate(self) -> PipelineOutcome:
        """
        Run the pipeline once and return its terminal outcome.

        Raises ActivationError if this feed was already activated.
        """
        if self._activated:
            raise ActivationError("ProjectFeed can only be activated once")
        self._activated = True
        if self._deactivated:
            return self._settle(self._cancelled())

        self._task = asyncio.ensure_future(self._run())
        try:
            collection = await self._task
        except asyncio.CancelledError:
            if not self._deactivated:
                raise
            log.info("Activation cancelled before completion; result discarded")
            return self._settle(self._cancelled())
        except PipelineError as exc:
            log.error("Project feed failed [%s]: %s", exc.kind.value, exc.message)
            return self._settle(Failed(FailureReason(exc.kind, exc.message)))
        except Exception as exc:
            log.error("Project feed crashed: %s", exc, exc_info=True)
            return self._settle(Failed(FailureReason(FailureKind.UNEXPECTED, "Failed to fetch projects")))

        log.info("Project feed loaded %d projects", len(collection.records))
        return self._settle(Succeeded(collection))

    def deactivate(self) -> None:
        """
        Abandon the activation. An in-flight request is cancelled and any
        result it would have produced is discarded.
        """
        self._deactivated = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def view(self) -> FeedView:
        """Derive the consumer-facing snapshot from the current outcome."""
        outcome = self._outcome
        if isinstance(outcome, Succeeded):
            return FeedView(
                is_loading    = False,
                error_message = None,
                error_kind    = None,
                records       = outcome.collection.records,
                last_updated  = outcome.collection.last_updated,
            )
        if isinstance(outcome, Failed):
            return FeedView(
                is_loading    = False,
                error_message = outcome.reason.message,
                error_kind    = outcome.reason.kind,
                records       = (),
                last_updated  = "",
            )
        return FeedView(
            is_loading    = True,
            error_message = None,
            error_kind    = None,
            records       = (),
            last_updated  = "",
        )


def default_sources(base_url: str) -> list[SourceDescriptor]:
    """Primary API endpoint first, then the static snapshot file."""
    base = base_url.rstrip("/")
    return [
        SourceDescriptor(label="primary",  url=f"{base}/api/projects"),
        SourceDescriptor(label="fallback", url=f"{base}/api/projects.json"),
    ]
