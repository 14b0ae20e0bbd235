"""
Domain Layer — Interfaces (Abstract Contracts)
-----------------------------------------------
The application layer depends on these shapes; the infrastructure layer
implements them.

Benefit: a FakeSourceAttempter can stand in for the HTTP attempter in
tests without changing a single line of application code.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from .entities import RepositoryRecord, SourceDescriptor


class ISourceAttempter(ABC):
    """
    Contract for a single, bounded fetch against one source.
    """

    @abstractmethod
    async def attempt(self, source: SourceDescriptor) -> str:
        """
        Fetch the source once and return the raw body text.

        Raises:
            SourceAttemptError — transport failure or non-success status
        """
        ...


class IRepoFetcher(ABC):
    """
    Contract for anything that can list a user's repositories.
    Used by the snapshot command to build the static fallback document.
    """

    @abstractmethod
    async def fetch_user_repos(self, username: str) -> list[RepositoryRecord]:
        """Return the user's repositories, most recently updated first."""
        ...
