"""
Domain Layer — Failure Taxonomy
-------------------------------
Every pipeline stage raises one of these and nothing else.
The projector turns them into Failed(FailureReason(kind, message)).
"""

from __future__ import annotations

from .entities import FailureKind


class PipelineError(Exception):
    """Base class for every classified pipeline failure."""

    kind: FailureKind = FailureKind.UNEXPECTED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SourceAttemptError(PipelineError):
    """One source failed. Internal to the chain resolver."""

    kind = FailureKind.SOURCES_EXHAUSTED

    def __init__(self, label: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.label       = label
        self.status_code = status_code


class SourcesExhausted(PipelineError):
    kind = FailureKind.SOURCES_EXHAUSTED

    def __init__(self, message: str, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


class EmptyPayload(PipelineError):
    kind = FailureKind.EMPTY_PAYLOAD

    def __init__(self, message: str = "Empty response received") -> None:
        super().__init__(message)


class DecodeError(PipelineError):
    """
    Body was not valid JSON after sanitization.

    `text` keeps the sanitized input for diagnostics only; it is never
    part of the user-facing message.
    """

    kind = FailureKind.DECODE_ERROR

    def __init__(self, message: str, text: str = "") -> None:
        super().__init__(message)
        self.text = text


class SchemaError(PipelineError):
    """Decoded value violated the expected top-level shape."""


class NotAnObject(SchemaError):
    kind = FailureKind.NOT_AN_OBJECT


class ProjectsNotArray(SchemaError):
    kind = FailureKind.PROJECTS_NOT_ARRAY


class InvalidLastUpdated(SchemaError):
    kind = FailureKind.INVALID_LAST_UPDATED


class ActivationError(RuntimeError):
    """activate() was called twice on the same ProjectFeed."""


class GitHubAPIError(Exception):
    """The GitHub REST API answered with something other than 200."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"GitHub API returned status: {status_code}, body: {body}")
        self.status_code = status_code
        self.body        = body
