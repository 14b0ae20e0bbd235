from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class RepositoryRecord:
    """
    Immutable domain entity representing one portfolio project.

    Field names are OURS (snake_case), not the wire format's.
    The translation happens in the validator, not here.
    """
    id:               int
    name:             str
    full_name:        str
    description:      str
    url:              str
    primary_language: str
    star_count:       int
    fork_count:       int
    created_at:       str
    updated_at:       str
    topics:           tuple[str, ...] = ()


@dataclass(frozen=True)
class ProjectCollection:
    """Ordered records exactly as received, plus the source's timestamp."""
    records:      tuple[RepositoryRecord, ...]
    last_updated: str = ""


class FailureKind(str, Enum):
    SOURCES_EXHAUSTED    = "sources_exhausted"
    EMPTY_PAYLOAD        = "empty_payload"
    DECODE_ERROR         = "decode_error"
    NOT_AN_OBJECT        = "not_an_object"
    PROJECTS_NOT_ARRAY   = "projects_not_array"
    INVALID_LAST_UPDATED = "invalid_last_updated"
    CANCELLED            = "cancelled"
    UNEXPECTED           = "unexpected"


@dataclass(frozen=True)
class FailureReason:
    kind:    FailureKind
    message: str


# ---------------------------------------------------------------------------
# PipelineOutcome — exactly one of Pending | Succeeded | Failed
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Pending:
    """No terminal result yet."""

    @property
    def is_terminal(self) -> bool:
        return False


@dataclass(frozen=True)
class Succeeded:
    collection: ProjectCollection

    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True)
class Failed:
    reason: FailureReason

    @property
    def is_terminal(self) -> bool:
        return True


PipelineOutcome = Pending | Succeeded | Failed


@dataclass(frozen=True)
class SourceDescriptor:
    """
    One endpoint the pipeline may fetch project data from.
    `label` is only used for logging and failure messages.
    """
    label: str
    url:   str


@dataclass(frozen=True)
class FeedView:
    """
    Read-only snapshot handed to the presentation layer.
    Derived from the current PipelineOutcome; never mutated by consumers.
    """
    is_loading:    bool
    error_message: str | None
    error_kind:    FailureKind | None
    records:       tuple[RepositoryRecord, ...]
    last_updated:  str
