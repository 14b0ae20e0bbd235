"""
Schema Validator
----------------
Strict on the top-level shape, lenient per field.

    {"projects": [...], "lastUpdated": "..."}   →  ProjectCollection

The wire → domain field mapping lives HERE only (anti-corruption layer):

    wire field           domain field
    "full_name"       →  full_name
    "html_url"        →  url
    "language"        →  primary_language
    "stargazers_count"→  star_count
    "forks_count"     →  fork_count
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from portfolio_feed.domain.entities import ProjectCollection, RepositoryRecord
from portfolio_feed.domain.errors import InvalidLastUpdated, NotAnObject, ProjectsNotArray

log = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _count(value: Any) -> int:
    """Non-negative integer, 0 for anything that is not a number."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float) and value.is_integer():
        return max(int(value), 0)
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value)
    return 0


def _topics(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(t for t in value if isinstance(t, str))


def coerce_record(node: Any) -> RepositoryRecord:
    """Build a RepositoryRecord from one wire object; absent fields get defaults."""
    if not isinstance(node, Mapping):
        log.debug("Project entry is %s, not an object; using defaults", type(node).__name__)
        node = {}

    raw_id = node.get("id")
    return RepositoryRecord(
        id               = raw_id if isinstance(raw_id, int) and not isinstance(raw_id, bool) else _count(raw_id),
        name             = _text(node.get("name")),
        full_name        = _text(node.get("full_name")),
        description      = _text(node.get("description")),
        url              = _text(node.get("html_url")),
        primary_language = _text(node.get("language")),
        star_count       = _count(node.get("stargazers_count")),
        fork_count       = _count(node.get("forks_count")),
        created_at       = _text(node.get("created_at")),
        updated_at       = _text(node.get("updated_at")),
        topics           = _topics(node.get("topics")),
    )


def validate(value: Any) -> ProjectCollection:
    """
    Check the decoded value and assemble the collection, failing fast:

      1. not a mapping                → NotAnObject
      2. "projects" missing/not list  → ProjectsNotArray
      3. every entry coerced leniently
      4. "lastUpdated" not a string   → InvalidLastUpdated
    """
    if not isinstance(value, Mapping):
        kind = "null" if value is None else type(value).__name__
        raise NotAnObject(f"Invalid response: expected a JSON object, got {kind}")

    projects = value.get("projects")
    if not isinstance(projects, list):
        raise ProjectsNotArray("Invalid response: 'projects' is missing or not an array")

    records = tuple(coerce_record(node) for node in projects)

    last_updated = value.get("lastUpdated")
    if last_updated is None:
        last_updated = ""
    elif not isinstance(last_updated, str):
        raise InvalidLastUpdated(
            f"Invalid response: 'lastUpdated' must be a string, got {type(last_updated).__name__}"
        )

    log.debug("Validated %d project records (lastUpdated=%r)", len(records), last_updated)
    return ProjectCollection(records=records, last_updated=last_updated)
