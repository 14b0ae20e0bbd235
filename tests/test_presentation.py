"""Tests for the static presentation lookups."""

from __future__ import annotations

from portfolio_feed.domain.entities import FailureKind, FeedView, RepositoryRecord
from portfolio_feed.presentation import (
    DEFAULT_LANGUAGE_COLOR,
    format_date,
    language_color,
    render_card,
    render_view,
)

RECORD = RepositoryRecord(
    id=1, name="x", full_name="u/x", description="", url="https://github.com/u/x",
    primary_language="Go", star_count=3, fork_count=1,
    created_at="2024-01-01T00:00:00Z", updated_at="2024-06-01T00:00:00Z",
)


def _view(**overrides) -> FeedView:
    fields = dict(is_loading=False, error_message=None, error_kind=None, records=(), last_updated="")
    fields.update(overrides)
    return FeedView(**fields)


def test_language_colors() -> None:
    assert language_color("Go") == "#00ADD8"
    assert language_color("Python") == "#3572A5"
    assert language_color("COBOL") == DEFAULT_LANGUAGE_COLOR
    assert language_color("") == DEFAULT_LANGUAGE_COLOR


def test_format_date() -> None:
    assert format_date("2024-06-01T00:00:00Z") == "June 1, 2024"
    assert format_date("2025-01-01") == "January 1, 2025"
    assert format_date("not a date") == "not a date"
    assert format_date("") == ""


def test_card_uses_description_placeholder() -> None:
    card = render_card(RECORD)
    assert "No description available" in card
    assert "Go #00ADD8" in card
    assert "June 1, 2024" in card


def test_render_states() -> None:
    assert render_view(_view(is_loading=True)) == "Loading projects from GitHub..."
    assert render_view(_view()) == "No projects found."

    failed = render_view(_view(error_message="Empty response received", error_kind=FailureKind.EMPTY_PAYLOAD))
    assert failed.startswith("Error loading projects: Empty response received")

    loaded = render_view(_view(records=(RECORD,), last_updated="2025-01-01"))
    assert loaded.endswith("Projects last updated: January 1, 2025")
