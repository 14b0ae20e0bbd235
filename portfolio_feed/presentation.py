"""
Presentation lookups
--------------------
Static configuration consumed by whatever renders the feed. Nothing here
takes part in the acquisition pipeline; the CLI uses it to print cards.
"""

from __future__ import annotations

from datetime import datetime

from portfolio_feed.domain.entities import FeedView, RepositoryRecord

DEFAULT_LANGUAGE_COLOR = "#8b949e"

LANGUAGE_COLORS = {
    "JavaScript": "#f1e05a",
    "TypeScript": "#3178c6",
    "Python":     "#3572A5",
    "Go":         "#00ADD8",
    "Java":       "#b07219",
    "Ruby":       "#701516",
    "PHP":        "#4F5D95",
    "C++":        "#f34b7d",
    "C":          "#555555",
    "HTML":       "#e34c26",
    "CSS":        "#1572B6",
    "Shell":      "#89e051",
}

NO_DESCRIPTION = "No description available"
NO_PROJECTS    = "No projects found."
LOADING        = "Loading projects from GitHub..."


def language_color(language: str) -> str:
    return LANGUAGE_COLORS.get(language, DEFAULT_LANGUAGE_COLOR)


def format_date(value: str) -> str:
    """'2024-01-05T10:00:00Z' → 'January 5, 2024'. Unparseable input is returned as-is."""
    if not value:
        return value
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def render_card(record: RepositoryRecord) -> str:
    header = record.name
    if record.primary_language:
        header += f" [{record.primary_language} {language_color(record.primary_language)}]"
    lines = [
        header,
        f"  {record.description or NO_DESCRIPTION}",
        f"  ⭐ {record.star_count}  🔀 {record.fork_count}  📅 Updated: {format_date(record.updated_at)}",
        f"  {record.url}",
    ]
    if record.topics:
        lines.append("  topics: " + ", ".join(record.topics))
    return "\n".join(lines)


def render_view(view: FeedView) -> str:
    """Plain-text equivalent of the projects section."""
    if view.is_loading:
        return LOADING
    if view.error_message is not None:
        return f"Error loading projects: {view.error_message}\nShowing fallback content..."
    if not view.records:
        return NO_PROJECTS

    blocks = [render_card(r) for r in view.records]
    if view.last_updated:
        blocks.append(f"Projects last updated: {format_date(view.last_updated)}")
    return "\n\n".join(blocks)
