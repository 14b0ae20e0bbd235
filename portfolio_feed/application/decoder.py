from __future__ import annotations
import json
import logging
from typing import Any
from portfolio_feed.domain.errors import DecodeError

log = logging.getLogger(__name__)


def decode(text: str) -> Any:
    """Parse sanitized text as JSON. Every parse failure becomes DecodeError."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError, RecursionError) as exc:
        log.debug("JSON parse failed: %s | body starts with %.80r", exc, text)
        raise DecodeError(f"Invalid JSON in response: {exc}", text=str(text)) from exc
