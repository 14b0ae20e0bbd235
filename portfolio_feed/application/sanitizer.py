from __future__ import annotations
import logging
from portfolio_feed.domain.errors import EmptyPayload

log = logging.getLogger(__name__)

# Static hosts sometimes append a diagnostic trailer after the JSON body,
# e.g. '{"projects": []} HTTP Status: 200'.
TRAILER_MARKER = "HTTP Status:"


def _trailer_start(text: str) -> int:
    """
    Index of the first marker that is not inside a JSON string literal,
    or -1. The trailer itself may contain braces or quotes; scanning stops
    at the marker so they never matter.
    """
    in_string = False
    escaped   = False
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif text.startswith(TRAILER_MARKER, i):
            return i
    return -1


def sanitize(raw: str) -> str:
    """
    Trim the body and cut off any diagnostic trailer.

    When the marker appears outside a JSON string, the text is truncated
    after the last `}` that precedes it. Raises EmptyPayload if nothing
    is left.
    """
    text = raw.strip()

    if TRAILER_MARKER in text:
        marker_at = _trailer_start(text)
        brace_at  = text.rfind("}", 0, marker_at) if marker_at != -1 else -1
        if brace_at != -1:
            log.info("Stripped %d chars of trailer text after JSON body", len(text) - brace_at - 1)
            text = text[: brace_at + 1]
        else:
            log.debug("Marker %r found but not in a trailer, leaving body as-is", TRAILER_MARKER)

    if not text:
        raise EmptyPayload()
    return text
