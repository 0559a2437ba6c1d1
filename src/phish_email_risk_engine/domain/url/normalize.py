"""URL canonicalization helpers."""

from __future__ import annotations

import logging
from urllib.parse import SplitResult, urlsplit, urlunsplit

logger = logging.getLogger(__name__)


def _split(url: str) -> SplitResult | None:
    try:
        parsed = urlsplit(url)
        _ = parsed.port  # raises on a non-numeric or out-of-range port
    except ValueError:
        return None
    return parsed


def is_absolute_url(url: str) -> bool:
    parsed = _split((url or "").strip())
    return bool(parsed and parsed.scheme and parsed.netloc)


def canonicalize_url(url: str) -> str:
    """Normalize URL to a stable lowercase host form; unparsable input is kept as-is."""

    raw = (url or "").strip()
    if not raw:
        return ""
    parsed = _split(raw)
    if parsed is None:
        logger.debug("keeping unparsable url as-is: %r", raw)
        return raw
    if not parsed.scheme or not parsed.netloc:
        return raw
    scheme = parsed.scheme.lower()
    path = parsed.path
    if not path and scheme in {"http", "https"}:
        path = "/"
    return urlunsplit((scheme, parsed.netloc.lower(), path, parsed.query, parsed.fragment))


def url_host(url: str) -> str:
    parsed = _split((url or "").strip())
    if parsed is None:
        return ""
    return (parsed.hostname or "").lower().rstrip(".")
