"""Unwrapping of known link-wrapping (safe-link/redirect) services."""

from __future__ import annotations

import logging
from typing import Iterable
from urllib.parse import parse_qsl, unquote, urlsplit

from phish_email_risk_engine.domain.url.models import DecodedTarget, ExtractedLink
from phish_email_risk_engine.domain.url.normalize import canonicalize_url, is_absolute_url

logger = logging.getLogger(__name__)

_PROOFPOINT_HOST = "urldefense.proofpoint.com"


def is_redirector_host(host: str, redirector_hosts: frozenset[str]) -> bool:
    clean = (host or "").strip().lower().rstrip(".")
    if not clean:
        return False
    return any(clean == item or clean.endswith(f".{item}") for item in redirector_hosts)


def _absolute_url(candidate: str) -> str:
    return canonicalize_url(candidate) if is_absolute_url(candidate) else ""


def _proofpoint_v2(value: str) -> str:
    # urldefense v2 encodes "%" as "-" and "/" as "_".
    return value.replace("-", "%").replace("_", "/")


def decode_redirect_target(
    url: str,
    *,
    redirector_hosts: frozenset[str],
    params: tuple[str, ...],
) -> DecodedTarget:
    """Read the embedded target of a wrapped URL, once; unchanged on any failure."""

    try:
        parsed = urlsplit(url or "")
        host = (parsed.hostname or "").lower()
    except ValueError:
        return DecodedTarget(url=url)
    if not is_redirector_host(host, redirector_hosts):
        return DecodedTarget(url=url)

    query: dict[str, str] = {}
    for key, value in parse_qsl(parsed.query, keep_blank_values=False):
        query.setdefault(key, value)

    for name in params:
        value = query.get(name)
        if not value:
            continue
        target = _absolute_url(unquote(value))
        if not target and host == _PROOFPOINT_HOST and name == "u":
            target = _absolute_url(unquote(_proofpoint_v2(value)))
        if target:
            return DecodedTarget(url=target, decoded=True)
        logger.debug("redirector param %s of %s is not a url", name, host)
    return DecodedTarget(url=url)


def decode_links(
    links: Iterable[ExtractedLink],
    *,
    redirector_hosts: frozenset[str],
    params: tuple[str, ...],
) -> list[ExtractedLink]:
    """Attach decoded targets and keep one link per final destination.

    Decoding always starts from ``href``, so running this again over its
    own output changes nothing.
    """

    decoded: dict[str, ExtractedLink] = {}
    for link in links:
        target = link.href
        if link.is_redirector:
            target = decode_redirect_target(
                link.href,
                redirector_hosts=redirector_hosts,
                params=params,
            ).url
        current = link.model_copy(update={"target": target})
        seen = decoded.get(target)
        decoded[target] = current if seen is None else seen.combined_with(current)
    return list(decoded.values())
