"""URL extraction from plain text and HTML anchors."""

from __future__ import annotations

from html.parser import HTMLParser
import logging
import re
from typing import Iterable
from urllib.parse import urljoin

from phish_email_risk_engine.domain.url.models import ExtractedLink
from phish_email_risk_engine.domain.url.normalize import canonicalize_url, url_host
from phish_email_risk_engine.domain.url.redirect import is_redirector_host
from phish_email_risk_engine.tools.text.text_model import normalize_text

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"\bhttps?://[^\s<>\"'`{}|^\[\]\\]+", re.IGNORECASE)
_TRAILING_PUNCTUATION = re.compile(r"[.,;!?)]+$")


class _AnchorCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__()
        self.anchor_pairs: list[tuple[str, str]] = []
        self._current_href: str | None = None
        self._anchor_text: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag.lower() != "a":
            return
        attrs_map = {key.lower(): value for key, value in attrs}
        href = (attrs_map.get("href") or "").strip()
        self._flush()
        self._current_href = href if href else None
        self._anchor_text = []

    def handle_data(self, data: str) -> None:
        if self._current_href is not None:
            self._anchor_text.append(data)

    def handle_endtag(self, tag: str) -> None:
        if tag.lower() == "a":
            self._flush()

    def close(self) -> None:
        super().close()
        self._flush()

    def _flush(self) -> None:
        if self._current_href is None:
            return
        self.anchor_pairs.append((self._current_href, normalize_text("".join(self._anchor_text))))
        self._current_href = None
        self._anchor_text = []


def find_urls(text: str) -> list[str]:
    """Extract unique HTTP(S) URLs from free text, trailing punctuation stripped."""

    found: list[str] = []
    for match in URL_PATTERN.findall(text or ""):
        cleaned = _TRAILING_PUNCTUATION.sub("", match)
        if cleaned:
            found.append(canonicalize_url(cleaned))
    return list(dict.fromkeys(item for item in found if item))


def extract_text_links(text: str, *, redirector_hosts: frozenset[str]) -> list[ExtractedLink]:
    return [
        ExtractedLink(
            href=url,
            origin="text",
            is_redirector=is_redirector_host(url_host(url), redirector_hosts),
        )
        for url in find_urls(text)
    ]


def collect_anchor_pairs(html: str) -> list[tuple[str, str]]:
    """Return ``(href, visible text)`` for every anchor carrying an href."""

    parser = _AnchorCollector()
    try:
        parser.feed(html or "")
        parser.close()
    except (AssertionError, ValueError) as exc:
        logger.debug("html parse stopped early: %s", exc)
    return list(parser.anchor_pairs)


def extract_anchor_links(
    html: str,
    *,
    base_url: str,
    redirector_hosts: frozenset[str],
) -> list[ExtractedLink]:
    links: list[ExtractedLink] = []
    if not html:
        return links
    for raw_href, shown in collect_anchor_pairs(html):
        try:
            resolved = urljoin(base_url, raw_href)
        except ValueError:
            logger.debug("dropping malformed href: %r", raw_href)
            continue
        href = canonicalize_url(resolved)
        if not href:
            continue
        links.append(
            ExtractedLink(
                href=href,
                shown_text=shown,
                origin="anchor",
                is_redirector=is_redirector_host(url_host(href), redirector_hosts),
            )
        )
    return links


def merge_links(*groups: Iterable[ExtractedLink]) -> list[ExtractedLink]:
    """Concatenate link groups, one link per href in first-seen order.

    A text link repeated by an anchor takes on the anchor's visible text.
    """

    merged: dict[str, ExtractedLink] = {}
    for group in groups:
        for link in group:
            if not link.href:
                continue
            seen = merged.get(link.href)
            merged[link.href] = link if seen is None else seen.combined_with(link)
    return list(merged.values())
