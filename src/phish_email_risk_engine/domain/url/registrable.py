"""Registrable (eTLD+1) domain resolution for same-organization comparisons."""

from __future__ import annotations

from functools import lru_cache
import ipaddress
import logging
from typing import Any, Callable

import tldextract

logger = logging.getLogger(__name__)

SuffixExtractor = Callable[[str], Any]


def naive_registrable_domain(hostname: str) -> str:
    """Last two dot-separated labels of ``hostname``."""

    parts = [part for part in (hostname or "").strip().lower().strip(".").split(".") if part]
    return ".".join(parts[-2:])


def is_same_or_subdomain(domain: str, parent: str) -> bool:
    a = (domain or "").strip().lower()
    b = (parent or "").strip().lower()
    if not a or not b:
        return False
    return a == b or a.endswith(f".{b}")


def _is_ip_literal(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname.strip("[]"))
    except ValueError:
        return False
    return True


class RegistrableDomainResolver:
    """Reduce hostnames to registrable domains.

    Uses the public suffix list through ``extractor`` when one is given.
    Without an extractor, or when the list does not cover a hostname, the
    last two labels are used instead.
    """

    def __init__(self, extractor: SuffixExtractor | None = None) -> None:
        self._extractor = extractor

    @property
    def uses_public_suffix_list(self) -> bool:
        return self._extractor is not None

    def resolve(self, hostname: str) -> str:
        host = (hostname or "").strip().lower().rstrip(".")
        if not host:
            return ""
        if _is_ip_literal(host):
            return host.strip("[]")
        if self._extractor is not None:
            try:
                extracted = self._extractor(host)
            except Exception as exc:
                logger.debug("public suffix lookup failed for %s: %s", host, exc)
            else:
                if extracted.domain and extracted.suffix:
                    return f"{extracted.domain}.{extracted.suffix}"
        return naive_registrable_domain(host)

    def same_organization(self, host: str, other: str) -> bool:
        return is_same_or_subdomain(self.resolve(host), self.resolve(other))


@lru_cache(maxsize=1)
def _bundled_extractor() -> tldextract.TLDExtract:
    # Bundled snapshot only: no network fetch, no disk cache.
    return tldextract.TLDExtract(suffix_list_urls=(), cache_dir=None)


@lru_cache(maxsize=2)
def get_resolver(use_public_suffix_list: bool = True) -> RegistrableDomainResolver:
    if not use_public_suffix_list:
        return RegistrableDomainResolver()
    return RegistrableDomainResolver(_bundled_extractor())
