"""URL extraction, redirector decoding and domain resolution."""

from phish_email_risk_engine.domain.url.extract import (
    extract_anchor_links,
    extract_text_links,
    find_urls,
    merge_links,
)
from phish_email_risk_engine.domain.url.models import DecodedTarget, ExtractedLink
from phish_email_risk_engine.domain.url.normalize import canonicalize_url, url_host
from phish_email_risk_engine.domain.url.redirect import (
    decode_links,
    decode_redirect_target,
    is_redirector_host,
)
from phish_email_risk_engine.domain.url.registrable import (
    RegistrableDomainResolver,
    get_resolver,
    is_same_or_subdomain,
    naive_registrable_domain,
)

__all__ = [
    "DecodedTarget",
    "ExtractedLink",
    "RegistrableDomainResolver",
    "canonicalize_url",
    "decode_links",
    "decode_redirect_target",
    "extract_anchor_links",
    "extract_text_links",
    "find_urls",
    "get_resolver",
    "is_redirector_host",
    "is_same_or_subdomain",
    "merge_links",
    "naive_registrable_domain",
    "url_host",
]
