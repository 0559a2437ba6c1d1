"""Deterministic analysis pipeline: RawMessage -> signals -> AnalysisResult.

Stages run in a fixed order so reasons come out the same way every time:

1. headers, authentication results and sender checks
2. keyword scan over subject and plain body
3. link extraction (text, then anchors), merge, redirector decoding
4. registrable domains for decoded destinations and anchor-text checks
5. forward/embedded-message detection
6. scoring
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from phish_email_risk_engine.config.settings import DEFAULT_SCORING_CONFIG, ScoringConfig
from phish_email_risk_engine.domain.email.address import check_sender, extract_address
from phish_email_risk_engine.domain.email.auth import parse_auth_results
from phish_email_risk_engine.domain.email.forward import detect_forward
from phish_email_risk_engine.domain.email.headers import parse_headers
from phish_email_risk_engine.domain.email.models import RawMessage, Sender
from phish_email_risk_engine.domain.evidence import AnalysisResult, AnchorMismatch, MessageSignals
from phish_email_risk_engine.domain.url.extract import extract_anchor_links, extract_text_links, merge_links
from phish_email_risk_engine.domain.url.models import ExtractedLink
from phish_email_risk_engine.domain.url.normalize import url_host
from phish_email_risk_engine.domain.url.redirect import decode_links
from phish_email_risk_engine.domain.url.registrable import (
    RegistrableDomainResolver,
    get_resolver,
    is_same_or_subdomain,
)
from phish_email_risk_engine.scoring.fusion import missing_sender_result, score_signals
from phish_email_risk_engine.tools.text.text_model import find_suspicious_keywords

logger = logging.getLogger(__name__)

_FORM_PATTERN = re.compile(r"<\s*form\b", re.IGNORECASE)
_SHOWN_DOMAIN_PATTERN = re.compile(r"([a-z0-9.-]+\.[a-z]{2,})", re.IGNORECASE)


def extract_links(message: RawMessage, config: ScoringConfig | None = None) -> list[ExtractedLink]:
    """Text links, then anchor links, merged by href and decoded once."""

    cfg = config or DEFAULT_SCORING_CONFIG
    text_links = extract_text_links(message.body_text, redirector_hosts=cfg.redirector_hosts)
    anchor_links = extract_anchor_links(
        message.body_html,
        base_url=cfg.anchor_base_url,
        redirector_hosts=cfg.redirector_hosts,
    )
    merged = merge_links(text_links, anchor_links)
    return decode_links(merged, redirector_hosts=cfg.redirector_hosts, params=cfg.redirector_params)


def resolve_link_domains(
    links: Iterable[ExtractedLink],
    resolver: RegistrableDomainResolver,
) -> tuple[str, ...]:
    domains = (resolver.resolve(url_host(link.destination)) for link in links)
    return tuple(dict.fromkeys(domain for domain in domains if domain))


def find_anchor_mismatches(
    links: Iterable[ExtractedLink],
    resolver: RegistrableDomainResolver,
) -> tuple[AnchorMismatch, ...]:
    """Anchors whose visible domain-like text names another organization than the href."""

    mismatches: list[AnchorMismatch] = []
    for link in links:
        if link.origin != "anchor" or not link.shown_text:
            continue
        match = _SHOWN_DOMAIN_PATTERN.search(link.shown_text)
        if not match:
            continue
        shown_domain = match.group(1).lower()
        href_host = url_host(link.destination)
        shown_registrable = resolver.resolve(shown_domain)
        href_registrable = resolver.resolve(href_host)
        if not shown_registrable or not href_registrable:
            continue
        if not is_same_or_subdomain(href_registrable, shown_registrable):
            mismatches.append(AnchorMismatch(shown_domain=shown_domain, href_host=href_host))
    return tuple(mismatches)


def has_html_form(message: RawMessage) -> bool:
    return bool(_FORM_PATTERN.search(message.body_html) or _FORM_PATTERN.search(message.body_text))


def collect_signals(
    message: RawMessage,
    config: ScoringConfig | None = None,
    *,
    resolver: RegistrableDomainResolver | None = None,
) -> MessageSignals:
    cfg = config or DEFAULT_SCORING_CONFIG
    active_resolver = resolver or get_resolver(cfg.use_public_suffix_list)

    headers = parse_headers(message.raw_headers)
    auth = parse_auth_results(headers)
    sender = check_sender(message.sender or Sender())
    keywords = find_suspicious_keywords(
        message.subject,
        message.body_text,
        cfg.suspicious_keywords,
        min_hits=cfg.keyword_min_hits,
    )

    links = extract_links(message, cfg)
    link_domains = resolve_link_domains(links, active_resolver)
    anchor_mismatches = find_anchor_mismatches(links, active_resolver)

    forward = detect_forward(
        headers,
        message.attachments,
        embedded_message_types=cfg.embedded_message_types,
    )
    return MessageSignals(
        auth=auth,
        sender=sender,
        sender_registrable_domain=active_resolver.resolve(sender.domain),
        keywords=keywords,
        links=tuple(links),
        link_domains=link_domains,
        anchor_mismatches=anchor_mismatches,
        has_html_form=has_html_form(message),
        forward=forward,
    )


def analyze_message(
    message: RawMessage,
    config: ScoringConfig | None = None,
    *,
    resolver: RegistrableDomainResolver | None = None,
) -> AnalysisResult:
    """Score one message; never raises for message content."""

    cfg = config or DEFAULT_SCORING_CONFIG
    if message.sender is None or not extract_address(message.sender.email_address):
        logger.debug("sender address missing or unparsable; skipping analysis")
        return missing_sender_result()
    signals = collect_signals(message, cfg, resolver=resolver)
    return score_signals(signals, cfg)
