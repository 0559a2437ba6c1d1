"""Risk fusion scoring.

Factors are evaluated in a fixed order and each one that fires adds its
weight and a reason. The link count is an informational note only; when no
weighted factor fires, the reasons are reduced to the single no-red-flags
note. Halves round up.
"""

from __future__ import annotations

import logging
import math

from phish_email_risk_engine.config.settings import DEFAULT_SCORING_CONFIG, ScoringConfig
from phish_email_risk_engine.domain.evidence import AnalysisResult, MessageSignals, RiskClass
from phish_email_risk_engine.domain.url.normalize import url_host
from phish_email_risk_engine.domain.url.registrable import is_same_or_subdomain

logger = logging.getLogger(__name__)

MISSING_SENDER_REASON = "Unable to analyze: Missing sender information"
NO_RED_FLAGS_REASON = "No obvious red flags detected"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class _Tally:
    def __init__(self) -> None:
        self.score = 0.0
        self.reasons: list[str] = []
        self.breakdown: list[dict[str, float | str]] = []

    def add(self, factor: str, contribution: float, reason: str) -> None:
        self.score += contribution
        self.reasons.append(reason)
        self.breakdown.append({"factor": factor, "contribution": float(contribution)})

    def note(self, reason: str) -> None:
        self.reasons.append(reason)


def map_score_to_risk_class(
    score: int,
    *,
    high_threshold: int = 80,
    medium_threshold: int = 40,
) -> RiskClass:
    """Map a score to a discrete risk class."""

    if score >= high_threshold:
        return "high"
    if score >= medium_threshold:
        return "medium"
    return "low"


def missing_sender_result() -> AnalysisResult:
    return AnalysisResult(probability=0, risk_class="low", reasons=(MISSING_SENDER_REASON,))


def compute_risk_score(
    signals: MessageSignals,
    config: ScoringConfig | None = None,
) -> tuple[int, list[str], list[dict[str, float | str]]]:
    """Compute a 0-100 score, the ordered reasons and a per-factor breakdown."""

    cfg = config or DEFAULT_SCORING_CONFIG
    weights = cfg.weights
    tally = _Tally()

    auth = signals.auth
    if auth.dmarc == "fail":
        tally.add("dmarc_fail", weights.dmarc_fail, "DMARC authentication failed!")
    if auth.spf == "fail":
        tally.add("spf_fail", weights.spf_fail, "SPF check failed!")
    if auth.dkim == "fail":
        tally.add("dkim_fail", weights.dkim_fail, "DKIM signature verification failed!")

    sender = signals.sender
    if sender.display_name_spoof:
        tally.add(
            "display_name_spoof",
            weights.display_name_spoof,
            "Display name contains different email address (potential spoofing)",
        )
    if sender.malformed_domain:
        tally.add("malformed_domain", weights.malformed_domain, "Sender domain appears malformed")

    if signals.keywords.multiple:
        tally.add(
            "keyword_multiple",
            weights.keyword_multiple,
            f"Multiple suspicious keywords found: {', '.join(signals.keywords.found)}",
        )

    links = signals.links
    if links:
        tally.note(f"Found {len(links)} URL(s) in message")

    shortened = [link for link in links if url_host(link.href) in cfg.shortener_domains]
    if shortened:
        tally.add("shortened_link", weights.shortened_link, f"Found {len(shortened)} shortened URL(s)")

    if any(link.href.lower().startswith("data:") for link in links):
        tally.add("data_uri", weights.data_uri, "Found embedded data: URI(s)")

    if signals.has_html_form:
        tally.add("html_form", weights.html_form, "HTML form detected in message body")

    forward = signals.forward
    if forward.embedded_message:
        tally.add(
            "embedded_message",
            weights.embedded_message,
            "Message contains embedded message attachment (likely forwarded)",
        )

    for mismatch in signals.anchor_mismatches:
        tally.add(
            "anchor_mismatch",
            weights.anchor_mismatch,
            f'Anchor text/domain mismatch: shown "{mismatch.shown_domain}" -> href {mismatch.href_host}',
        )

    sender_domain = signals.sender_registrable_domain
    if sender.domain and sender_domain and signals.link_domains:
        foreign = [
            domain for domain in signals.link_domains if not is_same_or_subdomain(domain, sender_domain)
        ]
        if foreign:
            listed = ", ".join(foreign)
            if forward.forwarded:
                tally.add(
                    "domain_mismatch",
                    _round_half_up(weights.domain_mismatch * cfg.forwarded_mismatch_factor),
                    f"Message appears forwarded; links point to different domains: {listed} "
                    "(reduced penalty applied)",
                )
            else:
                tally.add(
                    "domain_mismatch",
                    weights.domain_mismatch,
                    f"Links point to different domains: {listed}",
                )

    redirectors = sum(1 for link in links if link.is_redirector)
    if redirectors:
        tally.add(
            "redirector_link",
            redirectors * cfg.redirector_link_penalty,
            f"Detected {redirectors} redirector-style link(s)",
        )

    if not tally.breakdown:
        tally.reasons = [NO_RED_FLAGS_REASON]

    score = _round_half_up(max(0.0, min(tally.score, 100.0)))
    return score, tally.reasons, tally.breakdown


def score_signals(signals: MessageSignals, config: ScoringConfig | None = None) -> AnalysisResult:
    cfg = config or DEFAULT_SCORING_CONFIG
    score, reasons, breakdown = compute_risk_score(signals, cfg)
    risk_class = map_score_to_risk_class(
        score,
        high_threshold=cfg.thresholds.high,
        medium_threshold=cfg.thresholds.medium,
    )
    logger.debug("score=%d class=%s factors=%s", score, risk_class, [item["factor"] for item in breakdown])
    return AnalysisResult(
        probability=score,
        risk_class=risk_class,
        reasons=tuple(reasons),
        link_domains=signals.link_domains,
        from_domain=signals.sender.domain,
    )
