"""Analysis orchestration."""

from phish_email_risk_engine.orchestrator.pipeline import (
    analyze_message,
    collect_signals,
    extract_links,
    find_anchor_mismatches,
    resolve_link_domains,
)

__all__ = [
    "analyze_message",
    "collect_signals",
    "extract_links",
    "find_anchor_mismatches",
    "resolve_link_domains",
]
