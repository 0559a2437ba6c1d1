"""Scoring utilities."""

from .fusion import (
    MISSING_SENDER_REASON,
    NO_RED_FLAGS_REASON,
    compute_risk_score,
    map_score_to_risk_class,
    missing_sender_result,
    score_signals,
)

__all__ = [
    "MISSING_SENDER_REASON",
    "NO_RED_FLAGS_REASON",
    "compute_risk_score",
    "map_score_to_risk_class",
    "missing_sender_result",
    "score_signals",
]
