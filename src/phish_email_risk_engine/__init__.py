"""Heuristic phishing-risk scoring for single email messages."""

from phish_email_risk_engine.config.settings import DEFAULT_SCORING_CONFIG, ScoringConfig, load_config
from phish_email_risk_engine.domain.email.models import Attachment, RawMessage, Sender
from phish_email_risk_engine.domain.evidence import AnalysisResult
from phish_email_risk_engine.orchestrator.pipeline import analyze_message

__all__ = [
    "AnalysisResult",
    "Attachment",
    "DEFAULT_SCORING_CONFIG",
    "RawMessage",
    "ScoringConfig",
    "Sender",
    "analyze_message",
    "load_config",
]
