"""Scoring configuration."""

from phish_email_risk_engine.config.settings import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_SCORING_CONFIG,
    RiskThresholds,
    ScoringConfig,
    ScoringWeights,
    load_config,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_SCORING_CONFIG",
    "RiskThresholds",
    "ScoringConfig",
    "ScoringWeights",
    "load_config",
]
