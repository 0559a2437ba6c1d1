"""Text tools."""

from phish_email_risk_engine.tools.text.text_model import (
    KeywordScan,
    find_suspicious_keywords,
    normalize_text,
)

__all__ = ["KeywordScan", "find_suspicious_keywords", "normalize_text"]
