"""Unified signal/result structures."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from phish_email_risk_engine.domain.email.address import SenderCheck
from phish_email_risk_engine.domain.email.auth import AuthResult
from phish_email_risk_engine.domain.email.forward import ForwardSignal
from phish_email_risk_engine.domain.url.models import ExtractedLink
from phish_email_risk_engine.tools.text.text_model import KeywordScan

RiskClass = Literal["low", "medium", "high"]


class AnchorMismatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    shown_domain: str
    href_host: str


class MessageSignals(BaseModel):
    """Everything the extractors found; the scorer only reads this."""

    model_config = ConfigDict(frozen=True)

    auth: AuthResult = Field(default_factory=AuthResult)
    sender: SenderCheck = Field(default_factory=SenderCheck)
    sender_registrable_domain: str = ""
    keywords: KeywordScan = Field(default_factory=KeywordScan)
    links: tuple[ExtractedLink, ...] = ()
    link_domains: tuple[str, ...] = ()
    anchor_mismatches: tuple[AnchorMismatch, ...] = ()
    has_html_form: bool = False
    forward: ForwardSignal = Field(default_factory=ForwardSignal)


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    probability: int = Field(default=0, ge=0, le=100)
    risk_class: RiskClass = "low"
    reasons: tuple[str, ...] = ()
    link_domains: tuple[str, ...] = ()
    from_domain: str = ""

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
