"""Email domain models, header parsing and sender checks."""

from phish_email_risk_engine.domain.email.address import (
    SenderCheck,
    check_sender,
    extract_address,
    extract_domain,
)
from phish_email_risk_engine.domain.email.auth import AuthResult, parse_auth_results
from phish_email_risk_engine.domain.email.forward import ForwardSignal, detect_forward
from phish_email_risk_engine.domain.email.headers import parse_headers
from phish_email_risk_engine.domain.email.models import Attachment, RawMessage, Sender
from phish_email_risk_engine.domain.email.parse import parse_eml_content, parse_input_payload

__all__ = [
    "Attachment",
    "AuthResult",
    "ForwardSignal",
    "RawMessage",
    "Sender",
    "SenderCheck",
    "check_sender",
    "detect_forward",
    "extract_address",
    "extract_domain",
    "parse_auth_results",
    "parse_eml_content",
    "parse_headers",
    "parse_input_payload",
]
