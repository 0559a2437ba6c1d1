from __future__ import annotations

import pytest

from phish_email_risk_engine.domain.email.models import Attachment, RawMessage, Sender
from phish_email_risk_engine.domain.url.registrable import RegistrableDomainResolver, get_resolver


@pytest.fixture(autouse=True)
def clear_scoring_env(monkeypatch):
    for name in (
        "PHISH_RISK_PROFILE",
        "PHISH_RISK_DEFAULT_CONFIG_PATH",
        "PHISH_RISK_HIGH_THRESHOLD",
        "PHISH_RISK_MEDIUM_THRESHOLD",
        "PHISH_RISK_FORWARDED_MISMATCH_FACTOR",
        "PHISH_RISK_REDIRECTOR_FACTOR",
        "PHISH_RISK_KEYWORD_MIN_HITS",
        "PHISH_RISK_USE_PUBLIC_SUFFIX_LIST",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_message():
    def _make(
        *,
        address: str | None = "alerts@bank.com",
        display_name: str = "Bank Alerts",
        subject: str = "Monthly statement",
        body_text: str = "",
        body_html: str = "",
        raw_headers: str = "",
        attachment_types: tuple[str, ...] = (),
    ) -> RawMessage:
        sender = None if address is None else Sender(display_name=display_name, email_address=address)
        return RawMessage(
            sender=sender,
            subject=subject,
            body_text=body_text,
            body_html=body_html,
            raw_headers=raw_headers,
            attachments=tuple(Attachment(type=item) for item in attachment_types),
        )

    return _make


@pytest.fixture
def psl_resolver() -> RegistrableDomainResolver:
    return get_resolver(True)


@pytest.fixture
def naive_resolver() -> RegistrableDomainResolver:
    return RegistrableDomainResolver()
