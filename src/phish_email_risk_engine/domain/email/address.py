"""Sender address/domain extraction and display-name checks."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

from phish_email_risk_engine.domain.email.models import Sender

_ADDRESS_PATTERN = re.compile(r"<([^<>]+@[^>]+)>|([^<\s]+@[^\s>]+)")


class SenderCheck(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str = ""
    domain: str = ""
    display_name_spoof: bool = False
    malformed_domain: bool = False


def extract_address(raw: str | None) -> str:
    """Return the lowercased ``user@domain`` part of an address, or ``""``."""

    match = _ADDRESS_PATTERN.search((raw or "").strip().lower())
    if not match:
        return ""
    return (match.group(1) or match.group(2) or "").strip()


def extract_domain(raw: str | None) -> str:
    address = extract_address(raw)
    if "@" not in address:
        return ""
    return address.rsplit("@", 1)[1].strip()


def check_sender(sender: Sender) -> SenderCheck:
    address = extract_address(sender.email_address)
    domain = extract_domain(address)
    display = (sender.display_name or "").strip().lower()

    # A display name carrying an address other than the real one.
    spoof = bool(display and "@" in display and address not in display)
    malformed = not domain or "." not in domain
    return SenderCheck(
        address=address,
        domain=domain,
        display_name_spoof=spoof,
        malformed_domain=malformed,
    )
