"""Sender authentication outcomes (DMARC/SPF/DKIM) from parsed headers."""

from __future__ import annotations

import re
from typing import Literal, Mapping

from pydantic import BaseModel, ConfigDict

AuthOutcome = Literal["pass", "fail", "softfail", "neutral", "none"]

_KNOWN_OUTCOMES = frozenset({"pass", "fail", "softfail", "neutral", "none"})
_DMARC_PATTERN = re.compile(r"\bdmarc\s*=\s*([a-z]+)")
_DKIM_PATTERN = re.compile(r"\bdkim\s*=\s*([a-z]+)")
_SPF_PATTERN = re.compile(r"\bspf\s*=\s*([a-z]+)")
_RECEIVED_SPF_PATTERN = re.compile(r"\b(pass|fail|softfail|neutral|none)\b")


class AuthResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    dmarc: AuthOutcome = "none"
    spf: AuthOutcome = "none"
    dkim: AuthOutcome = "none"


def _outcome(match: re.Match[str] | None) -> AuthOutcome:
    if match is None:
        return "none"
    token = match.group(1)
    return token if token in _KNOWN_OUTCOMES else "none"  # type: ignore[return-value]


def parse_auth_results(headers: Mapping[str, str]) -> AuthResult:
    lowered = {str(key).lower(): str(value) for key, value in headers.items()}
    auth_results = lowered.get("authentication-results", "").lower()
    received_spf = lowered.get("received-spf", "").lower()

    spf_match = _RECEIVED_SPF_PATTERN.search(received_spf) or _SPF_PATTERN.search(auth_results)
    return AuthResult(
        dmarc=_outcome(_DMARC_PATTERN.search(auth_results)),
        spf=_outcome(spf_match),
        dkim=_outcome(_DKIM_PATTERN.search(auth_results)),
    )
