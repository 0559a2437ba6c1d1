"""Forwarded/resent message detection."""

from __future__ import annotations

from typing import Iterable, Mapping

from pydantic import BaseModel, ConfigDict

from phish_email_risk_engine.domain.email.models import Attachment

_RESENT_HEADERS = ("resent-from", "resent-sender")


class ForwardSignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    resent: bool = False
    embedded_message: bool = False

    @property
    def forwarded(self) -> bool:
        return self.resent or self.embedded_message


def detect_forward(
    headers: Mapping[str, str],
    attachments: Iterable[Attachment],
    *,
    embedded_message_types: frozenset[str],
) -> ForwardSignal:
    resent = any(name in headers for name in _RESENT_HEADERS)
    embedded = any(
        (item.type or "").strip().lower() in embedded_message_types for item in attachments
    )
    return ForwardSignal(resent=resent, embedded_message=embedded)
