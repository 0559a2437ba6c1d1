"""Input normalization: display-layer JSON and RFC822 text into RawMessage."""

from __future__ import annotations

from email import policy
from email.message import Message
from email.parser import BytesParser
from email.utils import parseaddr
import json
from typing import Any, Iterator

from phish_email_risk_engine.domain.email.models import Attachment, RawMessage, Sender

EMBEDDED_MESSAGE_TYPE = "message/rfc822"


def _looks_like_eml(raw: str) -> bool:
    text = raw.replace("\r\n", "\n").lstrip()
    if not text or "\n\n" not in text:
        return False
    headers = text.split("\n\n", maxsplit=1)[0].lower()
    return "subject:" in headers and ("from:" in headers or "to:" in headers)


def _raw_header_block(raw: str) -> str:
    text = raw.replace("\r\n", "\n").lstrip("\n")
    return text.split("\n\n", maxsplit=1)[0]


def _decode_part(part: Message) -> str:
    payload = part.get_payload(decode=True)
    if not isinstance(payload, bytes):
        return ""
    charset = part.get_content_charset() or "utf-8"
    for name in (charset, "utf-8", "latin-1"):
        try:
            return payload.decode(name, errors="replace")
        except LookupError:
            continue
    return ""


def _iter_parts(message: Message) -> Iterator[Message]:
    """Leaf parts of ``message``; attached messages are yielded whole, not entered."""

    payload = message.get_payload()
    if message.get_content_maintype() == "multipart" and isinstance(payload, list):
        for part in payload:
            yield from _iter_parts(part)
    else:
        yield message


def _extract_body_parts(message: Message) -> tuple[str, str]:
    body_text: list[str] = []
    body_html: list[str] = []

    for part in _iter_parts(message):
        content_disposition = (part.get("Content-Disposition") or "").lower()
        if "attachment" in content_disposition:
            continue
        content_type = (part.get_content_type() or "").lower()
        if content_type not in {"text/plain", "text/html"}:
            continue
        content = _decode_part(part)
        if not content:
            continue
        if content_type == "text/plain":
            body_text.append(content)
        else:
            body_html.append(content)
    return "\n".join(body_text), "\n".join(body_html)


def _extract_attachments(message: Message) -> list[Attachment]:
    attachments: list[Attachment] = []
    for part in _iter_parts(message):
        if part is message:
            continue
        content_type = (part.get_content_type() or "").lower()
        filename = part.get_filename() or ""
        if content_type == EMBEDDED_MESSAGE_TYPE:
            attachments.append(Attachment(type=EMBEDDED_MESSAGE_TYPE, name=filename))
        elif filename:
            attachments.append(Attachment(type="file", name=filename))
    return attachments


def parse_eml_content(raw_eml: str) -> RawMessage:
    message = BytesParser(policy=policy.default).parsebytes(raw_eml.encode("utf-8", errors="ignore"))
    display_name, address = parseaddr(str(message.get("From") or ""))
    body_text, body_html = _extract_body_parts(message)
    return RawMessage(
        sender=Sender(display_name=display_name, email_address=address) if address else None,
        subject=str(message.get("Subject") or ""),
        body_text=body_text,
        body_html=body_html,
        raw_headers=_raw_header_block(raw_eml),
        attachments=tuple(_extract_attachments(message)),
    )


def _from_payload(payload: dict[str, Any]) -> RawMessage:
    eml_raw = payload.get("eml") or payload.get("eml_raw")
    if isinstance(eml_raw, str) and eml_raw.strip():
        return parse_eml_content(eml_raw)
    return RawMessage.model_validate(payload)


def parse_input_payload(raw: str) -> RawMessage:
    """Build a RawMessage from a JSON object or raw RFC822 text.

    Raises ``ValueError`` (including pydantic's ``ValidationError``) when the
    input is neither; callers report that as a failed analysis.
    """

    stripped = (raw or "").strip()
    if not stripped:
        raise ValueError("empty input")

    if stripped.startswith("{") and stripped.endswith("}"):
        payload = json.loads(stripped)
        if not isinstance(payload, dict):
            raise ValueError("message payload must be a JSON object")
        return _from_payload(payload)

    if _looks_like_eml(raw):
        return parse_eml_content(raw)
    raise ValueError("input is neither a JSON message object nor an RFC822 message")
