"""Text tools."""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, ConfigDict


class KeywordScan(BaseModel):
    model_config = ConfigDict(frozen=True)

    found: tuple[str, ...] = ()
    multiple: bool = False


def normalize_text(value: str) -> str:
    return " ".join((value or "").split()).strip()


def find_suspicious_keywords(
    subject: str,
    body: str,
    keywords: Iterable[str],
    *,
    min_hits: int = 2,
) -> KeywordScan:
    """Distinct keywords present in subject+body, in keyword-list order."""

    text = "\n".join([subject or "", body or ""]).lower()
    found = tuple(dict.fromkeys(keyword for keyword in keywords if keyword and keyword in text))
    return KeywordScan(found=found, multiple=len(found) >= max(1, min_hits))
