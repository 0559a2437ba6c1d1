"""URL domain-level models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

LinkOrigin = Literal["text", "anchor"]


class ExtractedLink(BaseModel):
    """A candidate link; ``href`` is the resolved pre-decode URL."""

    model_config = ConfigDict(frozen=True)

    href: str
    shown_text: str = ""
    origin: LinkOrigin = "text"
    is_redirector: bool = False
    target: str = ""

    @property
    def destination(self) -> str:
        return self.target or self.href

    def combined_with(self, other: "ExtractedLink") -> "ExtractedLink":
        """One link standing for ``self`` and a duplicate ``other``.

        The wrapped (redirector) link is kept over a plain one, and anchor
        origin and visible text are carried over from whichever side has them.
        """

        primary, secondary = self, other
        if other.is_redirector and not self.is_redirector:
            primary, secondary = other, self
        if primary.origin == "anchor" or secondary.origin != "anchor":
            return primary
        return primary.model_copy(update={"origin": "anchor", "shown_text": secondary.shown_text})


class DecodedTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    decoded: bool = False
