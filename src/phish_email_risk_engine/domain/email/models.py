"""Email domain models."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Sender(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    display_name: str = Field(default="", alias="displayName")
    email_address: str = Field(default="", alias="emailAddress")

    @field_validator("display_name", "email_address", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value


class Attachment(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = Field(default="", validation_alias=AliasChoices("type", "attachmentType"))
    name: str = ""

    @field_validator("type", "name", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value


class RawMessage(BaseModel):
    """Fully materialized message handed over by the mail client."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sender: Sender | None = Field(default=None, alias="from")
    subject: str = ""
    body_text: str = Field(default="", alias="bodyText")
    body_html: str = Field(default="", alias="bodyHtml")
    raw_headers: str = Field(default="", alias="rawHeaders")
    attachments: tuple[Attachment, ...] = ()

    @field_validator("subject", "body_text", "body_html", "raw_headers", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("attachments", mode="before")
    @classmethod
    def _none_to_tuple(cls, value: object) -> object:
        return () if value is None else value
