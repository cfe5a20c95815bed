"""Pydantic DTOs (Data Transfer Objects) for client mutations."""

import re

from pydantic import BaseModel, Field, field_validator

from workshop_data.domain.entities import ClientStatus, ClientType

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(value: str | None) -> str | None:
    if value is None or value == "":
        return value
    if not _EMAIL_RE.match(value):
        raise ValueError("email must be a valid address or empty")
    return value


class ClientCreate(BaseModel):
    """Schema for creating a new client."""

    first_name: str | None = Field(None, max_length=100, examples=["Jane"])
    last_name: str | None = Field(None, max_length=100, examples=["Doe"])
    email: str | None = Field(None, max_length=255, examples=["jane@example.com"])
    contact_number: str | None = Field(None, max_length=50)
    tags: list[str] = Field(default_factory=list, examples=[["Owner", "Musician"]])
    interest: str | None = None
    note: str | None = None
    client_number: str | None = Field(None, max_length=50, examples=["CL-0001"])
    type: ClientType | None = None
    status: ClientStatus | None = None
    address: str | None = None

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str | None) -> str | None:
        return _check_email(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, value: object) -> object:
        return [] if value is None else value


class ClientUpdate(BaseModel):
    """Schema for updating an existing client — only the fields that are set are sent."""

    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=255)
    contact_number: str | None = Field(None, max_length=50)
    tags: list[str] | None = None
    interest: str | None = None
    note: str | None = None
    client_number: str | None = Field(None, max_length=50)
    type: ClientType | None = None
    status: ClientStatus | None = None
    address: str | None = None

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str | None) -> str | None:
        return _check_email(value)
