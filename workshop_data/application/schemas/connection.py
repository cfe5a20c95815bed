"""Pydantic DTOs (Data Transfer Objects) for connection mutations."""

from pydantic import BaseModel, Field, field_validator

from workshop_data.domain.entities import RelationshipType


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value if value.strip() else None


class ConnectionCreate(BaseModel):
    """Schema for linking a client to an instrument."""

    client_id: str = Field(..., min_length=1, max_length=36)
    instrument_id: str = Field(..., min_length=1, max_length=36)
    relationship_type: RelationshipType = Field(..., examples=["Interested"])
    notes: str | None = None
    display_order: int | None = Field(None, ge=0)

    @field_validator("notes")
    @classmethod
    def _empty_notes(cls, value: str | None) -> str | None:
        return _blank_to_none(value)


class ConnectionUpdate(BaseModel):
    """Schema for updating a connection — all fields optional."""

    client_id: str | None = Field(None, min_length=1, max_length=36)
    instrument_id: str | None = Field(None, min_length=1, max_length=36)
    relationship_type: RelationshipType | None = None
    notes: str | None = None
    display_order: int | None = Field(None, ge=0)

    @field_validator("notes")
    @classmethod
    def _empty_notes(cls, value: str | None) -> str | None:
        return _blank_to_none(value)
