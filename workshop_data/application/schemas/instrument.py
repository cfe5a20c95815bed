"""Pydantic DTOs (Data Transfer Objects) for instrument mutations."""

from pydantic import BaseModel, Field

from workshop_data.domain.entities import InstrumentStatus


class InstrumentCreate(BaseModel):
    """Schema for creating a new instrument."""

    status: InstrumentStatus = InstrumentStatus.AVAILABLE
    maker: str | None = Field(None, max_length=200, examples=["Stradivari"])
    type: str | None = Field(None, max_length=100, examples=["Violin"])
    subtype: str | None = Field(None, max_length=100, examples=["4/4"])
    year: int | None = Field(None, ge=1000, le=2100)
    serial_number: str | None = Field(None, max_length=100)
    price: float | None = Field(None, ge=0)
    cost_price: float | None = Field(None, ge=0)
    consignment_price: float | None = Field(None, ge=0)
    ownership: str | None = None
    certificate: bool = False
    certificate_name: str | None = None
    size: str | None = None
    weight: str | None = None
    note: str | None = None


class InstrumentUpdate(BaseModel):
    """Schema for updating an existing instrument — all fields optional."""

    status: InstrumentStatus | None = None
    maker: str | None = Field(None, max_length=200)
    type: str | None = Field(None, max_length=100)
    subtype: str | None = Field(None, max_length=100)
    year: int | None = Field(None, ge=1000, le=2100)
    serial_number: str | None = Field(None, max_length=100)
    price: float | None = Field(None, ge=0)
    cost_price: float | None = Field(None, ge=0)
    consignment_price: float | None = Field(None, ge=0)
    ownership: str | None = None
    certificate: bool | None = None
    certificate_name: str | None = None
    size: str | None = None
    weight: str | None = None
    note: str | None = None
