"""SQLAlchemy ORM model for the Instrument entity."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from workshop_data.infrastructure.database.base import Base


class InstrumentModel(Base):
    """ORM model — maps to the 'instruments' table."""

    __tablename__ = "instruments"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="Available")
    maker: Mapped[str | None] = mapped_column(String(200), nullable=True)
    type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    subtype: Mapped[str | None] = mapped_column(String(100), nullable=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    serial_number: Mapped[str | None] = mapped_column(String(100), nullable=True, unique=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    cost_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    consignment_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    ownership: Mapped[str | None] = mapped_column(String(255), nullable=True)
    certificate: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    certificate_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    size: Mapped[str | None] = mapped_column(String(50), nullable=True)
    weight: Mapped[str | None] = mapped_column(String(50), nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=True,
    )

    __table_args__ = (
        Index("ix_instruments_status", "status"),
        Index("ix_instruments_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<InstrumentModel(id={self.id}, maker='{self.maker}', type='{self.type}')>"
