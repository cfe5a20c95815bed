"""SQLAlchemy ORM model for the client ↔ instrument join table."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from workshop_data.infrastructure.database.base import Base


class ClientInstrumentModel(Base):
    """ORM model — maps to the 'client_instruments' table."""

    __tablename__ = "client_instruments"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    client_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=True
    )
    instrument_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("instruments.id", ondelete="CASCADE"), nullable=True
    )
    relationship_type: Mapped[str] = mapped_column(String(20), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    display_order: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_client_instruments_client", "client_id"),
        Index("ix_client_instruments_instrument", "instrument_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ClientInstrumentModel(id={self.id}, client={self.client_id}, "
            f"instrument={self.instrument_id}, type='{self.relationship_type}')>"
        )
