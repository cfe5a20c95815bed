"""Domain entity — an instrument in stock, on consignment or in for work."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum


class InstrumentStatus(str, Enum):
    AVAILABLE = "Available"
    BOOKED = "Booked"
    SOLD = "Sold"
    RESERVED = "Reserved"
    MAINTENANCE = "Maintenance"


@dataclass
class Instrument:
    """A single instrument, identified by maker/type and usually a serial number."""

    id: str
    status: InstrumentStatus = InstrumentStatus.AVAILABLE
    maker: str | None = None
    type: str | None = None
    subtype: str | None = None
    year: int | None = None
    serial_number: str | None = None
    price: float | None = None
    cost_price: float | None = None
    consignment_price: float | None = None
    ownership: str | None = None
    certificate: bool = False
    certificate_name: str | None = None
    size: str | None = None
    weight: str | None = None
    note: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


def split_instrument_type(instrument: Instrument) -> Instrument:
    """Split a combined ``"Violin / 4/4"`` type into ``type`` and ``subtype``.

    Records whose type has no ``/`` are returned unchanged.
    """
    if not instrument.type or "/" not in instrument.type:
        return instrument

    parts = [part.strip() for part in instrument.type.split("/")]
    parts = [part for part in parts if part]
    if len(parts) >= 2:
        return replace(
            instrument,
            type=parts[0],
            subtype=" / ".join(parts[1:]) or instrument.subtype,
        )
    if len(parts) == 1:
        return replace(instrument, type=parts[0])
    return instrument
