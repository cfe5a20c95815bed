"""Domain entity — the join record between a client and an instrument."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RelationshipType(str, Enum):
    INTERESTED = "Interested"
    SOLD = "Sold"
    BOOKED = "Booked"
    OWNED = "Owned"


@dataclass
class Connection:
    """Links one client to one instrument.

    The connection references both ends by id only; either id may point at a
    record that no longer exists (or was never loaded).
    """

    id: str
    client_id: str | None
    instrument_id: str | None
    relationship_type: RelationshipType
    notes: str | None = None
    display_order: int | None = None
    created_at: datetime | None = None
