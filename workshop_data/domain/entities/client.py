"""Domain entity — a customer of the workshop."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ClientType(str, Enum):
    MUSICIAN = "Musician"
    DEALER = "Dealer"
    COLLECTOR = "Collector"
    REGULAR = "Regular"


class ClientStatus(str, Enum):
    ACTIVE = "Active"
    BROWSING = "Browsing"
    IN_NEGOTIATION = "In Negotiation"
    INACTIVE = "Inactive"


@dataclass
class Client:
    """A person or business the workshop sells to, buys from or services."""

    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    contact_number: str | None = None
    tags: list[str] = field(default_factory=list)
    interest: str | None = None
    note: str | None = None
    client_number: str | None = None
    type: ClientType | None = None
    status: ClientStatus | None = None
    address: str | None = None
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
