"""Entity type keys shared by the state store, repositories and facade."""

from enum import Enum


class EntityType(str, Enum):
    """The three cached entity collections."""

    CLIENTS = "clients"
    INSTRUMENTS = "instruments"
    CONNECTIONS = "connections"

    @property
    def table(self) -> str:
        """Remote table holding rows of this type."""
        return _TABLES[self]


_TABLES = {
    EntityType.CLIENTS: "clients",
    EntityType.INSTRUMENTS: "instruments",
    EntityType.CONNECTIONS: "client_instruments",
}
