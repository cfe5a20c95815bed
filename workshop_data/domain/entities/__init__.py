from .entity_type import EntityType
from .client import Client, ClientStatus, ClientType
from .instrument import Instrument, InstrumentStatus, split_instrument_type
from .connection import Connection, RelationshipType
from .relationship import RelationshipView

__all__ = [
    "EntityType",
    "Client",
    "ClientStatus",
    "ClientType",
    "Instrument",
    "InstrumentStatus",
    "split_instrument_type",
    "Connection",
    "RelationshipType",
    "RelationshipView",
]
