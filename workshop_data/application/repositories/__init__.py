from .base import EntityRepository
from .client_repository import ClientRepository
from .instrument_repository import InstrumentRepository
from .connection_repository import ConnectionRepository

__all__ = [
    "EntityRepository",
    "ClientRepository",
    "InstrumentRepository",
    "ConnectionRepository",
]
