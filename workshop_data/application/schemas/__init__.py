from .client import ClientCreate, ClientUpdate
from .instrument import InstrumentCreate, InstrumentUpdate
from .connection import ConnectionCreate, ConnectionUpdate

__all__ = [
    "ClientCreate",
    "ClientUpdate",
    "InstrumentCreate",
    "InstrumentUpdate",
    "ConnectionCreate",
    "ConnectionUpdate",
]
