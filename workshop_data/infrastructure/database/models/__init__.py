from .client import ClientModel
from .instrument import InstrumentModel
from .connection import ClientInstrumentModel

__all__ = [
    "ClientModel",
    "InstrumentModel",
    "ClientInstrumentModel",
]
