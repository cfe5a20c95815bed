"""Derived, non-persisted view joining a connection to both of its ends."""

from dataclasses import dataclass

from .client import Client
from .connection import Connection
from .instrument import Instrument


@dataclass(frozen=True)
class RelationshipView:
    connection: Connection
    client: Client
    instrument: Instrument

    @property
    def id(self) -> str:
        return self.connection.id

    @property
    def relationship_type(self):
        return self.connection.relationship_type
