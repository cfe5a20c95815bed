"""Declarative base for the workshop tables.

``SQLAlchemyRemoteStore`` looks tables up by name in ``Base.metadata``, so
every model imported from ``models`` (``clients``, ``instruments`` and
``client_instruments``) is reachable through the RemoteStore port.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Shared metadata for the client, instrument and connection tables."""
