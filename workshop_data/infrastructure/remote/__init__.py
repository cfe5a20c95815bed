"""RemoteStore adapters — concrete row-store implementations."""

from .sqlalchemy_store import SQLAlchemyRemoteStore
from .supabase_rest_store import SupabaseRestStore

__all__ = [
    "SQLAlchemyRemoteStore",
    "SupabaseRestStore",
]
