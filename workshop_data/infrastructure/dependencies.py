"""Dependency wiring — builds the remote store and the data facade from settings."""

from workshop_data.application.interfaces import RemoteStore
from workshop_data.application.repositories import (
    ClientRepository,
    ConnectionRepository,
    InstrumentRepository,
)
from workshop_data.application.services import UnifiedDataFacade, UnifiedStateStore
from workshop_data.config import Settings, get_settings
from workshop_data.domain.exceptions import RemoteStoreConfigurationError
from workshop_data.infrastructure.database import create_engine
from workshop_data.infrastructure.remote import SQLAlchemyRemoteStore, SupabaseRestStore


async def get_remote_store(settings: Settings | None = None) -> RemoteStore:
    """Build the configured RemoteStore adapter."""
    settings = settings or get_settings()

    if settings.remote_backend == "supabase":
        return SupabaseRestStore(
            url=settings.supabase_url,
            api_key=settings.supabase_anon_key,
            schema=settings.supabase_schema,
            timeout=settings.request_timeout,
        )

    if settings.remote_backend == "sqlalchemy":
        engine = create_engine(
            settings.database_url,
            echo=(settings.app_env == "development" and settings.log_level_sql == "DEBUG"),
        )
        store = SQLAlchemyRemoteStore(engine)
        if settings.create_tables:
            await store.create_schema()
        return store

    raise RemoteStoreConfigurationError(settings.remote_backend, "Unknown remote backend")


def build_data_facade(
    store: RemoteStore,
    settings: Settings | None = None,
    state_store: UnifiedStateStore | None = None,
) -> UnifiedDataFacade:
    """Wire repositories, state store and facade around ``store``."""
    settings = settings or get_settings()
    limit = settings.default_fetch_limit or None
    return UnifiedDataFacade(
        store=state_store or UnifiedStateStore(),
        clients=ClientRepository(store, default_limit=limit),
        instruments=InstrumentRepository(store, default_limit=limit),
        connections=ConnectionRepository(store, default_limit=limit),
    )
